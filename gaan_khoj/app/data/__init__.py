"""Song catalog data and repositories."""

from .catalog import (
    BROWSE_FIELDS,
    CurationPolicy,
    InMemoryCatalog,
    PriorityHitsCuration,
    SongPage,
    SongRepository,
)
from .songs import PRIORITY_HITS, SONGS

__all__ = [
    "BROWSE_FIELDS",
    "CurationPolicy",
    "InMemoryCatalog",
    "PRIORITY_HITS",
    "PriorityHitsCuration",
    "SONGS",
    "SongPage",
    "SongRepository",
]
