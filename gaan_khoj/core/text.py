"""Text cleaning helpers for Bengali song metadata."""

from __future__ import annotations

import re
import unicodedata
from typing import Any, List, Optional, Tuple

# Soft hyphen and zero-width characters left behind by copy-pasted lyrics sites.
_INVISIBLE_RE = re.compile("[\u00ad\u200b-\u200d\ufeff]")
_WHITESPACE_RE = re.compile(r"\s+")
_BENGALI_RE = re.compile("[\u0980-\u09ff]")
_CREDIT_SEPARATOR_RE = re.compile(r"[,;/\\]+|\s+ও\s+|\s+এবং\s+")

_BENGALI_DIGITS = str.maketrans("0123456789", "০১২৩৪৫৬৭৮৯")

VARIOUS_ARTISTS = "বিভিন্ন শিল্পী"
UNKNOWN_ARTIST = "অজানা শিল্পী"
UNKNOWN_LYRICIST = "অজানা গীতিকার"
UNKNOWN_COMPOSER = "অজানা সুরকার"
UNKNOWN_GENRE = "অজানা ধরণ"
COLLECTED = "সংগৃহীত"
TRADITIONAL = "প্রচলিত"

_LABEL_ALIASES = {
    "বিভিন্ন শিল্পী": VARIOUS_ARTISTS,
    "various artists": VARIOUS_ARTISTS,
    "various": VARIOUS_ARTISTS,
    "অজানা শিল্পী": UNKNOWN_ARTIST,
    "unknown artist": UNKNOWN_ARTIST,
    "অজানা গীতিকার": UNKNOWN_LYRICIST,
    "unknown lyricist": UNKNOWN_LYRICIST,
    "অজানা সুরকার": UNKNOWN_COMPOSER,
    "unknown composer": UNKNOWN_COMPOSER,
    "অজানা ধরণ": UNKNOWN_GENRE,
    "unknown genre": UNKNOWN_GENRE,
    "সংগৃহীত": COLLECTED,
    "collected": COLLECTED,
    "প্রচলিত": TRADITIONAL,
    "traditional": TRADITIONAL,
}

_JUNK_LABELS = frozenset({"placeholder", "undefined"})


def strip_invisible(value: str) -> str:
    return _INVISIBLE_RE.sub("", value)


def clean_display(value: Any) -> Optional[str]:
    """Return ``value`` trimmed with invisible characters and repeated spaces removed.

    Non-strings and blank strings yield ``None`` so callers can fall back to a
    default label.
    """

    if not isinstance(value, str):
        return None
    cleaned = _WHITESPACE_RE.sub(" ", strip_invisible(value)).strip()
    return cleaned or None


def normalize_text(value: Any) -> str:
    """Case-folded form used on both sides of every catalog comparison."""

    cleaned = clean_display(value)
    if cleaned is None:
        return ""
    return unicodedata.normalize("NFC", cleaned).casefold()


def canonical_label(value: Any) -> Optional[str]:
    """Clean a credit or genre label and map known aliases to one spelling."""

    cleaned = clean_display(value)
    if cleaned is None:
        return None
    lowered = cleaned.casefold()
    if lowered in _JUNK_LABELS:
        return None
    return _LABEL_ALIASES.get(lowered, cleaned)


def split_credits(value: Any) -> List[str]:
    """Split a combined credit such as ``"ক ও খ"`` into canonical names."""

    if not isinstance(value, str):
        return []
    names: List[str] = []
    for part in _CREDIT_SEPARATOR_RE.split(value):
        label = canonical_label(part)
        if label and label not in names:
            names.append(label)
    return names


def is_bengali(value: str) -> bool:
    return bool(_BENGALI_RE.search(value))


def collation_key(value: str) -> Tuple[int, str]:
    """Sort key putting Bengali-script labels before Latin ones.

    Within the Bengali block the code point order follows the alphabet
    (vowels, then consonants ক..হ), so NFC code point order serves as the
    collation.
    """

    return (0 if is_bengali(value) else 1, unicodedata.normalize("NFC", value).casefold())


def to_bengali_numerals(value: Any) -> str:
    if value is None:
        return ""
    return str(value).translate(_BENGALI_DIGITS)


__all__ = [
    "COLLECTED",
    "TRADITIONAL",
    "UNKNOWN_ARTIST",
    "UNKNOWN_COMPOSER",
    "UNKNOWN_GENRE",
    "UNKNOWN_LYRICIST",
    "VARIOUS_ARTISTS",
    "canonical_label",
    "clean_display",
    "collation_key",
    "is_bengali",
    "normalize_text",
    "split_credits",
    "strip_invisible",
    "to_bengali_numerals",
]
