"""Page-number sequences for pagination controls."""

from __future__ import annotations

import math
from typing import List, Tuple, Union


class _Ellipsis:
    __slots__ = ()

    def __repr__(self) -> str:
        return "ELLIPSIS"

    def __str__(self) -> str:
        return "…"


ELLIPSIS = _Ellipsis()

PageItem = Union[int, _Ellipsis]


def pagination_range(
    current_page: int,
    total_pages: int,
    sibling_count: int = 1,
) -> List[PageItem]:
    """Return the abbreviated page list around ``current_page``.

    The first and last page are always shown, ``sibling_count`` pages on
    either side of the current one, and :data:`ELLIPSIS` stands in for each
    skipped run.  ``current_page`` is not validated.  Zero or one page gives
    an empty or single-element list, which callers treat as "no controls".
    """

    if total_pages <= 0:
        return []

    # first + last + current + two ellipses + siblings on both sides
    total_slots = sibling_count * 2 + 5
    if total_pages <= total_slots:
        return list(range(1, total_pages + 1))

    left_sibling = max(current_page - sibling_count, 1)
    right_sibling = min(current_page + sibling_count, total_pages)

    show_left_ellipsis = left_sibling > 2
    show_right_ellipsis = right_sibling < total_pages - 2

    edge_count = 3 + 2 * sibling_count

    if not show_left_ellipsis and show_right_ellipsis:
        return [*range(1, edge_count + 1), ELLIPSIS, total_pages]

    if show_left_ellipsis and not show_right_ellipsis:
        return [1, ELLIPSIS, *range(total_pages - edge_count + 1, total_pages + 1)]

    if show_left_ellipsis and show_right_ellipsis:
        return [1, ELLIPSIS, *range(left_sibling, right_sibling + 1), ELLIPSIS, total_pages]

    return list(range(1, total_pages + 1))


def total_pages_for(count: int, per_page: int) -> int:
    if count <= 0 or per_page <= 0:
        return 0
    return math.ceil(count / per_page)


def page_bounds(page: int, per_page: int) -> Tuple[int, int]:
    """Slice bounds for 1-based ``page``."""

    start = max(page - 1, 0) * max(per_page, 0)
    return start, start + max(per_page, 0)


__all__ = ["ELLIPSIS", "PageItem", "pagination_range", "page_bounds", "total_pages_for"]
