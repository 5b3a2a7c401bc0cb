"""
Page navigation for the audit history.

Links keep every active filter so that filtering and paging
compose: moving to page 3 of "action=ticket" stays filtered.
"""

import math
from typing import Mapping
from urllib.parse import urlencode

from helpdesk.schemas.audit import PageLink, Navigation

WINDOW_RADIUS = 2


def total_pages(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def page_window(
    current: int, last_page: int, radius: int = WINDOW_RADIUS
) -> list[int | None]:
    """
    Page numbers around ``current``, with ``None`` marking a gap.

    The first and last pages are always included:

    >>> page_window(6, 12)
    [1, None, 4, 5, 6, 7, 8, None, 12]
    """
    current = min(max(current, 1), last_page)
    start = max(1, current - radius)
    end = min(last_page, current + radius)

    items: list[int | None] = []
    if start > 1:
        items.append(1)
        if start > 2:
            items.append(None)
    items.extend(range(start, end + 1))
    if end < last_page:
        if end < last_page - 1:
            items.append(None)
        items.append(last_page)
    return items


def page_href(params: Mapping[str, str], page: int) -> str:
    """Query string for ``page`` that preserves all other parameters."""
    query = [(k, v) for k, v in params.items() if k != "page" and v]
    query.append(("page", str(page)))
    return "?" + urlencode(query)


def build_navigation(
    params: Mapping[str, str], page: int, page_size: int, total: int
) -> Navigation:
    last_page = total_pages(total, page_size)
    page = min(max(page, 1), last_page)
    skip = (page - 1) * page_size

    pages = []
    for number in page_window(page, last_page):
        if number is None:
            pages.append(PageLink(ellipsis=True))
        else:
            pages.append(PageLink(
                number=number,
                href=page_href(params, number),
                current=number == page,
            ))

    return Navigation(
        previous=page_href(params, page - 1) if page > 1 else None,
        next=page_href(params, page + 1) if skip + page_size < total else None,
        pages=pages,
    )


def showing_summary(page: int, page_size: int, total: int) -> str:
    skip = (page - 1) * page_size
    if total <= skip:
        return f"Showing 0 - 0 of {total}"
    return f"Showing {skip + 1} - {min(skip + page_size, total)} of {total}"
