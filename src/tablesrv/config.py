# src/tablesrv/config.py
from __future__ import annotations

# Reserved partial-render flags. Page templates build partial links with
# these exact names, so they must never be reused for sort/page params.
RENDER_TABLE_PARAM: str = "render_table"
RENDER_PAGINATION_PARAM: str = "render_pagination"
RENDER_PAGE_SIZE_PARAM: str = "render_page_size"

RESERVED_PARAMS: tuple[str, ...] = (
    RENDER_TABLE_PARAM,
    RENDER_PAGINATION_PARAM,
    RENDER_PAGE_SIZE_PARAM,
)

# Request-state params
SORT_COLUMN_PARAM: str = "sort_column"
SORT_ASCENDING_PARAM: str = "sort_ascending"
PAGE_NUMBER_PARAM: str = "page_number"
PAGE_SIZE_PARAM: str = "page_size"

DEFAULT_PAGE_SIZE: int = 10
DEFAULT_PAGER_WINDOW_SIZE: int = 8
DEFAULT_PAGE_SIZES: tuple[int, ...] = (10, 25, 50, 100)
DEFAULT_CONTAINER_CLASS: str = "tablesrv"


def is_reserved_param(name: str) -> bool:
    return name in RESERVED_PARAMS
