# src/tablesrv/renderers/__init__.py
from __future__ import annotations

from .base import RegionContext, RegionRenderer
from .registry import get_renderer, register_renderer, reset_renderers
from .table import TableRenderer
from .pagination import PaginationRenderer
from .page_size import PageSizeRenderer


def default_renderers() -> list[RegionRenderer]:
    return [TableRenderer(), PaginationRenderer(), PageSizeRenderer()]


def register_default_renderers() -> None:
    for r in default_renderers():
        register_renderer(r)


__all__ = [
    "RegionContext",
    "RegionRenderer",
    "TableRenderer",
    "PaginationRenderer",
    "PageSizeRenderer",
    "default_renderers",
    "get_renderer",
    "register_default_renderers",
    "register_renderer",
    "reset_renderers",
]
