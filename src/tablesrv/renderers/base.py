# src/tablesrv/renderers/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol

from ..definitions import ResolvedDefinition
from ..html import HtmlWriter
from ..paginator import PageWindow
from ..state import TableRequestState
from ..urls import TableUrlManager

RegionKind = Literal["table", "pagination", "page_size"]


@dataclass(frozen=True, slots=True)
class RegionContext:
    definition: ResolvedDefinition
    state: TableRequestState
    urls: TableUrlManager
    window: PageWindow

    def region_id(self, kind: RegionKind) -> str:
        return f"{self.definition.id}-{kind.replace('_', '-')}"


class RegionRenderer(Protocol):
    kind: RegionKind

    def render(self, writer: HtmlWriter, ctx: RegionContext, rows: Any = None) -> None: ...
