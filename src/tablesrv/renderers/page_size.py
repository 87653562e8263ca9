# src/tablesrv/renderers/page_size.py
from __future__ import annotations

from typing import Any

from ..config import DEFAULT_PAGE_SIZE
from ..html import HtmlWriter, content_tag, format_attrs
from .base import RegionContext


class PageSizeRenderer:
    kind = "page_size"

    def render(self, writer: HtmlWriter, ctx: RegionContext, rows: Any = None) -> None:
        current = ctx.state.page_size or DEFAULT_PAGE_SIZE
        sizes = ctx.definition.paging_configuration.page_sizes

        with content_tag(
            writer,
            "div",
            {"id": ctx.region_id("page_size"), "class": "tablesrv-page-size"},
        ):
            if not sizes:
                return
            writer.write("<span>Rows per page:</span><ul>")
            for size in sizes:
                if size == current:
                    writer.write(f'<li class="current"><span>{size}</span></li>')
                else:
                    attrs = format_attrs(
                        {"href": ctx.urls.page_size_url(size), "data-tablesrv-link": True}
                    )
                    writer.write(f"<li><a{attrs}>{size}</a></li>")
            writer.write("</ul>")
