# src/tablesrv/renderers/pagination.py
from __future__ import annotations

from typing import Any

from ..html import HtmlWriter, content_tag, escape, format_attrs
from .base import RegionContext


class PaginationRenderer:
    kind = "pagination"

    def render(self, writer: HtmlWriter, ctx: RegionContext, rows: Any = None) -> None:
        window = ctx.window
        urls = ctx.urls

        with content_tag(
            writer,
            "nav",
            {"id": ctx.region_id("pagination"), "class": "tablesrv-pagination"},
        ):
            writer.write(
                f'<span class="summary">Showing {window.first_item}-{window.last_item}'
                f" of {window.total_results}</span>"
            )
            writer.write("<ul>")

            if window.has_previous:
                writer.write(_link_item("First", urls.page_url(1)))
                writer.write(_link_item("Previous", urls.page_url(window.current_page - 1)))

            for page in window.pages:
                if page == window.current_page:
                    writer.write(f'<li class="current"><span>{page}</span></li>')
                else:
                    writer.write(_link_item(str(page), urls.page_url(page)))

            if window.has_next:
                writer.write(_link_item("Next", urls.page_url(window.current_page + 1)))
                writer.write(_link_item("Last", urls.page_url(window.total_pages)))

            writer.write("</ul>")


def _link_item(label: str, href: str) -> str:
    attrs = format_attrs({"href": href, "data-tablesrv-link": True})
    return f"<li><a{attrs}>{escape(label)}</a></li>"
