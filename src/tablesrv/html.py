# src/tablesrv/html.py
from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from .config import (
    RENDER_PAGE_SIZE_PARAM,
    RENDER_PAGINATION_PARAM,
    RENDER_TABLE_PARAM,
)


def escape(s: Any) -> str:
    return (
        str(s)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def format_attrs(attrs: Mapping[str, Any] | None) -> str:
    """
    Render attributes as ` k="v"`. None/False are dropped, True is bare.
    """
    if not attrs:
        return ""
    parts: list[str] = []
    for k, v in attrs.items():
        if v is None or v is False:
            continue
        if v is True:
            parts.append(f" {k}")
        else:
            parts.append(f' {k}="{escape(v)}"')
    return "".join(parts)


class HtmlWriter:
    """Response sink that HTML fragments are written into."""

    def __init__(self) -> None:
        self._chunks: list[str] = []

    def write(self, html: str) -> None:
        self._chunks.append(html)

    def getvalue(self) -> str:
        return "".join(self._chunks)


@contextmanager
def content_tag(
    writer: HtmlWriter, tag: str, attrs: Mapping[str, Any] | None = None
) -> Iterator[HtmlWriter]:
    """
    Write `<tag ...>` now and `</tag>` when the block exits, however it exits.
    """
    writer.write(f"<{tag}{format_attrs(attrs)}>")
    try:
        yield writer
    finally:
        writer.write(f"</{tag}>")


def render_page(*, title: str, fragment: str, fragment_url: str | None = None) -> str:
    """
    Return the HTML for a full page wrapping one table fragment.

    Links inside the table are intercepted and re-fetched as a partial
    render (all regions) so only the table container is swapped.
    """
    partial_flags = json.dumps(
        [RENDER_TABLE_PARAM, RENDER_PAGINATION_PARAM, RENDER_PAGE_SIZE_PARAM]
    )

    html = f"""
    <!DOCTYPE html>
    <html lang="en">
    <head>
      <meta charset="UTF-8" />
      <title>{escape(title)}</title>
      <meta name="viewport" content="width=device-width, initial-scale=1" />
      <style>
        :root {{
          --bg: #f5f5f5;
          --border: #ddd;
          --accent: #2a5d4e;
        }}

        * {{
          box-sizing: border-box;
        }}

        body {{
          margin: 0;
          padding: 1rem;
          font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
          background: var(--bg);
          color: #222;
        }}

        table {{
          border-collapse: collapse;
          width: 100%;
          background: #ffffff;
        }}

        th, td {{
          border: 1px solid var(--border);
          padding: 0.35rem 0.6rem;
          text-align: left;
        }}

        th a {{
          color: inherit;
        }}

        th.sorted-asc a::after {{
          content: " \\25B2";
        }}

        th.sorted-desc a::after {{
          content: " \\25BC";
        }}

        .tablesrv-pagination ul,
        .tablesrv-page-size ul {{
          list-style: none;
          display: flex;
          gap: 0.35rem;
          padding: 0;
          margin: 0.75rem 0;
        }}

        .tablesrv-pagination li.current,
        .tablesrv-page-size li.current {{
          font-weight: 600;
          color: var(--accent);
        }}
      </style>
    </head>
    <body>
      <h1>{escape(title)}</h1>
      <div id="tablesrv-root" data-fragment-url="{escape(fragment_url or '')}">
        {fragment}
      </div>
      <script>
        (function () {{
          const flags = {partial_flags};
          const root = document.getElementById("tablesrv-root");

          root.addEventListener("click", async (ev) => {{
            const link = ev.target.closest("a[data-tablesrv-link]");
            if (!link) return;
            ev.preventDefault();

            const url = new URL(link.href, window.location.href);
            flags.forEach((f) => url.searchParams.set(f, "true"));

            const res = await fetch(url);
            if (!res.ok) {{
              window.location.href = link.href;
              return;
            }}
            root.innerHTML = await res.text();
            window.history.replaceState(null, "", link.href);
          }});
        }})();
      </script>
    </body>
    </html>
    """
    return html
