# src/tablesrv/renderers/table.py
from __future__ import annotations

from typing import Any

from ..definitions import ColumnDefinition
from ..html import HtmlWriter, content_tag, escape, format_attrs
from ..pipeline import is_dataframe, lookup_value, to_pandas
from .base import RegionContext


class TableRenderer:
    kind = "table"

    def __init__(self, *, empty_text: str = "No rows to display.") -> None:
        self._empty_text = empty_text

    def render(self, writer: HtmlWriter, ctx: RegionContext, rows: Any = None) -> None:
        columns = ctx.definition.columns
        records = _records(rows)

        with content_tag(
            writer, "table", {"id": ctx.region_id("table"), "class": "tablesrv-table"}
        ):
            writer.write("<thead><tr>")
            for column in columns:
                writer.write(_header_cell(column, ctx))
            writer.write("</tr></thead>")

            writer.write("<tbody>")
            if not records:
                writer.write(
                    f'<tr class="empty"><td colspan="{len(columns)}">'
                    f"{escape(self._empty_text)}</td></tr>"
                )
            for row in records:
                cells = "".join(
                    f"<td>{escape(_cell_text(row, column))}</td>" for column in columns
                )
                writer.write(f"<tr>{cells}</tr>")
            writer.write("</tbody>")


def _records(rows: Any) -> list[Any]:
    if rows is None:
        return []
    if is_dataframe(rows):
        df = to_pandas(rows)
        # missing values render as empty cells, not "nan"
        return df.astype(object).where(df.notna(), None).to_dict(orient="records")
    return list(rows)


def _header_cell(column: ColumnDefinition, ctx: RegionContext) -> str:
    label = escape(column.header)
    if not column.is_sortable:
        return f"<th>{label}</th>"

    css_class = None
    if ctx.urls.is_sorted_by(column):
        css_class = "sorted-asc" if ctx.state.sort_ascending else "sorted-desc"

    link_attrs = format_attrs(
        {"href": ctx.urls.sort_url(column), "data-tablesrv-link": True}
    )
    return f"<th{format_attrs({'class': css_class})}><a{link_attrs}>{label}</a></th>"


def _cell_text(row: Any, column: ColumnDefinition) -> str:
    value = lookup_value(row, column.name)
    if column.formatter is not None:
        return column.formatter(value)
    if value is None:
        return ""
    return str(value)
