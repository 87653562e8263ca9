from __future__ import annotations

import pandas as pd
import pytest

from tablesrv.definitions import ColumnDefinition, PagingConfiguration, TableDefinition
from tablesrv.html import HtmlWriter
from tablesrv.paginator import build_page_window
from tablesrv.renderers import (
    PageSizeRenderer,
    PaginationRenderer,
    RegionContext,
    TableRenderer,
    get_renderer,
    register_renderer,
    reset_renderers,
)
from tablesrv.state import TableRequestState
from tablesrv.urls import TableUrlManager


@pytest.fixture(autouse=True)
def clean_registry() -> None:
    reset_renderers()
    yield
    reset_renderers()


def _ctx(
    *,
    total: int = 47,
    page_sizes: tuple[int, ...] = (10, 25),
    **state,
) -> RegionContext:
    definition = TableDefinition(
        id="people",
        columns=(
            ColumnDefinition("id", is_sortable=False, title="#"),
            ColumnDefinition("name"),
            ColumnDefinition("score", formatter=lambda v: f"{v:.1f}"),
        ),
        paging_configuration=PagingConfiguration(page_sizes=page_sizes),
    )
    s = TableRequestState(**state)
    s.page_size = s.page_size or 10
    return RegionContext(
        definition=definition,
        state=s,
        urls=TableUrlManager("/people", s, "q=x"),
        window=build_page_window(total, s.page_size, 8, s.page_number),
    )


def _render(renderer, ctx: RegionContext, rows=None) -> str:
    w = HtmlWriter()
    renderer.render(w, ctx, rows)
    return w.getvalue()


# ---- table ---------------------------------------------------------------------


def test_table_headers_link_sortable_columns_only() -> None:
    html = _render(TableRenderer(), _ctx(sort_column="name", sort_ascending=True), [])

    assert '<table id="people-table" class="tablesrv-table">' in html
    assert "<th>#</th>" in html
    assert '<th class="sorted-asc"><a href="/people?' in html
    assert "sort_column=score" in html
    assert "data-tablesrv-link" in html


def test_table_marks_descending_sort() -> None:
    html = _render(TableRenderer(), _ctx(sort_column="name", sort_ascending=False), [])
    assert '<th class="sorted-desc">' in html


def test_table_rows_are_escaped_and_formatted() -> None:
    rows = [{"id": 1, "name": "<b>Ann</b>", "score": 2.25}, {"id": 2, "name": None, "score": 1}]
    html = _render(TableRenderer(), _ctx(), rows)

    assert "<td>&lt;b&gt;Ann&lt;/b&gt;</td>" in html
    assert "<td>2.2</td>" in html or "<td>2.3</td>" in html
    assert "<tr><td>2</td><td></td><td>1.0</td></tr>" in html


def test_table_accepts_dataframe_slice() -> None:
    df = pd.DataFrame({"id": [1], "name": ["Bo"], "score": [3.0]})
    html = _render(TableRenderer(), _ctx(), df)
    assert "<td>Bo</td>" in html


def test_table_empty_state() -> None:
    html = _render(TableRenderer(empty_text="Nothing."), _ctx(), [])
    assert '<tr class="empty"><td colspan="3">Nothing.</td></tr>' in html


# ---- pagination ----------------------------------------------------------------


def test_pagination_first_page() -> None:
    html = _render(PaginationRenderer(), _ctx(page_number=1))

    assert '<nav id="people-pagination" class="tablesrv-pagination">' in html
    assert "Showing 1-10 of 47" in html
    assert '<li class="current"><span>1</span></li>' in html
    assert "page_number=5" in html
    assert ">Previous<" not in html
    assert ">Next<" in html
    assert ">Last<" in html


def test_pagination_last_page() -> None:
    html = _render(PaginationRenderer(), _ctx(page_number=5))
    assert "Showing 41-47 of 47" in html
    assert ">First<" in html
    assert ">Previous<" in html
    assert ">Next<" not in html


def test_pagination_links_keep_query() -> None:
    html = _render(PaginationRenderer(), _ctx(page_number=2))
    assert "q=x" in html


# ---- page size -----------------------------------------------------------------


def test_page_size_marks_current_and_links_others() -> None:
    html = _render(PageSizeRenderer(), _ctx(page_size=10, page_number=3))

    assert '<div id="people-page-size" class="tablesrv-page-size">' in html
    assert '<li class="current"><span>10</span></li>' in html
    assert "page_size=25" in html
    assert "page_number=1" in html


def test_page_size_without_choices_renders_empty_region() -> None:
    html = _render(PageSizeRenderer(), _ctx(page_sizes=()))
    assert html == '<div id="people-page-size" class="tablesrv-page-size"></div>'


# ---- registry ------------------------------------------------------------------


def test_get_renderer_falls_back_to_builtins() -> None:
    assert isinstance(get_renderer("table"), TableRenderer)
    assert isinstance(get_renderer("pagination"), PaginationRenderer)
    assert isinstance(get_renderer("page_size"), PageSizeRenderer)


def test_registered_renderer_replaces_builtin() -> None:
    class Custom:
        kind = "pagination"

        def render(self, writer, ctx, rows=None) -> None:
            writer.write("custom")

    register_renderer(Custom())
    assert _render(get_renderer("pagination"), _ctx()) == "custom"
    assert isinstance(get_renderer("table"), TableRenderer)


def test_unknown_region_raises() -> None:
    with pytest.raises(LookupError):
        get_renderer("footer")  # type: ignore[arg-type]


def test_table_reads_dotted_dataframe_columns_by_name() -> None:
    ctx = _ctx()
    definition = TableDefinition(
        id="people",
        columns=(ColumnDefinition("user.name"), ColumnDefinition("v1.2")),
    )
    ctx = RegionContext(definition=definition, state=ctx.state, urls=ctx.urls, window=ctx.window)
    df = pd.DataFrame({"user.name": ["alice", "bob"], "v1.2": [1, 2]})

    html = _render(TableRenderer(), ctx, df)

    assert "<tr><td>alice</td><td>1</td></tr><tr><td>bob</td><td>2</td></tr>" in html
