from __future__ import annotations

from types import SimpleNamespace

import pandas as pd
import pytest

from tablesrv.definitions import ColumnDefinition
from tablesrv.pipeline import (
    lookup_value,
    paginate_rows,
    resolve_sort_column,
    sort_rows,
)
from tablesrv.state import TableRequestState

ROWS = [
    {"id": "a", "k": 1},
    {"id": "b", "k": 0},
    {"id": "c", "k": 1},
    {"id": "d", "k": 0},
]

COLUMNS = (
    ColumnDefinition("id", is_sortable=False),
    ColumnDefinition("key", sort_expression="k"),
)


def _ids(rows) -> list[str]:
    return [r["id"] for r in rows]


def test_lookup_value_mapping_object_and_dotted() -> None:
    assert lookup_value({"a": 1}, "a") == 1
    assert lookup_value({"a": 1}, "b") is None
    assert lookup_value(SimpleNamespace(a=2), "a") == 2
    assert lookup_value(SimpleNamespace(a=SimpleNamespace(b=3)), "a.b") == 3
    assert lookup_value({"a": {"b": 4}}, "a.b") == 4
    assert lookup_value({"a": None}, "a.b") is None


def test_sort_is_stable_ascending_and_descending() -> None:
    assert _ids(sort_rows(ROWS, "k", ascending=True)) == ["b", "d", "a", "c"]
    assert _ids(sort_rows(ROWS, "k", ascending=False)) == ["a", "c", "b", "d"]


def test_none_sorts_first_ascending() -> None:
    rows = [{"v": 2}, {"v": None}, {"v": 1}]
    assert [r["v"] for r in sort_rows(rows, "v")] == [None, 1, 2]
    assert [r["v"] for r in sort_rows(rows, "v", ascending=False)] == [2, 1, None]


def test_resolve_sort_column() -> None:
    assert resolve_sort_column(TableRequestState(), COLUMNS) is None
    assert resolve_sort_column(TableRequestState(sort_column="k"), COLUMNS) == "k"
    # by column name
    assert resolve_sort_column(TableRequestState(sort_column="key"), COLUMNS) == "k"
    # not sortable / unknown
    assert resolve_sort_column(TableRequestState(sort_column="id"), COLUMNS) is None
    assert resolve_sort_column(TableRequestState(sort_column="zzz"), COLUMNS) is None
    # without columns the state value is used as-is
    assert resolve_sort_column(TableRequestState(sort_column="zzz")) == "zzz"


def test_paginate_sorts_then_slices() -> None:
    state = TableRequestState(sort_column="k", sort_ascending=True, page_number=2, page_size=2)
    assert _ids(paginate_rows(ROWS, state, COLUMNS)) == ["a", "c"]


def test_paginate_without_sort_keeps_input_order() -> None:
    state = TableRequestState(page_number=1, page_size=3)
    assert _ids(paginate_rows(ROWS, state, COLUMNS)) == ["a", "b", "c"]


def test_unknown_sort_column_means_no_ordering() -> None:
    state = TableRequestState(sort_column="missing", page_size=10)
    assert _ids(paginate_rows(ROWS, state, COLUMNS)) == ["a", "b", "c", "d"]


@pytest.mark.parametrize("page_number", [3, 4, 100])
def test_page_past_the_end_is_empty(page_number: int) -> None:
    state = TableRequestState(sort_column="k", page_number=page_number, page_size=2)
    assert paginate_rows(ROWS, state, COLUMNS) == []


def test_paginate_does_not_touch_inputs() -> None:
    rows = list(ROWS)
    state = TableRequestState(sort_column="k", sort_ascending=False, page_number=1, page_size=2)
    before = (list(rows), TableRequestState(**vars(state)))

    paginate_rows(rows, state, COLUMNS)

    assert rows == before[0]
    assert state == before[1]


def test_paginate_lazy_iterable() -> None:
    gen = ({"id": str(i)} for i in range(100))
    state = TableRequestState(page_number=3, page_size=5)
    assert _ids(paginate_rows(gen, state)) == ["10", "11", "12", "13", "14"]


def test_paginate_objects_by_property_name() -> None:
    rows = [SimpleNamespace(id=i, score=s) for i, s in enumerate([3, 1, 2])]
    state = TableRequestState(sort_column="score", page_size=10)
    assert [r.id for r in paginate_rows(rows, state)] == [1, 2, 0]


def test_paginate_dataframe() -> None:
    df = pd.DataFrame(ROWS)
    state = TableRequestState(sort_column="k", sort_ascending=False, page_number=1, page_size=3)

    page = paginate_rows(df, state, COLUMNS)

    assert isinstance(page, pd.DataFrame)
    assert list(page["id"]) == ["a", "c", "b"]


def test_paginate_dataframe_past_the_end_is_empty() -> None:
    df = pd.DataFrame(ROWS)
    state = TableRequestState(page_number=9, page_size=3)
    assert len(paginate_rows(df, state)) == 0


def test_paginate_dataframe_ignores_sort_column_it_does_not_have() -> None:
    df = pd.DataFrame(ROWS)
    state = TableRequestState(sort_column="nope", page_size=10)
    assert list(paginate_rows(df, state)["id"]) == ["a", "b", "c", "d"]


def test_lookup_value_prefers_literal_dotted_key() -> None:
    assert lookup_value({"user.name": "alice"}, "user.name") == "alice"
    assert lookup_value({"user": {"name": "bob"}}, "user.name") == "bob"
    assert lookup_value(SimpleNamespace(**{"v1.2": 7}), "v1.2") == 7


def test_dotted_column_names_sort_lists_and_dataframes_alike() -> None:
    rows = [{"user.name": "carol"}, {"user.name": "alice"}, {"user.name": "bob"}]
    columns = [ColumnDefinition("user.name")]
    state = TableRequestState(sort_column="user.name", page_size=10)

    page = paginate_rows(rows, state, columns)
    assert [r["user.name"] for r in page] == ["alice", "bob", "carol"]

    df_page = paginate_rows(pd.DataFrame(rows), state, columns)
    assert list(df_page["user.name"]) == ["alice", "bob", "carol"]


def test_mixed_types_sort_without_error() -> None:
    rows = [{"x": 1}, {"x": "b"}, {"x": 2}, {"x": None}, {"x": "a"}]
    columns = [ColumnDefinition("x")]

    asc = paginate_rows(rows, TableRequestState(sort_column="x", page_size=10), columns)
    assert [r["x"] for r in asc] == [None, 1, 2, "a", "b"]

    desc = paginate_rows(
        rows,
        TableRequestState(sort_column="x", sort_ascending=False, page_size=10),
        columns,
    )
    assert [r["x"] for r in desc] == ["b", "a", 2, 1, None]


def test_mixed_types_in_dataframe_object_column() -> None:
    df = pd.DataFrame({"x": [1, "b", 2, "a"], "id": ["p", "q", "r", "s"]})
    state = TableRequestState(sort_column="x", page_size=10)

    page = paginate_rows(df, state, [ColumnDefinition("x"), ColumnDefinition("id")])

    assert list(page["id"]) == ["p", "r", "s", "q"]


def test_nan_sorts_like_none_in_plain_rows() -> None:
    rows = [{"v": 2.0}, {"v": float("nan")}, {"v": 1.0}, {"v": None}]

    asc = sort_rows(rows, "v")
    assert [r["v"] for r in asc][2:] == [1.0, 2.0]
    assert all(pd.isna(r["v"]) for r in asc[:2])

    desc = sort_rows(rows, "v", ascending=False)
    assert [r["v"] for r in desc][:2] == [2.0, 1.0]
    assert all(pd.isna(r["v"]) for r in desc[2:])
