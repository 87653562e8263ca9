# src/tablesrv/pipeline.py
from __future__ import annotations

import numbers
from itertools import islice
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

try:
    import polars as pl
except Exception:
    pl = None

from .config import DEFAULT_PAGE_SIZE
from .definitions import ColumnDefinition
from .state import TableRequestState


def lookup_value(row: Any, path: str) -> Any:
    """
    Read a (possibly dotted) property from a row.

    Mappings are read by key, everything else by attribute. A key that
    itself contains dots (a DataFrame column like "user.name") wins over
    walking the path. Missing values come back as None.
    """
    if isinstance(row, Mapping):
        if path in row:
            return row[path]
    elif "." in path and hasattr(row, path):
        return getattr(row, path)

    value = row
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def resolve_sort_column(
    state: TableRequestState,
    columns: Sequence[ColumnDefinition] | None = None,
) -> str | None:
    """
    Return the sort expression to order by, or None for no ordering.

    With columns given, the state's sort value must name a sortable column
    (by sort expression or name); anything else means "no sort".
    """
    if not state.sort_column:
        return None
    if columns is None:
        return state.sort_column

    for c in columns:
        if c.sort_expression == state.sort_column:
            return c.sort_expression if c.is_sortable else None
    for c in columns:
        if c.name == state.sort_column:
            return c.sort_expression if c.is_sortable else None
    return None


def _is_missing(v: Any) -> bool:
    if v is None:
        return True
    return pd.api.types.is_scalar(v) and bool(pd.isna(v))


def _value_key(v: Any) -> tuple[int, Any]:
    # missing values (None, NaN, NaT) sort before everything else
    return (0, 0) if _is_missing(v) else (1, v)


def _mixed_value_key(v: Any) -> tuple[int, str, Any]:
    """
    Total order for values that do not compare with each other.

    Numbers keep their numeric order and come first, other values are
    grouped by type name and compared as text.
    """
    if _is_missing(v):
        return (0, "", 0)
    if isinstance(v, numbers.Real):
        return (1, "", v)
    return (1, type(v).__name__, str(v))


def sort_values_stable(values: Sequence[Any], ascending: bool = True) -> list[int]:
    """
    Return the positions of `values` in sorted order. Ties keep input order.

    Mixed types (ints next to strings, say) fall back to `_mixed_value_key`
    instead of raising.
    """
    positions = range(len(values))
    try:
        return sorted(positions, key=lambda i: _value_key(values[i]), reverse=not ascending)
    except TypeError:
        return sorted(
            positions, key=lambda i: _mixed_value_key(values[i]), reverse=not ascending
        )


def sort_rows(rows: Iterable[Any], sort_expression: str, ascending: bool = True) -> list[Any]:
    """Stable sort of rows by a property name. Ties keep their input order."""
    rows = list(rows)
    values = [lookup_value(row, sort_expression) for row in rows]
    return [rows[i] for i in sort_values_stable(values, ascending)]


def is_dataframe(obj: Any) -> bool:
    if isinstance(obj, pd.DataFrame):
        return True
    if pl is not None and isinstance(obj, pl.DataFrame):  # type: ignore[arg-type]
        return True
    return False


def to_pandas(obj: Any) -> pd.DataFrame:
    if isinstance(obj, pd.DataFrame):
        return obj
    if pl is not None and isinstance(obj, pl.DataFrame):  # type: ignore[arg-type]
        return obj.to_pandas()
    raise TypeError(f"Expected pandas/polars DataFrame, got {type(obj)!r}")


def _page_bounds(state: TableRequestState) -> tuple[int, int]:
    page_size = state.page_size if state.page_size and state.page_size > 0 else DEFAULT_PAGE_SIZE
    page_number = max(1, state.page_number)
    start = (page_number - 1) * page_size
    return start, start + page_size


def paginate_rows(
    rows: Any,
    state: TableRequestState,
    columns: Sequence[ColumnDefinition] | None = None,
) -> Any:
    """
    Sort (when a sort column resolves) and slice one page of rows.

    - DataFrames come back as a DataFrame slice, everything else as a list.
    - Pages past the end give an empty result.
    - Neither `rows` nor `state` is modified.
    """
    sort_expression = resolve_sort_column(state, columns)
    start, stop = _page_bounds(state)

    if is_dataframe(rows):
        df = to_pandas(rows)
        if sort_expression is not None and sort_expression in df.columns:
            try:
                df = df.sort_values(
                    by=sort_expression,
                    ascending=state.sort_ascending,
                    kind="stable",
                    na_position="first" if state.sort_ascending else "last",
                )
            except TypeError:
                # object column with values that do not compare, e.g. from JSON
                positions = sort_values_stable(
                    df[sort_expression].tolist(), state.sort_ascending
                )
                df = df.iloc[positions]
        return df.iloc[start:stop]

    if sort_expression is not None:
        rows = sort_rows(rows, sort_expression, ascending=state.sort_ascending)
    return list(islice(rows, start, stop))
