# src/tablesrv/urls.py
from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from starlette.datastructures import URL, ImmutableMultiDict, MultiDict, QueryParams

from .config import (
    PAGE_NUMBER_PARAM,
    PAGE_SIZE_PARAM,
    RESERVED_PARAMS,
    SORT_ASCENDING_PARAM,
    SORT_COLUMN_PARAM,
)
from .definitions import ColumnDefinition
from .state import TableRequestState

QueryLike = Union[QueryParams, Mapping[str, Any], Iterable[tuple[str, Any]], str, None]


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _multi_items(query: QueryLike) -> list[tuple[str, str]]:
    if query is None:
        return []
    if isinstance(query, str):
        return QueryParams(query).multi_items()
    if isinstance(query, ImmutableMultiDict):
        return query.multi_items()
    if isinstance(query, Mapping):
        return [(str(k), _format_value(v)) for k, v in query.items()]
    return [(str(k), _format_value(v)) for k, v in query]


def sanitize_query(query: QueryLike) -> MultiDict:
    """
    Copy of the incoming query without the reserved render flags.

    Repeated keys and their order are kept. The input is never modified.
    """
    return MultiDict(
        [(k, v) for k, v in _multi_items(query) if k not in RESERVED_PARAMS]
    )


class TableUrlManager:
    """
    Builds the links a table writes: sort toggles, page links, page sizes.

    Every link starts from the action URL plus the (sanitized) current query
    string, with the link's own params layered on top.
    """

    # Changing the sort or the page size starts again from page 1.
    reset_page_on_sort: bool = True
    reset_page_on_page_size: bool = True

    def __init__(
        self,
        base_url: str,
        state: TableRequestState,
        query: QueryLike = None,
    ) -> None:
        self.base_url = base_url
        self.state = state
        self._query = sanitize_query(query)

    @property
    def query(self) -> MultiDict:
        # hand out a copy; callers must not change what links are built from
        return MultiDict(self._query.multi_items())

    def url_for(self, overrides: Mapping[str, Any] | None = None) -> str:
        """
        Current query merged with `overrides` (overrides win).

        An override of None removes that param.
        """
        params = MultiDict(self._query.multi_items())
        for key, value in (overrides or {}).items():
            if key in RESERVED_PARAMS:
                continue
            if value is None:
                params.pop(key, None)
            else:
                params[key] = _format_value(value)

        query = str(QueryParams(params.multi_items()))
        return str(URL(self.base_url).replace(query=query))

    def _state_params(self) -> dict[str, Any]:
        return {
            SORT_COLUMN_PARAM: self.state.sort_column,
            SORT_ASCENDING_PARAM: self.state.sort_ascending,
            PAGE_SIZE_PARAM: self.state.page_size,
            PAGE_NUMBER_PARAM: self.state.page_number,
        }

    def is_sorted_by(self, column: ColumnDefinition | str) -> bool:
        expr = column.sort_expression if isinstance(column, ColumnDefinition) else column
        return bool(self.state.sort_column) and self.state.sort_column == expr

    def sort_url(self, column: ColumnDefinition | str) -> str:
        """Sort by `column`; if it is already the sort column, flip direction."""
        expr = column.sort_expression if isinstance(column, ColumnDefinition) else column
        ascending = not self.state.sort_ascending if self.is_sorted_by(expr) else True

        params = self._state_params()
        params[SORT_COLUMN_PARAM] = expr
        params[SORT_ASCENDING_PARAM] = ascending
        if self.reset_page_on_sort:
            params[PAGE_NUMBER_PARAM] = 1
        return self.url_for(params)

    def page_url(self, page_number: int) -> str:
        params = self._state_params()
        params[PAGE_NUMBER_PARAM] = page_number
        return self.url_for(params)

    def page_size_url(self, page_size: int) -> str:
        params = self._state_params()
        params[PAGE_SIZE_PARAM] = page_size
        if self.reset_page_on_page_size:
            params[PAGE_NUMBER_PARAM] = 1
        return self.url_for(params)
