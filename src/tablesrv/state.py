# src/tablesrv/state.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .config import (
    DEFAULT_PAGE_SIZE,
    PAGE_NUMBER_PARAM,
    PAGE_SIZE_PARAM,
    SORT_ASCENDING_PARAM,
    SORT_COLUMN_PARAM,
)
from .definitions import ResolvedDefinition

logger = logging.getLogger(__name__)


@dataclass
class TableRequestState:
    """
    Sort and paging parameters for one request.

    Mutable: apply_defaults() fills in whatever the request left out.
    """

    sort_column: str | None = None
    sort_ascending: bool = True
    page_number: int = 1
    page_size: int | None = None

    @classmethod
    def from_query(
        cls, params: Mapping[str, Any] | Iterable[tuple[str, Any]]
    ) -> TableRequestState:
        """
        Build a state from query params. Unparseable values are ignored.

        For repeated keys the last value wins.
        """
        items = params.items() if isinstance(params, Mapping) else params
        values = {str(k): v for k, v in items}

        sort_column = str(values.get(SORT_COLUMN_PARAM) or "").strip() or None
        return cls(
            sort_column=sort_column,
            sort_ascending=_parse_bool(values.get(SORT_ASCENDING_PARAM), default=True),
            page_number=_parse_int(values.get(PAGE_NUMBER_PARAM)) or 1,
            page_size=_parse_int(values.get(PAGE_SIZE_PARAM)),
        )


def _parse_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _parse_bool(value: Any, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    s = str(value).strip().lower()
    if s == "true":
        return True
    if s == "false":
        return False
    return default


def default_page_size(
    definition: ResolvedDefinition, *, fallback: int = DEFAULT_PAGE_SIZE
) -> int:
    """
    Page size to use when the request has none.

    Order: definition default, first configured page size, fallback.
    """
    if definition.default_page_size is not None and definition.default_page_size > 0:
        return definition.default_page_size
    sizes = definition.paging_configuration.page_sizes
    if sizes and sizes[0] > 0:
        return sizes[0]
    return fallback


def apply_defaults(
    state: TableRequestState,
    definition: ResolvedDefinition,
    *,
    fallback_page_size: int = DEFAULT_PAGE_SIZE,
) -> TableRequestState:
    """
    Fill in missing paging and sort values on `state` (in place) and return it.

    Sort defaulting:
      - an explicit default sort column (if it exists and is sortable) is
        used together with the definition's default direction,
      - otherwise the first sortable column is used and the request's
        direction is left as it is,
      - with no sortable column the sort stays unset.

    Calling this again on a defaulted state changes nothing.
    """
    if state.page_size is None or state.page_size <= 0:
        state.page_size = default_page_size(definition, fallback=fallback_page_size)

    if state.page_number < 1:
        state.page_number = 1

    if state.sort_column:
        return state

    column = None
    ascending: bool | None = None

    if definition.default_sort_column:
        candidate = definition.column(definition.default_sort_column)
        if candidate is not None and candidate.is_sortable:
            column = candidate
            ascending = definition.default_sort_ascending

    if column is None:
        column = definition.first_sortable()

    if column is not None:
        state.sort_column = column.sort_expression
        if ascending is not None:
            state.sort_ascending = ascending

    logger.debug("defaulted table request state for %r: %r", definition.id, state)
    return state
