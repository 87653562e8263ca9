# src/tablesrv/dispatch.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .config import (
    RENDER_PAGE_SIZE_PARAM,
    RENDER_PAGINATION_PARAM,
    RENDER_TABLE_PARAM,
)


def is_true(value: Any) -> bool:
    """Only True or the string "true" (any case) count as true."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"


def flag_is_set(
    key: str,
    route_values: Mapping[str, Any],
    query_params: Mapping[str, Any],
) -> bool:
    """
    A render flag is set if route data says so, or failing that, the query.
    """
    if key in route_values and is_true(route_values[key]):
        return True
    return key in query_params and is_true(query_params[key])


@dataclass(frozen=True, slots=True)
class RenderFlags:
    table: bool = False
    pagination: bool = False
    page_size: bool = False

    @classmethod
    def read(
        cls,
        route_values: Mapping[str, Any],
        query_params: Mapping[str, Any],
    ) -> RenderFlags:
        return cls(
            table=flag_is_set(RENDER_TABLE_PARAM, route_values, query_params),
            pagination=flag_is_set(RENDER_PAGINATION_PARAM, route_values, query_params),
            page_size=flag_is_set(RENDER_PAGE_SIZE_PARAM, route_values, query_params),
        )


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Which regions one response contains."""

    table: bool
    pagination: bool
    page_size: bool

    @property
    def regions(self) -> tuple[str, ...]:
        out = []
        if self.table:
            out.append("table")
        if self.pagination:
            out.append("pagination")
        if self.page_size:
            out.append("page_size")
        return tuple(out)


def plan_render(flags: RenderFlags) -> RenderPlan:
    """
    Decide the regions to render.

    The table body renders when asked for, or when no region was asked for
    at all (plain page load). Pagination and page size render only when
    their flag is set.
    """
    return RenderPlan(
        table=flags.table or not (flags.pagination or flags.page_size),
        pagination=flags.pagination,
        page_size=flags.page_size,
    )
