# src/tablesrv/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from starlette.datastructures import QueryParams
from starlette.requests import Request

from .definitions import TableDefinitionError


@dataclass(frozen=True)
class RequestContext:
    """
    What a table result needs to know about the current request.

    route_values:
        Route data: "action", "controller", optional "area" and "id", and
        optionally the render flags.
    query_params:
        The request's query string.
    action_url:
        URL of the current action; all table links are built from it.
    """

    route_values: Mapping[str, Any]
    query_params: QueryParams = field(default_factory=QueryParams)
    action_url: str = "/"

    def __post_init__(self) -> None:
        if not isinstance(self.query_params, QueryParams):
            object.__setattr__(self, "query_params", QueryParams(self.query_params))

    @property
    def action(self) -> str:
        return self._required("action")

    @property
    def controller(self) -> str:
        return self._required("controller")

    @property
    def area(self) -> str | None:
        area = self.route_values.get("area")
        return str(area) if area is not None else None

    def _required(self, key: str) -> str:
        value = self.route_values.get(key)
        if value is None or value == "":
            raise TableDefinitionError(f"route data has no {key!r} value")
        return str(value)


def context_from_request(
    request: Request, extra_route_values: Mapping[str, Any] | None = None
) -> RequestContext:
    """
    Build a RequestContext from a FastAPI/Starlette request.

    The endpoint function name is the action and its module the controller,
    unless the path params already supply them.
    """
    route_values: dict[str, Any] = dict(request.path_params)

    endpoint = request.scope.get("endpoint")
    if endpoint is not None:
        route_values.setdefault("action", getattr(endpoint, "__name__", None))
        route_values.setdefault("controller", getattr(endpoint, "__module__", None))

    if extra_route_values:
        route_values.update(extra_route_values)

    return RequestContext(
        route_values=route_values,
        query_params=request.query_params,
        action_url=request.url.path,
    )
