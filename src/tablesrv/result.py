# src/tablesrv/result.py
from __future__ import annotations

import logging
from collections.abc import Sized
from functools import cached_property
from typing import Any, Iterable, Mapping

from fastapi.responses import HTMLResponse
from starlette.requests import Request

from .configurations import CONFIGURATIONS, TableConfigurations
from .context import RequestContext, context_from_request
from .definitions import ResolvedDefinition, TableOverrides, resolve_definition
from .dispatch import RenderFlags, RenderPlan, plan_render
from .html import HtmlWriter, content_tag
from .ini_config import TableSettings, get_table_settings
from .paginator import build_page_window
from .pipeline import paginate_rows
from .renderers import RegionContext, get_renderer
from .state import TableRequestState, apply_defaults
from .tables import Table
from .urls import TableUrlManager

logger = logging.getLogger(__name__)


class TableResult:
    """
    Renders one table (or one region of it) for one request.

    rows:
        A sequence, a lazy iterable, or a DataFrame. If the caller already
        paged the rows, pass the full count as total_results.
    state:
        The request's sort/paging state. It is filled in with defaults
        while executing.
    configurations:
        Definition cache to resolve the table's definition from. The shared
        process-wide cache is used when omitted.
    """

    def __init__(
        self,
        table: type[Table],
        rows: Iterable[Any] | Any,
        state: TableRequestState | None = None,
        *,
        total_results: int | None = None,
        config_name: str | None = None,
        configurations: TableConfigurations | None = None,
        settings: TableSettings | None = None,
    ) -> None:
        if total_results is None:
            if not isinstance(rows, Sized):
                rows = list(rows)
            total_results = len(rows)

        self.table = table
        self.rows = rows
        self.state = state if state is not None else TableRequestState()
        self.total_results = total_results
        self.config_name = config_name or table.config_name()
        self.configurations = configurations if configurations is not None else CONFIGURATIONS
        self.settings = settings if settings is not None else get_table_settings()

    @cached_property
    def overrides(self) -> TableOverrides:
        """Per-result overrides, created on first access."""
        return TableOverrides()

    @property
    def has_overrides(self) -> bool:
        return "overrides" in self.__dict__

    def get_table_definition(self, ctx: RequestContext) -> ResolvedDefinition:
        base = self.configurations.get_or_load(
            self.table,
            action=ctx.action,
            controller=ctx.controller,
            area=ctx.area,
            config_name=self.config_name,
        )
        return resolve_definition(base, self.overrides if self.has_overrides else None)

    def url_manager(self, ctx: RequestContext) -> TableUrlManager:
        return TableUrlManager(ctx.action_url, self.state, ctx.query_params)

    def render_plan(self, ctx: RequestContext) -> RenderPlan:
        return plan_render(RenderFlags.read(ctx.route_values, ctx.query_params))

    def execute(self, ctx: RequestContext, writer: HtmlWriter | None = None) -> str:
        """
        Resolve, default, page and write the requested regions.

        Returns everything written to `writer` (a fresh one if not given).
        """
        writer = writer if writer is not None else HtmlWriter()

        definition = self.get_table_definition(ctx)
        apply_defaults(
            self.state, definition, fallback_page_size=self.settings.default_page_size
        )

        urls = self.url_manager(ctx)
        window = build_page_window(
            self.total_results,
            self.state.page_size or self.settings.default_page_size,
            self.settings.pager_window_size,
            self.state.page_number,
        )
        plan = self.render_plan(ctx)
        logger.debug("rendering %r regions=%s", definition.id, plan.regions)

        region_ctx = RegionContext(
            definition=definition, state=self.state, urls=urls, window=window
        )

        with content_tag(
            writer,
            "div",
            {"class": self.settings.container_class, "id": f"{definition.id}-container"},
        ):
            if plan.table:
                rows = paginate_rows(self.rows, self.state, definition.columns)
                get_renderer("table").render(writer, region_ctx, rows)

            if plan.pagination:
                get_renderer("pagination").render(writer, region_ctx)

            if plan.page_size:
                get_renderer("page_size").render(writer, region_ctx)

        return writer.getvalue()

    def render_response(
        self,
        request: Request,
        *,
        extra_route_values: Mapping[str, Any] | None = None,
    ) -> HTMLResponse:
        ctx = context_from_request(request, extra_route_values)
        return HTMLResponse(content=self.execute(ctx))
