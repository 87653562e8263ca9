# src/tablesrv/app.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse

from . import store
from .config import (
    RENDER_PAGE_SIZE_PARAM,
    RENDER_PAGINATION_PARAM,
    RENDER_TABLE_PARAM,
)
from .configurations import CONFIGURATIONS
from .context import context_from_request
from .dispatch import RenderFlags
from .html import escape, render_page
from .pipeline import paginate_rows
from .result import TableResult
from .state import TableRequestState, apply_defaults

logger = logging.getLogger(__name__)

app = FastAPI()

# Route values for a plain page load: every region in one response.
FULL_PAGE_ROUTE_VALUES = {
    RENDER_TABLE_PARAM: True,
    RENDER_PAGINATION_PARAM: True,
    RENDER_PAGE_SIZE_PARAM: True,
}


def _dataset_or_404(name: str) -> store.Dataset:
    try:
        return store.get_dataset(name)
    except LookupError:
        raise HTTPException(status_code=404, detail=f"No dataset named {name!r}.")


@app.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
    """
    List the registered datasets.
    """
    datasets = store.list_datasets()
    if datasets:
        items = "".join(
            f'<li><a href="/tables/{escape(ds.name)}">{escape(ds.title)}</a>'
            f" ({len(ds.df)} rows)</li>"
            for ds in datasets
        )
        body = f"<ul>{items}</ul>"
    else:
        body = '<p class="empty-state">No datasets have been registered yet.</p>'
    return HTMLResponse(content=render_page(title="tablesrv", fragment=body))


@app.get("/tables/{name}", response_class=HTMLResponse)
def table_page(request: Request, name: str) -> HTMLResponse:
    """
    Full page for a dataset, or just the requested regions.

    Any render flag in the query string makes this a partial render.
    """
    ds = _dataset_or_404(name)
    state = TableRequestState.from_query(request.query_params)
    result = TableResult(ds.table, ds.df, state, configurations=CONFIGURATIONS)

    flags = RenderFlags.read({}, request.query_params)
    if flags.table or flags.pagination or flags.page_size:
        logger.debug("partial render of %r: %r", name, flags)
        return result.render_response(request)

    fragment = result.execute(context_from_request(request, FULL_PAGE_ROUTE_VALUES))
    return HTMLResponse(
        content=render_page(title=ds.title, fragment=fragment, fragment_url=request.url.path)
    )


@app.get("/tables/{name}/data")
def table_data(request: Request, name: str) -> dict[str, Any]:
    """
    JSON for the current page: same sorting/paging as the HTML table.
    """
    ds = _dataset_or_404(name)
    state = TableRequestState.from_query(request.query_params)

    ctx = context_from_request(request)
    result = TableResult(ds.table, ds.df, state, configurations=CONFIGURATIONS)
    definition = result.get_table_definition(ctx)
    apply_defaults(state, definition, fallback_page_size=result.settings.default_page_size)

    page = paginate_rows(ds.df, state, definition.columns)
    page = page.astype(object).where(page.notna(), None)

    return {
        "columns": [c.name for c in definition.columns],
        "rows": page.to_dict(orient="records"),
        "total_rows": int(len(ds.df)),
        "returned_rows": int(len(page)),
        "sort_column": state.sort_column,
        "sort_ascending": state.sort_ascending,
        "page_number": state.page_number,
        "page_size": state.page_size,
    }
