# src/tablesrv/__init__.py
from __future__ import annotations

from .configurations import CONFIGURATIONS, TableConfigurations
from .context import RequestContext, context_from_request
from .definitions import (
    ColumnDefinition,
    PagingConfiguration,
    TableDefinition,
    TableDefinitionError,
    TableOverrides,
)
from .paginator import PageWindow, build_page_window
from .pipeline import paginate_rows
from .result import TableResult
from .state import TableRequestState, apply_defaults
from .tables import Table, table_for_dataframe
from .urls import TableUrlManager

__all__ = [
    "CONFIGURATIONS",
    "TableConfigurations",
    "RequestContext",
    "context_from_request",
    "ColumnDefinition",
    "PagingConfiguration",
    "TableDefinition",
    "TableDefinitionError",
    "TableOverrides",
    "PageWindow",
    "build_page_window",
    "paginate_rows",
    "TableResult",
    "TableRequestState",
    "apply_defaults",
    "Table",
    "table_for_dataframe",
    "TableUrlManager",
]
