# src/tablesrv/tables.py
from __future__ import annotations

import re
from typing import Any, ClassVar, Sequence

import pandas as pd

from .definitions import (
    ColumnDefinition,
    PagingConfiguration,
    TableDefinition,
    TableDefinitionError,
)


class Table:
    """
    A table type: the declarative description a TableDefinition is built from.

    Subclasses declare columns and defaults as class attributes, and may
    override build_definition() to vary the definition per route.
    """

    model: ClassVar[type | None] = None
    table_id: ClassVar[str | None] = None

    columns: ClassVar[Sequence[ColumnDefinition]] = ()
    default_sort_column: ClassVar[str | None] = None
    default_sort_ascending: ClassVar[bool] = True
    default_page_size: ClassVar[int | None] = None
    page_sizes: ClassVar[Sequence[int]] = ()

    @classmethod
    def config_name(cls) -> str:
        """Default configuration name: the model's full name, else the table's."""
        target = cls.model if cls.model is not None else cls
        return f"{target.__module__}.{target.__qualname__}"

    @classmethod
    def resolve_id(cls) -> str:
        return cls.table_id or _slugify(cls.__name__)

    @classmethod
    def build_definition(
        cls, *, action: str, controller: str, area: str | None = None
    ) -> TableDefinition:
        columns = tuple(cls.columns)
        if not columns:
            raise TableDefinitionError(
                f"{cls.__name__} declares no columns "
                f"(action={action!r}, controller={controller!r}, area={area!r})"
            )
        return TableDefinition(
            id=cls.resolve_id(),
            columns=columns,
            default_sort_column=cls.default_sort_column,
            default_sort_ascending=cls.default_sort_ascending,
            default_page_size=cls.default_page_size,
            paging_configuration=PagingConfiguration(page_sizes=tuple(cls.page_sizes)),
        )


def table_for_dataframe(
    df: pd.DataFrame,
    name: str,
    *,
    page_sizes: Sequence[int] = (),
    default_page_size: int | None = None,
) -> type[Table]:
    """
    Build a Table subclass whose columns mirror a DataFrame's columns.
    """
    columns = tuple(ColumnDefinition(name=str(col)) for col in df.columns)
    attrs: dict[str, Any] = {
        "table_id": _slugify(name),
        "columns": columns,
        "page_sizes": tuple(page_sizes),
        "default_page_size": default_page_size,
    }
    return type(f"{_class_name(name)}Table", (Table,), attrs)


def _slugify(s: str) -> str:
    s = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", s)
    s = re.sub(r"[^A-Za-z0-9]+", "-", s).strip("-").lower()
    return s or "table"


def _class_name(s: str) -> str:
    parts = re.split(r"[^A-Za-z0-9]+", s)
    return "".join(p[:1].upper() + p[1:] for p in parts if p) or "Data"
