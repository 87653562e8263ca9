# src/tablesrv/definitions.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable


class TableDefinitionError(LookupError):
    """A table definition could not be resolved for a route."""


@dataclass(frozen=True, slots=True)
class ColumnDefinition:
    name: str
    sort_expression: str = ""  # empty => same as name
    is_sortable: bool = True
    title: str | None = None
    formatter: Callable[[Any], str] | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("column name must not be empty")
        if not self.sort_expression:
            object.__setattr__(self, "sort_expression", self.name)

    @property
    def header(self) -> str:
        return self.title if self.title is not None else self.name


@dataclass(frozen=True, slots=True)
class PagingConfiguration:
    page_sizes: tuple[int, ...] = ()


class _ColumnLookup:
    """Column queries shared by base and runtime definitions."""

    columns: tuple[ColumnDefinition, ...]

    def column(self, name: str) -> ColumnDefinition | None:
        for c in self.columns:
            if c.name == name:
                return c
        return None

    def column_for_sort(self, sort_expression: str) -> ColumnDefinition | None:
        """
        Find the column a request's sort value refers to.

        The request carries the sort expression; the column name is accepted
        too so hand-written links like ?sort_column=<name> still work.
        """
        for c in self.columns:
            if c.sort_expression == sort_expression:
                return c
        return self.column(sort_expression)

    def first_sortable(self) -> ColumnDefinition | None:
        for c in self.columns:
            if c.is_sortable:
                return c
        return None


@dataclass(frozen=True, slots=True)
class TableDefinition(_ColumnLookup):
    id: str
    columns: tuple[ColumnDefinition, ...]
    default_sort_column: str | None = None
    default_sort_ascending: bool = True
    default_page_size: int | None = None
    paging_configuration: PagingConfiguration = field(
        default_factory=PagingConfiguration
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))


@dataclass
class TableOverrides:
    """
    Per-result overrides layered over a cached TableDefinition.

    None means "use the base definition's value".
    """

    columns: Iterable[ColumnDefinition] | None = None
    default_sort_column: str | None = None
    default_sort_ascending: bool | None = None
    default_page_size: int | None = None
    page_sizes: Iterable[int] | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in dataclasses.fields(self))


class RuntimeTableDefinition(_ColumnLookup):
    """
    Read-through view of a base definition with overrides applied.

    The overrides are snapshotted on construction; neither the base nor the
    caller's TableOverrides object is modified.
    """

    def __init__(self, base: TableDefinition, overrides: TableOverrides) -> None:
        self._base = base
        self._overrides = dataclasses.replace(
            overrides,
            columns=None if overrides.columns is None else tuple(overrides.columns),
            page_sizes=None if overrides.page_sizes is None else tuple(overrides.page_sizes),
        )

    @property
    def base(self) -> TableDefinition:
        return self._base

    @property
    def id(self) -> str:
        return self._base.id

    @property
    def columns(self) -> tuple[ColumnDefinition, ...]:  # type: ignore[override]
        if self._overrides.columns is not None:
            return self._overrides.columns  # type: ignore[return-value]
        return self._base.columns

    @property
    def default_sort_column(self) -> str | None:
        if self._overrides.default_sort_column is not None:
            return self._overrides.default_sort_column
        return self._base.default_sort_column

    @property
    def default_sort_ascending(self) -> bool:
        if self._overrides.default_sort_ascending is not None:
            return self._overrides.default_sort_ascending
        return self._base.default_sort_ascending

    @property
    def default_page_size(self) -> int | None:
        if self._overrides.default_page_size is not None:
            return self._overrides.default_page_size
        return self._base.default_page_size

    @property
    def paging_configuration(self) -> PagingConfiguration:
        if self._overrides.page_sizes is not None:
            return PagingConfiguration(page_sizes=self._overrides.page_sizes)  # type: ignore[arg-type]
        return self._base.paging_configuration

    def __repr__(self) -> str:
        return f"RuntimeTableDefinition(base={self._base.id!r}, overrides={self._overrides!r})"


ResolvedDefinition = TableDefinition | RuntimeTableDefinition


def resolve_definition(
    base: TableDefinition, overrides: TableOverrides | None
) -> ResolvedDefinition:
    """
    Return the base definition, or a runtime view of it when overrides exist.
    """
    if overrides is None or overrides.is_empty():
        return base
    return RuntimeTableDefinition(base, overrides)
