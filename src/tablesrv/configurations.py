# src/tablesrv/configurations.py
from __future__ import annotations

import logging
import threading
from typing import NamedTuple

from .definitions import TableDefinition, TableDefinitionError
from .tables import Table

logger = logging.getLogger(__name__)


class ConfigKey(NamedTuple):
    table: type[Table]
    config_name: str
    action: str
    controller: str
    area: str | None


class TableConfigurations:
    """
    Process-wide cache of TableDefinitions.

    Lifecycle:
      - an entry is built on first lookup of its key,
      - it is read-only afterwards,
      - invalidate() drops entries so the next lookup rebuilds them.

    Lookups may come from many request threads at once. A key is built
    outside the lock; if two threads race on a first lookup, the first
    stored value wins and both get it back.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._definitions: dict[ConfigKey, TableDefinition] = {}

    def get_or_load(
        self,
        table: type[Table],
        *,
        action: str,
        controller: str,
        area: str | None = None,
        config_name: str | None = None,
    ) -> TableDefinition:
        key = ConfigKey(
            table=table,
            config_name=config_name or table.config_name(),
            action=action,
            controller=controller,
            area=area,
        )

        cached = self._definitions.get(key)
        if cached is not None:
            return cached

        logger.debug("table definition cache miss: %r", key)
        definition = table.build_definition(
            action=action, controller=controller, area=area
        )
        if not isinstance(definition, TableDefinition):
            raise TableDefinitionError(
                f"{table.__name__}.build_definition returned {type(definition)!r}, "
                "expected TableDefinition"
            )

        with self._lock:
            return self._definitions.setdefault(key, definition)

    def invalidate(self, table: type[Table] | None = None) -> None:
        """Drop cached definitions (all of them, or one table type's)."""
        with self._lock:
            if table is None:
                self._definitions.clear()
                return
            for key in [k for k in self._definitions if k.table is table]:
                del self._definitions[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._definitions)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._definitions


# Shared instance used by the bundled app. Library callers can pass their own.
CONFIGURATIONS = TableConfigurations()
