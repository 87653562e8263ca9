# src/tablesrv/store.py
from __future__ import annotations

from dataclasses import dataclass
import threading

import pandas as pd

from .configurations import CONFIGURATIONS
from .ini_config import get_table_settings
from .tables import Table, table_for_dataframe

_LOCK = threading.Lock()


@dataclass(frozen=True, slots=True)
class Dataset:
    name: str
    df: pd.DataFrame
    table: type[Table]
    title: str


_DATASETS: dict[str, Dataset] = {}


def register_dataset(
    name: str,
    df: pd.DataFrame,
    *,
    table: type[Table] | None = None,
    title: str | None = None,
    default_page_size: int | None = None,
) -> Dataset:
    """
    Register (or replace) a DataFrame to be served as a table.

    table:
        Table type describing the columns. Built from the DataFrame's
        columns when omitted.
    """
    name = name.strip()
    if not name:
        raise ValueError("dataset name must not be empty")

    if table is None:
        table = table_for_dataframe(
            df,
            name,
            page_sizes=get_table_settings().page_sizes,
            default_page_size=default_page_size,
        )

    ds = Dataset(name=name, df=df, table=table, title=title or name)
    with _LOCK:
        previous = _DATASETS.get(name)
        _DATASETS[name] = ds

    if previous is not None and previous.table is not table:
        CONFIGURATIONS.invalidate(previous.table)
    return ds


def get_dataset(name: str) -> Dataset:
    with _LOCK:
        ds = _DATASETS.get(name)
    if ds is None:
        raise LookupError(f"No dataset named {name!r} has been registered.")
    return ds


def has_dataset(name: str) -> bool:
    with _LOCK:
        return name in _DATASETS


def list_datasets() -> list[Dataset]:
    with _LOCK:
        return sorted(_DATASETS.values(), key=lambda d: d.name)


def reset() -> None:
    with _LOCK:
        _DATASETS.clear()
    CONFIGURATIONS.invalidate()
