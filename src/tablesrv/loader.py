# src/tablesrv/loader.py
from __future__ import annotations

import importlib
from typing import Any

from .tables import Table


def parse_import_path(value: str) -> tuple[str, str]:
    """
    Split "package.module:TableClass" into (module, attr).

    The attr may be dotted to reach a nested class, e.g. "pkg.mod:Reports.PeopleTable".
    """
    module, sep, attr = value.partition(":")
    if not sep:
        raise ValueError("Table path must be in the form 'package.module:TableClass'")

    module, attr = module.strip(), attr.strip()
    if not module or not attr:
        raise ValueError(f"Table path needs both a module and a class: {value!r}")
    return module, attr


def load_table(path: str) -> type[Table]:
    """
    Import and return the Table subclass named by `path`.
    """
    module, attr = parse_import_path(path)

    obj: Any = importlib.import_module(module)
    for part in attr.split("."):
        obj = getattr(obj, part)

    if not (isinstance(obj, type) and issubclass(obj, Table)):
        raise TypeError(f"{path!r} is not a Table subclass (got {type(obj)!r})")
    return obj
