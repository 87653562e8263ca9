from __future__ import annotations

import sys
import types

import pytest

from tablesrv.definitions import ColumnDefinition
from tablesrv.loader import load_table, parse_import_path
from tablesrv.tables import Table


def test_parse_import_path() -> None:
    assert parse_import_path("pkg.mod:PeopleTable") == ("pkg.mod", "PeopleTable")
    assert parse_import_path(" pkg.mod : Outer.Inner ") == ("pkg.mod", "Outer.Inner")

    with pytest.raises(ValueError):
        parse_import_path("no_colon_here")
    with pytest.raises(ValueError):
        parse_import_path(":Thing")
    with pytest.raises(ValueError):
        parse_import_path("pkg.mod: ")


def test_load_table_from_dynamic_module() -> None:
    mod = types.ModuleType("tablesrv_test_mod")

    class PeopleTable(Table):
        columns = (ColumnDefinition("name"),)

    class Reports:
        Nested = PeopleTable

    mod.PeopleTable = PeopleTable  # type: ignore[attr-defined]
    mod.Reports = Reports  # type: ignore[attr-defined]
    sys.modules["tablesrv_test_mod"] = mod

    assert load_table("tablesrv_test_mod:PeopleTable") is PeopleTable
    assert load_table("tablesrv_test_mod:Reports.Nested") is PeopleTable


def test_load_table_raises_if_not_a_table() -> None:
    mod = types.ModuleType("tablesrv_test_mod2")
    mod.x = 123  # type: ignore[attr-defined]
    mod.Other = type("Other", (), {})  # type: ignore[attr-defined]
    sys.modules["tablesrv_test_mod2"] = mod

    with pytest.raises(TypeError):
        load_table("tablesrv_test_mod2:x")
    with pytest.raises(TypeError):
        load_table("tablesrv_test_mod2:Other")
