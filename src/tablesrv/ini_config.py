# src/tablesrv/ini_config.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import configparser
import os

from .config import (
    DEFAULT_CONTAINER_CLASS,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGE_SIZES,
    DEFAULT_PAGER_WINDOW_SIZE,
)

INI_ENV_VAR = "TABLESRV_INI"
INI_FILENAME = "tablesrv.ini"
SECTION = "table-settings"


@dataclass(frozen=True, slots=True)
class TableSettings:
    # Fallback when neither the request nor the table definition has one
    default_page_size: int = DEFAULT_PAGE_SIZE

    # Page-size choices for tables that don't declare their own
    page_sizes: tuple[int, ...] = DEFAULT_PAGE_SIZES

    # Number of page links shown in the pager
    pager_window_size: int = DEFAULT_PAGER_WINDOW_SIZE

    container_class: str = DEFAULT_CONTAINER_CLASS

    def __post_init__(self) -> None:
        if self.default_page_size <= 0:
            raise ValueError("default_page_size must be > 0")
        if self.pager_window_size <= 0:
            raise ValueError("pager_window_size must be > 0")
        if any(size <= 0 for size in self.page_sizes):
            raise ValueError("page_sizes must all be > 0")


def _strip_quotes(s: str) -> str:
    s = s.strip()
    if len(s) >= 2 and ((s[0] == s[-1] == "'") or (s[0] == s[-1] == '"')):
        return s[1:-1].strip()
    return s


def _resolve_ini_path() -> Path | None:
    """
    Resolution order:
      1) env var TABLESRV_INI
      2) ./tablesrv.ini (cwd)
      3) None
    """
    env_path = os.environ.get(INI_ENV_VAR)
    if env_path:
        p = Path(env_path).expanduser()
        if p.exists() and p.is_file():
            return p

    cwd_ini = Path.cwd() / INI_FILENAME
    if cwd_ini.exists() and cwd_ini.is_file():
        return cwd_ini

    return None


def _parse_positive_int(
    cfg: configparser.ConfigParser,
    key: str,
    default: int,
) -> int:
    try:
        value = cfg.getint(SECTION, key, fallback=default)
    except ValueError:
        # if user typed something weird, just fall back safely
        return default
    return value if value > 0 else default


def _parse_int_list(raw: str, default: tuple[int, ...]) -> tuple[int, ...]:
    sizes: list[int] = []
    for part in _strip_quotes(raw).split(","):
        part = part.strip()
        if not part:
            continue
        try:
            size = int(part)
        except ValueError:
            return default
        if size <= 0:
            return default
        sizes.append(size)
    return tuple(sizes) or default


def load_table_settings() -> TableSettings:
    """
    Load optional tablesrv.ini and return TableSettings.

    Defaults apply for every key the ini doesn't set (or sets badly).
    """
    ini_path = _resolve_ini_path()
    if ini_path is None:
        return TableSettings()

    cfg = configparser.ConfigParser()
    cfg.read(ini_path)

    if not cfg.has_section(SECTION):
        return TableSettings()

    default_page_size = _parse_positive_int(cfg, "default_page_size", DEFAULT_PAGE_SIZE)
    pager_window_size = _parse_positive_int(
        cfg, "pager_window_size", DEFAULT_PAGER_WINDOW_SIZE
    )
    page_sizes = _parse_int_list(
        cfg.get(SECTION, "page_sizes", fallback=""), DEFAULT_PAGE_SIZES
    )
    container_class = (
        _strip_quotes(cfg.get(SECTION, "container_class", fallback="")).strip()
        or DEFAULT_CONTAINER_CLASS
    )

    return TableSettings(
        default_page_size=default_page_size,
        page_sizes=page_sizes,
        pager_window_size=pager_window_size,
        container_class=container_class,
    )


_TABLE_SETTINGS: TableSettings | None = None


def get_table_settings() -> TableSettings:
    global _TABLE_SETTINGS
    if _TABLE_SETTINGS is None:
        _TABLE_SETTINGS = load_table_settings()
    return _TABLE_SETTINGS
