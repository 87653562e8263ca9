# src/tablesrv/renderers/registry.py
from __future__ import annotations

from .base import RegionKind, RegionRenderer


_RENDERERS: dict[str, RegionRenderer] = {}


def register_renderer(r: RegionRenderer) -> None:
    """Register a region renderer; a later one for the same kind replaces it."""
    _RENDERERS[r.kind] = r


def get_renderer(kind: RegionKind) -> RegionRenderer:
    """
    Return the registered renderer for a region, else the built-in one.
    """
    r = _RENDERERS.get(kind)
    if r is not None:
        return r

    from . import default_renderers

    for d in default_renderers():
        if d.kind == kind:
            return d
    raise LookupError(f"No renderer registered for region {kind!r}")


def reset_renderers() -> None:
    _RENDERERS.clear()
