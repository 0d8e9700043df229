"""Utilities to load and access the bundled input defaults."""
from __future__ import annotations

import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

from .models import Category

_PACKAGE_ROOT = Path(__file__).resolve().parent
_DEFAULTS_PATH = _PACKAGE_ROOT / "data" / "defaults.json"


@lru_cache(maxsize=None)
def _load_defaults_cached(path_str: str) -> Dict[str, Any]:
    path = Path(path_str)
    if not path.exists():
        raise FileNotFoundError(f"Defaults file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def load_defaults(path: str | Path | None = None) -> Dict[str, Any]:
    """Return the whole defaults document.

    Parameters
    ----------
    path:
        Optional path to a JSON file. When omitted, the file shipped with the
        package under ``snow_core/data/defaults.json`` is used.

    Returns
    -------
    dict
        A *deep copy* of the defaults structure so callers can manipulate the
        returned mapping without mutating the cached data.
    """

    resolved_path = Path(path) if path is not None else _DEFAULTS_PATH
    data = _load_defaults_cached(str(resolved_path))
    return copy.deepcopy(data)


def _normalize_category(category: Category | str) -> str:
    if isinstance(category, Category):
        return category.value
    key = str(category).strip().lower()
    if key not in {c.value for c in Category}:
        raise ValueError(f"Unknown option category '{category}' (available: electric, gas, service)")
    return key


def get_defaults(category: Category | str, defaults: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Return the per-field defaults for one option category.

    The shared fields (initial cost, maintenance) are merged in, so the
    result covers every field the category's option record needs except
    its name.
    """

    defaults = defaults or load_defaults()
    key = _normalize_category(category)
    merged = dict(defaults["common"])
    merged.update(defaults[key])
    return copy.deepcopy(merged)


def get_global_defaults(defaults: Dict[str, Any] | None = None) -> Dict[str, Any]:
    defaults = defaults or load_defaults()
    return copy.deepcopy(defaults["globals"])


def default_horizons(defaults: Dict[str, Any] | None = None) -> Tuple[int, ...]:
    """Horizon lengths in years, in the document's order (short, medium, long)."""
    defaults = defaults or load_defaults()
    return tuple(int(v) for v in defaults["horizons"].values())
