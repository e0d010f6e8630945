"""
Slash-delimited path helpers for database references and deltas.
"""

import copy
from typing import Any, Dict, List, Optional


def normalize_path(path: Optional[str]) -> str:
    """Strip leading and trailing slashes."""
    return (path or '').strip('/')


def path_parts(path: Optional[str]) -> List[str]:
    """Split a path into its segments; the root has none."""
    normalized = normalize_path(path)
    return normalized.split('/') if normalized else []


def join_path(base: Optional[str], child: Optional[str]) -> str:
    return '/'.join(path_parts(base) + path_parts(child))


def prune_nulls(obj: Any) -> Any:
    """Remove None values from nested dicts in place and return the object."""
    if isinstance(obj, dict):
        for key in [key for key, value in obj.items() if value is None]:
            del obj[key]
        for value in obj.values():
            prune_nulls(value)
    return obj


def _merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def apply_change(src: Any, dest: Any) -> Any:
    """
    Apply a delta to a prior value.

    Only two dicts are merged; any other combination means the delta replaces
    the prior value outright. ``None`` leaves in the delta delete the key.
    """
    if not isinstance(src, dict) or not isinstance(dest, dict):
        return dest
    return prune_nulls(_merge(copy.deepcopy(src), dest))


def val_at(source: Any, path: Optional[str] = None) -> Any:
    """Value at ``path`` inside ``source``, None when the path leaves the tree."""
    if source is None:
        return None
    parts = path_parts(path)
    if not isinstance(source, dict):
        return None if parts else source

    current: Any = source
    for key in parts:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current
