"""
Before/after change model.

A ``Change`` pairs the state of a resource prior to an event with its state
after the event. Update payloads often ship only the fields that changed;
``Change.from_json`` rebuilds the complete prior state from such a payload
using its field mask.
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

T = TypeVar('T')

_MISSING = object()


def _identity(value: Any) -> Any:
    return value


def parse_field_mask(field_mask: str) -> List[str]:
    """Split a comma-separated field mask into dotted paths, dropping blanks."""
    return [path.strip() for path in field_mask.split(',') if path.strip()]


def get_path(source: Any, path: str, default: Any = _MISSING) -> Any:
    """Look up a dotted path in nested mappings."""
    current = source
    for key in path.split('.'):
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current


def set_path(target: Dict[str, Any], path: str, value: Any) -> None:
    """Set a dotted path, creating intermediate dicts as needed."""
    keys = path.split('.')
    current = target
    for key in keys[:-1]:
        child = current.get(key)
        if not isinstance(child, dict):
            child = {}
            current[key] = child
        current = child
    current[keys[-1]] = value


def unset_path(target: Dict[str, Any], path: str) -> None:
    """Remove a dotted path. Missing paths are left alone."""
    keys = path.split('.')
    current: Any = target
    for key in keys[:-1]:
        if not isinstance(current, dict) or key not in current:
            return
        current = current[key]
    if isinstance(current, dict):
        current.pop(keys[-1], None)


def apply_field_mask(
    sparse_before: Optional[Mapping[str, Any]],
    after: Optional[Mapping[str, Any]],
    field_mask: str,
) -> Dict[str, Any]:
    """
    Rebuild the full prior state from ``after`` and a sparse ``before``.

    Every path named in the mask takes its value from ``sparse_before``; a
    path missing there did not exist before the event and is removed. Paths
    that exist on neither side are a no-op.

    Args:
        sparse_before: Prior values of the changed fields only
        after: Complete state after the event
        field_mask: Comma-separated dotted paths of the changed fields

    Returns:
        A new dict; neither input is modified
    """
    before: Dict[str, Any] = copy.deepcopy(dict(after)) if isinstance(after, Mapping) else {}
    for path in parse_field_mask(field_mask):
        value = get_path(sparse_before or {}, path)
        if value is _MISSING:
            unset_path(before, path)
        else:
            set_path(before, path, copy.deepcopy(value))
    return before


@dataclass(frozen=True)
class Change(Generic[T]):
    """State of a resource before and after an event."""

    before: T
    after: T

    @classmethod
    def from_objects(cls, before: T, after: T) -> 'Change[T]':
        """Create a Change from a ``before`` object and an ``after`` object."""
        return cls(before=before, after=after)

    @classmethod
    def from_json(
        cls,
        payload: Mapping[str, Any],
        transform: Optional[Callable[[Any], T]] = None,
    ) -> 'Change[T]':
        """
        Create a Change from its JSON form.

        Args:
            payload: Mapping with ``before``, ``after`` and an optional ``fieldMask``
            transform: Applied to both sides, identity when omitted

        Returns:
            Change whose sides are never None
        """
        transform = transform or _identity
        raw_before = payload.get('before')
        before = dict(raw_before) if isinstance(raw_before, Mapping) else {}
        after = payload.get('after')
        field_mask = payload.get('fieldMask')
        if field_mask:
            before = apply_field_mask(before, after, field_mask)
        return cls.from_objects(transform(before or {}), transform(after or {}))
