"""Small document helpers."""

from numbers import Number
from typing import Any, Dict

_MISSING = object()


def get_nested(doc: Dict[str, Any], field: str, default: Any = None) -> Any:
    """Read a dot-notated field value from a document."""
    current = doc
    for part in field.split("."):
        if not isinstance(current, dict):
            return default
        current = current.get(part, _MISSING)
        if current is _MISSING:
            return default
    return current


def is_number(value: Any) -> bool:
    """Return ``True`` for ints and floats, excluding booleans."""
    return isinstance(value, Number) and not isinstance(value, bool)
