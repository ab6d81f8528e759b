"""Display literals for default parameter values.

Renders Python values as language-neutral literals for documentation.
The output is for display only and is never parsed back.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

NULL_LITERAL = "NULL"


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def export_value(value: Any) -> str:
    """Render *value* as a display literal.

    Examples:
        >>> export_value(None)
        'NULL'
        >>> export_value(True)
        'true'
        >>> export_value("it's")
        "'it\\\\'s'"
        >>> export_value([1, {"a": None}])
        "[1, {'a': NULL}]"
    """
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return f"{type(value).__qualname__}.{value.name}"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, Mapping):
        items = ", ".join(f"{export_value(k)}: {export_value(v)}" for k, v in value.items())
        return f"{{{items}}}"
    if isinstance(value, (list, tuple, set, frozenset)):
        members = sorted(value, key=repr) if isinstance(value, (set, frozenset)) else value
        return f"[{', '.join(export_value(v) for v in members)}]"
    return repr(value)
