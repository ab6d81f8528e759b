"""Definition types and name-based classification.

A message type is a command when its fully-qualified name contains a
command namespace segment, and a query otherwise.

INVARIANT: Classification depends on the name alone. Malformed names may be
misclassified; no further validation is performed.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import StrEnum

NAMESPACE_SEPARATORS = re.compile(r"[.:\\]")

DEFAULT_COMMAND_SEGMENTS: tuple[str, ...] = ("Command", "command", "commands")


class DefinitionType(StrEnum):
    """Category of a message type."""

    COMMAND = "command"
    QUERY = "query"


class ReturnTypeSource(StrEnum):
    """Where a handler's resolved return type came from."""

    DOCUMENTED = "documented"
    DECLARED = "declared"
    DEFAULTED = "defaulted"


def split_type_name(type_name: str) -> tuple[list[str], str]:
    """Split a fully-qualified name into ``(namespace_segments, simple_name)``.

    Examples:
        >>> split_type_name("App\\\\Command\\\\CreateOrder")
        (['App', 'Command'], 'CreateOrder')
        >>> split_type_name("shop.order:GetOrder")
        (['shop', 'order'], 'GetOrder')
    """
    parts = [p for p in NAMESPACE_SEPARATORS.split(type_name) if p]
    if not parts:
        return [], ""
    return parts[:-1], parts[-1]


def simple_type_name(type_name: str) -> str:
    """Return the unqualified name: the text after the last separator."""
    return NAMESPACE_SEPARATORS.split(type_name)[-1]


def parse_type(
    type_name: str,
    *,
    command_segments: Iterable[str] = DEFAULT_COMMAND_SEGMENTS,
) -> DefinitionType:
    """Classify *type_name* as a command or a query.

    Only an exact namespace segment counts, so ``RecommendedCommand`` or
    ``recommended_command`` never match.
    """
    namespace, _ = split_type_name(type_name)
    segments = set(command_segments)
    if any(segment in segments for segment in namespace):
        return DefinitionType.COMMAND
    return DefinitionType.QUERY
