"""Error taxonomy for definition parsing.

Every error here is fatal for the record being built and surfaces to the
caller. None of them is ever converted into a placeholder value.
"""

from __future__ import annotations


class HandlerdocError(Exception):
    """Base class for definition parsing failures."""


class TypeLoadError(HandlerdocError):
    """A type name could not be resolved to a loadable type descriptor."""

    def __init__(self, type_name: str, reason: str) -> None:
        super().__init__(f"Cannot load type {type_name!r}: {reason}")
        self.type_name = type_name
        self.reason = reason


class MissingHandlerMethodError(HandlerdocError):
    """The handler type lacks the expected handling method."""

    def __init__(self, type_name: str, method_name: str) -> None:
        super().__init__(f"Type {type_name!r} has no method {method_name!r}")
        self.type_name = type_name
        self.method_name = method_name


class DefaultValueUnavailableError(HandlerdocError):
    """An optional parameter exposes no default value expression."""

    def __init__(self, parameter_name: str) -> None:
        super().__init__(f"Optional parameter {parameter_name!r} has no default value")
        self.parameter_name = parameter_name


class DescriptorTableError(HandlerdocError):
    """A pre-generated descriptor table could not be read or validated."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid descriptor table {path}: {reason}")
        self.path = path
        self.reason = reason
