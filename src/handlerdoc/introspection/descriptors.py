"""Reflective type descriptors: the capability surface the resolver relies on.

A descriptor exposes constructor parameters, declared types, attached
docstrings, implemented interfaces, and declared return types. Backends
build descriptors; nothing downstream touches the underlying classes.
"""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel, Field

from handlerdoc.domain.errors import DefaultValueUnavailableError, MissingHandlerMethodError
from handlerdoc.domain.types import simple_type_name


class ParameterDescriptor(BaseModel):
    """One constructor or method parameter.

    ``type`` holds the declared type rendered as text, or None when the
    parameter is not annotated.
    """

    model_config = {"frozen": True}

    name: str
    type: str | None = None
    optional: bool = False
    allows_null: bool = False
    has_default: bool = False
    default: Any = None

    def get_default_value(self) -> Any:
        """Return the default value.

        Raises:
            DefaultValueUnavailableError: The parameter is optional but no
                default value expression exists (variadic parameters, or an
                incomplete descriptor table entry).
        """
        if not self.has_default:
            raise DefaultValueUnavailableError(self.name)
        return self.default


class MethodDescriptor(BaseModel):
    """A method (or constructor) with its docstring and signature."""

    model_config = {"frozen": True}

    name: str
    doc_comment: str | None = None
    parameters: tuple[ParameterDescriptor, ...] = ()
    return_type: str | None = None

    @property
    def has_return_type(self) -> bool:
        return self.return_type is not None


class TypeDescriptor(BaseModel):
    """A loaded class: docstring, constructor, methods, and interfaces.

    ``interfaces`` keeps the order the backend pinned (MRO order for the
    runtime backend, file order for descriptor tables).
    """

    model_config = {"frozen": True}

    name: str
    doc_comment: str | None = None
    constructor: MethodDescriptor | None = None
    methods: dict[str, MethodDescriptor] = Field(default_factory=dict)
    interfaces: tuple[TypeDescriptor, ...] = ()

    @property
    def simple_name(self) -> str:
        return simple_type_name(self.name)

    @property
    def interface_names(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(i.name for i in self.interfaces))

    def has_method(self, name: str) -> bool:
        return name in self.methods

    def get_method(self, name: str) -> MethodDescriptor:
        """Return the method called *name*.

        Raises:
            MissingHandlerMethodError: The type has no such method.
        """
        try:
            return self.methods[name]
        except KeyError:
            raise MissingHandlerMethodError(self.name, name) from None


class TypeIntrospector(Protocol):
    """Loads type descriptors by fully-qualified name."""

    def load(self, type_name: str) -> TypeDescriptor:
        """Return the descriptor for *type_name*.

        Raises:
            TypeLoadError: The name cannot be resolved to a type.
        """
        ...
