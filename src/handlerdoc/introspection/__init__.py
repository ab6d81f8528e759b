"""Introspection layer: reflective type descriptors and their backends.

Backends turn a fully-qualified type name into a :class:`TypeDescriptor`.
The resolver only ever sees descriptors, never live classes or raw tables.
"""

from handlerdoc.introspection.descriptors import (
    MethodDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
    TypeIntrospector,
)
from handlerdoc.introspection.runtime import RuntimeIntrospector
from handlerdoc.introspection.table import TableIntrospector

__all__ = [
    "MethodDescriptor",
    "ParameterDescriptor",
    "RuntimeIntrospector",
    "TableIntrospector",
    "TypeDescriptor",
    "TypeIntrospector",
]
