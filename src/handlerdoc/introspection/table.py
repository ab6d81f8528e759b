"""Descriptor table backend: descriptors read from a pre-generated JSON file.

Used when the types to document cannot be imported (another runtime, or a
codebase that is not installed). The table is produced by a separate
extraction step and looks like::

    {
      "types": {
        "App\\\\Order\\\\Command\\\\AddOrderCommand": {
          "doc_comment": "Adds an order.",
          "constructor": {
            "parameters": [
              {"name": "customerId", "type": "int"},
              {"name": "note", "type": "string", "allows_null": true, "default": null}
            ]
          }
        },
        "App\\\\Order\\\\CommandHandler\\\\AddOrderHandler": {
          "methods": {"handle": {"return_type": "void"}},
          "interfaces": ["App\\\\Order\\\\CommandHandler\\\\AddOrderHandlerInterface"]
        }
      }
    }

A parameter is optional when it carries a ``default`` key or sets
``"optional": true``. Interfaces are listed flat, in priority order.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from handlerdoc.domain.errors import DescriptorTableError, TypeLoadError
from handlerdoc.introspection.descriptors import (
    MethodDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
)

logger = logging.getLogger(__name__)


class ParameterEntry(BaseModel):
    """[types.*.constructor.parameters] item."""

    name: str
    type: str | None = None
    optional: bool | None = None
    allows_null: bool = False
    default: Any = None

    def to_descriptor(self) -> ParameterDescriptor:
        has_default = "default" in self.model_fields_set
        optional = self.optional if self.optional is not None else has_default
        return ParameterDescriptor(
            name=self.name,
            type=self.type,
            optional=optional,
            allows_null=self.allows_null or (has_default and self.default is None),
            has_default=has_default,
            default=self.default,
        )


class MethodEntry(BaseModel):
    """[types.*.methods.*] and [types.*.constructor] entries."""

    doc_comment: str | None = None
    parameters: list[ParameterEntry] = Field(default_factory=list)
    return_type: str | None = None

    def to_descriptor(self, name: str) -> MethodDescriptor:
        return MethodDescriptor(
            name=name,
            doc_comment=self.doc_comment,
            parameters=tuple(p.to_descriptor() for p in self.parameters),
            return_type=self.return_type,
        )


class TypeEntry(BaseModel):
    """[types.*] entry."""

    doc_comment: str | None = None
    constructor: MethodEntry | None = None
    methods: dict[str, MethodEntry] = Field(default_factory=dict)
    interfaces: list[str] = Field(default_factory=list)


class DescriptorTable(BaseModel):
    """Root of a descriptor table file."""

    types: dict[str, TypeEntry] = Field(default_factory=dict)


class TableIntrospector:
    """Serve descriptors from a :class:`DescriptorTable`."""

    def __init__(self, table: DescriptorTable) -> None:
        self._table = table

    @classmethod
    def from_file(cls, path: Path) -> TableIntrospector:
        """Read and validate a JSON descriptor table.

        Raises:
            DescriptorTableError: The file is unreadable or malformed.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DescriptorTableError(str(path), exc.strerror or str(exc)) from exc
        try:
            table = DescriptorTable.model_validate_json(raw)
        except ValidationError as exc:
            raise DescriptorTableError(str(path), str(exc)) from exc
        logger.debug("Loaded descriptor table %s with %d types", path, len(table.types))
        return cls(table)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._table.types

    def load(self, type_name: str) -> TypeDescriptor:
        """Build the descriptor for *type_name*.

        Raises:
            TypeLoadError: The name, or one of its interfaces, is not in
                the table, or interfaces reference each other in a cycle.
        """
        return self._build(type_name, ())

    def _build(self, type_name: str, chain: tuple[str, ...]) -> TypeDescriptor:
        if type_name in chain:
            raise TypeLoadError(chain[0], f"cyclic interface reference through {type_name!r}")
        entry = self._table.types.get(type_name)
        if entry is None:
            reason = "not found in descriptor table"
            if chain:
                reason = f"interface {type_name!r} {reason}"
            raise TypeLoadError(chain[0] if chain else type_name, reason)

        chain = (*chain, type_name)
        return TypeDescriptor(
            name=type_name,
            doc_comment=entry.doc_comment,
            constructor=entry.constructor.to_descriptor("__construct")
            if entry.constructor
            else None,
            methods={name: m.to_descriptor(name) for name, m in entry.methods.items()},
            interfaces=tuple(self._build(name, chain) for name in entry.interfaces),
        )
