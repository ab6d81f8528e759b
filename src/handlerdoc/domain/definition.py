"""DefinitionRecord: the normalized description of one handler/message pair.

INVARIANT: A record is built once and never mutated. ``return_type`` is
always populated (``"void"`` when nothing else resolves).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from handlerdoc.domain.types import DefinitionType, ReturnTypeSource

VOID_TYPE = "void"


class ReturnTypeResolution(BaseModel):
    """Outcome of return type resolution, keeping track of the winning source."""

    model_config = {"frozen": True}

    source: ReturnTypeSource
    type_name: str

    @classmethod
    def documented(cls, type_name: str) -> ReturnTypeResolution:
        return cls(source=ReturnTypeSource.DOCUMENTED, type_name=type_name)

    @classmethod
    def declared(cls, type_name: str) -> ReturnTypeResolution:
        return cls(source=ReturnTypeSource.DECLARED, type_name=type_name)

    @classmethod
    def defaulted(cls) -> ReturnTypeResolution:
        return cls(source=ReturnTypeSource.DEFAULTED, type_name=VOID_TYPE)


class DefinitionRecord(BaseModel):
    """Definition of a command or query and the handler that processes it.

    Attributes:
        type: Whether the message is a command or a query.
        domain: Owning business domain, as reported by the domain classifier.
        handler_class: Fully-qualified handler type name.
        command_class: Fully-qualified message type name.
        command_constructor_params: Rendered constructor parameters,
            in declaration order.
        description: One-line description taken from the message docstring.
        return_type: Resolved handler return type, or ``"void"``.
        handler_interfaces: Interfaces implemented by the handler.
        simple_command_class: Message type name without its namespace.
        command_slug: Kebab-case form of ``simple_command_class``.
    """

    model_config = {"frozen": True}

    type: DefinitionType
    domain: str
    handler_class: str
    command_class: str
    command_constructor_params: tuple[str, ...] = ()
    description: str = ""
    return_type: str = VOID_TYPE
    handler_interfaces: tuple[str, ...] = ()
    simple_command_class: str
    command_slug: str

    @property
    def is_command(self) -> bool:
        return self.type is DefinitionType.COMMAND

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping for renderers."""
        return self.model_dump(mode="json")
