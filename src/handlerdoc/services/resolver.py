"""DefinitionResolver: builds a DefinitionRecord for a handler/message pair.

Merges declared annotations with docstring tags:

- constructor parameter types: declared annotation, else ``@param`` tag
- handler return type: ``@return`` tag, else declared annotation, else ``void``
- the handling method is taken from the first interface that declares it,
  falling back to the handler's own method

INVARIANT: The resolver holds no state between calls. Every failure
(load, missing method, missing default) propagates; nothing is replaced
by a placeholder except genuinely absent documentation.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Protocol

from handlerdoc.config.models import ParserConfig
from handlerdoc.domain.definition import DefinitionRecord, ReturnTypeResolution
from handlerdoc.domain.docblock import parse_description, parse_param_type, parse_return_tag
from handlerdoc.domain.literals import export_value
from handlerdoc.domain.strings import convert_camel_case_to_kebab_case
from handlerdoc.domain.types import DefinitionType, parse_type, simple_type_name
from handlerdoc.introspection.descriptors import (
    MethodDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
    TypeIntrospector,
)

logger = logging.getLogger(__name__)

_NULL_MEMBER = re.compile(r"\s*\|\s*(?:null|None)\b|\b(?:null|None)\s*\|\s*")
_OPTIONAL = re.compile(r"(?:typing\.)?Optional\[(.*)\]")


class DomainParser(Protocol):
    """Maps a message type name to its owning business domain."""

    def parse_domain(self, command_class: str) -> str: ...


class DefinitionResolver:
    """Resolve handler/message pairs into :class:`DefinitionRecord` values.

    Usage::

        resolver = DefinitionResolver(RuntimeIntrospector(), plugin_manager)
        record = resolver.parse_definition(
            "shop.domain.order.command_handler.AddOrderHandler",
            "shop.domain.order.command.AddOrderCommand",
        )
    """

    def __init__(
        self,
        introspector: TypeIntrospector,
        domain_parser: DomainParser,
        *,
        config: ParserConfig | None = None,
        string_modifier: Callable[[str], str] = convert_camel_case_to_kebab_case,
    ) -> None:
        self._introspector = introspector
        self._domain_parser = domain_parser
        self._config = config or ParserConfig()
        self._to_kebab_case = string_modifier

    def parse_definition(self, handler_class: str, command_class: str) -> DefinitionRecord:
        """Build the definition record for *handler_class* handling *command_class*.

        See :meth:`resolve` for the failure modes.
        """
        record, _ = self.resolve(handler_class, command_class)
        return record

    def resolve(
        self, handler_class: str, command_class: str
    ) -> tuple[DefinitionRecord, ReturnTypeResolution]:
        """Build the record and report where its return type came from.

        Raises:
            TypeLoadError: Either type cannot be loaded.
            MissingHandlerMethodError: The handler has no handling method.
            DefaultValueUnavailableError: An optional constructor parameter
                of the message has no default value.
        """
        command = self._introspector.load(command_class)
        handler = self._introspector.load(handler_class)
        simple_class = simple_type_name(command_class)
        resolution = self.parse_return_type(handler)

        record = DefinitionRecord(
            type=self.parse_type(command_class),
            domain=self._domain_parser.parse_domain(command_class),
            handler_class=handler_class,
            command_class=command_class,
            command_constructor_params=self.parse_command_constructor_params(command),
            description=self.parse_description(command),
            return_type=resolution.type_name,
            handler_interfaces=handler.interface_names,
            simple_command_class=simple_class,
            command_slug=self._to_kebab_case(simple_class),
        )
        logger.debug(
            "Parsed definition %s (%s, return type %s)",
            simple_class,
            record.type,
            resolution.source,
        )
        return record, resolution

    # ------------------------------------------------------------------
    # Type classification and description
    # ------------------------------------------------------------------

    def parse_type(self, command_class: str) -> DefinitionType:
        return parse_type(command_class, command_segments=self._config.command_segments)

    @staticmethod
    def parse_description(descriptor: TypeDescriptor) -> str:
        return parse_description(descriptor.doc_comment)

    # ------------------------------------------------------------------
    # Constructor parameters
    # ------------------------------------------------------------------

    def parse_command_constructor_params(self, command: TypeDescriptor) -> tuple[str, ...]:
        """Render each constructor parameter, in declaration order.

        Returns an empty tuple when the type has no constructor.
        """
        constructor = command.constructor
        if constructor is None:
            return ()
        return tuple(self.render_parameter(p, constructor) for p in constructor.parameters)

    def render_parameter(self, parameter: ParameterDescriptor, constructor: MethodDescriptor) -> str:
        """Render one parameter as ``[?]<type> $<name>[ = <default>]``.

        Raises:
            DefaultValueUnavailableError: The parameter is optional without
                a default value.
        """
        marker = self._config.binding_marker
        type_name = parameter.type or parse_param_type(
            constructor.doc_comment,
            parameter.name,
            tag=self._config.param_tag,
            binding_marker=marker,
        )

        default_text = None
        if parameter.optional:
            default_text = export_value(parameter.get_default_value())
            if parameter.allows_null and type_name:
                type_name = self._make_nullable(type_name)

        rendered = f"{marker}{parameter.name}"
        if type_name:
            rendered = f"{type_name} {rendered}"
        if default_text is not None:
            rendered = f"{rendered} = {default_text}"
        return rendered

    def _make_nullable(self, type_name: str) -> str:
        """Prefix one nullable marker, dropping ``Optional[...]`` and null union members."""
        nullable = self._config.nullable_marker
        stripped = type_name.strip()
        optional = _OPTIONAL.fullmatch(stripped)
        if optional:
            stripped = optional.group(1).strip()
        stripped = _NULL_MEMBER.sub("", stripped)
        while nullable and stripped.startswith(nullable):
            stripped = stripped[len(nullable) :]
        return f"{nullable}{stripped}"

    # ------------------------------------------------------------------
    # Return type
    # ------------------------------------------------------------------

    def resolve_handling_method(self, handler: TypeDescriptor) -> MethodDescriptor:
        """Pick the handling method, preferring the first interface declaring it.

        Raises:
            MissingHandlerMethodError: The handler has no handling method.
        """
        name = self._config.handler_method
        method = handler.get_method(name)
        for interface in handler.interfaces:
            if interface.has_method(name):
                return interface.get_method(name)
        return method

    def parse_return_type(self, handler: TypeDescriptor) -> ReturnTypeResolution:
        """Resolve the handler's return type: documented, declared, or ``void``."""
        method = self.resolve_handling_method(handler)

        documented = parse_return_tag(method.doc_comment, tag=self._config.return_tag)
        if documented is not None:
            return ReturnTypeResolution.documented(documented)
        if method.return_type is not None:
            return ReturnTypeResolution.declared(method.return_type)
        return ReturnTypeResolution.defaulted()
