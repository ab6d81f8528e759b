"""DefinitionService: resolver operations wrapped in the ServiceResult contract.

The resolver raises; this layer turns each failure class into a structured
``ServiceError`` so the CLI can report it without a traceback.
"""

from __future__ import annotations

from handlerdoc.domain.errors import (
    DefaultValueUnavailableError,
    DescriptorTableError,
    HandlerdocError,
    MissingHandlerMethodError,
    TypeLoadError,
)
from handlerdoc.domain.strings import convert_camel_case_to_kebab_case
from handlerdoc.domain.types import parse_type, simple_type_name
from handlerdoc.services.base import BaseService
from handlerdoc.services.resolver import DefinitionResolver
from handlerdoc.services.result import ServiceResult
from handlerdoc.services.telemetry import trace_span, traced

ERROR_CODES: dict[type[HandlerdocError], str] = {
    TypeLoadError: "TYPE_LOAD_FAILED",
    MissingHandlerMethodError: "MISSING_HANDLER_METHOD",
    DefaultValueUnavailableError: "DEFAULT_VALUE_UNAVAILABLE",
    DescriptorTableError: "TABLE_INVALID",
}


def _failure(op: str, exc: HandlerdocError) -> ServiceResult:
    code = next(
        (code for cls, code in ERROR_CODES.items() if isinstance(exc, cls)),
        "DEFINITION_FAILED",
    )
    detail = {k: v for k, v in vars(exc).items() if isinstance(v, str)}
    return ServiceResult.failure(op, code, str(exc), detail)


class DefinitionService(BaseService):
    """Describe and classify command/query definitions."""

    @property
    def resolver(self) -> DefinitionResolver:
        return DefinitionResolver(
            self.introspector,
            self.plugin_manager,
            config=self._settings.parser,
        )

    @traced
    def describe(self, handler_class: str, command_class: str) -> ServiceResult:
        """Resolve the definition of *handler_class* handling *command_class*."""
        op = "describe"
        try:
            with trace_span("resolve") as span:
                record, resolution = self.resolver.resolve(handler_class, command_class)
                if span is not None:
                    span.annotate("return_type_source", str(resolution.source))
        except HandlerdocError as exc:
            return _failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data=record.to_dict(),
            meta={"return_type_source": str(resolution.source)},
        )

    @traced
    def classify(self, command_class: str) -> ServiceResult:
        """Classify *command_class* by name alone; no type is loaded."""
        simple_class = simple_type_name(command_class)
        definition_type = parse_type(
            command_class, command_segments=self._settings.parser.command_segments
        )
        return ServiceResult(
            ok=True,
            op="classify",
            data={
                "command_class": command_class,
                "type": str(definition_type),
                "domain": self.plugin_manager.parse_domain(command_class),
                "simple_command_class": simple_class,
                "command_slug": convert_camel_case_to_kebab_case(simple_class),
            },
        )
