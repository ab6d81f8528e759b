"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, handlerdoc.toml only contains
overrides. An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from handlerdoc.domain.docblock import DEFAULT_BINDING_MARKER, PARAM_TAG, RETURN_TAG
from handlerdoc.domain.types import DEFAULT_COMMAND_SEGMENTS


class IntrospectionBackend(StrEnum):
    """Where type descriptors come from."""

    RUNTIME = "runtime"
    TABLE = "table"


class ParserConfig(BaseModel):
    """[parser] section."""

    model_config = {"frozen": True}

    handler_method: str = "handle"
    param_tag: str = PARAM_TAG
    return_tag: str = RETURN_TAG
    binding_marker: str = DEFAULT_BINDING_MARKER
    nullable_marker: str = "?"
    command_segments: tuple[str, ...] = DEFAULT_COMMAND_SEGMENTS


class DomainConfig(BaseModel):
    """[domain] section."""

    model_config = {"frozen": True}

    anchor_segments: tuple[str, ...] = ("Domain", "domain")
    query_segments: tuple[str, ...] = ("Query", "query", "queries")


class IntrospectionConfig(BaseModel):
    """[introspection] section."""

    model_config = {"frozen": True}

    backend: IntrospectionBackend = IntrospectionBackend.RUNTIME
    table_path: str | None = None


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    namespace_domain: bool = True
    entry_points: bool = True


class HandlerdocConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    parser: ParserConfig = Field(default_factory=ParserConfig)
    domain: DomainConfig = Field(default_factory=DomainConfig)
    introspection: IntrospectionConfig = Field(default_factory=IntrospectionConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
