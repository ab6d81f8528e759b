"""Shared pytest fixtures for handlerdoc tests."""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from handlerdoc.config.settings import HandlerdocSettings
from handlerdoc.introspection import RuntimeIntrospector
from handlerdoc.plugins.builtins.namespace_domain import NamespaceDomainPlugin
from handlerdoc.plugins.manager import PluginManager
from handlerdoc.services.resolver import DefinitionResolver
from handlerdoc.services.telemetry import _current_span, disable_telemetry

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolate_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep config discovery, logging and telemetry from leaking between tests."""
    monkeypatch.delenv("HANDLERDOC_CONFIG", raising=False)
    monkeypatch.setattr(sys, "path", sys.path[:])
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    package_level = logging.getLogger("handlerdoc").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("handlerdoc").setLevel(package_level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty directory so no handlerdoc.toml is discovered."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings(isolated_cwd: Path) -> HandlerdocSettings:
    """Default settings with entry-point discovery disabled."""
    return HandlerdocSettings.from_cli(
        project_root=isolated_cwd,
        plugins={"entry_points": False},
    )


@pytest.fixture
def plugin_manager() -> PluginManager:
    pm = PluginManager()
    pm.register_plugin(NamespaceDomainPlugin(), name="namespace_domain")
    return pm


@pytest.fixture
def resolver(plugin_manager: PluginManager) -> DefinitionResolver:
    """Resolver over the runtime backend and the namespace domain plugin."""
    return DefinitionResolver(RuntimeIntrospector(), plugin_manager)


@pytest.fixture
def table_path() -> Path:
    return FIXTURES / "descriptors.json"
