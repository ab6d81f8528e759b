"""Tests for DefinitionService: resolver errors mapped onto ServiceResult."""

from __future__ import annotations

from pathlib import Path

from handlerdoc.config.models import IntrospectionBackend
from handlerdoc.config.settings import HandlerdocSettings
from handlerdoc.services.definition import DefinitionService
from handlerdoc.services.telemetry import enable_telemetry

ORDER = "shop.domain.order"


def _table_settings(settings: HandlerdocSettings, table_path: str | None) -> HandlerdocSettings:
    introspection = settings.introspection.model_copy(
        update={"backend": IntrospectionBackend.TABLE, "table_path": table_path}
    )
    return settings.model_copy(update={"introspection": introspection})


class TestDescribe:
    def test_success(self, settings: HandlerdocSettings) -> None:
        result = DefinitionService(settings).describe(
            f"{ORDER}.command_handler.AddOrderHandler", f"{ORDER}.command.AddOrderCommand"
        )
        assert result.ok is True
        assert result.op == "describe"
        assert result.data["type"] == "command"
        assert result.data["domain"] == "order"
        assert result.data["return_type"] == "OrderId"
        assert result.meta == {"return_type_source": "documented"}

    def test_type_load_failure(self, settings: HandlerdocSettings) -> None:
        result = DefinitionService(settings).describe(
            f"{ORDER}.command_handler.AddOrderHandler", f"{ORDER}.command.Missing"
        )
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "TYPE_LOAD_FAILED"
        assert result.error.detail["type_name"] == f"{ORDER}.command.Missing"

    def test_module_raising_on_import(self, settings: HandlerdocSettings) -> None:
        result = DefinitionService(settings).describe(
            "shop.misconfigured.Handler", f"{ORDER}.command.AddOrderCommand"
        )
        assert result.error is not None
        assert result.error.code == "TYPE_LOAD_FAILED"
        assert result.error.detail == {
            "type_name": "shop.misconfigured.Handler",
            "reason": "RuntimeError: settings are not configured",
        }

    def test_configured_callable_handler(self, isolated_cwd: Path) -> None:
        settings = HandlerdocSettings.from_cli(
            project_root=isolated_cwd,
            parser={"handler_method": "__call__"},
            plugins={"entry_points": False},
        )
        result = DefinitionService(settings).describe(
            "shop.domain.customer.command_handler.RegisterCustomerHandler",
            "shop.domain.customer.command.RegisterCustomerCommand",
        )
        assert result.ok is True
        assert result.data["return_type"] == "Customer"

    def test_missing_handler_method(self, settings: HandlerdocSettings) -> None:
        result = DefinitionService(settings).describe(
            f"{ORDER}.command_handler.BrokenHandler", f"{ORDER}.command.CancelOrderCommand"
        )
        assert result.error is not None
        assert result.error.code == "MISSING_HANDLER_METHOD"
        assert result.error.detail["method_name"] == "handle"

    def test_default_value_unavailable(self, settings: HandlerdocSettings) -> None:
        result = DefinitionService(settings).describe(
            f"{ORDER}.command_handler.TagOrderHandler", f"{ORDER}.command.TagOrderCommand"
        )
        assert result.error is not None
        assert result.error.code == "DEFAULT_VALUE_UNAVAILABLE"
        assert result.error.detail == {"parameter_name": "tags"}

    def test_table_backend(self, settings: HandlerdocSettings, table_path: Path) -> None:
        service = DefinitionService(_table_settings(settings, str(table_path)))
        result = service.describe(
            "App\\Adapter\\Product\\QueryHandler\\GetProductForEditingHandler",
            "App\\Domain\\Product\\Query\\GetProductForEditing",
        )
        assert result.ok is True
        assert result.data["type"] == "query"
        assert result.meta == {"return_type_source": "declared"}

    def test_table_relative_to_project_root(self, settings: HandlerdocSettings) -> None:
        service = DefinitionService(_table_settings(settings, "missing.json"))
        result = service.describe("A", "B")
        assert result.error is not None
        assert result.error.code == "TABLE_INVALID"
        assert result.error.detail["path"] == str(settings.project_root / "missing.json")

    def test_table_path_unset(self, settings: HandlerdocSettings) -> None:
        result = DefinitionService(_table_settings(settings, None)).describe("A", "B")
        assert result.error is not None
        assert result.error.code == "TABLE_INVALID"

    def test_telemetry_injected_when_enabled(self, settings: HandlerdocSettings) -> None:
        enable_telemetry()
        result = DefinitionService(settings).describe(
            f"{ORDER}.command_handler.CancelOrderHandler", f"{ORDER}.command.CancelOrderCommand"
        )
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"] == "DefinitionService.describe"
        assert telemetry["children"][0]["name"] == "resolve"
        assert telemetry["children"][0]["annotations"] == {"return_type_source": "declared"}
        assert result.meta["return_type_source"] == "declared"


class TestClassify:
    def test_command(self, settings: HandlerdocSettings) -> None:
        result = DefinitionService(settings).classify(
            "App\\Core\\Domain\\Product\\Command\\AddProductCommand"
        )
        assert result.ok is True
        assert result.data == {
            "command_class": "App\\Core\\Domain\\Product\\Command\\AddProductCommand",
            "type": "command",
            "domain": "Product",
            "simple_command_class": "AddProductCommand",
            "command_slug": "add-product-command",
        }

    def test_does_not_load_types(self, settings: HandlerdocSettings) -> None:
        result = DefinitionService(settings).classify("not.importable.query.FindThings")
        assert result.ok is True
        assert result.data["type"] == "query"
        assert result.data["domain"] == "importable"

    def test_without_domain_plugin(self, isolated_cwd: Path) -> None:
        settings = HandlerdocSettings.from_cli(
            project_root=isolated_cwd,
            plugins={"namespace_domain": False, "entry_points": False},
        )
        result = DefinitionService(settings).classify("shop.domain.order.command.AddOrder")
        assert result.data["domain"] == ""

    def test_configured_command_segments(self, isolated_cwd: Path) -> None:
        settings = HandlerdocSettings.from_cli(
            project_root=isolated_cwd,
            parser={"command_segments": ["writes"]},
            plugins={"entry_points": False},
        )
        result = DefinitionService(settings).classify("shop.order.writes.Rename")
        assert result.data["type"] == "command"
        assert result.data["domain"] == "order"
