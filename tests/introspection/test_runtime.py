"""Tests for the runtime introspection backend."""

from __future__ import annotations

import inspect
import sys
import typing
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Protocol, Union

import pytest

from handlerdoc.domain.errors import DefaultValueUnavailableError, TypeLoadError
from handlerdoc.introspection.runtime import (
    RuntimeIntrospector,
    allows_null,
    format_annotation,
    format_return_annotation,
    is_interface,
)

ORDER = "shop.domain.order"


class _Readable(Protocol):
    def read(self) -> str: ...


class _Base(ABC):
    @abstractmethod
    def run(self) -> None: ...


class _Plain:
    pass


class TestFormatAnnotation:
    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (int, "int"),
            (str, "str"),
            (None, "null"),
            (type(None), "null"),
            (Any, "mixed"),
            (list[int], "list[int]"),
            (dict[str, list[int]], "dict[str, list[int]]"),
            (int | None, "int|null"),
            (Optional[str], "str|null"),  # noqa: UP045
            (Union[None, int, str], "int|str|null"),  # noqa: UP007
            (Annotated[int, "meta"], "int"),
            (Literal["a", 1], "Literal['a', 1]"),
            ("OrderId", "OrderId"),
            (typing.ForwardRef("OrderId"), "OrderId"),
        ],
    )
    def test_rendering(self, annotation: object, expected: str) -> None:
        assert format_annotation(annotation) == expected

    def test_missing_annotation(self) -> None:
        assert format_annotation(inspect.Parameter.empty) is None

    def test_user_class_is_qualified(self) -> None:
        assert format_annotation(_Plain) == f"{__name__}._Plain"


class TestFormatReturnAnnotation:
    def test_none_is_void(self) -> None:
        assert format_return_annotation(None) == "void"

    def test_missing(self) -> None:
        assert format_return_annotation(inspect.Signature.empty) is None

    def test_optional_is_not_void(self) -> None:
        assert format_return_annotation(int | None) == "int|null"


class TestAllowsNull:
    def test_unannotated(self) -> None:
        assert allows_null(inspect.Parameter.empty) is True

    def test_none_default(self) -> None:
        assert allows_null(str, None) is True

    def test_optional_union(self) -> None:
        assert allows_null(int | None) is True
        assert allows_null(Annotated[int | None, "x"]) is True

    def test_any(self) -> None:
        assert allows_null(Any) is True

    def test_plain_type(self) -> None:
        assert allows_null(int, 3) is False
        assert allows_null(int | str) is False

    def test_string_annotation(self) -> None:
        assert allows_null("int | None") is True
        assert allows_null("?int") is True
        assert allows_null("int") is False


class TestIsInterface:
    def test_protocol_and_abc(self) -> None:
        assert is_interface(_Readable) is True
        assert is_interface(_Base) is True

    def test_concrete_class(self) -> None:
        assert is_interface(_Plain) is False

    def test_builtins_are_not_interfaces(self) -> None:
        assert is_interface(object) is False
        assert is_interface(typing.Protocol) is False  # type: ignore[arg-type]


class TestRuntimeIntrospectorLoad:
    def test_loads_dotted_and_colon_names(self) -> None:
        introspector = RuntimeIntrospector()
        dotted = introspector.load(f"{ORDER}.query.GetOrderForViewing")
        colon = introspector.load(f"{ORDER}.query:GetOrderForViewing")
        assert dotted.name == colon.name == f"{ORDER}.query.GetOrderForViewing"
        assert dotted.simple_name == "GetOrderForViewing"

    def test_unknown_module(self) -> None:
        with pytest.raises(TypeLoadError) as exc_info:
            RuntimeIntrospector().load("shop.domain.nothing.Here")
        assert exc_info.value.type_name == "shop.domain.nothing.Here"

    def test_unknown_attribute(self) -> None:
        with pytest.raises(TypeLoadError):
            RuntimeIntrospector().load(f"{ORDER}.command.NoSuchCommand")

    def test_not_a_class(self) -> None:
        with pytest.raises(TypeLoadError, match="not a class"):
            RuntimeIntrospector().load(f"{ORDER}.command.make_order")


class TestConstructorDescriptors:
    def test_parameters_in_declaration_order(self) -> None:
        command = RuntimeIntrospector().load(f"{ORDER}.command.AddOrderCommand")
        assert command.constructor is not None
        names = [p.name for p in command.constructor.parameters]
        assert names == ["customer_id", "cart_id", "note", "channel", "priority"]

    def test_parameter_details(self) -> None:
        command = RuntimeIntrospector().load(f"{ORDER}.command.AddOrderCommand")
        assert command.constructor is not None
        params = {p.name: p for p in command.constructor.parameters}

        assert params["customer_id"].type == "int"
        assert params["customer_id"].optional is False

        assert params["cart_id"].type is None

        assert params["note"].type == "str|null"
        assert params["note"].optional is True
        assert params["note"].allows_null is True
        assert params["note"].get_default_value() is None

        assert params["channel"].type == f"{ORDER}.value_objects.Channel"
        assert params["channel"].allows_null is False

    def test_constructor_docstring(self) -> None:
        command = RuntimeIntrospector().load(f"{ORDER}.command.AddOrderCommand")
        assert command.constructor is not None
        assert "@param int $cart_id" in (command.constructor.doc_comment or "")

    def test_dataclass_factory_default(self) -> None:
        command = RuntimeIntrospector().load(f"{ORDER}.command.CancelOrderCommand")
        assert command.constructor is not None
        reasons = command.constructor.parameters[1]
        assert reasons.type == "list[str]"
        assert reasons.get_default_value() == []

    def test_dataclass_keeps_own_docstring(self) -> None:
        command = RuntimeIntrospector().load(f"{ORDER}.command.CancelOrderCommand")
        assert command.doc_comment == "Cancels an order that has not shipped yet."

    def test_no_constructor(self) -> None:
        command = RuntimeIntrospector().load(f"{ORDER}.command.BulkDeleteOrdersCommand")
        assert command.constructor is None
        assert command.doc_comment is None

    def test_variadic_parameter_has_no_default(self) -> None:
        command = RuntimeIntrospector().load(f"{ORDER}.command.TagOrderCommand")
        assert command.constructor is not None
        tags = command.constructor.parameters[-1]
        assert tags.optional is True
        with pytest.raises(DefaultValueUnavailableError):
            tags.get_default_value()


class TestHandlerDescriptors:
    def test_abstract_base_listed_as_interface(self) -> None:
        handler = RuntimeIntrospector().load(f"{ORDER}.command_handler.AddOrderHandler")
        assert handler.interface_names == (f"{ORDER}.command_handler.AddOrderHandlerInterface",)
        assert handler.interfaces[0].has_method("handle")

    def test_protocol_listed_as_interface(self) -> None:
        handler = RuntimeIntrospector().load(f"{ORDER}.query_handler.GetOrderForViewingHandler")
        assert handler.interface_names == (
            f"{ORDER}.query_handler.GetOrderForViewingHandlerInterface",
        )

    def test_handle_method_drops_self(self) -> None:
        handler = RuntimeIntrospector().load(f"{ORDER}.command_handler.CancelOrderHandler")
        handle = handler.get_method("handle")
        assert [p.name for p in handle.parameters] == ["command"]
        assert handle.return_type == "void"

    def test_unannotated_return(self) -> None:
        handler = RuntimeIntrospector().load(f"{ORDER}.command_handler.BulkDeleteOrdersHandler")
        assert handler.get_method("handle").has_return_type is False

    def test_private_methods_skipped(self) -> None:
        class Handler:
            def handle(self) -> int:
                return 1

            def _helper(self) -> None:
                pass

        descriptor = RuntimeIntrospector().describe(Handler)
        assert set(descriptor.methods) == {"handle"}

    def test_interfaces_follow_mro(self) -> None:
        class First(ABC):
            @abstractmethod
            def handle(self) -> int: ...

        class Second(Protocol):
            def handle(self) -> str: ...

        class Handler(First, Second):
            def handle(self) -> int:
                return 1

        descriptor = RuntimeIntrospector().describe(Handler)
        assert [i.simple_name for i in descriptor.interfaces] == ["First", "Second"]


class TestStringAnnotations:
    def test_unresolvable_reference_keeps_neighbours_evaluated(self) -> None:
        command = RuntimeIntrospector().load(
            "shop.domain.customer.command.RegisterCustomerCommand"
        )
        assert command.constructor is not None
        params = {p.name: p for p in command.constructor.parameters}

        assert params["customer"].type == "Customer"
        assert params["customer"].allows_null is False

        assert params["name"].type == "str|null"
        assert params["name"].allows_null is True

        assert params["segment"].type == "Optional[Segment]"
        assert params["segment"].allows_null is True

    def test_unresolvable_return_kept_as_text(self) -> None:
        handler = RuntimeIntrospector(handler_method="__call__").load(
            "shop.domain.customer.command_handler.RegisterCustomerHandler"
        )
        assert handler.get_method("__call__").return_type == "Customer"

    def test_optional_text_allows_null(self) -> None:
        assert allows_null("Optional[Segment]") is True
        assert allows_null("Segment") is False


class TestImportFailures:
    def test_module_raising_on_import(self) -> None:
        with pytest.raises(TypeLoadError) as exc_info:
            RuntimeIntrospector().load("shop.misconfigured.Anything")
        assert exc_info.value.type_name == "shop.misconfigured.Anything"
        assert exc_info.value.reason == "RuntimeError: settings are not configured"

    def test_module_with_syntax_error(self, tmp_path: Path) -> None:
        (tmp_path / "half_written_handlers.py").write_text("class Handler(:\n")
        with pytest.raises(TypeLoadError, match="SyntaxError"):
            RuntimeIntrospector(search_paths=[tmp_path]).load("half_written_handlers.Handler")


class TestSearchPaths:
    def test_uninstalled_project_is_importable(self, tmp_path: Path) -> None:
        (tmp_path / "standalone_billing.py").write_text(
            "class ChargeCommand:\n"
            "    def __init__(self, amount: int) -> None:\n"
            "        self.amount = amount\n"
        )
        command = RuntimeIntrospector(search_paths=[tmp_path]).load(
            "standalone_billing.ChargeCommand"
        )
        assert command.constructor is not None
        assert command.constructor.parameters[0].type == "int"
        assert sys.path[0] == str(tmp_path)

    def test_existing_entry_not_duplicated(self, tmp_path: Path) -> None:
        sys.path.insert(0, str(tmp_path))
        RuntimeIntrospector(search_paths=[tmp_path]).load(f"{ORDER}.query.GetOrderForViewing")
        assert sys.path.count(str(tmp_path)) == 1


class TestHandlerMethodName:
    class _CallableHandler:
        def __call__(self, command: int) -> str:
            return str(command)

        def _helper(self) -> None:
            pass

    def test_configured_private_method_collected(self) -> None:
        descriptor = RuntimeIntrospector(handler_method="__call__").describe(
            self._CallableHandler
        )
        assert set(descriptor.methods) == {"__call__"}
        assert descriptor.get_method("__call__").return_type == "str"

    def test_private_methods_skipped_by_default(self) -> None:
        descriptor = RuntimeIntrospector().describe(self._CallableHandler)
        assert descriptor.methods == {}
