"""Runtime introspection backend: descriptors built from live Python classes.

Types are imported by name (``pkg.module.Class`` or ``pkg.module:Class``)
and described with :mod:`inspect`. Annotations are rendered as text:

- builtins by bare name (``int``), other classes as ``module.QualName``
- ``None`` as ``null`` (``void`` in return position)
- unions joined with ``|``, ``null`` last
- generics as ``origin[arg, ...]``, ``typing.Any`` as ``mixed``

INVARIANT: Interfaces are listed in MRO order, which pins the priority the
resolver applies when several interfaces declare the handling method.
"""

from __future__ import annotations

import abc
import dataclasses
import inspect
import logging
import pkgutil
import re
import sys
import types
import typing
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from handlerdoc.domain.definition import VOID_TYPE
from handlerdoc.domain.errors import TypeLoadError
from handlerdoc.introspection.descriptors import (
    MethodDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
)

logger = logging.getLogger(__name__)

NULL_TYPE = "null"
MIXED_TYPE = "mixed"

_NOT_INTERFACES: frozenset[type] = frozenset({object, abc.ABC, typing.Generic, typing.Protocol})  # type: ignore[arg-type]
_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_NONE_IN_TEXT = re.compile(r"\bNone\b|\bnull\b|\bOptional\[|^\?")


# ── Annotation rendering ─────────────────────────────────────────────


def _class_name(cls: type) -> str:
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _is_none(annotation: Any) -> bool:
    return annotation is None or annotation is type(None)


def _is_union(origin: Any) -> bool:
    return origin is typing.Union or origin is types.UnionType


def format_annotation(annotation: Any) -> str | None:
    """Render a type annotation as documentation text.

    Returns None for a missing annotation.
    """
    if annotation is inspect.Parameter.empty:
        return None
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, typing.ForwardRef):
        return annotation.__forward_arg__
    if _is_none(annotation):
        return NULL_TYPE
    if annotation is typing.Any:
        return MIXED_TYPE
    if annotation is Ellipsis:
        return "..."
    if isinstance(annotation, list):
        return f"[{', '.join(format_annotation(a) or '' for a in annotation)}]"

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)
    if _is_union(origin):
        members = [format_annotation(a) for a in args if not _is_none(a)]
        if any(_is_none(a) for a in args):
            members.append(NULL_TYPE)
        return "|".join(m for m in members if m)
    if origin is typing.Annotated:
        return format_annotation(args[0])
    if origin is typing.Literal:
        return f"Literal[{', '.join(repr(a) for a in args)}]"
    if origin is not None:
        name = _class_name(origin) if isinstance(origin, type) else format_annotation(origin)
        if not args:
            return name
        return f"{name}[{', '.join(format_annotation(a) or '' for a in args)}]"
    if isinstance(annotation, type):
        return _class_name(annotation)
    if isinstance(annotation, typing.TypeVar):
        return annotation.__name__
    return repr(annotation).replace("typing.", "")


def format_return_annotation(annotation: Any) -> str | None:
    """Render a return annotation; a bare ``None`` means ``void``."""
    if annotation is inspect.Signature.empty:
        return None
    if _is_none(annotation):
        return VOID_TYPE
    return format_annotation(annotation)


def allows_null(annotation: Any, default: Any = inspect.Parameter.empty) -> bool:
    """Whether a parameter accepts ``None``.

    Unannotated parameters, ``None`` defaults, ``Optional``/``| None``
    unions and ``Any`` all accept it.
    """
    if annotation is inspect.Parameter.empty or default is None:
        return True
    if _is_none(annotation) or annotation is typing.Any:
        return True
    if isinstance(annotation, str):
        return _NONE_IN_TEXT.search(annotation) is not None
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return allows_null(typing.get_args(annotation)[0])
    if _is_union(origin):
        return any(_is_none(a) for a in typing.get_args(annotation))
    return False


# ── Signature helpers ────────────────────────────────────────────────


def _namespaces(obj: Callable[..., Any]) -> tuple[dict[str, Any], dict[str, Any] | None]:
    """Globals and locals that string annotations on *obj* were written against."""
    if inspect.isclass(obj):
        init = obj.__init__  # type: ignore[misc]
        if inspect.isfunction(init):
            return init.__globals__, dict(vars(obj))
        module = sys.modules.get(obj.__module__)
        return (vars(module) if module else {}), dict(vars(obj))
    return getattr(inspect.unwrap(obj), "__globals__", {}), None


def _evaluate(
    annotation: Any, globalns: dict[str, Any], localns: dict[str, Any] | None
) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)  # noqa: S307
    except (NameError, AttributeError, TypeError, SyntaxError):
        logger.debug("Unresolvable annotation %r, keeping it as text", annotation)
        return annotation


def _signature(obj: Callable[..., Any]) -> inspect.Signature:
    """Signature with string annotations evaluated one by one.

    An annotation that cannot be evaluated (a ``TYPE_CHECKING`` import, a
    typo) stays as text without affecting its neighbours.
    """
    signature = inspect.signature(obj)
    globalns, localns = _namespaces(obj)
    parameters = [
        p.replace(annotation=_evaluate(p.annotation, globalns, localns))
        for p in signature.parameters.values()
    ]
    return signature.replace(
        parameters=parameters,
        return_annotation=_evaluate(signature.return_annotation, globalns, localns),
    )


def _own_docstring(cls: type) -> str | None:
    """The class's own docstring, ignoring the one dataclasses generate."""
    doc = vars(cls).get("__doc__")
    if not isinstance(doc, str):
        return None
    if dataclasses.is_dataclass(cls) and re.fullmatch(
        rf"{re.escape(cls.__name__)}\(.*\)", doc
    ):
        return None
    return doc


def _factory_defaults(cls: type) -> dict[str, Callable[[], Any]]:
    if not dataclasses.is_dataclass(cls):
        return {}
    return {
        f.name: f.default_factory
        for f in dataclasses.fields(cls)
        if f.default_factory is not dataclasses.MISSING
    }


def _describe_parameter(
    param: inspect.Parameter,
    factories: dict[str, Callable[[], Any]],
) -> ParameterDescriptor:
    has_default = param.default is not inspect.Parameter.empty
    default = param.default if has_default else None
    if param.name in factories:
        default = factories[param.name]()
    return ParameterDescriptor(
        name=param.name,
        type=format_annotation(param.annotation),
        optional=has_default or param.kind in _VARIADIC_KINDS,
        allows_null=allows_null(param.annotation, param.default),
        has_default=has_default,
        default=default,
    )


def _has_constructor(cls: type) -> bool:
    return cls.__init__ is not object.__init__ or "__signature__" in vars(cls)  # type: ignore[misc]


def _describe_constructor(cls: type) -> MethodDescriptor | None:
    if not _has_constructor(cls):
        return None
    try:
        signature = _signature(cls)
    except ValueError:
        logger.debug("No signature available for %r, treating it as constructor-less", cls)
        return None
    factories = _factory_defaults(cls)
    init = cls.__init__  # type: ignore[misc]
    return MethodDescriptor(
        name="__init__",
        doc_comment=init.__doc__ if init is not object.__init__ else None,
        parameters=tuple(_describe_parameter(p, factories) for p in signature.parameters.values()),
    )


def _describe_method(name: str, attr: Any) -> MethodDescriptor:
    func = attr.__func__ if isinstance(attr, (staticmethod, classmethod)) else attr
    signature = _signature(func)
    params = list(signature.parameters.values())
    if not isinstance(attr, staticmethod) and params:
        params = params[1:]
    return MethodDescriptor(
        name=name,
        doc_comment=func.__doc__,
        parameters=tuple(_describe_parameter(p, {}) for p in params),
        return_type=format_return_annotation(signature.return_annotation),
    )


def _collect_methods(
    cls: type, include: frozenset[str] = frozenset()
) -> dict[str, MethodDescriptor]:
    """Public methods reachable from *cls*, subclasses overriding bases.

    Names in *include* are collected even when private (``__call__``).
    """
    found: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass in _NOT_INTERFACES:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_") and name not in include:
                continue
            if inspect.isfunction(attr) or isinstance(attr, (staticmethod, classmethod)):
                found[name] = attr
    return {name: _describe_method(name, attr) for name, attr in found.items()}


def is_interface(cls: type) -> bool:
    """Protocols and abstract classes count as interfaces."""
    if cls in _NOT_INTERFACES:
        return False
    if getattr(cls, "_is_protocol", False):
        return True
    return inspect.isabstract(cls)


# ── Backend ──────────────────────────────────────────────────────────


class RuntimeIntrospector:
    """Describe importable Python classes.

    Args:
        search_paths: Directories made importable before loading, so a
            project that is not installed can still be described.
        handler_method: Method collected even when its name is private,
            e.g. ``__call__`` for callable handlers.
    """

    def __init__(
        self,
        *,
        search_paths: Sequence[str | Path] = (),
        handler_method: str | None = None,
    ) -> None:
        self._search_paths = tuple(str(p) for p in search_paths)
        self._include = frozenset({handler_method}) if handler_method else frozenset()

    def load(self, type_name: str) -> TypeDescriptor:
        """Import *type_name* and describe it.

        Raises:
            TypeLoadError: Import failed (including errors raised by the
                module body), the attribute is missing, or the target is
                not a class.
        """
        self._extend_import_path()
        try:
            target = pkgutil.resolve_name(type_name)
        except Exception as exc:
            raise TypeLoadError(type_name, f"{type(exc).__name__}: {exc}") from exc
        if not inspect.isclass(target):
            raise TypeLoadError(type_name, f"{type(target).__name__} is not a class")
        logger.debug("Loaded %s", type_name)
        return self.describe(target)

    def describe(self, cls: type) -> TypeDescriptor:
        """Build the descriptor for an already loaded class."""
        return self._describe(cls, {})

    def _extend_import_path(self) -> None:
        for path in reversed(self._search_paths):
            if path not in sys.path:
                sys.path.insert(0, path)
                logger.debug("Added %s to the import path", path)

    def _describe(self, cls: type, seen: dict[type, TypeDescriptor]) -> TypeDescriptor:
        if cls in seen:
            return seen[cls]
        interfaces = tuple(
            self._describe(base, seen) for base in cls.__mro__[1:] if is_interface(base)
        )
        descriptor = TypeDescriptor(
            name=_class_name(cls),
            doc_comment=_own_docstring(cls),
            constructor=_describe_constructor(cls),
            methods=_collect_methods(cls, self._include),
            interfaces=interfaces,
        )
        seen[cls] = descriptor
        return descriptor
