# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Method descriptors built by introspecting interface classes.

An interface is described once: every public function defined on the class
(or inherited from its bases) becomes an immutable MethodDescriptor holding
its tags, its signature, its parameter tags and a pydantic model used to
validate call arguments. The resulting table is cached per interface type.

Example:
    ::

        description = describe_interface(UserBiz)
        descriptor = description["list"]
        descriptor.tags         # (MethodTag(kind='POST', value='/users/list'),)
        descriptor.param_tags   # (Arg(name='name'),)
        descriptor.result_type  # User
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from pydantic import BaseModel, ConfigDict, PydanticUserError, create_model

from .annotations import JSON_KIND, Arg, MethodTag, declared_args, method_tags

logger = logging.getLogger(__name__)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class MethodDescriptor:
    """Immutable metadata for one interface method.

    Attributes:
        name: Method name on the interface.
        func: The undecorated interface function.
        signature: Signature without the leading ``self`` parameter.
        tags: Method-level tags in declaration order.
        param_names: Declared parameter names in order.
        param_tags: One Arg (or None) per declared parameter.
        explicit_args: Names given with the ``args`` decorator, or None.
        result_type: ``T`` from a ``Call[T]`` return annotation, else Any.
        arguments_model: Pydantic model validating call arguments, or None
            when the signature cannot be expressed as a model.
    """

    name: str
    func: Callable
    signature: inspect.Signature
    tags: tuple[MethodTag, ...]
    param_names: tuple[str, ...]
    param_tags: tuple[Arg | None, ...]
    explicit_args: tuple[Arg, ...] | None
    result_type: Any
    arguments_model: type[BaseModel] | None

    @property
    def qualname(self) -> str:
        return getattr(self.func, "__qualname__", self.name)

    @property
    def body(self) -> bool:
        """True when the method carries the JSON body tag."""
        return self.has_tag(JSON_KIND)

    def has_tag(self, kind: str) -> bool:
        return any(tag.kind == kind for tag in self.tags)

    def tag_value(self, kind: str) -> str | None:
        """Return the value of the first tag of ``kind``, or None."""
        for tag in self.tags:
            if tag.kind == kind:
                return tag.value
        return None


def _unwrap_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, *meta]`` into (T, meta)."""
    if get_origin(annotation) is Annotated:
        base, *meta = get_args(annotation)
        return base, tuple(meta)
    return annotation, ()


def _result_type(annotation: Any) -> Any:
    """Extract T from a ``Call[T]`` return annotation."""
    from glin.call.base import Call

    annotation, _ = _unwrap_annotated(annotation)
    origin = get_origin(annotation) or annotation
    if isinstance(origin, type) and issubclass(origin, Call):
        type_args = get_args(annotation)
        return type_args[0] if type_args else Any
    return Any


def _field_type(annotation: Any) -> Any:
    if annotation is inspect.Parameter.empty or isinstance(annotation, str):
        return Any
    return annotation


def _create_arguments_model(
    name: str, parameters: list[inspect.Parameter], types: dict[str, Any]
) -> type[BaseModel] | None:
    """Create a Pydantic model from the declared parameters."""
    fields: dict[str, Any] = {}
    for param in parameters:
        if param.kind in _VARIADIC or param.name.startswith("_"):
            return None
        default = ... if param.default is inspect.Parameter.empty else param.default
        fields[param.name] = (types[param.name], default)

    model_name = f"{name.title().replace('_', '')}Arguments"
    try:
        return create_model(
            model_name, __config__=ConfigDict(arbitrary_types_allowed=True), **fields
        )
    except PydanticUserError as exc:
        logger.debug("No argument model for %s: %s", name, exc)
        return None


def describe_method(func: Callable, name: str | None = None) -> MethodDescriptor:
    """Build the MethodDescriptor of an interface function.

    Args:
        func: Function defined on the interface class (with ``self``).
        name: Attribute name, defaults to ``func.__name__``.

    Returns:
        The descriptor. Tag errors are not raised here; they surface when the
        method is invoked.
    """
    name = name or func.__name__
    sig = inspect.signature(func)
    parameters = list(sig.parameters.values())[1:]

    try:
        hints = get_type_hints(func, include_extras=True)
    except Exception:
        # Unresolvable forward references: fall back to raw annotations
        hints = {}

    param_tags: list[Arg | None] = []
    types: dict[str, Any] = {}
    for param in parameters:
        annotation = hints.get(param.name, param.annotation)
        base, meta = _unwrap_annotated(annotation)
        types[param.name] = _field_type(base)
        param_tags.append(next((m for m in meta if isinstance(m, Arg)), None))

    explicit = declared_args(func)
    if explicit is not None:
        param_tags = [explicit[i] if i < len(explicit) else None for i in range(len(parameters))]

    return MethodDescriptor(
        name=name,
        func=func,
        signature=sig.replace(parameters=parameters),
        tags=method_tags(func),
        param_names=tuple(p.name for p in parameters),
        param_tags=tuple(param_tags),
        explicit_args=explicit,
        result_type=_result_type(hints.get("return", sig.return_annotation)),
        arguments_model=_create_arguments_model(name, parameters, types),
    )


class InterfaceDescription(Mapping[str, MethodDescriptor]):
    """Read-only table of method name -> MethodDescriptor for one interface."""

    def __init__(self, interface: type, methods: dict[str, MethodDescriptor]):
        self.interface = interface
        self._methods = dict(methods)

    def __getitem__(self, name: str) -> MethodDescriptor:
        return self._methods[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    def __repr__(self) -> str:
        return f"InterfaceDescription({self.interface.__name__}, {list(self._methods)})"


def _public_functions(interface: type) -> dict[str, Callable]:
    """Collect public plain functions along the MRO, subclasses winning."""
    functions: dict[str, Callable] = {}
    for klass in reversed(interface.__mro__):
        if klass is object:
            continue
        for attr_name, attr in vars(klass).items():
            if attr_name.startswith("_"):
                continue
            if inspect.isfunction(attr):
                functions[attr_name] = attr
            else:
                functions.pop(attr_name, None)
    return functions


@functools.lru_cache(maxsize=None)
def describe_interface(interface: type) -> InterfaceDescription:
    """Describe every public method of an interface class (cached per type).

    Args:
        interface: Class whose methods carry glin tags.

    Returns:
        InterfaceDescription keyed by method name.

    Raises:
        TypeError: If ``interface`` is not a class.
    """
    if not isinstance(interface, type):
        raise TypeError(f"interface must be a class, got {interface!r}")

    methods = {
        attr_name: describe_method(func, attr_name)
        for attr_name, func in _public_functions(interface).items()
    }
    logger.debug("Described %s: %d methods", interface.__qualname__, len(methods))
    return InterfaceDescription(interface, methods)


__all__ = ["InterfaceDescription", "MethodDescriptor", "describe_interface", "describe_method"]
