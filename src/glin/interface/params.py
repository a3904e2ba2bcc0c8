# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Parameter bag and its construction from call arguments.

Params is an ordered multimap: entries keep insertion order and keys may
repeat (repeated form fields). ``build_params`` binds the arguments of one
interface-method invocation into a fresh Params instance.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from glin.errors import ArityMismatch, MissingParameterTag

if TYPE_CHECKING:
    from .descriptor import MethodDescriptor


class Params:
    """Ordered, duplicate-tolerant list of (key, value) entries.

    Compares equal to another Params or to a list of (key, value) tuples
    with the same entries in the same order.
    """

    DEFAULT_JSON_KEY = "__body__"

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, entries: Iterable[tuple[str, Any]] | None = None):
        self._entries: list[tuple[str, Any]] = [(k, v) for k, v in entries or ()]

    def add(self, key: str, value: Any) -> Params:
        """Append an entry. Returns self for chaining."""
        self._entries.append((key, value))
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Return the first value stored under ``key``."""
        for k, v in self._entries:
            if k == key:
                return v
        return default

    def get_all(self, key: str) -> list[Any]:
        return [v for k, v in self._entries if k == key]

    def keys(self) -> list[str]:
        """Distinct keys in first-insertion order."""
        return list(dict.fromkeys(k for k, _ in self._entries))

    def items(self) -> list[tuple[str, Any]]:
        return list(self._entries)

    @property
    def is_body(self) -> bool:
        """True for a bag holding a single JSON body entry."""
        return len(self._entries) == 1 and self._entries[0][0] == self.DEFAULT_JSON_KEY

    @property
    def body(self) -> Any:
        return self.get(self.DEFAULT_JSON_KEY)

    def encoded(self) -> list[tuple[str, Any]]:
        """Entries for query/form encoding.

        List and tuple values expand into repeated keys; None values are
        dropped.
        """
        pairs: list[tuple[str, Any]] = []
        for key, value in self._entries:
            if isinstance(value, (list, tuple)):
                pairs.extend((key, item) for item in value if item is not None)
            elif value is not None:
                pairs.append((key, value))
        return pairs

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Params):
            return self._entries == other._entries
        if isinstance(other, list):
            return self._entries == [tuple(item) for item in other]
        return NotImplemented

    def __repr__(self) -> str:
        return f"Params({self._entries!r})"


def _first_argument(descriptor: MethodDescriptor, args: tuple, kwargs: dict[str, Any]) -> Any:
    if args:
        return args[0]
    for name in descriptor.param_names:
        if name in kwargs:
            return kwargs[name]
    return next(iter(kwargs.values()))


def _validate(descriptor: MethodDescriptor, arguments: dict[str, Any]) -> dict[str, Any]:
    """Coerce bound arguments through the descriptor's pydantic model.

    Raises:
        pydantic.ValidationError: If an argument does not match its type.
    """
    model = descriptor.arguments_model
    if model is None:
        return arguments
    validated = model.model_validate(arguments)
    # getattr keeps model instances as-is instead of dumping them to dicts
    return {name: getattr(validated, name) for name in arguments}


def build_params(
    descriptor: MethodDescriptor,
    args: tuple = (),
    kwargs: dict[str, Any] | None = None,
    *,
    strict: bool = True,
    validate: bool = True,
) -> Params:
    """Bind the arguments of one invocation into a Params bag.

    Body methods produce a single ``__body__`` entry holding the first
    argument. Other methods produce one ``(tag.name, value)`` entry per
    declared parameter, in declaration order, defaults applied.

    Args:
        descriptor: Descriptor of the invoked method.
        args: Positional call arguments (without self).
        kwargs: Keyword call arguments.
        strict: Reject body methods declaring more than one parameter.
            When False, extra body arguments are ignored.
        validate: Validate arguments with the descriptor's pydantic model.

    Returns:
        A new Params instance.

    Raises:
        ArityMismatch: Tag count and parameter count differ, the body method
            declares several parameters (strict), or the arguments cannot be
            bound to the signature.
        MissingParameterTag: A parameter has no Arg tag.
    """
    kwargs = kwargs or {}
    params = Params()

    if descriptor.body:
        if strict and len(descriptor.param_names) > 1:
            raise ArityMismatch(
                f"body method must declare exactly one parameter, "
                f"found {len(descriptor.param_names)}",
                descriptor.qualname,
            )
        if strict:
            arguments = _bind(descriptor, args, kwargs)
            if validate:
                arguments = _validate(descriptor, arguments)
            if not arguments:
                return params
            body = next(iter(arguments.values()))
        elif not args and not kwargs:
            return params
        else:
            body = _first_argument(descriptor, args, kwargs)
        return params.add(Params.DEFAULT_JSON_KEY, body)

    if not descriptor.param_names:
        if args or kwargs:
            raise ArityMismatch(
                f"takes no arguments, got {len(args) + len(kwargs)}", descriptor.qualname
            )
        return params

    explicit = descriptor.explicit_args
    if explicit is not None and len(explicit) != len(descriptor.param_names):
        raise ArityMismatch(
            f"{len(explicit)} parameter tags for {len(descriptor.param_names)} parameters",
            descriptor.qualname,
        )

    for name, tag in zip(descriptor.param_names, descriptor.param_tags):
        if tag is None:
            raise MissingParameterTag(f"parameter '{name}' has no Arg tag", descriptor.qualname)

    arguments = _bind(descriptor, args, kwargs)
    if validate:
        arguments = _validate(descriptor, arguments)

    for name, tag in zip(descriptor.param_names, descriptor.param_tags):
        params.add(tag.name, arguments[name])  # type: ignore[union-attr]
    return params


def _bind(descriptor: MethodDescriptor, args: tuple, kwargs: dict[str, Any]) -> dict[str, Any]:
    try:
        bound = descriptor.signature.bind(*args, **kwargs)
    except TypeError as exc:
        raise ArityMismatch(str(exc), descriptor.qualname) from exc
    bound.apply_defaults()
    return dict(bound.arguments)


__all__ = ["Params", "build_params"]
