# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Metadata tags for declaring HTTP interfaces.

Method tags are stored on the decorated function as ``_glin_tags``, a tuple
of MethodTag in declaration order (top decorator first). Parameter tags are
either ``Arg`` instances inside ``typing.Annotated`` or a positional list set
with the ``args`` decorator.

Example:
    Declare an interface::

        from typing import Annotated

        from glin import JSON, POST, Arg, Call

        class UserBiz:
            @POST("/users/list")
            def list(self, name: Annotated[str, Arg("name")]) -> Call[User]: ...

            @JSON
            @POST("/users/create")
            def create(self, user: User) -> Call[User]: ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

JSON_KIND = "JSON"

_TAGS_ATTR = "_glin_tags"
_ARGS_ATTR = "_glin_args"


@dataclass(frozen=True)
class MethodTag:
    """A (kind, value) metadata pair attached to an interface method."""

    kind: str
    value: str = ""


@dataclass(frozen=True)
class Arg:
    """Binds a parameter to a named entry of the parameter bag.

    Use inside ``Annotated``::

        def search(self, query: Annotated[str, Arg("q")]) -> Call[list[Item]]: ...
    """

    name: str


def _attach(method: Callable, tag: MethodTag) -> Callable:
    existing: tuple[MethodTag, ...] = getattr(method, _TAGS_ATTR, ())
    # Decorators apply bottom-up; prepend so the tuple reads top-down.
    method._glin_tags = (tag, *existing)  # type: ignore[attr-defined]
    return method


def http_tag(kind: str, path: str) -> Callable[[Callable], Callable]:
    """Return a decorator attaching a verb+path tag of the given kind.

    Custom kinds must also be registered on the CallRegistry to be
    recognized by the resolver.

    Args:
        kind: Tag kind, normalized to upper case.
        path: URL fragment appended to the base URL.
    """
    if not isinstance(path, str):
        raise TypeError(f"{kind} path must be a string, got {type(path).__name__}")
    tag = MethodTag(kind.upper(), path)

    def decorator(method: Callable) -> Callable:
        return _attach(method, tag)

    return decorator


def GET(path: str) -> Callable[[Callable], Callable]:
    """Send the bag as query parameters with GET."""
    return http_tag("GET", path)


def POST(path: str) -> Callable[[Callable], Callable]:
    """Send the bag as form fields with POST."""
    return http_tag("POST", path)


def PUT(path: str) -> Callable[[Callable], Callable]:
    """Send the bag as form fields with PUT."""
    return http_tag("PUT", path)


def DELETE(path: str) -> Callable[[Callable], Callable]:
    """Send the bag as query parameters with DELETE."""
    return http_tag("DELETE", path)


def PATCH(path: str) -> Callable[[Callable], Callable]:
    """Send the bag as form fields with PATCH."""
    return http_tag("PATCH", path)


def JSON(method: Callable | None = None) -> Any:
    """Mark a method as sending its single argument as a JSON body.

    Requires a verb+path tag on the same method. Usable bare or called::

        @JSON
        @POST("/users/create")
        def create(self, user: User) -> Call[User]: ...

        @JSON()
        @PUT("/users/update")
        def update(self, user: User) -> Call[User]: ...
    """
    if method is None:
        return JSON
    return _attach(method, MethodTag(JSON_KIND))


def args(*names: str) -> Callable[[Callable], Callable]:
    """Declare parameter bag names positionally, one per parameter.

    Alternative to ``Annotated[..., Arg(name)]`` for methods whose
    parameters are left unannotated::

        @GET("/items")
        @args("page", "size")
        def page(self, page, size): ...
    """

    def decorator(method: Callable) -> Callable:
        method._glin_args = tuple(Arg(name) for name in names)  # type: ignore[attr-defined]
        return method

    return decorator


def method_tags(method: Callable) -> tuple[MethodTag, ...]:
    """Return the method-level tags attached to a function."""
    return getattr(method, _TAGS_ATTR, ())


def declared_args(method: Callable) -> tuple[Arg, ...] | None:
    """Return the ``args`` decorator list, or None if not used."""
    return getattr(method, _ARGS_ATTR, None)


__all__ = [
    "DELETE",
    "GET",
    "JSON",
    "JSON_KIND",
    "PATCH",
    "POST",
    "PUT",
    "Arg",
    "MethodTag",
    "args",
    "declared_args",
    "http_tag",
    "method_tags",
]
