# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Call-strategy registry: tag kind -> call constructor.

Iteration order is registration order and is the tie-break order used by
the resolver. A registry is populated at startup and frozen when handed to
Glin; a frozen registry is read-only and needs no locking.

Default registry (``CallRegistry.default()``), in order:
    GET → GetCall, POST → PostCall, PUT → PutCall, DELETE → DeleteCall,
    PATCH → PatchCall, JSON → JsonCall

Usage:
    registry = CallRegistry.default()
    registry.register("HEAD", HeadCall)
    glin = Glin(GlinConfig(registry=registry))
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from glin.errors import RegistryFrozenError

from .base import Call
from .strategies import DeleteCall, GetCall, JsonCall, PatchCall, PostCall, PutCall

CallFactory = Callable[..., Call[Any]]
"""Constructor ``(client, url, params, tag, *, method=None, result_type=Any) -> Call``."""


class CallRegistry:
    """Ordered mapping of tag kind to call constructor."""

    def __init__(self) -> None:
        self._mapping: dict[str, CallFactory] = {}
        self._frozen = False

    @classmethod
    def default(cls) -> CallRegistry:
        """Create a registry holding the built-in strategies."""
        registry = cls()
        registry.register("GET", GetCall)
        registry.register("POST", PostCall)
        registry.register("PUT", PutCall)
        registry.register("DELETE", DeleteCall)
        registry.register("PATCH", PatchCall)
        registry.register("JSON", JsonCall)
        return registry

    def register(self, kind: str, factory: CallFactory) -> CallRegistry:
        """Register (or replace) the constructor of a tag kind.

        Replacing keeps the kind's original position.

        Returns:
            Self for method chaining.

        Raises:
            RegistryFrozenError: If the registry is frozen.
        """
        if self._frozen:
            raise RegistryFrozenError(f"cannot register '{kind}': registry is frozen")
        self._mapping[kind.upper()] = factory
        return self

    def lookup(self, kind: str) -> CallFactory | None:
        return self._mapping.get(kind.upper())

    def known_kinds(self) -> tuple[str, ...]:
        """Registered kinds in registration order."""
        return tuple(self._mapping)

    def freeze(self) -> CallRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> CallRegistry:
        """Return an unfrozen copy with the same entries and order."""
        registry = type(self)()
        registry._mapping = dict(self._mapping)
        return registry

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, str) and kind.upper() in self._mapping

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"CallRegistry({list(self._mapping)}, {state})"


__all__ = ["CallFactory", "CallRegistry"]
