# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration and dispatch core for glin.

This module defines:
- GlinConfig: immutable dispatch configuration
- config_from_env(): factory building GlinConfig from GLIN_* env vars
- Glin: dispatch core synthesizing interface implementations
- Builder: fluent configuration facade

Configuration via environment variables:
    GLIN_BASE_URL: Base URL prepended to every path (default: "")
    GLIN_DEBUG: Log every exchange (default: false)
    GLIN_TIMEOUT: Request timeout in seconds (default: transport default)
    GLIN_STRICT: Reject ambiguous tags and multi-parameter body methods
        (default: true)
    GLIN_VALIDATE_ARGS: Validate call arguments with pydantic (default: true)

Dispatch, per invocation of an interface method:
1. resolve the method tags to (kind, path, verb)
2. build the parameter bag from the call arguments
3. look the kind up in the frozen CallRegistry
4. construct the Call with (client, base_url + path, params, tag)

No I/O happens during dispatch. All errors are raised synchronously.

Usage:
    # Explicit configuration:
    glin = Glin(GlinConfig(client=HttpxClient(), base_url="http://192.168.201.39"))

    # Fluent:
    glin = (
        Builder()
        .client(HttpxClient())
        .base_url("http://192.168.201.39")
        .parser_factory(JsonParserFactory(data_key="data"))
        .debug(True)
        .build()
    )

    biz = glin.create(UserBiz, tag="main")
    call = biz.list("qibin")
    result = call.execute()
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from .call.base import Call
from .call.registry import CallFactory, CallRegistry
from .client.base import Client
from .client.httpx_client import HttpxClient
from .errors import IllegalConfigurationOrder, UnknownStrategy
from .interface.descriptor import InterfaceDescription, MethodDescriptor, describe_interface
from .interface.params import build_params
from .interface.resolver import resolve
from .parser.base import ParserFactory

logger = logging.getLogger(__name__)

I = TypeVar("I")


@dataclass(frozen=True)
class GlinConfig:
    """Immutable dispatch configuration, shared by every created interface.

    Attributes:
        client: Transport client performing the exchanges.
        base_url: Prefix of every resolved URL.
        parser_factory: Body decoder factory. None keeps the client's own.
        debug: Make the client log every exchange.
        timeout: Request timeout in seconds. None keeps the client default.
        strict: Reject several verb tags on one method and body methods
            declaring more than one parameter.
        validate_args: Validate call arguments against parameter annotations.
        registry: Call strategies. None uses CallRegistry.default().
    """

    client: Client = field(default_factory=HttpxClient)
    base_url: str = ""
    parser_factory: ParserFactory | None = None
    debug: bool = False
    timeout: float | None = None
    strict: bool = True
    validate_args: bool = True
    registry: CallRegistry | None = None


def config_from_env(client: Client | None = None) -> GlinConfig:
    """Build GlinConfig from GLIN_* environment variables.

    Args:
        client: Transport client. Defaults to a new HttpxClient.

    Returns:
        GlinConfig instance populated from environment.
    """
    timeout = os.environ.get("GLIN_TIMEOUT")
    return GlinConfig(
        client=client or HttpxClient(),
        base_url=os.environ.get("GLIN_BASE_URL", ""),
        debug=os.environ.get("GLIN_DEBUG", "").lower() in ("1", "true", "yes"),
        timeout=float(timeout) if timeout else None,
        strict=os.environ.get("GLIN_STRICT", "true").lower() in ("1", "true", "yes"),
        validate_args=os.environ.get("GLIN_VALIDATE_ARGS", "true").lower() in ("1", "true", "yes"),
    )


def _trampoline(descriptor: MethodDescriptor) -> Callable[..., Call[Any]]:
    def method(self: Any, *args: Any, **kwargs: Any) -> Call[Any]:
        return self._glin.dispatch(descriptor, self._glin_tag, args, kwargs)

    functools.update_wrapper(method, descriptor.func)
    return method


def _client_repr(self: Any) -> str:
    return f"<{type(self).__name__} tag={self._glin_tag!r} base_url={self._glin.base_url!r}>"


@functools.lru_cache(maxsize=None)
def _client_class(interface: type) -> type:
    """Generate (once per interface) a subclass whose methods dispatch."""
    description = describe_interface(interface)
    namespace: dict[str, Any] = {
        name: _trampoline(descriptor) for name, descriptor in description.items()
    }
    namespace["__module__"] = interface.__module__
    namespace["__qualname__"] = f"{interface.__qualname__}Client"
    namespace["__repr__"] = _client_repr
    return type(f"{interface.__name__}Client", (interface,), namespace)


class Glin:
    """Dispatch core: turns interface method invocations into Calls.

    Read-only after construction; safe to share between threads.

    Attributes:
        config: The GlinConfig this instance was built from.
        client: Transport client handed to every Call.
        registry: Frozen copy of the configured CallRegistry.
    """

    def __init__(self, config: GlinConfig | None = None):
        """Apply the configuration to the client and freeze the registry."""
        self.config = config or GlinConfig()
        self.client = self.config.client

        if self.config.parser_factory is not None:
            self.client.parser_factory(self.config.parser_factory)
        self.client.debug_mode(self.config.debug)
        if self.config.timeout is not None:
            self.client.timeout(self.config.timeout)

        registry = self.config.registry or CallRegistry.default()
        self.registry = registry.copy().freeze()

    @property
    def base_url(self) -> str:
        return self.config.base_url or ""

    def create(self, interface: type[I], tag: Any = None) -> I:
        """Create an implementation of ``interface``.

        Args:
            interface: Class whose public methods carry glin tags.
            tag: Opaque value attached to every Call (cancellation grouping,
                debugging).

        Returns:
            Instance of a generated subclass of ``interface``.
        """
        instance = object.__new__(_client_class(interface))
        object.__setattr__(instance, "_glin", self)
        object.__setattr__(instance, "_glin_tag", tag)
        return instance  # type: ignore[return-value]

    def describe(self, interface: type) -> InterfaceDescription:
        """Return the cached method descriptor table of ``interface``."""
        return describe_interface(interface)

    def dispatch(
        self,
        descriptor: MethodDescriptor,
        tag: Any,
        args: tuple = (),
        kwargs: dict[str, Any] | None = None,
    ) -> Call[Any]:
        """Resolve one invocation into a Call.

        Raises:
            UnsupportedOperation: Any resolution failure (see glin.errors).
            pydantic.ValidationError: Arguments do not match annotations.
        """
        resolution = resolve(descriptor, self.registry, strict=self.config.strict)
        params = build_params(
            descriptor,
            args,
            kwargs,
            strict=self.config.strict,
            validate=self.config.validate_args,
        )

        factory = self.registry.lookup(resolution.kind)
        if factory is None:
            raise UnknownStrategy(f"no call type for '{resolution.kind}'", descriptor.qualname)

        call = factory(
            self.client,
            self.base_url + resolution.path,
            params,
            tag,
            method=resolution.verb,
            result_type=descriptor.result_type,
        )
        if call is None:
            raise UnknownStrategy(
                f"call type for '{resolution.kind}' returned no call", descriptor.qualname
            )

        logger.debug("%s -> %r", descriptor.qualname, call)
        return call

    def close(self) -> None:
        """Close the transport client's blocking resources.

        Async connections need ``aclose`` (or ``async with``).
        """
        self.client.close()

    async def aclose(self) -> None:
        """Close the transport client, async connections included."""
        await self.client.aclose()
        self.client.close()

    def __enter__(self) -> Glin:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> Glin:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


class Builder:
    """Fluent configuration facade producing a Glin.

    ``parser_factory``, ``debug`` and ``timeout`` configure the transport
    client and therefore require ``client`` to be called first. GlinConfig
    has no such ordering constraint.
    """

    def __init__(self) -> None:
        self._client: Client | None = None
        self._base_url = ""
        self._parser_factory: ParserFactory | None = None
        self._debug = False
        self._timeout: float | None = None
        self._strict = True
        self._validate_args = True
        self._registry: CallRegistry | None = None

    def client(self, client: Client) -> Builder:
        self._client = client
        return self

    def base_url(self, base_url: str | None) -> Builder:
        self._base_url = base_url or ""
        return self

    def parser_factory(self, factory: ParserFactory) -> Builder:
        self._require_client("parser_factory")
        self._parser_factory = factory
        return self

    def debug(self, debug: bool) -> Builder:
        self._require_client("debug")
        self._debug = debug
        return self

    def timeout(self, seconds: float) -> Builder:
        self._require_client("timeout")
        self._timeout = seconds
        return self

    def strict(self, strict: bool = True) -> Builder:
        self._strict = strict
        return self

    def validate_args(self, validate: bool = True) -> Builder:
        self._validate_args = validate
        return self

    def call_type(self, kind: str, factory: CallFactory) -> Builder:
        """Register an additional (or replacement) call strategy."""
        if self._registry is None:
            self._registry = CallRegistry.default()
        self._registry.register(kind, factory)
        return self

    def build(self) -> Glin:
        """Build the Glin. Without ``client`` a default HttpxClient is used."""
        return Glin(
            GlinConfig(
                client=self._client or HttpxClient(),
                base_url=self._base_url,
                parser_factory=self._parser_factory,
                debug=self._debug,
                timeout=self._timeout,
                strict=self._strict,
                validate_args=self._validate_args,
                registry=self._registry,
            )
        )

    def _require_client(self, name: str) -> None:
        if self._client is None:
            raise IllegalConfigurationOrder(f"invoke client() before {name}()")


__all__ = ["Builder", "Glin", "GlinConfig", "config_from_env"]
