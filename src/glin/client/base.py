# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Abstract transport client.

The client performs the network exchange of a Request and decodes the
response with the configured ParserFactory. Subclasses implement only
``_send`` (blocking) and ``_asend`` (asyncio); execution, worker-thread
enqueueing, tag-based cancellation and debug logging live here.

Example:
    Minimal transport::

        class EchoClient(Client):
            def _send(self, request: Request) -> RawResponse:
                return RawResponse(200, json.dumps(request.params.items()).encode())

            async def _asend(self, request: Request) -> RawResponse:
                return self._send(request)
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from glin.models import RawResponse, Request, Result
from glin.parser import JsonParserFactory, ParserFactory

logger = logging.getLogger(__name__)


def _tag_key(tag: Any) -> Any:
    try:
        hash(tag)
    except TypeError:
        return id(tag)
    return tag


class Client(ABC):
    """Base class for transport clients.

    Attributes:
        max_workers: Size of the thread pool used by ``enqueue``.
    """

    def __init__(self, max_workers: int = 4):
        self.max_workers = max_workers
        self._parser_factory: ParserFactory = JsonParserFactory()
        self._debug = False
        self._timeout: float | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._pending: dict[Any, set[Future]] = {}
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Configuration (applied once by Glin at construction)
    # -------------------------------------------------------------------------

    def parser_factory(self, factory: ParserFactory) -> None:
        """Set the factory used to decode response bodies."""
        self._parser_factory = factory

    def debug_mode(self, debug: bool) -> None:
        """Log every exchange at INFO level when enabled."""
        self._debug = debug

    def timeout(self, seconds: float | None) -> None:
        """Per-request timeout in seconds. None keeps the transport default."""
        self._timeout = seconds

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def current_parser_factory(self) -> ParserFactory:
        return self._parser_factory

    @property
    def current_timeout(self) -> float | None:
        return self._timeout

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def execute(self, request: Request) -> Result[Any]:
        """Perform the exchange and decode the response.

        Raises:
            TransportError: If no response could be obtained.
        """
        started = time.perf_counter()
        raw = self._send(request)
        return self._decode(request, raw, started)

    async def aexecute(self, request: Request) -> Result[Any]:
        """Asyncio variant of ``execute``."""
        started = time.perf_counter()
        raw = await self._asend(request)
        return self._decode(request, raw, started)

    def enqueue(self, request: Request) -> Future:
        """Execute on a worker thread.

        Returns:
            Future resolving to the Result, or failing with TransportError.
        """
        future = self._get_executor().submit(self.execute, request)
        key = _tag_key(request.tag)
        with self._lock:
            self._pending.setdefault(key, set()).add(future)
        future.add_done_callback(lambda f: self._forget(key, f))
        return future

    def cancel(self, tag: Any) -> int:
        """Cancel enqueued requests of ``tag`` that have not started.

        Returns:
            Number of requests canceled.
        """
        with self._lock:
            futures = list(self._pending.get(_tag_key(tag), ()))
        canceled = sum(1 for future in futures if future.cancel())
        if canceled:
            logger.debug("Canceled %d pending request(s) for tag %r", canceled, tag)
        return canceled

    def close(self) -> None:
        """Shut the worker pool down. Subclasses release connections."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    async def aclose(self) -> None:
        """Release asyncio resources. Subclasses close their async connections."""

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
        self.close()

    # -------------------------------------------------------------------------
    # Subclass hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def _send(self, request: Request) -> RawResponse:
        """Blocking exchange. Must raise TransportError on network failure."""
        ...

    @abstractmethod
    async def _asend(self, request: Request) -> RawResponse:
        """Asyncio exchange. Must raise TransportError on network failure."""
        ...

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _decode(self, request: Request, raw: RawResponse, started: float) -> Result[Any]:
        result = self._parser_factory.create(request.result_type).parse(raw)
        if self._debug:
            logger.info(
                "%s %s params=%r -> %s %s (%.1f ms)",
                request.method,
                request.url,
                request.params.items(),
                raw.status_code,
                "ok" if result.ok else result.message,
                (time.perf_counter() - started) * 1000,
            )
        return result

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix="glin"
                )
            return self._executor

    def _forget(self, key: Any, future: Future) -> None:
        with self._lock:
            futures = self._pending.get(key)
            if futures is None:
                return
            futures.discard(future)
            if not futures:
                del self._pending[key]


__all__ = ["Client"]
