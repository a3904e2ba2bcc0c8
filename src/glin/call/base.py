# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Deferred call: one resolved request waiting to be executed.

A Call owns its Request and borrows the transport client. Constructing a
call performs no I/O. Execution styles:

- ``execute()``: blocking, returns a Result or raises TransportError
- ``await aexecute()``: asyncio
- ``enqueue(on_response, on_failure)``: worker thread with callbacks

Each execution is independent; a call may be executed again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from glin.errors import CallCanceled
from glin.interface.params import Params
from glin.models import BodyMode, Request, Result

if TYPE_CHECKING:
    from glin.client.base import Client

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Call(Generic[T]):
    """Base class of all call strategies.

    Subclasses set the default HTTP verb and the serialization mode of the
    parameter bag.

    Class Attributes:
        method: Default HTTP verb, overridable per instance.
        body_mode: "query", "form" or "json".
    """

    method: ClassVar[str] = "GET"
    body_mode: ClassVar[BodyMode] = "query"

    def __init__(
        self,
        client: Client,
        url: str,
        params: Params,
        tag: Any = None,
        *,
        method: str | None = None,
        result_type: Any = Any,
    ):
        self._client = client
        self._request = Request(
            method=(method or self.method).upper(),
            url=url,
            params=params,
            body_mode=self.body_mode,
            tag=tag,
            result_type=result_type,
        )
        self._canceled = False
        self._future: Future | None = None

    @property
    def request(self) -> Request:
        return self._request

    @property
    def url(self) -> str:
        return self._request.url

    @property
    def params(self) -> Params:
        return self._request.params

    @property
    def tag(self) -> Any:
        return self._request.tag

    @property
    def client(self) -> Client:
        return self._client

    @property
    def canceled(self) -> bool:
        return self._canceled

    def execute(self) -> Result[T]:
        """Execute the request on the calling thread.

        Raises:
            CallCanceled: If the call was canceled.
            TransportError: If the exchange failed.
        """
        self._check_canceled()
        return self._client.execute(self._request)

    async def aexecute(self) -> Result[T]:
        """Execute the request on the running event loop."""
        self._check_canceled()
        return await self._client.aexecute(self._request)

    def enqueue(
        self,
        on_response: Callable[[Result[T]], Any],
        on_failure: Callable[[BaseException], Any] | None = None,
    ) -> Future:
        """Execute on a transport worker thread.

        Args:
            on_response: Receives the Result once decoded.
            on_failure: Receives the exception when the exchange fails or the
                call is canceled before it starts.

        Returns:
            The Future tracking the execution.
        """
        self._check_canceled()
        future = self._client.enqueue(self._request)
        self._future = future

        def done(f: Future) -> None:
            if f.cancelled():
                error: BaseException | None = CallCanceled(f"{self._describe()} canceled")
            else:
                error = f.exception()
            if error is None:
                on_response(f.result())
            elif on_failure is not None:
                on_failure(error)
            else:
                logger.error("Unhandled failure for %s: %s", self._describe(), error)

        future.add_done_callback(done)
        return future

    def cancel(self) -> bool:
        """Cancel the call.

        Further executions raise CallCanceled. An enqueued execution that has
        not started is withdrawn.

        Returns:
            False if an enqueued execution was already running or finished.
        """
        self._canceled = True
        if self._future is not None:
            return self._future.cancel()
        return True

    def clone(self) -> Call[T]:
        """Return a fresh, uncanceled call for the same request."""
        return type(self)(
            self._client,
            self.url,
            Params(self.params.items()),
            self.tag,
            method=self._request.method,
            result_type=self._request.result_type,
        )

    def _check_canceled(self) -> None:
        if self._canceled:
            raise CallCanceled(f"{self._describe()} canceled")

    def _describe(self) -> str:
        return f"{self._request.method} {self._request.url}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._describe()}, params={self.params!r})"


__all__ = ["Call"]
