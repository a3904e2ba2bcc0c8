# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Value objects exchanged between calls, transports and parsers.

- Request: fully resolved request descriptor produced by a Call
- RawResponse: undecoded transport response handed to a Parser
- Result: decoded outcome delivered to the caller
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar

if TYPE_CHECKING:
    from glin.interface.params import Params

T = TypeVar("T")

BodyMode = Literal["query", "form", "json"]


@dataclass(frozen=True)
class Request:
    """Encapsulates everything a transport needs to perform one exchange.

    Attributes:
        method: HTTP verb.
        url: Absolute URL (base URL + path fragment).
        params: Parameter bag of the call.
        body_mode: How the bag is serialized: query string, form fields or
            a JSON body.
        tag: Opaque caller tag used for cancellation grouping.
        result_type: Type the parser decodes the response into.
    """

    method: str
    url: str
    params: Params
    body_mode: BodyMode = "query"
    tag: Any = None
    result_type: Any = Any


@dataclass(frozen=True)
class RawResponse:
    """Undecoded response returned by a transport."""

    status_code: int
    content: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an executed call.

    Attributes:
        ok: True when the server answered with success and the body decoded.
        value: Decoded value (None on failure).
        message: Failure description, empty on success.
        status_code: HTTP status, None when unknown.

    Example:
        ::

            result = biz.list("qibin").execute()
            if result.is_ok():
                print(result.value.name)
            else:
                print(result.message)
    """

    ok: bool
    value: T | None = None
    message: str = ""
    status_code: int | None = None

    def is_ok(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: T | None = None, status_code: int | None = None) -> Result[T]:
        return cls(ok=True, value=value, status_code=status_code)

    @classmethod
    def failure(cls, message: str, status_code: int | None = None) -> Result[T]:
        return cls(ok=False, message=message, status_code=status_code)


__all__ = ["BodyMode", "RawResponse", "Request", "Result"]
