# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""httpx-based transport client.

Serialization by body mode:
    query: bag entries become query string parameters (GET, DELETE)
    form: bag entries become url-encoded form fields (POST, PUT, PATCH)
    json: the ``__body__`` entry is encoded as the JSON request body

List values expand into repeated keys and None values are dropped.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic_core import to_jsonable_python

from glin.errors import TransportError
from glin.models import RawResponse, Request

from .base import Client


def _form_data(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """Fold repeated keys into lists, the shape httpx expects for ``data``."""
    form: dict[str, Any] = {}
    for key, value in pairs:
        if key not in form:
            form[key] = value
        elif isinstance(form[key], list):
            form[key].append(value)
        else:
            form[key] = [form[key], value]
    return form


def _raw_response(response: httpx.Response) -> RawResponse:
    return RawResponse(
        status_code=response.status_code,
        content=response.content,
        headers=dict(response.headers),
        url=str(response.request.url),
        reason=response.reason_phrase,
    )


class HttpxClient(Client):
    """Transport backed by ``httpx.Client`` and ``httpx.AsyncClient``.

    Clients are created lazily on first use unless provided. Provided
    clients are not closed by ``close``/``aclose``.

    Args:
        client: Pre-configured sync client (e.g. ``fastapi.testclient.TestClient``).
        async_client: Pre-configured async client.
        headers: Default headers for lazily created clients.
        max_workers: Thread pool size for ``enqueue``.

    Example:
        ::

            with HttpxClient(headers={"User-Agent": "glin"}) as client:
                glin = Glin(GlinConfig(client=client, base_url="https://api.example.com"))
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        async_client: httpx.AsyncClient | None = None,
        *,
        headers: dict[str, str] | None = None,
        max_workers: int = 4,
    ):
        super().__init__(max_workers=max_workers)
        self.headers = dict(headers or {})
        self._client = client
        self._async_client = async_client
        self._owns_client = client is None
        self._owns_async_client = async_client is None

    @property
    def client(self) -> httpx.Client:
        """Get or create the sync HTTP client."""
        if self._client is None:
            self._client = httpx.Client(**self._client_options())
        return self._client

    @property
    def async_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._async_client is None:
            self._async_client = httpx.AsyncClient(**self._client_options())
        return self._async_client

    def _client_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"headers": self.headers}
        if self.current_timeout is not None:
            options["timeout"] = self.current_timeout
        return options

    def request_options(self, request: Request) -> dict[str, Any]:
        """Keyword arguments for ``httpx.Client.request``."""
        options: dict[str, Any] = {}
        if request.body_mode == "json":
            if request.params.is_body:
                options["json"] = to_jsonable_python(request.params.body)
        elif request.body_mode == "form":
            options["data"] = _form_data(request.params.encoded())
        else:
            options["params"] = request.params.encoded()
        if self.current_timeout is not None:
            options["timeout"] = self.current_timeout
        return options

    def _send(self, request: Request) -> RawResponse:
        try:
            response = self.client.request(
                request.method, request.url, **self.request_options(request)
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"{request.method} {request.url}: {exc}", request.url) from exc
        return _raw_response(response)

    async def _asend(self, request: Request) -> RawResponse:
        try:
            response = await self.async_client.request(
                request.method, request.url, **self.request_options(request)
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"{request.method} {request.url}: {exc}", request.url) from exc
        return _raw_response(response)

    def close(self) -> None:
        """Close the worker pool and the owned sync client."""
        super().close()
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    async def aclose(self) -> None:
        """Close the owned async client."""
        if self._owns_async_client and self._async_client is not None:
            await self._async_client.aclose()
            self._async_client = None


__all__ = ["HttpxClient"]
