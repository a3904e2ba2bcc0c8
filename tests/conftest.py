# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: an in-memory recording transport and Glin instances.

RecordingClient never touches the network: it records every Request and
answers with a canned RawResponse. A ``gate`` event lets tests hold
enqueued requests on the worker thread.
"""

from __future__ import annotations

import json
import threading
from typing import Any

import pytest

from glin import Glin, GlinConfig
from glin.client.base import Client
from glin.errors import TransportError
from glin.models import RawResponse, Request


class RecordingClient(Client):
    """Client recording requests and returning a fixed response."""

    def __init__(self, status_code: int = 200, payload: Any = None, fail: bool = False):
        super().__init__(max_workers=1)
        self.requests: list[Request] = []
        self.status_code = status_code
        self.payload = payload
        self.fail = fail
        self.gate = threading.Event()
        self.gate.set()
        self.started = threading.Event()

    def _send(self, request: Request) -> RawResponse:
        self.started.set()
        self.gate.wait(timeout=5)
        self.requests.append(request)
        if self.fail:
            raise TransportError("connection refused", request.url)
        content = b"" if self.payload is None else json.dumps(self.payload).encode()
        return RawResponse(self.status_code, content, url=request.url)

    async def _asend(self, request: Request) -> RawResponse:
        return self._send(request)


@pytest.fixture
def recording_client():
    """Recording client answering 200 with an empty body."""
    client = RecordingClient()
    yield client
    client.gate.set()
    client.close()


@pytest.fixture
def glin(recording_client):
    """Strict Glin over the recording client."""
    return Glin(GlinConfig(client=recording_client, base_url="http://192.168.201.39"))


@pytest.fixture
def lenient_glin(recording_client):
    """Lenient Glin: first verb tag wins, extra body arguments ignored."""
    return Glin(
        GlinConfig(client=recording_client, base_url="http://192.168.201.39", strict=False)
    )
