# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Abstract body decoders.

A ParserFactory is injected into the transport client through
configuration. For each request the client asks the factory for a Parser
bound to the call's result type and hands it the raw response.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from glin.models import RawResponse, Result


class Parser(ABC):
    """Turns a RawResponse into a Result."""

    @abstractmethod
    def parse(self, raw: RawResponse) -> Result[Any]:
        """Decode the response.

        Decode problems must be reported as a failed Result, not raised.
        """
        ...


class ParserFactory(ABC):
    """Creates parsers bound to a result type."""

    @abstractmethod
    def create(self, result_type: Any = Any) -> Parser:
        """Return a parser producing values of ``result_type``."""
        ...


__all__ = ["Parser", "ParserFactory"]
