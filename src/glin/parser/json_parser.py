# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""JSON and plain-text parser factories.

JsonParserFactory validates the decoded payload into the call's result
type with a pydantic TypeAdapter. Optionally the payload is an envelope and
only ``data_key`` holds the value::

    {"message": "ok", "data": {"name": "qibin"}}

    JsonParserFactory(data_key="data")
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from glin.models import RawResponse, Result

from .base import Parser, ParserFactory

logger = logging.getLogger(__name__)


def _error_message(raw: RawResponse, message_key: str) -> str:
    """Best-effort server message for an error response."""
    try:
        payload = json.loads(raw.content)
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get(message_key):
        return str(payload[message_key])
    text = raw.text.strip()
    return text or raw.reason or f"HTTP {raw.status_code}"


class JsonParser(Parser):
    """Decode a JSON response into ``result_type``."""

    def __init__(self, adapter: TypeAdapter, data_key: str | None, message_key: str):
        self.adapter = adapter
        self.data_key = data_key
        self.message_key = message_key

    def parse(self, raw: RawResponse) -> Result[Any]:
        if not raw.ok:
            return Result.failure(_error_message(raw, self.message_key), raw.status_code)
        if not raw.content.strip():
            return Result.success(None, raw.status_code)

        try:
            if self.data_key is None:
                value = self.adapter.validate_json(raw.content)
            else:
                payload = json.loads(raw.content)
                if not isinstance(payload, dict) or self.data_key not in payload:
                    return Result.failure(
                        f"response has no '{self.data_key}' field", raw.status_code
                    )
                value = self.adapter.validate_python(payload[self.data_key])
        except (ValueError, ValidationError) as exc:
            logger.debug("Decode failed for %s: %s", raw.url, exc)
            return Result.failure(f"cannot decode response: {exc}", raw.status_code)

        return Result.success(value, raw.status_code)


class JsonParserFactory(ParserFactory):
    """Factory of JsonParser instances, one TypeAdapter per result type.

    Args:
        data_key: Envelope field holding the value. None decodes the whole body.
        message_key: Field read for the error message of non-2xx responses.
    """

    def __init__(self, data_key: str | None = None, message_key: str = "message"):
        self.data_key = data_key
        self.message_key = message_key
        self._adapters: dict[Any, TypeAdapter] = {}

    def _adapter(self, result_type: Any) -> TypeAdapter:
        try:
            adapter = self._adapters.get(result_type)
        except TypeError:
            # Unhashable type expression
            return TypeAdapter(result_type)
        if adapter is None:
            adapter = self._adapters[result_type] = TypeAdapter(result_type)
        return adapter

    def create(self, result_type: Any = Any) -> Parser:
        return JsonParser(self._adapter(result_type), self.data_key, self.message_key)


class TextParser(Parser):
    """Return the response body as text."""

    def parse(self, raw: RawResponse) -> Result[Any]:
        if not raw.ok:
            return Result.failure(raw.text.strip() or raw.reason or f"HTTP {raw.status_code}",
                                  raw.status_code)
        return Result.success(raw.text, raw.status_code)


class TextParserFactory(ParserFactory):
    """Factory ignoring the result type and returning body text."""

    def create(self, result_type: Any = Any) -> Parser:
        return TextParser()


__all__ = ["JsonParser", "JsonParserFactory", "TextParser", "TextParserFactory"]
