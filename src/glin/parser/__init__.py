# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Response body decoders."""

from .base import Parser, ParserFactory
from .json_parser import JsonParser, JsonParserFactory, TextParser, TextParserFactory

__all__ = [
    "JsonParser",
    "JsonParserFactory",
    "Parser",
    "ParserFactory",
    "TextParser",
    "TextParserFactory",
]
