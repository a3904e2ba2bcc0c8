# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""glin: declarative HTTP interfaces resolved into deferred calls."""

from .call import Call, CallRegistry, Result
from .client import Client, HttpxClient
from .errors import (
    AmbiguousVerbTag,
    ArityMismatch,
    CallCanceled,
    GlinError,
    IllegalConfigurationOrder,
    MissingParameterTag,
    MissingVerbTag,
    NoRecognizedTag,
    TransportError,
    UnknownStrategy,
    UnsupportedOperation,
)
from .glin_base import Builder, Glin, GlinConfig, config_from_env
from .interface import DELETE, GET, JSON, PATCH, POST, PUT, Arg, Params, args, http_tag
from .parser import JsonParserFactory, ParserFactory, TextParserFactory

__version__ = "0.1.0"

__all__ = [
    "DELETE",
    "GET",
    "JSON",
    "PATCH",
    "POST",
    "PUT",
    "AmbiguousVerbTag",
    "Arg",
    "ArityMismatch",
    "Builder",
    "Call",
    "CallCanceled",
    "CallRegistry",
    "Client",
    "Glin",
    "GlinConfig",
    "GlinError",
    "HttpxClient",
    "IllegalConfigurationOrder",
    "JsonParserFactory",
    "MissingParameterTag",
    "MissingVerbTag",
    "NoRecognizedTag",
    "Params",
    "ParserFactory",
    "Result",
    "TextParserFactory",
    "TransportError",
    "UnknownStrategy",
    "UnsupportedOperation",
    "args",
    "config_from_env",
    "http_tag",
]
