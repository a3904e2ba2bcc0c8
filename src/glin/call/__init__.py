# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Calls: deferred requests, built-in strategies and their registry."""

from glin.models import Result

from .base import Call
from .registry import CallFactory, CallRegistry
from .strategies import DeleteCall, GetCall, JsonCall, PatchCall, PostCall, PutCall

__all__ = [
    "Call",
    "CallFactory",
    "CallRegistry",
    "DeleteCall",
    "GetCall",
    "JsonCall",
    "PatchCall",
    "PostCall",
    "PutCall",
    "Result",
]
