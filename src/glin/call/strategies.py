# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Built-in call strategies, one per tag kind."""

from __future__ import annotations

from typing import TypeVar

from .base import Call

T = TypeVar("T")


class GetCall(Call[T]):
    """GET with the bag as query string."""

    method = "GET"
    body_mode = "query"


class DeleteCall(Call[T]):
    """DELETE with the bag as query string."""

    method = "DELETE"
    body_mode = "query"


class PostCall(Call[T]):
    """POST with the bag as form fields."""

    method = "POST"
    body_mode = "form"


class PutCall(Call[T]):
    """PUT with the bag as form fields."""

    method = "PUT"
    body_mode = "form"


class PatchCall(Call[T]):
    """PATCH with the bag as form fields."""

    method = "PATCH"
    body_mode = "form"


class JsonCall(Call[T]):
    """Single argument sent as JSON body.

    The verb comes from the method's verb tag and defaults to POST.
    """

    method = "POST"
    body_mode = "json"


__all__ = ["DeleteCall", "GetCall", "JsonCall", "PatchCall", "PostCall", "PutCall"]
