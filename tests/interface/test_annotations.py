# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for interface.annotations module."""

from __future__ import annotations

import pytest

from glin.interface.annotations import (
    GET,
    JSON,
    JSON_KIND,
    POST,
    Arg,
    MethodTag,
    args,
    declared_args,
    http_tag,
    method_tags,
)


class TestVerbDecorators:
    """Tests for GET/POST/... decorators."""

    def test_attaches_tag(self):
        """POST should store a (POST, path) tag on the function."""

        @POST("/users/list")
        def method(self):
            pass

        assert method_tags(method) == (MethodTag("POST", "/users/list"),)

    def test_preserves_function(self):
        """Decorators should return the same function object."""

        def method(self):
            pass

        assert GET("/x")(method) is method
        assert method.__name__ == "method"

    def test_tags_in_declaration_order(self):
        """Stacked decorators should read top-down."""

        @GET("/one")
        @POST("/two")
        def method(self):
            pass

        assert [t.kind for t in method_tags(method)] == ["GET", "POST"]

    def test_http_tag_normalizes_kind(self):
        """Custom kinds should be upper-cased."""

        @http_tag("head", "/ping")
        def method(self):
            pass

        assert method_tags(method) == (MethodTag("HEAD", "/ping"),)

    def test_non_string_path_rejected(self):
        """Paths must be strings."""
        with pytest.raises(TypeError):
            GET(42)  # type: ignore[arg-type]

    def test_untagged_function_has_no_tags(self):
        """Plain functions have an empty tag tuple."""

        def method(self):
            pass

        assert method_tags(method) == ()


class TestJsonDecorator:
    """Tests for the JSON body tag."""

    def test_bare_usage(self):
        """@JSON without parentheses marks the method."""

        @JSON
        @POST("/users/create")
        def method(self, user):
            pass

        kinds = [t.kind for t in method_tags(method)]
        assert kinds == [JSON_KIND, "POST"]

    def test_called_usage(self):
        """@JSON() behaves like @JSON."""

        @JSON()
        @POST("/users/create")
        def method(self, user):
            pass

        assert method_tags(method)[0] == MethodTag(JSON_KIND, "")


class TestArgs:
    """Tests for Arg and the args decorator."""

    def test_arg_is_value_object(self):
        """Arg instances with the same name compare equal."""
        assert Arg("name") == Arg("name")
        assert Arg("name") != Arg("other")

    def test_args_decorator(self):
        """args should store positional Arg tags."""

        @args("page", "size")
        def method(self, page, size):
            pass

        assert declared_args(method) == (Arg("page"), Arg("size"))

    def test_declared_args_default_none(self):
        """Functions without args decorator return None."""

        def method(self):
            pass

        assert declared_args(method) is None
