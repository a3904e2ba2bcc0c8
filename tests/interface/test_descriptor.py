# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for interface.descriptor module."""

from __future__ import annotations

from typing import Any

import pytest

from glin.interface.annotations import Arg, MethodTag
from glin.interface.descriptor import InterfaceDescription, describe_interface, describe_method
from tests.sample_api import AdminBiz, BrokenBiz, User, UserBiz


class TestDescribeMethod:
    """Tests for describe_method."""

    def test_tags_and_param_tags(self):
        """Descriptor should carry method tags and Annotated Arg tags."""
        descriptor = describe_method(UserBiz.list)

        assert descriptor.name == "list"
        assert descriptor.tags == (MethodTag("POST", "/users/list"),)
        assert descriptor.param_names == ("name",)
        assert descriptor.param_tags == (Arg("name"),)
        assert descriptor.explicit_args is None

    def test_self_excluded_from_signature(self):
        """The signature should not contain self."""
        descriptor = describe_method(UserBiz.search)
        assert list(descriptor.signature.parameters) == ["query", "page"]

    def test_result_type_from_call_annotation(self):
        """Call[T] return annotation yields T."""
        assert describe_method(UserBiz.list).result_type is User
        assert describe_method(UserBiz.search).result_type == list[User]

    def test_result_type_defaults_to_any(self):
        """Methods without return annotation decode into Any."""
        assert describe_method(UserBiz.raw).result_type is Any

    def test_body_flag(self):
        """JSON-tagged methods are body methods."""
        assert describe_method(UserBiz.create).body is True
        assert describe_method(UserBiz.list).body is False

    def test_tag_value(self):
        """tag_value returns the path of a kind, None when absent."""
        descriptor = describe_method(UserBiz.create)
        assert descriptor.tag_value("POST") == "/users/create"
        assert descriptor.tag_value("GET") is None

    def test_explicit_args_align_with_parameters(self):
        """args decorator tags map positionally, missing slots are None."""
        descriptor = describe_method(BrokenBiz.too_few_tags)
        assert descriptor.explicit_args == (Arg("name"),)
        assert descriptor.param_tags == (Arg("name"), None)

    def test_missing_tag_is_none(self):
        """Unannotated parameters have no tag."""
        assert describe_method(BrokenBiz.missing_arg).param_tags == (None,)

    def test_arguments_model_fields(self):
        """Argument model mirrors the signature, defaults included."""
        model = describe_method(UserBiz.search).arguments_model

        assert model is not None
        assert model.__name__ == "SearchArguments"
        assert model.model_fields["query"].is_required()
        assert not model.model_fields["page"].is_required()

    def test_no_arguments_model_for_private_names(self):
        """Leading-underscore parameters cannot be model fields."""

        def method(self, _hidden):
            pass

        assert describe_method(method).arguments_model is None

    def test_qualname(self):
        """qualname identifies the interface method."""
        assert describe_method(UserBiz.list).qualname == "UserBiz.list"


class TestDescribeInterface:
    """Tests for describe_interface."""

    def test_collects_public_functions(self):
        """All public functions become descriptors."""
        description = describe_interface(UserBiz)

        assert isinstance(description, InterfaceDescription)
        assert set(description) == {
            "list", "create", "update", "search", "remove",
            "rename", "label", "count", "raw",
        }

    def test_is_cached(self):
        """Descriptions are built once per interface type."""
        assert describe_interface(UserBiz) is describe_interface(UserBiz)

    def test_inherited_and_overridden(self):
        """Subclass overrides win; private helpers are skipped."""
        description = describe_interface(AdminBiz)

        assert description["list"].tag_value("GET") == "/admin/users"
        assert "create" in description
        assert "purge" in description
        assert "_helper" not in description

    def test_rejects_non_class(self):
        """Only classes can be described."""
        with pytest.raises(TypeError):
            describe_interface(UserBiz())  # type: ignore[arg-type]

    def test_mapping_interface(self):
        """InterfaceDescription behaves like a read-only mapping."""
        description = describe_interface(UserBiz)
        assert len(description) == 9
        assert description["count"].param_names == ()
        assert description.interface is UserBiz
