# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for interface.params module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from glin.errors import ArityMismatch, MissingParameterTag
from glin.interface.descriptor import describe_interface
from glin.interface.params import Params, build_params
from tests.sample_api import AdminBiz, BrokenBiz, User, UserBiz


def _descriptor(interface, name):
    return describe_interface(interface)[name]


class TestParams:
    """Tests for the Params bag."""

    def test_add_is_chainable_and_ordered(self):
        """Entries keep insertion order, duplicates allowed."""
        params = Params().add("a", 1).add("b", 2).add("a", 3)

        assert params == [("a", 1), ("b", 2), ("a", 3)]
        assert params.keys() == ["a", "b"]
        assert params.get("a") == 1
        assert params.get_all("a") == [1, 3]
        assert len(params) == 3

    def test_get_default(self):
        """Missing keys return the default."""
        assert Params().get("missing", "x") == "x"

    def test_contains(self):
        """Membership tests keys."""
        params = Params([("name", "qibin")])
        assert "name" in params
        assert "age" not in params

    def test_equality_between_bags(self):
        """Two bags with the same entries compare equal."""
        assert Params([("a", 1)]) == Params([("a", 1)])
        assert Params([("a", 1)]) != Params([("a", 2)])

    def test_unhashable(self):
        """Mutable bags are not hashable."""
        with pytest.raises(TypeError):
            hash(Params())

    def test_body_bag(self):
        """A single __body__ entry is a body bag."""
        user = User(name="qibin")
        params = Params().add(Params.DEFAULT_JSON_KEY, user)

        assert params.is_body
        assert params.body is user
        assert not Params([("name", "qibin")]).is_body

    def test_encoded_expands_sequences_and_drops_none(self):
        """Lists become repeated keys, None values disappear."""
        params = Params([("tag", ["a", "b"]), ("skip", None), ("page", 2)])
        assert params.encoded() == [("tag", "a"), ("tag", "b"), ("page", 2)]

    def test_repr(self):
        """repr shows the entries."""
        assert repr(Params([("a", 1)])) == "Params([('a', 1)])"


class TestBuildParams:
    """Tests for build_params on tagged methods."""

    def test_single_tagged_argument(self):
        """One tagged parameter yields one entry."""
        params = build_params(_descriptor(UserBiz, "list"), ("qibin",))
        assert params == [("name", "qibin")]

    def test_keyword_arguments(self):
        """Keyword arguments bind like positional ones."""
        params = build_params(_descriptor(UserBiz, "list"), (), {"name": "qibin"})
        assert params == [("name", "qibin")]

    def test_declared_order_with_defaults(self):
        """Entries follow declaration order; defaults are applied."""
        params = build_params(_descriptor(UserBiz, "search"), (), {"query": "qi"})
        assert params == [("q", "qi"), ("page", 1)]

    def test_explicit_args_with_repeated_names(self):
        """args decorator allows repeated keys."""
        params = build_params(_descriptor(UserBiz, "label"), ("qibin", "red", "blue"))
        assert params == [("name", "qibin"), ("label", "red"), ("label", "blue")]

    def test_no_parameters(self):
        """Parameterless methods build an empty bag."""
        assert build_params(_descriptor(UserBiz, "count")) == []

    def test_unexpected_arguments_on_parameterless_method(self):
        """Arguments given to a parameterless method are rejected."""
        with pytest.raises(ArityMismatch):
            build_params(_descriptor(UserBiz, "count"), ("x",))

    def test_validation_coerces(self):
        """Arguments are coerced through the arguments model."""
        params = build_params(_descriptor(AdminBiz, "purge"), ("5",))
        assert params == [("before", 5)]

    def test_validation_error(self):
        """Invalid arguments raise pydantic ValidationError."""
        with pytest.raises(ValidationError):
            build_params(_descriptor(UserBiz, "search"), ("qi", "not-a-page"))

    def test_validation_disabled(self):
        """validate=False passes values through untouched."""
        params = build_params(_descriptor(AdminBiz, "purge"), ("5",), validate=False)
        assert params == [("before", "5")]

    def test_missing_tag(self):
        """Untagged parameters raise MissingParameterTag."""
        with pytest.raises(MissingParameterTag, match="missing_arg"):
            build_params(_descriptor(BrokenBiz, "missing_arg"), ("qibin",))

    def test_tag_count_mismatch(self):
        """args decorator with too few names raises ArityMismatch."""
        with pytest.raises(ArityMismatch):
            build_params(_descriptor(BrokenBiz, "too_few_tags"), ("qibin", 3))

    def test_unbindable_arguments(self):
        """Too many arguments raise ArityMismatch."""
        with pytest.raises(ArityMismatch):
            build_params(_descriptor(UserBiz, "list"), ("a", "b"))

    def test_missing_required_argument(self):
        """Missing required arguments raise ArityMismatch."""
        with pytest.raises(ArityMismatch):
            build_params(_descriptor(UserBiz, "list"))

    def test_fresh_bag_per_invocation(self):
        """Each call gets its own Params instance."""
        descriptor = _descriptor(UserBiz, "list")
        first = build_params(descriptor, ("a",))
        second = build_params(descriptor, ("b",))

        assert first is not second
        assert first == [("name", "a")]
        assert second == [("name", "b")]


class TestBuildBodyParams:
    """Tests for build_params on JSON body methods."""

    def test_body_entry(self):
        """The single argument becomes the __body__ entry."""
        user = User(name="qibin", age=3)
        params = build_params(_descriptor(UserBiz, "create"), (user,))

        assert params == [("__body__", user)]
        assert params.body is user

    def test_body_validated_from_dict(self):
        """A dict body is validated into the annotated model."""
        params = build_params(_descriptor(UserBiz, "create"), ({"name": "qibin"},))
        assert params.body == User(name="qibin")

    def test_strict_rejects_extra_parameters(self):
        """Strict mode rejects body methods with several parameters."""
        with pytest.raises(ArityMismatch):
            build_params(_descriptor(BrokenBiz, "body_with_extra"), (User(name="a"), "x"))

    def test_lenient_ignores_extra_parameters(self):
        """Lenient mode keeps only the first argument."""
        user = User(name="a")
        params = build_params(
            _descriptor(BrokenBiz, "body_with_extra"), (user, "x"), strict=False
        )
        assert params == [("__body__", user)]

    def test_lenient_without_arguments(self):
        """Lenient mode builds an empty bag when nothing is passed."""
        params = build_params(_descriptor(BrokenBiz, "body_with_extra"), strict=False)
        assert params == []
