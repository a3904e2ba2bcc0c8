# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for call.registry module."""

from __future__ import annotations

import pytest

from glin.call.registry import CallRegistry
from glin.call.strategies import (
    DeleteCall,
    GetCall,
    JsonCall,
    PatchCall,
    PostCall,
    PutCall,
)
from glin.errors import RegistryFrozenError


class TestCallRegistry:
    """Tests for CallRegistry."""

    def test_default_order(self):
        """Built-in kinds are registered in a fixed order."""
        registry = CallRegistry.default()
        assert registry.known_kinds() == ("GET", "POST", "PUT", "DELETE", "PATCH", "JSON")

    def test_default_factories(self):
        """Each built-in kind maps to its call class."""
        registry = CallRegistry.default()

        assert registry.lookup("GET") is GetCall
        assert registry.lookup("POST") is PostCall
        assert registry.lookup("PUT") is PutCall
        assert registry.lookup("DELETE") is DeleteCall
        assert registry.lookup("PATCH") is PatchCall
        assert registry.lookup("JSON") is JsonCall

    def test_lookup_unknown(self):
        """Unknown kinds return None."""
        assert CallRegistry().lookup("HEAD") is None

    def test_register_normalizes_kind(self):
        """Kinds are stored upper-cased."""
        registry = CallRegistry().register("head", GetCall)
        assert "HEAD" in registry
        assert registry.lookup("HEAD") is GetCall

    def test_lookup_is_case_insensitive(self):
        """lookup and membership normalize like register."""
        registry = CallRegistry.default()

        assert registry.lookup("get") is GetCall
        assert "post" in registry
        assert 42 not in registry

    def test_replace_keeps_position(self):
        """Re-registering a kind keeps its original position."""
        registry = CallRegistry.default()
        registry.register("GET", PostCall)

        assert registry.known_kinds()[0] == "GET"
        assert registry.lookup("GET") is PostCall

    def test_frozen_registry_rejects_register(self):
        """A frozen registry is read-only."""
        registry = CallRegistry.default().freeze()

        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register("HEAD", GetCall)

    def test_copy_is_unfrozen(self):
        """copy() returns an independent open registry."""
        original = CallRegistry.default().freeze()
        copy = original.copy()
        copy.register("HEAD", GetCall)

        assert not copy.frozen
        assert "HEAD" in copy
        assert "HEAD" not in original

    def test_iteration_and_len(self):
        """Registries iterate over kinds in order."""
        registry = CallRegistry().register("GET", GetCall).register("POST", PostCall)
        assert list(registry) == ["GET", "POST"]
        assert len(registry) == 2

    def test_repr(self):
        registry = CallRegistry().register("GET", GetCall)
        assert repr(registry) == "CallRegistry(['GET'], open)"
