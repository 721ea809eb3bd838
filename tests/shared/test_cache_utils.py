"""Tests for cache key derivation."""

from __future__ import annotations

import hashlib
import re

import pytest

from kitchensync.shared.cache_utils import (
    canonical_list,
    canonical_text,
    derive_cache_key,
    serialize_key_fields,
)

KEY_PATTERN = re.compile(r"^groceries:[0-9a-f]{64}$")


class TestCanonicalText:
    """Test free-text canonicalization."""

    def test_none_and_blank_become_empty(self) -> None:
        assert canonical_text(None) == ""
        assert canonical_text("   ") == ""

    def test_trims_collapses_and_casefolds(self) -> None:
        assert canonical_text("  Whole   MILK\t") == "whole milk"

    def test_case_sensitive_mode_keeps_case(self) -> None:
        assert canonical_text("  Whole   MILK ", case_insensitive=False) == "Whole MILK"


class TestCanonicalList:
    """Test list canonicalization."""

    def test_empty_inputs(self) -> None:
        assert canonical_list(None) == []
        assert canonical_list([]) == []
        assert canonical_list(["", "  "]) == []

    def test_dedupes_and_sorts(self) -> None:
        assert canonical_list(["Gluten", "dairy", " gluten "]) == ["dairy", "gluten"]

    def test_comma_string_equals_list(self) -> None:
        assert canonical_list("dairy, gluten") == canonical_list(["Gluten", "dairy"])

    def test_non_strings_are_dropped(self) -> None:
        assert canonical_list(["egg", 3, None]) == ["egg"]  # type: ignore[list-item]


class TestDeriveCacheKey:
    """Test namespaced key derivation."""

    def test_empty_namespace_rejected(self) -> None:
        with pytest.raises(ValueError, match="namespace"):
            derive_cache_key("", {"query": "milk"})

    def test_key_format(self) -> None:
        key = derive_cache_key("groceries", {"query": "milk", "number": 12})

        assert KEY_PATTERN.match(key)

    def test_equal_requests_equal_keys(self) -> None:
        """Canonically equal requests derive the same key."""
        first = derive_cache_key(
            "ingredients",
            {"query": canonical_text(" Apple "), "intolerances": canonical_list(["Dairy", "gluten"])},
        )
        second = derive_cache_key(
            "ingredients",
            {"query": canonical_text("apple"), "intolerances": canonical_list("gluten,dairy")},
        )

        assert first == second

    def test_different_requests_different_keys(self) -> None:
        assert derive_cache_key("groceries", {"query": "milk"}) != derive_cache_key(
            "groceries",
            {"query": "cheese"},
        )

    def test_namespace_separates_domains(self) -> None:
        fields = {"query": "milk"}

        assert derive_cache_key("groceries", fields) != derive_cache_key("ingredients", fields)

    def test_field_order_is_part_of_the_key(self) -> None:
        first = derive_cache_key("groceries", {"query": "milk", "number": 12})
        second = derive_cache_key("groceries", {"number": 12, "query": "milk"})

        assert first != second

    def test_key_is_stable_across_processes(self) -> None:
        """The key depends only on the serialized fields, never on process state."""
        assert serialize_key_fields({"query": "milk", "number": 12}) == '{"query":"milk","number":12}'
        assert derive_cache_key("groceries", {"query": "milk", "number": 12}) == (
            "groceries:"
            + hashlib.sha256(b'{"query":"milk","number":12}').hexdigest()
        )

    def test_non_ascii_is_serialized_verbatim(self) -> None:
        assert serialize_key_fields({"query": "crème fraîche"}) == '{"query":"crème fraîche"}'
