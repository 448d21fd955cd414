# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for identifier normalization."""

from uuid import UUID

import pytest

from src.utils.identifiers import normalize_id, same_id

RAW = "550e8400-e29b-41d4-a716-446655440001"


class TestNormalizeId:
    """Tests for normalize_id."""

    def test_uuid_object(self) -> None:
        assert normalize_id(UUID(RAW)) == RAW

    def test_uppercase_uuid_string(self) -> None:
        assert normalize_id(RAW.upper()) == RAW

    def test_surrounding_whitespace(self) -> None:
        assert normalize_id(f"  {RAW}\n") == RAW

    def test_non_uuid_strings_are_kept(self) -> None:
        """Test that opaque ids are only stripped."""
        assert normalize_id(" u1 ") == "u1"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_is_rejected(self, value: str) -> None:
        with pytest.raises(ValueError):
            normalize_id(value)


class TestSameId:
    """Tests for same_id."""

    def test_uuid_and_string_match(self) -> None:
        assert same_id(UUID(RAW), RAW.upper()) is True

    def test_different_ids(self) -> None:
        assert same_id("u1", "u2") is False
