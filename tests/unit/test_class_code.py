# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for class code generation."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domains.class_.code import (
    CLASS_CODE_ALPHABET,
    ClassCodeGenerator,
    random_class_code,
)


def _lookup_result(found: bool) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = "existing-id" if found else None
    return result


@pytest.fixture
def mock_db() -> AsyncMock:
    """Create mock database session."""
    db = AsyncMock()
    db.execute = AsyncMock(return_value=_lookup_result(False))
    return db


class TestRandomClassCode:
    """Tests for random_class_code."""

    def test_default_length_and_alphabet(self) -> None:
        code = random_class_code()

        assert len(code) == 8
        assert set(code) <= set(CLASS_CODE_ALPHABET)

    def test_custom_length(self) -> None:
        assert len(random_class_code(12)) == 12


class TestClassCodeGenerator:
    """Tests for ClassCodeGenerator."""

    @pytest.mark.asyncio
    async def test_first_free_candidate_is_used(self, mock_db: AsyncMock) -> None:
        generator = ClassCodeGenerator(mock_db, candidates=lambda _: "ABCDEFGH")

        code = await generator.generate_unique_class_code()

        assert code == "ABCDEFGH"
        mock_db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_taken_candidates_are_skipped(self, mock_db: AsyncMock) -> None:
        """Test that every collision triggers a fresh lookup and a new draw."""
        candidates = iter(["TAKEN001", "TAKEN002", "FREE0003"])
        mock_db.execute = AsyncMock(
            side_effect=[
                _lookup_result(True),
                _lookup_result(True),
                _lookup_result(False),
            ]
        )
        generator = ClassCodeGenerator(mock_db, candidates=lambda _: next(candidates))

        code = await generator.generate_unique_class_code()

        assert code == "FREE0003"
        assert mock_db.execute.await_count == 3

    @pytest.mark.asyncio
    async def test_length_is_passed_to_candidates(self, mock_db: AsyncMock) -> None:
        lengths: list[int] = []

        def candidates(length: int) -> str:
            lengths.append(length)
            return "x" * length

        generator = ClassCodeGenerator(mock_db, length=6, candidates=candidates)

        assert await generator.generate_unique_class_code() == "xxxxxx"
        assert lengths == [6]

    @pytest.mark.asyncio
    async def test_is_taken(self, mock_db: AsyncMock) -> None:
        mock_db.execute = AsyncMock(return_value=_lookup_result(True))
        generator = ClassCodeGenerator(mock_db)

        assert await generator.is_taken("ABCDEFGH") is True
