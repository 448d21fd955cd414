# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class code generation.

Class codes are short alphanumeric strings students type in to join. A
candidate is accepted once a fresh query shows no classroom holds it. With
62**8 possible codes a retry is rare, so there is no retry limit here; the
unique constraint on ``classrooms.class_code`` settles the race between the
check and the insert.
"""

import logging
import secrets
import string
from typing import Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import Classroom

logger = logging.getLogger(__name__)

CLASS_CODE_ALPHABET = string.ascii_letters + string.digits
DEFAULT_CODE_LENGTH = 8


def random_class_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    """Return a random alphanumeric code of ``length`` characters."""
    return "".join(secrets.choice(CLASS_CODE_ALPHABET) for _ in range(length))


class ClassCodeGenerator:
    """Produces class codes no existing classroom holds.

    Attributes:
        db: Async database session.
    """

    def __init__(
        self,
        db: AsyncSession,
        length: int = DEFAULT_CODE_LENGTH,
        candidates: Callable[[int], str] = random_class_code,
    ) -> None:
        """Initialize the generator.

        Args:
            db: Async database session.
            length: Code length.
            candidates: Source of candidate codes, given the length.
        """
        self.db = db
        self.length = length
        self._candidates = candidates

    async def generate_unique_class_code(self) -> str:
        """Draw candidates until one is not held by any classroom."""
        attempts = 0
        while True:
            attempts += 1
            code = self._candidates(self.length)
            if not await self.is_taken(code):
                if attempts > 1:
                    logger.info("Class code found after %d attempts", attempts)
                return code

    async def is_taken(self, code: str) -> bool:
        """Check the store, never a cache, for a classroom holding ``code``."""
        result = await self.db.execute(
            select(Classroom.id).where(Classroom.class_code == code).limit(1)
        )
        return result.scalar_one_or_none() is not None
