# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tagged results for classroom operations.

Expected business-rule failures (missing classroom, duplicate membership,
owner removal, unusable token) are routine, so they come back as an outcome
instead of an exception. A failed result is falsy:

    result = await service.add_member(class_id, user_id, is_student=True)
    if not result:
        ...  # result.outcome says why
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from src.infrastructure.database.models import Classroom


class Outcome(str, Enum):
    """Why a classroom operation did or did not apply."""

    OK = "ok"
    NOT_FOUND = "not_found"
    ALREADY_MEMBER = "already_member"
    OWNER_PROTECTED = "owner_protected"
    CODE_CONFLICT = "code_conflict"
    INVALID_TOKEN = "invalid_token"

    @property
    def is_conflict(self) -> bool:
        return self in (
            Outcome.ALREADY_MEMBER,
            Outcome.OWNER_PROTECTED,
            Outcome.CODE_CONFLICT,
        )


@dataclass(frozen=True)
class ClassroomResult:
    """Outcome of a classroom operation.

    Attributes:
        outcome: Result tag.
        classroom: The persisted classroom when outcome is OK.
    """

    outcome: Outcome
    classroom: Optional["Classroom"] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, classroom: "Classroom") -> "ClassroomResult":
        return cls(Outcome.OK, classroom)

    @classmethod
    def failure(cls, outcome: Outcome) -> "ClassroomResult":
        if outcome is Outcome.OK:
            raise ValueError("A failure needs a non-OK outcome")
        return cls(outcome)
