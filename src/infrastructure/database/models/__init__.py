# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models for ClassHub.

Importing this package registers every table on ``Base.metadata``.
"""

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    new_id,
)
from src.infrastructure.database.models.classroom import (
    ClassRole,
    Classroom,
    ClassroomMember,
)
from src.infrastructure.database.models.grading import (
    GradeStructure,
    GradeStructureDetail,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "new_id",
    "ClassRole",
    "Classroom",
    "ClassroomMember",
    "GradeStructure",
    "GradeStructureDetail",
]
