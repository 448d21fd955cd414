# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Classroom and membership models.

A classroom keeps its teacher and student sets as ``classroom_members`` rows.
``teachers_id`` and ``students_id`` expose them as id lists in join order.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)
from src.utils.datetime import utc_now


class ClassRole(str, Enum):
    """Role a member holds inside one classroom."""

    TEACHER = "teacher"
    STUDENT = "student"

    @classmethod
    def from_flag(cls, is_student: bool) -> "ClassRole":
        """Map the ``is_student`` flag used by invitations to a role."""
        return cls.STUDENT if is_student else cls.TEACHER


class Classroom(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One course section with an owner, teachers and students."""

    __tablename__ = "classrooms"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    school_year: Mapped[str | None] = mapped_column(String(32), nullable=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    class_code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)

    members: Mapped[list["ClassroomMember"]] = relationship(
        back_populates="classroom",
        cascade="all, delete-orphan",
        order_by="ClassroomMember.id",
        lazy="selectin",
    )

    def member_ids(self, role: ClassRole) -> list[str]:
        """Return the ids holding ``role`` in join order."""
        return [m.user_id for m in self.members if m.role == role]

    @property
    def teachers_id(self) -> list[str]:
        return self.member_ids(ClassRole.TEACHER)

    @property
    def students_id(self) -> list[str]:
        return self.member_ids(ClassRole.STUDENT)

    def __repr__(self) -> str:
        return f"<Classroom {self.id} code={self.class_code!r}>"


class ClassroomMember(Base):
    """A user holding a role in a classroom."""

    __tablename__ = "classroom_members"
    __table_args__ = (
        UniqueConstraint("classroom_id", "user_id", "role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    classroom_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("classrooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    classroom: Mapped[Classroom] = relationship(back_populates="members")
