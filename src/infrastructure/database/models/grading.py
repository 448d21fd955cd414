# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade structure models.

Each classroom has at most one ``GradeStructure`` (unique ``class_id``). Its
details are kept in creation order through the ``position`` column.
"""

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class GradeStructure(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Per-classroom rubric summary."""

    __tablename__ = "grade_structures"

    class_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("classrooms.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    details: Mapped[list["GradeStructureDetail"]] = relationship(
        back_populates="grade_structure",
        cascade="all, delete-orphan",
        order_by="GradeStructureDetail.position",
        lazy="selectin",
    )

    @property
    def grade_structure_detail_ids(self) -> list[str]:
        """Detail ids in creation order."""
        return [detail.id for detail in self.details]

    @property
    def next_position(self) -> int:
        if not self.details:
            return 0
        return max(detail.position for detail in self.details) + 1


class GradeStructureDetail(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One weighted rubric line item."""

    __tablename__ = "grade_structure_details"

    grade_structure_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("grade_structures.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    point: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    grade_structure: Mapped[GradeStructure] = relationship(back_populates="details")
