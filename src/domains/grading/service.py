# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade structure service for classroom rubrics.

This module provides the GradeStructureService class for:
- Reading a classroom's grade structure
- Adding, updating and removing grade structure details

A classroom has at most one grade structure. It is created the first time a
detail is added, through an insert that the unique ``class_id`` constraint
arbitrates, so concurrent first additions still end up sharing one structure.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import (
    Classroom,
    GradeStructure,
    GradeStructureDetail,
    new_id,
)
from src.infrastructure.database.upsert import insert_ignoring_conflict
from src.models.grading import GradeDetailCreateRequest, GradeDetailUpdateRequest
from src.utils.identifiers import Identifier, normalize_id

logger = logging.getLogger(__name__)


class GradeStructureService:
    """Service for per-classroom grade structures.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize grade structure service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def get_grade_structure(self, class_id: Identifier) -> GradeStructure | None:
        """Get a classroom's grade structure.

        Args:
            class_id: Classroom identifier.

        Returns:
            The structure with its details in creation order, or None if the
            classroom has no rubric yet.
        """
        query = (
            select(GradeStructure)
            .where(GradeStructure.class_id == normalize_id(class_id))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def add_grade_detail(
        self,
        class_id: Identifier,
        request: GradeDetailCreateRequest,
    ) -> GradeStructureDetail | None:
        """Append a detail to a classroom's grade structure.

        Creates the structure first if the classroom has none.

        Args:
            class_id: Classroom identifier.
            request: Detail data.

        Returns:
            The created detail, or None if the classroom does not exist.
        """
        class_id = normalize_id(class_id)
        if not await self._classroom_exists(class_id):
            logger.info("Add grade detail rejected: classroom %s not found", class_id)
            return None

        structure = await self._get_or_create_structure(class_id)

        detail = GradeStructureDetail(
            id=new_id(),
            title=request.title,
            description=request.description,
            point=request.point,
            position=structure.next_position,
        )
        structure.details.append(detail)
        await self.db.commit()

        logger.info(
            "Added grade detail %s to structure %s (classroom %s)",
            detail.id,
            structure.id,
            class_id,
        )
        return detail

    async def update_grade_detail(
        self,
        detail_id: Identifier,
        request: GradeDetailUpdateRequest,
    ) -> GradeStructureDetail | None:
        """Update a detail's title, description or point in place.

        Args:
            detail_id: The detail's own identifier.
            request: Fields to change.

        Returns:
            The updated detail, or None if it does not exist.
        """
        detail = await self._get_detail(detail_id)
        if detail is None:
            return None

        changes = request.model_dump(exclude_unset=True)
        for attr in ("title", "point"):
            if attr in changes and changes[attr] is None:
                del changes[attr]

        for attr, value in changes.items():
            setattr(detail, attr, value)

        await self.db.commit()

        logger.info("Updated grade detail %s: %s", detail.id, sorted(changes))
        return detail

    async def remove_grade_detail(
        self,
        class_id: Identifier,
        detail_id: Identifier,
    ) -> GradeStructureDetail | None:
        """Remove a detail together with the classroom's grade structure.

        The structure is deleted along with the detail, so any other details
        of the classroom go too. The next add_grade_detail starts a new
        structure.

        Args:
            class_id: Classroom identifier.
            detail_id: Detail to remove; must belong to the classroom.

        Returns:
            The removed detail, or None if the classroom has no structure or
            the detail is not part of it.
        """
        structure = await self.get_grade_structure(class_id)
        if structure is None:
            return None

        detail_id = normalize_id(detail_id)
        detail = next((d for d in structure.details if d.id == detail_id), None)
        if detail is None:
            return None

        dropped = len(structure.details) - 1
        await self.db.delete(structure)
        await self.db.commit()

        logger.warning(
            "Removed grade detail %s and grade structure %s of classroom %s "
            "(%d other details dropped)",
            detail_id,
            structure.id,
            structure.class_id,
            dropped,
        )
        return detail

    async def _classroom_exists(self, class_id: str) -> bool:
        result = await self.db.execute(
            select(Classroom.id).where(Classroom.id == class_id)
        )
        return result.scalar_one_or_none() is not None

    async def _get_or_create_structure(self, class_id: str) -> GradeStructure:
        """Return the classroom's structure, inserting it if missing."""
        created = await insert_ignoring_conflict(
            self.db,
            GradeStructure,
            {"id": new_id(), "class_id": class_id},
            conflict_columns=["class_id"],
        )
        if created:
            logger.info("Created grade structure for classroom %s", class_id)

        structure = await self.get_grade_structure(class_id)
        if structure is None:
            raise RuntimeError(f"Grade structure for classroom {class_id} vanished")
        return structure

    async def _get_detail(self, detail_id: Identifier) -> GradeStructureDetail | None:
        result = await self.db.execute(
            select(GradeStructureDetail).where(
                GradeStructureDetail.id == normalize_id(detail_id)
            )
        )
        return result.scalar_one_or_none()
