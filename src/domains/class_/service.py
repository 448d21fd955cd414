# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Classroom service for membership operations.

This module provides the ClassroomService class for:
- Classroom creation, lookup and detail updates
- Adding and removing teachers and students
- Joining by class code or by signed invite token
- Class code resets

Membership transitions for one (classroom, user) pair:

    NonMember --add/join--> Student | Teacher --remove--> NonMember
    Owner: set at creation, never removed.

Business-rule failures come back as a falsy ClassroomResult. Storage
failures propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config.settings import ClassCodeSettings
from src.domains.class_.code import ClassCodeGenerator
from src.domains.class_.membership import is_member, is_owner
from src.domains.class_.results import ClassroomResult, Outcome
from src.domains.invitation.token import InviteTokenService
from src.infrastructure.database.models import ClassRole, Classroom, ClassroomMember
from src.models.classroom import ClassroomCreateRequest, ClassroomUpdateRequest
from src.utils.datetime import utc_now
from src.utils.identifiers import Identifier, normalize_id

logger = logging.getLogger(__name__)


@dataclass
class UserClassrooms:
    """Classrooms a user belongs to, split by role.

    Attributes:
        enrolled: Classrooms where the user is a student.
        teaching: Classrooms where the user is a teacher.
    """

    enrolled: list[Classroom] = field(default_factory=list)
    teaching: list[Classroom] = field(default_factory=list)


class ClassroomService:
    """Service for classrooms and their membership.

    The session should come from ``build_sessionmaker`` (expire_on_commit
    off) so returned classrooms stay readable after commit.

    Attributes:
        db: Async database session.
    """

    def __init__(
        self,
        db: AsyncSession,
        token_service: InviteTokenService | None = None,
        code_generator: ClassCodeGenerator | None = None,
        code_settings: ClassCodeSettings | None = None,
    ) -> None:
        """Initialize classroom service.

        Args:
            db: Async database session.
            token_service: Verifies invite tokens for join_by_token.
            code_generator: Class code source. Defaults to a random generator
                on the same session.
            code_settings: Code length and insert retry limit.
        """
        self.db = db
        settings = code_settings or ClassCodeSettings()
        self._tokens = token_service
        self._codes = code_generator or ClassCodeGenerator(db, length=settings.length)
        self._max_insert_attempts = settings.max_insert_attempts

    async def create_classroom(self, request: ClassroomCreateRequest) -> ClassroomResult:
        """Create a classroom with the owner as its only teacher.

        Args:
            request: Classroom creation data.

        Returns:
            OK with the classroom, or CODE_CONFLICT if every attempt lost
            the class code to a concurrent writer.
        """
        for attempt in range(1, self._max_insert_attempts + 1):
            class_code = await self._codes.generate_unique_class_code()
            classroom = Classroom(
                name=request.name,
                description=request.description,
                school_year=request.school_year,
                owner_id=request.owner_id,
                class_code=class_code,
                members=[
                    ClassroomMember(
                        user_id=request.owner_id,
                        role=ClassRole.TEACHER.value,
                    )
                ],
            )
            self.db.add(classroom)

            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                logger.warning(
                    "Class code %s taken concurrently, retrying (attempt %d/%d)",
                    class_code,
                    attempt,
                    self._max_insert_attempts,
                )
                continue

            logger.info(
                "Created classroom: %s (%s) by %s",
                classroom.name,
                classroom.id,
                request.owner_id,
            )
            return ClassroomResult.success(classroom)

        logger.error(
            "Could not allocate a class code for %s after %d attempts",
            request.owner_id,
            self._max_insert_attempts,
        )
        return ClassroomResult.failure(Outcome.CODE_CONFLICT)

    async def get_classroom(self, class_id: Identifier) -> Classroom | None:
        """Get classroom by ID, or None if absent."""
        query = (
            select(Classroom)
            .where(Classroom.id == normalize_id(class_id))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_classroom_by_code(self, class_code: str) -> Classroom | None:
        """Get classroom by class code, or None if no classroom holds it."""
        query = (
            select(Classroom)
            .where(Classroom.class_code == class_code.strip())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_classrooms(self) -> list[Classroom]:
        """List every classroom, oldest first."""
        result = await self.db.execute(select(Classroom).order_by(Classroom.created_at))
        return list(result.scalars().all())

    async def list_classrooms_for_user(self, user_id: Identifier) -> UserClassrooms:
        """List the classrooms a user studies in and teaches in.

        Args:
            user_id: User identifier.

        Returns:
            UserClassrooms with enrolled and teaching lists.
        """
        user_id = normalize_id(user_id)
        return UserClassrooms(
            enrolled=await self._list_by_role(user_id, ClassRole.STUDENT),
            teaching=await self._list_by_role(user_id, ClassRole.TEACHER),
        )

    async def update_classroom(
        self,
        class_id: Identifier,
        request: ClassroomUpdateRequest,
    ) -> ClassroomResult:
        """Update classroom details. Membership and class code are untouched.

        Args:
            class_id: Classroom identifier.
            request: Fields to change.

        Returns:
            OK with the classroom, or NOT_FOUND.
        """
        classroom = await self.get_classroom(class_id)
        if classroom is None:
            return ClassroomResult.failure(Outcome.NOT_FOUND)

        changes = request.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)

        for attr, value in changes.items():
            setattr(classroom, attr, value)

        await self.db.commit()

        logger.info("Updated classroom %s: %s", classroom.id, sorted(changes))
        return ClassroomResult.success(classroom)

    async def add_member(
        self,
        class_id: Identifier,
        user_id: Identifier,
        is_student: bool,
    ) -> ClassroomResult:
        """Add a user to a classroom as student or teacher.

        Args:
            class_id: Classroom identifier.
            user_id: User to add.
            is_student: Add to the student set (True) or teacher set (False).

        Returns:
            OK with the classroom, NOT_FOUND, or ALREADY_MEMBER when the user
            holds any role in the classroom, ownership included.
        """
        classroom = await self.get_classroom(class_id)
        if classroom is None:
            logger.info("Add member rejected: classroom %s not found", class_id)
            return ClassroomResult.failure(Outcome.NOT_FOUND)

        return await self._add_member(classroom, user_id, ClassRole.from_flag(is_student))

    async def remove_member(
        self,
        class_id: Identifier,
        user_id: Identifier,
        is_student: bool,
    ) -> ClassroomResult:
        """Remove a user from one role set of a classroom.

        Only the set named by ``is_student`` is touched; a user listed as both
        teacher and student keeps the other role. Removing someone who is not
        in the set succeeds without change.

        Args:
            class_id: Classroom identifier.
            user_id: User to remove.
            is_student: Remove from the student set (True) or teacher set.

        Returns:
            OK with the classroom, NOT_FOUND, or OWNER_PROTECTED when the
            user owns the classroom.
        """
        classroom = await self.get_classroom(class_id)
        if classroom is None:
            logger.info("Remove member rejected: classroom %s not found", class_id)
            return ClassroomResult.failure(Outcome.NOT_FOUND)

        if is_owner(user_id, classroom):
            logger.info(
                "Remove member rejected: %s owns classroom %s",
                user_id,
                classroom.id,
            )
            return ClassroomResult.failure(Outcome.OWNER_PROTECTED)

        role = ClassRole.from_flag(is_student)
        target = normalize_id(user_id)
        leaving = [
            member
            for member in classroom.members
            if member.role == role and normalize_id(member.user_id) == target
        ]
        for member in leaving:
            classroom.members.remove(member)

        if leaving:
            classroom.updated_at = utc_now()
            await self.db.commit()
            logger.info(
                "Removed %s %s from classroom %s",
                role.value,
                target,
                classroom.id,
            )

        return ClassroomResult.success(classroom)

    async def reset_class_code(self, class_id: Identifier) -> ClassroomResult:
        """Replace a classroom's class code.

        Links and codes shared before the reset stop working.

        Args:
            class_id: Classroom identifier.

        Returns:
            OK with the classroom, NOT_FOUND, or CODE_CONFLICT.
        """
        for attempt in range(1, self._max_insert_attempts + 1):
            classroom = await self.get_classroom(class_id)
            if classroom is None:
                return ClassroomResult.failure(Outcome.NOT_FOUND)

            classroom.class_code = await self._codes.generate_unique_class_code()

            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                logger.warning(
                    "Class code reset for %s collided, retrying (attempt %d/%d)",
                    class_id,
                    attempt,
                    self._max_insert_attempts,
                )
                continue

            logger.info("Reset class code for classroom %s", classroom.id)
            return ClassroomResult.success(classroom)

        return ClassroomResult.failure(Outcome.CODE_CONFLICT)

    async def join_by_code(self, class_code: str, user_id: Identifier) -> ClassroomResult:
        """Join a classroom as a student using its class code.

        Args:
            class_code: Code shared by a teacher.
            user_id: Joining user.

        Returns:
            OK with the classroom, NOT_FOUND for an unknown code, or
            ALREADY_MEMBER.
        """
        classroom = await self.get_classroom_by_code(class_code)
        if classroom is None:
            logger.info("Join by code rejected: no classroom for code %r", class_code)
            return ClassroomResult.failure(Outcome.NOT_FOUND)

        return await self._add_member(classroom, user_id, ClassRole.STUDENT)

    async def join_by_token(self, token: str, user_id: Identifier) -> ClassroomResult:
        """Join a classroom using a signed invite token.

        Args:
            token: Token from an invite link.
            user_id: Joining user.

        Returns:
            INVALID_TOKEN for an unusable token, otherwise the add_member
            result for the classroom and role in the token.
        """
        if self._tokens is None:
            logger.warning("Join by token attempted without a token service")
            return ClassroomResult.failure(Outcome.INVALID_TOKEN)

        payload = self._tokens.verify_invite_token(token)
        if payload is None:
            return ClassroomResult.failure(Outcome.INVALID_TOKEN)

        return await self.add_member(payload.class_id, user_id, payload.is_student)

    async def _add_member(
        self,
        classroom: Classroom,
        user_id: Identifier,
        role: ClassRole,
    ) -> ClassroomResult:
        """Add a user to a loaded classroom unless already a member."""
        user_id = normalize_id(user_id)
        if is_member(user_id, classroom):
            logger.info(
                "Add member rejected: %s already in classroom %s",
                user_id,
                classroom.id,
            )
            return ClassroomResult.failure(Outcome.ALREADY_MEMBER)

        classroom.members.append(ClassroomMember(user_id=user_id, role=role.value))
        classroom.updated_at = utc_now()

        try:
            await self.db.commit()
        except IntegrityError:
            # Same membership committed by a concurrent request.
            await self.db.rollback()
            return ClassroomResult.failure(Outcome.ALREADY_MEMBER)

        logger.info("Added %s %s to classroom %s", role.value, user_id, classroom.id)
        return ClassroomResult.success(classroom)

    async def _list_by_role(self, user_id: str, role: ClassRole) -> list[Classroom]:
        query = (
            select(Classroom)
            .join(ClassroomMember, ClassroomMember.classroom_id == Classroom.id)
            .where(
                ClassroomMember.user_id == user_id,
                ClassroomMember.role == role.value,
            )
            .order_by(Classroom.created_at)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
