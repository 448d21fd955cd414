# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for ClassroomService against SQLite."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config.settings import ClassCodeSettings
from src.domains.class_ import (
    CLASS_CODE_ALPHABET,
    ClassCodeGenerator,
    ClassroomResult,
    ClassroomService,
    Outcome,
)
from src.domains.invitation import InviteTokenService
from src.infrastructure.database.models import ClassroomMember
from src.models.classroom import (
    ClassroomCreateRequest,
    ClassroomResponse,
    ClassroomUpdateRequest,
)


async def _create(
    service: ClassroomService,
    owner_id: str = "u1",
    name: str = "Algebra I",
) -> ClassroomResult:
    result = await service.create_classroom(
        ClassroomCreateRequest(name=name, owner_id=owner_id, school_year="2025-2026")
    )
    assert result.ok
    return result


class TestCreateClassroom:
    """Tests for create_classroom."""

    @pytest.mark.asyncio
    async def test_owner_is_sole_teacher(self, classroom_service: ClassroomService) -> None:
        result = await _create(classroom_service)
        classroom = result.classroom

        assert classroom.name == "Algebra I"
        assert classroom.owner_id == "u1"
        assert classroom.teachers_id == ["u1"]
        assert classroom.students_id == []
        assert len(classroom.class_code) == 8
        assert set(classroom.class_code) <= set(CLASS_CODE_ALPHABET)

    @pytest.mark.asyncio
    async def test_persisted(
        self,
        classroom_service: ClassroomService,
        other_session: AsyncSession,
    ) -> None:
        """Test that another session sees the new classroom."""
        result = await _create(classroom_service)

        loaded = await ClassroomService(other_session).get_classroom(result.classroom.id)

        assert loaded is not None
        assert loaded.teachers_id == ["u1"]
        assert loaded.class_code == result.classroom.class_code

    @pytest.mark.asyncio
    async def test_codes_are_unique(self, classroom_service: ClassroomService) -> None:
        codes = set()
        for index in range(20):
            result = await _create(classroom_service, owner_id=f"u{index}")
            codes.add(result.classroom.class_code)

        assert len(codes) == 20

    @pytest.mark.asyncio
    async def test_taken_code_is_skipped(self, session: AsyncSession) -> None:
        """Test that a candidate held by another classroom is never reused."""
        candidates = iter(["SAMECODE", "SAMECODE", "OTHERCDE"])
        generator = ClassCodeGenerator(session, candidates=lambda _: next(candidates))
        service = ClassroomService(session, code_generator=generator)

        first = await _create(service, owner_id="u1")
        second = await _create(service, owner_id="u2")

        assert first.classroom.class_code == "SAMECODE"
        assert second.classroom.class_code == "OTHERCDE"

    @pytest.mark.asyncio
    async def test_code_conflict_after_retries(self, session: AsyncSession) -> None:
        """Test that losing every insert to the unique constraint reports a conflict."""
        first = await _create(ClassroomService(session))
        taken = first.classroom.class_code

        generator = MagicMock()
        generator.generate_unique_class_code = AsyncMock(return_value=taken)
        service = ClassroomService(
            session,
            code_generator=generator,
            code_settings=ClassCodeSettings(max_insert_attempts=3),
        )

        result = await service.create_classroom(
            ClassroomCreateRequest(name="Chemistry", owner_id="u2")
        )

        assert result.outcome is Outcome.CODE_CONFLICT
        assert result.classroom is None
        assert generator.generate_unique_class_code.await_count == 3
        assert len(await service.list_classrooms()) == 1

    @pytest.mark.asyncio
    async def test_response_schema(self, classroom_service: ClassroomService) -> None:
        result = await _create(classroom_service)

        response = ClassroomResponse.from_model(result.classroom)

        assert response.id == result.classroom.id
        assert response.teachers_id == ["u1"]
        assert response.students_id == []
        assert response.school_year == "2025-2026"


class TestLookup:
    """Tests for get_classroom, get_classroom_by_code and listings."""

    @pytest.mark.asyncio
    async def test_get_missing(self, classroom_service: ClassroomService) -> None:
        assert await classroom_service.get_classroom("missing") is None

    @pytest.mark.asyncio
    async def test_get_by_code(self, classroom_service: ClassroomService) -> None:
        created = (await _create(classroom_service)).classroom

        found = await classroom_service.get_classroom_by_code(f" {created.class_code} ")

        assert found is not None
        assert found.id == created.id

    @pytest.mark.asyncio
    async def test_get_by_unknown_code(self, classroom_service: ClassroomService) -> None:
        assert await classroom_service.get_classroom_by_code("BADCODE") is None

    @pytest.mark.asyncio
    async def test_list_classrooms_for_user(
        self,
        classroom_service: ClassroomService,
    ) -> None:
        math = (await _create(classroom_service, owner_id="t1", name="Math")).classroom
        art = (await _create(classroom_service, owner_id="t2", name="Art")).classroom
        await _create(classroom_service, owner_id="t3", name="Music")
        await classroom_service.add_member(math.id, "u1", is_student=True)
        await classroom_service.add_member(art.id, "u1", is_student=False)

        listing = await classroom_service.list_classrooms_for_user("u1")

        assert [c.id for c in listing.enrolled] == [math.id]
        assert [c.id for c in listing.teaching] == [art.id]
        assert len(await classroom_service.list_classrooms()) == 3


class TestUpdateClassroom:
    """Tests for update_classroom."""

    @pytest.mark.asyncio
    async def test_updates_details_only(self, classroom_service: ClassroomService) -> None:
        created = (await _create(classroom_service)).classroom
        code = created.class_code

        result = await classroom_service.update_classroom(
            created.id,
            ClassroomUpdateRequest(name="Algebra II", description="Second term"),
        )

        assert result.ok
        assert result.classroom.name == "Algebra II"
        assert result.classroom.description == "Second term"
        assert result.classroom.school_year == "2025-2026"
        assert result.classroom.class_code == code
        assert result.classroom.teachers_id == ["u1"]

    @pytest.mark.asyncio
    async def test_missing(self, classroom_service: ClassroomService) -> None:
        result = await classroom_service.update_classroom(
            "missing", ClassroomUpdateRequest(name="X")
        )

        assert result.outcome is Outcome.NOT_FOUND


class TestAddMember:
    """Tests for add_member."""

    @pytest.mark.asyncio
    async def test_add_student(self, classroom_service: ClassroomService) -> None:
        created = (await _create(classroom_service)).classroom

        result = await classroom_service.add_member(created.id, "u2", is_student=True)

        assert result.ok
        assert result.classroom.students_id == ["u2"]
        assert result.classroom.teachers_id == ["u1"]

    @pytest.mark.asyncio
    async def test_add_teacher(self, classroom_service: ClassroomService) -> None:
        created = (await _create(classroom_service)).classroom

        result = await classroom_service.add_member(created.id, "u3", is_student=False)

        assert result.classroom.teachers_id == ["u1", "u3"]

    @pytest.mark.asyncio
    async def test_twice_is_already_member(
        self,
        classroom_service: ClassroomService,
        session: AsyncSession,
    ) -> None:
        created = (await _create(classroom_service)).classroom
        await classroom_service.add_member(created.id, "u2", is_student=True)

        result = await classroom_service.add_member(created.id, "u2", is_student=True)

        assert result.outcome is Outcome.ALREADY_MEMBER
        count = await session.scalar(
            select(func.count()).select_from(ClassroomMember).where(
                ClassroomMember.user_id == "u2"
            )
        )
        assert count == 1

    @pytest.mark.asyncio
    async def test_other_role_is_already_member(
        self,
        classroom_service: ClassroomService,
    ) -> None:
        """Test that a student cannot also be added as a teacher."""
        created = (await _create(classroom_service)).classroom
        await classroom_service.add_member(created.id, "u2", is_student=True)

        result = await classroom_service.add_member(created.id, "u2", is_student=False)

        assert result.outcome is Outcome.ALREADY_MEMBER

    @pytest.mark.asyncio
    async def test_owner_is_already_member(self, classroom_service: ClassroomService) -> None:
        created = (await _create(classroom_service)).classroom

        result = await classroom_service.add_member(created.id, "u1", is_student=True)

        assert result.outcome is Outcome.ALREADY_MEMBER

    @pytest.mark.asyncio
    async def test_uuid_ids_are_canonical(
        self,
        classroom_service: ClassroomService,
        sample_owner_id: str,
        sample_student_id: str,
    ) -> None:
        """Test that differently written ids name the same member."""
        created = (await _create(classroom_service, owner_id=sample_owner_id.upper())).classroom
        await classroom_service.add_member(created.id, sample_student_id, is_student=True)

        owner_again = await classroom_service.add_member(
            created.id, sample_owner_id, is_student=True
        )
        student_again = await classroom_service.add_member(
            created.id, f" {sample_student_id.upper()} ", is_student=True
        )

        assert created.owner_id == sample_owner_id
        assert owner_again.outcome is Outcome.ALREADY_MEMBER
        assert student_again.outcome is Outcome.ALREADY_MEMBER

    @pytest.mark.asyncio
    async def test_missing_classroom(self, classroom_service: ClassroomService) -> None:
        result = await classroom_service.add_member("missing", "u2", is_student=True)

        assert result.outcome is Outcome.NOT_FOUND


class TestRemoveMember:
    """Tests for remove_member."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("is_student", [True, False])
    async def test_owner_is_protected(
        self,
        classroom_service: ClassroomService,
        is_student: bool,
    ) -> None:
        created = (await _create(classroom_service)).classroom

        result = await classroom_service.remove_member(created.id, "u1", is_student)

        assert result.outcome is Outcome.OWNER_PROTECTED
        reloaded = await classroom_service.get_classroom(created.id)
        assert reloaded.teachers_id == ["u1"]

    @pytest.mark.asyncio
    async def test_remove_student(
        self,
        classroom_service: ClassroomService,
        other_session: AsyncSession,
    ) -> None:
        created = (await _create(classroom_service)).classroom
        await classroom_service.add_member(created.id, "u2", is_student=True)

        result = await classroom_service.remove_member(created.id, "u2", is_student=True)

        assert result.ok
        assert result.classroom.students_id == []
        reloaded = await ClassroomService(other_session).get_classroom(created.id)
        assert reloaded.students_id == []

    @pytest.mark.asyncio
    async def test_only_named_set_changes(
        self,
        classroom_service: ClassroomService,
        session: AsyncSession,
    ) -> None:
        """Test that removing a teacher leaves their student entry."""
        created = (await _create(classroom_service)).classroom
        session.add_all(
            [
                ClassroomMember(classroom_id=created.id, user_id="u2", role="teacher"),
                ClassroomMember(classroom_id=created.id, user_id="u2", role="student"),
            ]
        )
        await session.commit()

        result = await classroom_service.remove_member(created.id, "u2", is_student=False)

        assert result.ok
        assert result.classroom.teachers_id == ["u1"]
        assert result.classroom.students_id == ["u2"]

    @pytest.mark.asyncio
    async def test_absent_user_is_noop(self, classroom_service: ClassroomService) -> None:
        created = (await _create(classroom_service)).classroom

        result = await classroom_service.remove_member(created.id, "u9", is_student=True)

        assert result.ok
        assert result.classroom.teachers_id == ["u1"]
        assert result.classroom.students_id == []

    @pytest.mark.asyncio
    async def test_missing_classroom(self, classroom_service: ClassroomService) -> None:
        result = await classroom_service.remove_member("missing", "u2", is_student=True)

        assert result.outcome is Outcome.NOT_FOUND


class TestResetClassCode:
    """Tests for reset_class_code."""

    @pytest.mark.asyncio
    async def test_old_code_stops_working(self, classroom_service: ClassroomService) -> None:
        created = (await _create(classroom_service)).classroom
        old_code = created.class_code

        result = await classroom_service.reset_class_code(created.id)

        assert result.ok
        assert result.classroom.class_code != old_code
        assert await classroom_service.get_classroom_by_code(old_code) is None
        joined = await classroom_service.join_by_code(old_code, "u2")
        assert joined.outcome is Outcome.NOT_FOUND

    @pytest.mark.asyncio
    async def test_missing(self, classroom_service: ClassroomService) -> None:
        result = await classroom_service.reset_class_code("missing")

        assert result.outcome is Outcome.NOT_FOUND


class TestJoinByCode:
    """Tests for join_by_code."""

    @pytest.mark.asyncio
    async def test_joins_as_student(self, classroom_service: ClassroomService) -> None:
        created = (await _create(classroom_service)).classroom

        result = await classroom_service.join_by_code(created.class_code, "u2")

        assert result.ok
        assert result.classroom.students_id == ["u2"]

    @pytest.mark.asyncio
    async def test_unknown_code(self, classroom_service: ClassroomService) -> None:
        await _create(classroom_service)

        result = await classroom_service.join_by_code("BADCODE", "u2")

        assert result.outcome is Outcome.NOT_FOUND

    @pytest.mark.asyncio
    async def test_repeat_join(self, classroom_service: ClassroomService) -> None:
        created = (await _create(classroom_service)).classroom
        await classroom_service.join_by_code(created.class_code, "u2")

        result = await classroom_service.join_by_code(created.class_code, "u2")

        assert result.outcome is Outcome.ALREADY_MEMBER


class TestJoinByToken:
    """Tests for join_by_token."""

    @pytest.mark.asyncio
    async def test_student_token(
        self,
        classroom_service: ClassroomService,
        token_service: InviteTokenService,
    ) -> None:
        created = (await _create(classroom_service)).classroom
        token = token_service.issue_invite_token(created.id, is_student=True)

        result = await classroom_service.join_by_token(token, "u2")

        assert result.ok
        assert result.classroom.students_id == ["u2"]

    @pytest.mark.asyncio
    async def test_teacher_token(
        self,
        classroom_service: ClassroomService,
        token_service: InviteTokenService,
    ) -> None:
        created = (await _create(classroom_service)).classroom
        token = token_service.issue_invite_token(created.id, is_student=False)

        result = await classroom_service.join_by_token(token, "u3")

        assert result.classroom.teachers_id == ["u1", "u3"]

    @pytest.mark.asyncio
    async def test_invalid_token(self, classroom_service: ClassroomService) -> None:
        await _create(classroom_service)

        result = await classroom_service.join_by_token("not-a-token", "u2")

        assert result.outcome is Outcome.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_token_for_missing_classroom(
        self,
        classroom_service: ClassroomService,
        token_service: InviteTokenService,
    ) -> None:
        token = token_service.issue_invite_token("gone", is_student=True)

        result = await classroom_service.join_by_token(token, "u2")

        assert result.outcome is Outcome.NOT_FOUND

    @pytest.mark.asyncio
    async def test_without_token_service(self, session: AsyncSession) -> None:
        service = ClassroomService(session)

        result = await service.join_by_token("anything", "u2")

        assert result.outcome is Outcome.INVALID_TOKEN
