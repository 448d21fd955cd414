# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Classroom request and response schemas."""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

from src.utils.identifiers import normalize_id

if TYPE_CHECKING:
    from src.infrastructure.database.models import Classroom


class ClassroomCreateRequest(BaseModel):
    """Data needed to open a classroom.

    The owner becomes the sole initial teacher.
    """

    name: str = Field(min_length=1, max_length=255)
    owner_id: str = Field(min_length=1)
    description: str | None = None
    school_year: str | None = Field(default=None, max_length=32)

    @field_validator("owner_id")
    @classmethod
    def canonical_owner_id(cls, value: str) -> str:
        return normalize_id(value)


class ClassroomUpdateRequest(BaseModel):
    """Editable classroom details. Unset fields are left untouched."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    school_year: str | None = Field(default=None, max_length=32)


class ClassroomResponse(BaseModel):
    """Classroom as handed to the API layer."""

    id: str
    name: str
    description: str | None = None
    school_year: str | None = None
    owner_id: str
    teachers_id: list[str] = Field(default_factory=list)
    students_id: list[str] = Field(default_factory=list)
    class_code: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, classroom: "Classroom") -> "ClassroomResponse":
        return cls(
            id=classroom.id,
            name=classroom.name,
            description=classroom.description,
            school_year=classroom.school_year,
            owner_id=classroom.owner_id,
            teachers_id=classroom.teachers_id,
            students_id=classroom.students_id,
            class_code=classroom.class_code,
            created_at=classroom.created_at,
            updated_at=classroom.updated_at,
        )
