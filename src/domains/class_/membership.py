# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role predicates over a classroom's membership.

These are pure functions. Ids are compared in canonical string form, so an
id read from a token matches the same id stored on the classroom.
"""

from typing import Iterable, Protocol

from src.utils.identifiers import Identifier, normalize_id, same_id


class HasMembership(Protocol):
    """Anything exposing a classroom's owner and role sets."""

    owner_id: str

    @property
    def teachers_id(self) -> list[str]: ...

    @property
    def students_id(self) -> list[str]: ...


def _contains(ids: Iterable[Identifier], user_id: Identifier) -> bool:
    target = normalize_id(user_id)
    return any(normalize_id(member) == target for member in ids)


def is_owner(user_id: Identifier, classroom: HasMembership) -> bool:
    return same_id(classroom.owner_id, user_id)


def is_teacher(user_id: Identifier, classroom: HasMembership) -> bool:
    return _contains(classroom.teachers_id, user_id)


def is_student(user_id: Identifier, classroom: HasMembership) -> bool:
    return _contains(classroom.students_id, user_id)


def is_member(user_id: Identifier, classroom: HasMembership) -> bool:
    """Check whether the user holds any role, ownership included."""
    return (
        is_owner(user_id, classroom)
        or is_student(user_id, classroom)
        or is_teacher(user_id, classroom)
    )
