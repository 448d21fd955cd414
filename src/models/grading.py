# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade structure request schemas.

``point`` is a free numeric weight. Whether the points of a rubric must add
up to a total is left to the caller.
"""

from pydantic import BaseModel, Field


class GradeDetailCreateRequest(BaseModel):
    """A new rubric line item."""

    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    point: float = 0.0


class GradeDetailUpdateRequest(BaseModel):
    """Changes to an existing rubric line item. Unset fields are kept."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    point: float | None = None
