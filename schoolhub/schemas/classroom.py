"""Classroom schemas."""

from datetime import datetime

from pydantic import Field

from schoolhub.schemas.common import BaseSchema


class ClassroomCreate(BaseSchema):
    """Classroom creation schema."""

    name: str = Field(..., min_length=1, max_length=100)
    teacher_name: str | None = Field(None, max_length=255)
    capacity: int | None = Field(None, ge=1)


class ClassroomResponse(ClassroomCreate):
    """Classroom response schema."""

    id: int
    school_id: int
    student_count: int = 0
    created_at: datetime
    updated_at: datetime
