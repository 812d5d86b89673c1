"""Student schemas."""

from datetime import date, datetime

from pydantic import Field

from schoolhub.schemas.common import BaseSchema, PaginatedResponse


class StudentBase(BaseSchema):
    """Base student schema."""

    student_app_id: str = Field(..., min_length=1, max_length=50)
    full_name: str = Field(..., min_length=2, max_length=255)
    grade_applying_for: str = Field(..., min_length=1, max_length=100, description="Classroom name")
    date_of_birth: date | None = None
    parent_name: str | None = Field(None, max_length=255)
    parent_contact: str | None = Field(None, max_length=50)


class StudentCreate(StudentBase):
    """Student creation schema."""

    pass


class StudentUpdate(BaseSchema):
    """Student update schema; the external student id cannot change."""

    full_name: str | None = Field(None, min_length=2, max_length=255)
    grade_applying_for: str | None = Field(None, min_length=1, max_length=100)
    date_of_birth: date | None = None
    parent_name: str | None = Field(None, max_length=255)
    parent_contact: str | None = Field(None, max_length=50)


class StudentResponse(StudentBase):
    """Student response schema."""

    id: int
    school_id: int
    created_at: datetime
    updated_at: datetime


class StudentFilter(BaseSchema):
    """Student filter options."""

    grade_applying_for: str | None = None
    search: str | None = None  # Search by name or student id


class PaginatedStudentResponse(PaginatedResponse):
    """Paginated student list."""

    items: list[StudentResponse]
