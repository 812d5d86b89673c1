"""Exam result schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import Field

from schoolhub.schemas.common import BaseSchema, PaginatedResponse

Score = Annotated[float, Field(ge=0)]


# ==========================================
# Exam Result Schemas
# ==========================================

class SubjectScore(BaseSchema):
    """Score of one subject in one exam sitting."""

    subject_name: str = Field(..., min_length=1, max_length=50)
    score: Score


class ExamResultCreate(BaseSchema):
    """Scores of one student for one exam type.

    Subjects with a null score are skipped; existing records for the same
    student, academic year and exam type are merged into.
    """

    student_app_id: str = Field(..., min_length=1, max_length=50)
    classroom_id: int
    academic_year: str = Field(..., min_length=4, max_length=20, examples=["2024-2025"])
    exam_type: str = Field(..., min_length=1, max_length=50, examples=["Mid-Exam"])
    scores: dict[str, Score | None]


class ExamResultResponse(BaseSchema):
    """Exam result response schema."""

    id: int
    school_id: int
    student_app_id: str
    student_name: str
    classroom_id: int | None
    classroom_name: str
    academic_year: str
    exam_type: str
    subjects: list[SubjectScore]
    total_score: float
    average_score: float
    created_at: datetime
    updated_at: datetime


class ExamResultFilter(BaseSchema):
    """Exam result filtering options."""

    student_app_id: str | None = None
    classroom_name: str | None = None
    academic_year: str | None = None
    exam_type: str | None = None


class PaginatedExamResultResponse(PaginatedResponse):
    """Paginated exam result list."""

    items: list[ExamResultResponse]


# ==========================================
# Bulk Entry
# ==========================================

class StudentScoresInput(BaseSchema):
    """Scores of one student in a bulk entry."""

    student_app_id: str = Field(..., min_length=1, max_length=50)
    scores: dict[str, Score | None]


class BulkExamResultCreate(BaseSchema):
    """Results of a whole classroom for one exam type."""

    classroom_id: int
    academic_year: str = Field(..., min_length=4, max_length=20)
    exam_type: str = Field(..., min_length=1, max_length=50)
    records: list[StudentScoresInput]


class BulkExamResultResponse(BaseSchema):
    """Response for bulk exam result entry."""

    total_records: int
    successful: int
    failed: int
    skipped: int = 0
    errors: list[dict] = []
    message: str


# ==========================================
# Grading Configuration
# ==========================================

class GradeBandResponse(BaseSchema):
    min_percentage: float
    grade: str
    remark: str


class GradingConfigResponse(BaseSchema):
    """Subjects, exam types and grade bands in effect."""

    subjects: list[str]
    exam_types: list[str]
    yearly_exam_type: str
    term_max_score: float
    grade_bands: list[GradeBandResponse]
    fail_grade: str
    fail_remark: str
