"""Report card and class ranking schemas."""

from typing import Literal

from schoolhub.schemas.common import BaseSchema
from schoolhub.schemas.exam import SubjectScore

RankSort = Literal["name", "rank"]


class StudentSummary(BaseSchema):
    """Student header shown on a report card."""

    student_app_id: str
    full_name: str
    grade_applying_for: str
    parent_name: str | None = None
    parent_contact: str | None = None


class SubjectBreakdownRow(BaseSchema):
    """One subject row of a yearly report card.

    Slot scores are null when nothing was recorded for that sitting.
    """

    subject: str
    monthly1: float | None
    midterm: float | None
    term1_total: float
    monthly2: float | None
    final: float | None
    term2_total: float
    total: float
    grade: str
    has_scores: bool


class ColumnTotalsResponse(BaseSchema):
    monthly1: float
    midterm: float
    term1_total: float
    monthly2: float
    final: float
    term2_total: float
    total: float


class ReportCardBody(BaseSchema):
    """Yearly totals, grade and class position of one student."""

    subjects: list[SubjectBreakdownRow]
    column_totals: ColumnTotalsResponse
    grand_total: float
    max_total: float
    percentage: float
    overall_grade: str
    overall_remark: str
    rank: int | None = None
    class_size: int | None = None
    position: str = "N/A"


class SingleExamBody(BaseSchema):
    """Scores of a single exam sitting."""

    subjects: list[SubjectScore]
    total_score: float
    average_score: float
    grade: str
    remark: str


class StudentReportResponse(BaseSchema):
    """Report of one student for one academic year.

    Exactly one of report_card (yearly view) or exam_result (single exam
    type) is set, unless the student has no results at all.
    """

    student: StudentSummary
    school_name: str
    academic_year: str | None
    exam_type: str
    available_years: list[str]
    available_exam_types: list[str]
    report_card: ReportCardBody | None = None
    exam_result: SingleExamBody | None = None


class ClassReportCardEntry(BaseSchema):
    student: StudentSummary
    report_card: ReportCardBody


class ClassReportCardsResponse(BaseSchema):
    """All report cards of a classroom, for bulk printing."""

    classroom_id: int
    classroom_name: str
    academic_year: str
    exam_type: str
    title: str
    school_name: str
    sort: RankSort
    total_students: int
    report_cards: list[ClassReportCardEntry]


class RankingEntry(BaseSchema):
    rank: int
    position: str
    student_app_id: str
    full_name: str
    grand_total: float
    percentage: float
    overall_grade: str


class ClassRankingResponse(BaseSchema):
    """Ranked list of a classroom."""

    classroom_id: int
    classroom_name: str
    academic_year: str
    exam_type: str
    sort: RankSort
    total_students: int
    entries: list[RankingEntry]
