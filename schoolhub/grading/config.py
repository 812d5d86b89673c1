"""Grading configuration: canonical subjects, exam-type slots and grade bands."""

import enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExamSlot(str, enum.Enum):
    """Position of an exam sitting within the two-term academic year."""

    MONTHLY_1 = "monthly1"
    MIDTERM = "midterm"
    MONTHLY_2 = "monthly2"
    FINAL = "final"


TERM_1_SLOTS = (ExamSlot.MONTHLY_1, ExamSlot.MIDTERM)
TERM_2_SLOTS = (ExamSlot.MONTHLY_2, ExamSlot.FINAL)

# Derived view over all stored exam types of a year; never stored itself
YEARLY_EXAM_TOTAL = "Yearly Exam Total"

DEFAULT_SUBJECTS = [
    "REL",
    "ARB",
    "SOMALI",
    "ENG",
    "MATH'S",
    "BIO",
    "CHEM",
    "PHYS",
    "GEO",
    "HIS",
]

DEFAULT_EXAM_TYPE_SLOTS = {
    "Monthly Exam 1": ExamSlot.MONTHLY_1,
    "Mid-Exam": ExamSlot.MIDTERM,
    "Monthly Exam 2": ExamSlot.MONTHLY_2,
    "Final Exam": ExamSlot.FINAL,
}


class GradeBand(BaseModel):
    """Inclusive lower bound of a letter grade."""

    model_config = ConfigDict(frozen=True)

    min_percentage: float
    grade: str
    remark: str


DEFAULT_GRADE_BANDS = [
    GradeBand(min_percentage=90, grade="A", remark="Excellent"),
    GradeBand(min_percentage=75, grade="B", remark="Very Good"),
    GradeBand(min_percentage=60, grade="C", remark="Good"),
    GradeBand(min_percentage=50, grade="D", remark="Acceptable"),
]


class GradingConfig(BaseModel):
    """Injectable grading rules.

    Schools with a different subject set or exam calendar pass their own
    instance instead of relying on the defaults.
    """

    model_config = ConfigDict(frozen=True)

    subjects: list[str] = Field(default_factory=lambda: list(DEFAULT_SUBJECTS))
    exam_type_slots: dict[str, ExamSlot] = Field(
        default_factory=lambda: dict(DEFAULT_EXAM_TYPE_SLOTS)
    )
    grade_bands: list[GradeBand] = Field(default_factory=lambda: list(DEFAULT_GRADE_BANDS))
    fail_grade: str = "F"
    fail_remark: str = "Fail"
    # Marks available per term for one subject; two terms are summed
    term_max_score: float = 100

    @field_validator("grade_bands")
    @classmethod
    def order_bands(cls, bands: list[GradeBand]) -> list[GradeBand]:
        """Keep bands highest first, the order classify checks them in."""
        return sorted(bands, key=lambda band: band.min_percentage, reverse=True)

    @property
    def exam_types(self) -> list[str]:
        return list(self.exam_type_slots)

    @property
    def subject_max_score(self) -> float:
        return self.term_max_score * 2

    def canonical_subject(self, subject_name: str) -> str | None:
        """Return the canonical spelling of a subject, or None if unknown."""
        wanted = subject_name.upper()
        for subject in self.subjects:
            if subject.upper() == wanted:
                return subject
        return None

    def slot_for(self, exam_type: str) -> ExamSlot | None:
        return self.exam_type_slots.get(exam_type)


DEFAULT_GRADING_CONFIG = GradingConfig()
