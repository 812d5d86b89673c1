"""Exam result model."""

from sqlalchemy import JSON, BigInteger, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from schoolhub.core.database import Base
from schoolhub.models.base import IDMixin, SchoolScopedMixin, TimestampMixin


class ExamResult(Base, IDMixin, TimestampMixin, SchoolScopedMixin):
    """Scores of one student for one exam sitting of an academic year."""

    __tablename__ = "exam_results"

    student_app_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    # Display copy taken at entry time
    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    classroom_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("classrooms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    classroom_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    academic_year: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    exam_type: Mapped[str] = mapped_column(String(50), nullable=False)
    # [{"subject_name": "ENG", "score": 78.0}, ...]
    subjects: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    total_score: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    average_score: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint(
            "school_id", "student_app_id", "academic_year", "exam_type",
            name="uq_exam_result_student_year_type",
        ),
    )

    def __repr__(self) -> str:
        return f"<ExamResult(student={self.student_app_id}, year={self.academic_year}, exam={self.exam_type})>"
