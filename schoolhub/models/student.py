"""Student model."""

from datetime import date

from sqlalchemy import Date, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from schoolhub.core.database import Base
from schoolhub.models.base import IDMixin, SchoolScopedMixin, TimestampMixin


class Student(Base, IDMixin, TimestampMixin, SchoolScopedMixin):
    """Student model for managing student records."""

    __tablename__ = "students"

    # External identifier, stable across academic years
    student_app_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    grade_applying_for: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    parent_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    parent_contact: Mapped[str | None] = mapped_column(String(50), nullable=True)

    __table_args__ = (
        UniqueConstraint("school_id", "student_app_id", name="uq_student_school_app_id"),
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.student_app_id}, name={self.full_name}, class={self.grade_applying_for})>"
