"""Classroom model."""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from schoolhub.core.database import Base
from schoolhub.models.base import IDMixin, SchoolScopedMixin, TimestampMixin


class Classroom(Base, IDMixin, TimestampMixin, SchoolScopedMixin):
    """Classroom; students join it through their grade_applying_for name."""

    __tablename__ = "classrooms"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    teacher_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        UniqueConstraint("school_id", "name", name="uq_classroom_school_name"),
    )

    def __repr__(self) -> str:
        return f"<Classroom(id={self.id}, name={self.name})>"
