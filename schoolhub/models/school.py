"""School (tenant) model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from schoolhub.core.database import Base
from schoolhub.models.base import IDMixin, TimestampMixin


class School(Base, IDMixin, TimestampMixin):
    """A school; every roster and exam record is scoped to one."""

    __tablename__ = "schools"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    current_academic_year: Mapped[str | None] = mapped_column(String(20), nullable=True)

    def __repr__(self) -> str:
        return f"<School(id={self.id}, name={self.name})>"
