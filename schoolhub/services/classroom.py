"""Classroom service."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from schoolhub.core.exceptions import NotFoundError, ValidationError
from schoolhub.models.classroom import Classroom
from schoolhub.models.student import Student
from schoolhub.schemas.classroom import ClassroomCreate, ClassroomResponse

logger = logging.getLogger(__name__)


class ClassroomService:
    """Classroom management service."""

    def __init__(self, db: Session):
        self.db = db

    def _to_response(self, classroom: Classroom, student_count: int = 0) -> ClassroomResponse:
        return ClassroomResponse(
            id=classroom.id,
            school_id=classroom.school_id,
            name=classroom.name,
            teacher_name=classroom.teacher_name,
            capacity=classroom.capacity,
            student_count=student_count,
            created_at=classroom.created_at,
            updated_at=classroom.updated_at,
        )

    def create_classroom(self, school_id: int, request: ClassroomCreate) -> ClassroomResponse:
        """Create a classroom; names are unique within a school."""
        existing = self.db.execute(
            select(Classroom).where(
                Classroom.school_id == school_id,
                func.lower(Classroom.name) == request.name.lower(),
            )
        ).scalar_one_or_none()
        if existing:
            raise ValidationError(f"Classroom '{request.name}' already exists")

        classroom = Classroom(
            school_id=school_id,
            name=request.name,
            teacher_name=request.teacher_name,
            capacity=request.capacity,
        )
        self.db.add(classroom)
        self.db.flush()
        self.db.refresh(classroom)
        logger.info(f"Classroom created: school_id={school_id}, name={classroom.name}")
        return self._to_response(classroom)

    def get_classroom(self, school_id: int, classroom_id: int) -> Classroom:
        """Get classroom by ID, validating school membership."""
        result = self.db.execute(
            select(Classroom).where(
                Classroom.id == classroom_id,
                Classroom.school_id == school_id,
            )
        )
        classroom = result.scalar_one_or_none()
        if not classroom:
            raise NotFoundError("Classroom", str(classroom_id))
        return classroom

    def get_classroom_response(self, school_id: int, classroom_id: int) -> ClassroomResponse:
        classroom = self.get_classroom(school_id, classroom_id)
        count = self.db.execute(
            select(func.count(Student.id)).where(
                Student.school_id == school_id,
                Student.grade_applying_for == classroom.name,
            )
        ).scalar() or 0
        return self._to_response(classroom, count)

    def list_classrooms(self, school_id: int) -> list[ClassroomResponse]:
        """List classrooms with their roster sizes."""
        counts_result = self.db.execute(
            select(Student.grade_applying_for, func.count(Student.id))
            .where(Student.school_id == school_id)
            .group_by(Student.grade_applying_for)
        )
        counts = {name: count for name, count in counts_result.all()}

        result = self.db.execute(
            select(Classroom)
            .where(Classroom.school_id == school_id)
            .order_by(Classroom.name)
        )
        return [self._to_response(c, counts.get(c.name, 0)) for c in result.scalars().all()]
