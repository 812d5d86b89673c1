"""Student roster service."""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from schoolhub.core.exceptions import NotFoundError, ValidationError
from schoolhub.models.student import Student
from schoolhub.schemas.student import (
    PaginatedStudentResponse,
    StudentCreate,
    StudentFilter,
    StudentResponse,
    StudentUpdate,
)

logger = logging.getLogger(__name__)


class StudentService:
    """Student management service."""

    def __init__(self, db: Session):
        self.db = db

    def create_student(
        self,
        school_id: int,
        request: StudentCreate,
    ) -> StudentResponse:
        """Create a new student; student_app_id is unique within a school."""
        if self._find_student(school_id, request.student_app_id):
            raise ValidationError(f"Student ID '{request.student_app_id}' already exists")

        student = Student(
            school_id=school_id,
            student_app_id=request.student_app_id,
            full_name=request.full_name,
            grade_applying_for=request.grade_applying_for,
            date_of_birth=request.date_of_birth,
            parent_name=request.parent_name,
            parent_contact=request.parent_contact,
        )
        self.db.add(student)
        self.db.flush()
        self.db.refresh(student)
        logger.info(f"Student created: school_id={school_id}, student_app_id={student.student_app_id}")
        return StudentResponse.model_validate(student)

    def _find_student(self, school_id: int, student_app_id: str) -> Student | None:
        result = self.db.execute(
            select(Student).where(
                Student.school_id == school_id,
                Student.student_app_id == student_app_id,
            )
        )
        return result.scalar_one_or_none()

    def get_student(self, school_id: int, student_app_id: str) -> Student:
        """Get student by external ID."""
        student = self._find_student(school_id, student_app_id)
        if not student:
            raise NotFoundError("Student", student_app_id)
        return student

    def get_roster(self, school_id: int, classroom_name: str) -> list[Student]:
        """Students of a classroom, ordered by name."""
        result = self.db.execute(
            select(Student)
            .where(
                Student.school_id == school_id,
                Student.grade_applying_for == classroom_name,
            )
            .order_by(Student.full_name, Student.student_app_id)
        )
        return list(result.scalars().all())

    def get_students_by_ids(self, school_id: int, student_app_ids: set[str]) -> list[Student]:
        if not student_app_ids:
            return []
        result = self.db.execute(
            select(Student).where(
                Student.school_id == school_id,
                Student.student_app_id.in_(student_app_ids),
            )
        )
        return list(result.scalars().all())

    def update_student(
        self,
        school_id: int,
        student_app_id: str,
        request: StudentUpdate,
    ) -> StudentResponse:
        """Update a student."""
        student = self.get_student(school_id, student_app_id)
        update_data = request.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(student, field, value)
        self.db.flush()
        self.db.refresh(student)
        return StudentResponse.model_validate(student)

    def delete_student(self, school_id: int, student_app_id: str) -> None:
        """Delete a student. Exam results are kept for history."""
        student = self.get_student(school_id, student_app_id)
        self.db.delete(student)
        self.db.flush()

    def list_students(
        self,
        school_id: int,
        filters: StudentFilter | None = None,
        page: int = 1,
        page_size: int = 50,
    ) -> PaginatedStudentResponse:
        """List students with filtering and pagination."""
        query = select(Student).where(Student.school_id == school_id)

        if filters:
            if filters.grade_applying_for:
                query = query.where(Student.grade_applying_for == filters.grade_applying_for)
            if filters.search:
                search_term = f"%{filters.search}%"
                query = query.where(
                    or_(
                        Student.full_name.ilike(search_term),
                        Student.student_app_id.ilike(search_term),
                    )
                )

        # Get total count
        count_query = select(func.count()).select_from(query.subquery())
        total = self.db.execute(count_query).scalar() or 0

        # Apply pagination
        offset = (page - 1) * page_size
        query = query.order_by(Student.grade_applying_for, Student.full_name)
        query = query.offset(offset).limit(page_size)

        students = self.db.execute(query).scalars().all()

        return PaginatedStudentResponse(
            items=[StudentResponse.model_validate(s) for s in students],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=(total + page_size - 1) // page_size,
        )
