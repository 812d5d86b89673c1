"""Student roster endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from schoolhub.core.database import get_db
from schoolhub.core.dependencies import SchoolContext
from schoolhub.schemas.common import MessageResponse
from schoolhub.schemas.student import (
    PaginatedStudentResponse,
    StudentCreate,
    StudentFilter,
    StudentResponse,
    StudentUpdate,
)
from schoolhub.services.student import StudentService

router = APIRouter()


@router.post("", response_model=StudentResponse)
def create_student(
    request: StudentCreate,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new student."""
    return StudentService(db).create_student(context.school_id, request)


@router.get("", response_model=PaginatedStudentResponse)
def list_students(
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    grade_applying_for: str | None = Query(None, description="Classroom name"),
    search: str | None = None,
):
    """List students with filtering and pagination."""
    filters = StudentFilter(grade_applying_for=grade_applying_for, search=search)
    return StudentService(db).list_students(
        context.school_id,
        filters=filters,
        page=page,
        page_size=page_size,
    )


@router.get("/{student_app_id}", response_model=StudentResponse)
def get_student(
    student_app_id: str,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Get student by external student ID."""
    student = StudentService(db).get_student(context.school_id, student_app_id)
    return StudentResponse.model_validate(student)


@router.patch("/{student_app_id}", response_model=StudentResponse)
def update_student(
    student_app_id: str,
    request: StudentUpdate,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a student."""
    return StudentService(db).update_student(context.school_id, student_app_id, request)


@router.delete("/{student_app_id}", response_model=MessageResponse)
def delete_student(
    student_app_id: str,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a student."""
    StudentService(db).delete_student(context.school_id, student_app_id)
    return MessageResponse(message="Student deleted successfully")
