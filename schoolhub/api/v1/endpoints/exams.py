"""Exam result endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from schoolhub.core.database import get_db
from schoolhub.core.dependencies import SchoolContext
from schoolhub.schemas.common import MessageResponse
from schoolhub.schemas.exam import (
    BulkExamResultCreate,
    BulkExamResultResponse,
    ExamResultCreate,
    ExamResultFilter,
    ExamResultResponse,
    GradingConfigResponse,
    PaginatedExamResultResponse,
)
from schoolhub.services.exam import ExamService

router = APIRouter()


@router.post("", response_model=ExamResultResponse)
def save_exam_result(
    request: ExamResultCreate,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Save one student's scores for an exam type.
    If a result already exists for the student, academic year and exam type,
    the scores are merged into it.
    """
    return ExamService(db).save_result(context.school_id, request)


@router.post("/bulk", response_model=BulkExamResultResponse)
def bulk_save_exam_results(
    request: BulkExamResultCreate,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Save results for a whole classroom.
    Nothing is saved if any student is not on the classroom roster.
    """
    return ExamService(db).bulk_save(context.school_id, request)


@router.get("", response_model=PaginatedExamResultResponse)
def list_exam_results(
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
    student_app_id: str | None = None,
    classroom_name: str | None = None,
    academic_year: str | None = None,
    exam_type: str | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
):
    """List exam results with filtering and pagination."""
    filters = ExamResultFilter(
        student_app_id=student_app_id,
        classroom_name=classroom_name,
        academic_year=academic_year,
        exam_type=exam_type,
    )
    return ExamService(db).list_results(
        context.school_id,
        filters=filters,
        page=page,
        page_size=page_size,
    )


@router.get("/config", response_model=GradingConfigResponse)
def get_grading_config(
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Get the subjects, exam types and grade bands in effect."""
    return ExamService(db).get_grading_config()


@router.get("/classroom", response_model=list[ExamResultResponse])
def get_classroom_results(
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
    classroom_name: str = Query(...),
    academic_year: str = Query(...),
    exam_type: str | None = Query(None, description="Omit or 'Yearly Exam Total' for all exam types"),
):
    """Get all results of a classroom for an academic year."""
    return ExamService(db).get_results_for_classroom(
        context.school_id,
        classroom_name=classroom_name,
        academic_year=academic_year,
        exam_type=exam_type,
    )


@router.get("/student/{student_app_id}", response_model=list[ExamResultResponse])
def get_student_results(
    student_app_id: str,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Get all results of a student, newest first."""
    return ExamService(db).get_results_for_student(context.school_id, student_app_id)


@router.get("/{result_id}", response_model=ExamResultResponse)
def get_exam_result(
    result_id: int,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Get exam result by ID."""
    record = ExamService(db).get_result(context.school_id, result_id)
    return ExamResultResponse.model_validate(record)


@router.delete("/{result_id}", response_model=MessageResponse)
def delete_exam_result(
    result_id: int,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an exam result."""
    ExamService(db).delete_result(context.school_id, result_id)
    return MessageResponse(message="Exam result deleted successfully")
