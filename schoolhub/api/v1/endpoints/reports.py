"""Report card and class ranking endpoints."""

from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from schoolhub.core.database import get_db
from schoolhub.core.dependencies import SchoolContext
from schoolhub.schemas.report import (
    ClassRankingResponse,
    ClassReportCardsResponse,
    RankSort,
    StudentReportResponse,
)
from schoolhub.services.report import ReportService

router = APIRouter()


@router.get("/classrooms/{classroom_id}/ranking", response_model=ClassRankingResponse)
def get_class_ranking(
    classroom_id: int,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
    academic_year: str = Query(...),
    exam_type: str | None = Query(None, description="Omit for the yearly total"),
    sort: RankSort = Query("rank"),
):
    """Rank every student of a classroom by grand total."""
    return ReportService(db).get_class_ranking(
        context.school_id,
        classroom_id,
        academic_year=academic_year,
        exam_type=exam_type,
        sort=sort,
    )


@router.get("/classrooms/{classroom_id}/report-cards", response_model=ClassReportCardsResponse)
def get_class_report_cards(
    classroom_id: int,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
    academic_year: str = Query(...),
    exam_type: str | None = Query(None, description="Omit for the annual report"),
    sort: RankSort = Query("name"),
):
    """
    Get report cards of every student in a classroom, for printing.
    Sorted by student name unless sort=rank.
    """
    return ReportService(db).get_class_report_cards(
        context.school_id,
        classroom_id,
        academic_year=academic_year,
        exam_type=exam_type,
        sort=sort,
        school_name=context.school_name,
    )


@router.get("/classrooms/{classroom_id}/export")
def export_class_ranking(
    classroom_id: int,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
    academic_year: str = Query(...),
    exam_type: str | None = Query(None),
):
    """Download the ranked class list as an Excel file."""
    content = ReportService(db).export_class_ranking(
        context.school_id,
        classroom_id,
        academic_year=academic_year,
        exam_type=exam_type,
    )

    filename = f"class_results_{classroom_id}_{academic_year}"
    if exam_type:
        filename += f"_{exam_type.replace(' ', '_')}"
    filename += ".xlsx"

    return StreamingResponse(
        BytesIO(content),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/students/{student_app_id}/report-card", response_model=StudentReportResponse)
def get_student_report_card(
    student_app_id: str,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
    academic_year: str | None = Query(None, description="Defaults to the most recent year"),
    exam_type: str | None = Query(None, description="Defaults to 'Yearly Exam Total'"),
):
    """Get the academic report of one student."""
    return ReportService(db).get_student_report(
        context.school_id,
        student_app_id,
        academic_year=academic_year,
        exam_type=exam_type,
        school_name=context.school_name,
    )
