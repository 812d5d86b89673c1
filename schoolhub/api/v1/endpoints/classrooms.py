"""Classroom endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schoolhub.core.database import get_db
from schoolhub.core.dependencies import SchoolContext
from schoolhub.schemas.classroom import ClassroomCreate, ClassroomResponse
from schoolhub.services.classroom import ClassroomService

router = APIRouter()


@router.post("", response_model=ClassroomResponse)
def create_classroom(
    request: ClassroomCreate,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a classroom. Names are unique within a school."""
    return ClassroomService(db).create_classroom(context.school_id, request)


@router.get("", response_model=list[ClassroomResponse])
def list_classrooms(
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """List classrooms with student counts."""
    return ClassroomService(db).list_classrooms(context.school_id)


@router.get("/{classroom_id}", response_model=ClassroomResponse)
def get_classroom(
    classroom_id: int,
    context: SchoolContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Get classroom by ID."""
    return ClassroomService(db).get_classroom_response(context.school_id, classroom_id)
