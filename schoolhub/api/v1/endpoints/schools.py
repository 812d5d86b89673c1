"""School (tenant) endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schoolhub.core.database import get_db
from schoolhub.schemas.school import SchoolCreate, SchoolResponse
from schoolhub.services.school import SchoolService

router = APIRouter()


@router.post("", response_model=SchoolResponse)
def create_school(
    request: SchoolCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new school."""
    return SchoolService(db).create_school(request)


@router.get("", response_model=list[SchoolResponse])
def list_schools(db: Annotated[Session, Depends(get_db)]):
    """List all schools."""
    return SchoolService(db).list_schools()


@router.get("/{school_id}", response_model=SchoolResponse)
def get_school(
    school_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get school by ID."""
    return SchoolResponse.model_validate(SchoolService(db).get_school(school_id))
