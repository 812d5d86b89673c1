"""School (tenant) service."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from schoolhub.core.exceptions import NotFoundError
from schoolhub.models.school import School
from schoolhub.schemas.school import SchoolCreate, SchoolResponse

logger = logging.getLogger(__name__)


class SchoolService:
    """School management service."""

    def __init__(self, db: Session):
        self.db = db

    def create_school(self, request: SchoolCreate) -> SchoolResponse:
        """Create a new school."""
        school = School(
            name=request.name,
            location=request.location,
            current_academic_year=request.current_academic_year,
        )
        self.db.add(school)
        self.db.flush()
        self.db.refresh(school)
        logger.info(f"School created: id={school.id}, name={school.name}")
        return SchoolResponse.model_validate(school)

    def get_school(self, school_id: int) -> School:
        """Get school by ID."""
        school = self.db.get(School, school_id)
        if not school:
            raise NotFoundError("School", str(school_id))
        return school

    def list_schools(self) -> list[SchoolResponse]:
        result = self.db.execute(select(School).order_by(School.name))
        return [SchoolResponse.model_validate(s) for s in result.scalars().all()]
