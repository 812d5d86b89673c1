"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from schoolhub.core.database import get_db
from schoolhub.core.exceptions import NotFoundError
from schoolhub.models.school import School


class CurrentSchoolContext:
    """Context object carrying the school (tenant) of the request."""

    def __init__(self, school: School):
        self.school = school

    @property
    def school_id(self) -> int:
        return self.school.id

    @property
    def school_name(self) -> str:
        return self.school.name


def get_school_context(
    db: Annotated[Session, Depends(get_db)],
    x_school_id: str = Header(..., description="School ID"),
) -> CurrentSchoolContext:
    """Resolve the X-School-Id header to an existing school."""
    try:
        school_id = int(x_school_id)
    except ValueError:
        raise NotFoundError("School", x_school_id)

    school = db.get(School, school_id)
    if not school:
        raise NotFoundError("School", x_school_id)

    return CurrentSchoolContext(school=school)


# Type alias for dependency injection
SchoolContext = Annotated[CurrentSchoolContext, Depends(get_school_context)]
