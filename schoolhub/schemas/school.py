"""School schemas."""

from datetime import datetime

from pydantic import Field

from schoolhub.schemas.common import BaseSchema


class SchoolCreate(BaseSchema):
    """School creation schema."""

    name: str = Field(..., min_length=2, max_length=255)
    location: str | None = Field(None, max_length=255)
    current_academic_year: str | None = Field(None, max_length=20, examples=["2024-2025"])


class SchoolResponse(SchoolCreate):
    """School response schema."""

    id: int
    created_at: datetime
    updated_at: datetime
