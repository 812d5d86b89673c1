"""Percentage to letter grade classification."""

from pydantic import BaseModel

from schoolhub.grading.config import DEFAULT_GRADING_CONFIG, GradingConfig


class Grading(BaseModel):
    """Letter grade with its remark."""

    grade: str
    remark: str


def classify(percentage: float, config: GradingConfig | None = None) -> Grading:
    """Map a percentage to a grade.

    Bands are inclusive lower bounds checked top-down; the first match wins.
    Values outside 0-100 are not clamped.
    """
    config = config or DEFAULT_GRADING_CONFIG
    for band in config.grade_bands:
        if percentage >= band.min_percentage:
            return Grading(grade=band.grade, remark=band.remark)
    return Grading(grade=config.fail_grade, remark=config.fail_remark)
