"""Database models package."""

from schoolhub.models.classroom import Classroom
from schoolhub.models.exam import ExamResult
from schoolhub.models.school import School
from schoolhub.models.student import Student

__all__ = [
    "School",
    "Classroom",
    "Student",
    "ExamResult",
]
