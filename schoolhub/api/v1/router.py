"""Main API router aggregating all module routers."""

from fastapi import APIRouter

from schoolhub.api.v1.endpoints import (
    classrooms,
    exams,
    reports,
    schools,
    students,
)

api_router = APIRouter()

# Schools (no school context required)
api_router.include_router(
    schools.router,
    prefix="/schools",
    tags=["Schools"],
)

# Classrooms (school-scoped)
api_router.include_router(
    classrooms.router,
    prefix="/classrooms",
    tags=["Classrooms"],
)

# Students (school-scoped)
api_router.include_router(
    students.router,
    prefix="/students",
    tags=["Students"],
)

# Exam results (school-scoped)
api_router.include_router(
    exams.router,
    prefix="/exams",
    tags=["Exams"],
)

# Report cards and rankings (school-scoped)
api_router.include_router(
    reports.router,
    prefix="/reports",
    tags=["Reports"],
)
