"""Shared fixtures: in-memory SQLite database, sessions and API client."""

import os

# Must be set before schoolhub settings are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from schoolhub import models  # noqa: F401
from schoolhub.core.database import Base, build_engine, get_db
from schoolhub.main import app
from schoolhub.schemas.classroom import ClassroomCreate
from schoolhub.schemas.exam import SubjectScore
from schoolhub.schemas.school import SchoolCreate
from schoolhub.schemas.student import StudentCreate
from schoolhub.services.classroom import ClassroomService
from schoolhub.services.school import SchoolService
from schoolhub.services.student import StudentService


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine,
        class_=Session,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def school(db):
    return SchoolService(db).create_school(
        SchoolCreate(name="Barasho Secondary", current_academic_year="2024-2025")
    )


@pytest.fixture
def classroom(db, school):
    return ClassroomService(db).create_classroom(school.id, ClassroomCreate(name="Form 1"))


@pytest.fixture
def roster(db, school, classroom):
    service = StudentService(db)
    students = [
        ("S-001", "Amina Hassan"),
        ("S-002", "Bashir Ali"),
        ("S-003", "Cali Warsame"),
        ("S-004", "Deeqa Nur"),
    ]
    return [
        service.create_student(
            school.id,
            StudentCreate(student_app_id=app_id, full_name=name, grade_applying_for=classroom.name),
        )
        for app_id, name in students
    ]


@pytest.fixture
def make_result():
    """Build minimal exam results for the pure grading functions."""

    def _make(exam_type: str, scores: dict[str, float]) -> SimpleNamespace:
        return SimpleNamespace(
            exam_type=exam_type,
            subjects=[SubjectScore(subject_name=name, score=score) for name, score in scores.items()],
        )

    return _make
