"""Exam result service for entry, upsert and retrieval."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from schoolhub.core.config import settings
from schoolhub.core.exceptions import NotFoundError, ValidationError
from schoolhub.grading import YEARLY_EXAM_TOTAL, GradingConfig
from schoolhub.models.classroom import Classroom
from schoolhub.models.exam import ExamResult
from schoolhub.models.student import Student
from schoolhub.schemas.exam import (
    BulkExamResultCreate,
    BulkExamResultResponse,
    ExamResultCreate,
    ExamResultFilter,
    ExamResultResponse,
    GradeBandResponse,
    GradingConfigResponse,
    PaginatedExamResultResponse,
)
from schoolhub.services.classroom import ClassroomService
from schoolhub.services.student import StudentService

logger = logging.getLogger(__name__)


class ExamService:
    """Exam result management service."""

    def __init__(self, db: Session, grading: GradingConfig | None = None):
        self.db = db
        self.grading = grading or settings.grading_config

    # ==========================================
    # Entry
    # ==========================================

    def save_result(
        self,
        school_id: int,
        request: ExamResultCreate,
    ) -> ExamResultResponse:
        """Save one student's scores for an exam type, merging into any existing record."""
        self.validate_exam_type(request.exam_type)
        classroom = ClassroomService(self.db).get_classroom(school_id, request.classroom_id)
        student = StudentService(self.db).get_student(school_id, request.student_app_id)
        if student.grade_applying_for != classroom.name:
            raise ValidationError(
                f"Student {student.student_app_id} is not in classroom '{classroom.name}'"
            )

        subjects = self._normalize_scores(request.scores)
        record, created = self._upsert(
            school_id, student, classroom, request.academic_year, request.exam_type, subjects
        )
        self.db.flush()
        self.db.refresh(record)

        logger.info(
            f"[EXAM SAVE] {'Created' if created else 'Updated'} result: school_id={school_id}, "
            f"student={student.student_app_id}, year={request.academic_year}, exam={request.exam_type}"
        )
        return ExamResultResponse.model_validate(record)

    def bulk_save(
        self,
        school_id: int,
        request: BulkExamResultCreate,
    ) -> BulkExamResultResponse:
        """Save results for a whole classroom.

        Every student must belong to the classroom roster; otherwise nothing
        is saved. Students without any score are skipped.
        """
        self.validate_exam_type(request.exam_type)
        classroom = ClassroomService(self.db).get_classroom(school_id, request.classroom_id)
        roster = StudentService(self.db).get_roster(school_id, classroom.name)
        students_by_id = {s.student_app_id: s for s in roster}

        errors = []
        failed = 0

        # Validate all student IDs before any DB operations
        for record in request.records:
            if record.student_app_id not in students_by_id:
                errors.append({
                    "student_app_id": record.student_app_id,
                    "message": f"Student {record.student_app_id} not found in classroom {classroom.name}",
                })
                failed += 1

        if errors:
            return BulkExamResultResponse(
                total_records=len(request.records),
                successful=0,
                failed=failed,
                errors=errors,
                message="Validation failed. No records were saved.",
            )

        successful = 0
        skipped = 0
        for record in request.records:
            if all(score is None for score in record.scores.values()):
                skipped += 1
                continue
            try:
                subjects = self._normalize_scores(record.scores)
            except ValidationError as e:
                errors.append({
                    "student_app_id": record.student_app_id,
                    "message": e.message,
                })
                failed += 1
                continue

            self._upsert(
                school_id,
                students_by_id[record.student_app_id],
                classroom,
                request.academic_year,
                request.exam_type,
                subjects,
            )
            # Flush per record so a repeated student merges instead of inserting twice
            self.db.flush()
            successful += 1

        logger.info(
            f"[EXAM BULK] classroom={classroom.name}, year={request.academic_year}, "
            f"exam={request.exam_type}: {successful} saved, {failed} failed, {skipped} skipped"
        )

        return BulkExamResultResponse(
            total_records=len(request.records),
            successful=successful,
            failed=failed,
            skipped=skipped,
            errors=errors,
            message=f"Successfully saved {successful} student results. Failed to save {failed} results.",
        )

    def validate_exam_type(self, exam_type: str) -> None:
        """Reject exam types outside the configured calendar."""
        if self.grading.slot_for(exam_type) is None:
            raise ValidationError(
                f"Unknown exam type '{exam_type}'",
                details={"allowed": self.grading.exam_types},
            )

    def _normalize_scores(self, scores: dict[str, float | None]) -> list[dict]:
        """Map score keys to canonical subjects, dropping blank scores."""
        normalized: dict[str, float] = {}
        unknown = []
        for name, score in scores.items():
            if score is None:
                continue
            subject = self.grading.canonical_subject(name.strip())
            if subject is None:
                unknown.append(name)
                continue
            normalized[subject] = float(score)

        if unknown:
            raise ValidationError(
                f"Unknown subjects: {', '.join(unknown)}",
                details={"unknown_subjects": unknown, "allowed": self.grading.subjects},
            )
        if not normalized:
            raise ValidationError("No scores provided to save.")

        return [{"subject_name": name, "score": score} for name, score in normalized.items()]

    @staticmethod
    def _merge_subjects(existing: list[dict], incoming: list[dict]) -> list[dict]:
        """Replace subjects by case-insensitive name, append new ones."""
        merged = [dict(entry) for entry in existing]
        for entry in incoming:
            key = entry["subject_name"].upper()
            for idx, current in enumerate(merged):
                if current["subject_name"].upper() == key:
                    merged[idx] = entry
                    break
            else:
                merged.append(entry)
        return merged

    def _upsert(
        self,
        school_id: int,
        student: Student,
        classroom: Classroom,
        academic_year: str,
        exam_type: str,
        subjects: list[dict],
    ) -> tuple[ExamResult, bool]:
        """Create or merge the record keyed by (student, academic year, exam type)."""
        existing = self.db.execute(
            select(ExamResult).where(
                ExamResult.school_id == school_id,
                ExamResult.student_app_id == student.student_app_id,
                ExamResult.academic_year == academic_year,
                ExamResult.exam_type == exam_type,
            )
        ).scalar_one_or_none()

        if existing:
            # Assign a new list so the JSON column is flagged as changed
            merged = self._merge_subjects(existing.subjects or [], subjects)
            existing.subjects = merged
            existing.student_name = student.full_name
            existing.classroom_id = classroom.id
            existing.classroom_name = classroom.name
            existing.total_score, existing.average_score = self._score_totals(merged)
            return existing, False

        total, average = self._score_totals(subjects)
        record = ExamResult(
            school_id=school_id,
            student_app_id=student.student_app_id,
            student_name=student.full_name,
            classroom_id=classroom.id,
            classroom_name=classroom.name,
            academic_year=academic_year,
            exam_type=exam_type,
            subjects=subjects,
            total_score=total,
            average_score=average,
        )
        self.db.add(record)
        return record, True

    @staticmethod
    def _score_totals(subjects: list[dict]) -> tuple[float, float]:
        total = sum(entry["score"] for entry in subjects)
        average = total / len(subjects) if subjects else 0
        return total, average

    # ==========================================
    # Retrieval
    # ==========================================

    def get_results_for_classroom(
        self,
        school_id: int,
        classroom_name: str,
        academic_year: str,
        exam_type: str | None = None,
    ) -> list[ExamResultResponse]:
        """Results of a classroom for a year, oldest first.

        The yearly total view (or no exam type) returns every exam type; any
        other exam type must be configured. Oldest first, so later writes win
        during aggregation.
        """
        query = select(ExamResult).where(
            ExamResult.school_id == school_id,
            ExamResult.classroom_name == classroom_name,
            ExamResult.academic_year == academic_year,
        )
        if exam_type and exam_type != YEARLY_EXAM_TOTAL:
            self.validate_exam_type(exam_type)
            query = query.where(ExamResult.exam_type == exam_type)

        query = query.order_by(ExamResult.created_at, ExamResult.id)
        records = self.db.execute(query).scalars().all()
        return [ExamResultResponse.model_validate(r) for r in records]

    def get_results_for_student(
        self,
        school_id: int,
        student_app_id: str,
    ) -> list[ExamResultResponse]:
        """All results of a student across years, newest first."""
        result = self.db.execute(
            select(ExamResult)
            .where(
                ExamResult.school_id == school_id,
                ExamResult.student_app_id == student_app_id,
            )
            .order_by(ExamResult.created_at.desc(), ExamResult.id.desc())
        )
        return [ExamResultResponse.model_validate(r) for r in result.scalars().all()]

    def list_results(
        self,
        school_id: int,
        filters: ExamResultFilter | None = None,
        page: int = 1,
        page_size: int = 50,
    ) -> PaginatedExamResultResponse:
        """List exam results with filtering."""
        query = select(ExamResult).where(ExamResult.school_id == school_id)

        if filters:
            if filters.student_app_id:
                query = query.where(ExamResult.student_app_id == filters.student_app_id)
            if filters.classroom_name:
                query = query.where(ExamResult.classroom_name == filters.classroom_name)
            if filters.academic_year:
                query = query.where(ExamResult.academic_year == filters.academic_year)
            if filters.exam_type and filters.exam_type != YEARLY_EXAM_TOTAL:
                query = query.where(ExamResult.exam_type == filters.exam_type)

        total = self.db.execute(
            select(func.count()).select_from(query.subquery())
        ).scalar() or 0

        query = (
            query
            .order_by(ExamResult.created_at.desc(), ExamResult.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        records = self.db.execute(query).scalars().all()

        return PaginatedExamResultResponse(
            items=[ExamResultResponse.model_validate(r) for r in records],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=(total + page_size - 1) // page_size,
        )

    def get_result(self, school_id: int, result_id: int) -> ExamResult:
        """Get exam result by ID."""
        result = self.db.execute(
            select(ExamResult).where(
                ExamResult.id == result_id,
                ExamResult.school_id == school_id,
            )
        )
        record = result.scalar_one_or_none()
        if not record:
            raise NotFoundError("Exam result", str(result_id))
        return record

    def delete_result(self, school_id: int, result_id: int) -> None:
        """Delete an exam result."""
        record = self.get_result(school_id, result_id)
        self.db.delete(record)
        self.db.flush()
        logger.info(f"[EXAM DELETE] school_id={school_id}, result_id={result_id}")

    def get_grading_config(self) -> GradingConfigResponse:
        """Describe the subjects, exam types and grade bands in effect."""
        return GradingConfigResponse(
            subjects=self.grading.subjects,
            exam_types=self.grading.exam_types,
            yearly_exam_type=YEARLY_EXAM_TOTAL,
            term_max_score=self.grading.term_max_score,
            grade_bands=[
                GradeBandResponse(
                    min_percentage=band.min_percentage,
                    grade=band.grade,
                    remark=band.remark,
                )
                for band in self.grading.grade_bands
            ],
            fail_grade=self.grading.fail_grade,
            fail_remark=self.grading.fail_remark,
        )
