"""Report cards and class rankings built from stored exam results."""

import logging
from collections import defaultdict
from io import BytesIO
from typing import NamedTuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from sqlalchemy.orm import Session

from schoolhub.core.config import settings
from schoolhub.grading import (
    YEARLY_EXAM_TOTAL,
    GradingConfig,
    RankCandidate,
    RankedStudent,
    StudentAggregate,
    aggregate,
    classify,
    rank_students,
)
from schoolhub.models.student import Student
from schoolhub.schemas.exam import ExamResultResponse
from schoolhub.schemas.report import (
    ClassRankingResponse,
    ClassReportCardEntry,
    ClassReportCardsResponse,
    ColumnTotalsResponse,
    RankingEntry,
    RankSort,
    ReportCardBody,
    SingleExamBody,
    StudentReportResponse,
    StudentSummary,
    SubjectBreakdownRow,
)
from schoolhub.services.classroom import ClassroomService
from schoolhub.services.exam import ExamService
from schoolhub.services.student import StudentService

logger = logging.getLogger(__name__)


class ClassStanding(NamedTuple):
    student: Student
    aggregate: StudentAggregate
    ranked: RankedStudent


class ReportService:
    """Yearly report cards and rankings.

    Both the single-student report card and the classroom views go through
    compute_class_standings, so they always agree on totals and ranks.
    """

    def __init__(self, db: Session, grading: GradingConfig | None = None):
        self.db = db
        self.grading = grading or settings.grading_config
        self.exams = ExamService(db, self.grading)
        self.students = StudentService(db)
        self.classrooms = ClassroomService(db)

    def compute_class_standings(
        self,
        school_id: int,
        classroom_name: str,
        academic_year: str,
        exam_type: str | None = None,
    ) -> list[ClassStanding]:
        """Aggregate and rank the students of a classroom for one year.

        The class is the current roster plus every student with results
        recorded under this classroom for the year, so former members keep
        their place in past years. Students without results rank with a grand
        total of 0. The returned list is ordered by name.
        """
        if exam_type and exam_type != YEARLY_EXAM_TOTAL:
            self.exams.validate_exam_type(exam_type)

        results = self.exams.get_results_for_classroom(school_id, classroom_name, academic_year)
        roster = self.students.get_roster(school_id, classroom_name)
        on_roster = {s.student_app_id for s in roster}
        former = self.students.get_students_by_ids(
            school_id, {r.student_app_id for r in results} - on_roster
        )
        members = sorted(roster + former, key=lambda s: (s.full_name, s.student_app_id))
        if not members:
            return []

        results_by_student: dict[str, list[ExamResultResponse]] = defaultdict(list)
        for result in results:
            if exam_type and exam_type != YEARLY_EXAM_TOTAL and result.exam_type != exam_type:
                continue
            results_by_student[result.student_app_id].append(result)

        aggregates = {
            s.student_app_id: aggregate(results_by_student.get(s.student_app_id, []), self.grading)
            for s in members
        }
        ranked = rank_students([
            RankCandidate(
                student_id=s.student_app_id,
                student_name=s.full_name,
                grand_total=aggregates[s.student_app_id].grand_total,
            )
            for s in members
        ])
        ranked_by_id = {r.student_id: r for r in ranked}

        logger.debug(
            f"[RANKING] school_id={school_id}, classroom={classroom_name}, "
            f"year={academic_year}, exam={exam_type or YEARLY_EXAM_TOTAL}: "
            f"{len(members)} students ({len(former)} former)"
        )
        return [
            ClassStanding(
                student=s,
                aggregate=aggregates[s.student_app_id],
                ranked=ranked_by_id[s.student_app_id],
            )
            for s in members
        ]

    # ==========================================
    # Classroom views
    # ==========================================

    def get_class_ranking(
        self,
        school_id: int,
        classroom_id: int,
        academic_year: str,
        exam_type: str | None = None,
        sort: RankSort = "rank",
    ) -> ClassRankingResponse:
        """Ranked list of a classroom."""
        classroom = self.classrooms.get_classroom(school_id, classroom_id)
        standings = self._sorted(
            self.compute_class_standings(school_id, classroom.name, academic_year, exam_type),
            sort,
        )
        return ClassRankingResponse(
            classroom_id=classroom.id,
            classroom_name=classroom.name,
            academic_year=academic_year,
            exam_type=exam_type or YEARLY_EXAM_TOTAL,
            sort=sort,
            total_students=len(standings),
            entries=[
                RankingEntry(
                    rank=s.ranked.rank,
                    position=s.ranked.position,
                    student_app_id=s.student.student_app_id,
                    full_name=s.student.full_name,
                    grand_total=s.aggregate.grand_total,
                    percentage=s.aggregate.percentage,
                    overall_grade=s.aggregate.overall.grade,
                )
                for s in standings
            ],
        )

    def get_class_report_cards(
        self,
        school_id: int,
        classroom_id: int,
        academic_year: str,
        exam_type: str | None = None,
        sort: RankSort = "name",
        school_name: str | None = None,
    ) -> ClassReportCardsResponse:
        """Report cards of every student in a classroom, for bulk printing."""
        classroom = self.classrooms.get_classroom(school_id, classroom_id)
        standings = self._sorted(
            self.compute_class_standings(school_id, classroom.name, academic_year, exam_type),
            sort,
        )
        exam_label = exam_type or YEARLY_EXAM_TOTAL
        report_name = "Annual Report" if exam_label == YEARLY_EXAM_TOTAL else exam_label

        return ClassReportCardsResponse(
            classroom_id=classroom.id,
            classroom_name=classroom.name,
            academic_year=academic_year,
            exam_type=exam_label,
            title=f"{classroom.name} - {report_name} - {academic_year}",
            school_name=school_name or settings.DEFAULT_SCHOOL_NAME,
            sort=sort,
            total_students=len(standings),
            report_cards=[
                ClassReportCardEntry(
                    student=self._student_summary(s.student),
                    report_card=self._report_body(s.aggregate, s.ranked),
                )
                for s in standings
            ],
        )

    @staticmethod
    def _sorted(standings: list[ClassStanding], sort: RankSort) -> list[ClassStanding]:
        if sort == "rank":
            # Stable: equal ranks keep name order
            return sorted(standings, key=lambda s: s.ranked.rank)
        return standings

    # ==========================================
    # Student view
    # ==========================================

    def get_student_report(
        self,
        school_id: int,
        student_app_id: str,
        academic_year: str | None = None,
        exam_type: str | None = None,
        school_name: str | None = None,
    ) -> StudentReportResponse:
        """Report of one student.

        Defaults to the most recent academic year and the yearly total view.
        A single exam type shows that sitting only and carries no rank.
        """
        student = self.students.get_student(school_id, student_app_id)
        results = self.exams.get_results_for_student(school_id, student_app_id)

        available_years = sorted({r.academic_year for r in results}, reverse=True)
        year = academic_year or (available_years[0] if available_years else None)
        exam_type = exam_type or YEARLY_EXAM_TOTAL
        if exam_type != YEARLY_EXAM_TOTAL:
            self.exams.validate_exam_type(exam_type)

        # Newest first from the repository; aggregation wants oldest first
        year_results = [r for r in reversed(results) if r.academic_year == year]

        response = StudentReportResponse(
            student=self._student_summary(student),
            school_name=school_name or settings.DEFAULT_SCHOOL_NAME,
            academic_year=year,
            exam_type=exam_type,
            available_years=available_years,
            available_exam_types=self._exam_types_present(year_results),
        )
        if year is None:
            return response

        if exam_type != YEARLY_EXAM_TOTAL:
            selected = next((r for r in reversed(year_results) if r.exam_type == exam_type), None)
            if selected:
                grading = classify(selected.average_score, self.grading)
                response.exam_result = SingleExamBody(
                    subjects=selected.subjects,
                    total_score=selected.total_score,
                    average_score=selected.average_score,
                    grade=grading.grade,
                    remark=grading.remark,
                )
            return response

        # Rank within the classroom the year was recorded under; the student
        # is a member of that class through their results or the roster
        classroom_name = (
            year_results[-1].classroom_name if year_results else student.grade_applying_for
        )
        standings = self.compute_class_standings(school_id, classroom_name, year)
        standing = next(
            s for s in standings if s.student.student_app_id == student.student_app_id
        )
        response.report_card = self._report_body(standing.aggregate, standing.ranked)
        return response

    def _exam_types_present(self, results: list[ExamResultResponse]) -> list[str]:
        present = {r.exam_type for r in results}
        ordered = [t for t in self.grading.exam_types if t in present]
        return [YEARLY_EXAM_TOTAL, *ordered]

    # ==========================================
    # Export
    # ==========================================

    def export_class_ranking(
        self,
        school_id: int,
        classroom_id: int,
        academic_year: str,
        exam_type: str | None = None,
    ) -> bytes:
        """Ranked class list as an Excel workbook."""
        classroom = self.classrooms.get_classroom(school_id, classroom_id)
        standings = self._sorted(
            self.compute_class_standings(school_id, classroom.name, academic_year, exam_type),
            "rank",
        )
        exam_label = exam_type or YEARLY_EXAM_TOTAL

        wb = Workbook()
        ws = wb.active
        ws.title = "Class Results"

        # Styles
        title_font = Font(bold=True, size=14)
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        center_align = Alignment(horizontal="center", vertical="center")

        headers = [
            "Rank",
            "Student ID",
            "Student Name",
            *self.grading.subjects,
            "Grand Total",
            "Percentage",
            "Grade",
        ]

        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(headers))
        title_cell = ws.cell(
            row=1, column=1, value=f"{classroom.name} - {exam_label} - {academic_year}"
        )
        title_cell.font = title_font
        title_cell.alignment = center_align

        for col_idx, header in enumerate(headers, start=1):
            cell = ws.cell(row=2, column=col_idx, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.border = thin_border
            cell.alignment = center_align

        for row_idx, standing in enumerate(standings, start=3):
            subject_totals = [
                standing.aggregate.subjects[subject].total
                if standing.aggregate.subjects[subject].has_scores else "-"
                for subject in self.grading.subjects
            ]
            row = [
                standing.ranked.rank,
                standing.student.student_app_id,
                standing.student.full_name,
                *subject_totals,
                standing.aggregate.grand_total,
                round(standing.aggregate.percentage, 2),
                standing.aggregate.overall.grade,
            ]
            for col_idx, value in enumerate(row, start=1):
                ws.cell(row=row_idx, column=col_idx, value=value).border = thin_border

        ws.column_dimensions["A"].width = 8
        ws.column_dimensions["B"].width = 15
        ws.column_dimensions["C"].width = 30
        for col_idx in range(4, len(headers) + 1):
            ws.column_dimensions[get_column_letter(col_idx)].width = 12

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output.getvalue()

    # ==========================================
    # Helper Methods
    # ==========================================

    @staticmethod
    def _student_summary(student: Student) -> StudentSummary:
        return StudentSummary(
            student_app_id=student.student_app_id,
            full_name=student.full_name,
            grade_applying_for=student.grade_applying_for,
            parent_name=student.parent_name,
            parent_contact=student.parent_contact,
        )

    def _report_body(
        self,
        student_aggregate: StudentAggregate,
        ranked: RankedStudent | None,
    ) -> ReportCardBody:
        rows = [
            SubjectBreakdownRow(
                subject=subject,
                has_scores=breakdown.has_scores,
                **breakdown.model_dump(),
            )
            for subject, breakdown in student_aggregate.subjects.items()
        ]
        return ReportCardBody(
            subjects=rows,
            column_totals=ColumnTotalsResponse(**student_aggregate.column_totals.model_dump()),
            grand_total=student_aggregate.grand_total,
            max_total=student_aggregate.max_total,
            percentage=student_aggregate.percentage,
            overall_grade=student_aggregate.overall.grade,
            overall_remark=student_aggregate.overall.remark,
            rank=ranked.rank if ranked else None,
            class_size=ranked.class_size if ranked else None,
            position=ranked.position if ranked else "N/A",
        )
