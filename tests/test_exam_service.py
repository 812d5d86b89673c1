import pytest

from schoolhub.core.exceptions import NotFoundError, ValidationError
from schoolhub.schemas.classroom import ClassroomCreate
from schoolhub.schemas.exam import (
    BulkExamResultCreate,
    ExamResultCreate,
    ExamResultFilter,
    StudentScoresInput,
)
from schoolhub.schemas.student import StudentCreate
from schoolhub.services.classroom import ClassroomService
from schoolhub.services.exam import ExamService
from schoolhub.services.student import StudentService

YEAR = "2024-2025"


def entry(classroom, student_app_id, exam_type, scores):
    return ExamResultCreate(
        student_app_id=student_app_id,
        classroom_id=classroom.id,
        academic_year=YEAR,
        exam_type=exam_type,
        scores=scores,
    )


def test_save_result_creates_record(db, school, classroom, roster):
    result = ExamService(db).save_result(
        school.id, entry(classroom, "S-001", "Mid-Exam", {"eng": 40, "MATH'S": 50, "BIO": None})
    )

    assert result.student_name == "Amina Hassan"
    assert result.classroom_name == "Form 1"
    assert [(s.subject_name, s.score) for s in result.subjects] == [("ENG", 40), ("MATH'S", 50)]
    assert result.total_score == 90
    assert result.average_score == 45


def test_saving_again_merges_into_existing_record(db, school, classroom, roster):
    service = ExamService(db)
    first = service.save_result(school.id, entry(classroom, "S-001", "Final Exam", {"ENG": 40}))
    second = service.save_result(
        school.id, entry(classroom, "S-001", "Final Exam", {"eng": 45, "HIS": 35})
    )

    assert second.id == first.id
    assert {s.subject_name: s.score for s in second.subjects} == {"ENG": 45, "HIS": 35}
    assert second.total_score == 80
    assert second.average_score == 40

    results = service.get_results_for_student(school.id, "S-001")
    assert len(results) == 1


@pytest.mark.parametrize(
    "exam_type, scores, message",
    [
        ("Mid-Exam", {"ENG": None}, "No scores provided to save."),
        ("Mid-Exam", {}, "No scores provided to save."),
        ("Mid-Exam", {"ART": 10}, "Unknown subjects: ART"),
        ("Quiz", {"ENG": 10}, "Unknown exam type 'Quiz'"),
        ("Yearly Exam Total", {"ENG": 10}, "Unknown exam type 'Yearly Exam Total'"),
    ],
)
def test_save_result_rejects_invalid_input(db, school, classroom, roster, exam_type, scores, message):
    with pytest.raises(ValidationError) as exc_info:
        ExamService(db).save_result(school.id, entry(classroom, "S-001", exam_type, scores))

    assert exc_info.value.message == message


def test_save_result_requires_student_in_classroom(db, school, classroom, roster):
    other = ClassroomService(db).create_classroom(school.id, ClassroomCreate(name="Form 2"))

    with pytest.raises(ValidationError):
        ExamService(db).save_result(school.id, entry(other, "S-001", "Mid-Exam", {"ENG": 10}))


def test_save_result_unknown_student_or_classroom(db, school, classroom, roster):
    service = ExamService(db)

    with pytest.raises(NotFoundError):
        service.save_result(school.id, entry(classroom, "S-999", "Mid-Exam", {"ENG": 10}))

    missing = ExamResultCreate(
        student_app_id="S-001",
        classroom_id=999,
        academic_year=YEAR,
        exam_type="Mid-Exam",
        scores={"ENG": 10},
    )
    with pytest.raises(NotFoundError):
        service.save_result(school.id, missing)


def test_bulk_save_is_all_or_nothing(db, school, classroom, roster):
    service = ExamService(db)
    request = BulkExamResultCreate(
        classroom_id=classroom.id,
        academic_year=YEAR,
        exam_type="Monthly Exam 1",
        records=[
            StudentScoresInput(student_app_id="S-001", scores={"ENG": 20}),
            StudentScoresInput(student_app_id="S-404", scores={"ENG": 20}),
        ],
    )

    response = service.bulk_save(school.id, request)

    assert response.successful == 0
    assert response.failed == 1
    assert response.errors[0]["student_app_id"] == "S-404"
    assert response.message == "Validation failed. No records were saved."
    assert service.get_results_for_student(school.id, "S-001") == []


def test_bulk_save_skips_students_without_scores(db, school, classroom, roster):
    service = ExamService(db)
    request = BulkExamResultCreate(
        classroom_id=classroom.id,
        academic_year=YEAR,
        exam_type="Monthly Exam 1",
        records=[
            StudentScoresInput(student_app_id="S-001", scores={"ENG": 20, "REL": 18}),
            StudentScoresInput(student_app_id="S-002", scores={"ENG": None}),
            StudentScoresInput(student_app_id="S-003", scores={"ART": 12}),
            StudentScoresInput(student_app_id="S-004", scores={"ENG": 15}),
        ],
    )

    response = service.bulk_save(school.id, request)

    assert response.total_records == 4
    assert response.successful == 2
    assert response.skipped == 1
    assert response.failed == 1
    assert response.errors[0]["student_app_id"] == "S-003"

    saved = service.get_results_for_classroom(school.id, "Form 1", YEAR)
    assert sorted(r.student_app_id for r in saved) == ["S-001", "S-004"]


def test_bulk_save_merges_repeated_student(db, school, classroom, roster):
    service = ExamService(db)
    request = BulkExamResultCreate(
        classroom_id=classroom.id,
        academic_year=YEAR,
        exam_type="Final Exam",
        records=[
            StudentScoresInput(student_app_id="S-001", scores={"ENG": 20}),
            StudentScoresInput(student_app_id="S-001", scores={"BIO": 30}),
        ],
    )

    response = service.bulk_save(school.id, request)

    assert response.successful == 2
    results = service.get_results_for_student(school.id, "S-001")
    assert len(results) == 1
    assert results[0].total_score == 50


def test_classroom_results_filter_by_exam_type(db, school, classroom, roster):
    service = ExamService(db)
    service.save_result(school.id, entry(classroom, "S-001", "Monthly Exam 1", {"ENG": 20}))
    service.save_result(school.id, entry(classroom, "S-001", "Mid-Exam", {"ENG": 30}))
    service.save_result(school.id, entry(classroom, "S-002", "Mid-Exam", {"ENG": 25}))

    yearly = service.get_results_for_classroom(school.id, "Form 1", YEAR, "Yearly Exam Total")
    everything = service.get_results_for_classroom(school.id, "Form 1", YEAR)
    midterm = service.get_results_for_classroom(school.id, "Form 1", YEAR, "Mid-Exam")

    assert len(yearly) == len(everything) == 3
    assert [r.student_app_id for r in midterm] == ["S-001", "S-002"]
    assert service.get_results_for_classroom(school.id, "Form 1", "2023-2024") == []


def test_results_are_scoped_to_school(db, school, classroom, roster):
    service = ExamService(db)
    service.save_result(school.id, entry(classroom, "S-001", "Mid-Exam", {"ENG": 20}))

    assert service.get_results_for_student(school.id + 1, "S-001") == []
    assert service.list_results(school.id + 1).total == 0


def test_list_get_and_delete_results(db, school, classroom, roster):
    service = ExamService(db)
    saved = service.save_result(school.id, entry(classroom, "S-001", "Mid-Exam", {"ENG": 20}))
    service.save_result(school.id, entry(classroom, "S-002", "Mid-Exam", {"ENG": 30}))

    page = service.list_results(school.id, ExamResultFilter(student_app_id="S-002"))
    assert page.total == 1
    assert page.items[0].student_app_id == "S-002"

    assert service.get_result(school.id, saved.id).student_app_id == "S-001"
    service.delete_result(school.id, saved.id)
    with pytest.raises(NotFoundError):
        service.get_result(school.id, saved.id)


def test_student_results_span_classrooms(db, school, classroom, roster):
    service = ExamService(db)
    students = StudentService(db)
    other = ClassroomService(db).create_classroom(school.id, ClassroomCreate(name="Form 2"))
    students.create_student(
        school.id,
        StudentCreate(student_app_id="S-010", full_name="Faisal Omar", grade_applying_for="Form 2"),
    )
    service.save_result(school.id, entry(other, "S-010", "Mid-Exam", {"ENG": 20}))

    assert len(service.get_results_for_student(school.id, "S-010")) == 1
    assert service.get_results_for_classroom(school.id, "Form 1", YEAR) == []


def test_grading_config_lists_exam_types(db):
    config = ExamService(db).get_grading_config()

    assert config.exam_types == ["Monthly Exam 1", "Mid-Exam", "Monthly Exam 2", "Final Exam"]
    assert config.yearly_exam_type == "Yearly Exam Total"
    assert "MATH'S" in config.subjects
    assert [band.grade for band in config.grade_bands] == ["A", "B", "C", "D"]


def test_classroom_results_reject_unknown_exam_type(db, school, classroom, roster):
    with pytest.raises(ValidationError):
        ExamService(db).get_results_for_classroom(school.id, "Form 1", YEAR, "Bogus")
