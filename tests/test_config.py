import pytest

from schoolhub.core.config import Settings
from schoolhub.core.exceptions import ValidationError
from schoolhub.grading import ExamSlot, aggregate
from schoolhub.services.exam import ExamService


def test_default_grading_config():
    config = Settings().grading_config

    assert len(config.subjects) == 10
    assert config.exam_types == ["Monthly Exam 1", "Mid-Exam", "Monthly Exam 2", "Final Exam"]
    assert config.subject_max_score == 200


def test_grading_overrides_from_environment(monkeypatch, make_result):
    monkeypatch.setenv("ACADEMIC_SUBJECTS", '["ENG", "KISWAHILI"]')
    monkeypatch.setenv("EXAM_TYPE_SLOTS", '{"Opener": "monthly1", "End Term": "final"}')
    monkeypatch.setenv("TERM_MAX_SCORE", "50")

    config = Settings().grading_config

    assert config.subjects == ["ENG", "KISWAHILI"]
    assert config.exam_type_slots == {"Opener": ExamSlot.MONTHLY_1, "End Term": ExamSlot.FINAL}

    result = aggregate(
        [
            make_result("Opener", {"kiswahili": 40, "MATH'S": 90}),
            make_result("End Term", {"KISWAHILI": 50}),
            make_result("Mid-Exam", {"ENG": 30}),
        ],
        config,
    )
    assert set(result.subjects) == {"ENG", "KISWAHILI"}
    assert result.subjects["KISWAHILI"].total == 90
    # 90 out of 100 available for the subject
    assert result.subjects["KISWAHILI"].grade == "A"
    assert result.grand_total == 90
    assert result.max_total == 200


def test_exam_service_uses_configured_exam_types(db):
    config = Settings(EXAM_TYPE_SLOTS={"Opener": "monthly1", "End Term": "final"}).grading_config
    service = ExamService(db, grading=config)

    service.validate_exam_type("End Term")
    with pytest.raises(ValidationError):
        service.validate_exam_type("Mid-Exam")
    assert service.get_grading_config().exam_types == ["Opener", "End Term"]
