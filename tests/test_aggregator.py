from schoolhub.grading import DEFAULT_GRADING_CONFIG, GradingConfig, aggregate


def test_full_year_of_one_subject(make_result):
    results = [
        make_result("Monthly Exam 1", {"REL": 18}),
        make_result("Mid-Exam", {"REL": 22}),
        make_result("Monthly Exam 2", {"REL": 19}),
        make_result("Final Exam", {"REL": 25}),
    ]

    rel = aggregate(results).subjects["REL"]

    assert (rel.monthly1, rel.midterm, rel.monthly2, rel.final) == (18, 22, 19, 25)
    assert rel.term1_total == 40
    assert rel.term2_total == 44
    assert rel.total == 84
    # 84 out of 200 is 42%
    assert rel.grade == "F"


def test_missing_sitting_counts_as_zero_but_stays_unset(make_result):
    results = [make_result("Monthly Exam 1", {"ENG": 30})]

    eng = aggregate(results).subjects["ENG"]

    assert eng.midterm is None
    assert eng.term1_total == 30
    assert eng.term2_total == 0
    assert eng.total == 30
    assert eng.has_scores


def test_subject_names_match_case_insensitively(make_result):
    results = [make_result("Final Exam", {"eng": 70, "math's": 80})]

    subjects = aggregate(results).subjects

    assert subjects["ENG"].final == 70
    assert subjects["MATH'S"].final == 80


def test_unknown_subjects_and_exam_types_are_ignored(make_result):
    results = [
        make_result("Final Exam", {"ENG": 50, "ART": 99}),
        make_result("Quiz", {"ENG": 99}),
    ]

    result = aggregate(results)

    assert "ART" not in result.subjects
    assert result.subjects["ENG"].total == 50
    assert result.grand_total == 50


def test_duplicate_records_overwrite_instead_of_summing(make_result):
    results = [
        make_result("Mid-Exam", {"BIO": 20}),
        make_result("Mid-Exam", {"BIO": 35}),
    ]

    bio = aggregate(results).subjects["BIO"]

    assert bio.midterm == 35
    assert bio.total == 35


def test_no_results_yields_zero_totals():
    result = aggregate([])

    assert result.grand_total == 0
    assert set(result.subjects) == set(DEFAULT_GRADING_CONFIG.subjects)
    assert all(b.total == 0 and not b.has_scores for b in result.subjects.values())
    assert result.overall.grade == "F"


def test_grand_total_and_column_totals(make_result):
    results = [
        make_result("Monthly Exam 1", {"ENG": 10, "CHEM": 5}),
        make_result("Mid-Exam", {"ENG": 20, "CHEM": 15}),
        make_result("Monthly Exam 2", {"ENG": 10}),
        make_result("Final Exam", {"ENG": 40, "CHEM": 30}),
    ]

    result = aggregate(results)

    assert result.grand_total == 130
    totals = result.column_totals
    assert totals.monthly1 == 15
    assert totals.midterm == 35
    assert totals.term1_total == 50
    assert totals.monthly2 == 10
    assert totals.final == 70
    assert totals.term2_total == 80
    assert totals.total == 130
    assert result.max_total == 2000


def test_overall_grade_uses_share_of_maximum(make_result):
    config = GradingConfig(subjects=["ENG", "MATH"])
    perfect = {"ENG": 50, "MATH": 50}
    results = [
        make_result(exam_type, perfect)
        for exam_type in ("Monthly Exam 1", "Mid-Exam", "Monthly Exam 2", "Final Exam")
    ]

    result = aggregate(results, config)

    assert result.grand_total == 400
    assert result.max_total == 400
    assert result.percentage == 100
    assert result.overall.grade == "A"
    assert result.subjects["MATH"].grade == "A"


def test_aggregate_is_idempotent(make_result):
    results = [
        make_result("Monthly Exam 1", {"GEO": 12.5}),
        make_result("Final Exam", {"GEO": 41, "HIS": 33}),
    ]

    first = aggregate(results)
    second = aggregate(results)

    assert first == second
    assert first.model_dump() == second.model_dump()
