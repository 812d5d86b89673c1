import pytest

from schoolhub.grading import GradeBand, GradingConfig, classify


@pytest.mark.parametrize(
    "percentage, grade",
    [
        (90, "A"),
        (89.999, "B"),
        (75, "B"),
        (74.999, "C"),
        (60, "C"),
        (59.999, "D"),
        (50, "D"),
        (49.999, "F"),
        (0, "F"),
    ],
)
def test_classify_boundaries(percentage, grade):
    assert classify(percentage).grade == grade


@pytest.mark.parametrize(
    "percentage, remark",
    [(95, "Excellent"), (80, "Very Good"), (65, "Good"), (55, "Acceptable"), (10, "Fail")],
)
def test_classify_remarks(percentage, remark):
    assert classify(percentage).remark == remark


def test_classify_does_not_clamp_out_of_range_values():
    assert classify(150).grade == "A"
    assert classify(-5).grade == "F"


def test_classify_uses_configured_bands():
    config = GradingConfig(
        grade_bands=[GradeBand(min_percentage=40, grade="P", remark="Pass")],
        fail_grade="U",
        fail_remark="Ungraded",
    )

    assert classify(40, config).grade == "P"
    result = classify(39.5, config)
    assert (result.grade, result.remark) == ("U", "Ungraded")


def test_bands_are_checked_highest_first_whatever_the_input_order():
    config = GradingConfig(
        grade_bands=[
            GradeBand(min_percentage=50, grade="D", remark="Acceptable"),
            GradeBand(min_percentage=90, grade="A", remark="Excellent"),
            GradeBand(min_percentage=75, grade="B", remark="Very Good"),
        ]
    )

    assert [band.grade for band in config.grade_bands] == ["A", "B", "D"]
    assert classify(95, config).grade == "A"
    assert classify(80, config).grade == "B"
    assert classify(55, config).grade == "D"
