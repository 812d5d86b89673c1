"""Term and grand total aggregation of one student's exam results."""

from collections.abc import Iterable
from typing import Protocol

from pydantic import BaseModel

from schoolhub.grading.classifier import Grading, classify
from schoolhub.grading.config import (
    DEFAULT_GRADING_CONFIG,
    TERM_1_SLOTS,
    TERM_2_SLOTS,
    ExamSlot,
    GradingConfig,
)


class ScoreEntry(Protocol):
    subject_name: str
    score: float


class ExamResultLike(Protocol):
    exam_type: str
    subjects: list[ScoreEntry]


class TermBreakdown(BaseModel):
    """Per-subject scores split into the two terms.

    Slot scores stay None when nothing was recorded, so a missing sitting can
    be told apart from a zero mark; the totals count missing slots as 0.
    """

    monthly1: float | None = None
    midterm: float | None = None
    term1_total: float = 0
    monthly2: float | None = None
    final: float | None = None
    term2_total: float = 0
    total: float = 0
    grade: str

    @property
    def has_scores(self) -> bool:
        return any(
            value is not None
            for value in (self.monthly1, self.midterm, self.monthly2, self.final)
        )


class ColumnTotals(BaseModel):
    """Sum of each report-card column over all subjects."""

    monthly1: float = 0
    midterm: float = 0
    term1_total: float = 0
    monthly2: float = 0
    final: float = 0
    term2_total: float = 0
    total: float = 0


class StudentAggregate(BaseModel):
    """Full yearly aggregate of one student."""

    subjects: dict[str, TermBreakdown]
    column_totals: ColumnTotals
    grand_total: float
    max_total: float
    percentage: float
    overall: Grading


def _index_scores(
    results: Iterable[ExamResultLike],
    config: GradingConfig,
) -> dict[str, dict[ExamSlot, float]]:
    """Build subject -> slot -> score; later results overwrite earlier ones."""
    index: dict[str, dict[ExamSlot, float]] = {subject: {} for subject in config.subjects}
    for result in results:
        slot = config.slot_for(result.exam_type)
        if slot is None:
            continue
        for entry in result.subjects:
            subject = config.canonical_subject(entry.subject_name)
            if subject is None:
                continue
            index[subject][slot] = entry.score
    return index


def _sum_slots(scores: dict[ExamSlot, float], slots: tuple[ExamSlot, ...]) -> float:
    return sum(scores.get(slot) or 0 for slot in slots)


def aggregate(
    results: Iterable[ExamResultLike],
    config: GradingConfig | None = None,
) -> StudentAggregate:
    """Aggregate one student's results for one academic year.

    Unknown subjects and exam types are skipped without error.
    """
    config = config or DEFAULT_GRADING_CONFIG
    index = _index_scores(results, config)

    breakdowns: dict[str, TermBreakdown] = {}
    totals = ColumnTotals()
    for subject in config.subjects:
        scores = index[subject]
        term1_total = _sum_slots(scores, TERM_1_SLOTS)
        term2_total = _sum_slots(scores, TERM_2_SLOTS)
        total = term1_total + term2_total
        breakdown = TermBreakdown(
            monthly1=scores.get(ExamSlot.MONTHLY_1),
            midterm=scores.get(ExamSlot.MIDTERM),
            term1_total=term1_total,
            monthly2=scores.get(ExamSlot.MONTHLY_2),
            final=scores.get(ExamSlot.FINAL),
            term2_total=term2_total,
            total=total,
            grade=classify(total * 100 / config.subject_max_score, config).grade,
        )
        breakdowns[subject] = breakdown

        totals.monthly1 += breakdown.monthly1 or 0
        totals.midterm += breakdown.midterm or 0
        totals.term1_total += term1_total
        totals.monthly2 += breakdown.monthly2 or 0
        totals.final += breakdown.final or 0
        totals.term2_total += term2_total
        totals.total += total

    max_total = config.subject_max_score * len(config.subjects)
    percentage = totals.total * 100 / max_total if max_total else 0

    return StudentAggregate(
        subjects=breakdowns,
        column_totals=totals,
        grand_total=totals.total,
        max_total=max_total,
        percentage=percentage,
        overall=classify(percentage, config),
    )
