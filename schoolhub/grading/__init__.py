"""Exam aggregation, grade classification and ranking."""

from schoolhub.grading.aggregator import ColumnTotals, StudentAggregate, TermBreakdown, aggregate
from schoolhub.grading.classifier import Grading, classify
from schoolhub.grading.config import (
    DEFAULT_GRADING_CONFIG,
    YEARLY_EXAM_TOTAL,
    ExamSlot,
    GradeBand,
    GradingConfig,
)
from schoolhub.grading.ranking import RankCandidate, RankedStudent, rank_students

__all__ = [
    "aggregate",
    "classify",
    "rank_students",
    "ColumnTotals",
    "StudentAggregate",
    "TermBreakdown",
    "Grading",
    "GradeBand",
    "GradingConfig",
    "ExamSlot",
    "RankCandidate",
    "RankedStudent",
    "DEFAULT_GRADING_CONFIG",
    "YEARLY_EXAM_TOTAL",
]
