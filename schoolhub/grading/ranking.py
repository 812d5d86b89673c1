"""Competition ranking of students by grand total."""

from collections.abc import Sequence

from pydantic import BaseModel


class RankCandidate(BaseModel):
    student_id: str
    student_name: str
    grand_total: float


class RankedStudent(RankCandidate):
    rank: int
    class_size: int

    @property
    def position(self) -> str:
        """Display form used on report cards, e.g. '2 of 30'."""
        return f"{self.rank} of {self.class_size}"


def rank_students(candidates: Sequence[RankCandidate]) -> list[RankedStudent]:
    """Rank candidates by grand total, highest first.

    Equal totals share a rank and the next distinct total takes its 1-based
    position, giving 1, 2, 2, 4. Exact ties keep their input order.
    """
    ordered = sorted(candidates, key=lambda c: c.grand_total, reverse=True)
    class_size = len(ordered)

    ranked: list[RankedStudent] = []
    for position, candidate in enumerate(ordered, start=1):
        rank = position
        if ranked and candidate.grand_total == ranked[-1].grand_total:
            rank = ranked[-1].rank
        ranked.append(
            RankedStudent(
                student_id=candidate.student_id,
                student_name=candidate.student_name,
                grand_total=candidate.grand_total,
                rank=rank,
                class_size=class_size,
            )
        )
    return ranked
