"""Weighted scoring shared by the ranking engines.

Every engine scores a candidate the same way:

    score = sum(weight * fraction) / sum(weight for applicable criteria)

Criteria that do not apply (e.g. the query never mentioned a socket) are left
out of the denominator instead of counting as zero. Fractions and scores are
always in [0, 1]; engines that report percentages convert once with
``to_percent``.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Criterion:
    """One weighted criterion and how well a candidate satisfied it."""
    name: str
    weight: float
    fraction: float = 0.0
    applicable: bool = True


@dataclass(frozen=True)
class ScoringResult:
    """A bounded score with the per-criterion contributions that produced it."""
    score: float
    breakdown: dict[str, float] = field(default_factory=dict)

    def to_percent(self) -> float:
        return self.score * 100


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def weighted_score(criteria: list[Criterion], default: float = 0.0) -> ScoringResult:
    """Combine criteria into a normalized score in [0, 1].

    Args:
        criteria: Criteria to combine. Fractions are clamped to [0, 1].
        default: Score returned when no criterion is applicable.

    Returns:
        ScoringResult whose breakdown maps each applicable criterion to its
        weighted contribution (weight * fraction).
    """
    total_weight = 0.0
    achieved = 0.0
    breakdown: dict[str, float] = {}
    for c in criteria:
        if not c.applicable or c.weight <= 0:
            continue
        contribution = c.weight * clamp(c.fraction)
        total_weight += c.weight
        achieved += contribution
        breakdown[c.name] = round(contribution, 4)

    if total_weight == 0:
        return ScoringResult(score=clamp(default), breakdown=breakdown)
    return ScoringResult(score=clamp(achieved / total_weight), breakdown=breakdown)


def relative_error(expected: float, actual: float) -> float:
    """Relative difference of actual vs expected (0 when expected is 0)."""
    if expected == 0:
        return 0.0 if actual == 0 else 1.0
    return abs(actual - expected) / abs(expected)
