"""Aggregator combining factor scores into a composite risk score.

The composite is the weight-normalised sum of factor values:

    total = sum(value_f * weight_f) / 100

Factors the policy names but no calculator produced are filled with the
neutral default and reported as substituted. The aggregation is pure and
deterministic; it never coerces out-of-range values.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from routerisk.core.exceptions import AggregationInvariantError
from routerisk.core.logging import get_logger
from routerisk.risk.types import (
    MAX_FACTOR_SCORE,
    MIN_FACTOR_SCORE,
    FactorId,
    FactorScore,
)
from routerisk.risk.weights import TOTAL_WEIGHT, WeightPolicy

logger = get_logger(__name__)

COMPOSITE_MIN = 0.0
COMPOSITE_MAX = 10.0


@dataclass(frozen=True)
class AggregateResult:
    """Composite score with the factor scores that produced it.

    Attributes:
        total_score: Composite score at full precision.
        factor_scores: One score per policy factor, in policy order.
        substituted: Factors that had no score and received the default.
    """

    total_score: float
    factor_scores: Mapping[FactorId, FactorScore] = field(default_factory=dict)
    substituted: tuple[FactorId, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "factor_scores", MappingProxyType(dict(self.factor_scores)))

    @property
    def display_score(self) -> float:
        """Composite rounded to two decimals for display."""
        return round(self.total_score, 2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_score": self.display_score,
            "factor_scores": {f.value: s.to_dict() for f, s in self.factor_scores.items()},
            "substituted": [f.value for f in self.substituted],
        }


def aggregate(
    factor_scores: Mapping[FactorId, FactorScore],
    weights: WeightPolicy,
) -> AggregateResult:
    """Combine factor scores into the composite weighted score.

    Args:
        factor_scores: Scores keyed by factor. May be incomplete.
        weights: Validated weight policy.

    Returns:
        AggregateResult with the full-precision composite.

    Raises:
        AggregationInvariantError: If a factor value is outside [1, 10] or the
            composite falls outside [0, 10].
    """
    filled: dict[FactorId, FactorScore] = {}
    substituted: list[FactorId] = []

    for factor_id in weights.factor_ids:
        score = factor_scores.get(factor_id)
        if score is None:
            score = FactorScore.default(factor_id, reason="not_calculated")
            substituted.append(factor_id)
        if not (MIN_FACTOR_SCORE <= score.value <= MAX_FACTOR_SCORE) or math.isnan(score.value):
            raise AggregationInvariantError(
                score.value, f"Factor {factor_id.value} score outside [1, 10]"
            )
        filled[factor_id] = score

    total = math.fsum(
        score.value * weights.weight_for(factor_id) for factor_id, score in filled.items()
    ) / TOTAL_WEIGHT

    if not (COMPOSITE_MIN <= total <= COMPOSITE_MAX):
        raise AggregationInvariantError(total, "Composite score outside [0, 10]")

    if substituted:
        logger.debug(
            "Factors substituted with default",
            substituted=[f.value for f in substituted],
        )

    return AggregateResult(
        total_score=total,
        factor_scores=filled,
        substituted=tuple(substituted),
    )
