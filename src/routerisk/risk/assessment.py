"""Route risk assessment result."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any
from uuid import UUID

from uuid_utils import uuid7

from routerisk.risk.confidence import DataQuality
from routerisk.risk.explanations import RankedFactor, SafetyRecommendation
from routerisk.risk.grading import RiskGrade
from routerisk.risk.types import FactorId, FactorScore


@dataclass(frozen=True)
class RiskAssessment:
    """Complete, immutable risk assessment for one route.

    Produced fresh on every calculation; the engine keeps no copy.
    """

    route_id: str
    factor_scores: Mapping[FactorId, FactorScore]
    total_weighted_score: float
    risk_grade: RiskGrade
    risk_level: str
    top_risk_factors: tuple[RankedFactor, ...]
    recommendations: tuple[str, ...]
    data_quality: DataQuality
    confidence_level: int
    calculated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    risk_explanation: str = ""
    recommendation_details: tuple[SafetyRecommendation, ...] = ()
    assessment_id: UUID = field(default_factory=uuid7)

    def __post_init__(self) -> None:
        object.__setattr__(self, "factor_scores", MappingProxyType(dict(self.factor_scores)))

    @property
    def display_score(self) -> float:
        """Composite score rounded to two decimals."""
        return round(self.total_weighted_score, 2)

    @property
    def is_high_risk(self) -> bool:
        """Check if the route falls in the high-risk range (above 6)."""
        return self.total_weighted_score > 6.0

    @property
    def is_critical_risk(self) -> bool:
        """Check if the route falls in the critical range (above 8)."""
        return self.total_weighted_score > 8.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to the serialized response form."""
        return {
            "assessment_id": str(self.assessment_id),
            "route_id": self.route_id,
            "factor_scores": {
                factor_id.value: score.to_dict() for factor_id, score in self.factor_scores.items()
            },
            "total_weighted_score": self.display_score,
            "risk_grade": self.risk_grade.value,
            "risk_level": self.risk_level,
            "top_risk_factors": [f.to_dict() for f in self.top_risk_factors],
            "recommendations": list(self.recommendations),
            "recommendation_details": [r.to_dict() for r in self.recommendation_details],
            "risk_explanation": self.risk_explanation,
            "data_quality": self.data_quality.to_dict(),
            "confidence_level": self.confidence_level,
            "calculated_at": self.calculated_at.isoformat(),
        }
