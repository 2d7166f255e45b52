"""Risk explanations and safety recommendations.

This module provides:
- Ranking of factor scores into the top contributing risk factors
- A natural language narrative for the assessment
- Rule-based safety recommendations with priority and category
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from routerisk.core.logging import get_logger
from routerisk.risk.grading import GradeBand
from routerisk.risk.types import FACTOR_LABELS, FactorId, FactorOrigin, FactorScore
from routerisk.risk.weights import WeightPolicy

logger = get_logger(__name__)


# =============================================================================
# Enums
# =============================================================================


class RecommendationPriority(str, Enum):
    """Urgency of a safety recommendation."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True)
class SafetyRecommendation:
    """A single safety recommendation.

    Attributes:
        text: Recommendation shown to the driver or planner.
        priority: Urgency of the recommendation.
        category: Grouping such as "overall", "communication" or a factor id.
        factor_id: Factor that triggered it, if any.
    """

    text: str
    priority: RecommendationPriority = RecommendationPriority.MEDIUM
    category: str = "general"
    factor_id: FactorId | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "priority": self.priority.value,
            "category": self.category,
            "factor_id": self.factor_id.value if self.factor_id else None,
        }


@dataclass(frozen=True)
class RankedFactor:
    """A factor score annotated with its label and policy weight."""

    factor_id: FactorId
    value: float
    weight: int
    origin: FactorOrigin

    @property
    def label(self) -> str:
        """Human-readable factor name."""
        return FACTOR_LABELS[self.factor_id]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "factor_id": self.factor_id.value,
            "label": self.label,
            "value": round(self.value, 2),
            "weight": self.weight,
            "origin": self.origin.value,
        }


@dataclass(frozen=True)
class Explanation:
    """Synthesized explanation of an assessment."""

    top_risk_factors: tuple[RankedFactor, ...] = ()
    narrative: str = ""
    recommendations: tuple[SafetyRecommendation, ...] = field(default_factory=tuple)

    @property
    def recommendation_texts(self) -> tuple[str, ...]:
        """Recommendation texts in output order."""
        return tuple(r.text for r in self.recommendations)


# =============================================================================
# Recommendation Tables
# =============================================================================

OVERALL_ADVISORY = SafetyRecommendation(
    text="CRITICAL RISK: Consider postponing journey or using alternative route",
    priority=RecommendationPriority.CRITICAL,
    category="overall",
)

_GUIDANCE_TABLE: dict[FactorId, tuple[tuple[RecommendationPriority, str, str], ...]] = {
    FactorId.ROAD_CONDITIONS: (
        (RecommendationPriority.HIGH, "vehicle",
         "Inspect vehicle thoroughly, especially brakes and suspension"),
        (RecommendationPriority.HIGH, "driving", "Reduce speed and increase following distance"),
    ),
    FactorId.ACCIDENT_PRONE: (
        (RecommendationPriority.CRITICAL, "route",
         "Exercise extreme caution in identified accident zones"),
        (RecommendationPriority.HIGH, "convoy", "Consider convoy travel through high-risk areas"),
    ),
    FactorId.SHARP_TURNS: (
        (RecommendationPriority.HIGH, "driving", "Reduce speed significantly before sharp turns"),
        (RecommendationPriority.HIGH, "safety", "Use horn signals when approaching blind curves"),
    ),
    FactorId.BLIND_SPOTS: (
        (RecommendationPriority.CRITICAL, "visibility",
         "Exercise extreme caution in areas with limited visibility"),
        (RecommendationPriority.HIGH, "speed", "Reduce speed to 25-35 km/h in blind spot areas"),
    ),
    FactorId.TWO_WAY_TRAFFIC: (
        (RecommendationPriority.HIGH, "driving", "Avoid overtaking in single-lane sections"),
        (RecommendationPriority.MEDIUM, "safety", "Use horn to alert oncoming traffic"),
    ),
    FactorId.TRAFFIC_DENSITY: (
        (RecommendationPriority.MEDIUM, "timing", "Avoid peak traffic hours if possible"),
        (RecommendationPriority.MEDIUM, "fuel",
         "Maintain higher fuel levels due to potential delays"),
    ),
    FactorId.WEATHER_CONDITIONS: (
        (RecommendationPriority.HIGH, "weather", "Monitor weather conditions continuously"),
        (RecommendationPriority.HIGH, "timing", "Delay travel during severe weather warnings"),
    ),
    FactorId.EMERGENCY_SERVICES: (
        (RecommendationPriority.MEDIUM, "emergency",
         "Carry additional emergency supplies due to limited services"),
        (RecommendationPriority.MEDIUM, "communication", "Ensure reliable communication equipment"),
    ),
    FactorId.NETWORK_COVERAGE: (
        (RecommendationPriority.HIGH, "communication",
         "Carry satellite communication device for remote areas"),
        (RecommendationPriority.MEDIUM, "preparation",
         "Brief drivers on dead zone locations and emergency procedures"),
    ),
    FactorId.AMENITIES: (
        (RecommendationPriority.MEDIUM, "fuel",
         "Carry extra fuel - limited fuel stations in rural areas"),
        (RecommendationPriority.MEDIUM, "planning",
         "Plan rest and refuelling stops before departure"),
    ),
    FactorId.SECURITY_ISSUES: (
        (RecommendationPriority.HIGH, "security",
         "Avoid night travel through this area if possible"),
        (RecommendationPriority.HIGH, "convoy", "Consider convoy travel"),
    ),
}

# Guidance emitted for a factor scoring above the factor threshold
FACTOR_GUIDANCE: dict[FactorId, tuple[SafetyRecommendation, ...]] = {
    factor_id: tuple(
        SafetyRecommendation(text=text, priority=priority, category=category, factor_id=factor_id)
        for priority, category, text in entries
    )
    for factor_id, entries in _GUIDANCE_TABLE.items()
}

BASELINE_RECOMMENDATIONS: tuple[SafetyRecommendation, ...] = (
    SafetyRecommendation(
        text="Maintain constant communication with control room",
        priority=RecommendationPriority.HIGH,
        category="communication",
    ),
    SafetyRecommendation(
        text="Carry comprehensive emergency kit",
        priority=RecommendationPriority.MEDIUM,
        category="preparation",
    ),
    SafetyRecommendation(
        text="Keep emergency contact numbers accessible",
        priority=RecommendationPriority.MEDIUM,
        category="documentation",
    ),
)

# Closing narrative sentence by composite score, highest threshold first
NARRATIVE_CLOSINGS: tuple[tuple[float, str], ...] = (
    (8.0, "This route presents critical safety concerns and alternative options "
     "should be strongly considered."),
    (6.0, "This route requires enhanced safety measures and careful monitoring."),
    (4.0, "This route has moderate risk factors that should be addressed with "
     "standard safety protocols."),
)
LOW_RISK_CLOSING = "This route presents low risk with standard safety measures recommended."


# =============================================================================
# Synthesizer
# =============================================================================


class ExplanationSynthesizer:
    """Builds the ranked factors, narrative and recommendations.

    Example:
        ```python
        synthesizer = ExplanationSynthesizer()
        explanation = synthesizer.synthesize(scores, policy, total, band)
        print(explanation.narrative)
        ```
    """

    def __init__(
        self,
        top_n: int = 5,
        narrative_factors: int = 3,
        factor_threshold: float = 7.0,
        critical_threshold: float = 8.0,
    ):
        """Initialize the synthesizer.

        Args:
            top_n: Number of top risk factors to report.
            narrative_factors: Number of factors named in the narrative.
            factor_threshold: Factor value above which guidance is emitted.
            critical_threshold: Composite score at or above which the
                overall advisory is emitted.
        """
        self.top_n = top_n
        self.narrative_factors = narrative_factors
        self.factor_threshold = factor_threshold
        self.critical_threshold = critical_threshold

    def rank_factors(
        self,
        factor_scores: Mapping[FactorId, FactorScore],
        weights: WeightPolicy,
    ) -> list[RankedFactor]:
        """Rank every factor by value, highest first.

        Ties keep policy order, so the ranking is deterministic.
        """
        ordered = [f for f in weights.factor_ids if f in factor_scores]
        ordered += [f for f in factor_scores if f not in ordered]
        ranked = [
            RankedFactor(
                factor_id=f,
                value=factor_scores[f].value,
                weight=weights.weight_for(f),
                origin=factor_scores[f].origin,
            )
            for f in ordered
        ]
        return sorted(ranked, key=lambda r: r.value, reverse=True)

    def build_narrative(
        self,
        band: GradeBand,
        total_score: float,
        ranked: Sequence[RankedFactor],
    ) -> str:
        """Build the narrative summary of the assessment."""
        primary = ", ".join(
            f"{r.label} (score: {r.value:.1f})" for r in ranked[: self.narrative_factors]
        )
        narrative = (
            f"Route risk assessment: Grade {band.grade.value} ({band.level}) "
            f"with a total weighted score of {total_score:.2f}. "
        )
        if primary:
            narrative += f"Primary risk factors include: {primary}. "
        return narrative + self._closing(total_score)

    def build_recommendations(
        self,
        total_score: float,
        ranked: Sequence[RankedFactor],
    ) -> list[SafetyRecommendation]:
        """Build the ordered, de-duplicated recommendation list.

        Order: overall advisory, factor guidance in ranked order, baseline.
        """
        candidates: list[SafetyRecommendation] = []

        if total_score >= self.critical_threshold:
            candidates.append(OVERALL_ADVISORY)

        for factor in ranked:
            if factor.value <= self.factor_threshold:
                continue
            candidates.extend(FACTOR_GUIDANCE.get(factor.factor_id, ()))

        candidates.extend(BASELINE_RECOMMENDATIONS)

        seen: set[str] = set()
        recommendations = []
        for rec in candidates:
            if rec.text in seen:
                continue
            seen.add(rec.text)
            recommendations.append(rec)
        return recommendations

    def synthesize(
        self,
        factor_scores: Mapping[FactorId, FactorScore],
        weights: WeightPolicy,
        total_score: float,
        band: GradeBand,
    ) -> Explanation:
        """Build the full explanation for an assessment.

        Args:
            factor_scores: Every factor score of the assessment.
            weights: Weight policy used for aggregation.
            total_score: Composite score at full precision.
            band: Grade band of the composite.

        Returns:
            Explanation with top factors, narrative and recommendations.
        """
        ranked = self.rank_factors(factor_scores, weights)
        recommendations = self.build_recommendations(total_score, ranked)
        explanation = Explanation(
            top_risk_factors=tuple(ranked[: self.top_n]),
            narrative=self.build_narrative(band, total_score, ranked),
            recommendations=tuple(recommendations),
        )
        logger.debug(
            "Explanation synthesized",
            top_factors=[r.factor_id.value for r in explanation.top_risk_factors],
            recommendations=len(recommendations),
        )
        return explanation

    @staticmethod
    def _closing(total_score: float) -> str:
        for threshold, sentence in NARRATIVE_CLOSINGS:
            if total_score >= threshold:
                return sentence
        return LOW_RISK_CLOSING
