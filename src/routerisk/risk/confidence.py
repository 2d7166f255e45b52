"""Data-quality and confidence assessment for route risk scores.

This module inspects the provenance of each factor score and the ancillary
collection signals (sample density, data freshness, upstream collection
status) to produce:
- A data quality label with completion percentage and missing factors
- A confidence level on the 30-95 scale

The assessor never fails; an assessment built entirely from defaults
reports low quality at the confidence floor.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field

from routerisk.config.settings import ConfidenceSettings
from routerisk.core.logging import get_logger
from routerisk.risk.types import FactorId, FactorScore

logger = get_logger(__name__)


class QualityLevel(str, Enum):
    """Data quality label."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ConfidenceConfig(BaseModel):
    """Configuration for confidence estimation."""

    base_confidence: int = Field(default=50, ge=0, le=100)

    # Completion tiers; the first tier met applies
    high_completion_bonus: int = Field(default=30, ge=0)
    medium_completion_bonus: int = Field(default=20, ge=0)
    partial_completion_bonus: int = Field(default=10, ge=0)
    low_completion_penalty: int = Field(default=20, ge=0)

    # Ancillary signals
    sample_density_bonus: int = Field(default=10, ge=0)
    freshness_bonus: int = Field(default=10, ge=0)
    collection_failure_penalty: int = Field(default=10, ge=0)
    high_sample_density_threshold: int = Field(default=20, ge=0)
    staleness_threshold_hours: float = Field(default=24, gt=0)

    min_confidence: int = Field(default=30, ge=0, le=100)
    max_confidence: int = Field(default=95, ge=0, le=100)

    @classmethod
    def from_settings(cls, settings: ConfidenceSettings) -> "ConfidenceConfig":
        """Build a config from the confidence section of the settings."""
        return cls(
            high_sample_density_threshold=settings.high_sample_density_threshold,
            staleness_threshold_hours=settings.staleness_threshold_hours,
        )


# Completion percentage thresholds
HIGH_QUALITY_THRESHOLD = 90.0
MEDIUM_QUALITY_THRESHOLD = 70.0
PARTIAL_COMPLETION_THRESHOLD = 50.0


@dataclass(frozen=True)
class DataQuality:
    """How much of an assessment was computed from collected data.

    Attributes:
        level: Quality label derived from completion.
        completion_percentage: Share of factors with non-default origin (0-100).
        missing_factors: Factors whose score is a substituted default.
    """

    level: QualityLevel
    completion_percentage: float
    missing_factors: tuple[FactorId, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level.value,
            "completion_percentage": round(self.completion_percentage, 2),
            "missing_factors": [f.value for f in self.missing_factors],
        }


@dataclass(frozen=True)
class QualitySignals:
    """Ancillary collection signals for a route.

    Attributes:
        sample_point_count: Geographic sample points feeding the calculators.
        data_refreshed_at: When the supporting data was last collected.
        collection_status: Collection category to whether it succeeded.
    """

    sample_point_count: int = 0
    data_refreshed_at: datetime | None = None
    collection_status: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        status = MappingProxyType(dict(self.collection_status))
        object.__setattr__(self, "collection_status", status)

    @property
    def failed_collections(self) -> tuple[str, ...]:
        """Collection categories reported as failed, in report order."""
        return tuple(name for name, ok in self.collection_status.items() if not ok)


@dataclass(frozen=True)
class ConfidenceBreakdown:
    """Confidence level with the adjustments that produced it."""

    confidence_level: int
    adjustments: Mapping[str, int] = field(default_factory=dict)


class DataQualityAssessor:
    """Assesses data quality and confidence from factor provenance.

    Example:
        ```python
        assessor = DataQualityAssessor()
        quality, confidence = assessor.assess(factor_scores, signals)
        print(quality.level, confidence)
        ```
    """

    def __init__(self, config: ConfidenceConfig | None = None):
        """Initialize the assessor.

        Args:
            config: Confidence configuration.
        """
        self.config = config or ConfidenceConfig()

    def assess_quality(self, factor_scores: Mapping[FactorId, FactorScore]) -> DataQuality:
        """Derive the data quality label from factor origins.

        Args:
            factor_scores: Every factor score of the assessment.

        Returns:
            DataQuality with completion and missing factors.
        """
        total = len(factor_scores)
        missing = tuple(f for f, score in factor_scores.items() if score.is_default)
        completion = (total - len(missing)) / total * 100 if total else 0.0

        if completion >= HIGH_QUALITY_THRESHOLD:
            level = QualityLevel.HIGH
        elif completion >= MEDIUM_QUALITY_THRESHOLD:
            level = QualityLevel.MEDIUM
        else:
            level = QualityLevel.LOW

        return DataQuality(level=level, completion_percentage=completion, missing_factors=missing)

    def calculate_confidence(
        self,
        quality: DataQuality,
        signals: QualitySignals | None = None,
        now: datetime | None = None,
    ) -> ConfidenceBreakdown:
        """Calculate the confidence level.

        Args:
            quality: Data quality of the assessment.
            signals: Sample density, freshness and collection status signals.
            now: Reference time for freshness (current UTC time if None).

        Returns:
            ConfidenceBreakdown clamped to the configured range.
        """
        cfg = self.config
        signals = signals or QualitySignals()
        adjustments: dict[str, int] = {}

        completion = quality.completion_percentage
        if completion >= HIGH_QUALITY_THRESHOLD:
            adjustments["completion"] = cfg.high_completion_bonus
        elif completion >= MEDIUM_QUALITY_THRESHOLD:
            adjustments["completion"] = cfg.medium_completion_bonus
        elif completion >= PARTIAL_COMPLETION_THRESHOLD:
            adjustments["completion"] = cfg.partial_completion_bonus
        else:
            adjustments["completion"] = -cfg.low_completion_penalty

        if signals.sample_point_count > cfg.high_sample_density_threshold:
            adjustments["sample_density"] = cfg.sample_density_bonus

        if self._is_fresh(signals.data_refreshed_at, now):
            adjustments["freshness"] = cfg.freshness_bonus

        if signals.failed_collections:
            adjustments["collection"] = -cfg.collection_failure_penalty

        raw = cfg.base_confidence + sum(adjustments.values())
        level = max(cfg.min_confidence, min(cfg.max_confidence, raw))
        return ConfidenceBreakdown(confidence_level=level, adjustments=adjustments)

    def assess(
        self,
        factor_scores: Mapping[FactorId, FactorScore],
        signals: QualitySignals | None = None,
        now: datetime | None = None,
    ) -> tuple[DataQuality, int]:
        """Assess data quality and confidence in one step."""
        quality = self.assess_quality(factor_scores)
        breakdown = self.calculate_confidence(quality, signals, now)
        logger.debug(
            "Confidence assessed",
            quality=quality.level.value,
            completion=round(quality.completion_percentage, 2),
            confidence=breakdown.confidence_level,
            adjustments=dict(breakdown.adjustments),
        )
        return quality, breakdown.confidence_level

    def _is_fresh(self, refreshed_at: datetime | None, now: datetime | None) -> bool:
        if refreshed_at is None:
            return False
        now = now or datetime.now(UTC)
        if refreshed_at.tzinfo is None:
            refreshed_at = refreshed_at.replace(tzinfo=UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return now - refreshed_at < timedelta(hours=self.config.staleness_threshold_hours)
