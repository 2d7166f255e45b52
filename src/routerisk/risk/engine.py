"""Route risk engine.

Orchestrates a full route assessment:
1. Validate the route identifier and load the route profile
2. Fetch each factor's supporting data and run its calculator concurrently
3. Aggregate factor scores with the weight policy and classify the grade
4. Assess data quality and confidence
5. Synthesize the explanation and recommendations

Factor-level failures (unavailable data, invalid records, timeouts) never
abort an assessment; the factor receives the neutral default and is
reported as missing. Route-level failures are raised for single-route
calls and reported per item in batch calls.
"""

import asyncio
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from routerisk.config.settings import Settings, get_settings
from routerisk.config.validation import validate_or_raise
from routerisk.core.exceptions import (
    AggregationInvariantError,
    BatchSizeExceededError,
    FactorUnavailableError,
    InvalidFactorDataError,
    InvalidRouteIdError,
)
from routerisk.core.logging import LogContext, get_logger, log_exception
from routerisk.risk.aggregator import aggregate
from routerisk.risk.assessment import RiskAssessment
from routerisk.risk.calculators import FactorCalculator, default_calculators
from routerisk.risk.confidence import ConfidenceConfig, DataQualityAssessor, QualitySignals
from routerisk.risk.explanations import ExplanationSynthesizer
from routerisk.risk.grading import GradeBand, GradeClassifier, create_grade_classifier
from routerisk.risk.snapshots import AssessmentStore
from routerisk.risk.sources import RouteDataSource
from routerisk.risk.types import FactorId, FactorScore, RouteProfile
from routerisk.risk.weights import WeightPolicy
from routerisk.utils.exceptions import RouteRiskError

logger = get_logger(__name__)

MAX_ROUTE_ID_LENGTH = 64
ROUTE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.:-]+$")

HIGH_RISK_THRESHOLD = 6.0
CRITICAL_RISK_THRESHOLD = 8.0


def validate_route_id(route_id: Any) -> str:
    """Check that a route identifier is well formed.

    Args:
        route_id: Identifier as received from the caller.

    Returns:
        The identifier, unchanged.

    Raises:
        InvalidRouteIdError: If the identifier is not a non-empty string of
            at most 64 characters from ``[A-Za-z0-9_.:-]``.
    """
    if not isinstance(route_id, str):
        raise InvalidRouteIdError(route_id, f"expected a string, got {type(route_id).__name__}")
    if not route_id.strip():
        raise InvalidRouteIdError(route_id, "route id is empty")
    if len(route_id) > MAX_ROUTE_ID_LENGTH:
        raise InvalidRouteIdError(route_id, f"longer than {MAX_ROUTE_ID_LENGTH} characters")
    if not ROUTE_ID_PATTERN.match(route_id):
        raise InvalidRouteIdError(route_id, "contains characters outside [A-Za-z0-9_.:-]")
    return route_id


# =============================================================================
# Batch Results
# =============================================================================


@dataclass
class BatchItemResult:
    """Outcome of one route within a batch."""

    route_id: str
    success: bool
    assessment: RiskAssessment | None = None
    error_message: str | None = None
    error_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {"route_id": self.route_id, "success": self.success}
        if self.success and self.assessment is not None:
            result["assessment"] = self.assessment.to_dict()
        else:
            result["error"] = self.error_message
            result["error_type"] = self.error_type
        return result


@dataclass
class BatchSummary:
    """Aggregate statistics for a batch run."""

    total_processed: int = 0
    successful: int = 0
    failed: int = 0
    average_risk_score: float = 0.0
    high_risk_routes: int = 0
    critical_risk_routes: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_processed": self.total_processed,
            "successful": self.successful,
            "failed": self.failed,
            "average_risk_score": round(self.average_risk_score, 2),
            "high_risk_routes": self.high_risk_routes,
            "critical_risk_routes": self.critical_risk_routes,
        }


def summarize_batch(results: Sequence[BatchItemResult]) -> BatchSummary:
    """Summarize a batch run.

    The average covers successful routes only.
    """
    scores = [
        r.assessment.total_weighted_score
        for r in results
        if r.success and r.assessment is not None
    ]
    return BatchSummary(
        total_processed=len(results),
        successful=len(scores),
        failed=len(results) - len(scores),
        average_risk_score=sum(scores) / len(scores) if scores else 0.0,
        high_risk_routes=sum(1 for s in scores if s > HIGH_RISK_THRESHOLD),
        critical_risk_routes=sum(1 for s in scores if s > CRITICAL_RISK_THRESHOLD),
    )


# =============================================================================
# Engine
# =============================================================================


class RiskEngine:
    """Computes route risk assessments.

    The engine holds only read-only collaborators (calculators, weight
    policy, grade table) and may serve concurrent requests.

    Example:
        ```python
        engine = create_risk_engine(source)
        assessment = await engine.calculate_route_risk("R-1001")
        print(assessment.risk_grade, assessment.display_score)
        ```
    """

    def __init__(
        self,
        data_source: RouteDataSource,
        calculators: Mapping[FactorId, FactorCalculator] | None = None,
        weight_policy: WeightPolicy | None = None,
        grade_classifier: GradeClassifier | None = None,
        quality_assessor: DataQualityAssessor | None = None,
        synthesizer: ExplanationSynthesizer | None = None,
        settings: Settings | None = None,
    ):
        """Initialize the engine.

        Args:
            data_source: Supplier of route profiles and factor data.
            calculators: Calculator per factor (one per category if None).
            weight_policy: Validated weight policy (default table if None).
            grade_classifier: Grade classifier (default bands if None).
            quality_assessor: Data quality assessor.
            synthesizer: Explanation synthesizer.
            settings: Application settings.
        """
        self._settings = settings or get_settings()
        self._source = data_source
        self._calculators = dict(calculators) if calculators is not None else default_calculators()
        self.weight_policy = weight_policy or WeightPolicy.default()
        self.grade_classifier = grade_classifier or GradeClassifier()
        self.quality_assessor = quality_assessor or DataQualityAssessor(
            ConfidenceConfig.from_settings(self._settings.confidence)
        )
        self.synthesizer = synthesizer or ExplanationSynthesizer()

    async def calculate_route_risk(
        self,
        route_id: str,
        now: datetime | None = None,
    ) -> RiskAssessment:
        """Calculate the risk assessment for one route.

        Args:
            route_id: Route identifier.
            now: Assessment time (current UTC time if None).

        Returns:
            A fresh RiskAssessment.

        Raises:
            InvalidRouteIdError: If the identifier is malformed.
            RouteNotFoundError: If the data source has no such route.
            AggregationInvariantError: If a bounded value escaped its range.
        """
        route_id = validate_route_id(route_id)

        with LogContext(route_id=route_id):
            profile = await self._source.get_route_profile(route_id)

            factor_ids = list(self._calculators)
            scores = await asyncio.gather(
                *(self._run_calculator(factor_id, route_id, profile) for factor_id in factor_ids)
            )
            factor_scores = dict(zip(factor_ids, scores, strict=True))

            try:
                assessment = self.build_assessment(
                    route_id, factor_scores, profile=profile, calculated_at=now
                )
            except AggregationInvariantError as e:
                logger.error(
                    "Aggregation invariant violated",
                    value=e.value,
                    detail=e.detail,
                    exc_info=True,
                )
                raise

            logger.info(
                "Route risk assessment completed",
                total_score=assessment.display_score,
                grade=assessment.risk_grade.value,
                confidence=assessment.confidence_level,
                missing_factors=len(assessment.data_quality.missing_factors),
            )
            return assessment

    async def calculate_batch(
        self,
        route_ids: Iterable[Any],
        max_batch_size: int | None = None,
    ) -> list[BatchItemResult]:
        """Calculate assessments for several routes.

        Each route is processed independently; one route's failure is
        reported in its entry and does not affect the others.

        Args:
            route_ids: Route identifiers.
            max_batch_size: Upper bound on batch size (settings value if None).

        Returns:
            One BatchItemResult per route, in request order.

        Raises:
            BatchSizeExceededError: If the batch exceeds the bound. Raised
                before any route is processed.
        """
        route_ids = list(route_ids)
        limit = max_batch_size if max_batch_size is not None else self._settings.max_batch_size
        if len(route_ids) > limit:
            raise BatchSizeExceededError(len(route_ids), limit)

        logger.info("Batch risk calculation started", routes=len(route_ids))

        semaphore = asyncio.Semaphore(self._settings.max_concurrent_routes)

        async def run(route_id: Any) -> BatchItemResult:
            async with semaphore:
                return await self._calculate_batch_item(route_id)

        results = list(await asyncio.gather(*(run(route_id) for route_id in route_ids)))

        summary = summarize_batch(results)
        logger.info(
            "Batch risk calculation completed",
            successful=summary.successful,
            failed=summary.failed,
            average_risk_score=round(summary.average_risk_score, 2),
        )
        return results

    async def refresh_snapshot(self, route_id: str, store: AssessmentStore) -> RiskAssessment:
        """Recalculate a route and store the result as its latest snapshot.

        Returns:
            The fresh assessment, whether or not the store kept it.
        """
        assessment = await self.calculate_route_risk(route_id)
        stored = await store.upsert(assessment)
        logger.debug("Snapshot refreshed", route_id=route_id, stored=stored)
        return assessment

    def build_assessment(
        self,
        route_id: str,
        factor_scores: Mapping[FactorId, FactorScore],
        profile: RouteProfile | None = None,
        calculated_at: datetime | None = None,
    ) -> RiskAssessment:
        """Assemble an assessment from already-computed factor scores.

        Args:
            route_id: Route identifier.
            factor_scores: Scores keyed by factor; missing factors get the
                neutral default.
            profile: Route profile supplying density, freshness and collection
                status signals.
            calculated_at: Assessment time (current UTC time if None).

        Returns:
            RiskAssessment.

        Raises:
            AggregationInvariantError: If a bounded value escaped its range.
        """
        calculated_at = calculated_at or datetime.now(UTC)

        result = aggregate(factor_scores, self.weight_policy)
        band = self.grade_classifier.classify(result.total_score)

        signals = QualitySignals()
        if profile is not None:
            signals = QualitySignals(
                sample_point_count=profile.sample_point_count,
                data_refreshed_at=profile.data_refreshed_at,
                collection_status=profile.collection_status,
            )
        quality, confidence = self.quality_assessor.assess(
            result.factor_scores, signals, now=calculated_at
        )

        explanation = self.synthesizer.synthesize(
            result.factor_scores, self.weight_policy, result.total_score, band
        )

        return RiskAssessment(
            route_id=route_id,
            factor_scores=result.factor_scores,
            total_weighted_score=result.total_score,
            risk_grade=band.grade,
            risk_level=band.level,
            top_risk_factors=explanation.top_risk_factors,
            recommendations=explanation.recommendation_texts,
            data_quality=quality,
            confidence_level=confidence,
            calculated_at=calculated_at,
            risk_explanation=explanation.narrative,
            recommendation_details=explanation.recommendations,
        )

    async def _run_calculator(
        self,
        factor_id: FactorId,
        route_id: str,
        profile: RouteProfile,
    ) -> FactorScore:
        """Fetch one factor's data and score it, substituting the default on failure."""
        calculator = self._calculators[factor_id]
        timeout = self._settings.factor_timeout_seconds

        try:
            data = await asyncio.wait_for(
                self._source.get_factor_data(route_id, factor_id),
                timeout=timeout,
            )
            score = calculator.calculate(data, profile)
        except asyncio.TimeoutError:
            logger.warning(
                "Factor data fetch timed out, using default",
                factor=factor_id.value,
                timeout_seconds=timeout,
            )
            return FactorScore.default(factor_id, reason="timeout")
        except FactorUnavailableError as e:
            logger.warning(
                "Factor data unavailable, using default",
                factor=factor_id.value,
                reason=e.reason,
            )
            return FactorScore.default(factor_id, reason="unavailable")
        except InvalidFactorDataError as e:
            logger.warning(
                "Invalid factor data, using default",
                factor=factor_id.value,
                errors=e.errors,
            )
            return FactorScore.default(factor_id, reason="invalid_data")
        except Exception as e:
            logger.warning(
                "Factor calculation failed, using default",
                factor=factor_id.value,
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True,
            )
            return FactorScore.default(factor_id, reason="calculation_error")

        logger.debug(
            "Factor scored",
            factor=factor_id.value,
            value=score.value,
            origin=score.origin.value,
        )
        return score

    async def _calculate_batch_item(self, route_id: Any) -> BatchItemResult:
        display_id = route_id if isinstance(route_id, str) else repr(route_id)
        try:
            assessment = await self.calculate_route_risk(route_id)
        except RouteRiskError as e:
            logger.warning(
                "Route failed in batch",
                route_id=display_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return BatchItemResult(
                route_id=display_id,
                success=False,
                error_message=str(e),
                error_type=type(e).__name__,
            )
        except Exception as e:
            log_exception(logger, e, route_id=display_id)
            return BatchItemResult(
                route_id=display_id,
                success=False,
                error_message=str(e) or type(e).__name__,
                error_type=type(e).__name__,
            )
        return BatchItemResult(route_id=display_id, success=True, assessment=assessment)


def create_risk_engine(
    data_source: RouteDataSource,
    settings: Settings | None = None,
    weights: Mapping[FactorId | str, int] | None = None,
    grade_bands: Sequence[GradeBand] | None = None,
    calculators: Mapping[FactorId, FactorCalculator] | None = None,
) -> RiskEngine:
    """Create a risk engine after validating its configuration.

    Args:
        data_source: Supplier of route profiles and factor data.
        settings: Application settings (cached settings if None).
        weights: Factor weights in percent (default table if None).
        grade_bands: Grade band table (default table if None).
        calculators: Calculator per factor (one per category if None).

    Returns:
        Configured RiskEngine.

    Raises:
        ConfigurationError: If the settings, weights or grade bands are invalid.
    """
    settings = settings or get_settings()
    validate_or_raise(settings)

    weight_policy = WeightPolicy(dict(weights)) if weights is not None else WeightPolicy.default()
    grade_classifier = create_grade_classifier(grade_bands)

    return RiskEngine(
        data_source,
        calculators=calculators,
        weight_policy=weight_policy,
        grade_classifier=grade_classifier,
        settings=settings,
    )
