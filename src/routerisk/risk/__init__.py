"""Risk scoring module for road route assessments."""

from routerisk.risk.aggregator import AggregateResult, aggregate
from routerisk.risk.assessment import RiskAssessment
from routerisk.risk.calculators import FactorCalculator, default_calculators
from routerisk.risk.confidence import (
    ConfidenceConfig,
    DataQuality,
    DataQualityAssessor,
    QualityLevel,
    QualitySignals,
)
from routerisk.risk.engine import (
    BatchItemResult,
    BatchSummary,
    RiskEngine,
    create_risk_engine,
    summarize_batch,
    validate_route_id,
)
from routerisk.risk.explanations import (
    BASELINE_RECOMMENDATIONS,
    FACTOR_GUIDANCE,
    OVERALL_ADVISORY,
    Explanation,
    ExplanationSynthesizer,
    RankedFactor,
    RecommendationPriority,
    SafetyRecommendation,
)
from routerisk.risk.grading import (
    DEFAULT_GRADE_BANDS,
    GradeBand,
    GradeClassifier,
    RiskGrade,
    create_grade_classifier,
)
from routerisk.risk.snapshots import AssessmentStore, InMemoryAssessmentStore
from routerisk.risk.sources import InMemoryRouteDataSource, RouteDataSource
from routerisk.risk.types import (
    FACTOR_LABELS,
    FactorId,
    FactorOrigin,
    FactorScore,
    RouteProfile,
    Terrain,
)
from routerisk.risk.weights import DEFAULT_FACTOR_WEIGHTS, WeightPolicy

__all__ = [
    # Types
    "FACTOR_LABELS",
    "FactorId",
    "FactorOrigin",
    "FactorScore",
    "RouteProfile",
    "Terrain",
    # Calculators
    "FactorCalculator",
    "default_calculators",
    # Weights and aggregation
    "DEFAULT_FACTOR_WEIGHTS",
    "WeightPolicy",
    "AggregateResult",
    "aggregate",
    # Grading
    "DEFAULT_GRADE_BANDS",
    "GradeBand",
    "GradeClassifier",
    "RiskGrade",
    "create_grade_classifier",
    # Confidence
    "ConfidenceConfig",
    "DataQuality",
    "DataQualityAssessor",
    "QualityLevel",
    "QualitySignals",
    # Explanations
    "BASELINE_RECOMMENDATIONS",
    "FACTOR_GUIDANCE",
    "OVERALL_ADVISORY",
    "Explanation",
    "ExplanationSynthesizer",
    "RankedFactor",
    "RecommendationPriority",
    "SafetyRecommendation",
    # Assessment
    "RiskAssessment",
    # Sources and snapshots
    "AssessmentStore",
    "InMemoryAssessmentStore",
    "InMemoryRouteDataSource",
    "RouteDataSource",
    # Engine
    "BatchItemResult",
    "BatchSummary",
    "RiskEngine",
    "create_risk_engine",
    "summarize_batch",
    "validate_route_id",
]
