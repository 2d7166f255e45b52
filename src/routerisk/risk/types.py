"""Core types for route risk assessment.

Defines the fixed set of risk factors, the provenance of a factor score,
the FactorScore produced by each calculator, and the route profile that
route-level heuristics read.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Factor scores live on a 1-10 scale; 5 is the neutral fallback.
MIN_FACTOR_SCORE = 1.0
MAX_FACTOR_SCORE = 10.0
NEUTRAL_SCORE = 5.0


class FactorId(str, Enum):
    """The eleven risk factor categories."""

    ROAD_CONDITIONS = "road_conditions"
    ACCIDENT_PRONE = "accident_prone"
    SHARP_TURNS = "sharp_turns"
    BLIND_SPOTS = "blind_spots"
    TWO_WAY_TRAFFIC = "two_way_traffic"
    TRAFFIC_DENSITY = "traffic_density"
    WEATHER_CONDITIONS = "weather_conditions"
    EMERGENCY_SERVICES = "emergency_services"
    NETWORK_COVERAGE = "network_coverage"
    AMENITIES = "amenities"
    SECURITY_ISSUES = "security_issues"


FACTOR_LABELS: dict[FactorId, str] = {
    FactorId.ROAD_CONDITIONS: "Road Conditions",
    FactorId.ACCIDENT_PRONE: "Accident-Prone Areas",
    FactorId.SHARP_TURNS: "Sharp Turns",
    FactorId.BLIND_SPOTS: "Blind Spots",
    FactorId.TWO_WAY_TRAFFIC: "Two-Way Traffic",
    FactorId.TRAFFIC_DENSITY: "Traffic Density",
    FactorId.WEATHER_CONDITIONS: "Weather Conditions",
    FactorId.EMERGENCY_SERVICES: "Emergency Services",
    FactorId.NETWORK_COVERAGE: "Network Coverage",
    FactorId.AMENITIES: "Amenities",
    FactorId.SECURITY_ISSUES: "Security Issues",
}


class FactorOrigin(str, Enum):
    """Provenance of a factor score."""

    REAL = "real"  # Computed from collected data
    ESTIMATED = "estimated"  # Heuristic proxy from the route profile
    DEFAULT = "default"  # No data; neutral fallback substituted


class Terrain(str, Enum):
    """Dominant terrain along a route."""

    FLAT = "flat"
    HILLY = "hilly"
    URBAN = "urban"
    RURAL = "rural"
    MIXED = "mixed"


def clamp_score(value: float) -> float:
    """Clamp a raw score onto the 1-10 factor scale."""
    return max(MIN_FACTOR_SCORE, min(MAX_FACTOR_SCORE, value))


@dataclass(frozen=True)
class FactorScore:
    """One calculator's output.

    Attributes:
        factor_id: Category this score belongs to.
        value: Score on the 1-10 scale.
        origin: Whether the score came from real, estimated or default data.
        supporting_detail: Structured data kept for explanation only.
    """

    factor_id: FactorId
    value: float
    origin: FactorOrigin = FactorOrigin.REAL
    supporting_detail: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        detail = MappingProxyType(dict(self.supporting_detail))
        object.__setattr__(self, "supporting_detail", detail)

    @classmethod
    def default(cls, factor_id: FactorId, reason: str = "no_data") -> "FactorScore":
        """Create the neutral fallback score for a factor without data."""
        return cls(
            factor_id=factor_id,
            value=NEUTRAL_SCORE,
            origin=FactorOrigin.DEFAULT,
            supporting_detail={"reason": reason},
        )

    @property
    def is_default(self) -> bool:
        """Check if the score is a substituted default."""
        return self.origin == FactorOrigin.DEFAULT

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "factor_id": self.factor_id.value,
            "value": round(self.value, 2),
            "origin": self.origin.value,
            "supporting_detail": dict(self.supporting_detail),
        }


class RouteProfile(BaseModel):
    """Route-level attributes supplied alongside the factor data.

    Route heuristics (two-way traffic, network coverage estimate, security,
    amenities) read terrain, distance and highway designations. Sample
    density, refresh time and the per-category collection status feed the
    confidence estimate.
    """

    model_config = ConfigDict(extra="ignore")

    route_id: str
    terrain: Terrain = Terrain.MIXED
    total_distance_km: float = Field(default=0.0, ge=0)
    major_highways: list[str] = Field(default_factory=list)
    sample_point_count: int = Field(default=0, ge=0)
    data_refreshed_at: datetime | None = None
    collection_status: dict[str, bool] = Field(default_factory=dict)

    @property
    def has_national_highway(self) -> bool:
        """Check if any major highway is a national highway (NH prefix)."""
        return any(hw.upper().startswith("NH") for hw in self.major_highways)
