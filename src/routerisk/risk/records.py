"""Supporting-data records consumed by the factor calculators.

Each record mirrors one row of collected data for a route. Fields a feed
did not report stay ``None`` and contribute no adjustment.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    risk_score: float | None = Field(default=None, ge=0, le=10)
    """Provider-assigned base risk, replaces the calculator's base when set."""


class RoadSegment(_Record):
    """Surface and infrastructure condition of a road segment."""

    surface_quality: str | None = None  # critical, poor, fair, good, excellent
    has_potholes: bool = False
    under_construction: bool = False
    width_meters: float | None = Field(default=None, ge=0)
    shoulder_width_meters: float | None = Field(default=None, ge=0)
    lighting_quality: str | None = None
    drainage_quality: str | None = None
    bridges_culverts: int = Field(default=0, ge=0)
    slope_gradient: float | None = None
    segment_length_km: float | None = Field(default=None, ge=0)


class AccidentArea(_Record):
    """An accident-prone stretch with its history."""

    accident_frequency_yearly: float = Field(default=0.0, ge=0)
    accident_severity: str | None = None  # fatal, major, minor
    night_risk: float | None = None
    peak_risk: float | None = None
    weather_related_risk: float | None = None
    infrastructure_risk: float | None = None
    traffic_volume_risk: float | None = None
    accident_trend: str | None = None  # increasing, stable, decreasing


class SharpTurn(_Record):
    """Geometry and safety furniture of a sharp turn."""

    turn_angle: float | None = Field(default=None, ge=0, le=180)
    turn_radius_m: float | None = Field(default=None, ge=0)
    turn_severity: str | None = None  # gentle, moderate, sharp, hairpin
    guardrails: bool = False
    warning_signs: bool = False
    visibility: str | None = None
    road_surface: str | None = None
    banking_angle: float | None = None
    lighting_available: bool = False


class BlindSpot(_Record):
    """A stretch with restricted sight distance."""

    visibility_distance_m: float | None = Field(default=None, ge=0)
    spot_type: str | None = None  # crest, curve, obstruction
    warning_signs_present: bool = False
    mirror_installed: bool = False
    speed_limit_kmph: float | None = Field(default=None, ge=0)
    vegetation_density: str | None = None
    structure_count: int = Field(default=0, ge=0)
    obstruction_height_m: float | None = Field(default=None, ge=0)
    severity_level: str | None = None  # minor, moderate, significant, critical


class TrafficSample(_Record):
    """A traffic observation along the route."""

    congestion_level: str | None = None  # free_flow, light, moderate, heavy, severe
    average_speed_kmph: float | None = Field(default=None, ge=0)
    toll_points: int = Field(default=0, ge=0)
    construction_zones: int = Field(default=0, ge=0)
    traffic_lights: int = Field(default=0, ge=0)
    accident_reports: int = Field(default=0, ge=0)
    weather_impact: str | None = None  # none, moderate, severe
    time_of_day: str | None = None


class WeatherSample(_Record):
    """A weather observation or forecast for a route point."""

    condition: str | None = None  # clear, rainy, foggy, stormy, icy
    visibility_km: float | None = Field(default=None, ge=0)
    wind_speed_kmph: float | None = Field(default=None, ge=0)
    road_surface: str | None = None  # dry, wet, muddy, icy
    monsoon_risk: float | None = None
    extreme_weather_events: int = Field(default=0, ge=0)
    average_temperature_c: float | None = None


class ServiceLocation(BaseModel):
    """An emergency service or roadside amenity near the route."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = ""
    service_type: Literal["hospital", "police", "fire_station", "mechanic", "amenity"]
    distance_from_route_km: float | None = Field(default=None, ge=0)
    response_time_minutes: float | None = Field(default=None, ge=0)
    availability_score: float | None = Field(default=None, ge=0, le=10)
    is_open_24_hours: bool = False
    rating: float | None = Field(default=None, ge=0, le=5)
    fuel_types: list[str] = Field(default_factory=list)


class CoverageSample(BaseModel):
    """Cellular signal measured at a route point."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    signal_strength: float = Field(ge=0, le=10)
    is_dead_zone: bool = False
    interference_factors: list[str] = Field(default_factory=list)
