"""Pytest fixtures for Routerisk tests."""

from collections.abc import Generator
from datetime import UTC, datetime
from unittest.mock import patch

import pytest
import structlog

from routerisk.config.settings import Settings
from routerisk.risk.sources import InMemoryRouteDataSource
from routerisk.risk.types import FactorId, FactorOrigin, FactorScore, RouteProfile, Terrain


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state
    don't affect other tests.
    """
    yield
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.clear_contextvars()


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings for testing."""
    return Settings(
        ENVIRONMENT="test",
        log_level="DEBUG",
        factor_timeout_seconds=0.5,
        max_batch_size=10,
        max_concurrent_routes=3,
    )


@pytest.fixture
def patch_settings(mock_settings: Settings) -> Generator[Settings, None, None]:
    """Patch get_settings to return mock settings."""
    with patch("routerisk.config.settings.get_settings", return_value=mock_settings):
        yield mock_settings


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def assessment_time() -> datetime:
    """Fixed reference time for assessments."""
    return datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def scenario_scores() -> dict[FactorId, FactorScore]:
    """Factor values of the reference medium-risk route."""
    values = {
        FactorId.ROAD_CONDITIONS: 5.5,
        FactorId.ACCIDENT_PRONE: 4.2,
        FactorId.SHARP_TURNS: 3.8,
        FactorId.BLIND_SPOTS: 4.1,
        FactorId.TWO_WAY_TRAFFIC: 5.0,
        FactorId.TRAFFIC_DENSITY: 6.2,
        FactorId.WEATHER_CONDITIONS: 4.5,
        FactorId.EMERGENCY_SERVICES: 3.8,
        FactorId.NETWORK_COVERAGE: 4.0,
        FactorId.AMENITIES: 4.2,
        FactorId.SECURITY_ISSUES: 3.5,
    }
    return {f: FactorScore(factor_id=f, value=v, origin=FactorOrigin.REAL) for f, v in values.items()}


@pytest.fixture
def all_default_scores() -> dict[FactorId, FactorScore]:
    """Every factor at the neutral default."""
    return {f: FactorScore.default(f) for f in FactorId}


@pytest.fixture
def hilly_profile() -> RouteProfile:
    """A long hilly route on a national highway."""
    return RouteProfile(
        route_id="R-1001",
        terrain=Terrain.HILLY,
        total_distance_km=320.0,
        major_highways=["NH-44"],
        sample_point_count=42,
        data_refreshed_at=datetime(2026, 3, 1, 6, 0, tzinfo=UTC),
    )


@pytest.fixture
def route_factor_data() -> dict[FactorId, list[dict]]:
    """Collected supporting data for a typical route."""
    return {
        FactorId.ROAD_CONDITIONS: [
            {"surface_quality": "fair", "has_potholes": True, "segment_length_km": 1.2},
            {"surface_quality": "good", "width_meters": 7.0},
        ],
        FactorId.ACCIDENT_PRONE: [
            {"accident_frequency_yearly": 12, "accident_severity": "major"},
        ],
        FactorId.SHARP_TURNS: [
            {"turn_angle": 95, "turn_radius_m": 80, "guardrails": True, "warning_signs": True},
        ],
        FactorId.BLIND_SPOTS: [],
        FactorId.TRAFFIC_DENSITY: [
            {"congestion_level": "moderate", "average_speed_kmph": 45},
        ],
        FactorId.WEATHER_CONDITIONS: [
            {"condition": "clear", "visibility_km": 12, "wind_speed_kmph": 10},
        ],
        FactorId.EMERGENCY_SERVICES: [
            {"service_type": "hospital", "distance_from_route_km": 8, "response_time_minutes": 12},
            {"service_type": "police", "distance_from_route_km": 5, "response_time_minutes": 10},
        ],
        FactorId.NETWORK_COVERAGE: [
            {"signal_strength": 7},
            {"signal_strength": 2, "is_dead_zone": True},
        ],
        FactorId.AMENITIES: [
            {"name": "Highway Petrol Pump", "service_type": "amenity"},
        ],
        FactorId.SECURITY_ISSUES: [
            {"service_type": "police", "distance_from_route_km": 5},
        ],
    }


@pytest.fixture
def data_source(
    hilly_profile: RouteProfile, route_factor_data: dict[FactorId, list[dict]]
) -> InMemoryRouteDataSource:
    """In-memory data source with one fully collected route."""
    source = InMemoryRouteDataSource()
    source.add_route(hilly_profile, route_factor_data)
    return source
