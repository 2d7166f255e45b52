"""Unit tests for route risk exceptions."""

import pytest

from routerisk.core.exceptions import (
    AggregationInvariantError,
    BatchSizeExceededError,
    FactorUnavailableError,
    InvalidFactorDataError,
    InvalidRouteIdError,
    RouteNotFoundError,
)
from routerisk.utils.exceptions import ConfigurationError, RouteRiskError


class TestExceptionHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exc",
        [
            ConfigurationError("bad weights"),
            RouteNotFoundError("R-1"),
            InvalidRouteIdError("bad id!"),
            FactorUnavailableError("weather_conditions", "provider down"),
            InvalidFactorDataError("road_conditions", 2),
            AggregationInvariantError(11.0, "Composite score outside [0, 10]"),
            BatchSizeExceededError(12, 10),
        ],
    )
    def test_all_route_risk_errors(self, exc):
        """Test every error derives from RouteRiskError."""
        assert isinstance(exc, RouteRiskError)


class TestExceptionDetails:
    """Tests for exception attributes and messages."""

    def test_route_not_found(self):
        """Test RouteNotFoundError carries the route id."""
        exc = RouteNotFoundError("R-404")

        assert exc.route_id == "R-404"
        assert str(exc) == "RouteNotFoundError: Route not found: R-404"

    def test_invalid_route_id(self):
        """Test InvalidRouteIdError carries id and reason."""
        exc = InvalidRouteIdError(42, "expected a string")

        assert exc.route_id == 42
        assert exc.reason == "expected a string"
        assert str(exc).startswith("InvalidRouteIdError: Invalid route id 42")

    def test_invalid_factor_data(self):
        """Test InvalidFactorDataError reports the error count."""
        exc = InvalidFactorDataError("road_conditions", 3, "width_meters: too small")

        assert exc.errors == 3
        assert "3 errors" in str(exc)
        assert "width_meters" in str(exc)

    def test_aggregation_invariant(self):
        """Test AggregationInvariantError carries the offending value."""
        exc = AggregationInvariantError(10.5, "Factor amenities score outside [1, 10]")

        assert exc.value == 10.5
        assert "value=10.5" in str(exc)

    def test_batch_size_exceeded(self):
        """Test BatchSizeExceededError reports both sizes."""
        exc = BatchSizeExceededError(12, 10)

        assert exc.size == 12
        assert exc.max_size == 10
        assert "Maximum 10 routes" in str(exc)
        assert "requested=12" in str(exc)
