"""Utility modules for Routerisk."""

from routerisk.utils.exceptions import (
    ConfigurationError,
    RouteRiskError,
)

__all__ = [
    "RouteRiskError",
    "ConfigurationError",
]
