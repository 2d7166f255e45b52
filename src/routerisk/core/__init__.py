"""Core services and utilities for Routerisk."""

from .exceptions import (
    AggregationInvariantError,
    BatchSizeExceededError,
    FactorUnavailableError,
    InvalidFactorDataError,
    InvalidRouteIdError,
    RouteNotFoundError,
)
from .logging import LogContext, get_logger, setup_logging

__all__ = [
    # Exceptions
    "AggregationInvariantError",
    "BatchSizeExceededError",
    "FactorUnavailableError",
    "InvalidFactorDataError",
    "InvalidRouteIdError",
    "RouteNotFoundError",
    # Logging
    "LogContext",
    "get_logger",
    "setup_logging",
]
