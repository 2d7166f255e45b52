"""Custom exceptions for Routerisk."""


class RouteRiskError(Exception):
    """Base exception for all Routerisk errors."""

    pass


class ConfigurationError(RouteRiskError):
    """Error in configuration or settings.

    Raised at startup for an invalid weight policy, an invalid grade band
    table, or settings that fail validation. The engine refuses to run.
    """

    pass
