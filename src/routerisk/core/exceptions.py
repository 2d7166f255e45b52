"""Core exceptions for route risk assessment."""

from routerisk.utils.exceptions import RouteRiskError


class RouteNotFoundError(RouteRiskError):
    """Raised when the data source has no route for the identifier.

    Attributes:
        route_id: The identifier of the route that was not found
    """

    def __init__(self, route_id: str):
        super().__init__(f"Route not found: {route_id}")
        self.route_id = route_id

    def __str__(self) -> str:
        return f"RouteNotFoundError: {self.args[0]}"


class InvalidRouteIdError(RouteRiskError):
    """Raised when a route identifier is structurally malformed.

    Attributes:
        route_id: The rejected identifier (as received)
    """

    def __init__(self, route_id: object, reason: str = "malformed route identifier"):
        super().__init__(f"Invalid route id {route_id!r}: {reason}")
        self.route_id = route_id
        self.reason = reason

    def __str__(self) -> str:
        return f"InvalidRouteIdError: {self.args[0]}"


class FactorUnavailableError(RouteRiskError):
    """Raised when supporting data for a factor could not be obtained.

    Always absorbed by the engine into a DEFAULT-origin factor score.

    Attributes:
        factor_id: Factor whose data is unavailable
        reason: Why the data could not be obtained
    """

    def __init__(self, factor_id: str, reason: str):
        super().__init__(f"Factor {factor_id} unavailable: {reason}")
        self.factor_id = factor_id
        self.reason = reason

    def __str__(self) -> str:
        return f"FactorUnavailableError: {self.args[0]}"


class InvalidFactorDataError(RouteRiskError):
    """Raised when a calculator receives records that fail schema validation.

    Attributes:
        factor_id: Factor whose records were rejected
        errors: Number of validation errors reported
    """

    def __init__(self, factor_id: str, errors: int, detail: str = ""):
        message = f"Invalid supporting data for {factor_id} ({errors} errors)"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.factor_id = factor_id
        self.errors = errors

    def __str__(self) -> str:
        return f"InvalidFactorDataError: {self.args[0]}"


class AggregationInvariantError(RouteRiskError):
    """Raised when a bounded value escapes its range during aggregation.

    This error indicates a programming error - a calculator failed to clamp
    its output, or the grade table does not cover a composite score. It is
    never coerced.

    Attributes:
        value: The offending value
        detail: Which invariant was violated
    """

    def __init__(self, value: float, detail: str):
        super().__init__(f"{detail} (value={value})")
        self.value = value
        self.detail = detail

    def __str__(self) -> str:
        return f"AggregationInvariantError: {self.args[0]}"


class BatchSizeExceededError(RouteRiskError):
    """Raised when a batch request exceeds the configured maximum size.

    Attributes:
        size: Number of routes requested
        max_size: Maximum allowed batch size
    """

    def __init__(self, size: int, max_size: int):
        super().__init__(f"Maximum {max_size} routes can be processed at once")
        self.size = size
        self.max_size = max_size

    def __str__(self) -> str:
        return f"BatchSizeExceededError: {self.args[0]} (requested={self.size})"
