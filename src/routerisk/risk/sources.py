"""Supporting-data sources for route risk assessment.

The engine reads each route's profile and per-factor supporting data
through a RouteDataSource. Collection, caching and retries belong to the
source implementation, not to the scoring engine.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from routerisk.core.exceptions import FactorUnavailableError, RouteNotFoundError
from routerisk.risk.types import FactorId, RouteProfile


@runtime_checkable
class RouteDataSource(Protocol):
    """Interface for suppliers of route supporting data.

    Example implementation:
        class WarehouseRouteSource:
            async def get_route_profile(self, route_id: str) -> RouteProfile:
                row = await self._db.fetch_route(route_id)
                if row is None:
                    raise RouteNotFoundError(route_id)
                return RouteProfile.model_validate(row)

            async def get_factor_data(self, route_id: str, factor_id: FactorId) -> Any:
                return await self._db.fetch_records(route_id, factor_id.value)
    """

    async def get_route_profile(self, route_id: str) -> RouteProfile:
        """Get the route profile.

        Raises:
            RouteNotFoundError: If the route does not exist.
        """
        ...

    async def get_factor_data(self, route_id: str, factor_id: FactorId) -> Any:
        """Get the supporting data for one factor.

        Returns:
            Category-specific records, an empty list when collection found
            nothing, or None when no collection was attempted.

        Raises:
            FactorUnavailableError: If the data could not be obtained.
        """
        ...


class InMemoryRouteDataSource:
    """Route data source backed by dictionaries.

    Useful for tests and for callers that have already collected the data.
    """

    def __init__(self) -> None:
        self._profiles: dict[str, RouteProfile] = {}
        self._factor_data: dict[str, dict[FactorId, Any]] = {}
        self._unavailable: dict[str, dict[FactorId, str]] = {}

    def add_route(
        self,
        profile: RouteProfile,
        factor_data: Mapping[FactorId | str, Any] | None = None,
    ) -> None:
        """Register a route with its supporting data.

        Args:
            profile: Route profile.
            factor_data: Supporting data keyed by factor. Factors left out
                have no data.
        """
        self._profiles[profile.route_id] = profile
        self._factor_data[profile.route_id] = {
            FactorId(key): value for key, value in (factor_data or {}).items()
        }
        self._unavailable.pop(profile.route_id, None)

    def mark_unavailable(self, route_id: str, factor_id: FactorId, reason: str) -> None:
        """Make a factor's data fetch fail for a route."""
        self._unavailable.setdefault(route_id, {})[factor_id] = reason

    def remove_route(self, route_id: str) -> None:
        """Forget a route."""
        self._profiles.pop(route_id, None)
        self._factor_data.pop(route_id, None)
        self._unavailable.pop(route_id, None)

    async def get_route_profile(self, route_id: str) -> RouteProfile:
        profile = self._profiles.get(route_id)
        if profile is None:
            raise RouteNotFoundError(route_id)
        return profile

    async def get_factor_data(self, route_id: str, factor_id: FactorId) -> Any:
        if route_id not in self._profiles:
            raise RouteNotFoundError(route_id)
        reason = self._unavailable.get(route_id, {}).get(factor_id)
        if reason is not None:
            raise FactorUnavailableError(factor_id.value, reason)
        return self._factor_data[route_id].get(factor_id)
