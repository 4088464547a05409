# food_admin/state.py
"""Per-activation dashboard state.

One :class:`DashboardStore` lives for one page activation. It holds the
fetched collections and the first fatal error, and recomputes the derived
metrics whenever a slice changes. A failed activation is never retried in
place; a new activation (page reload) starts from scratch.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from . import aggregator
from .client import BackendClient, Resource
from .errors import FetchError
from .schemas import CategoryStats, DashboardCharts, DashboardMetrics, DashboardView, Order, Phase, User

logger = logging.getLogger(__name__)


class FetchPolicy(str, Enum):
    # failure puts the whole dashboard into Error
    FATAL = "fatal"
    # failure is logged and a fallback keeps the dashboard rendering
    FALLBACK = "fallback"


FETCH_POLICIES: Dict[Resource, FetchPolicy] = {
    Resource.USERS: FetchPolicy.FATAL,
    Resource.ORDERS: FetchPolicy.FATAL,
    Resource.CATEGORY_STATS: FetchPolicy.FALLBACK,
}

DASHBOARD_RESOURCES: Tuple[Resource, ...] = tuple(FETCH_POLICIES)


class DashboardStore:
    def __init__(self, total_reviews: int = 0):
        self.total_reviews = total_reviews
        self.users: Tuple[User, ...] = ()
        self.orders: Tuple[Order, ...] = ()
        self.category_stats: CategoryStats = aggregator.FALLBACK_CATEGORY_STATS
        self.category_stats_loaded = False
        self.error: Optional[FetchError] = None
        self.status: Dict[Resource, Phase] = {resource: Phase.LOADING for resource in DASHBOARD_RESOURCES}
        self._metrics: DashboardMetrics = aggregator.build_metrics((), (), total_reviews)
        self._charts: DashboardCharts = aggregator.build_charts((), None)

    # 🔄 loading
    async def load(self, client: BackendClient) -> "DashboardStore":
        """Fetch every dashboard resource concurrently and apply each outcome."""
        await asyncio.gather(*(self._load_one(client, resource) for resource in DASHBOARD_RESOURCES))
        return self

    async def _load_one(self, client: BackendClient, resource: Resource) -> None:
        try:
            if resource is Resource.USERS:
                payload = await client.get_users()
            elif resource is Resource.ORDERS:
                payload = await client.get_orders()
            else:
                payload = await client.get_category_stats()
        except FetchError as exc:
            self.apply_failure(resource, exc)
        else:
            self.apply_success(resource, payload)

    def apply_success(self, resource: Resource, payload: Any) -> None:
        if resource is Resource.USERS:
            self.users = tuple(payload)
        elif resource is Resource.ORDERS:
            self.orders = tuple(payload)
        elif resource is Resource.CATEGORY_STATS:
            self.category_stats = payload
            self.category_stats_loaded = True
        else:
            raise ValueError(f"{resource.value} is not a dashboard resource")
        self.status[resource] = Phase.READY
        self._recompute()

    def apply_failure(self, resource: Resource, error: FetchError) -> None:
        policy = FETCH_POLICIES[resource]
        self.status[resource] = Phase.ERROR
        if policy is FetchPolicy.FALLBACK:
            logger.error("Error fetching %s, using fallback: %s", resource.value, error.detail)
            return
        if self.error is None:
            self.error = error
        else:
            logger.warning("Ignoring later %s failure: %s", resource.value, error.detail)

    # ✂️ mutation results
    def remove_user(self, email: str) -> bool:
        remaining = tuple(user for user in self.users if user.email != email)
        if len(remaining) == len(self.users):
            return False
        self.users = remaining
        self._recompute()
        return True

    def _recompute(self) -> None:
        self._metrics = aggregator.build_metrics(self.users, self.orders, self.total_reviews)
        category_stats = self.category_stats if self.category_stats_loaded else None
        self._charts = aggregator.build_charts(self.users, category_stats)

    # 👀 derived view
    @property
    def phase(self) -> Phase:
        if self.error is not None:
            return Phase.ERROR
        if all(status is not Phase.LOADING for status in self.status.values()):
            return Phase.READY
        return Phase.LOADING

    @property
    def metrics(self) -> DashboardMetrics:
        return self._metrics

    @property
    def charts(self) -> DashboardCharts:
        return self._charts

    def view(self) -> DashboardView:
        phase = self.phase
        if phase is Phase.ERROR:
            return DashboardView(phase=phase, error=self.error.message)
        return DashboardView(
            phase=phase,
            users=list(self.users),
            metrics=self._metrics,
            charts=self._charts,
        )

    @property
    def failed_resources(self) -> List[Resource]:
        return [resource for resource, status in self.status.items() if status is Phase.ERROR]
