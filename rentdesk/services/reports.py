from __future__ import annotations

import logging
from typing import List

from rentdesk.clients.backend import BackendClient
from rentdesk.schemas.report import (
    AnalyticsReport,
    CategoryCount,
    CustomerSpend,
    DashboardStats,
    ProductPerformance,
    RevenuePoint,
)
from rentdesk.services.base import BackendService
from rentdesk.services.mock_store import ReportRepository, get_mock_store

logger = logging.getLogger(__name__)


class ReportService(BackendService):
    def __init__(
        self,
        client: BackendClient,
        *,
        repository: ReportRepository | None = None,
    ) -> None:
        super().__init__(client)
        self._repository = repository
        if self.use_mock_data:
            self._repository = repository or get_mock_store().reports

    async def dashboard_stats(self) -> DashboardStats:
        if self.use_mock_data:
            return await self._repository.dashboard_stats()
        data = await self._remote(
            "load dashboard stats", self._client.get("/reports/dashboard-stats")
        )
        return DashboardStats(**data)

    async def top_categories(self, limit: int = 10) -> List[CategoryCount]:
        if self.use_mock_data:
            return await self._repository.top_categories(limit)
        data = await self._remote(
            "load top categories", self._client.get("/reports/top-categories", {"limit": limit})
        )
        return [CategoryCount(**row) for row in data.get("categories", [])]

    async def top_products(self, limit: int = 10) -> List[ProductPerformance]:
        if self.use_mock_data:
            return await self._repository.top_products(limit)
        data = await self._remote(
            "load top products", self._client.get("/reports/top-products", {"limit": limit})
        )
        return [ProductPerformance(**row) for row in data.get("products", [])]

    async def top_customers(self, limit: int = 10) -> List[CustomerSpend]:
        if self.use_mock_data:
            return await self._repository.top_customers(limit)
        data = await self._remote(
            "load top customers", self._client.get("/reports/top-customers", {"limit": limit})
        )
        return [CustomerSpend(**row) for row in data.get("customers", [])]

    async def revenue_trends(self, days: int = 30) -> List[RevenuePoint]:
        if self.use_mock_data:
            return await self._repository.revenue_trends(days)
        data = await self._remote(
            "load revenue trends", self._client.get("/reports/revenue-trends", {"days": days})
        )
        return [RevenuePoint(**row) for row in data.get("trends", [])]

    async def analytics_report(self) -> AnalyticsReport:
        logger.debug("Generating analytics report")
        if self.use_mock_data:
            return await self._repository.analytics_report()
        data = await self._remote("load analytics report", self._client.get("/reports/analytics"))
        return AnalyticsReport(**data)
