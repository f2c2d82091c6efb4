from typing import List, Optional

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_products: int
    total_rentals: int
    active_rentals: int
    total_revenue: float


class CategoryCount(BaseModel):
    name: str
    count: int


class ProductPerformance(BaseModel):
    id: str
    name: str
    category: Optional[str] = None
    rental_count: int
    total_revenue: float


class CustomerSpend(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    rental_count: int
    total_spent: float


class RevenuePoint(BaseModel):
    period: str  # ISO date
    revenue: float


class AnalyticsReport(BaseModel):
    dashboard_stats: DashboardStats
    top_categories: List[CategoryCount]
    top_products: List[ProductPerformance]
    top_customers: List[CustomerSpend]
    revenue_trends: List[RevenuePoint]
    report_generated_at: str
