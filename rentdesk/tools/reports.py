from typing import List

from fastapi import APIRouter, Depends

from rentdesk.dependencies.services import get_report_service
from rentdesk.schemas.report import (
    AnalyticsReport,
    CategoryCount,
    CustomerSpend,
    DashboardStats,
    ProductPerformance,
    RevenuePoint,
)
from rentdesk.services import ReportService
from rentdesk.services.exceptions import ServiceError
from rentdesk.tools.errors import http_error

router = APIRouter()


@router.get("/dashboard-stats", response_model=DashboardStats)
async def dashboard_stats(service: ReportService = Depends(get_report_service)):
    try:
        return await service.dashboard_stats()
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/top-categories", response_model=List[CategoryCount])
async def top_categories(limit: int = 10, service: ReportService = Depends(get_report_service)):
    try:
        return await service.top_categories(limit)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/top-products", response_model=List[ProductPerformance])
async def top_products(limit: int = 10, service: ReportService = Depends(get_report_service)):
    try:
        return await service.top_products(limit)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/top-customers", response_model=List[CustomerSpend])
async def top_customers(limit: int = 10, service: ReportService = Depends(get_report_service)):
    try:
        return await service.top_customers(limit)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/revenue-trends", response_model=List[RevenuePoint])
async def revenue_trends(days: int = 30, service: ReportService = Depends(get_report_service)):
    try:
        return await service.revenue_trends(days)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/analytics", response_model=AnalyticsReport)
async def analytics_report(service: ReportService = Depends(get_report_service)):
    try:
        return await service.analytics_report()
    except ServiceError as exc:
        raise http_error(exc) from exc
