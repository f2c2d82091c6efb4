from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from rentdesk.clients.backend import BackendClient
from rentdesk.config import Settings, get_settings
from rentdesk.services import (
    DraftService,
    OrderService,
    PaymentService,
    ProductService,
    RentalService,
    ReportService,
)


@lru_cache(maxsize=1)
def get_backend_client_cached() -> BackendClient:
    settings = get_settings()
    return BackendClient(
        settings.backend_base_url,
        timeout=settings.backend_timeout,
        use_mock_data=settings.use_mock_data,
        token=settings.backend_token,
    )


def get_backend_client(settings: Settings = Depends(get_settings)) -> BackendClient:
    return get_backend_client_cached()


def get_product_service(
    client: BackendClient = Depends(get_backend_client),
) -> ProductService:
    return ProductService(client)


def get_rental_service(
    client: BackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
) -> RentalService:
    return RentalService(client, tz_name=settings.timezone)


def get_order_service(
    client: BackendClient = Depends(get_backend_client),
) -> OrderService:
    return OrderService(client)


def get_draft_service(
    orders: OrderService = Depends(get_order_service),
) -> DraftService:
    return DraftService(orders)


def get_report_service(
    client: BackendClient = Depends(get_backend_client),
) -> ReportService:
    return ReportService(client)


def get_payment_service(
    client: BackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
) -> PaymentService:
    return PaymentService(client, currency=settings.currency)
