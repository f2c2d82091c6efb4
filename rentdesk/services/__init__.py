"""Service package public API definitions.

Service implementations import ``rentdesk.clients.backend``, which in turn
imports ``rentdesk.services.exceptions``. Importing the implementations here
eagerly would make that a circular import, so they are loaded on first
attribute access instead.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "DraftService",
    "OrderService",
    "PaymentService",
    "ProductService",
    "RentalService",
    "ReportService",
]

_SERVICE_MODULES = {
    "DraftService": "drafts",
    "OrderService": "orders",
    "PaymentService": "payments",
    "ProductService": "products",
    "RentalService": "rentals",
    "ReportService": "reports",
}


def __getattr__(name: str) -> Any:
    if name not in _SERVICE_MODULES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(f".{_SERVICE_MODULES[name]}", __name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from .drafts import DraftService as DraftService
    from .orders import OrderService as OrderService
    from .payments import PaymentService as PaymentService
    from .products import ProductService as ProductService
    from .rentals import RentalService as RentalService
    from .reports import ReportService as ReportService
