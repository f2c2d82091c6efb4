from __future__ import annotations

import itertools
import json
import math
import time
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from rentdesk.schemas.order import OrderListResponse, OrderRecord, RentalOrderPayload
from rentdesk.schemas.payment import PaymentOrderResponse
from rentdesk.schemas.product import (
    Product,
    ProductCreateRequest,
    ProductListRequest,
    ProductListResponse,
    ProductUpdateRequest,
)
from rentdesk.schemas.rental import (
    ACTIVE_STATUSES,
    Rental,
    RentalCreateRequest,
    RentalListRequest,
    RentalListResponse,
    RentalStatus,
)
from rentdesk.schemas.report import (
    AnalyticsReport,
    CategoryCount,
    CustomerSpend,
    DashboardStats,
    ProductPerformance,
    RevenuePoint,
)
from rentdesk.services.dates import parse_rental_date, utc_now, utc_now_iso
from rentdesk.services.exceptions import RecordNotFoundError, ValidationFailedError
from rentdesk.services.order_draft import RentalOrderDraft

SECONDS_PER_DAY = 24 * 60 * 60
REQUIRED_PRODUCT_FIELDS = ("name", "description", "price_per_day", "is_rentable", "stock")


def _paginate(rows: Sequence[Dict[str, object]], page: int, limit: int) -> Tuple[int, int, List[Dict[str, object]]]:
    page = max(1, int(page))
    limit = max(1, int(limit))
    start = (page - 1) * limit
    return page, limit, list(rows[start:start + limit])


def _contains(haystack: object, needle: str) -> bool:
    return haystack is not None and needle in str(haystack).lower()


class _BaseRepository:
    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def _next_id(self) -> str:
        return f"{self._prefix}-{next(self._counter):05d}"


class ProductRepository(_BaseRepository):
    def __init__(self) -> None:
        super().__init__("PRD")
        self._products: "OrderedDict[str, Dict[str, object]]" = OrderedDict()

    @staticmethod
    def _to_model(record: Dict[str, object]) -> Product:
        return Product(**record)

    def _require(self, product_id: str) -> Dict[str, object]:
        record = self._products.get(product_id)
        if record is None:
            raise RecordNotFoundError(f"Product {product_id} not found")
        return record

    def insert(self, data: Dict[str, object]) -> Product:
        product_id = self._next_id()
        stock = max(0, int(data.get("stock") or 0))
        available = data.get("available_stock")
        record = {
            "id": product_id,
            "name": data["name"],
            "description": data.get("description") or "",
            "images": [image for image in data.get("images") or [] if image],
            "is_rentable": bool(data.get("is_rentable")),
            "stock": stock,
            "available_stock": stock if available is None else max(0, int(available)),
            "price_per_day": float(data.get("price_per_day") or 0),
            "category": data.get("category"),
            "brand": data.get("brand"),
            "model": data.get("model"),
            "condition": data.get("condition"),
            "created_at": utc_now_iso(),
        }
        self._products[product_id] = record
        return self._to_model(record)

    async def create(self, request: ProductCreateRequest) -> Product:
        return self.insert(request.model_dump())

    async def list(self, request: ProductListRequest) -> ProductListResponse:
        search = request.search.strip().lower()
        rows: List[Dict[str, object]] = []
        for record in self._products.values():
            if search and not _contains(record["name"], search):
                continue
            if request.rentable is not None and record["is_rentable"] != request.rentable:
                continue
            if request.category and record["category"] != request.category:
                continue
            if request.brand and record["brand"] != request.brand:
                continue
            if request.condition and record["condition"] != request.condition:
                continue
            price = float(record["price_per_day"])
            if request.min_price is not None and price < request.min_price:
                continue
            if request.max_price is not None and price > request.max_price:
                continue
            rows.append(record)

        descending = request.sort_order.lower() != "asc"
        if request.sort_by in ("name", "price_per_day"):
            rows.sort(key=lambda row: row[request.sort_by], reverse=descending)
        elif descending:
            rows.reverse()

        page, limit, window = _paginate(rows, request.page, request.limit)
        return ProductListResponse(
            items=[self._to_model(row) for row in window],
            total=len(rows),
            page=page,
            limit=limit,
        )

    async def get(self, product_id: str) -> Optional[Product]:
        record = self._products.get(product_id)
        return self._to_model(record) if record is not None else None

    async def update(self, product_id: str, request: ProductUpdateRequest) -> Product:
        record = self._require(product_id)
        changes = request.model_dump(exclude_unset=True)
        cleared = sorted(field for field in REQUIRED_PRODUCT_FIELDS if field in changes and changes[field] is None)
        if cleared:
            raise ValidationFailedError(f"Product fields cannot be cleared: {', '.join(cleared)}")
        if "images" in changes:
            changes["images"] = [image for image in changes["images"] or [] if image]
        if "stock" in changes:
            stock = max(0, int(changes["stock"] or 0))
            rented = int(record["stock"]) - int(record["available_stock"])
            changes["stock"] = stock
            changes["available_stock"] = max(0, stock - rented)
        if "is_rentable" in changes:
            changes["is_rentable"] = bool(changes["is_rentable"])
        product = self._to_model({**record, **changes})
        record.update(changes)
        return product

    async def delete(self, product_id: str) -> bool:
        return self._products.pop(product_id, None) is not None

    async def categories(self) -> List[str]:
        return sorted({str(r["category"]) for r in self._products.values() if r["category"]})

    async def brands(self) -> List[str]:
        return sorted({str(r["brand"]) for r in self._products.values() if r["brand"]})

    def adjust_available_stock(self, product_id: str, delta: int) -> None:
        record = self._require(product_id)
        record["available_stock"] = int(record["available_stock"]) + delta

    def record(self, product_id: str) -> Optional[Dict[str, object]]:
        return self._products.get(product_id)

    def clear(self) -> None:
        self._products.clear()

    def records(self) -> List[Dict[str, object]]:
        return [dict(record) for record in self._products.values()]


class RentalRepository(_BaseRepository):
    def __init__(self, products: ProductRepository) -> None:
        super().__init__("RNT")
        self._products = products
        self._rentals: "OrderedDict[str, Dict[str, object]]" = OrderedDict()

    def _to_model(self, record: Dict[str, object]) -> Rental:
        product = self._products.record(str(record["product_id"]))
        return Rental(**record, product=Product(**product) if product else None)

    def _require(self, rental_id: str) -> Dict[str, object]:
        record = self._rentals.get(rental_id)
        if record is None:
            raise RecordNotFoundError(f"Rental {rental_id} not found")
        return record

    def _active_record(self, user_id: str) -> Optional[Dict[str, object]]:
        for record in reversed(self._rentals.values()):
            if record["user_id"] == user_id and record["status"] in ACTIVE_STATUSES:
                return record
        return None

    async def create(self, request: RentalCreateRequest, *, tz_name: str = "Asia/Kolkata") -> Rental:
        user = request.user
        if self._active_record(user.id) is not None:
            raise ValidationFailedError(
                "You already have an active rental. Only one item can be rented at a time."
            )

        product = self._products.record(request.product_id)
        if product is None:
            raise RecordNotFoundError("Product not found")
        if not product["is_rentable"]:
            raise ValidationFailedError("This product is not available for rent")
        if int(product["available_stock"]) < 1:
            raise ValidationFailedError("Product is currently out of stock")

        start = parse_rental_date(request.start_date, tz_name=tz_name)
        end = parse_rental_date(request.end_date, tz_name=tz_name)
        total_days = math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)
        if total_days <= 0:
            raise ValidationFailedError("End date must be after start date")

        price_per_day = float(product["price_per_day"])
        self._products.adjust_available_stock(request.product_id, -1)

        rental_id = self._next_id()
        record = {
            "id": rental_id,
            "user_id": user.id,
            "user_email": user.email,
            "user_name": user.name,
            "product_id": request.product_id,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "total_days": total_days,
            "price_per_day": price_per_day,
            "total_price": total_days * price_per_day,
            "notes": request.notes,
            "status": RentalStatus.PENDING,
            "pickup_date": None,
            "return_date": None,
            "created_at": utc_now_iso(),
        }
        self._rentals[rental_id] = record
        return self._to_model(record)

    async def list(self, request: RentalListRequest) -> RentalListResponse:
        search = (request.search or "").strip().lower()
        rows: List[Dict[str, object]] = []
        for record in reversed(self._rentals.values()):
            if request.user_id and record["user_id"] != request.user_id:
                continue
            if request.status and record["status"] != request.status:
                continue
            if search:
                product = self._products.record(str(record["product_id"])) or {}
                if not (
                    _contains(record["user_email"], search)
                    or _contains(record["user_name"], search)
                    or _contains(product.get("name"), search)
                ):
                    continue
            rows.append(record)

        page, limit, window = _paginate(rows, request.page, request.limit)
        return RentalListResponse(
            items=[self._to_model(row) for row in window],
            total=len(rows),
            page=page,
            limit=limit,
        )

    async def get(self, rental_id: str) -> Optional[Rental]:
        record = self._rentals.get(rental_id)
        return self._to_model(record) if record is not None else None

    async def update_status(self, rental_id: str, status: RentalStatus) -> Rental:
        record = self._require(rental_id)
        now = utc_now_iso()
        if status is RentalStatus.PICKED_UP:
            record["pickup_date"] = now
        elif status is RentalStatus.RETURNED:
            record["return_date"] = now
            self._products.adjust_available_stock(str(record["product_id"]), 1)
        elif status is RentalStatus.CANCELLED:
            self._products.adjust_available_stock(str(record["product_id"]), 1)
        record["status"] = status
        return self._to_model(record)

    async def active_for_user(self, user_id: str) -> Optional[Rental]:
        record = self._active_record(user_id)
        return self._to_model(record) if record is not None else None

    async def mark_overdue(self, now: datetime | None = None) -> int:
        now = now or utc_now()
        count = 0
        for record in self._rentals.values():
            if record["status"] is not RentalStatus.PICKED_UP:
                continue
            if datetime.fromisoformat(str(record["end_date"])) < now:
                record["status"] = RentalStatus.OVERDUE
                count += 1
        return count

    async def confirm_with_order(self, rental_id: str, details: Dict[str, object]) -> Rental:
        record = self._require(rental_id)
        record["status"] = RentalStatus.CONFIRMED
        record["notes"] = (
            f"{record['notes']}\n\nFormal Order Created:\n"
            f"{json.dumps(details, indent=2, default=str)}"
        )
        return self._to_model(record)

    def records(self) -> List[Dict[str, object]]:
        return [dict(record) for record in self._rentals.values()]


class OrderRepository(_BaseRepository):
    def __init__(self, rentals: RentalRepository) -> None:
        super().__init__("ORD")
        self._rentals = rentals
        self._orders: "OrderedDict[str, Dict[str, object]]" = OrderedDict()

    async def create(self, payload: RentalOrderPayload) -> OrderRecord:
        details = payload.model_dump(exclude={"rental_id"})
        if payload.rental_id:
            await self._rentals.confirm_with_order(payload.rental_id, details)

        order_id = self._next_id()
        record = OrderRecord(
            **payload.model_dump(exclude={"items"}),
            items=payload.items,
            order_id=order_id,
            status="confirmed",
            created_at=utc_now_iso(),
        )
        self._orders[order_id] = record.model_dump()
        return record

    async def list(self, customer: Optional[str] = None) -> OrderListResponse:
        items = [
            OrderRecord(**order)
            for order in reversed(self._orders.values())
            if customer is None or order["customer"] == customer
        ]
        return OrderListResponse(total=len(items), items=items)

    async def get(self, order_id: str) -> Optional[Dict[str, object]]:
        order = self._orders.get(order_id)
        return dict(order) if order is not None else None

    async def delete(self, order_id: str) -> bool:
        return self._orders.pop(order_id, None) is not None

    def records(self) -> List[Dict[str, object]]:
        return [dict(order) for order in self._orders.values()]


class DraftRepository(_BaseRepository):
    """Open drafts keyed by id; stale drafts are swept whenever a new one is added."""

    def __init__(
        self,
        *,
        max_drafts: int = 500,
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__("DRF")
        self._max_drafts = max_drafts
        self._ttl = ttl
        self._clock = clock
        self._drafts: "OrderedDict[str, Tuple[RentalOrderDraft, datetime]]" = OrderedDict()

    def _sweep(self) -> None:
        cutoff = self._clock() - self._ttl
        for draft_id in [key for key, (_, opened_at) in self._drafts.items() if opened_at < cutoff]:
            del self._drafts[draft_id]
        while self._drafts and len(self._drafts) >= self._max_drafts:
            self._drafts.popitem(last=False)

    def add(self, draft: RentalOrderDraft) -> str:
        self._sweep()
        draft_id = self._next_id()
        self._drafts[draft_id] = (draft, self._clock())
        return draft_id

    def get(self, draft_id: str) -> RentalOrderDraft:
        entry = self._drafts.get(draft_id)
        if entry is None:
            raise RecordNotFoundError(f"Draft {draft_id} not found")
        return entry[0]

    def claim(self, draft_id: str) -> RentalOrderDraft:
        """Take the draft out of the repository so only one caller can submit it."""
        entry = self._drafts.pop(draft_id, None)
        if entry is None:
            raise RecordNotFoundError(f"Draft {draft_id} not found")
        return entry[0]

    def restore(self, draft_id: str, draft: RentalOrderDraft) -> None:
        self._drafts[draft_id] = (draft, self._clock())

    def delete(self, draft_id: str) -> bool:
        return self._drafts.pop(draft_id, None) is not None

    def items(self) -> Iterable[Tuple[str, RentalOrderDraft]]:
        return [(draft_id, draft) for draft_id, (draft, _) in self._drafts.items()]


class ReportRepository:
    def __init__(self, products: ProductRepository, rentals: RentalRepository) -> None:
        self._products = products
        self._rentals = rentals

    async def dashboard_stats(self) -> DashboardStats:
        rentals = self._rentals.records()
        active = (RentalStatus.CONFIRMED, RentalStatus.PICKED_UP)
        return DashboardStats(
            total_products=len(self._products.records()),
            total_rentals=len(rentals),
            active_rentals=sum(1 for rental in rentals if rental["status"] in active),
            total_revenue=sum(float(rental["total_price"] or 0) for rental in rentals),
        )

    def _rentals_by_product(self) -> Dict[str, List[Dict[str, object]]]:
        grouped: Dict[str, List[Dict[str, object]]] = {}
        for rental in self._rentals.records():
            grouped.setdefault(str(rental["product_id"]), []).append(rental)
        return grouped

    async def top_categories(self, limit: int = 10) -> List[CategoryCount]:
        grouped = self._rentals_by_product()
        counts: Dict[str, int] = {}
        for product in self._products.records():
            category = str(product["category"] or "Uncategorized")
            counts[category] = counts.get(category, 0) + len(grouped.get(str(product["id"]), []))
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [CategoryCount(name=name, count=count) for name, count in ranked[:limit]]

    async def top_products(self, limit: int = 10) -> List[ProductPerformance]:
        grouped = self._rentals_by_product()
        stats = []
        for product in self._products.records():
            rentals = grouped.get(str(product["id"]), [])
            stats.append(
                ProductPerformance(
                    id=str(product["id"]),
                    name=str(product["name"]),
                    category=product["category"],
                    rental_count=len(rentals),
                    total_revenue=sum(float(r["total_price"] or 0) for r in rentals),
                )
            )
        stats.sort(key=lambda stat: stat.rental_count, reverse=True)
        return stats[:limit]

    async def top_customers(self, limit: int = 10) -> List[CustomerSpend]:
        customers: Dict[str, CustomerSpend] = {}
        for rental in self._rentals.records():
            user_id = str(rental["user_id"])
            customer = customers.get(user_id)
            if customer is None:
                customer = customers[user_id] = CustomerSpend(
                    id=user_id,
                    email=rental["user_email"],
                    name=rental["user_name"],
                    rental_count=0,
                    total_spent=0.0,
                )
            customer.rental_count += 1
            customer.total_spent += float(rental["total_price"] or 0)
        ranked = sorted(customers.values(), key=lambda c: c.total_spent, reverse=True)
        return ranked[:limit]

    async def revenue_trends(self, days: int = 30, *, today: date | None = None) -> List[RevenuePoint]:
        today = today or utc_now().date()
        revenue: Dict[str, float] = {
            (today - timedelta(days=offset)).isoformat(): 0.0 for offset in range(days)
        }
        for rental in self._rentals.records():
            period = datetime.fromisoformat(str(rental["created_at"])).date().isoformat()
            if period in revenue:
                revenue[period] += float(rental["total_price"] or 0)
        return [RevenuePoint(period=period, revenue=revenue[period]) for period in sorted(revenue)]

    async def analytics_report(self) -> AnalyticsReport:
        return AnalyticsReport(
            dashboard_stats=await self.dashboard_stats(),
            top_categories=await self.top_categories(5),
            top_products=await self.top_products(5),
            top_customers=await self.top_customers(5),
            revenue_trends=await self.revenue_trends(30),
            report_generated_at=utc_now_iso(),
        )


class PaymentGatewayRepository(_BaseRepository):
    def __init__(self) -> None:
        super().__init__("PAY")
        self._orders: Dict[str, Dict[str, object]] = {}

    async def create_order(self, amount: float, currency: str) -> PaymentOrderResponse:
        order_id = self._next_id()
        record = {
            "id": order_id,
            "amount": round(amount * 100),
            "currency": currency,
            "receipt": f"sr_order_{int(time.time() * 1000)}",
            "status": "created",
        }
        self._orders[order_id] = record
        return PaymentOrderResponse(**record)

    def records(self) -> List[Dict[str, object]]:
        return [dict(order) for order in self._orders.values()]


@dataclass
class MockDataStore:
    products: ProductRepository
    rentals: RentalRepository
    orders: OrderRepository
    drafts: DraftRepository
    reports: ReportRepository
    payments: PaymentGatewayRepository


_mock_store: Optional[MockDataStore] = None


def get_mock_store() -> MockDataStore:
    global _mock_store
    if _mock_store is None:
        products = ProductRepository()
        rentals = RentalRepository(products)
        orders = OrderRepository(rentals)
        _mock_store = MockDataStore(
            products=products,
            rentals=rentals,
            orders=orders,
            drafts=DraftRepository(),
            reports=ReportRepository(products, rentals),
            payments=PaymentGatewayRepository(),
        )
    return _mock_store


def reset_mock_store() -> None:
    global _mock_store
    _mock_store = None
