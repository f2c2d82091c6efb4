from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, computed_field

from rentdesk.schemas.user import UserSummary

TAX_RATE = 0.18


class DraftField(str, Enum):
    CUSTOMER = "customer"
    INVOICE_ADDRESS = "invoice_address"
    DELIVERY_ADDRESS = "delivery_address"
    RENTAL_TEMPLATE = "rental_template"
    EXPIRATION = "expiration"
    RENTAL_ORDER_DATE = "rental_order_date"
    TERMS_CONDITIONS = "terms_conditions"


class DurationPart(str, Enum):
    MONTHS = "months"
    DAYS = "days"
    HOURS = "hours"


class ItemField(str, Enum):
    PRODUCT = "product"
    QUANTITY = "quantity"
    UNIT_PRICE = "unit_price"


class RentalTemplate(str, Enum):
    STANDARD = "Standard Rental"
    PREMIUM = "Premium Rental"
    BASIC = "Basic Rental"


class RentalDuration(BaseModel):
    months: int = 0
    days: int = 0
    hours: int = 0

    def describe(self) -> str:
        return f"{self.months} months, {self.days} days, {self.hours} hours"


class OrderLine(BaseModel):
    """One product line; sub total and tax always follow quantity and unit price."""

    product: str
    quantity: int = 1
    unit_price: float = 100.0

    @computed_field
    @property
    def sub_total(self) -> float:
        return self.quantity * self.unit_price

    @computed_field
    @property
    def tax(self) -> float:
        return self.sub_total * TAX_RATE


class OrderTotals(BaseModel):
    untaxed_total: float
    tax: float
    total: float


class RentalOrderPayload(BaseModel):
    customer: str
    invoice_address: str
    delivery_address: str
    rental_template: str
    expiration: str
    rental_order_date: str
    rental_duration: str  # "<months> months, <days> days, <hours> hours"
    items: List[OrderLine]
    terms_conditions: str
    untaxed_total: float
    tax: float
    total: float
    rental_id: Optional[str] = None


class DraftSnapshot(BaseModel):
    draft_id: Optional[str] = None
    rental_id: Optional[str] = None
    customer: str
    invoice_address: str
    delivery_address: str
    rental_template: str
    expiration: str
    rental_order_date: str
    rental_duration: RentalDuration
    items: List[OrderLine]
    terms_conditions: str
    terms_accepted: bool
    totals: OrderTotals


class DraftOpenRequest(BaseModel):
    user: Optional[UserSummary] = None
    rental_id: Optional[str] = None


class DraftFieldUpdate(BaseModel):
    field: DraftField
    value: str


class DraftDurationUpdate(BaseModel):
    part: DurationPart
    value: Any = None


class DraftItemUpdate(BaseModel):
    field: ItemField
    value: Any = None


class DraftTermsUpdate(BaseModel):
    accepted: bool = True


class OrderRecord(RentalOrderPayload):
    order_id: str
    status: str
    created_at: str


class OrderListRequest(BaseModel):
    customer: Optional[str] = None


class OrderListResponse(BaseModel):
    total: int
    items: List[OrderRecord]
