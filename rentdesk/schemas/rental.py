from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from rentdesk.schemas.product import Product
from rentdesk.schemas.user import UserSummary


class RentalStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PICKED_UP = "PICKED_UP"
    RETURNED = "RETURNED"
    CANCELLED = "CANCELLED"
    OVERDUE = "OVERDUE"


ACTIVE_STATUSES = (RentalStatus.PENDING, RentalStatus.CONFIRMED, RentalStatus.PICKED_UP)


class RentalCreateRequest(BaseModel):
    user: UserSummary
    product_id: str
    start_date: str  # ISO date or natural language, e.g. "tomorrow"
    end_date: str
    notes: str = ""


class Rental(BaseModel):
    id: str
    user_id: str
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    product_id: str
    product: Optional[Product] = None
    start_date: str
    end_date: str
    total_days: int
    price_per_day: float
    total_price: float
    notes: str = ""
    status: RentalStatus
    pickup_date: Optional[str] = None
    return_date: Optional[str] = None
    created_at: str


class RentalListRequest(BaseModel):
    page: int = 1
    limit: int = 20
    user_id: Optional[str] = None
    status: Optional[RentalStatus] = None
    search: Optional[str] = None


class RentalListResponse(BaseModel):
    items: List[Rental]
    total: int
    page: int
    limit: int


class RentalStatusUpdate(BaseModel):
    status: str


class OverdueCheckResponse(BaseModel):
    count: int
