from typing import List, Optional

from pydantic import BaseModel, Field


class ProductCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    price_per_day: float
    description: str = ""
    images: List[Optional[str]] = Field(default_factory=list)
    is_rentable: bool = False
    stock: Optional[int] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    condition: Optional[str] = None  # New | Good | Fair


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    images: Optional[List[Optional[str]]] = None
    is_rentable: Optional[bool] = None
    stock: Optional[int] = None
    price_per_day: Optional[float] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    condition: Optional[str] = None


class Product(BaseModel):
    id: str
    name: str
    description: str = ""
    images: List[str] = Field(default_factory=list)
    is_rentable: bool = False
    stock: int = 0
    available_stock: int = 0
    price_per_day: float = 0.0
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    condition: Optional[str] = None
    created_at: str


class ProductListRequest(BaseModel):
    page: int = 1
    limit: int = 20
    search: str = ""
    rentable: Optional[bool] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    condition: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_by: str = "created_at"  # created_at | name | price_per_day
    sort_order: str = "desc"     # asc | desc


class ProductListResponse(BaseModel):
    items: List[Product]
    total: int
    page: int
    limit: int
