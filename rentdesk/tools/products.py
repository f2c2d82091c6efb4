from typing import Dict, List

from fastapi import APIRouter, Depends

from rentdesk.dependencies.services import get_product_service
from rentdesk.schemas.product import (
    Product,
    ProductCreateRequest,
    ProductListRequest,
    ProductListResponse,
    ProductUpdateRequest,
)
from rentdesk.services import ProductService
from rentdesk.services.exceptions import ServiceError
from rentdesk.tools.errors import http_error

router = APIRouter()


@router.post("/create", response_model=Product, status_code=201)
async def create_product(
    req: ProductCreateRequest,
    service: ProductService = Depends(get_product_service),
):
    try:
        return await service.create(req)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.post("/list", response_model=ProductListResponse)
async def list_products(
    req: ProductListRequest,
    service: ProductService = Depends(get_product_service),
):
    try:
        return await service.list(req)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/categories")
async def list_categories(
    service: ProductService = Depends(get_product_service),
) -> Dict[str, List[str]]:
    try:
        return {"categories": await service.categories()}
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/brands")
async def list_brands(
    service: ProductService = Depends(get_product_service),
) -> Dict[str, List[str]]:
    try:
        return {"brands": await service.brands()}
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    try:
        return await service.get(product_id)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    req: ProductUpdateRequest,
    service: ProductService = Depends(get_product_service),
):
    try:
        return await service.update(product_id, req)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.delete("/{product_id}")
async def remove_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    try:
        await service.remove(product_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return {"success": True}
