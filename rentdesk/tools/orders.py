from fastapi import APIRouter, Depends

from rentdesk.dependencies.services import get_order_service
from rentdesk.schemas.order import OrderListRequest, OrderListResponse, OrderRecord
from rentdesk.services import OrderService
from rentdesk.services.exceptions import ServiceError
from rentdesk.tools.errors import http_error

router = APIRouter()


@router.post("/list", response_model=OrderListResponse)
async def list_orders(
    req: OrderListRequest,
    service: OrderService = Depends(get_order_service),
):
    try:
        return await service.list(req.customer)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/{order_id}", response_model=OrderRecord)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
):
    try:
        return await service.get(order_id)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.delete("/{order_id}")
async def delete_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
):
    try:
        await service.delete(order_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return {"status": "deleted", "order_id": order_id}
