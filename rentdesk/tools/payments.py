from fastapi import APIRouter, Depends

from rentdesk.dependencies.services import get_payment_service
from rentdesk.schemas.payment import PaymentOrderRequest, PaymentOrderResponse
from rentdesk.services import PaymentService
from rentdesk.services.exceptions import ServiceError
from rentdesk.tools.errors import http_error

router = APIRouter()


@router.post("/create-order", response_model=PaymentOrderResponse)
async def create_payment_order(
    req: PaymentOrderRequest,
    service: PaymentService = Depends(get_payment_service),
):
    try:
        return await service.create_order(req)
    except ServiceError as exc:
        raise http_error(exc) from exc
