from typing import Dict, Optional

from fastapi import APIRouter, Depends

from rentdesk.dependencies.services import get_rental_service
from rentdesk.schemas.rental import (
    OverdueCheckResponse,
    Rental,
    RentalCreateRequest,
    RentalListRequest,
    RentalListResponse,
    RentalStatusUpdate,
)
from rentdesk.services import RentalService
from rentdesk.services.exceptions import ServiceError
from rentdesk.tools.errors import http_error

router = APIRouter()


@router.post("/create", response_model=Rental, status_code=201)
async def create_rental(
    req: RentalCreateRequest,
    service: RentalService = Depends(get_rental_service),
):
    try:
        return await service.create(req)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.post("/list", response_model=RentalListResponse)
async def list_rentals(
    req: RentalListRequest,
    service: RentalService = Depends(get_rental_service),
):
    try:
        return await service.list(req)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/active/{user_id}")
async def active_rental(
    user_id: str,
    service: RentalService = Depends(get_rental_service),
) -> Dict[str, Optional[Rental]]:
    try:
        return {"rental": await service.active_for_user(user_id)}
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/history/{user_id}", response_model=RentalListResponse)
async def rental_history(
    user_id: str,
    page: int = 1,
    limit: int = 10,
    service: RentalService = Depends(get_rental_service),
):
    try:
        return await service.history_for_user(user_id, page=page, limit=limit)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.post("/check-overdue", response_model=OverdueCheckResponse)
async def check_overdue(
    service: RentalService = Depends(get_rental_service),
):
    try:
        return await service.mark_overdue()
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/{rental_id}", response_model=Rental)
async def get_rental(
    rental_id: str,
    service: RentalService = Depends(get_rental_service),
):
    try:
        return await service.get(rental_id)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.put("/{rental_id}/status", response_model=Rental)
async def update_rental_status(
    rental_id: str,
    req: RentalStatusUpdate,
    service: RentalService = Depends(get_rental_service),
):
    try:
        return await service.update_status(rental_id, req.status)
    except ServiceError as exc:
        raise http_error(exc) from exc
