from fastapi import APIRouter, Depends

from rentdesk.dependencies.services import get_draft_service
from rentdesk.schemas.order import (
    DraftDurationUpdate,
    DraftFieldUpdate,
    DraftItemUpdate,
    DraftOpenRequest,
    DraftSnapshot,
    DraftTermsUpdate,
    OrderRecord,
    OrderTotals,
)
from rentdesk.services import DraftService
from rentdesk.services.exceptions import ServiceError
from rentdesk.tools.errors import http_error

router = APIRouter()


@router.post("/open", response_model=DraftSnapshot)
async def open_draft(
    req: DraftOpenRequest,
    service: DraftService = Depends(get_draft_service),
):
    return service.open(req)


@router.get("/{draft_id}", response_model=DraftSnapshot)
async def get_draft(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
):
    try:
        return service.get(draft_id)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.post("/{draft_id}/field", response_model=DraftSnapshot)
async def update_field(
    draft_id: str,
    req: DraftFieldUpdate,
    service: DraftService = Depends(get_draft_service),
):
    try:
        return service.update_field(draft_id, req)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.post("/{draft_id}/duration", response_model=DraftSnapshot)
async def update_duration(
    draft_id: str,
    req: DraftDurationUpdate,
    service: DraftService = Depends(get_draft_service),
):
    try:
        return service.update_duration(draft_id, req)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.post("/{draft_id}/items", response_model=DraftSnapshot)
async def add_item(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
):
    try:
        return service.add_item(draft_id)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.post("/{draft_id}/items/{index}", response_model=DraftSnapshot)
async def update_item(
    draft_id: str,
    index: int,
    req: DraftItemUpdate,
    service: DraftService = Depends(get_draft_service),
):
    try:
        return service.update_item(draft_id, index, req)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.delete("/{draft_id}/items/{index}", response_model=DraftSnapshot)
async def remove_item(
    draft_id: str,
    index: int,
    service: DraftService = Depends(get_draft_service),
):
    try:
        return service.remove_item(draft_id, index)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.post("/{draft_id}/terms", response_model=DraftSnapshot)
async def accept_terms(
    draft_id: str,
    req: DraftTermsUpdate,
    service: DraftService = Depends(get_draft_service),
):
    try:
        return service.accept_terms(draft_id, req.accepted)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.get("/{draft_id}/totals", response_model=OrderTotals)
async def draft_totals(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
):
    try:
        return service.totals(draft_id)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.post("/{draft_id}/submit", response_model=OrderRecord)
async def submit_draft(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
):
    try:
        return await service.submit(draft_id)
    except ServiceError as exc:
        raise http_error(exc) from exc


@router.delete("/{draft_id}")
async def discard_draft(
    draft_id: str,
    service: DraftService = Depends(get_draft_service),
):
    try:
        service.discard(draft_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return {"status": "discarded", "draft_id": draft_id}
