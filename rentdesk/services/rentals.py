from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from rentdesk.clients.backend import BackendClient
from rentdesk.schemas.rental import (
    OverdueCheckResponse,
    Rental,
    RentalCreateRequest,
    RentalListRequest,
    RentalListResponse,
    RentalStatus,
)
from rentdesk.services.base import BackendService
from rentdesk.services.exceptions import RecordNotFoundError, ValidationFailedError
from rentdesk.services.mock_store import RentalRepository, get_mock_store

logger = logging.getLogger(__name__)


def parse_status(value: RentalStatus | str) -> RentalStatus:
    try:
        return RentalStatus(value)
    except ValueError as exc:
        raise ValidationFailedError("Invalid status", cause=exc) from exc


class RentalService(BackendService):
    def __init__(
        self,
        client: BackendClient,
        *,
        repository: RentalRepository | None = None,
        tz_name: str = "Asia/Kolkata",
    ) -> None:
        super().__init__(client)
        self._tz_name = tz_name
        self._repository = repository
        if self.use_mock_data:
            self._repository = repository or get_mock_store().rentals

    async def create(self, request: RentalCreateRequest) -> Rental:
        logger.info("Creating rental of %s for %s", request.product_id, request.user.email or request.user.id)
        if self.use_mock_data:
            await self._client.simulate_latency()
            rental = await self._repository.create(request, tz_name=self._tz_name)
            logger.info("Rental %s created for %s", rental.id, rental.user_id)
            return rental

        data = await self._remote("create rental", self._client.post("/rentals", request.model_dump()))
        return Rental(**data.get("rental", data))

    async def list(self, request: RentalListRequest) -> RentalListResponse:
        logger.debug("Listing rentals page %s", request.page)
        if self.use_mock_data:
            await self._client.simulate_latency()
            return await self._repository.list(request)

        params = request.model_dump(mode="json", exclude_none=True)
        data = await self._remote("list rentals", self._client.get("/rentals", params))
        return RentalListResponse(**data)

    async def get(self, rental_id: str) -> Rental:
        if self.use_mock_data:
            await self._client.simulate_latency()
            rental = await self._repository.get(rental_id)
            if rental is None:
                raise RecordNotFoundError("Rental not found")
            return rental

        data = await self._remote("fetch rental", self._client.get(f"/rentals/{rental_id}"))
        return Rental(**data.get("rental", data))

    async def update_status(self, rental_id: str, status: RentalStatus | str) -> Rental:
        status = parse_status(status)
        logger.info("Rental %s -> %s", rental_id, status.value)
        if self.use_mock_data:
            await self._client.simulate_latency()
            return await self._repository.update_status(rental_id, status)

        data = await self._remote(
            "update rental status",
            self._client.put(f"/rentals/{rental_id}/status", {"status": status.value}),
        )
        return Rental(**data.get("rental", data))

    async def active_for_user(self, user_id: str) -> Optional[Rental]:
        if self.use_mock_data:
            await self._client.simulate_latency()
            return await self._repository.active_for_user(user_id)

        data = await self._remote(
            "fetch active rental", self._client.get("/rentals/active", {"userId": user_id})
        )
        rental = data.get("rental")
        return Rental(**rental) if rental else None

    async def history_for_user(self, user_id: str, *, page: int = 1, limit: int = 10) -> RentalListResponse:
        return await self.list(RentalListRequest(user_id=user_id, page=page, limit=limit))

    async def mark_overdue(self, now: datetime | None = None) -> OverdueCheckResponse:
        if now is not None and now.tzinfo is None:
            # naive datetimes are wall-clock time in the shop timezone
            now = now.replace(tzinfo=ZoneInfo(self._tz_name))
        if self.use_mock_data:
            count = await self._repository.mark_overdue(now)
        else:
            data = await self._remote(
                "check overdue rentals", self._client.post("/rentals/check-overdue", {})
            )
            count = int(data.get("count", 0))
        if count:
            logger.warning("Marked %d rental(s) overdue", count)
        return OverdueCheckResponse(count=count)
