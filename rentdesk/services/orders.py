from __future__ import annotations

import logging
from typing import Optional

from rentdesk.clients.backend import BackendClient
from rentdesk.schemas.order import OrderListResponse, OrderRecord, RentalOrderPayload
from rentdesk.services.base import BackendService
from rentdesk.services.exceptions import RecordNotFoundError
from rentdesk.services.mock_store import OrderRepository, get_mock_store

logger = logging.getLogger(__name__)


class OrderService(BackendService):
    def __init__(
        self,
        client: BackendClient,
        *,
        repository: OrderRepository | None = None,
    ) -> None:
        super().__init__(client)
        self._repository = repository
        if self.use_mock_data:
            self._repository = repository or get_mock_store().orders

    async def create(self, payload: RentalOrderPayload) -> OrderRecord:
        logger.info(
            "Creating rental order for %s (total %.2f)", payload.customer, payload.total
        )
        if self.use_mock_data:
            await self._client.simulate_latency()
            return await self._repository.create(payload)

        data = await self._remote(
            "create rental order",
            self._client.post("/rentals/create-order", payload.model_dump()),
        )
        return OrderRecord(**data.get("order", data))

    async def list(self, customer: Optional[str] = None) -> OrderListResponse:
        if self.use_mock_data:
            await self._client.simulate_latency()
            return await self._repository.list(customer)

        params = {"customer": customer} if customer else None
        data = await self._remote("list rental orders", self._client.get("/orders", params))
        return OrderListResponse(**data)

    async def get(self, order_id: str) -> OrderRecord:
        if self.use_mock_data:
            await self._client.simulate_latency()
            order = await self._repository.get(order_id)
            if order is None:
                raise RecordNotFoundError(f"Order {order_id} not found")
            return OrderRecord(**order)

        data = await self._remote("fetch rental order", self._client.get(f"/orders/{order_id}"))
        return OrderRecord(**data.get("order", data))

    async def delete(self, order_id: str) -> None:
        if self.use_mock_data:
            if not await self._repository.delete(order_id):
                raise RecordNotFoundError(f"Order {order_id} not found")
            return

        await self._remote("delete rental order", self._client.delete(f"/orders/{order_id}"))
