from __future__ import annotations

import logging

from rentdesk.clients.backend import BackendClient
from rentdesk.schemas.payment import PaymentOrderRequest, PaymentOrderResponse
from rentdesk.services.base import BackendService
from rentdesk.services.exceptions import ValidationFailedError
from rentdesk.services.mock_store import PaymentGatewayRepository, get_mock_store

logger = logging.getLogger(__name__)


class PaymentService(BackendService):
    def __init__(
        self,
        client: BackendClient,
        *,
        repository: PaymentGatewayRepository | None = None,
        currency: str = "INR",
    ) -> None:
        super().__init__(client)
        self._currency = currency
        self._repository = repository
        if self.use_mock_data:
            self._repository = repository or get_mock_store().payments

    async def create_order(self, request: PaymentOrderRequest) -> PaymentOrderResponse:
        if not request.amount or request.amount <= 0:
            raise ValidationFailedError("Amount is required")
        logger.info("Creating payment order for %.2f %s", request.amount, self._currency)
        if self.use_mock_data:
            await self._client.simulate_latency()
            return await self._repository.create_order(request.amount, self._currency)

        data = await self._remote(
            "create payment order",
            self._client.post("/payments/create-order", {"amount": request.amount}),
        )
        return PaymentOrderResponse(**data)
