from __future__ import annotations

import inspect
import logging
from datetime import date
from typing import Any

from rentdesk.schemas.order import (
    DraftDurationUpdate,
    DraftFieldUpdate,
    DraftItemUpdate,
    DraftOpenRequest,
    DraftSnapshot,
    OrderRecord,
    OrderTotals,
)
from rentdesk.services.mock_store import DraftRepository, get_mock_store
from rentdesk.services.order_draft import RentalOrderDraft
from rentdesk.services.orders import OrderService

logger = logging.getLogger(__name__)


class DraftService:
    """Keeps rental order drafts between requests and submits them as orders.

    Drafts are editing state, so they always live in process memory; only the
    submitted order goes through :class:`OrderService`.
    """

    def __init__(
        self,
        orders: OrderService,
        *,
        repository: DraftRepository | None = None,
    ) -> None:
        self._orders = orders
        self._repository = repository or get_mock_store().drafts

    def open(self, request: DraftOpenRequest, *, today: date | None = None) -> DraftSnapshot:
        draft = RentalOrderDraft.for_user(request.user, today=today, rental_id=request.rental_id)
        draft_id = self._repository.add(draft)
        logger.info("Opened draft %s for %s", draft_id, draft.customer or "unknown customer")
        return draft.snapshot(draft_id)

    def get(self, draft_id: str) -> DraftSnapshot:
        return self._repository.get(draft_id).snapshot(draft_id)

    def update_field(self, draft_id: str, update: DraftFieldUpdate) -> DraftSnapshot:
        draft = self._repository.get(draft_id)
        draft.set_field(update.field, update.value)
        return draft.snapshot(draft_id)

    def update_duration(self, draft_id: str, update: DraftDurationUpdate) -> DraftSnapshot:
        draft = self._repository.get(draft_id)
        draft.set_duration(update.part, update.value)
        return draft.snapshot(draft_id)

    def update_item(self, draft_id: str, index: int, update: DraftItemUpdate) -> DraftSnapshot:
        draft = self._repository.get(draft_id)
        draft.set_item_field(index, update.field, update.value)
        return draft.snapshot(draft_id)

    def add_item(self, draft_id: str) -> DraftSnapshot:
        draft = self._repository.get(draft_id)
        draft.add_item()
        return draft.snapshot(draft_id)

    def remove_item(self, draft_id: str, index: int) -> DraftSnapshot:
        draft = self._repository.get(draft_id)
        if not draft.remove_item(index):
            logger.debug("Kept last line of draft %s", draft_id)
        return draft.snapshot(draft_id)

    def accept_terms(self, draft_id: str, accepted: bool = True) -> DraftSnapshot:
        draft = self._repository.get(draft_id)
        draft.accept_terms(accepted)
        return draft.snapshot(draft_id)

    def totals(self, draft_id: str) -> OrderTotals:
        return self._repository.get(draft_id).compute_totals()

    async def submit(self, draft_id: str) -> OrderRecord:
        draft = self._repository.claim(draft_id)
        try:
            result: Any = draft.submit(self._orders.create)
            if inspect.isawaitable(result):
                result = await result
        except BaseException:
            self._repository.restore(draft_id, draft)
            raise
        logger.info("Draft %s submitted as order %s", draft_id, result.order_id)
        return result

    def discard(self, draft_id: str) -> None:
        self._repository.claim(draft_id)
