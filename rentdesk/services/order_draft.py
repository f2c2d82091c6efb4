"""In-memory rental order draft.

A :class:`RentalOrderDraft` is the order an admin is still editing: the
customer, both addresses, the rental template, the quotation dates, the
rental duration and an ordered list of :class:`OrderLine` items. Line sub
totals and taxes are derived from quantity and unit price, and the order
totals are re-derived from the current lines every time they are asked for.

Numeric edits never raise: empty or unparsable input becomes ``0``,
fractional counts are truncated and negative values are clamped to ``0``.
The only rejected operation is submitting before the terms are accepted.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Tuple, Type, TypeVar

from rentdesk.schemas.order import (
    DraftField,
    DraftSnapshot,
    DurationPart,
    ItemField,
    OrderLine,
    OrderTotals,
    RentalDuration,
    RentalOrderPayload,
    RentalTemplate,
)
from rentdesk.schemas.user import UserSummary
from rentdesk.services.exceptions import (
    LineItemNotFoundError,
    TermsNotAcceptedError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

DEFAULT_INVOICE_ADDRESS = "123 Main St, City, State 12345"
DEFAULT_DELIVERY_ADDRESS = "456 Oak Ave, City, State 12345"
DEFAULT_TERMS = (
    "Extra charges apply for late return. "
    "Equipment must be returned in its original condition."
)
EXPIRATION_DAYS = 30
NEW_LINE_QUANTITY = 1
NEW_LINE_UNIT_PRICE = 100.0


def _coerce_number(value: Any) -> float:
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip() if value is not None else ""
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _coerce_count(value: Any) -> int:
    return max(0, int(_coerce_number(value)))


def _coerce_amount(value: Any) -> float:
    return max(0.0, _coerce_number(value))


def _resolve(enum_cls: Type[E], value: E | str) -> E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationFailedError(
            f"Unknown {enum_cls.__name__} {value!r}", cause=exc
        ) from exc


def compute_totals(items: Iterable[OrderLine]) -> OrderTotals:
    """Sum line sub totals and taxes; total is their sum."""

    untaxed_total = 0.0
    tax = 0.0
    for item in items:
        untaxed_total += item.sub_total
        tax += item.tax
    return OrderTotals(untaxed_total=untaxed_total, tax=tax, total=untaxed_total + tax)


class RentalOrderDraft:
    def __init__(
        self,
        customer: str = "",
        *,
        today: date | None = None,
        rental_id: str | None = None,
    ) -> None:
        today = today or date.today()
        self.rental_id = rental_id
        self.customer = customer
        self.invoice_address = DEFAULT_INVOICE_ADDRESS
        self.delivery_address = DEFAULT_DELIVERY_ADDRESS
        self.rental_template = RentalTemplate.STANDARD.value
        self.expiration = (today + timedelta(days=EXPIRATION_DAYS)).isoformat()
        self.rental_order_date = today.isoformat()
        self.rental_duration = RentalDuration()
        self.terms_conditions = DEFAULT_TERMS
        self._terms_accepted = False
        self._items: List[OrderLine] = [
            OrderLine(product="Product 1", quantity=5, unit_price=200.0)
        ]

    @classmethod
    def for_user(
        cls,
        user: UserSummary | None,
        *,
        today: date | None = None,
        rental_id: str | None = None,
    ) -> "RentalOrderDraft":
        return cls(user.name if user else "", today=today, rental_id=rental_id)

    @property
    def items(self) -> Tuple[OrderLine, ...]:
        return tuple(self._items)

    @property
    def terms_accepted(self) -> bool:
        return self._terms_accepted

    def set_field(self, field: DraftField | str, value: Any) -> None:
        """Overwrite a top-level text field; any string is accepted."""

        field = _resolve(DraftField, field)
        setattr(self, field.value, "" if value is None else str(value))

    def set_duration(self, part: DurationPart | str, value: Any) -> None:
        part = _resolve(DurationPart, part)
        setattr(self.rental_duration, part.value, _coerce_count(value))

    def set_item_field(self, index: int, field: ItemField | str, value: Any) -> OrderLine:
        """Overwrite one attribute of the line at ``index``.

        Sub total and tax are properties of the line, so a quantity or unit
        price edit is reflected in them immediately and in no other line.
        """

        field = _resolve(ItemField, field)
        line = self._line_at(index)
        if field is ItemField.PRODUCT:
            line.product = "" if value is None else str(value)
        elif field is ItemField.QUANTITY:
            line.quantity = _coerce_count(value)
        else:
            line.unit_price = _coerce_amount(value)
        return line

    def add_item(self) -> OrderLine:
        line = OrderLine(
            product=f"Product {len(self._items) + 1}",
            quantity=NEW_LINE_QUANTITY,
            unit_price=NEW_LINE_UNIT_PRICE,
        )
        self._items.append(line)
        return line

    def remove_item(self, index: int) -> bool:
        """Remove the line at ``index``; the last remaining line is kept."""

        self._line_at(index)
        if len(self._items) == 1:
            return False
        del self._items[index]
        return True

    def accept_terms(self, accepted: bool = True) -> None:
        self._terms_accepted = bool(accepted)

    def compute_totals(self) -> OrderTotals:
        return compute_totals(self._items)

    def build_payload(self) -> RentalOrderPayload:
        totals = self.compute_totals()
        return RentalOrderPayload(
            customer=self.customer,
            invoice_address=self.invoice_address,
            delivery_address=self.delivery_address,
            rental_template=self.rental_template,
            expiration=self.expiration,
            rental_order_date=self.rental_order_date,
            rental_duration=self.rental_duration.describe(),
            items=[line.model_copy() for line in self._items],
            terms_conditions=self.terms_conditions,
            untaxed_total=totals.untaxed_total,
            tax=totals.tax,
            total=totals.total,
            rental_id=self.rental_id,
        )

    def submit(self, create_order: Callable[[RentalOrderPayload], T]) -> T:
        """Hand the finished order to ``create_order`` and return its result.

        Raises :class:`TermsNotAcceptedError` before touching the handler
        when the terms have not been accepted.
        """

        if not self._terms_accepted:
            raise TermsNotAcceptedError()
        payload = self.build_payload()
        logger.debug(
            "Submitting rental order for %s with %d line(s)",
            payload.customer,
            len(payload.items),
        )
        return create_order(payload)

    def snapshot(self, draft_id: Optional[str] = None) -> DraftSnapshot:
        return DraftSnapshot(
            draft_id=draft_id,
            rental_id=self.rental_id,
            customer=self.customer,
            invoice_address=self.invoice_address,
            delivery_address=self.delivery_address,
            rental_template=self.rental_template,
            expiration=self.expiration,
            rental_order_date=self.rental_order_date,
            rental_duration=self.rental_duration.model_copy(),
            items=[line.model_copy() for line in self._items],
            terms_conditions=self.terms_conditions,
            terms_accepted=self._terms_accepted,
            totals=self.compute_totals(),
        )

    def _line_at(self, index: int) -> OrderLine:
        if not 0 <= index < len(self._items):
            raise LineItemNotFoundError(index, len(self._items))
        return self._items[index]
