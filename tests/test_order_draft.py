import os
import sys
from datetime import date

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from rentdesk.schemas.order import DraftField, DurationPart, ItemField
from rentdesk.schemas.user import UserSummary
from rentdesk.services.exceptions import (
    LineItemNotFoundError,
    TermsNotAcceptedError,
    ValidationFailedError,
)
from rentdesk.services.order_draft import RentalOrderDraft, compute_totals


TODAY = date(2025, 9, 6)


@pytest.fixture
def draft() -> RentalOrderDraft:
    return RentalOrderDraft("Jamie", today=TODAY)


def test_new_draft_is_seeded_with_defaults(draft: RentalOrderDraft) -> None:
    assert draft.customer == "Jamie"
    assert draft.rental_template == "Standard Rental"
    assert draft.rental_order_date == "2025-09-06"
    assert draft.expiration == "2025-10-06"
    assert draft.invoice_address == "123 Main St, City, State 12345"
    assert draft.delivery_address == "456 Oak Ave, City, State 12345"
    assert draft.terms_accepted is False
    assert draft.rental_duration.describe() == "0 months, 0 days, 0 hours"

    (line,) = draft.items
    assert line.product == "Product 1"
    assert line.quantity == 5
    assert line.sub_total == pytest.approx(1000.0)
    assert line.tax == pytest.approx(180.0)


def test_for_user_uses_user_name_as_customer() -> None:
    user = UserSummary(id="u-1", name="Morgan", email="morgan@example.com")
    assert RentalOrderDraft.for_user(user, today=TODAY).customer == "Morgan"
    assert RentalOrderDraft.for_user(None, today=TODAY).customer == ""


def test_quantity_edit_recomputes_line_and_totals(draft: RentalOrderDraft) -> None:
    totals = draft.compute_totals()
    assert (totals.untaxed_total, totals.tax, totals.total) == pytest.approx((1000.0, 180.0, 1180.0))

    draft.set_item_field(0, ItemField.QUANTITY, "2")

    line = draft.items[0]
    assert line.sub_total == pytest.approx(400.0)
    assert line.tax == pytest.approx(72.0)
    totals = draft.compute_totals()
    assert (totals.untaxed_total, totals.tax, totals.total) == pytest.approx((400.0, 72.0, 472.0))


def test_editing_one_line_leaves_others_untouched(draft: RentalOrderDraft) -> None:
    draft.add_item()
    draft.set_item_field(1, "unit_price", 250)

    first, second = draft.items
    assert (first.quantity, first.unit_price, first.sub_total) == (5, 200.0, 1000.0)
    assert second.sub_total == pytest.approx(250.0)
    assert second.tax == pytest.approx(45.0)


def test_add_item_twice_appends_defaults_in_order(draft: RentalOrderDraft) -> None:
    draft.add_item()
    draft.add_item()

    assert [line.product for line in draft.items] == ["Product 1", "Product 2", "Product 3"]
    for line in draft.items[1:]:
        assert line.quantity == 1
        assert line.unit_price == 100.0
        assert line.sub_total == pytest.approx(100.0)
        assert line.tax == pytest.approx(18.0)


def test_remove_item_keeps_last_line(draft: RentalOrderDraft) -> None:
    assert draft.remove_item(0) is False
    assert len(draft.items) == 1

    draft.add_item()
    assert draft.remove_item(0) is True
    assert [line.product for line in draft.items] == ["Product 2"]


def test_out_of_range_index_fails_fast(draft: RentalOrderDraft) -> None:
    with pytest.raises(LineItemNotFoundError):
        draft.set_item_field(3, ItemField.QUANTITY, 1)
    with pytest.raises(IndexError):
        draft.set_item_field(-1, ItemField.PRODUCT, "Tent")
    with pytest.raises(LineItemNotFoundError):
        draft.remove_item(1)


@pytest.mark.parametrize(
    "raw, expected",
    [("", 0), ("abc", 0), (None, 0), ("3.9", 3), (-4, 0), (7, 7)],
)
def test_quantity_coercion_never_raises(draft: RentalOrderDraft, raw, expected) -> None:
    line = draft.set_item_field(0, ItemField.QUANTITY, raw)
    assert line.quantity == expected
    assert line.sub_total == pytest.approx(expected * 200.0)


def test_unit_price_coercion_clamps_negative_and_bad_input(draft: RentalOrderDraft) -> None:
    assert draft.set_item_field(0, ItemField.UNIT_PRICE, "12.5").unit_price == 12.5
    assert draft.set_item_field(0, ItemField.UNIT_PRICE, "-3").unit_price == 0.0
    assert draft.set_item_field(0, ItemField.UNIT_PRICE, "nan").unit_price == 0.0


def test_product_name_edit_does_not_touch_amounts(draft: RentalOrderDraft) -> None:
    line = draft.set_item_field(0, ItemField.PRODUCT, "Canon EOS R5")
    assert line.product == "Canon EOS R5"
    assert line.sub_total == pytest.approx(1000.0)


def test_set_field_accepts_any_string(draft: RentalOrderDraft) -> None:
    draft.set_field(DraftField.DELIVERY_ADDRESS, "Warehouse 9")
    draft.set_field("rental_template", "Weekend Special")
    draft.set_field(DraftField.EXPIRATION, "not a date")

    assert draft.delivery_address == "Warehouse 9"
    assert draft.rental_template == "Weekend Special"
    assert draft.expiration == "not a date"

    with pytest.raises(ValidationFailedError):
        draft.set_field("items", "nope")


def test_duration_parts_are_independent(draft: RentalOrderDraft) -> None:
    draft.set_duration(DurationPart.MONTHS, "1")
    draft.set_duration("days", 2)
    draft.set_duration(DurationPart.HOURS, "-5")

    assert draft.rental_duration.describe() == "1 months, 2 days, 0 hours"


def test_submit_without_terms_never_calls_handler(draft: RentalOrderDraft) -> None:
    calls = []

    with pytest.raises(TermsNotAcceptedError, match="accept the terms"):
        draft.submit(calls.append)

    assert calls == []
    assert draft.terms_accepted is False


def test_submit_hands_full_payload_to_handler(draft: RentalOrderDraft) -> None:
    draft.add_item()
    draft.set_duration(DurationPart.DAYS, 3)
    draft.accept_terms()

    payloads = []
    result = draft.submit(lambda payload: payloads.append(payload) or "created")

    assert result == "created"
    (payload,) = payloads
    assert payload.customer == "Jamie"
    assert payload.rental_duration == "0 months, 3 days, 0 hours"
    assert len(payload.items) == 2
    assert payload.untaxed_total == pytest.approx(1100.0)
    assert payload.tax == pytest.approx(198.0)
    assert payload.total == pytest.approx(1298.0)
    assert payload.model_dump()["items"][1]["tax"] == pytest.approx(18.0)


def test_totals_are_rederived_from_current_lines(draft: RentalOrderDraft) -> None:
    draft.add_item()
    draft.items[1].quantity = 4  # edited outside the draft setters

    totals = draft.compute_totals()
    assert totals.untaxed_total == pytest.approx(sum(line.sub_total for line in draft.items))
    assert totals.tax == pytest.approx(sum(line.sub_total * 0.18 for line in draft.items))
    assert totals.total == pytest.approx(totals.untaxed_total + totals.tax)
    assert totals.untaxed_total == pytest.approx(1400.0)


def test_compute_totals_of_empty_collection_is_zero() -> None:
    totals = compute_totals([])
    assert (totals.untaxed_total, totals.tax, totals.total) == (0.0, 0.0, 0.0)


def test_snapshot_is_detached_from_draft(draft: RentalOrderDraft) -> None:
    snapshot = draft.snapshot("DRF-00001")
    draft.set_item_field(0, ItemField.QUANTITY, 1)

    assert snapshot.draft_id == "DRF-00001"
    assert snapshot.items[0].quantity == 5
    assert snapshot.totals.total == pytest.approx(1180.0)
