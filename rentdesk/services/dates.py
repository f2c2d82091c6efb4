from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import dateparser

from rentdesk.services.exceptions import ValidationFailedError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def parse_rental_date(text: str, *, tz_name: str = "Asia/Kolkata") -> datetime:
    """Parse an ISO or natural language date ("tomorrow 10am") into an aware datetime."""

    tz = ZoneInfo(tz_name)
    value = (text or "").strip()
    if not value:
        raise ValidationFailedError("Date is required")

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = dateparser.parse(
            value,
            settings={
                "TIMEZONE": tz_name,
                "TO_TIMEZONE": tz_name,
                "RETURN_AS_TIMEZONE_AWARE": True,
                "PREFER_DATES_FROM": "future",
                "RELATIVE_BASE": datetime.now(tz).replace(tzinfo=None),
                "DATE_ORDER": "DMY",
            },
            languages=["en"],
        )
        if parsed is None:
            raise ValidationFailedError(f"Unrecognised date {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed
