from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Iterable

ID_PREFIX = "R-"
FIRST_SEQUENCE = 100

_ID_PATTERN = re.compile(r"^R-(\d+)$")


class ReservationStatus(str, Enum):
    new = "new"
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


@dataclass(frozen=True)
class ReservationDraft:
    """Validated guest input, before the store assigns identity."""

    full_name: str
    email: str
    check_in: date
    check_out: date
    guests: int
    phone: str | None = None
    room_preference: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class Reservation:
    id: str
    full_name: str
    email: str
    check_in: date
    check_out: date
    guests: int
    status: ReservationStatus
    created_at: datetime
    phone: str | None = None
    room_preference: str | None = None
    message: str | None = None

    @classmethod
    def from_draft(cls, draft: ReservationDraft, reservation_id: str, created_at: datetime) -> Reservation:
        return cls(
            id=reservation_id,
            full_name=draft.full_name,
            email=draft.email,
            check_in=draft.check_in,
            check_out=draft.check_out,
            guests=draft.guests,
            status=ReservationStatus.new,
            created_at=created_at,
            phone=draft.phone,
            room_preference=draft.room_preference,
            message=draft.message,
        )

    def with_status(self, status: ReservationStatus) -> Reservation:
        return replace(self, status=status)


def format_reservation_id(sequence: int) -> str:
    return f"{ID_PREFIX}{sequence}"


def parse_reservation_number(reservation_id: str) -> int | None:
    """Numeric part of an ``R-<n>`` id, or None for ids in any other shape."""
    match = _ID_PATTERN.match(reservation_id.strip())
    if not match:
        return None
    return int(match.group(1))


def last_used_sequence(reservation_ids: Iterable[str], stored: int | None = None) -> int:
    """
    Highest sequence number already consumed.

    Floored at FIRST_SEQUENCE - 1 so that an empty history hands out R-100 next.
    """
    highest = FIRST_SEQUENCE - 1
    if stored is not None:
        highest = max(highest, stored)
    for reservation_id in reservation_ids:
        number = parse_reservation_number(reservation_id)
        if number is not None and number > highest:
            highest = number
    return highest


def utc_now() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def format_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing ``Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
