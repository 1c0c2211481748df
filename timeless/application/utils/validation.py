from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Mapping

from timeless.application.exceptions import ReservationValidationError
from timeless.domain.entities.reservation import ReservationDraft, ReservationStatus

REQUIRED_FIELDS = ("fullName", "email", "checkIn", "checkOut", "guests")

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_NON_DIGITS = re.compile(r"\D", re.ASCII)
# Plain decimal notation only; float() would also take "1_0" and non-ASCII digits.
_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)

MISSING_FIELDS_MESSAGE = "Missing required fields."
INVALID_EMAIL_MESSAGE = "Invalid email address."
INVALID_GUESTS_MESSAGE = "Guests must be at least 1."
INVALID_DATES_MESSAGE = "Invalid check-in/check-out date."
DATE_ORDER_MESSAGE = "Check-out must be after check-in."
INVALID_PHONE_MESSAGE = "Invalid phone number."
INVALID_STATUS_MESSAGE = "Invalid status."


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_PATTERN.match(email))


def is_valid_phone(phone: str) -> bool:
    digits = _NON_DIGITS.sub("", phone)
    return PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS


def parse_iso_date(value: str) -> date | None:
    """Parse a YYYY-MM-DD calendar date; None when the text is not a real date."""
    if not _ISO_DATE_PATTERN.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> str | None:
    text = _text(value)
    return text or None


def _number(value: Any) -> float | None:
    # Booleans are ints in Python but never a guest count.
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw = value
    elif isinstance(value, str):
        raw = value.strip()
        if not _DECIMAL_PATTERN.match(raw):
            return None
    else:
        return None
    try:
        number = float(raw)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_reservation_payload(payload: Mapping[str, Any]) -> ReservationDraft:
    """
    Validate a booking request body and build a draft for the store.

    Checks run in a fixed order (required fields, email, guests, dates, date order, phone)
    and the first failing check decides the error message.
    """
    full_name = _text(payload.get("fullName"))
    email = _text(payload.get("email"))
    phone = _text(payload.get("phone"))
    check_in_text = _text(payload.get("checkIn"))
    check_out_text = _text(payload.get("checkOut"))
    guests = _number(payload.get("guests"))

    present = {
        "fullName": bool(full_name),
        "email": bool(email),
        "checkIn": bool(check_in_text),
        "checkOut": bool(check_out_text),
        "guests": guests is not None,
    }
    missing = [field for field in REQUIRED_FIELDS if not present[field]]
    if missing:
        raise ReservationValidationError(MISSING_FIELDS_MESSAGE, fields=missing)

    if not is_valid_email(email):
        raise ReservationValidationError(INVALID_EMAIL_MESSAGE, fields=["email"])

    if not guests.is_integer() or guests < 1:
        raise ReservationValidationError(INVALID_GUESTS_MESSAGE, fields=["guests"])

    check_in = parse_iso_date(check_in_text)
    check_out = parse_iso_date(check_out_text)
    if check_in is None or check_out is None:
        invalid = [
            name
            for name, parsed in (("checkIn", check_in), ("checkOut", check_out))
            if parsed is None
        ]
        raise ReservationValidationError(INVALID_DATES_MESSAGE, fields=invalid)
    if check_out <= check_in:
        raise ReservationValidationError(DATE_ORDER_MESSAGE, fields=["checkOut"])

    if phone and not is_valid_phone(phone):
        raise ReservationValidationError(INVALID_PHONE_MESSAGE, fields=["phone"])

    return ReservationDraft(
        full_name=full_name,
        email=email,
        check_in=check_in,
        check_out=check_out,
        guests=int(guests),
        phone=phone or None,
        room_preference=_optional_text(payload.get("roomPreference")),
        message=_optional_text(payload.get("message")),
    )


def validate_status(value: Any) -> ReservationStatus:
    try:
        return ReservationStatus(_text(value))
    except ValueError:
        raise ReservationValidationError(INVALID_STATUS_MESSAGE, fields=["status"]) from None
