from __future__ import annotations

from typing import Sequence

from timeless.domain.entities.arrival_notice import ArrivalNotice
from timeless.domain.entities.reservation import Reservation

ARRIVAL_TITLE = "New reservation received"
PLACEHOLDER = "—"


def format_stay(reservation: Reservation) -> str:
    return f"{reservation.check_in.isoformat()} – {reservation.check_out.isoformat()}"


def build_arrival_notice(arrivals: Sequence[Reservation]) -> ArrivalNotice | None:
    """Toast content for freshly arrived reservations; None when there is nothing to announce."""
    if not arrivals:
        return None
    if len(arrivals) == 1:
        first = arrivals[0]
        message = f"{first.full_name} · {format_stay(first)}"
    else:
        message = f"{len(arrivals)} new reservations received"
    return ArrivalNotice(
        title=ARRIVAL_TITLE,
        message=message,
        reservation_ids=tuple(r.id for r in arrivals),
    )


def format_reservation_summary(reservation: Reservation) -> str:
    lines = [
        f"Reservation ID: {reservation.id}",
        f"Guest: {reservation.full_name}",
        f"Email: {reservation.email}",
        f"Phone: {reservation.phone or PLACEHOLDER}",
        f"Check-in: {reservation.check_in.isoformat()}",
        f"Check-out: {reservation.check_out.isoformat()}",
        f"Guests: {reservation.guests}",
        f"Room: {reservation.room_preference or PLACEHOLDER}",
        f"Status: {reservation.status.value}",
        f"Message: {reservation.message or PLACEHOLDER}",
    ]
    return "\n".join(lines)
