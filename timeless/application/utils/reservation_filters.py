from __future__ import annotations

from typing import Iterable

from timeless.domain.entities.reservation import Reservation, ReservationStatus

ALL_FILTER = "all"
FILTER_KEYS = (ALL_FILTER,) + tuple(status.value for status in ReservationStatus)


def normalize_filter(status_filter: ReservationStatus | str) -> str:
    key = status_filter.value if isinstance(status_filter, ReservationStatus) else str(status_filter).strip().lower()
    if key not in FILTER_KEYS:
        raise ValueError(f"Unknown status filter: {status_filter!r}")
    return key


def search_text(reservation: Reservation) -> str:
    parts = [
        reservation.id,
        reservation.full_name,
        reservation.email,
        reservation.phone or "",
        reservation.room_preference or "",
        reservation.message or "",
        reservation.check_in.isoformat(),
        reservation.check_out.isoformat(),
    ]
    return " ".join(parts).lower()


def matches_query(reservation: Reservation, query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    return needle in search_text(reservation)


def filter_reservations(
    reservations: Iterable[Reservation],
    status_filter: ReservationStatus | str = ALL_FILTER,
    query: str = "",
) -> list[Reservation]:
    key = normalize_filter(status_filter)
    return [
        reservation
        for reservation in reservations
        if (key == ALL_FILTER or reservation.status.value == key) and matches_query(reservation, query)
    ]


def status_counts(reservations: Iterable[Reservation]) -> dict[str, int]:
    counts = {key: 0 for key in FILTER_KEYS}
    for reservation in reservations:
        counts[ALL_FILTER] += 1
        counts[reservation.status.value] += 1
    return counts
