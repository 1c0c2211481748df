"""
Tests for console text helpers.
"""

from datetime import date, datetime, timezone

from timeless.application.utils.formatting import build_arrival_notice, format_reservation_summary
from timeless.application.utils.reservation_filters import filter_reservations, matches_query, status_counts
from timeless.domain.entities.reservation import Reservation, ReservationStatus


def _reservation(**overrides) -> Reservation:
    fields = dict(
        id="R-100",
        full_name="Ada Lovelace",
        email="ada@example.com",
        check_in=date(2026, 3, 2),
        check_out=date(2026, 3, 4),
        guests=2,
        status=ReservationStatus.new,
        created_at=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Reservation(**fields)


def test_no_notice_without_arrivals():
    assert build_arrival_notice([]) is None


def test_summary_uses_placeholders():
    summary = format_reservation_summary(_reservation())

    assert summary.splitlines() == [
        "Reservation ID: R-100",
        "Guest: Ada Lovelace",
        "Email: ada@example.com",
        "Phone: —",
        "Check-in: 2026-03-02",
        "Check-out: 2026-03-04",
        "Guests: 2",
        "Room: —",
        "Status: new",
        "Message: —",
    ]


def test_search_covers_dates_and_is_case_insensitive():
    reservation = _reservation(message="Late ARRIVAL")

    assert matches_query(reservation, "2026-03-04")
    assert matches_query(reservation, "late arrival")
    assert matches_query(reservation, "r-100")
    assert matches_query(reservation, "   ")
    assert not matches_query(reservation, "suite")


def test_filter_by_status_enum_and_counts():
    items = [
        _reservation(id="R-100", status=ReservationStatus.cancelled),
        _reservation(id="R-101"),
    ]

    assert [r.id for r in filter_reservations(items, ReservationStatus.cancelled)] == ["R-100"]
    assert status_counts(items)["cancelled"] == 1
    assert status_counts([]) == {"all": 0, "new": 0, "pending": 0, "confirmed": 0, "cancelled": 0}
