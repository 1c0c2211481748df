"""
Tests for the admin console controller: refresh, arrival detection, filters and guarded mutations.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Mapping

import pytest

from timeless.application.exceptions import ActionInProgressError, ApiRequestError, TransportError
from timeless.application.ports.reservation_api import ReservationApiPort
from timeless.application.use_cases.admin_console import AdminConsole
from timeless.domain.entities.reservation import Reservation, ReservationStatus

BASE = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _reservation(number: int, name: str = "Guest", status: ReservationStatus = ReservationStatus.new, **extra) -> Reservation:
    return Reservation(
        id=f"R-{number}",
        full_name=name,
        email=f"{name.lower().replace(' ', '.')}@example.com",
        check_in=date(2026, 3, 2),
        check_out=date(2026, 3, 4),
        guests=2,
        status=status,
        created_at=BASE + timedelta(minutes=number),
        **extra,
    )


class FakeApi(ReservationApiPort):
    def __init__(self, records: list[Reservation] | None = None) -> None:
        self.records = list(records or [])
        self.fail_with: Exception | None = None
        self.during_call = None
        self.calls: list[tuple[str, Any]] = []

    def _maybe_fail(self) -> None:
        if self.during_call is not None:
            self.during_call()
        if self.fail_with is not None:
            raise self.fail_with

    def list_reservations(self) -> list[Reservation]:
        self.calls.append(("list", None))
        self._maybe_fail()
        return sorted(self.records, key=lambda r: r.created_at, reverse=True)

    def create_reservation(self, payload: Mapping[str, Any]) -> Reservation:
        raise NotImplementedError

    def update_status(self, reservation_id: str, status: ReservationStatus | str) -> Reservation:
        self.calls.append(("status", reservation_id))
        self._maybe_fail()
        for index, record in enumerate(self.records):
            if record.id == reservation_id:
                self.records[index] = record.with_status(ReservationStatus(status))
                return self.records[index]
        raise ApiRequestError("Not found.", 404)

    def delete_reservation(self, reservation_id: str) -> None:
        self.calls.append(("delete", reservation_id))
        self._maybe_fail()
        before = len(self.records)
        self.records = [r for r in self.records if r.id != reservation_id]
        if len(self.records) == before:
            raise ApiRequestError("Not found.", 404)


def test_first_refresh_never_reports_arrivals():
    api = FakeApi([_reservation(100), _reservation(101)])
    notices = []
    console = AdminConsole(api, on_notice=notices.append)

    assert console.refresh() == []
    assert [r.id for r in console.items] == ["R-101", "R-100"]
    assert console.notice is None
    assert notices == []


def test_single_arrival_notice_names_guest():
    api = FakeApi([_reservation(100)])
    notices = []
    console = AdminConsole(api, on_notice=notices.append)
    console.refresh()

    api.records.append(_reservation(101, "Grace Hopper"))
    new_ids = console.refresh()

    assert new_ids == ["R-101"]
    assert console.is_new_arrival("R-101")
    assert not console.is_new_arrival("R-100")
    assert console.notice.title == "New reservation received"
    assert console.notice.message == "Grace Hopper · 2026-03-02 – 2026-03-04"
    assert notices == [console.notice]


def test_multiple_arrivals_notice_counts():
    api = FakeApi([])
    console = AdminConsole(api)
    console.refresh()

    api.records.extend([_reservation(100), _reservation(101), _reservation(102)])
    new_ids = console.refresh()

    assert new_ids == ["R-102", "R-101", "R-100"]
    assert console.notice.message == "3 new reservations received"
    assert console.notice.reservation_ids == ("R-102", "R-101", "R-100")


def test_arrival_reported_once():
    api = FakeApi([])
    console = AdminConsole(api)
    console.refresh()
    api.records.append(_reservation(100))

    assert console.refresh() == ["R-100"]
    assert console.refresh() == []
    assert console.is_new_arrival("R-100")


def test_viewing_acknowledges_arrival():
    api = FakeApi([])
    console = AdminConsole(api)
    console.refresh()
    api.records.append(_reservation(100))
    console.refresh()

    selected = console.select("R-100")

    assert selected.id == "R-100"
    assert not console.is_new_arrival("R-100")


def test_failed_refresh_keeps_cache_and_reports_error():
    api = FakeApi([_reservation(100)])
    console = AdminConsole(api)
    console.refresh()

    api.fail_with = TransportError()
    api.records.append(_reservation(101))
    assert console.refresh() == []

    assert [r.id for r in console.items] == ["R-100"]
    assert console.last_error == "Could not reach the reservation service. Please retry."

    api.fail_with = None
    assert console.refresh() == ["R-101"]


def test_failed_first_refresh_does_not_prime():
    api = FakeApi([_reservation(100)])
    api.fail_with = ApiRequestError("Request failed (500)", 500)
    console = AdminConsole(api)

    console.refresh()
    api.fail_with = None
    api.records.append(_reservation(101))

    assert console.refresh() == []
    assert len(console.items) == 2


def test_set_status_merges_confirmed_record_and_acknowledges():
    api = FakeApi([])
    console = AdminConsole(api)
    console.refresh()
    api.records.append(_reservation(100))
    console.refresh()

    updated = console.set_status("R-100", "confirmed")

    assert updated.status is ReservationStatus.confirmed
    assert console.get("R-100").status is ReservationStatus.confirmed
    assert not console.is_new_arrival("R-100")
    assert console.last_error is None
    assert not console.is_busy("R-100")


def test_failed_status_change_leaves_cache_untouched():
    api = FakeApi([_reservation(100)])
    console = AdminConsole(api)
    console.refresh()
    api.fail_with = ApiRequestError("Invalid status.", 400)

    assert console.set_status("R-100", "confirmed") is None
    assert console.get("R-100").status is ReservationStatus.new
    assert console.last_error == "Invalid status."
    assert not console.is_busy("R-100")


def test_delete_removes_after_confirmation():
    api = FakeApi([_reservation(100), _reservation(101)])
    console = AdminConsole(api)
    console.refresh()
    console.select("R-100")

    assert console.delete("R-100") is True
    assert [r.id for r in console.items] == ["R-101"]
    assert console.selected is None


def test_failed_delete_keeps_record():
    api = FakeApi([_reservation(100)])
    console = AdminConsole(api)
    console.refresh()
    api.records = []

    assert console.delete("R-100") is False
    assert console.last_error == "Not found."
    assert [r.id for r in console.items] == ["R-100"]


def test_second_action_for_same_id_is_refused_while_in_flight():
    api = FakeApi([_reservation(100), _reservation(101)])
    console = AdminConsole(api)
    console.refresh()
    seen = {}

    def reenter() -> None:
        api.during_call = None
        seen["busy"] = console.is_busy("R-100")
        with pytest.raises(ActionInProgressError):
            console.delete("R-100")
        seen["other"] = console.set_status("R-101", "pending")

    api.during_call = reenter
    console.set_status("R-100", "pending")

    assert seen["busy"] is True
    assert seen["other"].status is ReservationStatus.pending
    assert [c for c in api.calls if c[0] == "delete"] == []
    assert not console.is_busy("R-100")


def test_filters_search_and_counts():
    api = FakeApi(
        [
            _reservation(100, "Ada Lovelace", ReservationStatus.confirmed, room_preference="Garden Suite"),
            _reservation(101, "Grace Hopper", ReservationStatus.pending, phone="+1 555 123 4567"),
            _reservation(102, "Alan Turing", ReservationStatus.confirmed, message="Needs a quiet room"),
        ]
    )
    console = AdminConsole(api)
    console.refresh()

    assert console.counts() == {"all": 3, "new": 0, "pending": 1, "confirmed": 2, "cancelled": 0}

    console.set_filter("confirmed")
    assert [r.id for r in console.visible()] == ["R-102", "R-100"]

    console.set_query("GARDEN")
    assert [r.id for r in console.visible()] == ["R-100"]

    console.set_filter("all")
    console.set_query("555 123")
    assert [r.id for r in console.visible()] == ["R-101"]

    with pytest.raises(ValueError):
        console.set_filter("archived")
