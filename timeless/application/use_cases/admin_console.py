from __future__ import annotations

import logging
import threading
from typing import Callable

from timeless.application.exceptions import ActionInProgressError, ConsoleError
from timeless.application.ports.reservation_api import ReservationApiPort
from timeless.application.utils.arrivals import ArrivalTracker
from timeless.application.utils.formatting import build_arrival_notice
from timeless.application.utils.reservation_filters import (
    ALL_FILTER,
    filter_reservations,
    normalize_filter,
    status_counts,
)
from timeless.domain.entities.arrival_notice import ArrivalNotice
from timeless.domain.entities.reservation import Reservation, ReservationStatus


class AdminConsole:
    """
    Staff-side view over the reservation service.

    Holds a read-through copy of the reservation list for rendering, detects new
    arrivals between refreshes and issues status changes and deletes. The cache is
    only touched after the service confirms a mutation; failures are recorded in
    ``last_error`` and leave it as it was.
    """

    def __init__(
        self,
        api: ReservationApiPort,
        on_notice: Callable[[ArrivalNotice], None] | None = None,
    ) -> None:
        self._api = api
        self._on_notice = on_notice
        self._items: list[Reservation] = []
        self._tracker = ArrivalTracker()
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()
        self._status_filter = ALL_FILTER
        self._query = ""
        self._selected_id: str | None = None
        self.last_error: str | None = None
        self.notice: ArrivalNotice | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def items(self) -> list[Reservation]:
        with self._lock:
            return list(self._items)

    @property
    def status_filter(self) -> str:
        return self._status_filter

    @property
    def query(self) -> str:
        return self._query

    def set_filter(self, status_filter: ReservationStatus | str) -> None:
        self._status_filter = normalize_filter(status_filter)

    def set_query(self, query: str) -> None:
        self._query = query

    def visible(self) -> list[Reservation]:
        return filter_reservations(self.items, self._status_filter, self._query)

    def counts(self) -> dict[str, int]:
        return status_counts(self.items)

    def get(self, reservation_id: str) -> Reservation | None:
        with self._lock:
            return next((r for r in self._items if r.id == reservation_id), None)

    @property
    def selected(self) -> Reservation | None:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def select(self, reservation_id: str) -> Reservation | None:
        """Open a reservation; viewing it acknowledges a pending NEW highlight."""
        self._selected_id = reservation_id
        with self._lock:
            self._tracker.acknowledge(reservation_id)
        return self.selected

    def clear_selection(self) -> None:
        self._selected_id = None

    def is_new_arrival(self, reservation_id: str) -> bool:
        with self._lock:
            return self._tracker.is_new_arrival(reservation_id)

    def is_busy(self, reservation_id: str) -> bool:
        with self._lock:
            return reservation_id in self._in_flight

    def dismiss_notice(self) -> None:
        self.notice = None

    def refresh(self) -> list[str]:
        """
        Fetch the full list and replace the cache.

        Returns the ids that arrived since the previous successful refresh. The first
        successful refresh only primes the seen set and never reports arrivals.
        """
        try:
            fetched = self._api.list_reservations()
        except ConsoleError as e:
            self.last_error = e.message
            self._logger.warning("Refreshing reservations failed", extra={"error": e.message})
            return []

        with self._lock:
            new_ids = self._tracker.observe([r.id for r in fetched])
            self._items = list(fetched)

        if new_ids:
            arrived = set(new_ids)
            notice = build_arrival_notice([r for r in fetched if r.id in arrived])
            self.notice = notice
            self._logger.info("New reservations arrived", extra={"count": len(new_ids)})
            if self._on_notice is not None and notice is not None:
                self._on_notice(notice)
        return new_ids

    def set_status(self, reservation_id: str, status: ReservationStatus | str) -> Reservation | None:
        """Ask the service for a status change; merge the confirmed record. Returns None on failure."""
        self._begin(reservation_id)
        self.last_error = None
        try:
            updated = self._api.update_status(reservation_id, status)
            with self._lock:
                self._items = [updated if r.id == reservation_id else r for r in self._items]
                self._tracker.acknowledge(reservation_id)
            return updated
        except ConsoleError as e:
            self.last_error = e.message
            self._logger.warning(
                "Status change failed",
                extra={"reservation_id": reservation_id, "error": e.message},
            )
            return None
        finally:
            self._end(reservation_id)

    def delete(self, reservation_id: str) -> bool:
        """Ask the service to delete a reservation; drop it from the cache once confirmed."""
        self._begin(reservation_id)
        self.last_error = None
        try:
            self._api.delete_reservation(reservation_id)
            with self._lock:
                self._items = [r for r in self._items if r.id != reservation_id]
                self._tracker.acknowledge(reservation_id)
            if self._selected_id == reservation_id:
                self._selected_id = None
            return True
        except ConsoleError as e:
            self.last_error = e.message
            self._logger.warning(
                "Delete failed",
                extra={"reservation_id": reservation_id, "error": e.message},
            )
            return False
        finally:
            self._end(reservation_id)

    def _begin(self, reservation_id: str) -> None:
        with self._lock:
            if reservation_id in self._in_flight:
                raise ActionInProgressError(reservation_id)
            self._in_flight.add(reservation_id)

    def _end(self, reservation_id: str) -> None:
        with self._lock:
            self._in_flight.discard(reservation_id)
