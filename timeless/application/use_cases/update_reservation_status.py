from __future__ import annotations

from typing import Any

from timeless.application.ports.reservation_store import ReservationStorePort
from timeless.application.utils.validation import validate_status
from timeless.domain.entities.reservation import Reservation


class UpdateReservationStatusUseCase:
    def __init__(self, store: ReservationStorePort) -> None:
        self._store = store

    def execute(self, reservation_id: str, status: Any) -> Reservation:
        """
        Move a reservation to any of the four statuses.

        There are no transition rules: every status is reachable from every other one,
        and setting the current status again returns the record unchanged.
        The status is checked before the id, so a bad status on an unknown id is a validation error.
        """
        new_status = validate_status(status)
        return self._store.update_status(reservation_id, new_status)
