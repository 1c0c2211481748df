from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

from timeless.application.exceptions import ReservationNotFoundError
from timeless.application.ports.reservation_store import ReservationStorePort
from timeless.domain.entities.reservation import (
    FIRST_SEQUENCE,
    Reservation,
    ReservationDraft,
    ReservationStatus,
    format_reservation_id,
    utc_now,
)


class MemoryReservationStore(ReservationStorePort):
    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        # Head of the list is the most recently inserted record.
        self._records: list[Reservation] = []
        self._last_sequence = FIRST_SEQUENCE - 1
        self._last_created_at: datetime | None = None
        self._clock = clock or utc_now
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def create(self, draft: ReservationDraft) -> Reservation:
        with self._lock:
            sequence = self._last_sequence + 1
            created_at = self._clock()
            # createdAt never moves backwards, even if the wall clock does.
            if self._last_created_at is not None and created_at < self._last_created_at:
                created_at = self._last_created_at

            reservation = Reservation.from_draft(
                draft,
                reservation_id=format_reservation_id(sequence),
                created_at=created_at,
            )
            self._commit([reservation, *self._records], sequence)
            self._last_created_at = created_at

        self._logger.info("Reservation created", extra={"reservation_id": reservation.id})
        return reservation

    def list_all(self) -> list[Reservation]:
        with self._lock:
            snapshot = list(self._records)
        # Stable sort: equal timestamps keep head-first (newest insert) order.
        return sorted(snapshot, key=lambda r: r.created_at, reverse=True)

    def update_status(self, reservation_id: str, status: ReservationStatus) -> Reservation:
        with self._lock:
            index = self._index_of(reservation_id)
            updated = self._records[index].with_status(status)
            records = list(self._records)
            records[index] = updated
            self._commit(records, self._last_sequence)

        self._logger.info(
            "Reservation status updated",
            extra={"reservation_id": reservation_id, "status": status.value},
        )
        return updated

    def delete(self, reservation_id: str) -> None:
        with self._lock:
            index = self._index_of(reservation_id)
            records = self._records[:index] + self._records[index + 1 :]
            self._commit(records, self._last_sequence)

        self._logger.info("Reservation deleted", extra={"reservation_id": reservation_id})

    def _index_of(self, reservation_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == reservation_id:
                return index
        self._logger.info("Reservation not found", extra={"reservation_id": reservation_id})
        raise ReservationNotFoundError(reservation_id)

    def _commit(self, records: list[Reservation], sequence: int) -> None:
        self._persist(records, sequence)
        self._records = records
        self._last_sequence = sequence

    def _persist(self, records: list[Reservation], sequence: int) -> None:
        """Hook for durable subclasses. Runs under the lock before the new state is published."""
