from __future__ import annotations

import logging
from typing import Any, Mapping

from timeless.application.exceptions import ReservationValidationError
from timeless.application.ports.reservation_store import ReservationStorePort
from timeless.application.utils.validation import validate_reservation_payload
from timeless.domain.entities.reservation import Reservation


class CreateReservationUseCase:
    def __init__(self, store: ReservationStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def execute(self, payload: Mapping[str, Any]) -> Reservation:
        """Validate a guest booking request and persist it. Raises ReservationValidationError."""
        try:
            draft = validate_reservation_payload(payload)
        except ReservationValidationError as e:
            self._logger.info(
                "Reservation request rejected",
                extra={"reason": e.message},
            )
            raise
        return self._store.create(draft)
