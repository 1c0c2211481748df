from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from timeless.domain.entities.reservation import Reservation, ReservationStatus


class ReservationApiPort(ABC):
    """Client-side view of the reservation service, as used by the admin console and the booking form."""

    @abstractmethod
    def list_reservations(self) -> list[Reservation]:
        raise NotImplementedError

    @abstractmethod
    def create_reservation(self, payload: Mapping[str, Any]) -> Reservation:
        raise NotImplementedError

    @abstractmethod
    def update_status(self, reservation_id: str, status: ReservationStatus | str) -> Reservation:
        raise NotImplementedError

    @abstractmethod
    def delete_reservation(self, reservation_id: str) -> None:
        raise NotImplementedError
