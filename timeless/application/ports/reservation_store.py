from __future__ import annotations

from abc import ABC, abstractmethod

from timeless.domain.entities.reservation import Reservation, ReservationDraft, ReservationStatus


class ReservationStorePort(ABC):
    @abstractmethod
    def create(self, draft: ReservationDraft) -> Reservation:
        """
        Persist a new reservation.
        Assigns the next R-<n> id, forces status to new and stamps createdAt.
        """
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Reservation]:
        """
        Snapshot of every reservation, newest createdAt first.
        Ties keep the most recently inserted record first.
        """
        raise NotImplementedError

    @abstractmethod
    def update_status(self, reservation_id: str, status: ReservationStatus) -> Reservation:
        """Replace only the status field. Raises ReservationNotFoundError for unknown ids."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, reservation_id: str) -> None:
        """Hard delete. Raises ReservationNotFoundError for unknown ids."""
        raise NotImplementedError
