from timeless.application.ports.reservation_store import ReservationStorePort
from timeless.domain.entities.reservation import Reservation


class ListReservationsUseCase:
    def __init__(self, store: ReservationStorePort) -> None:
        self._store = store

    def execute(self) -> list[Reservation]:
        # No pagination: the desk works off the full snapshot.
        return self._store.list_all()
