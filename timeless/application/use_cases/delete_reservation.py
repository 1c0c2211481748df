from timeless.application.ports.reservation_store import ReservationStorePort


class DeleteReservationUseCase:
    def __init__(self, store: ReservationStorePort) -> None:
        self._store = store

    def execute(self, reservation_id: str) -> None:
        self._store.delete(reservation_id)
