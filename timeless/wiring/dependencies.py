from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends

from timeless.application.ports.reservation_store import ReservationStorePort
from timeless.application.use_cases.admin_console import AdminConsole
from timeless.application.use_cases.create_reservation import CreateReservationUseCase
from timeless.application.use_cases.delete_reservation import DeleteReservationUseCase
from timeless.application.use_cases.list_reservations import ListReservationsUseCase
from timeless.application.use_cases.update_reservation_status import UpdateReservationStatusUseCase
from timeless.core.config import settings
from timeless.domain.entities.arrival_notice import ArrivalNotice
from timeless.infrastructure.api_client.reservation_client import ReservationApiClient
from timeless.infrastructure.polling.interval_poller import IntervalPoller
from timeless.infrastructure.store.json_store import JsonReservationStore
from timeless.infrastructure.store.memory_store import MemoryReservationStore

STORE_PROVIDERS = {"memory", "json"}

_reservation_store: ReservationStorePort | None = None


def build_reservation_store(provider: str, path: str) -> ReservationStorePort:
    provider = provider.strip().lower()
    if provider not in STORE_PROVIDERS:
        raise ValueError(f"Unknown STORE_PROVIDER {provider!r}; expected one of {sorted(STORE_PROVIDERS)}")
    if provider == "json":
        return JsonReservationStore(path=path)
    return MemoryReservationStore()


def get_reservation_store() -> ReservationStorePort:
    global _reservation_store
    if _reservation_store is None:
        _reservation_store = build_reservation_store(settings.STORE_PROVIDER, settings.STORE_PATH)
        logging.getLogger(__name__).info(
            "Using %s reservation store", type(_reservation_store).__name__
        )
    return _reservation_store


def get_create_reservation_use_case(
    store: ReservationStorePort = Depends(get_reservation_store),
) -> CreateReservationUseCase:
    return CreateReservationUseCase(store=store)


def get_list_reservations_use_case(
    store: ReservationStorePort = Depends(get_reservation_store),
) -> ListReservationsUseCase:
    return ListReservationsUseCase(store=store)


def get_update_reservation_status_use_case(
    store: ReservationStorePort = Depends(get_reservation_store),
) -> UpdateReservationStatusUseCase:
    return UpdateReservationStatusUseCase(store=store)


def get_delete_reservation_use_case(
    store: ReservationStorePort = Depends(get_reservation_store),
) -> DeleteReservationUseCase:
    return DeleteReservationUseCase(store=store)


def get_admin_console(
    base_url: str | None = None,
    on_notice: Callable[[ArrivalNotice], None] | None = None,
) -> AdminConsole:
    client = ReservationApiClient(base_url=base_url or settings.API_BASE_URL)
    return AdminConsole(api=client, on_notice=on_notice)


def start_console_polling(console: AdminConsole, interval_seconds: float | None = None) -> IntervalPoller:
    poller = IntervalPoller(
        console.refresh,
        interval_seconds or settings.CONSOLE_POLL_INTERVAL_SECONDS,
    )
    poller.start()
    return poller
