from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from timeless.application.dto.reservation_dto import ReservationDTO
from timeless.domain.entities.reservation import Reservation, last_used_sequence
from timeless.infrastructure.store.memory_store import MemoryReservationStore

FORMAT_VERSION = 1


class JsonReservationStore(MemoryReservationStore):
    """
    Reservation store backed by a single JSON document.

    The whole record set and the last used id sequence are rewritten atomically
    (temp file + rename) on every mutation, so ids are never handed out twice,
    even after a delete followed by a restart.
    """

    def __init__(self, path: str = "./data/reservations.json", clock: Callable[[], datetime] | None = None) -> None:
        super().__init__(clock=clock)
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        data = self._read_document()
        records: list[Reservation] = []
        for item in data.get("reservations", []):
            try:
                records.append(ReservationDTO.model_validate(item).to_entity())
            except (ValidationError, ValueError) as e:
                self._logger.warning(
                    "Skipping unreadable reservation record",
                    extra={"path": str(self._path), "error": str(e)},
                )

        stored_sequence = data.get("seq")
        if not isinstance(stored_sequence, int) or isinstance(stored_sequence, bool):
            stored_sequence = None

        self._records = records
        self._last_sequence = last_used_sequence((r.id for r in records), stored=stored_sequence)
        self._last_created_at = max((r.created_at for r in records), default=None)
        self._logger.info(
            "Reservation store loaded",
            extra={"path": str(self._path), "count": len(records)},
        )

    def _read_document(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self._logger.error(
                "Reservation store file is unreadable; starting empty",
                extra={"path": str(self._path), "error": str(e)},
            )
            return {}
        if not isinstance(data, dict):
            self._logger.error("Reservation store file has an unexpected shape", extra={"path": str(self._path)})
            return {}
        return data

    def _persist(self, records: list[Reservation], sequence: int) -> None:
        document = {
            "version": FORMAT_VERSION,
            "seq": sequence,
            "reservations": [ReservationDTO.from_entity(r).to_payload() for r in records],
        }
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except OSError:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise
