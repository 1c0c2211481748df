from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from timeless.application.dto.reservation_dto import ReservationDTO
from timeless.application.exceptions import ApiRequestError, TransportError
from timeless.application.ports.reservation_api import ReservationApiPort
from timeless.core.config import settings
from timeless.domain.entities.reservation import Reservation, ReservationStatus

RESERVATIONS_PATH = "/api/reservations"


class ReservationApiClient(ReservationApiPort):
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT_SECONDS,
        )
        self._logger = logging.getLogger(__name__)

    def close(self) -> None:
        self._client.close()

    def list_reservations(self) -> list[Reservation]:
        resp = self._request("GET", RESERVATIONS_PATH)
        data = self._json(resp)
        if not isinstance(data, list):
            raise ApiRequestError("Unexpected response from reservation service.", resp.status_code)
        return [self._to_entity(item, resp) for item in data]

    def create_reservation(self, payload: Mapping[str, Any]) -> Reservation:
        resp = self._request("POST", RESERVATIONS_PATH, json=dict(payload))
        return self._to_entity(self._json(resp), resp)

    def update_status(self, reservation_id: str, status: ReservationStatus | str) -> Reservation:
        value = status.value if isinstance(status, ReservationStatus) else status
        path = f"{RESERVATIONS_PATH}/{_path_segment(reservation_id)}/status"
        resp = self._request("PATCH", path, json={"status": value})
        return self._to_entity(self._json(resp), resp)

    def delete_reservation(self, reservation_id: str) -> None:
        self._request("DELETE", f"{RESERVATIONS_PATH}/{_path_segment(reservation_id)}")

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> httpx.Response:
        try:
            resp = self._client.request(method, path, json=json)
        except httpx.RequestError as e:
            self._logger.error(
                "Reservation service unreachable",
                extra={"path": path, "error": f"{type(e).__name__}: {e}"},
            )
            raise TransportError() from e

        if resp.status_code >= 400:
            message = _error_message(resp)
            self._logger.warning(
                "Reservation service request failed",
                extra={"path": path, "status": resp.status_code, "error": message},
            )
            raise ApiRequestError(message, resp.status_code)
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            raise ApiRequestError("Unexpected response from reservation service.", resp.status_code) from None

    @staticmethod
    def _to_entity(item: Any, resp: httpx.Response) -> Reservation:
        try:
            return ReservationDTO.model_validate(item).to_entity()
        except (ValidationError, ValueError):
            raise ApiRequestError("Unexpected response from reservation service.", resp.status_code) from None


def _error_message(resp: httpx.Response) -> str:
    """Server-provided ``message`` when present, otherwise a generic failure line."""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return f"Request failed ({resp.status_code})"


def _path_segment(reservation_id: str) -> str:
    return quote(reservation_id, safe="")
