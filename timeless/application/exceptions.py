from __future__ import annotations

from typing import Any


class ReservationValidationError(ValueError):
    """Raised when guest or operator input is missing, malformed or out of range."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message}
        if self.fields:
            payload["fields"] = self.fields
        return payload


class ReservationNotFoundError(LookupError):
    """Raised when an operation targets a reservation id the store does not hold."""

    message = "Not found."

    def __init__(self, reservation_id: str) -> None:
        super().__init__(f"Reservation {reservation_id} not found")
        self.reservation_id = reservation_id

    def to_payload(self) -> dict[str, Any]:
        return {"message": self.message}


class ConsoleError(RuntimeError):
    """Base for failures the admin console surfaces to the operator."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ApiRequestError(ConsoleError):
    """Raised when the reservation service answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(ConsoleError):
    """Raised when the reservation service cannot be reached (network errors, timeouts)."""

    default_message = "Could not reach the reservation service. Please retry."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ActionInProgressError(ConsoleError):
    """Raised when a second status change or delete is issued for a reservation that already has one in flight."""

    def __init__(self, reservation_id: str) -> None:
        super().__init__(f"An action for {reservation_id} is already in progress.")
        self.reservation_id = reservation_id
