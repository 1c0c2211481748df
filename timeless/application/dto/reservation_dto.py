from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from timeless.domain.entities.reservation import (
    Reservation,
    ReservationStatus,
    format_timestamp,
    parse_timestamp,
)


class ReservationDTO(BaseModel):
    """Wire and on-disk shape of a reservation (camelCase keys, optional fields omitted when empty)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    full_name: str = Field(alias="fullName")
    email: str
    phone: str | None = None
    check_in: date = Field(alias="checkIn")
    check_out: date = Field(alias="checkOut")
    guests: int
    room_preference: str | None = Field(default=None, alias="roomPreference")
    message: str | None = None
    status: ReservationStatus
    created_at: str = Field(alias="createdAt")

    @classmethod
    def from_entity(cls, reservation: Reservation) -> ReservationDTO:
        return cls(
            id=reservation.id,
            full_name=reservation.full_name,
            email=reservation.email,
            phone=reservation.phone,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            guests=reservation.guests,
            room_preference=reservation.room_preference,
            message=reservation.message,
            status=reservation.status,
            created_at=format_timestamp(reservation.created_at),
        )

    def to_entity(self) -> Reservation:
        return Reservation(
            id=self.id,
            full_name=self.full_name,
            email=self.email,
            check_in=self.check_in,
            check_out=self.check_out,
            guests=self.guests,
            status=self.status,
            created_at=parse_timestamp(self.created_at),
            phone=self.phone,
            room_preference=self.room_preference,
            message=self.message,
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
