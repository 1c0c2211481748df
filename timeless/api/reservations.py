from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from timeless.application.dto.reservation_dto import ReservationDTO
from timeless.application.exceptions import ReservationNotFoundError, ReservationValidationError
from timeless.application.use_cases.create_reservation import CreateReservationUseCase
from timeless.application.use_cases.delete_reservation import DeleteReservationUseCase
from timeless.application.use_cases.list_reservations import ListReservationsUseCase
from timeless.application.use_cases.update_reservation_status import UpdateReservationStatusUseCase
from timeless.wiring.dependencies import (
    get_create_reservation_use_case,
    get_delete_reservation_use_case,
    get_list_reservations_use_case,
    get_update_reservation_status_use_case,
)

router = APIRouter(prefix="/api/reservations")
logger = logging.getLogger(__name__)


async def _json_object(request: Request) -> dict[str, Any]:
    """
    Request body as a dict; anything missing, unparseable or not an object reads as {}.

    Only the body read is async. Routes stay sync so store I/O runs in the threadpool.
    """
    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        logger.warning("Ignoring unparseable request body", extra={"path": request.url.path})
        return {}
    return payload if isinstance(payload, dict) else {}


@router.get("", response_model=list[ReservationDTO], response_model_exclude_none=True)
def list_reservations(
    uc: ListReservationsUseCase = Depends(get_list_reservations_use_case),
):
    return [ReservationDTO.from_entity(r) for r in uc.execute()]


@router.post("", status_code=201, response_model=ReservationDTO, response_model_exclude_none=True)
def create_reservation(
    payload: dict[str, Any] = Depends(_json_object),
    uc: CreateReservationUseCase = Depends(get_create_reservation_use_case),
):
    try:
        reservation = uc.execute(payload)
    except ReservationValidationError as e:
        return JSONResponse(status_code=400, content=e.to_payload())
    return ReservationDTO.from_entity(reservation)


@router.patch("/{reservation_id}/status", response_model=ReservationDTO, response_model_exclude_none=True)
def update_reservation_status(
    reservation_id: str,
    payload: dict[str, Any] = Depends(_json_object),
    uc: UpdateReservationStatusUseCase = Depends(get_update_reservation_status_use_case),
):
    try:
        reservation = uc.execute(reservation_id, payload.get("status"))
    except ReservationValidationError as e:
        return JSONResponse(status_code=400, content=e.to_payload())
    except ReservationNotFoundError as e:
        return JSONResponse(status_code=404, content=e.to_payload())
    return ReservationDTO.from_entity(reservation)


@router.delete("/{reservation_id}", status_code=204, response_class=Response)
def delete_reservation(
    reservation_id: str,
    uc: DeleteReservationUseCase = Depends(get_delete_reservation_use_case),
) -> Response:
    try:
        uc.execute(reservation_id)
    except ReservationNotFoundError as e:
        return JSONResponse(status_code=404, content=e.to_payload())
    return Response(status_code=204)
