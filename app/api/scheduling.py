from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.schemas import BookRequestSchema
from app.application.use_cases.availability import GetAvailabilityUseCase
from app.application.use_cases.booking import BookAppointmentUseCase
from app.application.use_cases.catalogue import GetCatalogueUseCase
from app.wiring.dependencies import (
    get_availability_use_case,
    get_booking_use_case,
    get_catalogue_use_case,
)


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/availability")
def get_availability(
    start: str | None = Query(None),
    end: str | None = Query(None),
    username: str | None = Query(None),
    event_type_slug: str | None = Query(None, alias="eventTypeSlug"),
    uc: GetAvailabilityUseCase = Depends(get_availability_use_case),
) -> JSONResponse:
    if not start or not end:
        return JSONResponse(
            {"error": "Missing required parameters: start and end"},
            status_code=400,
        )

    result = uc.execute(start=start, end=end, username=username, event_type_slug=event_type_slug)
    if result.status == "error":
        return JSONResponse(
            {"error": "Failed to fetch availability from Cal.com", "message": result.message},
            status_code=500,
        )
    return JSONResponse(result.to_dict())


@router.post("/book")
def book(
    req: BookRequestSchema,
    uc: BookAppointmentUseCase = Depends(get_booking_use_case),
) -> JSONResponse:
    try:
        status_code, body = uc.create_raw(req.to_domain())
    except Exception as e:
        logger.exception("Booking error", extra={"error": str(e)})
        return JSONResponse({"error": "Failed to create booking"}, status_code=500)

    if status_code >= 400:
        logger.warning("Booking rejected by Cal.com", extra={"status": status_code})
    return JSONResponse(body, status_code=status_code)


@router.get("/services-catalogue")
def services_catalogue(
    uc: GetCatalogueUseCase = Depends(get_catalogue_use_case),
) -> JSONResponse:
    result = uc.execute()
    if result.status == "error":
        return JSONResponse({"error": result.message}, status_code=500)
    return JSONResponse({"catalogue": [c.to_dict() for c in result.catalogue]})
