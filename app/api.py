"""HTTP route definitions for the service."""

from __future__ import annotations

import datetime as dt
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.schemas import (
    AveragesResponse,
    ComparisonResponse,
    House,
    HouseListResponse,
    ReadingCreate,
    ReadingCreatedResponse,
    ReadingRecord,
)
from services.errors import DuplicateDateError, NoDataError, UnknownHouseError
from services.readings_store import ReadingsStore, build_default_readings_store
from settings import get_settings

router = APIRouter()

_NUMBERED_HOUSE = re.compile(r"^house(\d+)$", re.IGNORECASE)


def house_label(house_id: str) -> str:
    match = _NUMBERED_HOUSE.match(house_id)
    if match:
        return f"House {match.group(1)}"
    return house_id.replace("_", " ").replace("-", " ").title()


def get_store(house_id: str) -> ReadingsStore:
    try:
        return build_default_readings_store(house_id)
    except UnknownHouseError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.get(
    "/houses",
    response_model=HouseListResponse,
    summary="List the configured houses.",
)
async def list_houses() -> HouseListResponse:
    houses = [
        House(house_id=house_id, label=house_label(house_id))
        for house_id in get_settings().houses
    ]
    return HouseListResponse(houses=houses)


@router.get(
    "/houses/{house_id}/readings",
    response_model=List[ReadingRecord],
    summary="Reading history for a house, most recent date first.",
)
async def list_readings(store: ReadingsStore = Depends(get_store)) -> List[ReadingRecord]:
    return [ReadingRecord.from_domain(reading) for reading in store.readings]


@router.post(
    "/houses/{house_id}/readings",
    status_code=status.HTTP_201_CREATED,
    response_model=ReadingCreatedResponse,
    summary="Record a reading and compare it with the previous one.",
)
async def create_reading(
    payload: ReadingCreate,
    store: ReadingsStore = Depends(get_store),
) -> ReadingCreatedResponse:
    try:
        reading = store.insert(
            payload.date, payload.day, payload.evening, payload.night, payload.solar
        )
    except DuplicateDateError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    comparison = store.compare_to_previous(reading)
    return ReadingCreatedResponse(
        reading=ReadingRecord.from_domain(reading),
        comparison=ComparisonResponse.from_domain(comparison) if comparison is not None else None,
    )


@router.delete(
    "/houses/{house_id}/readings/{reading_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a reading; unknown ids are ignored.",
)
async def delete_reading(
    reading_id: str,
    store: ReadingsStore = Depends(get_store),
) -> Response:
    store.delete(reading_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/houses/{house_id}/readings/{reading_id}/comparison",
    response_model=Optional[ComparisonResponse],
    summary="Change of a reading against its chronological predecessor.",
)
async def get_comparison(
    reading_id: str,
    store: ReadingsStore = Depends(get_store),
) -> Optional[ComparisonResponse]:
    reading = store.get(reading_id)
    if reading is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Reading {reading_id!r} not found.",
        )
    comparison = store.compare_to_previous(reading)
    return ComparisonResponse.from_domain(comparison) if comparison is not None else None


@router.get(
    "/houses/{house_id}/averages",
    response_model=AveragesResponse,
    summary="Monthly band averages for the month containing the given date.",
)
async def get_monthly_averages(
    date: dt.date = Query(..., description="Any date within the target month."),
    store: ReadingsStore = Depends(get_store),
) -> AveragesResponse:
    try:
        averages = store.compute_monthly_average(date)
    except NoDataError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return AveragesResponse.from_domain(averages)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "Open /ui to record readings."}
