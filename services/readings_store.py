"""Ordered per-house collection of readings backed by a persistence port."""

from __future__ import annotations

import logging
import math
import time
from datetime import date
from functools import lru_cache
from typing import Callable, Iterable, Optional

from datastore.readings_repository import KeyValueReadingsRepository, ReadingsRepository
from models.records import Comparison, MonthlyAverages, Reading
from services.calculations import ReadingsCalculator
from services.errors import DuplicateDateError, UnknownHouseError
from settings import get_settings
from storage.kv_store import build_default_store

logger = logging.getLogger(__name__)


def _sorted_newest_first(readings: Iterable[Reading]) -> list[Reading]:
    return sorted(readings, key=lambda reading: reading.date, reverse=True)


class _CreationOrderIds:
    """Nanosecond timestamps, bumped so ids stay unique and increasing."""

    def __init__(self) -> None:
        self._last = 0

    def __call__(self) -> str:
        candidate = max(time.time_ns(), self._last + 1)
        self._last = candidate
        return str(candidate)


class ReadingsStore:
    """Owns one house's readings.

    The in-memory collection is always sorted newest date first; ``insert`` and
    ``delete`` maintain that order and rewrite the persisted copy in full. A
    mutation is only applied in memory once the repository accepted the write.
    """

    def __init__(
        self,
        house_id: str,
        repository: ReadingsRepository,
        calculator: Optional[ReadingsCalculator] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self.house_id = house_id
        self.repository = repository
        self.calculator = calculator or ReadingsCalculator()
        self._new_id = id_factory or _CreationOrderIds()
        self._readings = _sorted_newest_first(repository.load())
        self.revision = 0

    @property
    def readings(self) -> list[Reading]:
        return list(self._readings)

    def get(self, reading_id: str) -> Optional[Reading]:
        return next((item for item in self._readings if item.id == reading_id), None)

    def insert(
        self,
        reading_date: date,
        day: float,
        evening: float,
        night: float,
        solar: float,
    ) -> Reading:
        if any(item.date == reading_date for item in self._readings):
            logger.info(
                "Rejected reading for an already recorded date",
                extra={"house_id": self.house_id, "reading_date": reading_date},
            )
            raise DuplicateDateError(reading_date)

        bands = (float(day), float(evening), float(night), float(solar))
        if not all(math.isfinite(value) for value in bands):
            raise ValueError("Band values must be finite numbers.")

        reading = Reading(
            id=self._new_id(),
            date=reading_date,
            day=bands[0],
            evening=bands[1],
            night=bands[2],
            solar=bands[3],
        )
        self._commit(_sorted_newest_first([*self._readings, reading]))
        logger.info(
            "Recorded reading",
            extra={
                "house_id": self.house_id,
                "reading_id": reading.id,
                "reading_date": reading_date,
                "revision": self.revision,
            },
        )
        return reading

    def delete(self, reading_id: str) -> list[Reading]:
        """Remove the reading with ``reading_id``; unknown ids leave the collection as-is."""
        remaining = [item for item in self._readings if item.id != reading_id]
        if len(remaining) == len(self._readings):
            return self.readings

        self._commit(remaining)
        logger.info(
            "Deleted reading",
            extra={
                "house_id": self.house_id,
                "reading_id": reading_id,
                "revision": self.revision,
            },
        )
        return self.readings

    def compare_to_previous(self, reading: Reading) -> Optional[Comparison]:
        return self.calculator.compare_to_previous(self._readings, reading)

    def compute_monthly_average(self, target_date: date) -> MonthlyAverages:
        return self.calculator.monthly_average(self._readings, target_date)

    def _commit(self, readings: list[Reading]) -> None:
        self.repository.save(readings)
        self._readings = readings
        self.revision += 1


@lru_cache
def build_default_readings_store(house_id: str) -> ReadingsStore:
    """Factory that wires a house's store to the configured key-value storage."""
    settings = get_settings()
    if house_id not in settings.houses:
        raise UnknownHouseError(house_id)
    repository = KeyValueReadingsRepository(
        store=build_default_store(),
        key=settings.storage_key(house_id),
    )
    return ReadingsStore(house_id=house_id, repository=repository)
