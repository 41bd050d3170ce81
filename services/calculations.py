"""Derived views over a house's readings."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from models.records import Comparison, MonthlyAverages, Reading
from services.errors import NoDataError


class ReadingsCalculator:
    """Pure computations over readings that can be unit tested in isolation."""

    def compare_to_previous(
        self, readings: Iterable[Reading], reading: Reading
    ) -> Optional[Comparison]:
        ordered = sorted(readings, key=lambda item: item.date)
        index = next(
            (position for position, item in enumerate(ordered) if item.id == reading.id),
            -1,
        )
        if index <= 0:
            return None

        previous = ordered[index - 1]
        return Comparison(
            day=reading.day - previous.day,
            evening=reading.evening - previous.evening,
            night=reading.night - previous.night,
            solar=reading.solar - previous.solar,
        )

    def monthly_average(
        self, readings: Iterable[Reading], target_date: date
    ) -> MonthlyAverages:
        month_readings = [
            reading
            for reading in readings
            if reading.date.year == target_date.year
            and reading.date.month == target_date.month
        ]
        if not month_readings:
            raise NoDataError(target_date.year, target_date.month)

        count = len(month_readings)
        totals = {"day": 0.0, "evening": 0.0, "night": 0.0, "solar": 0.0}
        for reading in month_readings:
            totals["day"] += reading.day
            totals["evening"] += reading.evening
            totals["night"] += reading.night
            totals["solar"] += reading.solar

        return MonthlyAverages(
            day=f"{totals['day'] / count:.2f}",
            evening=f"{totals['evening'] / count:.2f}",
            night=f"{totals['night'] / count:.2f}",
            solar=f"{totals['solar'] / count:.2f}",
            count=count,
        )
