"""Recoverable error types raised by the readings services."""

from __future__ import annotations

from datetime import date


class ReadingsError(Exception):
    """Base class for readings failures that are reported back to the user."""


class DuplicateDateError(ReadingsError):
    def __init__(self, reading_date: date) -> None:
        self.reading_date = reading_date
        super().__init__(f"A reading for {reading_date.isoformat()} already exists.")


class NoDataError(ReadingsError):
    def __init__(self, year: int, month: int) -> None:
        self.year = year
        self.month = month
        super().__init__(f"No readings found for {year:04d}-{month:02d}.")


class UnknownHouseError(ReadingsError, KeyError):
    def __init__(self, house_id: str) -> None:
        self.house_id = house_id
        super().__init__(f"House {house_id!r} is not configured.")

    def __str__(self) -> str:
        return str(self.args[0])
