"""UI-facing state for one house: the entry form, derived panels and messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from typing import Dict, Optional

from pydantic import ValidationError

from app.schemas import ReadingCreate
from models.records import BANDS, Comparison, MonthlyAverages
from services.errors import DuplicateDateError, NoDataError
from services.readings_store import ReadingsStore, build_default_readings_store


SELECT_DATE_MESSAGE = "Please select a date to determine the month for averaging."
NO_MONTH_DATA_MESSAGE = "No readings found for the selected month."


@dataclass
class _Panel:
    value: object
    revision: int


def _today() -> str:
    return date.today().isoformat()


@dataclass
class FormState:
    date: str = field(default_factory=_today)
    day: str = ""
    evening: str = ""
    night: str = ""
    solar: str = ""


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "input"
    return f"Invalid {location}: {first.get('msg', 'invalid value')}."


class HouseSession:
    """Couples a store with the last comparison/averages shown to the user.

    Panels are tagged with the store revision they were computed at, so any
    later mutation (including one made through the JSON API) clears them.
    """

    def __init__(self, store: ReadingsStore) -> None:
        self.store = store
        self.form = FormState()
        self.error: Optional[str] = None
        self._comparison: Optional[_Panel] = None
        self._averages: Optional[_Panel] = None

    @property
    def house_id(self) -> str:
        return self.store.house_id

    @property
    def comparison(self) -> Optional[Comparison]:
        return self._current(self._comparison)  # type: ignore[return-value]

    @property
    def averages(self) -> Optional[MonthlyAverages]:
        return self._current(self._averages)  # type: ignore[return-value]

    def save_reading(
        self,
        reading_date: str,
        day: str,
        evening: str,
        night: str,
        solar: str,
    ) -> bool:
        """Validate and store raw form input; returns whether the reading was saved."""
        submitted = FormState(
            date=reading_date, day=day, evening=evening, night=night, solar=solar
        )
        raw: Dict[str, str] = {"date": reading_date.strip()}
        for band in BANDS:
            raw[band] = getattr(submitted, band).strip()

        try:
            payload = ReadingCreate.model_validate(raw)
        except ValidationError as exc:
            self.form = submitted
            self.error = _describe_validation_error(exc)
            return False

        try:
            reading = self.store.insert(
                payload.date, payload.day, payload.evening, payload.night, payload.solar
            )
        except DuplicateDateError as exc:
            self.form = submitted
            self.error = str(exc)
            return False

        comparison = self.store.compare_to_previous(reading)
        self._comparison = (
            _Panel(comparison, self.store.revision) if comparison is not None else None
        )
        self._averages = None
        self.form = FormState()
        self.error = None
        return True

    def compute_averages(self, target_date: str) -> Optional[MonthlyAverages]:
        candidate = target_date.strip()
        self.form.date = candidate
        if not candidate:
            self.error = SELECT_DATE_MESSAGE
            return None

        try:
            month = date.fromisoformat(candidate)
        except ValueError:
            self.error = SELECT_DATE_MESSAGE
            return None

        try:
            averages = self.store.compute_monthly_average(month)
        except NoDataError:
            self._averages = None
            self.error = NO_MONTH_DATA_MESSAGE
            return None

        self._averages = _Panel(averages, self.store.revision)
        self.error = None
        return averages

    def delete_reading(self, reading_id: str, confirmed: bool) -> bool:
        if not confirmed:
            return False
        self.store.delete(reading_id)
        self._comparison = None
        self._averages = None
        return True

    def _current(self, panel: Optional[_Panel]) -> Optional[object]:
        if panel is None or panel.revision != self.store.revision:
            return None
        return panel.value


@lru_cache
def build_default_session(house_id: str) -> HouseSession:
    return HouseSession(build_default_readings_store(house_id))
