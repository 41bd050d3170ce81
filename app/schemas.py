"""Pydantic schemas for the HTTP API layer and the persisted record format."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.records import Comparison, MonthlyAverages, Reading


class ReadingCreate(BaseModel):
    """Form or JSON input for a new reading."""

    model_config = ConfigDict(allow_inf_nan=False)

    date: dt.date
    day: float = Field(..., ge=0, description="Consumption 6am-6pm.")
    evening: float = Field(..., ge=0, description="Consumption 6pm-10pm.")
    night: float = Field(..., ge=0, description="Consumption 10pm-6am.")
    solar: float = Field(..., ge=0, description="Net solar generation.")


class ReadingRecord(BaseModel):
    """A stored reading; also the wire shape returned by the API."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    date: dt.date
    day: float = Field(..., ge=0)
    evening: float = Field(..., ge=0)
    night: float = Field(..., ge=0)
    solar: float = Field(..., ge=0)

    @classmethod
    def from_domain(cls, reading: Reading) -> "ReadingRecord":
        return cls(
            id=reading.id,
            date=reading.date,
            day=reading.day,
            evening=reading.evening,
            night=reading.night,
            solar=reading.solar,
        )

    def to_domain(self) -> Reading:
        return Reading(
            id=self.id,
            date=self.date,
            day=self.day,
            evening=self.evening,
            night=self.night,
            solar=self.solar,
        )


class ComparisonResponse(BaseModel):
    day: float
    evening: float
    night: float
    solar: float

    @classmethod
    def from_domain(cls, comparison: Comparison) -> "ComparisonResponse":
        return cls(
            day=comparison.day,
            evening=comparison.evening,
            night=comparison.night,
            solar=comparison.solar,
        )


class AveragesResponse(BaseModel):
    """Monthly band means formatted to two decimals, plus the contributing count."""

    day: str
    evening: str
    night: str
    solar: str
    count: int = Field(..., ge=1)

    @classmethod
    def from_domain(cls, averages: MonthlyAverages) -> "AveragesResponse":
        return cls(
            day=averages.day,
            evening=averages.evening,
            night=averages.night,
            solar=averages.solar,
            count=averages.count,
        )


class ReadingCreatedResponse(BaseModel):
    reading: ReadingRecord
    comparison: Optional[ComparisonResponse] = None


class House(BaseModel):
    house_id: str
    label: str


class HouseListResponse(BaseModel):
    houses: List[House] = Field(default_factory=list)
