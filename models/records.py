"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

BANDS = ("day", "evening", "night", "solar")


@dataclass(frozen=True, slots=True)
class Reading:
    """One day's meter readings for a single house."""

    id: str
    date: date
    day: float  # 6am-6pm
    evening: float  # 6pm-10pm
    night: float  # 10pm-6am
    solar: float  # net generation


@dataclass(frozen=True, slots=True)
class Comparison:
    """Signed change of each band against the chronologically previous reading."""

    day: float
    evening: float
    night: float
    solar: float


@dataclass(frozen=True, slots=True)
class MonthlyAverages:
    day: str
    evening: str
    night: str
    solar: str
    count: int
