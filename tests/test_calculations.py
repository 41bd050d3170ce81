"""Unit tests for the comparison and monthly average computations."""

from __future__ import annotations

from datetime import date

import pytest

from models.records import Comparison, MonthlyAverages, Reading
from services.calculations import ReadingsCalculator
from services.errors import NoDataError


def _reading(
    reading_id: str,
    on: date,
    day: float = 10.0,
    evening: float = 4.0,
    night: float = 3.0,
    solar: float = 15.0,
) -> Reading:
    return Reading(id=reading_id, date=on, day=day, evening=evening, night=night, solar=solar)


def test_compare_to_previous_returns_none_for_earliest_reading() -> None:
    calculator = ReadingsCalculator()
    earliest = _reading("1", date(2024, 3, 1))
    later = _reading("2", date(2024, 3, 2))

    assert calculator.compare_to_previous([later, earliest], earliest) is None


def test_compare_to_previous_subtracts_immediate_predecessor() -> None:
    calculator = ReadingsCalculator()
    first = _reading("1", date(2024, 3, 1), day=10, evening=4, night=3, solar=15)
    second = _reading("2", date(2024, 3, 5), day=12, evening=6, night=5, solar=17)
    third = _reading("3", date(2024, 3, 9), day=11.5, evening=7, night=2, solar=20)

    comparison = calculator.compare_to_previous([third, first, second], third)

    assert comparison == Comparison(day=-0.5, evening=1.0, night=-3.0, solar=3.0)


def test_compare_to_previous_uses_date_order_not_insertion_order() -> None:
    calculator = ReadingsCalculator()
    newer = _reading("1", date(2024, 3, 10), day=20)
    backfilled = _reading("2", date(2024, 3, 5), day=15)
    oldest = _reading("3", date(2024, 3, 1), day=12)

    comparison = calculator.compare_to_previous([newer, backfilled, oldest], backfilled)

    assert comparison is not None
    assert comparison.day == pytest.approx(3.0)


def test_compare_to_previous_for_unknown_reading_returns_none() -> None:
    calculator = ReadingsCalculator()
    stored = _reading("1", date(2024, 3, 1))
    stranger = _reading("x", date(2024, 3, 2))

    assert calculator.compare_to_previous([stored], stranger) is None


def test_monthly_average_formats_means_to_two_decimals() -> None:
    calculator = ReadingsCalculator()
    readings = [
        _reading("1", date(2024, 3, 1), day=10, evening=4, night=3, solar=15),
        _reading("2", date(2024, 3, 20), day=12, evening=6, night=5, solar=17),
        _reading("3", date(2024, 4, 1), day=100, evening=100, night=100, solar=100),
        _reading("4", date(2023, 3, 15), day=100, evening=100, night=100, solar=100),
    ]

    averages = calculator.monthly_average(readings, date(2024, 3, 31))

    assert averages == MonthlyAverages(
        day="11.00", evening="5.00", night="4.00", solar="16.00", count=2
    )


def test_monthly_average_rounds_repeating_values() -> None:
    calculator = ReadingsCalculator()
    readings = [
        _reading("1", date(2024, 5, 1), day=1),
        _reading("2", date(2024, 5, 2), day=1),
        _reading("3", date(2024, 5, 3), day=2),
    ]

    averages = calculator.monthly_average(readings, date(2024, 5, 15))

    assert averages.day == "1.33"
    assert averages.count == 3


def test_monthly_average_without_matching_readings_raises() -> None:
    calculator = ReadingsCalculator()
    readings = [_reading("1", date(2024, 3, 1))]

    with pytest.raises(NoDataError) as exc_info:
        calculator.monthly_average(readings, date(2024, 2, 1))

    assert exc_info.value.year == 2024
    assert exc_info.value.month == 2
