import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.readings_store",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Recorded reading",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    line = formatter.format(_record(house_id="house1", reading_id="42", unrelated="x"))

    assert line == "Recorded reading | house_id=house1 reading_id=42"


def test_formatter_skips_missing_and_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["house_id", "count"])

    assert formatter.format(_record(count=None)) == "Recorded reading"
