from __future__ import annotations

import logging
from typing import List, Protocol, Sequence

from pydantic import TypeAdapter, ValidationError

from app.schemas import ReadingRecord
from models.records import Reading
from storage.kv_store import LocalKeyValueStore

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(List[ReadingRecord])


class ReadingsRepository(Protocol):
    """Load/save port used by the readings store."""

    def load(self) -> list[Reading]: ...

    def save(self, readings: Sequence[Reading]) -> None: ...


class KeyValueReadingsRepository:
    """Persists one house's readings as a JSON array under a single storage key."""

    def __init__(self, store: LocalKeyValueStore, key: str) -> None:
        self.store = store
        self.key = key

    def load(self) -> list[Reading]:
        """Return the stored readings, or an empty list when absent or unreadable."""
        try:
            raw = self.store.get_text(self.key)
        except OSError as exc:
            logger.warning(
                "Failed to read stored readings",
                extra={"storage_key": self.key, "reason": str(exc)},
            )
            return []

        if not raw:
            return []

        try:
            records = _RECORDS.validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Discarding malformed stored readings",
                extra={"storage_key": self.key, "reason": f"{exc.error_count()} errors"},
            )
            return []

        return [record.to_domain() for record in records]

    def save(self, readings: Sequence[Reading]) -> None:
        records = [ReadingRecord.from_domain(reading) for reading in readings]
        payload = _RECORDS.dump_json(records, indent=2).decode("utf-8")
        try:
            self.store.put_text(self.key, payload)
        except OSError:
            logger.exception(
                "Failed to save readings",
                extra={"storage_key": self.key, "count": len(records)},
            )
            raise
