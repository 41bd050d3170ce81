from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Optional

from settings import get_settings


class LocalKeyValueStore:
    """Text values addressed by string keys, optionally mirrored to one file per key."""

    suffix = ".json"

    def __init__(self, root_path: Optional[Path] = None) -> None:
        self._values: Dict[str, str] = {}
        self.root_path = root_path
        if root_path:
            root_path.mkdir(parents=True, exist_ok=True)

    def get_text(self, key: str) -> Optional[str]:
        self._check_key(key)
        value = self._values.get(key)
        if value is not None:
            return value

        if self.root_path:
            path = self._path_for(key)
            if path.exists():
                value = path.read_text(encoding="utf-8")
                self._values[key] = value
                return value

        return None

    def put_text(self, key: str, value: str) -> None:
        self._check_key(key)
        if self.root_path:
            self._path_for(key).write_text(value, encoding="utf-8")
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._check_key(key)
        self._values.pop(key, None)
        if self.root_path:
            self._path_for(key).unlink(missing_ok=True)

    def list_keys(self) -> Iterable[str]:
        keys = set(self._values)
        if self.root_path:
            for path in self.root_path.glob(f"*{self.suffix}"):
                if path.is_file():
                    keys.add(path.name[: -len(self.suffix)])
        return sorted(keys)

    def _path_for(self, key: str) -> Path:
        if self.root_path is None:
            raise RuntimeError("Store has no root path; values are kept in memory only.")
        return self.root_path / f"{key}{self.suffix}"

    @staticmethod
    def _check_key(key: str) -> None:
        if not key or key.startswith(".") or "/" in key or "\\" in key:
            raise ValueError(f"Invalid storage key {key!r}.")


@lru_cache
def build_default_store(root_path: Optional[str] = None) -> LocalKeyValueStore:
    storage_root = get_settings().storage_root_path if root_path is None else root_path
    path = Path(storage_root) if storage_root else None
    return LocalKeyValueStore(root_path=path)
