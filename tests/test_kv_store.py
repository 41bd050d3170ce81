from pathlib import Path

import pytest

from storage.kv_store import LocalKeyValueStore


def test_put_and_get_persists_one_file_per_key(tmp_path: Path) -> None:
    store = LocalKeyValueStore(root_path=tmp_path)
    store.put_text("electricityReadings_house1", "[]")

    assert (tmp_path / "electricityReadings_house1.json").read_text() == "[]"
    assert "electricityReadings_house1" in store.list_keys()

    fresh_store = LocalKeyValueStore(root_path=tmp_path)
    assert fresh_store.get_text("electricityReadings_house1") == "[]"


def test_missing_key_returns_none(tmp_path: Path) -> None:
    store = LocalKeyValueStore(root_path=tmp_path)

    assert store.get_text("missing") is None


def test_in_memory_store_keeps_values_without_files() -> None:
    store = LocalKeyValueStore()
    store.put_text("a", "1")
    store.put_text("b", "2")

    assert store.get_text("a") == "1"
    assert list(store.list_keys()) == ["a", "b"]

    store.delete("a")
    assert store.get_text("a") is None


def test_delete_removes_backing_file(tmp_path: Path) -> None:
    store = LocalKeyValueStore(root_path=tmp_path)
    store.put_text("key", "value")

    store.delete("key")
    store.delete("key")

    assert not (tmp_path / "key.json").exists()
    assert LocalKeyValueStore(root_path=tmp_path).get_text("key") is None


@pytest.mark.parametrize("key", ["", ".hidden", "../escape", "nested/key", "back\\slash"])
def test_rejects_unsafe_keys(key: str) -> None:
    store = LocalKeyValueStore()

    with pytest.raises(ValueError):
        store.put_text(key, "value")


def test_path_lookup_without_root_raises_runtime_error() -> None:
    store = LocalKeyValueStore()

    with pytest.raises(RuntimeError):
        store._path_for("key")  # type: ignore[attr-defined]
