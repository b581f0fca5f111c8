from __future__ import annotations

import json
import math
from datetime import datetime
from pathlib import Path

import pytest

from mapty.workout.model import create_cycling, create_running
from mapty.workout.persistence import (
    FileKeyValueStore,
    MemoryKeyValueStore,
    StorageWriteError,
    WorkoutPersistence,
)
from mapty.workout.store import WorkoutStore

NOW = datetime(2026, 4, 14, 9, 30, 0)


def _store() -> WorkoutStore:
    store = WorkoutStore()
    store.add(create_running((51.5, -0.1), 5.0, 25.0, 180.0, now=NOW))
    store.add(create_cycling((51.6, -0.2), 30.0, 90.0, 400.0, now=NOW))
    return store


def test_save_and_load_file_store(tmp_path: Path) -> None:
    kv = FileKeyValueStore(tmp_path)
    persistence = WorkoutPersistence(kv)
    store = _store()

    persistence.save(store)

    assert kv.path_for("workouts").exists()
    loaded = persistence.load()
    assert loaded == store.to_serializable()

    payload = json.loads(kv.path_for("workouts").read_text(encoding="utf-8"))
    assert payload[0]["kind"] == "running"
    assert payload[1]["speed_km_per_h"] == 20.0


def test_save_twice_is_idempotent() -> None:
    kv = MemoryKeyValueStore()
    persistence = WorkoutPersistence(kv)
    store = _store()

    persistence.save(store)
    first = kv.get("workouts")
    persistence.save(store)

    assert kv.get("workouts") == first


def test_load_missing_returns_empty(tmp_path: Path) -> None:
    persistence = WorkoutPersistence(FileKeyValueStore(tmp_path / "nope"))

    assert persistence.load() == []


@pytest.mark.parametrize("raw", [b"{not json", b'{"id": 1}', b"\xff\xfe", b"null"])
def test_load_unparseable_returns_empty(raw: bytes) -> None:
    kv = MemoryKeyValueStore()
    kv.set("workouts", raw)

    assert WorkoutPersistence(kv).load() == []


def test_load_skips_malformed_records() -> None:
    kv = MemoryKeyValueStore()
    good = _store().to_serializable()[0]
    kv.set(
        "workouts",
        json.dumps([good, "junk", {"id": "1"}, dict(good, coords=[1.0])]).encode("utf-8"),
    )

    assert WorkoutPersistence(kv).load() == [good]


def test_custom_key(tmp_path: Path) -> None:
    kv = FileKeyValueStore(tmp_path)
    WorkoutPersistence(kv, key="history").save(_store())

    assert WorkoutPersistence(kv, key="history").load()
    assert WorkoutPersistence(kv).load() == []


def test_file_store_write_failure_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    persistence = WorkoutPersistence(FileKeyValueStore(blocker / "sub"))

    with pytest.raises(StorageWriteError):
        persistence.save(_store())


def test_zero_distance_metrics_round_trip() -> None:
    kv = MemoryKeyValueStore()
    store = WorkoutStore()
    store.add(create_running((1.0, 2.0), 0.0, 30.0, 0.0, now=NOW))
    store.add(create_cycling((1.0, 2.0), 0.0, 0.0, 0.0, now=NOW))

    WorkoutPersistence(kv).save(store)
    loaded = WorkoutPersistence(kv).load()

    raw = kv.get("workouts")
    assert raw is not None
    assert b"Infinity" in raw
    assert math.isinf(loaded[0]["pace_min_per_km"])
    assert math.isnan(loaded[1]["speed_km_per_h"])


def test_load_skips_records_with_non_numeric_values() -> None:
    kv = MemoryKeyValueStore()
    good = _store().to_serializable()[0]
    kv.set(
        "workouts",
        json.dumps(
            [
                dict(good, distance_km="5.5"),
                dict(good, pace_min_per_km="fast"),
                dict(good, coords=["51.5", -0.1]),
                dict(good, duration_min=True),
                good,
            ]
        ).encode("utf-8"),
    )

    assert WorkoutPersistence(kv).load() == [good]


def test_storage_write_error_is_an_os_error() -> None:
    assert issubclass(StorageWriteError, OSError)
