"""Local persistence for the workout history."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Protocol

from loguru import logger

from mapty.workout.model import RECORD_REQUIRED_FIELDS
from mapty.workout.store import WorkoutStore

DEFAULT_STORAGE_KEY = "workouts"

NUMERIC_FIELDS = ("distance_km", "duration_min")
OPTIONAL_NUMERIC_FIELDS = (
    "cadence_spm",
    "pace_min_per_km",
    "elevation_gain_m",
    "speed_km_per_h",
)


def _default_storage_dir() -> Path:
    return Path.home() / ".mapty"


class StorageWriteError(OSError):
    """Raised when the backing store refuses a write."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...


class MemoryKeyValueStore:
    def __init__(self) -> None:
        self._slots: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._slots.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._slots[key] = bytes(value)


class FileKeyValueStore:
    """One file per key under a base directory."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self._root = base_dir or _default_storage_dir()

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        safe = re.sub(r"[^a-zA-Z0-9_.-]+", "-", key).strip("-.") or "default"
        return self._root / f"{safe}.json"

    def get(self, key: str) -> bytes | None:
        target = self.path_for(key)
        try:
            return target.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning(f"Could not read {target}: {exc}")
            return None

    def set(self, key: str, value: bytes) -> None:
        target = self.path_for(key)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp = target.with_suffix(".tmp")
            tmp.write_bytes(value)
            tmp.replace(target)
        except OSError as exc:
            raise StorageWriteError(f"Could not write {target}: {exc}") from exc


class WorkoutPersistence:
    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._kv = kv
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, store: WorkoutStore) -> None:
        payload = json.dumps(store.to_serializable(), ensure_ascii=True)
        self._kv.set(self._key, payload.encode("utf-8"))
        logger.debug(f"Saved {len(store)} workouts under '{self._key}'")

    def load(self) -> list[dict[str, Any]]:
        raw = self._kv.get(self._key)
        if not raw:
            return []
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning(f"Ignoring unreadable workout history '{self._key}': {exc}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Ignoring workout history '{self._key}': expected a list")
            return []

        out: list[dict[str, Any]] = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning(f"Skipping workout record {i + 1}: not an object")
                continue
            missing = [name for name in RECORD_REQUIRED_FIELDS if name not in item]
            if missing:
                logger.warning(
                    f"Skipping workout record {i + 1}: missing {', '.join(missing)}"
                )
                continue
            coords = item["coords"]
            if not isinstance(coords, (list, tuple)) or len(coords) != 2:
                logger.warning(f"Skipping workout record {i + 1}: invalid coords")
                continue
            bad = _non_numeric_fields(item)
            if bad:
                logger.warning(
                    f"Skipping workout record {i + 1}: non-numeric {', '.join(bad)}"
                )
                continue
            out.append(item)
        return out


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _non_numeric_fields(item: dict[str, Any]) -> list[str]:
    bad = [name for name in NUMERIC_FIELDS if not _is_number(item[name])]
    bad.extend(
        name
        for name in OPTIONAL_NUMERIC_FIELDS
        if item.get(name) is not None and not _is_number(item[name])
    )
    if not all(_is_number(part) for part in item["coords"]):
        bad.append("coords")
    return bad
