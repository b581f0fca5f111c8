"""Workout domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Union

WorkoutKind = Literal["running", "cycling"]
Coords = tuple[float, float]

WORKOUT_KINDS: tuple[WorkoutKind, ...] = ("running", "cycling")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

ID_DIGITS = 10


def _divide(numerator: float, denominator: float) -> float:
    # IEEE-754 semantics: x/0 -> +-inf, 0/0 -> nan.
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def calc_pace(distance_km: float, duration_min: float) -> float:
    """Running pace in min/km."""
    return _divide(duration_min, distance_km)


def calc_speed(distance_km: float, duration_min: float) -> float:
    """Cycling speed in km/h."""
    return _divide(distance_km, duration_min / 60)


def make_workout_id(created_at: datetime) -> str:
    millis = int(created_at.timestamp() * 1000)
    return str(millis)[-ID_DIGITS:]


def describe(kind: str, created_at: datetime) -> str:
    return f"{kind[:1].upper()}{kind[1:]} on {MONTH_NAMES[created_at.month - 1]} {created_at.day}"


@dataclass(frozen=True)
class Running:
    id: str
    created_at: datetime
    coords: Coords
    distance_km: float
    duration_min: float
    cadence_spm: float
    description: str
    kind: Literal["running"] = field(default="running", init=False)
    pace_min_per_km: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "pace_min_per_km", calc_pace(self.distance_km, self.duration_min)
        )


@dataclass(frozen=True)
class Cycling:
    id: str
    created_at: datetime
    coords: Coords
    distance_km: float
    duration_min: float
    elevation_gain_m: float
    description: str
    kind: Literal["cycling"] = field(default="cycling", init=False)
    speed_km_per_h: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "speed_km_per_h", calc_speed(self.distance_km, self.duration_min)
        )


Workout = Union[Running, Cycling]


@dataclass(frozen=True)
class WorkoutRecord:
    """Inert workout entry restored from persisted data.

    Carries the stored values verbatim, derived metrics included; nothing is
    recomputed. Field names match the live entities so renderers can read
    either one.
    """

    id: str
    created_at: str
    coords: Coords
    kind: str
    distance_km: float
    duration_min: float
    description: str
    cadence_spm: float | None = None
    pace_min_per_km: float | None = None
    elevation_gain_m: float | None = None
    speed_km_per_h: float | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> WorkoutRecord:
        lat, lng = data["coords"]
        return cls(
            id=data["id"],
            created_at=data["created_at"],
            coords=(lat, lng),
            kind=data["kind"],
            distance_km=data["distance_km"],
            duration_min=data["duration_min"],
            description=data["description"],
            cadence_spm=data.get("cadence_spm"),
            pace_min_per_km=data.get("pace_min_per_km"),
            elevation_gain_m=data.get("elevation_gain_m"),
            speed_km_per_h=data.get("speed_km_per_h"),
        )


StoredWorkout = Union[Running, Cycling, WorkoutRecord]

RECORD_REQUIRED_FIELDS = (
    "id",
    "created_at",
    "coords",
    "kind",
    "distance_km",
    "duration_min",
    "description",
)


def create_running(
    coords: Coords,
    distance_km: float,
    duration_min: float,
    cadence_spm: float,
    *,
    now: datetime | None = None,
) -> Running:
    created_at = now or datetime.now()
    return Running(
        id=make_workout_id(created_at),
        created_at=created_at,
        coords=(coords[0], coords[1]),
        distance_km=distance_km,
        duration_min=duration_min,
        cadence_spm=cadence_spm,
        description=describe("running", created_at),
    )


def create_cycling(
    coords: Coords,
    distance_km: float,
    duration_min: float,
    elevation_gain_m: float,
    *,
    now: datetime | None = None,
) -> Cycling:
    created_at = now or datetime.now()
    return Cycling(
        id=make_workout_id(created_at),
        created_at=created_at,
        coords=(coords[0], coords[1]),
        distance_km=distance_km,
        duration_min=duration_min,
        elevation_gain_m=elevation_gain_m,
        description=describe("cycling", created_at),
    )


def to_record(workout: StoredWorkout) -> dict[str, Any]:
    """Flatten a workout into its persisted record shape."""
    created_at = workout.created_at
    record: dict[str, Any] = {
        "id": workout.id,
        "created_at": created_at if isinstance(created_at, str) else created_at.isoformat(),
        "coords": [workout.coords[0], workout.coords[1]],
        "kind": workout.kind,
        "distance_km": workout.distance_km,
        "duration_min": workout.duration_min,
        "description": workout.description,
    }
    if workout.kind == "running":
        record["cadence_spm"] = workout.cadence_spm
        record["pace_min_per_km"] = workout.pace_min_per_km
    elif workout.kind == "cycling":
        record["elevation_gain_m"] = workout.elevation_gain_m
        record["speed_km_per_h"] = workout.speed_km_per_h
    return record
