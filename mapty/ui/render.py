"""Presentation helpers shared by the map and list views."""

from __future__ import annotations

from dataclasses import dataclass

from mapty.workout.model import StoredWorkout

RUNNING_ICON = "🏃‍♂️"
CYCLING_ICON = "🚴‍♂️"


@dataclass(frozen=True)
class DetailRow:
    icon: str
    value: str
    unit: str


@dataclass(frozen=True)
class WorkoutListEntry:
    workout_id: str
    kind: str
    title: str
    details: tuple[DetailRow, ...]


def kind_icon(kind: str) -> str:
    return RUNNING_ICON if kind == "running" else CYCLING_ICON


def marker_popup_text(workout: StoredWorkout) -> str:
    return f"{kind_icon(workout.kind)} {workout.description}"


def marker_style(workout: StoredWorkout) -> str:
    return f"{workout.kind}-popup"


def _fmt_value(value: float | None) -> str:
    if value is None:
        return "--"
    if float(value).is_integer():
        return f"{int(value)}"
    return f"{value:g}"


def _fmt_metric(value: float | None) -> str:
    return f"{value:.1f}" if value is not None else "--"


def build_list_entry(workout: StoredWorkout) -> WorkoutListEntry:
    if workout.kind == "running":
        metric = DetailRow("⚡️", _fmt_metric(workout.pace_min_per_km), "min/km")
        extra = DetailRow("🦶🏼", _fmt_value(workout.cadence_spm), "spm")
    else:
        metric = DetailRow("⚡️", _fmt_metric(workout.speed_km_per_h), "km/h")
        extra = DetailRow("⛰", _fmt_value(workout.elevation_gain_m), "m")
    return WorkoutListEntry(
        workout_id=workout.id,
        kind=workout.kind,
        title=workout.description,
        details=(
            DetailRow(kind_icon(workout.kind), _fmt_value(workout.distance_km), "km"),
            DetailRow("⏱", _fmt_value(workout.duration_min), "min"),
            metric,
            extra,
        ),
    )
