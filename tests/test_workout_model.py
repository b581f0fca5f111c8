from __future__ import annotations

import dataclasses
import math
from datetime import datetime

import pytest

from mapty.workout.model import (
    create_cycling,
    create_running,
    make_workout_id,
    to_record,
)

NOW = datetime(2026, 4, 14, 9, 30, 0)


def test_create_running_computes_pace_and_description() -> None:
    workout = create_running((51.5, -0.1), 5.0, 25.0, 180.0, now=NOW)

    assert workout.kind == "running"
    assert workout.pace_min_per_km == 25.0 / 5.0
    assert workout.description == "Running on April 14"
    assert workout.coords == (51.5, -0.1)
    assert workout.created_at == NOW


def test_create_cycling_computes_speed_and_description() -> None:
    workout = create_cycling((40.0, 2.0), 27.0, 95.0, 523.0, now=NOW)

    assert workout.kind == "cycling"
    assert workout.speed_km_per_h == 27.0 / (95.0 / 60)
    assert workout.description == "Cycling on April 14"


@pytest.mark.parametrize(
    ("distance", "duration"),
    [(3.3, 17.0), (0.7, 4.1), (42.195, 201.5)],
)
def test_derived_metrics_match_formula_exactly(distance: float, duration: float) -> None:
    running = create_running((0.0, 0.0), distance, duration, 170.0, now=NOW)
    cycling = create_cycling((0.0, 0.0), distance, duration, 0.0, now=NOW)

    assert running.pace_min_per_km == duration / distance
    assert cycling.speed_km_per_h == distance / (duration / 60)


def test_zero_inputs_give_degenerate_metrics() -> None:
    assert math.isinf(create_running((0.0, 0.0), 0.0, 30.0, 0.0, now=NOW).pace_min_per_km)
    assert math.isnan(create_running((0.0, 0.0), 0.0, 0.0, 0.0, now=NOW).pace_min_per_km)
    assert math.isinf(create_cycling((0.0, 0.0), 10.0, 0.0, 0.0, now=NOW).speed_km_per_h)


def test_workouts_are_immutable() -> None:
    workout = create_running((1.0, 2.0), 5.0, 30.0, 160.0, now=NOW)

    with pytest.raises(dataclasses.FrozenInstanceError):
        workout.distance_km = 10.0  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        workout.pace_min_per_km = 1.0  # type: ignore[misc]


def test_workout_id_is_last_ten_digits_of_millis() -> None:
    workout_id = make_workout_id(NOW)

    assert len(workout_id) == 10
    assert workout_id.isdigit()
    assert str(int(NOW.timestamp() * 1000)).endswith(workout_id)


def test_description_uses_month_table() -> None:
    workout = create_cycling((0.0, 0.0), 1.0, 1.0, 0.0, now=datetime(2026, 12, 3))

    assert workout.description == "Cycling on December 3"


def test_to_record_includes_kind_specific_fields() -> None:
    running = to_record(create_running((1.0, 2.0), 5.0, 30.0, 160.0, now=NOW))
    cycling = to_record(create_cycling((1.0, 2.0), 20.0, 60.0, 300.0, now=NOW))

    assert running["cadence_spm"] == 160.0
    assert running["pace_min_per_km"] == 6.0
    assert "elevation_gain_m" not in running
    assert cycling["elevation_gain_m"] == 300.0
    assert cycling["speed_km_per_h"] == 20.0
    assert "cadence_spm" not in cycling
    assert cycling["created_at"] == NOW.isoformat()
    assert cycling["coords"] == [1.0, 2.0]
