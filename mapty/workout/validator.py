"""Form input validation for new workouts."""

from __future__ import annotations

import math

from mapty.workout.model import WORKOUT_KINDS


def parse_number(raw: object) -> float | None:
    """Parse a raw form value, returning None when it is not a finite number."""
    if raw is None:
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def validate(
    kind: str,
    distance: object,
    duration: object,
    cadence: object,
    elevation: object,
) -> bool:
    if kind not in WORKOUT_KINDS:
        return False
    required = [
        distance,
        duration,
        cadence if kind == "running" else 0,
        elevation if kind == "cycling" else 0,
    ]
    for raw in required:
        value = parse_number(raw)
        # Zero distance/duration passes; the bound is >= 0, not > 0.
        if value is None or value < 0:
            return False
    return True
