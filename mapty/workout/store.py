"""In-memory, insertion-ordered collection of workouts."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from mapty.workout.model import StoredWorkout, WorkoutRecord, to_record


class WorkoutStore:
    def __init__(self) -> None:
        self._workouts: list[StoredWorkout] = []

    def add(self, workout: StoredWorkout) -> None:
        self._workouts.append(workout)

    def find_by_id(self, workout_id: str) -> StoredWorkout | None:
        for workout in self._workouts:
            if workout.id == workout_id:
                return workout
        return None

    def to_serializable(self) -> list[dict[str, Any]]:
        return [to_record(workout) for workout in self._workouts]

    def load_from(self, records: Iterable[dict[str, Any]]) -> None:
        """Replace the contents with inert records, keeping their order.

        Values are trusted as previously persisted and are not re-validated.
        """
        self._workouts = [WorkoutRecord.from_mapping(item) for item in records]

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[StoredWorkout]:
        return iter(list(self._workouts))
