"""Shared runtime state for a tracking session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from mapty.workout.model import Coords

SessionPhase = Literal["idle", "awaiting_form_input"]


@dataclass
class SessionState:
    phase: SessionPhase = "idle"
    pending_coords: Coords | None = None
    map_ready: bool = False

    def begin_entry(self, coords: Coords) -> None:
        self.phase = "awaiting_form_input"
        self.pending_coords = coords

    def reset(self) -> None:
        self.phase = "idle"
        self.pending_coords = None
