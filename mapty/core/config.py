"""Application settings."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ZOOM = 16
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8088


def _default_storage_dir() -> Path:
    return Path.home() / ".mapty"


@dataclass(frozen=True)
class AppConfig:
    storage_dir: Path = field(default_factory=_default_storage_dir)
    storage_key: str = "workouts"
    default_zoom: int = DEFAULT_ZOOM
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    title: str = "Mapty"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> AppConfig:
        storage_dir = getattr(args, "storage_dir", None)
        return cls(
            storage_dir=Path(storage_dir).expanduser() if storage_dir else _default_storage_dir(),
            default_zoom=int(getattr(args, "zoom", DEFAULT_ZOOM)),
            host=str(getattr(args, "web_host", DEFAULT_HOST)),
            port=int(getattr(args, "web_port", DEFAULT_PORT)),
        )
