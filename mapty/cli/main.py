"""Terminal CLI entrypoint for Mapty."""

from __future__ import annotations

import argparse

from mapty.core.config import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_ZOOM, AppConfig
from mapty.core.logger import setup_logger
from mapty.ui.render import build_list_entry
from mapty.workout.persistence import FileKeyValueStore, WorkoutPersistence
from mapty.workout.store import WorkoutStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mapty workout tracker")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) with the workout map",
    )
    parser.add_argument(
        "--web-host",
        default=DEFAULT_HOST,
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=DEFAULT_PORT,
        help="Port for --ui-web",
    )
    parser.add_argument(
        "--storage-dir",
        default=None,
        help="Directory holding the workout history (default: ~/.mapty)",
    )
    parser.add_argument(
        "--zoom",
        type=int,
        default=DEFAULT_ZOOM,
        help="Map zoom level used when centering on a position or workout",
    )
    parser.add_argument("--list", action="store_true", help="Print stored workouts")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def run_list(config: AppConfig) -> int:
    persistence = WorkoutPersistence(
        FileKeyValueStore(config.storage_dir), key=config.storage_key
    )
    store = WorkoutStore()
    store.load_from(persistence.load())

    if not len(store):
        print("No workouts recorded yet")
        return 0

    for workout in store:
        entry = build_list_entry(workout)
        details = "  ".join(f"{row.value} {row.unit}" for row in entry.details)
        lat, lng = workout.coords
        print(f"{workout.id}  {entry.title:<24} {details}  @ {lat:.5f},{lng:.5f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logger("DEBUG" if args.debug else "INFO")
    config = AppConfig.from_args(args)

    if args.list:
        return run_list(config)
    if args.ui_web:
        from mapty.ui.web_app import run_web_ui

        return run_web_ui(config)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
