#!/usr/bin/env python3
"""Command-line runner for the greedy scheduler.

Reads a subject dataset and a room config (both CSV), schedules them and
writes the solution as JSON.

    python scripts/run_scheduler.py timetable_backend/datasets/example_dataset.csv timetable_backend/datasets/example_config.csv 10
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Make project root importable
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

from timetable_backend.config import configure_logging, get_settings
from timetable_backend.exceptions import AppError
from timetable_backend.loader import build_grid, read_rooms, read_subjects
from timetable_backend.solver import solve_subjects


def parse_morning_weight(raw: Optional[str], default: float) -> float:
    settings = get_settings()
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        print(f"Warning: Invalid morning weight '{raw}'. Using default: {default}", file=sys.stderr)
        return default
    if not settings.morning_weight_in_range(value):
        print(
            f"Warning: Morning weight should be between "
            f"{settings.morning_weight_min:g}-{settings.morning_weight_max:g}. Using: {value}",
            file=sys.stderr,
        )
    return value


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a weekly timetable from CSV input.")
    parser.add_argument("dataset", type=Path, help="subjects CSV")
    parser.add_argument("config", type=Path, help="room config CSV")
    parser.add_argument(
        "morning_weight",
        nargs="?",
        default=None,
        help="preference for morning slots (0-20, default: 5.0)",
    )
    parser.add_argument("--output", type=Path, default=Path("timetable.json"))
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    morning_weight = parse_morning_weight(args.morning_weight, settings.morning_weight)
    print(f"Using morning preference weight: {morning_weight}", file=sys.stderr)

    try:
        subjects = read_subjects(args.dataset)
    except AppError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    if not subjects:
        print(f"No subjects loaded from '{args.dataset}'. Exiting.", file=sys.stderr)
        return 1

    rooms, lab_rooms = read_rooms(args.config, settings)
    grid = build_grid(rooms, lab_rooms, settings)
    solution = solve_subjects(subjects, grid, morning_weight)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", encoding="utf-8") as f:
        json.dump(solution, f, indent=2)

    for conflict in solution["conflicts"]:
        print(
            f"Conflict: {conflict['subject']} - {conflict['unscheduledHours']} hour(s) unscheduled. "
            f"{conflict['suggestion']}",
            file=sys.stderr,
        )
    print(f"Timetable generated and saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
