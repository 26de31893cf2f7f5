#!/usr/bin/env python3
"""Batch runner for the greedy scheduler.

This script runs the scheduler on the bundled benchmark instances over a
sweep of morning weights, and writes quantitative evaluation results to CSV.
"""

from __future__ import annotations

import argparse
import csv
from pathlib import Path
from typing import Any, Dict, List, Sequence

import sys

# Make project root importable
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

from timetable_backend.config import DATASETS_DIR, configure_logging
from timetable_backend.engine import OVERFLOW_SUBJECT
from timetable_backend.loader import build_grid, read_rooms, read_subjects
from timetable_backend.models import Subject
from timetable_backend.solver import solve_subjects

EXAMPLE_DIR = DATASETS_DIR / "benchmarks"


# ---------- Helpers ----------

def load_instance(size: str):
    dataset = EXAMPLE_DIR / f"{size}.csv"
    config = EXAMPLE_DIR / f"{size}_config.csv"
    if not dataset.exists():
        raise FileNotFoundError(f"No example data found for '{size}' at {dataset}")
    subjects = read_subjects(dataset)
    rooms, lab_rooms = read_rooms(config)
    return subjects, build_grid(rooms, lab_rooms)


def total_hours(subjects: Sequence[Subject]) -> int:
    """Total number of weekly hours requested by an instance."""
    return sum(s.hours_needed for s in subjects)


# ---------- Benchmark Runner ----------

def run_benchmark(
    sizes: List[str],
    weights: List[float],
    output: Path,
) -> None:
    records: List[Dict[str, Any]] = []

    print("Running benchmark (deterministic, one run per weight).")

    for size in sizes:
        subjects, grid = load_instance(size)

        meta = {
            "instance": size,
            "n_subjects": len(subjects),
            "n_teachers": len({s.teacher for s in subjects}),
            "n_semesters": len({s.semester for s in subjects}),
            "n_rooms": len(grid.rooms),
            "n_lab_rooms": len(grid.lab_rooms),
            "capacity": grid.capacity,
            "total_hours": total_hours(subjects),
        }

        for weight in weights:
            solution = solve_subjects(subjects, grid, weight)
            stats = solution["stats"]
            conflicts = [c for c in solution["conflicts"] if c["subject"] != OVERFLOW_SUBJECT]
            morning = stats["morningDistribution"]

            record = {
                **meta,
                "morning_weight": weight,
                "status": solution["status"],
                "wall_time_s": stats["wall_time_s"],
                "assigned_hours": stats["totalSlots"],
                "unscheduled_hours": sum(c["unscheduledHours"] for c in conflicts),
                "conflicts": len(conflicts),
                "morning_slots": sum(morning.values()),
                "morning_spread": max(morning.values()) - min(morning.values()) if morning else 0,
                "evaluated_candidates": len(solution["scores"]),
            }

            records.append(record)

            print(
                f"[{size}] weight={weight}: "
                f"status={record['status']} assigned={record['assigned_hours']}/{meta['total_hours']}"
            )

    # ---------- Write CSV ----------

    fieldnames = [
        "instance",
        "morning_weight",
        "status",
        "wall_time_s",
        "n_subjects",
        "n_teachers",
        "n_semesters",
        "n_rooms",
        "n_lab_rooms",
        "capacity",
        "total_hours",
        "assigned_hours",
        "unscheduled_hours",
        "conflicts",
        "morning_slots",
        "morning_spread",
        "evaluated_candidates",
    ]

    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
        writer.writeheader()
        for record in records:
            writer.writerow(record)

    print(f"Wrote benchmark results to {output}")


# ---------- CLI ----------

def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("--sizes", nargs="+", default=["small", "medium", "large"])
    parser.add_argument(
        "--weights",
        nargs="+",
        type=float,
        default=[0.0, 2.5, 5.0, 10.0, 15.0, 20.0],
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=PROJECT_ROOT / "results.csv",
    )
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(args.log_level)
    run_benchmark(
        sizes=args.sizes,
        weights=args.weights,
        output=args.output,
    )


if __name__ == "__main__":
    main()
