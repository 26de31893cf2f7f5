import argparse
import json
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

# ============================================================
# Paths
# ============================================================
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

from timetable_backend.grid import Grid
from timetable_backend.heatmap import HEATMAP_COLUMNS, score_matrix

RESULTS_CSV = PROJECT_ROOT / "results.csv"
SIZES = ["small", "medium", "large"]


def plot_benchmark(results_csv: Path) -> None:
    print(f"Loading results from: {results_csv}")
    df = pd.read_csv(results_csv)
    df.columns = df.columns.str.strip()
    sizes = [s for s in SIZES if s in set(df["instance"])]

    # ============================================================
    # PLOT 1: Share of hours placed across morning weights
    # ============================================================
    df["placed_ratio"] = df["assigned_hours"] / df["total_hours"]
    plt.figure(figsize=(7, 4))
    for inst in sizes:
        subset = df[df["instance"] == inst]
        plt.plot(subset["morning_weight"], subset["placed_ratio"], marker="o", label=inst)
    plt.xlabel("Morning weight")
    plt.ylabel("Hours placed / hours requested")
    plt.title("Placement rate across morning weights")
    plt.legend()
    plt.grid(True)
    plt.tight_layout()

    # ============================================================
    # PLOT 2: Morning usage and spread
    # ============================================================
    plt.figure(figsize=(7, 4))
    for inst in sizes:
        subset = df[df["instance"] == inst]
        plt.plot(subset["morning_weight"], subset["morning_slots"], marker="o", label=f"{inst} used")
        plt.plot(
            subset["morning_weight"],
            subset["morning_spread"],
            linestyle="--",
            marker="x",
            label=f"{inst} spread",
        )
    plt.xlabel("Morning weight")
    plt.ylabel("Morning slots")
    plt.title("Morning slot usage and day-to-day spread")
    plt.legend()
    plt.grid(True)
    plt.tight_layout()

    # ============================================================
    # PLOT 3: Runtime by instance size
    # ============================================================
    plt.figure(figsize=(6, 4))
    grouped = df.groupby("instance")["wall_time_s"].agg(["mean", "std"]).reindex(sizes)
    plt.bar(grouped.index, grouped["mean"], yerr=grouped["std"].fillna(0), capsize=6)
    plt.ylabel("Mean wall time (s)")
    plt.title("Runtime by instance size")
    plt.grid(axis="y")
    plt.tight_layout()


def plot_heatmap(solution_json: Path) -> None:
    """Draw the best score seen per (day, time) from a solution file."""
    with solution_json.open("r", encoding="utf-8") as f:
        solution = json.load(f)
    grid = Grid([], days=solution["days"], times=solution["times"])
    frame = pd.DataFrame(solution["scores"], columns=HEATMAP_COLUMNS)
    table = score_matrix(frame, grid)

    plt.figure(figsize=(7, 4))
    plt.imshow(table.to_numpy(dtype=float), cmap="Blues", aspect="auto")
    plt.colorbar(label="Score")
    plt.xticks(range(len(table.columns)), table.columns)
    plt.yticks(range(len(table.index)), table.index)
    for (row, col), value in pd.DataFrame(table.to_numpy()).stack().items():
        plt.text(col, row, f"{value:.1f}", ha="center", va="center", fontsize=8)
    plt.title(f"Score heatmap ({solution.get('morning_weight')} morning weight)")
    plt.tight_layout()


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--results", type=Path, default=RESULTS_CSV)
    parser.add_argument("--solution", type=Path, default=None, help="timetable JSON for a heatmap")
    args = parser.parse_args()

    if args.results.exists():
        plot_benchmark(args.results)
    if args.solution is not None:
        plot_heatmap(args.solution)

    # ============================================================
    # SHOW ALL FIGURES AT ONCE
    # ============================================================
    plt.show()


if __name__ == "__main__":
    main()
