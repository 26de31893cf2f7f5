from typing import Iterable, List, Optional

import pandas as pd

from .grid import Grid
from .models import HeatmapEntry, Slot

HEATMAP_COLUMNS = ["day", "time", "room", "score"]


class HeatmapRecorder:
    """Append-only log of every scored candidate of a run.

    Entries are kept across all subjects and iterations; nothing in the
    scheduler reads them back.
    """

    def __init__(self) -> None:
        self.entries: List[HeatmapEntry] = []

    def record(self, slot: Slot, score: float) -> None:
        self.entries.append(HeatmapEntry(slot.day, slot.time, slot.room, score))

    def __len__(self) -> int:
        return len(self.entries)


def heatmap_grid(entries: Iterable[HeatmapEntry], grid: Grid) -> List[List[Optional[float]]]:
    """Fold the log into a days x times matrix; the last score per cell wins."""
    cells: List[List[Optional[float]]] = [[None] * grid.num_times for _ in range(grid.num_days)]
    for entry in entries:
        if 0 <= entry.day < grid.num_days and 0 <= entry.time < grid.num_times:
            cells[entry.day][entry.time] = entry.score
    return cells


def heatmap_frame(entries: Iterable[HeatmapEntry]) -> pd.DataFrame:
    rows = [(e.day, e.time, e.room, e.score) for e in entries]
    return pd.DataFrame(rows, columns=HEATMAP_COLUMNS)


def score_matrix(frame: pd.DataFrame, grid: Grid, agg: str = "max") -> pd.DataFrame:
    """Aggregate a heatmap frame to one value per (day, time), labelled by name."""
    table = frame.pivot_table(index="day", columns="time", values="score", aggfunc=agg)
    table = table.reindex(index=range(grid.num_days), columns=range(grid.num_times))
    table.index = list(grid.days)
    table.columns = list(grid.times)
    return table
