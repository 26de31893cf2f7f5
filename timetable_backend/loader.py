"""CSV loaders for subject datasets and room configs.

Dataset columns: ``name,semester,credits,type,teacher,hours_needed``.
Config columns: ``resource_type,value`` with an optional ``lab`` column;
only ``room`` rows are read.
"""
import logging
from typing import IO, List, Optional, Set, Tuple, Union

import pandas as pd

from .config import Settings, get_settings
from .exceptions import DatasetError
from .grid import Grid, rooms_by_convention
from .models import Subject, SubjectKind

logger = logging.getLogger(__name__)

PathOrBuffer = Union[str, "IO[str]", "IO[bytes]"]

SUBJECT_COLUMNS = ["name", "semester", "credits", "type", "teacher", "hours_needed"]
_TRUE = {"true", "1", "yes", "y", "lab"}
_FALSE = {"false", "0", "no", "n"}


def _read_csv(source: PathOrBuffer) -> pd.DataFrame:
    frame = pd.read_csv(source, dtype=str, keep_default_na=False, skipinitialspace=True)
    frame.columns = frame.columns.str.strip().str.lower()
    return frame


def parse_kind(value: str) -> SubjectKind:
    lowered = value.strip().lower()
    for kind in SubjectKind:
        if kind.value.lower() == lowered:
            return kind
    raise ValueError(f"unknown subject type {value!r}")


def _cell(row: dict, column: str) -> str:
    value = row.get(column)
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def parse_subject(row: dict) -> Subject:
    values = {col: _cell(row, col) for col in SUBJECT_COLUMNS}
    for col in ("name", "semester", "teacher"):
        if not values[col]:
            raise ValueError(f"missing {col}")
    credits = int(values["credits"])
    hours = int(values["hours_needed"])
    if hours < 0:
        raise ValueError(f"negative hours_needed {hours}")
    return Subject(
        name=values["name"],
        semester=values["semester"],
        credits=credits,
        kind=parse_kind(values["type"]),
        teacher=values["teacher"],
        hours_needed=hours,
    )


def read_subjects(source: PathOrBuffer) -> List[Subject]:
    """Load subjects, skipping rows that cannot be parsed.

    Raises DatasetError if the file itself cannot be read or lacks required
    columns.
    """
    try:
        frame = _read_csv(source)
    except (OSError, ValueError, pd.errors.ParserError) as exc:
        raise DatasetError(f"Could not read dataset: {exc}") from exc

    missing = [c for c in SUBJECT_COLUMNS if c not in frame.columns]
    if missing:
        raise DatasetError("Dataset is missing columns", details={"missing": missing})

    subjects: List[Subject] = []
    for index, row in frame.iterrows():
        try:
            subjects.append(parse_subject(row.to_dict()))
        except ValueError as exc:
            # header is line 1
            logger.warning("Skipping dataset line %d: %s", index + 2, exc)
    if not subjects:
        logger.warning("No subjects loaded from dataset")
    return subjects


def _parse_flag(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if not lowered:
        return None
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"invalid lab flag {value!r}")


def read_rooms(
    source: Optional[PathOrBuffer], settings: Optional[Settings] = None
) -> Tuple[List[str], Set[str]]:
    """Return (rooms, lab rooms) from a room config.

    Rooms without an explicit ``lab`` flag are classified by name. An
    unreadable or empty config falls back to the default room set.
    """
    settings = settings or get_settings()
    defaults = list(settings.default_rooms)
    default_labs = set(rooms_by_convention(defaults, settings.lab_room_marker))

    if source is None:
        logger.warning("No room config supplied; using default rooms")
        return defaults, default_labs
    try:
        frame = _read_csv(source)
    except (OSError, ValueError, pd.errors.ParserError) as exc:
        logger.warning("Could not open room config (%s); using default rooms", exc)
        return defaults, default_labs

    if "resource_type" not in frame.columns or "value" not in frame.columns:
        logger.warning("Room config lacks resource_type/value columns; using default rooms")
        return defaults, default_labs

    rooms: List[str] = []
    lab_rooms: Set[str] = set()
    has_flag = "lab" in frame.columns
    for index, series in frame.iterrows():
        row = series.to_dict()
        if _cell(row, "resource_type").lower() != "room":
            continue
        room = _cell(row, "value")
        if not room:
            logger.warning("Skipping config line %d: empty room name", index + 2)
            continue
        try:
            flag = _parse_flag(_cell(row, "lab")) if has_flag else None
        except ValueError as exc:
            logger.warning("Skipping config line %d: %s", index + 2, exc)
            continue
        if room in rooms:
            continue
        rooms.append(room)
        if flag is None:
            flag = settings.lab_room_marker in room
        if flag:
            lab_rooms.add(room)

    if not rooms:
        logger.warning("No rooms found in room config; using default rooms")
        return defaults, default_labs
    return rooms, lab_rooms


def build_grid(rooms: List[str], lab_rooms: Set[str], settings: Optional[Settings] = None) -> Grid:
    settings = settings or get_settings()
    return Grid(rooms, lab_rooms, days=settings.days, times=settings.times)
