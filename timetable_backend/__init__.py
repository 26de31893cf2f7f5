"""Greedy weekly timetable scheduler with an HTTP API."""

from .engine import OVERFLOW_SUBJECT, schedule_subjects
from .grid import Grid
from .models import Assignment, Conflict, HeatmapEntry, ScheduleResult, Slot, Subject, SubjectKind

__all__ = [
    "Assignment",
    "Conflict",
    "Grid",
    "HeatmapEntry",
    "OVERFLOW_SUBJECT",
    "ScheduleResult",
    "Slot",
    "Subject",
    "SubjectKind",
    "schedule_subjects",
]
