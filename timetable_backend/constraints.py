from enum import Enum
from typing import Optional

from .grid import Grid
from .models import ScheduleState, Slot, Subject


class FailureReason(str, Enum):
    # Declaration order is the order reasons are checked in.
    ROOM_TYPE = "room_type"
    TEACHER = "teacher"
    SEMESTER = "semester"
    ROOM = "room"


def room_type_matches(subject: Subject, room: str, grid: Grid) -> bool:
    # Labs only in lab rooms, theory only outside them.
    return grid.is_lab_room(room) == subject.is_lab


def slot_failure(subject: Subject, slot: Slot, state: ScheduleState, grid: Grid) -> Optional[FailureReason]:
    """Return the first hard constraint ``slot`` breaks for ``subject``, or None.

    Checked in order: room type, teacher, semester, room. A slot that breaks
    several constraints is reported under the first one only.
    """
    if not room_type_matches(subject, slot.room, grid):
        return FailureReason.ROOM_TYPE

    teacher_busy = semester_busy = room_busy = False
    for assigned in state.at(slot.day, slot.time):
        if assigned.subject.teacher == subject.teacher:
            teacher_busy = True
        if assigned.subject.semester == subject.semester:
            semester_busy = True
        if assigned.slot.room == slot.room:
            room_busy = True

    if teacher_busy:
        return FailureReason.TEACHER
    if semester_busy:
        return FailureReason.SEMESTER
    if room_busy:
        return FailureReason.ROOM
    return None


def is_valid(subject: Subject, slot: Slot, state: ScheduleState, grid: Grid) -> bool:
    """True when placing ``subject`` at ``slot`` breaks no hard constraint."""
    if not grid.contains(slot):
        return False
    for assigned in state.at(slot.day, slot.time):
        if assigned.subject.teacher == subject.teacher:
            return False
        if assigned.subject.semester == subject.semester:
            return False
        if assigned.slot.room == slot.room:
            return False
    return room_type_matches(subject, slot.room, grid)
