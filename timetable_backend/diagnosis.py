from dataclasses import dataclass, field
from typing import Dict

from .constraints import FailureReason, slot_failure
from .grid import Grid
from .models import ScheduleState, Subject

_LABELS = {
    FailureReason.ROOM_TYPE: "wrong room type",
    FailureReason.TEACHER: "teacher busy",
    FailureReason.SEMESTER: "semester busy",
    FailureReason.ROOM: "room occupied",
}


@dataclass
class Diagnosis:
    counts: Dict[FailureReason, int] = field(default_factory=lambda: {r: 0 for r in FailureReason})
    checked: int = 0
    message: str = ""

    @property
    def dominant(self):
        """The single reason every checked slot failed on, if there is one."""
        for reason, count in self.counts.items():
            if count and count == self.checked:
                return reason
        return None


def _single_cause_message(reason: FailureReason, subject: Subject) -> str:
    if reason is FailureReason.ROOM_TYPE:
        wanted = "lab" if subject.is_lab else "non-lab"
        return f"No rooms of correct type: {subject.name} needs a {wanted} room; add one to the room config."
    if reason is FailureReason.TEACHER:
        return (
            f"Teacher {subject.teacher} unavailable in every slot; "
            f"reassign {subject.name} or reduce the teacher's load."
        )
    if reason is FailureReason.SEMESTER:
        return (
            f"Semester {subject.semester} fully occupied; "
            f"reduce its weekly hours or extend the week."
        )
    return f"All rooms occupied at the remaining free times; add rooms for {subject.name}."


def diagnose(subject: Subject, state: ScheduleState, grid: Grid) -> Diagnosis:
    """Explain why no slot is left for ``subject``.

    Every (day, time, room) of the grid is checked and counted under the first
    constraint it breaks. Does not modify ``state``.
    """
    result = Diagnosis()
    for slot in grid.slots():
        reason = slot_failure(subject, slot, state, grid)
        if reason is None:
            continue
        result.counts[reason] += 1
        result.checked += 1

    if not grid.rooms:
        result.message = f"No rooms configured; {subject.name} cannot be placed anywhere."
        return result
    if not grid.days or not grid.times:
        result.message = f"No days or times configured; {subject.name} cannot be placed anywhere."
        return result

    dominant = result.dominant
    if dominant is not None:
        result.message = _single_cause_message(dominant, subject)
        return result

    breakdown = ", ".join(
        f"{_LABELS[reason]}: {count}" for reason, count in result.counts.items() if count
    )
    result.message = f"Multiple constraints block {subject.name} ({breakdown})."
    return result
