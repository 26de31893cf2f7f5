from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple


class SubjectKind(str, Enum):
    THEORY = "Theory"
    LAB = "Lab"


@dataclass(frozen=True)
class Subject:
    name: str
    semester: str
    credits: int
    kind: SubjectKind
    teacher: str
    hours_needed: int

    @property
    def is_lab(self) -> bool:
        return self.kind is SubjectKind.LAB


@dataclass(frozen=True)
class Slot:
    day: int
    time: int
    room: str

    def next_time(self) -> "Slot":
        return Slot(self.day, self.time + 1, self.room)


@dataclass(frozen=True)
class Assignment:
    subject: Subject
    slot: Slot


@dataclass(frozen=True)
class Candidate:
    slot: Slot
    score: float

    def sort_key(self):
        # Highest score first, then earliest day, time, room.
        return (-self.score, self.slot.day, self.slot.time, self.slot.room)


@dataclass(frozen=True)
class Conflict:
    subject: str
    unscheduled_hours: int
    suggestion: str


@dataclass(frozen=True)
class HeatmapEntry:
    day: int
    time: int
    room: str
    score: float


@dataclass
class ScheduleState:
    """Mutable state of one scheduling run.

    Holds the growing assignment list and how many morning slots have been
    used on each day. Only the assignment engine mutates it.
    """

    num_days: int
    assignments: List[Assignment] = field(default_factory=list)
    morning_usage: List[int] = field(default_factory=list)
    _by_time: Dict[Tuple[int, int], List[Assignment]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.morning_usage:
            self.morning_usage = [0] * self.num_days
        for assignment in self.assignments:
            self._by_time.setdefault((assignment.slot.day, assignment.slot.time), []).append(assignment)

    def add(self, assignment: Assignment) -> None:
        self.assignments.append(assignment)
        self._by_time.setdefault((assignment.slot.day, assignment.slot.time), []).append(assignment)

    def at(self, day: int, time: int) -> List[Assignment]:
        return self._by_time.get((day, time), [])


@dataclass
class ScheduleResult:
    assignments: List[Assignment]
    heatmap: List[HeatmapEntry]
    conflicts: List[Conflict]
    morning_usage: List[int]
