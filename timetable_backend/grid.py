from typing import FrozenSet, Iterable, Iterator, Optional, Sequence, Tuple

from .models import Slot

DEFAULT_DAYS: Tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
DEFAULT_TIMES: Tuple[str, ...] = ("9AM", "10AM", "11AM", "12PM", "1PM", "2PM")
DEFAULT_ROOMS: Tuple[str, ...] = ("Classroom1", "Classroom2", "Classroom3", "Lab1", "Lab2")
LAB_ROOM_MARKER = "Lab"


def rooms_by_convention(rooms: Iterable[str], marker: str = LAB_ROOM_MARKER) -> FrozenSet[str]:
    """Rooms whose identifier contains ``marker`` are lab-capable."""
    return frozenset(r for r in rooms if marker in r)


class Grid:
    """Fixed (day, time, room) coordinate space.

    Days and times are addressed by index; rooms by identifier. Which rooms
    can host labs is decided once, at construction.
    """

    def __init__(
        self,
        rooms: Sequence[str],
        lab_rooms: Optional[Iterable[str]] = None,
        days: Sequence[str] = DEFAULT_DAYS,
        times: Sequence[str] = DEFAULT_TIMES,
    ) -> None:
        self.days: Tuple[str, ...] = tuple(days)
        self.times: Tuple[str, ...] = tuple(times)
        self.rooms: Tuple[str, ...] = tuple(dict.fromkeys(rooms))
        if lab_rooms is None:
            self.lab_rooms = rooms_by_convention(self.rooms)
        else:
            self.lab_rooms = frozenset(lab_rooms) & frozenset(self.rooms)

    @property
    def num_days(self) -> int:
        return len(self.days)

    @property
    def num_times(self) -> int:
        return len(self.times)

    @property
    def capacity(self) -> int:
        return len(self.days) * len(self.times) * len(self.rooms)

    def is_lab_room(self, room: str) -> bool:
        return room in self.lab_rooms

    def contains(self, slot: Slot) -> bool:
        return (
            0 <= slot.day < len(self.days)
            and 0 <= slot.time < len(self.times)
            and slot.room in self.rooms
        )

    def slots(self) -> Iterator[Slot]:
        for day in range(len(self.days)):
            for time in range(len(self.times)):
                for room in self.rooms:
                    yield Slot(day, time, room)

    def __repr__(self) -> str:
        return (
            f"Grid(days={len(self.days)}, times={len(self.times)}, "
            f"rooms={list(self.rooms)}, lab_rooms={sorted(self.lab_rooms)})"
        )
