import time
from typing import Dict, List, Optional, Sequence, TypedDict

from .config import get_settings
from .engine import schedule_subjects
from .grid import Grid, rooms_by_convention
from .heatmap import HeatmapRecorder
from .models import Assignment, Conflict, HeatmapEntry, ScheduleResult, Subject, SubjectKind


class SubjectDict(TypedDict):
    name: str
    semester: str
    credits: int
    type: str  # "Theory" or "Lab"
    teacher: str
    hours_needed: int


class _RoomDictBase(TypedDict):
    id: str


class RoomDict(_RoomDictBase, total=False):
    # Missing means "decide by name": rooms containing "Lab" host labs.
    lab: Optional[bool]


class ProblemDataDict(TypedDict, total=False):
    subjects: List[SubjectDict]
    rooms: List[RoomDict]
    days: List[str]
    times: List[str]


class SlotDict(TypedDict):
    day: str
    time: str
    room: str
    subject: str
    teacher: str
    semester: str


class ConflictDict(TypedDict):
    subject: str
    unscheduledHours: int
    suggestion: str


class ScoreDict(TypedDict):
    day: int
    time: int
    room: str
    score: float


class SolutionDict(TypedDict, total=False):
    status: str  # "COMPLETE" or "PARTIAL"
    morning_weight: float
    days: List[str]
    times: List[str]
    timetable: List[SlotDict]
    # semester -> day -> one cell per time, e.g. "Math:T1@Classroom1" or "-"
    semester_timetables: Dict[str, Dict[str, List[str]]]
    # teacher -> day -> one cell per time, e.g. "Sem1-Math@Classroom1" or "-"
    teacher_timetables: Dict[str, Dict[str, List[str]]]
    conflicts: List[ConflictDict]
    scores: List[ScoreDict]
    stats: Dict[str, object]


def subject_from_dict(data: SubjectDict) -> Subject:
    kind = SubjectKind.LAB if str(data["type"]).strip().lower() == "lab" else SubjectKind.THEORY
    return Subject(
        name=data["name"],
        semester=data["semester"],
        credits=int(data["credits"]),
        kind=kind,
        teacher=data["teacher"],
        hours_needed=int(data["hours_needed"]),
    )


def grid_from_rooms(rooms: Sequence[RoomDict], days: Sequence[str], times: Sequence[str]) -> Grid:
    settings = get_settings()
    room_ids = [r["id"] for r in rooms]
    by_name = rooms_by_convention(room_ids, settings.lab_room_marker)
    lab_rooms = set()
    for room in rooms:
        flag = room.get("lab")
        if flag is None:
            flag = room["id"] in by_name
        if flag:
            lab_rooms.add(room["id"])
    return Grid(room_ids, lab_rooms, days=days, times=times)


def timetable_rows(assignments: Sequence[Assignment], grid: Grid) -> List[SlotDict]:
    return [
        {
            "day": grid.days[a.slot.day],
            "time": grid.times[a.slot.time],
            "room": a.slot.room,
            "subject": a.subject.name,
            "teacher": a.subject.teacher,
            "semester": a.subject.semester,
        }
        for a in assignments
    ]


def filter_timetable(
    timetable: Sequence[SlotDict],
    semester: Optional[str] = None,
    teacher: Optional[str] = None,
    room: Optional[str] = None,
) -> List[SlotDict]:
    return [
        row
        for row in timetable
        if (semester is None or row["semester"] == semester)
        and (teacher is None or row["teacher"] == teacher)
        and (room is None or row["room"] == room)
    ]


def _empty_week(grid: Grid) -> Dict[str, List[str]]:
    return {day: ["-"] * grid.num_times for day in grid.days}


def build_views(assignments: Sequence[Assignment], grid: Grid):
    semester_tt: Dict[str, Dict[str, List[str]]] = {}
    teacher_tt: Dict[str, Dict[str, List[str]]] = {}
    for a in assignments:
        day = grid.days[a.slot.day]
        sub = a.subject
        semester_tt.setdefault(sub.semester, _empty_week(grid))[day][a.slot.time] = (
            f"{sub.name}:{sub.teacher}@{a.slot.room}"
        )
        teacher_tt.setdefault(sub.teacher, _empty_week(grid))[day][a.slot.time] = (
            f"{sub.semester}-{sub.name}@{a.slot.room}"
        )
    return semester_tt, teacher_tt


def conflict_dicts(conflicts: Sequence[Conflict]) -> List[ConflictDict]:
    return [
        {"subject": c.subject, "unscheduledHours": c.unscheduled_hours, "suggestion": c.suggestion}
        for c in conflicts
    ]


def score_dicts(entries: Sequence[HeatmapEntry]) -> List[ScoreDict]:
    return [{"day": e.day, "time": e.time, "room": e.room, "score": e.score} for e in entries]


def calculate_stats(result: ScheduleResult, grid: Grid) -> Dict[str, object]:
    assignments = result.assignments
    return {
        "totalSubjects": len({(a.subject.semester, a.subject.name) for a in assignments}),
        "totalTeachers": len({a.subject.teacher for a in assignments}),
        "roomsUtilized": len({a.slot.room for a in assignments}),
        "totalSlots": len(assignments),
        "morningDistribution": dict(zip(grid.days, result.morning_usage)),
    }


def build_solution(result: ScheduleResult, grid: Grid, morning_weight: float) -> SolutionDict:
    semester_tt, teacher_tt = build_views(result.assignments, grid)
    return {
        "status": "PARTIAL" if result.conflicts else "COMPLETE",
        "morning_weight": morning_weight,
        "days": list(grid.days),
        "times": list(grid.times),
        "timetable": timetable_rows(result.assignments, grid),
        "semester_timetables": semester_tt,
        "teacher_timetables": teacher_tt,
        "conflicts": conflict_dicts(result.conflicts),
        "scores": score_dicts(result.heatmap),
        "stats": calculate_stats(result, grid),
    }


def solve_subjects(subjects: Sequence[Subject], grid: Grid, morning_weight: float) -> SolutionDict:
    started = time.perf_counter()
    result = schedule_subjects(subjects, grid, morning_weight, HeatmapRecorder())
    solution = build_solution(result, grid, morning_weight)
    solution["stats"]["wall_time_s"] = time.perf_counter() - started
    return solution


def solve_timetabling_problem(
    problem_data: ProblemDataDict,
    *,
    morning_weight: Optional[float] = None,
) -> SolutionDict:
    """Schedule a JSON-shaped problem and return the serialisable solution.

    ``rooms`` falls back to the configured default rooms when empty or
    missing; ``days`` and ``times`` fall back to the configured week.
    """
    settings = get_settings()
    if morning_weight is None:
        morning_weight = settings.morning_weight

    days = problem_data.get("days") or settings.days
    times = problem_data.get("times") or settings.times
    rooms: List[RoomDict] = list(problem_data.get("rooms") or [])
    if not rooms:
        rooms = [{"id": r} for r in settings.default_rooms]

    subjects = [subject_from_dict(s) for s in problem_data.get("subjects", [])]
    grid = grid_from_rooms(rooms, days, times)
    return solve_subjects(subjects, grid, morning_weight)
