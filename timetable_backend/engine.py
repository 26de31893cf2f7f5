import logging
from typing import Iterable, List, Optional

from .constraints import is_valid
from .diagnosis import diagnose
from .grid import Grid
from .heatmap import HeatmapRecorder
from .models import Assignment, Candidate, Conflict, ScheduleResult, ScheduleState, Slot, Subject
from .ordering import order_subjects
from .scoring import DEFAULT_MORNING_WEIGHT, is_morning, score_slot

logger = logging.getLogger(__name__)

# Subject name of the advisory conflict raised when demand exceeds the grid.
OVERFLOW_SUBJECT = "__capacity__"


def capacity_conflict(subjects: List[Subject], grid: Grid) -> Optional[Conflict]:
    demand = sum(s.hours_needed for s in subjects)
    if demand <= grid.capacity:
        return None
    excess = demand - grid.capacity
    return Conflict(
        subject=OVERFLOW_SUBJECT,
        unscheduled_hours=excess,
        suggestion=(
            f"Total demand of {demand} hours exceeds the {grid.capacity} available slots "
            f"({grid.num_days} days x {grid.num_times} times x {len(grid.rooms)} rooms); "
            f"at least {excess} hours cannot be scheduled."
        ),
    )


def _commit(subject: Subject, slot: Slot, state: ScheduleState) -> None:
    state.add(Assignment(subject, slot))
    if is_morning(slot.time):
        state.morning_usage[slot.day] += 1


def _candidates(
    subject: Subject,
    state: ScheduleState,
    grid: Grid,
    morning_weight: float,
    recorder: HeatmapRecorder,
) -> List[Candidate]:
    candidates: List[Candidate] = []
    for slot in grid.slots():
        if not is_valid(subject, slot, state, grid):
            continue
        score = score_slot(subject, slot, state, grid, morning_weight)
        recorder.record(slot, score)
        candidates.append(Candidate(slot, score))
    return candidates


def schedule_subject(
    subject: Subject,
    state: ScheduleState,
    grid: Grid,
    morning_weight: float,
    recorder: HeatmapRecorder,
) -> Optional[Conflict]:
    """Place one subject greedily; return a Conflict if hours are left over."""
    hours_assigned = 0
    while hours_assigned < subject.hours_needed:
        candidates = _candidates(subject, state, grid, morning_weight, recorder)
        if not candidates:
            remaining = subject.hours_needed - hours_assigned
            diagnosis = diagnose(subject, state, grid)
            logger.warning(
                "No valid slots left for %s (%s): assigned %d/%d. %s",
                subject.name,
                subject.semester,
                hours_assigned,
                subject.hours_needed,
                diagnosis.message,
            )
            return Conflict(subject.name, remaining, diagnosis.message)

        best = min(candidates, key=Candidate.sort_key).slot
        _commit(subject, best, state)
        hours_assigned += 1

        # Try to extend a lab into a two-hour block in the same room.
        if subject.is_lab and hours_assigned < subject.hours_needed:
            follow = best.next_time()
            if is_valid(subject, follow, state, grid):
                _commit(subject, follow, state)
                hours_assigned += 1
    return None


def schedule_subjects(
    subjects: Iterable[Subject],
    grid: Grid,
    morning_weight: float = DEFAULT_MORNING_WEIGHT,
    recorder: Optional[HeatmapRecorder] = None,
) -> ScheduleResult:
    """Greedily build a timetable for ``subjects`` on ``grid``.

    Subjects are placed one at a time in commit order and every placement is
    final. Subjects that run out of valid slots produce a Conflict instead of
    an error, and scheduling carries on with the next subject.
    """
    ordered = order_subjects(subjects)
    recorder = recorder if recorder is not None else HeatmapRecorder()
    state = ScheduleState(num_days=grid.num_days)
    conflicts: List[Conflict] = []

    overflow = capacity_conflict(ordered, grid)
    if overflow is not None:
        logger.warning(overflow.suggestion)
        conflicts.append(overflow)

    for subject in ordered:
        conflict = schedule_subject(subject, state, grid, morning_weight, recorder)
        if conflict is not None:
            conflicts.append(conflict)

    logger.info(
        "Morning slot distribution: %s",
        " ".join(f"{day}:{count}" for day, count in zip(grid.days, state.morning_usage)),
    )
    return ScheduleResult(
        assignments=list(state.assignments),
        heatmap=recorder.entries,
        conflicts=conflicts,
        morning_usage=list(state.morning_usage),
    )
