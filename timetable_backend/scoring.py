from .constraints import is_valid
from .grid import Grid
from .models import ScheduleState, Slot, Subject

# First MORNING_SLOT_COUNT time indices of a day count as morning (9AM-11AM).
MORNING_SLOT_COUNT = 3
# Subtracted per morning slot already used that day.
DISTRIBUTION_PENALTY = 2.0
# Added when a lab could continue into the next hour in the same room.
LAB_BLOCK_BONUS = 3.0
DEFAULT_MORNING_WEIGHT = 5.0


def is_morning(time: int) -> bool:
    return time < MORNING_SLOT_COUNT


def score_slot(
    subject: Subject,
    slot: Slot,
    state: ScheduleState,
    grid: Grid,
    morning_weight: float = DEFAULT_MORNING_WEIGHT,
) -> float:
    """Desirability of ``slot`` for ``subject``; only relative order matters.

    Morning slots earn ``morning_weight`` minus a penalty that grows with the
    number of mornings already used that day, so mornings spread over the
    week. Labs earn a bonus when the following hour in the same room is free
    for them too.
    """
    score = 0.0
    if is_morning(slot.time):
        score += morning_weight
        score -= DISTRIBUTION_PENALTY * state.morning_usage[slot.day]

    if subject.is_lab and is_valid(subject, slot.next_time(), state, grid):
        score += LAB_BLOCK_BONUS

    return score
