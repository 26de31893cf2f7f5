import pytest

from timetable_backend.models import Assignment, ScheduleState, Slot, SubjectKind
from timetable_backend.scoring import (
    DISTRIBUTION_PENALTY,
    LAB_BLOCK_BONUS,
    MORNING_SLOT_COUNT,
    is_morning,
    score_slot,
)


@pytest.fixture
def state(grid):
    return ScheduleState(num_days=grid.num_days)


def test_morning_slots():
    assert MORNING_SLOT_COUNT == 3
    assert [is_morning(t) for t in range(6)] == [True, True, True, False, False, False]


def test_morning_bonus(make_subject, state, grid):
    theory = make_subject()
    assert score_slot(theory, Slot(0, 0, "R1"), state, grid, morning_weight=5.0) == 5.0
    assert score_slot(theory, Slot(0, 3, "R1"), state, grid, morning_weight=5.0) == 0.0
    assert score_slot(theory, Slot(0, 0, "R1"), state, grid, morning_weight=12.5) == 12.5


def test_distribution_penalty_per_day(make_subject, state, grid):
    state.morning_usage[0] = 2
    theory = make_subject()
    assert score_slot(theory, Slot(0, 1, "R1"), state, grid, 5.0) == 5.0 - 2 * DISTRIBUTION_PENALTY
    assert score_slot(theory, Slot(1, 1, "R1"), state, grid, 5.0) == 5.0
    # Afternoons are never penalised.
    assert score_slot(theory, Slot(0, 4, "R1"), state, grid, 5.0) == 0.0


def test_score_can_go_negative(make_subject, state, grid):
    state.morning_usage[2] = 3
    assert score_slot(make_subject(), Slot(2, 0, "R1"), state, grid, 0.0) == -3 * DISTRIBUTION_PENALTY


def test_lab_block_bonus(make_subject, state, grid):
    lab = make_subject(kind=SubjectKind.LAB)
    assert score_slot(lab, Slot(0, 0, "Lab1"), state, grid, 5.0) == 5.0 + LAB_BLOCK_BONUS
    assert score_slot(lab, Slot(0, 3, "Lab1"), state, grid, 5.0) == LAB_BLOCK_BONUS
    # Last hour of the day has no following slot.
    assert score_slot(lab, Slot(0, 5, "Lab1"), state, grid, 5.0) == 0.0


def test_lab_bonus_needs_next_hour_free(make_subject, state, grid):
    busy = make_subject(name="Other", teacher="T1", semester="Sem9")
    state.add(Assignment(busy, Slot(0, 4, "R1")))
    lab = make_subject(kind=SubjectKind.LAB, teacher="T1")
    assert score_slot(lab, Slot(0, 3, "Lab1"), state, grid, 5.0) == 0.0


def test_theory_never_gets_lab_bonus(make_subject, state, grid):
    assert score_slot(make_subject(), Slot(0, 3, "R1"), state, grid, 5.0) == 0.0
