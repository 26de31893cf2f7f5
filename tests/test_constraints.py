import pytest

from timetable_backend.constraints import FailureReason, is_valid, slot_failure
from timetable_backend.models import Assignment, ScheduleState, Slot, SubjectKind


@pytest.fixture
def state(make_subject, grid):
    taken = make_subject(name="Math", teacher="T1", semester="S1")
    st = ScheduleState(num_days=grid.num_days)
    st.add(Assignment(taken, Slot(0, 0, "R1")))
    return st


def test_teacher_clash(make_subject, state, grid):
    other = make_subject(name="Physics", teacher="T1", semester="S2")
    assert not is_valid(other, Slot(0, 0, "R2"), state, grid)
    assert slot_failure(other, Slot(0, 0, "R2"), state, grid) is FailureReason.TEACHER


def test_semester_clash(make_subject, state, grid):
    other = make_subject(name="Physics", teacher="T2", semester="S1")
    assert not is_valid(other, Slot(0, 0, "R2"), state, grid)
    assert slot_failure(other, Slot(0, 0, "R2"), state, grid) is FailureReason.SEMESTER


def test_room_clash(make_subject, state, grid):
    other = make_subject(name="Physics", teacher="T2", semester="S2")
    assert not is_valid(other, Slot(0, 0, "R1"), state, grid)
    assert slot_failure(other, Slot(0, 0, "R1"), state, grid) is FailureReason.ROOM


def test_free_slots_are_valid(make_subject, state, grid):
    other = make_subject(name="Physics", teacher="T2", semester="S2")
    assert is_valid(other, Slot(0, 0, "R2"), state, grid)
    assert is_valid(other, Slot(0, 1, "R1"), state, grid)
    assert slot_failure(other, Slot(0, 1, "R1"), state, grid) is None


def test_room_type_compatibility(make_subject, state, grid):
    theory = make_subject(name="Physics", teacher="T2", semester="S2")
    lab = make_subject(name="Physics Lab", teacher="T2", semester="S2", kind=SubjectKind.LAB)
    assert not is_valid(theory, Slot(1, 0, "Lab1"), state, grid)
    assert not is_valid(lab, Slot(1, 0, "R1"), state, grid)
    assert is_valid(lab, Slot(1, 0, "Lab1"), state, grid)


def test_failure_priority(make_subject, state, grid):
    same = make_subject(name="Stats", teacher="T1", semester="S1")
    # Teacher, semester and room all clash; teacher is reported.
    assert slot_failure(same, Slot(0, 0, "R1"), state, grid) is FailureReason.TEACHER
    # Wrong room type wins over everything else.
    assert slot_failure(same, Slot(0, 0, "Lab1"), state, grid) is FailureReason.ROOM_TYPE


def test_slots_outside_grid_are_invalid(make_subject, state, grid):
    other = make_subject(name="Physics", teacher="T2", semester="S2")
    assert not is_valid(other, Slot(0, grid.num_times, "R1"), state, grid)
    assert not is_valid(other, Slot(0, 0, "Gym"), state, grid)


def test_validation_does_not_mutate_state(make_subject, state, grid):
    before = list(state.assignments)
    is_valid(make_subject(teacher="T9"), Slot(2, 2, "R2"), state, grid)
    slot_failure(make_subject(teacher="T9"), Slot(2, 2, "R2"), state, grid)
    assert state.assignments == before
