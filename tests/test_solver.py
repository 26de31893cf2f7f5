import json

from timetable_backend.config import DATASETS_DIR
from timetable_backend.engine import OVERFLOW_SUBJECT
from timetable_backend.solver import filter_timetable, solve_timetabling_problem


def math_problem(**overrides):
    problem = {
        "subjects": [
            {"name": "Math", "semester": "Sem1", "credits": 4, "type": "Theory", "teacher": "T1", "hours_needed": 2}
        ],
        "rooms": [{"id": "Classroom1"}],
    }
    problem.update(overrides)
    return problem


def test_solution_shape():
    solution = solve_timetabling_problem(math_problem(), morning_weight=5.0)

    assert solution["status"] == "COMPLETE"
    assert solution["morning_weight"] == 5.0
    assert solution["timetable"] == [
        {"day": "Monday", "time": "9AM", "room": "Classroom1", "subject": "Math", "teacher": "T1", "semester": "Sem1"},
        {"day": "Tuesday", "time": "9AM", "room": "Classroom1", "subject": "Math", "teacher": "T1", "semester": "Sem1"},
    ]
    assert solution["semester_timetables"]["Sem1"]["Monday"] == ["Math:T1@Classroom1", "-", "-", "-", "-", "-"]
    assert solution["teacher_timetables"]["T1"]["Tuesday"][0] == "Sem1-Math@Classroom1"
    assert solution["teacher_timetables"]["T1"]["Friday"] == ["-"] * 6
    assert solution["conflicts"] == []
    assert solution["scores"][0] == {"day": 0, "time": 0, "room": "Classroom1", "score": 5.0}

    stats = solution["stats"]
    assert stats["totalSubjects"] == 1
    assert stats["totalTeachers"] == 1
    assert stats["roomsUtilized"] == 1
    assert stats["totalSlots"] == 2
    assert stats["morningDistribution"] == {"Monday": 1, "Tuesday": 1, "Wednesday": 0, "Thursday": 0, "Friday": 0}
    assert stats["wall_time_s"] >= 0


def test_solution_is_json_serialisable():
    solution = solve_timetabling_problem(math_problem())
    assert json.loads(json.dumps(solution))["status"] == "COMPLETE"


def test_explicit_lab_flag_overrides_room_name():
    problem = math_problem(
        subjects=[{"name": "Wood", "semester": "Sem1", "credits": 2, "type": "Lab", "teacher": "T1", "hours_needed": 4}],
        rooms=[{"id": "Workshop", "lab": True}, {"id": "Lab9", "lab": False}],
    )
    solution = solve_timetabling_problem(problem)
    assert {row["room"] for row in solution["timetable"]} == {"Workshop"}
    assert len(solution["timetable"]) == 4


def test_missing_rooms_use_defaults():
    solution = solve_timetabling_problem(math_problem(rooms=[]))
    assert solution["timetable"][0]["room"] == "Classroom1"


def test_custom_week():
    solution = solve_timetabling_problem(math_problem(days=["Sat"], times=["8AM", "9AM"]))
    assert solution["days"] == ["Sat"]
    assert [row["time"] for row in solution["timetable"]] == ["8AM", "9AM"]


def test_partial_solution_reports_conflicts():
    problem = math_problem(
        subjects=[
            {"name": "Math", "semester": "Sem1", "credits": 4, "type": "Theory", "teacher": "T1", "hours_needed": 31}
        ]
    )
    solution = solve_timetabling_problem(problem)
    assert solution["status"] == "PARTIAL"
    overflow, shortfall = solution["conflicts"]
    assert overflow["subject"] == OVERFLOW_SUBJECT
    assert overflow["unscheduledHours"] == 1
    assert shortfall["subject"] == "Math"
    assert shortfall["unscheduledHours"] == 1
    assert shortfall["suggestion"]


def test_example_problem_solves():
    with (DATASETS_DIR / "example.json").open(encoding="utf-8") as f:
        problem = json.load(f)
    solution = solve_timetabling_problem(problem, morning_weight=problem["morning_weight"])
    labs = {row["room"] for row in solution["timetable"] if row["subject"].endswith("Lab")}
    assert labs <= {"Lab1", "Workshop"}
    assert solution["status"] == "COMPLETE"


def test_filter_timetable():
    rows = [
        {"day": "Monday", "time": "9AM", "room": "R1", "subject": "A", "teacher": "T1", "semester": "S1"},
        {"day": "Monday", "time": "9AM", "room": "R2", "subject": "B", "teacher": "T2", "semester": "S2"},
        {"day": "Monday", "time": "10AM", "room": "R1", "subject": "C", "teacher": "T2", "semester": "S1"},
    ]
    assert [r["subject"] for r in filter_timetable(rows, semester="S1")] == ["A", "C"]
    assert [r["subject"] for r in filter_timetable(rows, teacher="T2", room="R1")] == ["C"]
    assert filter_timetable(rows) == rows
