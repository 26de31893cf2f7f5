import pytest
from fastapi.testclient import TestClient

from timetable_backend.grid import Grid
from timetable_backend.main import app
from timetable_backend.models import Subject, SubjectKind
from timetable_backend.storage import storage


@pytest.fixture()
def client():
    storage.clear()
    with TestClient(app) as test_client:
        yield test_client
    storage.clear()


@pytest.fixture
def make_subject():
    def _make(name="Math", semester="Sem1", credits=3, kind=SubjectKind.THEORY, teacher="T1", hours=3):
        return Subject(
            name=name,
            semester=semester,
            credits=credits,
            kind=kind,
            teacher=teacher,
            hours_needed=hours,
        )

    return _make


@pytest.fixture
def grid():
    return Grid(["R1", "R2", "Lab1"])
