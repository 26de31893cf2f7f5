import io
import json
import logging
import uuid
from datetime import timedelta
from typing import List, Literal, Optional

from fastapi import BackgroundTasks, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, Field

from .config import configure_logging, get_settings
from .exceptions import AppError, DatasetError
from .loader import build_grid, read_rooms, read_subjects
from .solver import filter_timetable, solve_subjects, solve_timetabling_problem
from .storage import COMPLETED, FAILED, ScheduleSession, storage

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title=settings.project_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )


app.add_exception_handler(AppError, app_error_handler)


# Pydantic models for input data
class Subject(BaseModel):
    name: str
    semester: str
    credits: int
    type: Literal["Theory", "Lab"]
    teacher: str
    hours_needed: int = Field(ge=0)


class Room(BaseModel):
    id: str
    lab: Optional[bool] = None


class ProblemData(BaseModel):
    subjects: List[Subject]
    rooms: List[Room] = []
    days: Optional[List[str]] = None
    times: Optional[List[str]] = None
    morning_weight: Optional[float] = None


def resolve_morning_weight(value: Optional[float]) -> float:
    if value is None:
        return settings.morning_weight
    if not settings.morning_weight_in_range(value):
        logger.warning(
            "Morning weight %s outside %s-%s; clamping",
            value,
            settings.morning_weight_min,
            settings.morning_weight_max,
        )
    return settings.clamp_morning_weight(value)


@app.post("/solve")
async def solve_timetabling(problem_data: ProblemData):
    morning_weight = resolve_morning_weight(problem_data.morning_weight)
    try:
        return solve_timetabling_problem(
            problem_data.model_dump(exclude={"morning_weight"}),
            morning_weight=morning_weight,
        )
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=f"Solver Error: {ve}")


def _is_csv(upload: UploadFile) -> bool:
    return upload.content_type == "text/csv" or (upload.filename or "").lower().endswith(".csv")


async def _read_upload(upload: UploadFile, field: str) -> bytes:
    if not _is_csv(upload):
        raise HTTPException(status_code=400, detail=f"Only CSV files are allowed ({field})")
    content = await upload.read(settings.max_upload_bytes + 1)
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=400, detail=f"{field} exceeds {settings.max_upload_bytes} bytes")
    return content


def process_uploaded_files(session_id: str, dataset: bytes, config: bytes, morning_weight: float) -> None:
    try:
        subjects = read_subjects(io.BytesIO(dataset))
        if not subjects:
            raise DatasetError("No subjects loaded from dataset")
        rooms, lab_rooms = read_rooms(io.BytesIO(config), settings)
        grid = build_grid(rooms, lab_rooms, settings)
        solution = solve_subjects(subjects, grid, morning_weight)
    except AppError as exc:
        logger.warning("Session %s failed: %s", session_id, exc.message)
        storage.update_session(session_id, status=FAILED, error_message=exc.message)
        return
    except Exception as exc:
        logger.exception("Session %s crashed", session_id)
        storage.update_session(session_id, status=FAILED, error_message=str(exc))
        return
    storage.update_session(session_id, status=COMPLETED, solution=solution)


@app.post(f"{settings.api_prefix}/schedule")
async def upload_schedule(
    background_tasks: BackgroundTasks,
    dataset: UploadFile = File(...),
    config: UploadFile = File(...),
    morningWeight: Optional[float] = Form(None),
):
    dataset_bytes = await _read_upload(dataset, "dataset")
    config_bytes = await _read_upload(config, "config")
    morning_weight = resolve_morning_weight(morningWeight)

    expired = storage.expire_sessions(timedelta(minutes=settings.session_ttl_minutes))
    if expired:
        logger.info("Expired %d finished sessions", expired)

    session_id = uuid.uuid4().hex
    storage.create_session(
        ScheduleSession(
            session_id=session_id,
            dataset_filename=dataset.filename or "dataset.csv",
            config_filename=config.filename or "config.csv",
            morning_weight=morning_weight,
        )
    )
    background_tasks.add_task(
        process_uploaded_files, session_id, dataset_bytes, config_bytes, morning_weight
    )
    return {"sessionId": session_id, "status": "processing", "morningWeight": morning_weight}


@app.get(f"{settings.api_prefix}/schedule/{{session_id}}")
async def get_schedule(
    session_id: str,
    semester: Optional[str] = None,
    teacher: Optional[str] = None,
    room: Optional[str] = None,
):
    session = storage.get_session(session_id)
    if session.status != COMPLETED or session.solution is None:
        return {"status": session.status, "errorMessage": session.error_message}

    solution = session.solution
    return {
        "status": session.status,
        "morningWeight": session.morning_weight,
        "timetable": filter_timetable(solution["timetable"], semester, teacher, room),
        "stats": solution["stats"],
        "conflicts": solution["conflicts"],
        "scores": solution["scores"],
    }


@app.get(f"{settings.api_prefix}/examples/{{example_type}}")
async def example_file(example_type: str):
    if example_type not in ("dataset", "config"):
        raise HTTPException(status_code=400, detail="Invalid example type")
    filename = f"example_{example_type}.csv"
    path = settings.datasets_dir / filename
    if not path.exists():
        raise HTTPException(status_code=404, detail="Example file not found")
    return FileResponse(path, media_type="text/csv", filename=filename)


@app.get("/")
async def read_root():
    return {"message": "Timetable Scheduler API"}


@app.get("/example")
async def example_problem():
    path = settings.datasets_dir / "example.json"
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)
