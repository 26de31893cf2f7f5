import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .grid import DEFAULT_DAYS, DEFAULT_ROOMS, DEFAULT_TIMES, LAB_ROOM_MARKER
from .scoring import DEFAULT_MORNING_WEIGHT

PACKAGE_DIR = Path(__file__).resolve().parent
ENV_FILE = PACKAGE_DIR.parent / ".env"
DATASETS_DIR = PACKAGE_DIR / "datasets"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TIMETABLE_", env_file=str(ENV_FILE), env_file_encoding="utf-8"
    )

    project_name: str = "Timetable Scheduler API"
    api_prefix: str = "/api"

    days: Annotated[List[str], NoDecode] = list(DEFAULT_DAYS)
    times: Annotated[List[str], NoDecode] = list(DEFAULT_TIMES)
    default_rooms: Annotated[List[str], NoDecode] = list(DEFAULT_ROOMS)
    lab_room_marker: str = LAB_ROOM_MARKER

    morning_weight: float = DEFAULT_MORNING_WEIGHT
    morning_weight_min: float = 0.0
    morning_weight_max: float = 20.0

    max_upload_bytes: int = 5 * 1024 * 1024
    session_ttl_minutes: int = 60
    datasets_dir: Path = DATASETS_DIR
    log_level: str = "INFO"

    cors_origins: Annotated[List[str], NoDecode] = ["*"]

    @field_validator("days", "times", "default_rooms", "cors_origins", mode="before")
    @classmethod
    def split_csv_list(cls, value):
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.startswith("["):
                return json.loads(stripped)
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    def clamp_morning_weight(self, value: float) -> float:
        return max(self.morning_weight_min, min(self.morning_weight_max, value))

    def morning_weight_in_range(self, value: float) -> bool:
        return self.morning_weight_min <= value <= self.morning_weight_max


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
