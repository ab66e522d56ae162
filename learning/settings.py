"""Service-level configuration, read from the environment (and `.env`)."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_STORE_FILENAME = "course_knowledge_v1.json"


class KnowledgeSettings(BaseModel):
    """Tunables for ingestion and storage. Algorithm constants live with their algorithms."""
    store_path: Path = Path(DEFAULT_STORE_FILENAME)
    max_shot_accuracy_meters: float = Field(100.0, gt=0.0)
    max_shot_age_hours: float = Field(24.0, gt=0.0)
    outlier_distance_meters: float = Field(1000.0, gt=0.0)
    validate_shots: bool = True


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def load_settings(env_file: Optional[str] = None) -> KnowledgeSettings:
    """Build settings from COURSE_KNOWLEDGE_* environment variables.

    Unset variables keep their defaults; malformed values raise
    pydantic.ValidationError.
    """
    load_dotenv(env_file)

    overrides = {
        "store_path": _env("COURSE_KNOWLEDGE_PATH"),
        "max_shot_accuracy_meters": _env("COURSE_KNOWLEDGE_MAX_ACCURACY"),
        "max_shot_age_hours": _env("COURSE_KNOWLEDGE_MAX_SHOT_AGE_HOURS"),
        "outlier_distance_meters": _env("COURSE_KNOWLEDGE_OUTLIER_DISTANCE"),
        "validate_shots": _env("COURSE_KNOWLEDGE_VALIDATE_SHOTS"),
    }
    return KnowledgeSettings(**{k: v for k, v in overrides.items() if v is not None})
