from .classifier import ShotClassification, ShotType, classify_shot
from .clock import Clock, FixedClock, SystemClock
from .confidence import (
    accuracy_factor,
    boundary_confidence,
    pin_confidence,
    recency_factor,
    tee_box_confidence,
    tee_sample_factor,
)
from .geo import convex_hull, distance_meters, polygon_area_square_yards
from .settings import KnowledgeSettings, load_settings

# merge and quality depend on `models`; import them directly.

__all__ = [
    "ShotClassification",
    "ShotType",
    "classify_shot",
    "Clock",
    "FixedClock",
    "SystemClock",
    "accuracy_factor",
    "boundary_confidence",
    "pin_confidence",
    "recency_factor",
    "tee_box_confidence",
    "tee_sample_factor",
    "convex_hull",
    "distance_meters",
    "polygon_area_square_yards",
    "KnowledgeSettings",
    "load_settings",
]
