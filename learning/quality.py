"""Ingestion-side quality gates for GPS shot data."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from models.shot import Shot

from .clock import days_between
from .geo import distance_meters
from .settings import KnowledgeSettings

TOO_FAR_FROM_HOLE = "too_far_from_hole"
MIN_SHOTS_FOR_OUTLIERS = 3


class ShotValidation(BaseModel):
    """Per-rule outcome of `validate_shot`."""
    shot_id: str
    has_coordinates: bool
    reasonable_accuracy: bool
    recent_timestamp: bool

    @property
    def is_valid(self) -> bool:
        return self.has_coordinates and self.reasonable_accuracy and self.recent_timestamp

    @property
    def failed_rules(self) -> List[str]:
        return [
            name
            for name in ("has_coordinates", "reasonable_accuracy", "recent_timestamp")
            if not getattr(self, name)
        ]


class ShotOutlier(BaseModel):
    shot: Shot
    reason: str
    distance: float = Field(..., ge=0.0)  # metres from the hole's mean position


def validate_shot(
    shot: Shot,
    now: datetime,
    settings: Optional[KnowledgeSettings] = None,
) -> ShotValidation:
    """
    Check a shot before it is learned from.

    Hole and shot numbers and coordinate ranges are already enforced by
    the Shot model; this covers the softer rules. Shots without a
    `recorded_at` timestamp pass the recency rule.
    """
    settings = settings or KnowledgeSettings()

    has_coordinates = not (shot.latitude == 0.0 and shot.longitude == 0.0)
    reasonable_accuracy = shot.accuracy < settings.max_shot_accuracy_meters

    recent_timestamp = True
    if shot.recorded_at is not None:
        age_hours = days_between(shot.recorded_at, now) * 24.0
        recent_timestamp = age_hours < settings.max_shot_age_hours

    return ShotValidation(
        shot_id=shot.id,
        has_coordinates=has_coordinates,
        reasonable_accuracy=reasonable_accuracy,
        recent_timestamp=recent_timestamp,
    )


def detect_outliers(shots: Sequence[Shot], max_distance_meters: float = 1000.0) -> List[ShotOutlier]:
    """Flag shots implausibly far from the mean position of their hole's shots."""
    if len(shots) < MIN_SHOTS_FOR_OUTLIERS:
        return []

    by_hole: Dict[int, List[Shot]] = {}
    for shot in shots:
        by_hole.setdefault(shot.hole_number, []).append(shot)

    outliers: List[ShotOutlier] = []
    for hole_number in sorted(by_hole):
        hole_shots = by_hole[hole_number]
        if len(hole_shots) < MIN_SHOTS_FOR_OUTLIERS:
            continue

        avg_lat = sum(s.latitude for s in hole_shots) / len(hole_shots)
        avg_lon = sum(s.longitude for s in hole_shots) / len(hole_shots)

        for shot in hole_shots:
            distance = distance_meters(shot.latitude, shot.longitude, avg_lat, avg_lon)
            if distance > max_distance_meters:
                outliers.append(
                    ShotOutlier(shot=shot, reason=TOO_FAR_FROM_HOLE, distance=round(distance))
                )
    return outliers
