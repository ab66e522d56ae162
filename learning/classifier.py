"""Ordered heuristic that decides what role a shot played on its hole.

Rules, first match wins:
  1. first shot on the hole in shot order -> tee (0.9)
  2. putter selected -> putt (0.95)
  3. last shot on the hole with no club logged -> putt (0.7)
  4. within 30 m of the current pin estimate -> chip (0.8)
  5. anything else -> approach (0.6)
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence

from pydantic import BaseModel, Field

from .geo import distance_meters

if TYPE_CHECKING:
    from models.pin import CurrentPin
    from models.shot import Shot

PUTTER_CLUB_ID = "putter"
CHIP_RADIUS_METERS = 30.0

TEE_CONFIDENCE = 0.9
PUTTER_CONFIDENCE = 0.95
LAST_SHOT_PUTT_CONFIDENCE = 0.7
CHIP_CONFIDENCE = 0.8
APPROACH_CONFIDENCE = 0.6


class ShotType(str, Enum):
    """Role a shot plays on the hole."""
    TEE = "tee"
    APPROACH = "approach"
    CHIP = "chip"
    PUTT = "putt"


class ShotClassification(BaseModel):
    type: ShotType
    confidence: float = Field(..., ge=0.0, le=1.0)


def is_putter(club_id: Optional[str]) -> bool:
    return bool(club_id) and club_id.strip().lower() == PUTTER_CLUB_ID


def hole_shots_in_order(shot: "Shot", round_shots: Sequence["Shot"]) -> List["Shot"]:
    """Shots from the same hole as `shot`, sorted by shot number (stable)."""
    same_hole = [s for s in round_shots if s.hole_number == shot.hole_number]
    return sorted(same_hole, key=lambda s: s.shot_number)


def classify_shot(
    shot: "Shot",
    round_shots: Sequence["Shot"],
    current_pin: Optional["CurrentPin"] = None,
) -> ShotClassification:
    """
    Classify `shot` given every shot recorded so far in the round.

    A shot missing from `round_shots` is neither first nor last, so it
    falls through to the club and proximity rules.
    """
    ordered = hole_shots_in_order(shot, round_shots)
    index = next((i for i, s in enumerate(ordered) if s.id == shot.id), None)
    is_first = index == 0
    is_last = index is not None and index == len(ordered) - 1

    if is_first:
        return ShotClassification(type=ShotType.TEE, confidence=TEE_CONFIDENCE)

    if is_putter(shot.club_id):
        return ShotClassification(type=ShotType.PUTT, confidence=PUTTER_CONFIDENCE)

    if is_last and not shot.club_id:
        return ShotClassification(type=ShotType.PUTT, confidence=LAST_SHOT_PUTT_CONFIDENCE)

    if current_pin is not None:
        distance = distance_meters(
            shot.latitude, shot.longitude, current_pin.lat, current_pin.lon
        )
        if distance < CHIP_RADIUS_METERS:
            return ShotClassification(type=ShotType.CHIP, confidence=CHIP_CONFIDENCE)

    return ShotClassification(type=ShotType.APPROACH, confidence=APPROACH_CONFIDENCE)
