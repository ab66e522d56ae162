from datetime import datetime
from pydantic import Field
from typing import Any, Dict, List, Literal, Optional, Sequence

from learning.classifier import ShotClassification, ShotType, classify_shot
from learning.clock import Clock, SystemClock
from learning.geo import distance_meters

from .base import BaseGolfModel, GeoPoint
from .green import GreenBoundaryEstimate
from .hole_knowledge import DEFAULT_PAR, HoleKnowledge
from .pin import PinDay
from .shot import Shot
from .tee_box import TeeBoxEstimate

MIN_PIN_CONFIDENCE = 0.3
GREEN_CENTER_CONFIDENCE = 0.5
BOUNDARY_CONFIDENCE_SCALE = 0.7


class PinDistance(BaseGolfModel):
    """Distance to the best available target, tagged with where it came from."""
    distance: float = Field(..., ge=0.0)  # metres
    confidence: float = Field(..., ge=0.0, le=1.0)
    type: Literal["pin", "green_center", "green_boundary"]


class CourseKnowledge(BaseGolfModel):
    """
    Crowd-sourced knowledge of one course.

    This is the unit of persistence: `to_record()` / `from_record()`
    round-trip all nested state through a plain dict.
    """
    course_id: str
    last_updated: Optional[datetime] = None
    contributor_count: int = Field(0, ge=0)
    contributors: List[str] = Field(default_factory=list)  # insertion order, no duplicates
    holes: List[HoleKnowledge] = Field(default_factory=list)

    # ================================================================
    # Lookups
    # ================================================================

    def get_hole(self, hole_number: int) -> Optional[HoleKnowledge]:
        for hole in self.holes:
            if hole.hole_number == hole_number:
                return hole
        return None

    def get_or_create_hole(self, hole_number: int, par: Optional[int] = None) -> HoleKnowledge:
        hole = self.get_hole(hole_number)
        if hole is None:
            hole = HoleKnowledge(hole_number=hole_number, par=par or DEFAULT_PAR)
            self.holes.append(hole)
        return hole

    def get_tee_boxes(self, hole_number: int) -> List[TeeBoxEstimate]:
        hole = self.get_hole(hole_number)
        return list(hole.tee_boxes) if hole else []

    def get_green_boundary(self, hole_number: int) -> Optional[GreenBoundaryEstimate]:
        hole = self.get_hole(hole_number)
        return hole.green if hole else None

    def get_pin_history(self, hole_number: int) -> List[PinDay]:
        hole = self.get_hole(hole_number)
        return list(hole.pin.history) if hole else []

    # ================================================================
    # Ingestion
    # ================================================================

    def classify_shot(self, shot: Shot, all_shots_in_round: Sequence[Shot]) -> ShotClassification:
        hole = self.get_hole(shot.hole_number)
        current_pin = hole.pin.current if hole else None
        return classify_shot(shot, all_shots_in_round, current_pin)

    def process_shot(
        self,
        shot: Shot,
        all_shots_in_round: Sequence[Shot],
        clock: Optional[Clock] = None,
    ) -> ShotClassification:
        """Classify one shot and fold it into the matching hole model.

        Approach and chip shots are classified but not learned from yet.
        """
        clock = clock or SystemClock()
        now = clock.now()

        hole = self.get_or_create_hole(shot.hole_number, shot.par)
        classification = self.classify_shot(shot, all_shots_in_round)

        if classification.type == ShotType.TEE:
            hole.detect_tee_box(shot, all_shots_in_round, now)
        elif classification.type == ShotType.PUTT:
            hole.record_putt(shot, now)

        self.last_updated = now
        return classification

    def process_round(
        self,
        shots: Sequence[Shot],
        contributor_id: Optional[str] = None,
        clock: Optional[Clock] = None,
    ) -> List[ShotClassification]:
        """Process every shot of a completed round, in hole and shot order."""
        clock = clock or SystemClock()
        if contributor_id:
            self.register_contributor(contributor_id)

        ordered = sorted(shots, key=lambda s: (s.hole_number, s.shot_number))
        return [self.process_shot(shot, shots, clock) for shot in ordered]

    def register_contributor(self, contributor_id: str) -> bool:
        """Add a contributor id. Returns False if it was already known."""
        if contributor_id in self.contributors:
            return False
        self.contributors.append(contributor_id)
        self.contributor_count = max(self.contributor_count, len(self.contributors))
        return True

    def refresh(self, clock: Optional[Clock] = None) -> None:
        """Age every pin estimate to the clock's current day."""
        now = (clock or SystemClock()).now()
        for hole in self.holes:
            hole.pin.refresh(now)

    # ================================================================
    # Queries
    # ================================================================

    def get_distance_to_pin(
        self, hole_number: int, latitude: float, longitude: float
    ) -> Optional[PinDistance]:
        """
        Distance from a position to the best available target on the hole.

        Precedence: current pin (if confidence > 0.3), then the long-run
        green center, then the centroid of the green boundary. Returns
        None while the hole has none of these.
        """
        hole = self.get_hole(hole_number)
        if hole is None:
            return None

        current = hole.pin.current
        if current is not None and current.confidence > MIN_PIN_CONFIDENCE:
            return PinDistance(
                distance=distance_meters(latitude, longitude, current.lat, current.lon),
                confidence=current.confidence,
                type="pin",
            )

        center = hole.pin.center
        if center is not None:
            return PinDistance(
                distance=distance_meters(latitude, longitude, center.lat, center.lon),
                confidence=GREEN_CENTER_CONFIDENCE,
                type="green_center",
            )

        if len(hole.green.boundary_polygon) >= 3:
            target: GeoPoint = hole.green.centroid()
            return PinDistance(
                distance=distance_meters(latitude, longitude, target.lat, target.lon),
                confidence=hole.green.confidence * BOUNDARY_CONFIDENCE_SCALE,
                type="green_boundary",
            )

        return None

    # ================================================================
    # Persistence boundary
    # ================================================================

    def to_record(self) -> Dict[str, Any]:
        """Plain, JSON-safe nested dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CourseKnowledge":
        return cls.model_validate(record)
