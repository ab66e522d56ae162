from datetime import datetime
from pydantic import Field
from typing import List, NamedTuple, Optional, Sequence

from learning.geo import distance_meters

from .base import BaseGolfModel
from .green import GreenBoundaryEstimate
from .pin import PinEstimate
from .shot import Shot
from .tee_box import TeeBoxEstimate

TEE_CLUSTER_RADIUS_METERS = 10.0
DEFAULT_PAR = 4


class NearestTeeBox(NamedTuple):
    tee_box: TeeBoxEstimate
    distance: float


class HoleKnowledge(BaseGolfModel):
    """Everything learned about one hole: tee clusters, pin and green."""
    hole_number: int = Field(..., ge=1, le=18)
    par: int = Field(DEFAULT_PAR, ge=3, le=6)
    tee_boxes: List[TeeBoxEstimate] = Field(default_factory=list)
    pin: PinEstimate = Field(default_factory=PinEstimate)
    green: GreenBoundaryEstimate = Field(default_factory=GreenBoundaryEstimate)

    def find_nearest_tee_box(self, latitude: float, longitude: float) -> Optional[NearestTeeBox]:
        nearest: Optional[NearestTeeBox] = None
        for tee_box in self.tee_boxes:
            distance = distance_meters(
                latitude, longitude, tee_box.coordinates.lat, tee_box.coordinates.lon
            )
            if nearest is None or distance < nearest.distance:
                nearest = NearestTeeBox(tee_box, distance)
        return nearest

    def detect_tee_box(
        self, shot: Shot, previous_shots: Sequence[Shot], now: datetime
    ) -> TeeBoxEstimate:
        """Add a tee shot to the cluster within 10 m, or start a new cluster."""
        nearest = self.find_nearest_tee_box(shot.latitude, shot.longitude)

        if nearest is not None and nearest.distance < TEE_CLUSTER_RADIUS_METERS:
            nearest.tee_box.add_sample(shot, now)
            return nearest.tee_box

        tee_box = TeeBoxEstimate.seed(
            shot, now, color=self.infer_tee_box_color(shot, previous_shots)
        )
        self.tee_boxes.append(tee_box)
        return tee_box

    def infer_tee_box_color(self, shot: Shot, previous_shots: Sequence[Shot]) -> Optional[str]:
        """Tee color cannot be told apart from GPS alone yet, so it stays unknown."""
        # TODO: infer color from the player's selected tee once rounds carry it
        return None

    def record_putt(self, shot: Shot, now: datetime) -> None:
        """A putt informs both today's pin and the long-run green outline."""
        self.pin.add_putt_sample(shot, now)
        self.green.add_putt_position(shot)
