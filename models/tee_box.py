from datetime import datetime
from pydantic import Field
from typing import List, Optional

from learning.clock import days_between
from learning.confidence import tee_box_confidence

from .base import BaseGolfModel, GeoPoint
from .shot import Shot


class TeeBoxEstimate(BaseGolfModel):
    """One learned tee marker location, built from clustered tee shots."""
    color: Optional[str] = None  # None until color can be inferred
    coordinates: GeoPoint
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    sample_count: int = Field(0, ge=0)
    avg_accuracy: float = Field(0.0, ge=0.0)
    last_seen: datetime
    contributing_shot_ids: List[str] = Field(default_factory=list)

    @classmethod
    def seed(cls, shot: Shot, now: datetime, color: Optional[str] = None) -> "TeeBoxEstimate":
        """Start a new cluster from a single tee shot."""
        tee_box = cls(
            color=color,
            coordinates=GeoPoint(lat=shot.latitude, lon=shot.longitude),
            sample_count=1,
            avg_accuracy=shot.accuracy,
            last_seen=now,
            contributing_shot_ids=[shot.id],
        )
        tee_box.update_confidence(now)
        return tee_box

    def add_sample(self, shot: Shot, now: datetime) -> None:
        """
        Fold a tee shot into the cluster.

        The centroid is a running mean where the existing centroid weighs
        `sample_count` and the new fix weighs `1/accuracy`, so tighter
        GPS fixes pull harder.
        """
        weight = 1.0 / shot.accuracy
        total_weight = self.sample_count + weight
        self.coordinates = GeoPoint(
            lat=(self.coordinates.lat * self.sample_count + shot.latitude * weight) / total_weight,
            lon=(self.coordinates.lon * self.sample_count + shot.longitude * weight) / total_weight,
        )
        self.avg_accuracy = (
            (self.avg_accuracy * self.sample_count + shot.accuracy) / (self.sample_count + 1)
        )
        self.sample_count += 1
        self.last_seen = now
        self.contributing_shot_ids.append(shot.id)
        self.update_confidence(now)

    def confidence_at(self, now: datetime) -> float:
        """Confidence with recency evaluated at `now` rather than at the last update."""
        return tee_box_confidence(
            self.sample_count, self.avg_accuracy, days_between(self.last_seen, now)
        )

    def update_confidence(self, now: datetime) -> float:
        self.confidence = self.confidence_at(now)
        return self.confidence
