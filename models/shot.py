from datetime import datetime
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class ShotCoordinates(BaseGolfModel):
    """GPS fix for a shot. `accuracy` is horizontal error in metres; smaller is better.

    Coordinate ranges are not checked here; callers filter bad fixes first.
    """
    latitude: float
    longitude: float
    accuracy: float = Field(..., gt=0.0)


class Shot(BaseGolfModel):
    """A single recorded shot, as handed over by the shot-recording layer."""
    id: str
    hole_number: int = Field(..., ge=1, le=18)
    shot_number: int = Field(..., ge=1)  # 1-based order within the hole
    coordinates: ShotCoordinates
    club_id: Optional[str] = None
    par: Optional[int] = Field(None, ge=3, le=6)
    recorded_at: Optional[datetime] = None

    @property
    def latitude(self) -> float:
        return self.coordinates.latitude

    @property
    def longitude(self) -> float:
        return self.coordinates.longitude

    @property
    def accuracy(self) -> float:
        return self.coordinates.accuracy
