from pydantic import Field
from typing import List, Optional

from learning.confidence import boundary_confidence
from learning.geo import centroid, convex_hull, polygon_area_square_yards

from .base import BaseGolfModel, GeoPoint
from .shot import Shot

MIN_SAMPLES_FOR_BOUNDARY = 10


class PuttPosition(BaseGolfModel):
    """Raw putt location kept for boundary recomputation."""
    lat: float
    lon: float
    accuracy: float
    shot_id: str


class GreenBoundaryEstimate(BaseGolfModel):
    """Green outline approximated as the convex hull of every putt location seen."""
    boundary_polygon: List[GeoPoint] = Field(default_factory=list)
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    sample_count: int = Field(0, ge=0)
    area_square_yards: float = Field(0.0, ge=0.0)
    putt_positions: List[PuttPosition] = Field(default_factory=list)

    def add_putt_position(self, shot: Shot) -> None:
        self.putt_positions.append(
            PuttPosition(
                lat=shot.latitude,
                lon=shot.longitude,
                accuracy=shot.accuracy,
                shot_id=shot.id,
            )
        )
        self.sample_count += 1

        if self.sample_count >= MIN_SAMPLES_FOR_BOUNDARY:
            self.calculate_boundary()

    def calculate_boundary(self) -> None:
        """Recompute hull, area and confidence from scratch."""
        points = [(p.lon, p.lat) for p in self.putt_positions]
        hull = convex_hull(points)

        self.boundary_polygon = [GeoPoint(lat=y, lon=x) for x, y in hull]
        self.area_square_yards = float(round(polygon_area_square_yards(hull)))
        self.confidence = boundary_confidence(self.sample_count)

    def centroid(self) -> Optional[GeoPoint]:
        """Vertex average of the boundary polygon, if there is one."""
        center = centroid([(p.lon, p.lat) for p in self.boundary_polygon])
        if center is None:
            return None
        return GeoPoint(lat=center[1], lon=center[0])
