from learning.classifier import ShotClassification, ShotType

from .base import BaseGolfModel, GeoPoint
from .shot import Shot, ShotCoordinates
from .tee_box import TeeBoxEstimate
from .pin import CurrentPin, PinDay, PinEstimate
from .green import GreenBoundaryEstimate, PuttPosition
from .hole_knowledge import HoleKnowledge, NearestTeeBox
from .course_knowledge import CourseKnowledge, PinDistance

__all__ = [
    "BaseGolfModel",
    "GeoPoint",
    "Shot",
    "ShotCoordinates",
    "ShotClassification",
    "ShotType",
    "TeeBoxEstimate",
    "CurrentPin",
    "PinDay",
    "PinEstimate",
    "GreenBoundaryEstimate",
    "PuttPosition",
    "HoleKnowledge",
    "NearestTeeBox",
    "CourseKnowledge",
    "PinDistance",
]
