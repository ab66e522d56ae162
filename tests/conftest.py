"""Shared fixtures and builders: a pinned clock and shots positioned in metres."""

import math
from datetime import datetime, timezone

import pytest

from learning.clock import FixedClock
from learning.geo import EARTH_RADIUS_M
from models import Shot, ShotCoordinates

BASE_LAT = 40.0
BASE_LON = -75.0


def offset(north: float = 0.0, east: float = 0.0, lat: float = BASE_LAT, lon: float = BASE_LON):
    """(lat, lon) displaced from a base point by metres north/east."""
    d_lat = math.degrees(north / EARTH_RADIUS_M)
    d_lon = math.degrees(east / (EARTH_RADIUS_M * math.cos(math.radians(lat))))
    return lat + d_lat, lon + d_lon


def make_shot(
    shot_id: str,
    hole: int = 1,
    number: int = 1,
    north: float = 0.0,
    east: float = 0.0,
    accuracy: float = 5.0,
    club: str = None,
    **kwargs,
) -> Shot:
    lat, lon = offset(north, east)
    return Shot(
        id=shot_id,
        hole_number=hole,
        shot_number=number,
        coordinates=ShotCoordinates(latitude=lat, longitude=lon, accuracy=accuracy),
        club_id=club,
        **kwargs,
    )


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc))
