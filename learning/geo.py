"""Spherical distance and small-area planar geometry helpers.

Points passed to the planar helpers are `(x, y)` tuples with longitude
as x and latitude as y. At green-sized scales treating degrees as a
plane is accurate enough; areas are scaled back to metres using the
local metres-per-degree factors.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

EARTH_RADIUS_M = 6_371_000.0
METERS_PER_DEGREE_LAT = 111_111.0
SQ_YARDS_PER_SQ_METER = 1.19599

Point = Tuple[float, float]


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine great-circle distance in metres."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    h = (
        math.sin(d_phi / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def cross(o: Point, a: Point, b: Point) -> float:
    """Z component of (a - o) x (b - o). Positive for a counter-clockwise turn."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def is_collinear(points: Sequence[Point]) -> bool:
    """True when every point lies on one line (or there are fewer than 3 distinct points)."""
    distinct = list(dict.fromkeys(points))
    if len(distinct) < 3:
        return True
    origin, anchor = distinct[0], distinct[1]
    return all(cross(origin, anchor, p) == 0 for p in distinct[2:])


def convex_hull(points: Sequence[Point]) -> List[Point]:
    """
    Convex hull via the monotone-chain variant of Graham scan.

    Returns hull vertices counter-clockwise, starting from the
    lowest-x (then lowest-y) point, without repeating the first vertex.

    Degenerate inputs (fewer than 3 points, or all points collinear) are
    returned unchanged since they do not enclose an area.
    """
    if len(points) < 3 or is_collinear(points):
        return list(points)

    ordered = sorted(points)

    lower: List[Point] = []
    for p in ordered:
        while len(lower) >= 2 and cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: List[Point] = []
    for p in reversed(ordered):
        while len(upper) >= 2 and cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    # Last point of each chain is the first point of the other
    hull = lower[:-1] + upper[:-1]
    if len(hull) < 3:
        # Floating point noise on near-collinear input
        return list(points)
    return hull


def polygon_area_square_yards(vertices: Sequence[Point]) -> float:
    """Shoelace area of a lon/lat polygon, converted to square yards."""
    if len(vertices) < 3:
        return 0.0

    area = 0.0
    for i in range(len(vertices)):
        x1, y1 = vertices[i]
        x2, y2 = vertices[(i + 1) % len(vertices)]
        area += x1 * y2 - x2 * y1
    area = abs(area) / 2.0

    avg_lat = sum(p[1] for p in vertices) / len(vertices)
    meters_per_degree_lon = METERS_PER_DEGREE_LAT * math.cos(math.radians(avg_lat))
    square_meters = area * METERS_PER_DEGREE_LAT * meters_per_degree_lon
    return square_meters * SQ_YARDS_PER_SQ_METER


def centroid(points: Sequence[Point]) -> Optional[Point]:
    """Arithmetic mean of the points, or None for an empty sequence."""
    if not points:
        return None
    x = sum(p[0] for p in points) / len(points)
    y = sum(p[1] for p in points) / len(points)
    return (x, y)
