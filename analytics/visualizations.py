from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from learning.geo import METERS_PER_DEGREE_LAT
from models.hole_knowledge import HoleKnowledge


def _load_plt():
    try:
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError as exc:
        raise RuntimeError(
            "matplotlib is required for visualizations. Install it with: pip install matplotlib"
        ) from exc
    return plt


def _hole_points(hole: HoleKnowledge) -> List[Tuple[float, float]]:
    """Every (lat, lon) the hole knows about, used to pick a local origin."""
    points = [(tb.coordinates.lat, tb.coordinates.lon) for tb in hole.tee_boxes]
    points += [(day.lat, day.lon) for day in hole.pin.history]
    points += [(p.lat, p.lon) for p in hole.green.putt_positions]
    if hole.pin.current:
        points.append((hole.pin.current.lat, hole.pin.current.lon))
    if hole.pin.center:
        points.append((hole.pin.center.lat, hole.pin.center.lon))
    return points


class LocalFrame:
    """Equirectangular projection to metres around an origin."""

    def __init__(self, origin_lat: float, origin_lon: float):
        self.origin_lat = origin_lat
        self.origin_lon = origin_lon
        self.meters_per_degree_lon = METERS_PER_DEGREE_LAT * math.cos(math.radians(origin_lat))

    def project(self, lat: float, lon: float) -> Tuple[float, float]:
        x = (lon - self.origin_lon) * self.meters_per_degree_lon
        y = (lat - self.origin_lat) * METERS_PER_DEGREE_LAT
        return x, y

    def project_all(self, points: Sequence[Tuple[float, float]]) -> Tuple[List[float], List[float]]:
        projected = [self.project(lat, lon) for lat, lon in points]
        return [p[0] for p in projected], [p[1] for p in projected]


def hole_frame(hole: HoleKnowledge) -> Optional[LocalFrame]:
    points = _hole_points(hole)
    if not points:
        return None
    return LocalFrame(
        sum(p[0] for p in points) / len(points),
        sum(p[1] for p in points) / len(points),
    )


def plot_hole_knowledge(hole: HoleKnowledge, title: Optional[str] = None):
    """
    Map of everything learned for a hole, in metres from the hole's mean position:
    - tee clusters (sized by sample count)
    - putt positions and the green hull
    - daily pin history, current pin and green center
    """
    plt = _load_plt()
    fig, ax = plt.subplots(figsize=(7, 7))
    ax.set_title(title or f"Hole {hole.hole_number} (par {hole.par})")
    ax.set_xlabel("East (m)")
    ax.set_ylabel("North (m)")

    frame = hole_frame(hole)
    if frame is None:
        ax.text(0.5, 0.5, "No data yet", ha="center", va="center", transform=ax.transAxes)
        fig.tight_layout()
        return fig, ax

    if hole.tee_boxes:
        xs, ys = frame.project_all([(tb.coordinates.lat, tb.coordinates.lon) for tb in hole.tee_boxes])
        sizes = [40 + 10 * tb.sample_count for tb in hole.tee_boxes]
        ax.scatter(xs, ys, s=sizes, marker="s", label="Tee boxes")
        for x, y, tb in zip(xs, ys, hole.tee_boxes):
            ax.annotate(f"{tb.confidence:.2f}", (x, y), textcoords="offset points", xytext=(5, 5))

    if hole.green.putt_positions:
        xs, ys = frame.project_all([(p.lat, p.lon) for p in hole.green.putt_positions])
        ax.scatter(xs, ys, s=10, alpha=0.4, label="Putts")

    if len(hole.green.boundary_polygon) >= 3:
        ring = [(p.lat, p.lon) for p in hole.green.boundary_polygon]
        xs, ys = frame.project_all(ring + ring[:1])
        ax.plot(xs, ys, linewidth=1.5, label=f"Green ({hole.green.area_square_yards:.0f} sq yd)")

    if hole.pin.history:
        xs, ys = frame.project_all([(day.lat, day.lon) for day in hole.pin.history])
        ax.scatter(xs, ys, marker="x", label="Daily pins")

    if hole.pin.current:
        x, y = frame.project(hole.pin.current.lat, hole.pin.current.lon)
        ax.scatter([x], [y], marker="*", s=160, label=f"Pin ({hole.pin.current.confidence:.2f})")

    if hole.pin.center:
        x, y = frame.project(hole.pin.center.lat, hole.pin.center.lon)
        ax.scatter([x], [y], marker="o", facecolors="none", s=120, label="Green center")

    ax.set_aspect("equal", adjustable="datalim")
    ax.grid(alpha=0.2)
    ax.legend(loc="best", fontsize="small")
    fig.tight_layout()
    return fig, ax
