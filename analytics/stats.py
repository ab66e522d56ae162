from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from models.course_knowledge import CourseKnowledge
from models.hole_knowledge import HoleKnowledge


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _pin_confidence(hole: HoleKnowledge) -> float:
    return hole.pin.current.confidence if hole.pin.current else 0.0


def hole_total_samples(hole: HoleKnowledge) -> int:
    """Tee samples plus putt samples learned for a hole."""
    return sum(tb.sample_count for tb in hole.tee_boxes) + hole.green.sample_count


def hole_learning_progress(hole: HoleKnowledge) -> Dict[str, Any]:
    """Snapshot of how much has been learned about one hole."""
    return {
        "hole_number": hole.hole_number,
        "par": hole.par,
        "tee_box_count": len(hole.tee_boxes),
        "tee_box_confidence": _mean([tb.confidence for tb in hole.tee_boxes]),
        "pin_confidence": _pin_confidence(hole),
        "pin_days": len(hole.pin.history),
        "has_green_center": hole.pin.center is not None,
        "green_confidence": hole.green.confidence,
        "green_samples": hole.green.sample_count,
        "green_area": hole.green.area_square_yards,
        "total_samples": hole_total_samples(hole),
    }


def course_summary(knowledge: CourseKnowledge) -> Dict[str, Any]:
    """
    Course-level learning summary.

    Output:
    - course_id, last_updated, contributor_count
    - holes: one `hole_learning_progress` row per hole, by hole number
    - averages across holes for pin and green confidence
    """
    holes = sorted(knowledge.holes, key=lambda h: h.hole_number)
    rows = [hole_learning_progress(hole) for hole in holes]

    last_updated: Optional[str] = (
        knowledge.last_updated.isoformat() if knowledge.last_updated else None
    )
    return {
        "course_id": knowledge.course_id,
        "last_updated": last_updated,
        "contributor_count": knowledge.contributor_count,
        "holes_with_data": len(rows),
        "total_tee_boxes": sum(row["tee_box_count"] for row in rows),
        "average_pin_confidence": _mean([row["pin_confidence"] for row in rows]),
        "average_green_confidence": _mean([row["green_confidence"] for row in rows]),
        "holes": rows,
    }


def contribution_stats(knowledges: Iterable[CourseKnowledge]) -> Dict[str, int]:
    """Totals across every course: courses, holes and learned shot samples."""
    courses = 0
    holes = 0
    shots = 0
    for knowledge in knowledges:
        courses += 1
        holes += len(knowledge.holes)
        for hole in knowledge.holes:
            shots += sum(tb.sample_count for tb in hole.tee_boxes)
            shots += sum(day.sample_count for day in hole.pin.history)
            shots += hole.green.sample_count
    return {"courses": courses, "holes": holes, "shots": shots}
