from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from analytics.stats import course_summary, hole_learning_progress
from learning.clock import Clock, SystemClock
from learning.quality import detect_outliers, validate_shot
from learning.settings import KnowledgeSettings
from models import CourseKnowledge, GreenBoundaryEstimate, PinDay, PinDistance, Shot, TeeBoxEstimate
from storage.exceptions import NotFoundError
from storage.store import JsonFileKnowledgeStore, KnowledgeStore


class KnowledgeManager:
    """
    Owns the CourseKnowledge aggregates for a device or service and
    keeps them in sync with a KnowledgeStore.

    Notes:
    - Records are loaded lazily on first use and written back after
      every mutation.
    - One writer per manager; callers sharing it across threads must
      serialize access themselves.
    """

    def __init__(
        self,
        store: Optional[KnowledgeStore] = None,
        clock: Optional[Clock] = None,
        settings: Optional[KnowledgeSettings] = None,
    ) -> None:
        self.settings = settings or KnowledgeSettings()
        self.store = store or JsonFileKnowledgeStore(self.settings.store_path)
        self.clock = clock or SystemClock()
        self._knowledge: Dict[str, CourseKnowledge] = {}
        self._loaded = False

    # ================================================================
    # Lifecycle
    # ================================================================

    def load(self) -> None:
        """Read all stored records. Safe to call repeatedly."""
        if self._loaded:
            return
        records = self.store.load_all()
        self._knowledge = {
            course_id: CourseKnowledge.from_record(record)
            for course_id, record in records.items()
        }
        self._loaded = True
        logger.info(f"Loaded course knowledge for {len(self._knowledge)} courses")

    def save(self) -> None:
        self.store.save_all(
            {course_id: k.to_record() for course_id, k in self._knowledge.items()}
        )

    def get_course_knowledge(self, course_id: str) -> CourseKnowledge:
        """Return the aggregate for a course, creating (and persisting) it on first use."""
        self.load()
        knowledge = self._knowledge.get(course_id)
        if knowledge is None:
            logger.info(f"Creating new course knowledge for course {course_id}")
            knowledge = CourseKnowledge(course_id=course_id)
            self._knowledge[course_id] = knowledge
            self.save()
        return knowledge

    def course_ids(self) -> List[str]:
        self.load()
        return list(self._knowledge)

    # ================================================================
    # Ingestion
    # ================================================================

    def _accept(self, shot: Shot) -> bool:
        if not self.settings.validate_shots:
            return True
        validation = validate_shot(shot, self.clock.now(), self.settings)
        if not validation.is_valid:
            logger.warning(
                f"Rejected shot {shot.id} (hole {shot.hole_number}, shot {shot.shot_number}): "
                f"failed {', '.join(validation.failed_rules)}"
            )
        return validation.is_valid

    def process_shot(self, shot: Shot, all_shots_in_round: Sequence[Shot], course_id: str) -> bool:
        """Learn from a single shot. Returns False when the shot is rejected."""
        if not self._accept(shot):
            return False

        knowledge = self.get_course_knowledge(course_id)
        classification = knowledge.process_shot(shot, all_shots_in_round, self.clock)
        self.save()

        logger.debug(
            f"Shot {shot.hole_number}-{shot.shot_number} classified as "
            f"{classification.type.value} ({classification.confidence:.2f})"
        )
        self._log_learning_progress(knowledge, shot.hole_number)
        return True

    def process_round(
        self,
        shots: Sequence[Shot],
        course_id: str,
        contributor_id: Optional[str] = None,
    ) -> int:
        """Learn from a whole round. Returns the number of shots accepted."""
        outliers = detect_outliers(shots, self.settings.outlier_distance_meters)
        outlier_ids = {o.shot.id for o in outliers}
        for outlier in outliers:
            logger.warning(
                f"Skipping outlier shot {outlier.shot.id}: {outlier.reason} ({outlier.distance:.0f}m)"
            )

        accepted = [s for s in shots if s.id not in outlier_ids and self._accept(s)]
        knowledge = self.get_course_knowledge(course_id)
        knowledge.process_round(accepted, contributor_id=contributor_id, clock=self.clock)
        self.save()

        logger.info(
            f"Processed round for course {course_id}: {len(accepted)}/{len(shots)} shots learned"
        )
        return len(accepted)

    def refresh(self) -> None:
        """Age every course's pin estimates to today."""
        self.load()
        for knowledge in self._knowledge.values():
            knowledge.refresh(self.clock)
        self.save()

    # ================================================================
    # Queries
    # ================================================================

    def get_distance_to_pin(
        self, course_id: str, hole_number: int, latitude: float, longitude: float
    ) -> Optional[PinDistance]:
        result = self.get_course_knowledge(course_id).get_distance_to_pin(
            hole_number, latitude, longitude
        )
        if result is not None:
            logger.debug(
                f"Distance to pin: {result.distance:.0f}m "
                f"({result.type}, confidence {result.confidence:.2f})"
            )
        return result

    def get_tee_boxes(self, course_id: str, hole_number: int) -> List[TeeBoxEstimate]:
        return self.get_course_knowledge(course_id).get_tee_boxes(hole_number)

    def get_green_boundary(self, course_id: str, hole_number: int) -> Optional[GreenBoundaryEstimate]:
        return self.get_course_knowledge(course_id).get_green_boundary(hole_number)

    def get_pin_history(self, course_id: str, hole_number: int) -> List[PinDay]:
        return self.get_course_knowledge(course_id).get_pin_history(hole_number)

    def get_course_summary(self, course_id: str) -> Dict[str, Any]:
        return course_summary(self.get_course_knowledge(course_id))

    # ================================================================
    # Import / export
    # ================================================================

    def export_knowledge(self, course_id: str) -> Dict[str, Any]:
        self.load()
        knowledge = self._knowledge.get(course_id)
        if knowledge is None:
            raise NotFoundError(f"No knowledge stored for course {course_id}")
        return knowledge.to_record()

    def import_knowledge(self, course_id: str, record: Dict[str, Any]) -> CourseKnowledge:
        """Replace a course's knowledge with a record (e.g. downloaded from the server)."""
        self.load()
        knowledge = CourseKnowledge.from_record({**record, "courseId": course_id})
        self._knowledge[course_id] = knowledge
        self.save()
        logger.info(f"Imported knowledge for course {course_id}")
        return knowledge

    def clear_knowledge(self, course_id: Optional[str] = None) -> None:
        """Forget one course, or every course when no id is given."""
        self.load()
        if course_id is not None:
            self._knowledge.pop(course_id, None)
            logger.info(f"Cleared knowledge for course {course_id}")
        else:
            self._knowledge.clear()
            logger.info("Cleared all course knowledge")
        self.save()

    def _log_learning_progress(self, knowledge: CourseKnowledge, hole_number: int) -> None:
        hole = knowledge.get_hole(hole_number)
        if hole is None:
            return
        progress = hole_learning_progress(hole)
        logger.debug(
            f"Hole {hole_number}: {progress['tee_box_count']} tee boxes "
            f"(avg confidence {progress['tee_box_confidence']:.2f}), "
            f"pin confidence {progress['pin_confidence']:.2f}, "
            f"green confidence {progress['green_confidence']:.2f} "
            f"({progress['green_samples']} samples, {progress['green_area']:.0f} sq yd)"
        )
