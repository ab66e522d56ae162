"""Reconcile a locally learned course with a copy received from elsewhere.

Neither input is modified; the merge works on deep copies.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from models.course_knowledge import CourseKnowledge
from models.green import MIN_SAMPLES_FOR_BOUNDARY
from models.hole_knowledge import HoleKnowledge

from .clock import Clock, SystemClock
from .geo import distance_meters

TEE_MERGE_RADIUS_METERS = 20.0


def merge_tee_boxes(local_hole: HoleKnowledge, remote_hole: HoleKnowledge) -> None:
    """Match tee boxes by color and proximity; keep the more confident centroid."""
    for remote_tee in remote_hole.tee_boxes:
        match = None
        for local_tee in local_hole.tee_boxes:
            if local_tee.color != remote_tee.color:
                continue
            distance = distance_meters(
                local_tee.coordinates.lat,
                local_tee.coordinates.lon,
                remote_tee.coordinates.lat,
                remote_tee.coordinates.lon,
            )
            if distance < TEE_MERGE_RADIUS_METERS:
                match = local_tee
                break

        if match is None:
            local_hole.tee_boxes.append(remote_tee.model_copy(deep=True))
            continue

        if remote_tee.confidence > match.confidence:
            match.coordinates = remote_tee.coordinates.model_copy()
            match.confidence = remote_tee.confidence
        match.sample_count = max(match.sample_count, remote_tee.sample_count)
        if remote_tee.last_seen > match.last_seen:
            match.last_seen = remote_tee.last_seen


def merge_pin_positions(local_hole: HoleKnowledge, remote_hole: HoleKnowledge) -> None:
    local_pin, remote_pin = local_hole.pin, remote_hole.pin

    for remote_day in remote_pin.history:
        existing = local_pin.entry_for(remote_day.date)
        if existing is None:
            local_pin.history.append(remote_day.model_copy(deep=True))
        elif remote_day.sample_count > existing.sample_count:
            existing.lat = remote_day.lat
            existing.lon = remote_day.lon
            existing.sample_count = remote_day.sample_count
            existing.shot_ids = list(remote_day.shot_ids)
    local_pin.history = sorted(local_pin.history, key=lambda day: day.date)

    if remote_pin.current is not None and (
        local_pin.current is None or remote_pin.current.confidence > local_pin.current.confidence
    ):
        local_pin.current = remote_pin.current.model_copy()

    if remote_pin.center is not None and (
        local_pin.center is None or len(remote_pin.history) > len(local_pin.history)
    ):
        local_pin.center = remote_pin.center.model_copy()


def merge_green_boundaries(local_hole: HoleKnowledge, remote_hole: HoleKnowledge) -> None:
    """Union the putt logs by shot id and rebuild the outline from the combined log."""
    local_green, remote_green = local_hole.green, remote_hole.green

    known = {p.shot_id for p in local_green.putt_positions}
    for position in remote_green.putt_positions:
        if position.shot_id not in known:
            local_green.putt_positions.append(position.model_copy())
            known.add(position.shot_id)

    local_green.sample_count = max(
        local_green.sample_count, remote_green.sample_count, len(local_green.putt_positions)
    )

    if local_green.putt_positions and local_green.sample_count >= MIN_SAMPLES_FOR_BOUNDARY:
        local_green.calculate_boundary()
    elif remote_green.confidence > local_green.confidence:
        # Too few logged putts to rebuild; keep the more confident outline
        local_green.boundary_polygon = [p.model_copy() for p in remote_green.boundary_polygon]
        local_green.confidence = remote_green.confidence
        local_green.area_square_yards = remote_green.area_square_yards


def merge_course_knowledge(
    local: CourseKnowledge,
    remote: CourseKnowledge,
    clock: Optional[Clock] = None,
) -> CourseKnowledge:
    """Return a new aggregate combining `local` with `remote`.

    Pin estimates are re-aged to the clock's current day afterwards, so
    history from either side older than the 30-day window is dropped.
    """
    if local.course_id != remote.course_id:
        raise ValueError(
            f"Cannot merge knowledge for course {remote.course_id!r} into {local.course_id!r}"
        )

    logger.info(f"Merging course knowledge for {local.course_id}")
    now = (clock or SystemClock()).now()
    merged = local.model_copy(deep=True)

    for remote_hole in remote.holes:
        local_hole = merged.get_hole(remote_hole.hole_number)
        if local_hole is None:
            merged.holes.append(remote_hole.model_copy(deep=True))
            continue

        merge_tee_boxes(local_hole, remote_hole)
        merge_pin_positions(local_hole, remote_hole)
        merge_green_boundaries(local_hole, remote_hole)

    merged.holes = sorted(merged.holes, key=lambda h: h.hole_number)
    # Adopted days may be outside the window or change which day is newest
    for hole in merged.holes:
        hole.pin.refresh(now)

    for contributor_id in remote.contributors:
        merged.register_contributor(contributor_id)
    merged.contributor_count = max(
        merged.contributor_count, local.contributor_count, remote.contributor_count
    )

    merged.last_updated = now
    return merged
