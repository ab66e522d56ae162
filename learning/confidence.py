"""Confidence scoring for learned course features.

Each factor is exposed on its own so it can be tested and tuned in
isolation. Every score returned here is clamped to [0, 1].
"""

from __future__ import annotations

TEE_SAMPLE_WEIGHT = 0.4
TEE_ACCURACY_WEIGHT = 0.3
TEE_RECENCY_WEIGHT = 0.3

ACCURACY_CEILING_METERS = 20.0  # avg GPS error at which accuracy stops counting
RECENCY_WINDOW_DAYS = 30.0
BOUNDARY_SATURATION_SAMPLES = 50


def clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, value))


def tee_sample_factor(sample_count: int) -> float:
    """
    Unweighted sample-count score for a tee cluster.

    - 1 sample: 0.30
    - 2-5 samples: linear 0.30 -> 0.60
    - more than 5: 0.60 plus up to 0.40, saturating 10 samples later
    """
    if sample_count <= 0:
        return 0.0
    if sample_count == 1:
        return 0.3
    if sample_count <= 5:
        return 0.3 + (sample_count - 1) * 0.075
    return 0.6 + min((sample_count - 5) / 10, 0.4)


def accuracy_factor(avg_accuracy_meters: float) -> float:
    """1.0 for a perfect fix, falling linearly to 0 at 20 m average error."""
    return max(0.0, (ACCURACY_CEILING_METERS - avg_accuracy_meters) / ACCURACY_CEILING_METERS)


def recency_factor(days_since_seen: float) -> float:
    """1.0 when seen just now, decaying linearly to 0 after 30 days."""
    return clamp_confidence(1 - days_since_seen / RECENCY_WINDOW_DAYS)


def tee_box_confidence(sample_count: int, avg_accuracy_meters: float, days_since_seen: float) -> float:
    """Weighted blend: 40% sample count, 30% GPS accuracy, 30% recency."""
    score = (
        tee_sample_factor(sample_count) * TEE_SAMPLE_WEIGHT
        + accuracy_factor(avg_accuracy_meters) * TEE_ACCURACY_WEIGHT
        + recency_factor(days_since_seen) * TEE_RECENCY_WEIGHT
    )
    return clamp_confidence(score)


def pin_confidence(sample_count: int) -> float:
    """
    Confidence in today's pin from the number of same-day putts.

    1 putt gives 0.5, 2-3 putts climb linearly to 0.9, beyond that
    samples/5 takes over but never drops below the 3-putt value.
    """
    if sample_count <= 0:
        return 0.0
    if sample_count == 1:
        return 0.5
    if sample_count <= 3:
        return 0.5 + (sample_count - 1) * 0.2
    return clamp_confidence(max(0.9, min(sample_count / 5, 1.0)))


def boundary_confidence(sample_count: int) -> float:
    """Green outline confidence grows with putt count only, saturating at 50."""
    return clamp_confidence(sample_count / BOUNDARY_SATURATION_SAMPLES)
