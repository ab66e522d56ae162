import datetime as dt
from pydantic import Field
from typing import List, Optional

from learning.confidence import pin_confidence

from .base import BaseGolfModel, GeoPoint
from .shot import Shot

HISTORY_WINDOW_DAYS = 30
RECENT_DAYS = 7
HISTORICAL_PIN_CONFIDENCE = 0.5
MIN_DAYS_FOR_CENTER = 5


class CurrentPin(BaseGolfModel):
    """Best estimate of where the hole is cut right now."""
    lat: float
    lon: float
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    last_updated: dt.datetime


class PinDay(BaseGolfModel):
    """Aggregate of one calendar day's putt locations."""
    lat: float
    lon: float
    date: dt.date
    sample_count: int = Field(1, ge=0)
    shot_ids: List[str] = Field(default_factory=list)


class PinEstimate(BaseGolfModel):
    """
    Pin location learned from putts.

    Greens staff move the pin daily, so same-day putts drive `current`.
    `history` keeps one entry per day for a trailing 30-day window, and
    once at least 5 days are known `center` holds their sample-weighted
    mean as a stable stand-in for the middle of the green.
    """
    current: Optional[CurrentPin] = None
    history: List[PinDay] = Field(default_factory=list)
    center: Optional[GeoPoint] = None

    def entry_for(self, day: dt.date) -> Optional[PinDay]:
        for entry in self.history:
            if entry.date == day:
                return entry
        return None

    def add_putt_sample(self, shot: Shot, now: dt.datetime) -> None:
        today = now.date()
        entry = self.entry_for(today)

        if entry is None:
            self.history.append(
                PinDay(
                    lat=shot.latitude,
                    lon=shot.longitude,
                    date=today,
                    sample_count=1,
                    shot_ids=[shot.id],
                )
            )
        else:
            weight = 1.0 / shot.accuracy
            total_weight = entry.sample_count + weight
            entry.lat = (entry.lat * entry.sample_count + shot.latitude * weight) / total_weight
            entry.lon = (entry.lon * entry.sample_count + shot.longitude * weight) / total_weight
            entry.sample_count += 1
            entry.shot_ids.append(shot.id)

        self.prune_history(today)
        self.update_current_position(now)

    def prune_history(self, today: dt.date) -> None:
        """Drop daily entries more than 30 days older than `today`."""
        cutoff = today - dt.timedelta(days=HISTORY_WINDOW_DAYS)
        self.history = [entry for entry in self.history if entry.date >= cutoff]

    def update_current_position(self, now: dt.datetime) -> None:
        todays = self.entry_for(now.date())

        if todays is not None and todays.sample_count >= 1:
            self.current = CurrentPin(
                lat=todays.lat,
                lon=todays.lon,
                confidence=pin_confidence(todays.sample_count),
                last_updated=now,
            )
        elif self.history:
            # Newer days weigh more: age 1 is the newest entry
            recent = self.history[-RECENT_DAYS:]
            total_weight = 0.0
            weighted_lat = 0.0
            weighted_lon = 0.0
            for offset, entry in enumerate(recent):
                age = len(recent) - offset
                weight = entry.sample_count / age
                total_weight += weight
                weighted_lat += entry.lat * weight
                weighted_lon += entry.lon * weight

            if total_weight > 0:
                self.current = CurrentPin(
                    lat=weighted_lat / total_weight,
                    lon=weighted_lon / total_weight,
                    confidence=HISTORICAL_PIN_CONFIDENCE,
                    last_updated=now,
                )

        if len(self.history) >= MIN_DAYS_FOR_CENTER:
            self.update_green_center()

    def update_green_center(self) -> None:
        """Sample-weighted centroid over every retained day."""
        total_samples = sum(entry.sample_count for entry in self.history)
        if total_samples <= 0:
            return
        self.center = GeoPoint(
            lat=sum(entry.lat * entry.sample_count for entry in self.history) / total_samples,
            lon=sum(entry.lon * entry.sample_count for entry in self.history) / total_samples,
        )

    def refresh(self, now: dt.datetime) -> None:
        """Re-age the estimate without a new sample (e.g. on a new day)."""
        self.prune_history(now.date())
        self.update_current_position(now)
