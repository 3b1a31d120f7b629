"""Core chart data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from snapline.config import DEFAULT_KEY_COUNT


class HitObjectKind(Enum):
    TAP = auto()
    HOLD = auto()


@dataclass(frozen=True)
class TimingPoint:
    """A tempo marker, in effect from start_time until the next marker."""

    start_time: float  # ms from chart start, may be negative
    bpm: float

    @property
    def beat_length(self) -> float:
        """Milliseconds per beat."""
        return 60000.0 / self.bpm


@dataclass(frozen=True)
class HitObjectInfo:
    """A hit object as read from the chart. Taps store end_time = 0."""

    start_time: float  # ms
    end_time: float = 0.0  # ms, > start_time for held notes
    lane: int = 1

    @property
    def kind(self) -> HitObjectKind:
        if self.end_time > 0 and self.end_time > self.start_time:
            return HitObjectKind.HOLD
        return HitObjectKind.TAP


@dataclass
class Chart:
    """Parsed representation of a playable chart."""

    title: str = "Untitled"
    timing_points: list[TimingPoint] = field(default_factory=list)
    hit_objects: list[HitObjectInfo] = field(default_factory=list)
    key_count: int = DEFAULT_KEY_COUNT

    @property
    def length(self) -> float:
        """Time of the last object start or end, in ms."""
        if not self.hit_objects:
            return 0.0
        return max(max(o.start_time, o.end_time) for o in self.hit_objects)
