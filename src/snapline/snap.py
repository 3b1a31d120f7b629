"""Beat snap classification: how an object's time lines up with the beat grid."""

from __future__ import annotations

import math
from enum import IntEnum

from snapline.config import BEAT_SNAPS, SNAP_DIVISIONS, SNAP_OFFSET_MS, UNSNAPPED_CATEGORY
from snapline.models import TimingPoint
from snapline.timing import TimingError


class InvalidTempoError(TimingError):
    """Raised when a timing point's BPM is zero, negative, or not finite."""


class InvalidTimeError(TimingError):
    """Raised when an object time is NaN or infinite."""


class SnapCategory(IntEnum):
    WHOLE = 0  # 1/1
    HALF = 1  # 1/2
    THIRD = 2  # 1/3
    QUARTER = 3  # 1/4
    SIXTH = 4  # 1/6
    EIGHTH = 5  # 1/8
    TWELFTH = 6  # 1/12
    SIXTEENTH = 7  # 1/16
    UNSNAPPED = 8  # 1/48 or irregular


_FRACTIONS = ("1/1", "1/2", "1/3", "1/4", "1/6", "1/8", "1/12", "1/16", "1/48")


def snap_fraction(category: int) -> str:
    """Musical fraction label for a snap category, e.g. 3 -> "1/4"."""
    return _FRACTIONS[SnapCategory(category)]


def classify(object_time: float, point: TimingPoint) -> int:
    """Classify object_time against the beat grid of its governing point.

    Returns the position in BEAT_SNAPS of the first denominator that divides
    the object's 48th-of-a-beat index, or UNSNAPPED_CATEGORY if none does.

    Raises:
        InvalidTempoError: If the point's BPM is not a finite positive number.
        InvalidTimeError: If object_time is not finite.
    """
    if not math.isfinite(object_time):
        raise InvalidTimeError(f"Object time {object_time!r} is not a finite number of ms")
    bpm = point.bpm
    if not (math.isfinite(bpm) and bpm > 0):
        raise InvalidTempoError(f"Timing point at {point.start_time}ms has invalid BPM {bpm!r}")

    beat_length = 60000.0 / bpm
    if not math.isfinite(beat_length) or beat_length <= 0:
        raise InvalidTempoError(f"BPM {bpm!r} at {point.start_time}ms gives no usable beat length")
    pos = (object_time - point.start_time + SNAP_OFFSET_MS) % beat_length

    # A tiny negative pos can round up to exactly beat_length, which is
    # the next downbeat.
    index = math.floor(SNAP_DIVISIONS * pos / beat_length) % SNAP_DIVISIONS

    for category, denominator in enumerate(BEAT_SNAPS):
        if index % denominator == 0:
            return category
    return UNSNAPPED_CATEGORY


class BeatSnapClassifier:
    """Stateless object wrapper around classify() for injection into callers."""

    def classify(self, object_time: float, point: TimingPoint) -> int:
        return classify(object_time, point)
