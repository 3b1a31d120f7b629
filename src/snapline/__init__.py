"""Timing-point lookup and beat-snap classification for rhythm game charts."""

from snapline.hit_object import HitObject, HitObjectVisual
from snapline.models import Chart, HitObjectInfo, HitObjectKind, TimingPoint
from snapline.snap import BeatSnapClassifier, InvalidTempoError, InvalidTimeError, SnapCategory, classify
from snapline.timing import EmptyIndexError, TimingError, TimingPointIndex

__all__ = [
    "BeatSnapClassifier",
    "Chart",
    "EmptyIndexError",
    "HitObject",
    "HitObjectInfo",
    "HitObjectKind",
    "HitObjectVisual",
    "InvalidTempoError",
    "InvalidTimeError",
    "SnapCategory",
    "TimingError",
    "TimingPoint",
    "TimingPointIndex",
    "classify",
]
