"""Gameplay hit objects: chart times, modifier-adjusted times, and beat snap."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from snapline.models import HitObjectInfo, HitObjectKind, TimingPoint
from snapline.snap import classify
from snapline.timing import TimingPointIndex


@runtime_checkable
class HitObjectVisual(Protocol):
    """Rendering capability supplied per object kind (tap, held note)."""

    def initialize(self, hit_object: HitObject, context: Any) -> None: ...
    def destroy(self) -> None: ...


class HitObject:
    """A chart object during gameplay.

    The source times never change. Modifiers move the effective times through
    retime(), which drops the cached snap category; callers decide when to
    call resolve_snap() again.
    """

    def __init__(self, info: HitObjectInfo, visual: HitObjectVisual | None = None) -> None:
        self.info = info
        self.visual = visual
        self._effective_start_time = info.start_time
        self._effective_end_time = info.end_time
        self._effective_kind = info.kind
        self._snap_category: int | None = None

    @classmethod
    def create(cls, info: HitObjectInfo) -> HitObject:
        return cls(info)

    def __repr__(self) -> str:
        return (
            f"HitObject(kind={self.kind.name}, lane={self.info.lane}, "
            f"start={self._effective_start_time}, end={self._effective_end_time}, "
            f"snap={self._snap_category})"
        )

    @property
    def kind(self) -> HitObjectKind:
        return self.info.kind

    @property
    def start_time(self) -> float:
        return self.info.start_time

    @property
    def end_time(self) -> float:
        return self.info.end_time

    @property
    def effective_kind(self) -> HitObjectKind:
        """Kind after modifiers; a stripped held note plays as a tap."""
        return self._effective_kind

    @property
    def effective_start_time(self) -> float:
        return self._effective_start_time

    @property
    def effective_end_time(self) -> float:
        return self._effective_end_time

    @property
    def snap_category(self) -> int | None:
        """Last category from resolve_snap(), or None if never run or retimed since."""
        return self._snap_category

    def retime(self, new_start: float, new_end: float, kind: HitObjectKind | None = None) -> None:
        self._effective_start_time = new_start
        self._effective_end_time = new_end
        if kind is not None:
            self._effective_kind = kind
        self._snap_category = None

    def timing_point(self, index: TimingPointIndex) -> TimingPoint:
        """Timing point governing the current effective start time."""
        return index.resolve(self._effective_start_time)

    def resolve_snap(self, index: TimingPointIndex) -> int:
        """Classify the effective start time and cache the result.

        Raises:
            EmptyIndexError: If the index holds no timing points.
            InvalidTempoError: If the governing point has an unusable BPM.
        """
        category = classify(self._effective_start_time, self.timing_point(index))
        self._snap_category = category
        return category

    def initialize_visual(self, context: Any) -> None:
        if self.visual is not None:
            self.visual.initialize(self, context)

    def destroy(self) -> None:
        if self.visual is not None:
            self.visual.destroy()
            self.visual = None
