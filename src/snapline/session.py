"""Gameplay session: hit objects for one chart and their beat snaps."""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections import Counter
from collections.abc import Callable
from typing import Any

from snapline.config import DENSITY_WINDOW_MS
from snapline.hit_object import HitObject
from snapline.models import Chart
from snapline.snap import InvalidTempoError, InvalidTimeError
from snapline.timing import TimingPointIndex

logger = logging.getLogger(__name__)


class GameplaySession:
    """Owns the timing index and the hit objects built from a chart."""

    def __init__(self, chart: Chart) -> None:
        self.chart = chart
        self.timing_index = TimingPointIndex(chart.timing_points)
        self.objects = [HitObject.create(info) for info in chart.hit_objects]

    def apply(self, modifier: Callable[..., int], *args: Any) -> int:
        """Run a modifier over all objects. Snaps stay stale until refresh_snaps()."""
        changed = modifier(self.objects, *args)
        logger.debug("Modifier %s retimed %d objects", getattr(modifier, "__name__", modifier), changed)
        return changed

    def refresh_snaps(self) -> int:
        """Recompute every object's snap category. Returns how many succeeded.

        Objects with an unusable time, or under a timing point with an
        unusable BPM, keep no category (rendered uncolored) instead of
        failing the session.

        Raises:
            EmptyIndexError: If the chart has no timing points.
        """
        classified = 0
        for obj in self.objects:
            try:
                obj.resolve_snap(self.timing_index)
            except (InvalidTempoError, InvalidTimeError) as exc:
                logger.warning("Skipping snap for object at %.1fms: %s", obj.effective_start_time, exc)
                continue
            classified += 1
        return classified

    def snap_histogram(self) -> dict[int | None, int]:
        """Count objects per snap category (None = not classified)."""
        return dict(Counter(obj.snap_category for obj in self.objects))

    def peak_density(self, window_ms: float = DENSITY_WINDOW_MS) -> int:
        """Largest number of object starts inside any window of window_ms."""
        starts = sorted(obj.effective_start_time for obj in self.objects)
        peak = 0
        for i, start in enumerate(starts):
            j = bisect_left(starts, start + window_ms, lo=i)
            peak = max(peak, j - i)
        return peak

    def close(self) -> None:
        for obj in self.objects:
            obj.destroy()
