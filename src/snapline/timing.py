"""Timing point index: which tempo segment governs a given time."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Iterator

from snapline.models import TimingPoint


class TimingError(Exception):
    """Base class for timing model failures."""


class EmptyIndexError(TimingError):
    """Raised when resolving against an index that holds no timing points."""


class UnorderedTimingPointsError(TimingError):
    """Raised when timing points are not sorted by start time."""


class TimingPointIndex:
    """Ordered, immutable collection of timing points.

    Each point is valid over ``[point.start_time, next.start_time)``; the last
    one extends forever and the first one also covers everything before it.
    """

    def __init__(self, points: Iterable[TimingPoint]) -> None:
        self._points = tuple(points)
        self._start_times = [p.start_time for p in self._points]
        for i in range(1, len(self._start_times)):
            if self._start_times[i] < self._start_times[i - 1]:
                raise UnorderedTimingPointsError(
                    f"Timing point {i} at {self._start_times[i]}ms starts before "
                    f"the previous one at {self._start_times[i - 1]}ms"
                )

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TimingPoint]:
        return iter(self._points)

    def __getitem__(self, i: int) -> TimingPoint:
        return self._points[i]

    def __repr__(self) -> str:
        return f"TimingPointIndex({len(self._points)} points)"

    @property
    def points(self) -> tuple[TimingPoint, ...]:
        return self._points

    @property
    def first(self) -> TimingPoint:
        if not self._points:
            raise EmptyIndexError("Timing point index is empty")
        return self._points[0]

    @property
    def last(self) -> TimingPoint:
        if not self._points:
            raise EmptyIndexError("Timing point index is empty")
        return self._points[-1]

    def index_of(self, query_time: float) -> int:
        """Position of the point whose interval contains query_time.

        Raises:
            EmptyIndexError: If the index holds no points.
        """
        if not self._points:
            raise EmptyIndexError("Cannot resolve a time against an empty timing point index")
        # Last point with start_time <= query_time. Equal start times resolve
        # to the later point, whose interval is the non-empty one.
        i = bisect_right(self._start_times, query_time) - 1
        return max(i, 0)

    def resolve(self, query_time: float) -> TimingPoint:
        """Return the timing point in effect at query_time."""
        return self._points[self.index_of(query_time)]
