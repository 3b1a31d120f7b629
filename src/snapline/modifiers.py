"""Gameplay modifiers that retime hit objects after the chart is loaded."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from snapline.hit_object import HitObject
from snapline.models import HitObjectKind


def strip_long_notes(objects: Iterable[HitObject]) -> int:
    """Turn held notes into taps. Returns how many objects changed."""
    changed = 0
    for obj in objects:
        if obj.effective_kind == HitObjectKind.HOLD:
            obj.retime(obj.effective_start_time, 0.0, kind=HitObjectKind.TAP)
            changed += 1
    return changed


def shift(objects: Iterable[HitObject], offset_ms: float) -> int:
    """Move every object by offset_ms (negative = earlier). Taps keep end 0."""
    changed = 0
    for obj in objects:
        end = 0.0
        if obj.effective_kind == HitObjectKind.HOLD:
            end = obj.effective_end_time + offset_ms
        obj.retime(obj.effective_start_time + offset_ms, end)
        changed += 1
    return changed


MODIFIERS: dict[str, Callable[..., int]] = {
    "no-long-notes": strip_long_notes,
    "shift": shift,
}
