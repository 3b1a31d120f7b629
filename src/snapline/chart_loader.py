"""Load MIDI and MusicXML files into the Chart model."""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Iterable
from pathlib import Path

import mido

from snapline.config import DEFAULT_BPM, DEFAULT_KEY_COUNT, LONG_NOTE_MIN_MS
from snapline.models import Chart, HitObjectInfo, TimingPoint

logger = logging.getLogger(__name__)


class ChartLoadError(Exception):
    """Raised when a chart file cannot be parsed or has no usable timing."""


def load_chart(file_path: str | Path, key_count: int = DEFAULT_KEY_COUNT) -> Chart:
    """Load a MIDI or MusicXML file and return a Chart.

    Args:
        file_path: Path to a .mid, .midi, .xml, .mxl, or .musicxml file.
        key_count: Number of lanes notes are folded into by pitch.

    Raises:
        ChartLoadError: If the file cannot be parsed.
    """
    path = Path(file_path)
    if key_count < 1:
        raise ChartLoadError(f"Key count must be at least 1, got {key_count}")
    try:
        if path.suffix in (".mid", ".midi"):
            chart = _load_midi(path, key_count)
        elif path.suffix in (".xml", ".mxl", ".musicxml"):
            chart = _load_musicxml(path, key_count)
        else:
            raise ChartLoadError(f"Unsupported file format: {path.suffix}")
    except ChartLoadError:
        raise
    except Exception as exc:
        raise ChartLoadError(f"Failed to load {path.name}: {exc}") from exc

    logger.debug(
        "Loaded %s: %d timing points, %d hit objects",
        path.name, len(chart.timing_points), len(chart.hit_objects),
    )
    return chart


def build_chart(
    title: str,
    timing_points: Iterable[TimingPoint],
    hit_objects: Iterable[HitObjectInfo],
    key_count: int = DEFAULT_KEY_COUNT,
) -> Chart:
    """Assemble a Chart with both lists in time order.

    Raises:
        ChartLoadError: If there are no timing points.
    """
    points = sorted(timing_points, key=lambda p: p.start_time)
    if not points:
        raise ChartLoadError(f"{title}: chart has no timing points")
    objects = sorted(hit_objects, key=lambda o: (o.start_time, o.lane))
    return Chart(title=title, timing_points=points, hit_objects=objects, key_count=key_count)


def _lane_for_pitch(pitch: int, key_count: int) -> int:
    return pitch % key_count + 1


def _make_hit_object(start_ms: float, duration_ms: float, pitch: int, key_count: int) -> HitObjectInfo:
    end_ms = start_ms + duration_ms if duration_ms >= LONG_NOTE_MIN_MS else 0.0
    return HitObjectInfo(start_time=start_ms, end_time=end_ms, lane=_lane_for_pitch(pitch, key_count))


def _add_tempo(points: list[TimingPoint], time_ms: float, bpm: float) -> None:
    # A tempo at the same instant replaces the previous one
    if points and points[-1].start_time == time_ms:
        points[-1] = TimingPoint(start_time=time_ms, bpm=bpm)
    elif not points or points[-1].bpm != bpm:
        points.append(TimingPoint(start_time=time_ms, bpm=bpm))


def _load_midi(path: Path, key_count: int) -> Chart:
    mid = mido.MidiFile(str(path))
    points = [TimingPoint(start_time=0.0, bpm=DEFAULT_BPM)]
    objects: list[HitObjectInfo] = []
    pending: dict[int, float] = {}  # pitch -> start time (seconds)

    # Iterating a MidiFile merges tracks and converts delta times to seconds
    abs_time = 0.0
    for msg in mid:
        abs_time += msg.time

        if msg.type == "set_tempo":
            _add_tempo(points, abs_time * 1000.0, mido.tempo2bpm(msg.tempo))

        elif msg.type == "note_on" and msg.velocity > 0:
            # Close any existing note on the same pitch (overlapping notes)
            if msg.note in pending:
                start = pending.pop(msg.note)
                objects.append(
                    _make_hit_object(start * 1000.0, (abs_time - start) * 1000.0, msg.note, key_count)
                )
            pending[msg.note] = abs_time

        elif msg.type in ("note_off", "note_on"):
            if msg.note in pending:
                start = pending.pop(msg.note)
                objects.append(
                    _make_hit_object(start * 1000.0, (abs_time - start) * 1000.0, msg.note, key_count)
                )

    # Notes never released are treated as taps
    for pitch, start in pending.items():
        objects.append(_make_hit_object(start * 1000.0, 0.0, pitch, key_count))

    return build_chart(path.stem, points, objects, key_count)


def _load_musicxml(path: Path, key_count: int) -> Chart:
    from music21 import converter

    score = converter.parse(str(path))

    # (start offset in quarter lengths, start in ms, ms per quarter)
    segments: list[tuple[float, float, float]] = []
    points: list[TimingPoint] = []
    elapsed_ms = 0.0
    for start_ql, end_ql, mark in score.flatten().metronomeMarkBoundaries():
        bpm = float(mark.getQuarterBPM())
        ms_per_quarter = 60000.0 / bpm
        segments.append((float(start_ql), elapsed_ms, ms_per_quarter))
        _add_tempo(points, elapsed_ms, bpm)
        elapsed_ms += (float(end_ql) - float(start_ql)) * ms_per_quarter

    if not segments:
        segments.append((0.0, 0.0, 60000.0 / DEFAULT_BPM))
        points.append(TimingPoint(start_time=0.0, bpm=DEFAULT_BPM))
    segment_starts = [s[0] for s in segments]

    def to_ms(offset_ql: float) -> float:
        i = max(bisect_right(segment_starts, offset_ql) - 1, 0)
        start_ql, start_ms, ms_per_quarter = segments[i]
        return start_ms + (offset_ql - start_ql) * ms_per_quarter

    objects: list[HitObjectInfo] = []
    for part in score.parts:
        for n in part.flatten().notes:
            start_ql = float(n.offset)
            start_ms = to_ms(start_ql)
            duration_ms = to_ms(start_ql + float(n.duration.quarterLength)) - start_ms
            pitches = n.pitches if hasattr(n, "pitches") else [n.pitch]
            for p in pitches:
                objects.append(_make_hit_object(start_ms, duration_ms, p.midi, key_count))

    return build_chart(path.stem, points, objects, key_count)
