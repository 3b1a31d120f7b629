"""Tests for chart loading."""

import mido
import pytest

from snapline.chart_loader import ChartLoadError, build_chart, load_chart
from snapline.models import HitObjectInfo, HitObjectKind, TimingPoint

TICKS_PER_BEAT = 480


def _write_midi(path, events, tempo=None):
    """events: (delta_ticks, message) pairs on one track."""
    mid = mido.MidiFile(ticks_per_beat=TICKS_PER_BEAT)
    track = mido.MidiTrack()
    mid.tracks.append(track)
    if tempo is not None:
        track.append(mido.MetaMessage("set_tempo", tempo=tempo, time=0))
    for delta, msg in events:
        track.append(msg.copy(time=delta))
    mid.save(str(path))
    return path


def test_midi_notes_become_hit_objects(tmp_path):
    path = _write_midi(tmp_path / "song.mid", [
        (0, mido.Message("note_on", note=60, velocity=90)),
        (120, mido.Message("note_off", note=60)),
        (360, mido.Message("note_on", note=61, velocity=90)),
        (960, mido.Message("note_off", note=61)),
    ])
    chart = load_chart(path)
    assert chart.title == "song"
    assert chart.timing_points == [TimingPoint(start_time=0.0, bpm=120.0)]

    tap, hold = chart.hit_objects
    # 120 BPM default: 480 ticks = 500ms
    assert tap.start_time == pytest.approx(0.0)
    assert tap.end_time == 0.0
    assert tap.kind == HitObjectKind.TAP
    assert tap.lane == 60 % 4 + 1
    assert hold.start_time == pytest.approx(500.0)
    assert hold.end_time == pytest.approx(1500.0)
    assert hold.kind == HitObjectKind.HOLD
    assert hold.lane == 61 % 4 + 1


def test_midi_tempo_changes_become_timing_points(tmp_path):
    path = _write_midi(
        tmp_path / "tempo.mid",
        [
            (0, mido.Message("note_on", note=60, velocity=90)),
            (480, mido.Message("note_off", note=60)),
            (0, mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(150))),
            (480, mido.Message("note_on", note=62, velocity=90)),
            (0, mido.Message("note_off", note=62)),
        ],
        tempo=mido.bpm2tempo(100),
    )
    chart = load_chart(path)
    assert len(chart.timing_points) == 2
    first, second = chart.timing_points
    assert first.start_time == 0.0
    assert first.bpm == pytest.approx(100.0)
    assert second.start_time == pytest.approx(600.0)
    assert second.bpm == pytest.approx(150.0)
    assert chart.hit_objects[-1].start_time == pytest.approx(1000.0)


def test_key_count_folds_lanes(tmp_path):
    path = _write_midi(tmp_path / "lanes.mid", [
        (0, mido.Message("note_on", note=64, velocity=90)),
        (10, mido.Message("note_off", note=64)),
    ])
    chart = load_chart(path, key_count=7)
    assert chart.key_count == 7
    assert chart.hit_objects[0].lane == 64 % 7 + 1


def test_unsupported_format(tmp_path):
    path = tmp_path / "chart.qua"
    path.write_text("")
    with pytest.raises(ChartLoadError, match="Unsupported"):
        load_chart(path)


def test_unreadable_midi_is_wrapped(tmp_path):
    path = tmp_path / "broken.mid"
    path.write_bytes(b"not a midi file")
    with pytest.raises(ChartLoadError, match="broken.mid"):
        load_chart(path)


def test_build_chart_sorts_and_requires_timing():
    chart = build_chart(
        "x",
        [TimingPoint(start_time=500.0, bpm=90.0), TimingPoint(start_time=0.0, bpm=120.0)],
        [HitObjectInfo(start_time=300.0, lane=2), HitObjectInfo(start_time=100.0, lane=1)],
    )
    assert [p.start_time for p in chart.timing_points] == [0.0, 500.0]
    assert [o.start_time for o in chart.hit_objects] == [100.0, 300.0]
    assert chart.length == 300.0
    with pytest.raises(ChartLoadError):
        build_chart("empty", [], [])


def test_musicxml_offsets_follow_metronome_marks(tmp_path):
    music21 = pytest.importorskip("music21")
    part = music21.stream.Part()
    part.append(music21.tempo.MetronomeMark(number=60))
    part.append(music21.note.Note("C4", quarterLength=1))
    part.append(music21.note.Note("D4", quarterLength=2))
    score = music21.stream.Score()
    score.insert(0, part)
    path = tmp_path / "melody.musicxml"
    score.write("musicxml", fp=str(path))

    chart = load_chart(path)
    assert chart.timing_points == [TimingPoint(start_time=0.0, bpm=60.0)]
    first, second = chart.hit_objects
    assert first.start_time == pytest.approx(0.0)
    assert first.end_time == pytest.approx(1000.0)
    assert second.start_time == pytest.approx(1000.0)
    assert second.end_time == pytest.approx(3000.0)
