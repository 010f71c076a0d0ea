"""
Tests for drop detection.
"""

import pytest

from beatcut.beat_objects import BeatType, DropMarker
from beatcut.config import DropConfig
from beatcut.core.drop_detector import detect_drops

S, W = BeatType.STRONG, BeatType.WEAK


class TestDetectDrops:
    """Tests for detect_drops."""

    def test_strong_beat_after_gap(self, beat_factory):
        beats = beat_factory([(1.0, S), (2.0, S), (4.0, S, 0.5)])
        drops = detect_drops(beats)

        assert len(drops) == 1
        drop = drops[0]
        assert isinstance(drop, DropMarker)
        assert drop.is_drop
        assert drop.time == 4.0
        assert drop.intensity == 0.5
        assert drop.silence_duration == pytest.approx(2.0)

    def test_short_gap_ignored(self, beat_factory):
        assert detect_drops(beat_factory([(1.0, S), (2.0, S), (3.0, S)])) == []

    def test_gap_above_threshold(self, beat_factory):
        drops = detect_drops(beat_factory([(1.0, S), (2.25, S)]))
        assert [d.time for d in drops] == [2.25]

    def test_weak_beats_do_not_break_silence(self, beat_factory):
        beats = beat_factory([(1.0, S), (1.5, W), (2.0, W), (2.5, W), (3.0, S)])
        assert [d.time for d in detect_drops(beats)] == [3.0]

    def test_quiet_hit_is_not_a_drop(self, beat_factory):
        """Intensity must exceed 0.2."""
        assert detect_drops(beat_factory([(1.0, S), (4.0, S, 0.2)])) == []

    def test_first_strong_beat_never_a_drop(self, beat_factory):
        assert detect_drops(beat_factory([(1.0, W), (6.0, S)])) == []

    def test_custom_threshold(self, beat_factory):
        beats = beat_factory([(1.0, S), (2.0, S)])
        assert len(detect_drops(beats, DropConfig(min_silence=1.0))) == 1

    def test_breakdown(self, breakdown_beats):
        drops = detect_drops(breakdown_beats)
        assert [d.time for d in drops] == [11.0]
        assert drops[0].silence_duration == pytest.approx(3.0)
