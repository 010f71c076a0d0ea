"""
Tests for candidate scoring.
"""

import pytest

from beatcut.beat_objects import BeatType, CandidateReason, DropMarker, MeasureInfo
from beatcut.core.candidate_builder import (
    CandidateBuilder,
    average_measure_spacing,
    build_candidates,
)
from beatcut.core.measure_detector import detect_measures

S, W = BeatType.STRONG, BeatType.WEAK


def _drop(time, intensity=0.8, silence=2.0):
    return DropMarker(time=time, intensity=intensity, type=S, silence_duration=silence)


def _measure(start, confidence=1.0):
    return MeasureInfo(start_time=start, bpm=120.0, confidence=confidence)


class TestAverageMeasureSpacing:
    """Tests for average_measure_spacing."""

    def test_mean_gap(self):
        assert average_measure_spacing([_measure(1.0), _measure(3.0), _measure(7.0)], 20.0) == pytest.approx(3.0)

    def test_single_measure_uses_region(self):
        assert average_measure_spacing([_measure(1.0)], 12.0) == pytest.approx(12.0)


class TestBuildCandidates:
    """Tests for build_candidates."""

    def test_drop_lead_and_priority(self, beat_factory):
        beats = beat_factory([(4.0, S)])
        candidates = build_candidates(beats, [], [_drop(4.0)], 0.0, 20.0)

        assert len(candidates) == 1
        assert candidates[0].reason is CandidateReason.DROP
        assert candidates[0].priority == 100.0
        assert candidates[0].time == pytest.approx(3.95)

    def test_lead_never_precedes_region_margin(self, beat_factory):
        beats = beat_factory([(5.06, S)])
        candidates = build_candidates(beats, [], [_drop(5.06)], 5.0, 20.0)
        assert candidates[0].time == pytest.approx(5.05)

    def test_drop_outside_region_ignored(self):
        assert build_candidates([], [], [_drop(25.0)], 0.0, 20.0) == []

    def test_measure_start(self, beat_factory):
        beats = beat_factory([(2.0, S), (2.5, W)])
        candidates = build_candidates(beats, [_measure(2.1, confidence=0.75)], [], 0.0, 20.0)

        start = candidates[0]
        assert start.reason is CandidateReason.MEASURE_START
        assert start.priority == pytest.approx(95.0)
        assert start.time == pytest.approx(1.97)

    def test_measure_start_deduplicated_against_drop(self, beat_factory):
        beats = beat_factory([(4.0, S)])
        candidates = build_candidates(beats, [_measure(4.0)], [_drop(4.0)], 0.0, 20.0)
        assert [c.reason for c in candidates] == [CandidateReason.DROP]

    def test_measure_midpoint(self, beat_factory):
        beats = beat_factory([
            (1.0, S), (2.0, W), (3.5, S, 0.5), (5.0, S), (7.0, W), (9.0, S),
        ])
        measures = [_measure(1.0), _measure(5.0), _measure(9.0)]
        candidates = build_candidates(beats, measures, [], 0.0, 20.0)

        mids = [c for c in candidates if c.reason is CandidateReason.MEASURE_MID]
        assert len(mids) == 1
        assert mids[0].time == pytest.approx(3.47)
        assert mids[0].priority == pytest.approx(70.0)

    def test_midpoint_requires_strong_beat(self, beat_factory):
        beats = beat_factory([(1.0, S), (3.0, W), (5.0, S), (9.0, S)])
        measures = [_measure(1.0), _measure(5.0), _measure(9.0)]
        candidates = build_candidates(beats, measures, [], 0.0, 20.0)
        assert not any(c.reason is CandidateReason.MEASURE_MID for c in candidates)

    def test_remaining_strong_beats(self, beat_factory):
        beats = beat_factory([(3.0, S, 0.5), (6.0, W), (8.0, S, 1.0)])
        candidates = build_candidates(beats, [], [], 0.0, 20.0)

        assert [c.reason for c in candidates] == [CandidateReason.STRONG_BEAT] * 2
        assert [c.time for c in candidates] == pytest.approx([7.98, 2.98])
        assert [c.priority for c in candidates] == pytest.approx([60.0, 50.0])

    def test_sorted_by_priority_with_stable_ties(self, beat_factory):
        beats = beat_factory([(2.0, S, 0.5), (4.0, S), (6.0, S, 0.5), (8.0, S)])
        candidates = build_candidates(beats, [], [_drop(8.0), _drop(4.0)], 0.0, 20.0)

        assert [c.time for c in candidates] == pytest.approx([7.95, 3.95, 1.98, 5.98])
        priorities = [c.priority for c in candidates]
        assert priorities == sorted(priorities, reverse=True)

    def test_half_bar_grid(self, half_bar_beats):
        measures = detect_measures(half_bar_beats)
        candidates = build_candidates(half_bar_beats, measures, [], 0.0, 20.0)

        assert len(candidates) == 19
        assert all(c.reason is CandidateReason.MEASURE_START for c in candidates)
        assert candidates[0].time == pytest.approx(0.97)


class TestCandidateBuilder:
    """Tests for the CandidateBuilder helpers."""

    def test_is_covered_window(self):
        builder = CandidateBuilder(0.0, 10.0)
        builder.add_drops([_drop(5.0)])

        assert builder.is_covered(5.0)
        assert not builder.is_covered(5.1)
