"""
Tests for duration shaping, the equidistant fallback and time variation.
"""

import random

import pytest

from beatcut.beat_objects import CUT_COLORS, CutMarker
from beatcut.config import DurationConfig
from beatcut.core.duration_optimizer import (
    add_time_variation,
    generate_equidistant_cuts,
    optimize_cut_durations,
)


def _cut(time, duration=1.0):
    return CutMarker(time=time, color=CUT_COLORS[0], duration=duration)


class TestOptimizeCutDurations:
    """Tests for optimize_cut_durations."""

    def test_shrinks_to_gap(self):
        cuts = [_cut(1.0), _cut(1.5), _cut(5.0)]
        optimized = optimize_cut_durations(cuts, end_time=6.0)
        assert [c.duration for c in optimized] == pytest.approx([0.4, 1.0, 0.9])

    def test_floor(self):
        optimized = optimize_cut_durations([_cut(1.0), _cut(1.2)], end_time=10.0)
        assert optimized[0].duration == pytest.approx(0.3)

    def test_never_lengthens(self):
        optimized = optimize_cut_durations([_cut(1.0, duration=0.5)], end_time=10.0)
        assert optimized[0].duration == pytest.approx(0.5)

    def test_sorts_and_keeps_identity_fields(self):
        late, early = _cut(5.0), _cut(1.0)
        optimized = optimize_cut_durations([late, early], end_time=10.0)

        assert [c.time for c in optimized] == [1.0, 5.0]
        assert [c.id for c in optimized] == [early.id, late.id]

    def test_inputs_untouched(self):
        cuts = [_cut(1.0), _cut(1.5)]
        optimize_cut_durations(cuts, end_time=2.0)
        assert [c.duration for c in cuts] == [1.0, 1.0]

    def test_idempotent(self):
        once = optimize_cut_durations([_cut(1.0), _cut(1.5), _cut(3.0)], end_time=3.2)
        twice = optimize_cut_durations(once, end_time=3.2)
        assert [c.duration for c in twice] == pytest.approx([c.duration for c in once])

    def test_empty(self):
        assert optimize_cut_durations([], end_time=10.0) == []


class TestGenerateEquidistantCuts:
    """Tests for generate_equidistant_cuts."""

    def test_even_spacing(self):
        cuts = generate_equidistant_cuts(0.0, 20.0, 4)
        assert [c.time for c in cuts] == pytest.approx([4.0, 8.0, 12.0, 16.0])
        assert all(c.duration == pytest.approx(1.0) for c in cuts)

    def test_duration_follows_interval(self):
        cuts = generate_equidistant_cuts(10.0, 12.0, 3)
        assert [c.time for c in cuts] == pytest.approx([10.5, 11.0, 11.5])
        assert cuts[0].duration == pytest.approx(0.4)

    def test_colors_cycle(self):
        cuts = generate_equidistant_cuts(0.0, 70.0, 7)
        assert [c.color for c in cuts] == list(CUT_COLORS) + [CUT_COLORS[0]]

    def test_zero_count(self):
        assert generate_equidistant_cuts(0.0, 10.0, 0) == []

    def test_custom_config(self):
        config = DurationConfig(fallback_cap=0.5)
        cuts = generate_equidistant_cuts(0.0, 20.0, 1, config)
        assert cuts[0].duration == pytest.approx(0.5)


class TestAddTimeVariation:
    """Tests for add_time_variation."""

    def test_within_bounds(self):
        cuts = [_cut(float(t)) for t in range(1, 20)]
        varied = add_time_variation(cuts, max_variation=0.2, rng=random.Random(7))
        for original, moved in zip(cuts, varied):
            assert abs(moved.time - original.time) <= 0.1

    def test_keeps_ids_and_colors(self):
        cuts = [_cut(2.0), _cut(4.0)]
        varied = add_time_variation(cuts, rng=random.Random(1))
        assert [c.id for c in varied] == [c.id for c in cuts]
        assert [c.color for c in varied] == [c.color for c in cuts]

    def test_seeded_is_reproducible(self):
        cuts = [_cut(2.0), _cut(4.0)]
        first = add_time_variation(cuts, 0.2, random.Random(42))
        second = add_time_variation(cuts, 0.2, random.Random(42))
        assert [c.time for c in first] == [c.time for c in second]

    def test_zero_variation(self):
        varied = add_time_variation([_cut(3.0)], max_variation=0.0)
        assert varied[0].time == 3.0
