"""
Shared fixtures: synthetic beat lists with known musical structure.

All times are multiples of 0.5s so grid arithmetic stays exact.
"""

import pytest

from beatcut.beat_objects import BeatMarker, BeatType
from beatcut.config import Settings


def _beat(time, type_=BeatType.WEAK, intensity=None):
    if intensity is None:
        intensity = {BeatType.STRONG: 0.9, BeatType.MEDIUM: 0.5, BeatType.WEAK: 0.3}[BeatType(type_)]
    return BeatMarker(time=time, intensity=intensity, type=type_)


@pytest.fixture
def beat_factory():
    """Build a sorted beat list from (time, type[, intensity]) tuples."""
    def make(entries):
        beats = [_beat(*entry) for entry in entries]
        return sorted(beats, key=lambda b: b.time)
    return make


@pytest.fixture
def settings():
    """Default settings, independent of the process environment."""
    return Settings()


@pytest.fixture
def half_bar_beats():
    """
    120 BPM, strong hits on beats 1 and 3 (every 1.0s from 1.0 to 19.0),
    weak off-beats in between. Region 0-20.
    """
    beats = []
    for step in range(2, 40):
        time = step * 0.5
        beats.append(_beat(time, BeatType.STRONG if step % 2 == 0 else BeatType.WEAK))
    return beats


@pytest.fixture
def breakdown_beats():
    """
    Strong hits every 1.0s, silent between 8.0 and 11.0 apart from weak
    ticks, so 11.0 is the only drop (3.0s of silence). Region 0-20.
    """
    beats = []
    for step in range(2, 40):
        time = step * 0.5
        strong = step % 2 == 0 and not 8.0 < time < 11.0
        beats.append(_beat(time, BeatType.STRONG if strong else BeatType.WEAK))
    return beats


@pytest.fixture
def single_drop_beats():
    """One drop at 10.0 after 2.0s without strong beats, weak beats scattered."""
    return [
        _beat(2.0, BeatType.WEAK, 0.2),
        _beat(4.0, BeatType.WEAK, 0.2),
        _beat(6.0, BeatType.WEAK, 0.2),
        _beat(8.0, BeatType.STRONG, 0.5),
        _beat(10.0, BeatType.STRONG, 0.5),
        _beat(13.0, BeatType.WEAK, 0.2),
        _beat(15.5, BeatType.WEAK, 0.2),
        _beat(18.0, BeatType.WEAK, 0.2),
    ]
