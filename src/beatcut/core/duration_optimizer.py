"""
Duration Optimizer Module

Shapes the display duration of generated cuts and provides the
equidistant layout used when a region holds no beats at all.
"""

import random
from dataclasses import replace
from typing import List, Optional, Sequence

from ..beat_objects import CutMarker, color_for_index
from ..config import DurationConfig, get_settings


def optimize_cut_durations(
    cuts: Sequence[CutMarker],
    end_time: float,
    config: Optional[DurationConfig] = None,
) -> List[CutMarker]:
    """
    Shrink durations so no cut's span runs into the next cut.

    Each duration becomes ``min(duration, max(floor, gap - margin))`` where
    ``gap`` reaches the next cut, or ``end_time`` for the last one.
    Applying it twice gives the same result as applying it once.

    Returns:
        New CutMarker objects sorted by time; the inputs are left untouched
    """
    cfg = config or get_settings().durations
    ordered = sorted(cuts, key=lambda cut: cut.time)

    optimized = []
    for index, cut in enumerate(ordered):
        next_time = ordered[index + 1].time if index + 1 < len(ordered) else end_time
        gap = next_time - cut.time
        duration = min(cut.duration, max(cfg.floor, gap - cfg.gap_margin))
        optimized.append(replace(cut, duration=duration))
    return optimized


def generate_equidistant_cuts(
    start_time: float,
    end_time: float,
    count: int,
    config: Optional[DurationConfig] = None,
) -> List[CutMarker]:
    """
    Evenly spaced cuts for a region with no beat data.

    Args:
        start_time: Region start in seconds
        end_time: Region end in seconds
        count: Number of cuts

    Returns:
        ``count`` cuts at ``start + interval * (i + 1)`` with
        ``interval = duration / (count + 1)``
    """
    if count <= 0:
        return []

    cfg = config or get_settings().durations
    interval = (end_time - start_time) / (count + 1)
    duration = min(cfg.fallback_cap, interval * cfg.fallback_ratio)

    return [
        CutMarker(
            time=start_time + interval * (i + 1),
            color=color_for_index(i),
            duration=duration,
        )
        for i in range(count)
    ]


def add_time_variation(
    cuts: Sequence[CutMarker],
    max_variation: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> List[CutMarker]:
    """
    Jitter cut times for a less mechanical feel.

    Each time moves by up to ``max_variation / 2`` in either direction.
    Ids, colors and durations are kept.
    """
    if max_variation is None:
        max_variation = get_settings().durations.max_variation
    rng = rng or random.Random()

    return [
        replace(cut, time=cut.time + (rng.random() - 0.5) * max_variation)
        for cut in cuts
    ]
