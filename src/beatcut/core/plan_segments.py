"""
Timeline helpers around a cut list: plan segments, beat snapping for
manually placed cuts, and plan-count guidance for a region.
"""

import math
from typing import List, Optional, Sequence

from ..beat_objects import BeatMarker, CutMarker, PlanSegment

# Comfortable pacing is at most one plan every two seconds
SECONDS_PER_PLAN = 2.0
MIN_PLAN_CEILING = 8


def build_plan_segments(
    cuts: Sequence[CutMarker],
    start_time: float,
    end_time: float,
) -> List[PlanSegment]:
    """
    Split the active region into plans at the cut times.

    Plan 1 runs from the region start to the first cut; plan ``i + 2``
    runs from cut ``i`` to the next cut (or the region end). Cuts at or
    after the region end open no plan, and empty segments are dropped.
    """
    ordered = sorted(cuts, key=lambda cut: cut.time)
    first_cut = ordered[0].time if ordered else end_time

    segments = [PlanSegment(plan_index=1, start_time=start_time, end_time=min(first_cut, end_time))]
    for index, cut in enumerate(ordered):
        if cut.time >= end_time:
            continue
        next_time = ordered[index + 1].time if index + 1 < len(ordered) else end_time
        segments.append(PlanSegment(
            plan_index=index + 2,
            start_time=max(cut.time, start_time),
            end_time=min(next_time, end_time),
        ))

    return [segment for segment in segments if segment.end_time > segment.start_time]


def snap_to_beat(
    time: float,
    beats: Sequence[BeatMarker],
    snap_distance: float = 0.1,
    duration: Optional[float] = None,
) -> float:
    """
    Snap a manually placed cut onto a nearby beat.

    The first beat (in list order) within ``snap_distance`` replaces
    ``time``. With ``duration`` the result is clamped to ``[0, duration]``.
    """
    snapped = next((b.time for b in beats if abs(b.time - time) < snap_distance), time)
    if duration is not None:
        snapped = max(0.0, min(duration, snapped))
    return snapped


def max_recommended_plans(start_time: float, end_time: float) -> int:
    return int(math.floor((end_time - start_time) / SECONDS_PER_PLAN))


def plan_count_ceiling(start_time: float, end_time: float) -> int:
    """Largest plan count offered for the region."""
    return max(MIN_PLAN_CEILING, max_recommended_plans(start_time, end_time))
