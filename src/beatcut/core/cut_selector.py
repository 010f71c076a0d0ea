"""
Cut Selector Module

Greedy selection of exactly ``cuts_needed`` cut times from a ranked
candidate list:

1. Drops are taken unconditionally, in candidate order.
2. Remaining candidates are taken by priority when they keep the minimum
   spacing to every cut already chosen.
3. Missing slots are backfilled around ideal equidistant positions, with
   the nearest usable beat or, failing that, the nearest clear position
   without a beat.
"""

from typing import List, Optional, Sequence

from ..beat_objects import BeatMarker, Candidate, CutMarker, color_for_index
from ..config import CutTuning, DurationConfig, get_settings
from ..logger import logger

# Positions next to an existing cut sit this far past the minimum spacing
SPACING_EPSILON = 1e-6


class CutSelector:
    """Collects cuts for one region while enforcing the spacing rule."""

    def __init__(
        self,
        start_time: float,
        end_time: float,
        cuts_needed: int,
        min_cut_interval: float,
        tuning: Optional[CutTuning] = None,
        durations: Optional[DurationConfig] = None,
    ):
        settings = get_settings()
        self.start_time = start_time
        self.end_time = end_time
        self.cuts_needed = cuts_needed
        self.min_cut_interval = min_cut_interval
        self.tuning = tuning or settings.cutting
        self.durations = durations or settings.durations
        self.selected: List[CutMarker] = []

    @property
    def active_duration(self) -> float:
        return self.end_time - self.start_time

    @property
    def is_full(self) -> bool:
        return len(self.selected) >= self.cuts_needed

    def has_room(self) -> bool:
        """Whether the region can hold ``cuts_needed`` cuts at the minimum spacing."""
        return self.active_duration >= self.cuts_needed * self.min_cut_interval

    def is_clear(self, time: float) -> bool:
        return all(abs(cut.time - time) >= self.min_cut_interval for cut in self.selected)

    def add(self, time: float) -> None:
        self.selected.append(CutMarker(
            time=time,
            color=color_for_index(len(self.selected)),
            duration=self.durations.placeholder,
        ))

    def take_drops(self, candidates: Sequence[Candidate]) -> int:
        forced = 0
        for candidate in candidates:
            if candidate.is_drop and not self.is_full:
                self.add(candidate.time)
                forced += 1
        return forced

    def take_ranked(self, candidates: Sequence[Candidate]) -> None:
        for candidate in candidates:
            if self.is_full:
                break
            if candidate.is_drop:
                continue
            if self.is_clear(candidate.time):
                self.add(candidate.time)

    def ideal_time(self, slot: int) -> float:
        """Equidistant position of the 1-based ``slot``."""
        return self.start_time + slot * self.active_duration / (self.cuts_needed + 1)

    def backfill(self, beats: Sequence[BeatMarker]) -> None:
        margin = self.start_time + self.tuning.region_margin
        while not self.is_full:
            ideal = self.ideal_time(len(self.selected) + 1)

            usable = [
                (beat, max(margin, beat.time - self.tuning.backfill_lead))
                for beat in beats
            ]
            usable = [(beat, time) for beat, time in usable if self.is_clear(time)]

            if usable:
                # First beat in list order wins ties
                _, time = min(usable, key=lambda pair: abs(pair[0].time - ideal))
                self.add(time)
            else:
                self.add(self.synthetic_time(ideal))

    def synthetic_time(self, ideal: float) -> float:
        """
        Beatless cut position for a backfill slot.

        Tries ``ideal`` itself, then the other equidistant slots nearest to
        it, then the positions just outside the spacing of existing cuts.
        Falls back to ``ideal`` only when nothing in the region is clear.
        """
        if self.is_clear(ideal):
            return ideal

        slots = [self.ideal_time(k) for k in range(1, self.cuts_needed + 1)]
        clear_slots = [t for t in slots if self.is_clear(t)]
        if clear_slots:
            return min(clear_slots, key=lambda t: abs(t - ideal))

        margin = self.start_time + self.tuning.region_margin
        reach = self.min_cut_interval + SPACING_EPSILON
        edges = [margin]
        for cut in self.selected:
            edges.extend((cut.time - reach, cut.time + reach))
        clear_edges = [t for t in edges if margin <= t < self.end_time and self.is_clear(t)]
        if clear_edges:
            return min(clear_edges, key=lambda t: abs(t - ideal))

        logger.debug(f"No clear position left near {ideal:.2f}s")
        return ideal

    def result(self) -> List[CutMarker]:
        return sorted(self.selected, key=lambda cut: cut.time)


def select_cuts(
    candidates: Sequence[Candidate],
    beats: Sequence[BeatMarker],
    start_time: float,
    end_time: float,
    cuts_needed: int,
    min_cut_interval: Optional[float] = None,
    tuning: Optional[CutTuning] = None,
) -> List[CutMarker]:
    """
    Pick cut times from ranked candidates.

    Args:
        candidates: Output of build_candidates (descending priority)
        beats: Beats inside the active region, used for backfilling
        start_time: Region start in seconds
        end_time: Region end in seconds
        cuts_needed: Number of cuts to place
        min_cut_interval: Minimum spacing between cuts (uses tuning if None)
        tuning: Lead times and spacing (uses global settings if None)

    Returns:
        Cuts sorted by time with placeholder durations, or [] when the
        region is too short for the requested spacing
    """
    tuning = tuning or get_settings().cutting
    if min_cut_interval is None:
        min_cut_interval = tuning.min_cut_interval

    if cuts_needed <= 0:
        return []

    selector = CutSelector(start_time, end_time, cuts_needed, min_cut_interval, tuning)
    if not selector.has_room():
        logger.warning(
            f"Not enough duration for {cuts_needed} cuts: "
            f"{selector.active_duration:.2f}s < {cuts_needed} x {min_cut_interval:.2f}s"
        )
        return []

    forced = selector.take_drops(candidates)
    logger.debug(f"{forced} drops forced, {cuts_needed - len(selector.selected)} cuts left to place")

    selector.take_ranked(candidates)
    if not selector.is_full:
        logger.debug(f"Backfilling {cuts_needed - len(selector.selected)} cuts around equidistant slots")
        selector.backfill(beats)

    return selector.result()
