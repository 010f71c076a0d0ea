"""
Candidate Builder Module

Merges drops, measure starts, measure midpoints and the remaining strong
beats into one priority-ordered list of cut positions.

Priority bands:
    drop            100
    measure_start   80-100 (by measure confidence)
    measure_mid     60-80  (by beat intensity)
    strong_beat     40-60  (by beat intensity)

Each candidate time is moved slightly before its beat (the lead), so the
picture change is perceived in sync with the sound.
"""

from typing import List, Optional, Sequence

from ..beat_objects import (
    BeatMarker,
    Candidate,
    CandidateReason,
    DropMarker,
    MeasureInfo,
)
from ..config import CutTuning, get_settings


def average_measure_spacing(measures: Sequence[MeasureInfo], active_duration: float) -> float:
    """
    Mean gap between consecutive measure starts.

    With a single measure the active region is treated as one measure.
    """
    if len(measures) > 1:
        return (measures[-1].start_time - measures[0].start_time) / (len(measures) - 1)
    return active_duration / max(1, len(measures))


class CandidateBuilder:
    """
    Accumulates candidates rule by rule.

    Rules run in precedence order; every rule after the drop rule skips
    beats already covered by an earlier candidate.
    """

    def __init__(self, start_time: float, end_time: float, tuning: Optional[CutTuning] = None):
        self.start_time = start_time
        self.end_time = end_time
        self.tuning = tuning or get_settings().cutting
        self.candidates: List[Candidate] = []

    @property
    def active_duration(self) -> float:
        return self.end_time - self.start_time

    def lead(self, time: float, offset: float) -> float:
        """Move ``time`` earlier by ``offset`` without leaving the region."""
        return max(self.start_time + self.tuning.region_margin, time - offset)

    def is_covered(self, time: float) -> bool:
        return any(abs(c.time - time) < self.tuning.dedup_window for c in self.candidates)

    def _add(self, beat: BeatMarker, offset: float, priority: float, reason: CandidateReason) -> None:
        self.candidates.append(Candidate(
            time=self.lead(beat.time, offset),
            intensity=beat.intensity,
            type=beat.type,
            priority=priority,
            reason=reason,
        ))

    def add_drops(self, drops: Sequence[DropMarker]) -> None:
        t = self.tuning
        for drop in drops:
            if self.start_time < drop.time < self.end_time:
                self._add(drop, t.drop_lead, t.drop_priority, CandidateReason.DROP)

    def add_measure_starts(self, beats: Sequence[BeatMarker], measures: Sequence[MeasureInfo]) -> None:
        t = self.tuning
        for measure in measures:
            beat = next(
                (b for b in beats if abs(b.time - measure.start_time) < t.measure_match_window),
                None,
            )
            if beat is not None and not self.is_covered(beat.time):
                priority = t.measure_start_base + measure.confidence * t.measure_start_scale
                self._add(beat, t.measure_start_lead, priority, CandidateReason.MEASURE_START)

    def add_measure_midpoints(self, beats: Sequence[BeatMarker], measures: Sequence[MeasureInfo]) -> None:
        if not measures:
            return

        t = self.tuning
        spacing = average_measure_spacing(measures, self.active_duration)
        window = spacing * t.measure_mid_tolerance

        for measure in measures:
            target = measure.start_time + spacing / 2
            beat = next(
                (b for b in beats if b.is_strong and abs(b.time - target) < window),
                None,
            )
            if beat is not None and not self.is_covered(beat.time):
                priority = t.measure_mid_base + beat.intensity * t.measure_mid_scale
                self._add(beat, t.measure_mid_lead, priority, CandidateReason.MEASURE_MID)

    def add_strong_beats(self, beats: Sequence[BeatMarker]) -> None:
        t = self.tuning
        for beat in beats:
            if beat.is_strong and not self.is_covered(beat.time):
                priority = t.strong_beat_base + beat.intensity * t.strong_beat_scale
                self._add(beat, t.strong_beat_lead, priority, CandidateReason.STRONG_BEAT)

    def ranked(self) -> List[Candidate]:
        """Candidates by descending priority; ties keep discovery order."""
        return sorted(self.candidates, key=lambda c: -c.priority)


def build_candidates(
    beats: Sequence[BeatMarker],
    measures: Sequence[MeasureInfo],
    drops: Sequence[DropMarker],
    start_time: float,
    end_time: float,
    tuning: Optional[CutTuning] = None,
) -> List[Candidate]:
    """
    Build the priority-ordered candidate list for one region.

    Args:
        beats: Beats inside the active region, ascending by time
        measures: Output of detect_measures
        drops: Output of detect_drops
        start_time: Region start in seconds
        end_time: Region end in seconds
        tuning: Lead times and priority bands (uses global settings if None)

    Returns:
        Candidates sorted by descending priority
    """
    builder = CandidateBuilder(start_time, end_time, tuning)
    builder.add_drops(drops)
    builder.add_measure_starts(beats, measures)
    builder.add_measure_midpoints(beats, measures)
    builder.add_strong_beats(beats)
    return builder.ranked()
