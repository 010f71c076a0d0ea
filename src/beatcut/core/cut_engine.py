"""
Cut Placement Engine

Places beat-synced cuts in an active region of a track.

Pipeline:
1. Restrict the beat list to the region (no beats -> equidistant layout)
2. Detect the measure grid and the drops
3. Score candidates (drops > measure starts > measure midpoints > strong beats)
4. Greedily select ``plan_count - 1`` cuts honoring the minimum spacing
5. Shrink display durations so cuts never overlap

Each call is a pure function of its inputs apart from the random cut ids;
nothing is shared between calls.

Usage:
    from beatcut import generate_cuts

    cuts = generate_cuts(start_time=0.0, end_time=30.0, plan_count=6, beat_markers=beats)
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..beat_objects import (
    BeatMarker,
    CutMarker,
    DropMarker,
    MeasureInfo,
    beats_in_region,
)
from ..config import Settings, get_settings
from ..exceptions import InvalidRegionError, MalformedBeatDataError
from ..logger import log_step, log_success, log_warning, logger
from .candidate_builder import build_candidates
from .cut_selector import select_cuts
from .drop_detector import detect_drops
from .duration_optimizer import generate_equidistant_cuts, optimize_cut_durations
from .measure_detector import detect_measure_grid


def validate_beat_markers(beats: Sequence[BeatMarker]) -> None:
    """
    Check that beat times and intensities are finite, non-negative and
    that times ascend.

    Raises:
        MalformedBeatDataError: On the first offending beat
    """
    previous = None
    for index, beat in enumerate(beats):
        if not math.isfinite(beat.time) or beat.time < 0:
            raise MalformedBeatDataError(f"Beat {index} has invalid time {beat.time!r}", index=index)
        if not math.isfinite(beat.intensity) or beat.intensity < 0:
            raise MalformedBeatDataError(f"Beat {index} has invalid intensity {beat.intensity!r}", index=index)
        if previous is not None and beat.time < previous:
            raise MalformedBeatDataError(
                f"Beat {index} at {beat.time:.3f}s precedes beat {index - 1} at {previous:.3f}s",
                index=index,
            )
        previous = beat.time


def validate_region(start_time: float, end_time: float) -> None:
    """
    Raises:
        InvalidRegionError: If a bound is not finite or start is not before end
    """
    if not (math.isfinite(start_time) and math.isfinite(end_time)):
        raise InvalidRegionError(f"Region bounds must be finite, got {start_time!r} - {end_time!r}")
    if start_time >= end_time:
        raise InvalidRegionError(f"Region start {start_time} must be before end {end_time}")


@dataclass
class BeatAnalysis:
    """Musical structure found in one region."""
    beats: List[BeatMarker]
    measures: List[MeasureInfo] = field(default_factory=list)
    drops: List[DropMarker] = field(default_factory=list)
    measure_duration: Optional[float] = None

    @property
    def bpm(self) -> Optional[float]:
        return self.measures[0].bpm if self.measures else None


class CutPlacementEngine:
    """
    Decides where to cut.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def verbose(self) -> bool:
        return self.settings.features.verbose

    def analyze(self, beat_markers: Sequence[BeatMarker], start_time: float, end_time: float) -> BeatAnalysis:
        """Detect measures and drops among the beats inside the region."""
        region = beats_in_region(beat_markers, start_time, end_time)
        measure_duration, measures = detect_measure_grid(region, self.settings.measures)
        return BeatAnalysis(
            beats=region,
            measures=measures,
            drops=detect_drops(region, self.settings.drops),
            measure_duration=measure_duration,
        )

    def generate(
        self,
        start_time: float,
        end_time: float,
        plan_count: int,
        beat_markers: Sequence[BeatMarker],
        min_cut_interval: Optional[float] = None,
        prioritize_strong_beats: bool = True,
        validate: Optional[bool] = None,
    ) -> List[CutMarker]:
        """
        Generate ``plan_count - 1`` beat-synced cuts.

        Args:
            start_time: Region start in seconds (must precede end_time)
            end_time: Region end in seconds
            plan_count: Number of plans (>= 2)
            beat_markers: Beats ascending by time
            min_cut_interval: Minimum spacing between cuts (default from settings, 0.8s)
            prioritize_strong_beats: Reserved; strong beats are always prioritized
            validate: Check the region and beat list first (default from settings)

        Returns:
            Cuts sorted by time, or [] when plan_count < 2 or the region
            cannot hold the cuts at the requested spacing
        """
        tuning = self.settings.cutting
        if min_cut_interval is None:
            min_cut_interval = tuning.min_cut_interval

        if plan_count < 2:
            logger.debug(f"plan_count={plan_count} needs no cuts")
            return []

        if validate is None:
            validate = self.settings.features.validate_beats
        if validate:
            validate_region(start_time, end_time)
            validate_beat_markers(beat_markers)

        cuts_needed = plan_count - 1
        active_duration = end_time - start_time
        if active_duration < cuts_needed * min_cut_interval:
            log_warning(
                f"Not enough duration for the requested number of cuts "
                f"({active_duration:.2f}s < {cuts_needed} x {min_cut_interval:.2f}s)"
            )
            return []

        analysis = self.analyze(beat_markers, start_time, end_time)
        if not analysis.beats:
            logger.debug("No beats in region, using equidistant cuts")
            return generate_equidistant_cuts(start_time, end_time, cuts_needed, self.settings.durations)

        if self.verbose:
            log_step(f"Detected {len(analysis.measures)} measures and {len(analysis.drops)} drops", "🎵")

        candidates = build_candidates(
            analysis.beats, analysis.measures, analysis.drops, start_time, end_time, tuning
        )
        logger.debug(
            f"{len(candidates)} candidates: "
            + ", ".join(f"{c.reason.value}@{c.time:.2f}s ({c.priority:.0f})" for c in candidates[:8])
        )

        cuts = select_cuts(
            candidates, analysis.beats, start_time, end_time, cuts_needed, min_cut_interval, tuning
        )
        final = optimize_cut_durations(cuts, end_time, self.settings.durations)

        if self.verbose:
            log_success(f"Generated {len(final)} cuts: " + ", ".join(f"{c.time:.2f}s" for c in final))
        return final


def generate_cuts(
    start_time: float,
    end_time: float,
    plan_count: int,
    beat_markers: Sequence[BeatMarker],
    min_cut_interval: Optional[float] = None,
    prioritize_strong_beats: bool = True,
) -> List[CutMarker]:
    """Convenience wrapper around CutPlacementEngine.generate with global settings."""
    return CutPlacementEngine().generate(
        start_time,
        end_time,
        plan_count,
        beat_markers,
        min_cut_interval=min_cut_interval,
        prioritize_strong_beats=prioritize_strong_beats,
    )
