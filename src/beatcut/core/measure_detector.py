"""
Measure Detector Module

Infers a periodic measure grid from the spacing of strong beats.

The dominant strong-beat interval is taken as one measure (4 beats by
default). Strong beats are then walked against that grid starting at the
first strong beat; beats close enough to the expected slot become
measure starts, the rest are skipped.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..beat_objects import BeatMarker, MeasureInfo, beat_times, strong_beats
from ..config import MeasureConfig, get_settings
from ..logger import logger


def intervals_in_range(times: np.ndarray, bounds: Tuple[float, float]) -> np.ndarray:
    """Consecutive differences of ``times`` strictly inside ``bounds``."""
    if len(times) < 2:
        return np.array([], dtype=float)
    intervals = np.diff(times)
    low, high = bounds
    return intervals[(intervals > low) & (intervals < high)]


def cluster_intervals(intervals: Sequence[float], max_gap: float) -> List[List[float]]:
    """
    Group sorted intervals whose neighbours differ by less than ``max_gap``.

    Args:
        intervals: Interval lengths in seconds (any order)
        max_gap: Largest step allowed inside one cluster

    Returns:
        Clusters in ascending order of their values
    """
    values = sorted(float(v) for v in intervals)
    if not values:
        return []

    clusters = []
    current = [values[0]]
    for prev, value in zip(values, values[1:]):
        if value - prev < max_gap:
            current.append(value)
        else:
            clusters.append(current)
            current = [value]
    clusters.append(current)
    return clusters


def estimate_measure_duration(
    beats: Sequence[BeatMarker],
    config: Optional[MeasureConfig] = None,
) -> Optional[float]:
    """
    Mean of the dominant strong-beat interval cluster.

    Returns:
        Measure length in seconds, or None when no periodicity is found
    """
    cfg = config or get_settings().measures

    if len(beats) < cfg.min_beats:
        return None

    strong = strong_beats(beats)
    if len(strong) < cfg.min_strong_beats:
        return None

    measure_intervals = intervals_in_range(beat_times(strong), cfg.measure_interval_range)
    if len(measure_intervals) < cfg.min_measure_intervals:
        return None

    clusters = cluster_intervals(measure_intervals, cfg.cluster_gap)
    # First largest cluster wins ties
    dominant = max(clusters, key=len)
    if len(dominant) < cfg.min_cluster_size:
        return None

    return float(np.mean(dominant))


def detect_measure_grid(
    beats: Sequence[BeatMarker],
    config: Optional[MeasureConfig] = None,
) -> Tuple[Optional[float], List[MeasureInfo]]:
    """
    Measure duration and confident measure starts in one pass.

    Returns:
        ``(measure_duration, measures)``; ``(None, [])`` when the beat list
        shows no reliable periodicity
    """
    cfg = config or get_settings().measures

    measure_duration = estimate_measure_duration(beats, cfg)
    if measure_duration is None:
        return None, []

    audible = [b for b in beats if b.intensity > cfg.intensity_floor]
    beat_intervals = intervals_in_range(beat_times(audible), cfg.beat_interval_range)
    if len(beat_intervals) > 0:
        logger.debug(f"Median beat period: {float(np.median(beat_intervals)):.3f}s over {len(beat_intervals)} intervals")

    bpm = 60.0 / (measure_duration / cfg.beats_per_measure)
    tolerance = measure_duration * cfg.grid_tolerance

    measures = []
    strong = strong_beats(beats)
    expected = strong[0].time
    for beat in strong:
        offset = abs(beat.time - expected)
        if offset < tolerance:
            confidence = max(cfg.confidence_floor, 1.0 - offset / measure_duration)
            measures.append(MeasureInfo(start_time=beat.time, bpm=bpm, confidence=confidence))
            expected += measure_duration

    logger.debug(f"Measure grid: {measure_duration:.3f}s ({bpm:.1f} BPM), {len(measures)} matches")

    return measure_duration, [m for m in measures if m.confidence > cfg.min_confidence]


def detect_measures(
    beats: Sequence[BeatMarker],
    config: Optional[MeasureConfig] = None,
) -> List[MeasureInfo]:
    """
    Detect measure starts in a beat list.

    Args:
        beats: Beats of the active region, ascending by time
        config: Detection thresholds (uses global settings if None)

    Returns:
        Confident MeasureInfo entries in time order, or [] when the beat
        list shows no reliable periodicity
    """
    _, measures = detect_measure_grid(beats, config)
    return measures
