"""
Drop Detector Module

A drop is a strong beat arriving after an unusually long stretch without
any strong beat, e.g. the hit after a breakdown.
"""

from typing import List, Optional, Sequence

from ..beat_objects import BeatMarker, DropMarker, strong_beats
from ..config import DropConfig, get_settings


def detect_drops(
    beats: Sequence[BeatMarker],
    config: Optional[DropConfig] = None,
) -> List[DropMarker]:
    """
    Flag strong beats preceded by a long gap among strong beats.

    Args:
        beats: Beats of the active region, ascending by time
        config: Gap and intensity thresholds (uses global settings if None)

    Returns:
        DropMarker per qualifying strong beat, in time order
    """
    cfg = config or get_settings().drops
    strong = strong_beats(beats)

    drops = []
    for previous, current in zip(strong, strong[1:]):
        silence = current.time - previous.time
        if silence >= cfg.min_silence and current.intensity > cfg.min_intensity:
            drops.append(DropMarker(
                time=current.time,
                intensity=current.intensity,
                type=current.type,
                silence_duration=silence,
            ))

    return drops
