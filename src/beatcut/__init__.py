"""
Beatcut - Beat-Synced Cut Placement

Core:
    from beatcut import generate_cuts
    cuts = generate_cuts(start_time=0.0, end_time=30.0, plan_count=6, beat_markers=beats)

Engine with custom settings:
    from beatcut import CutPlacementEngine
    from beatcut.config import Settings

    engine = CutPlacementEngine(Settings())
    analysis = engine.analyze(beats, 0.0, 30.0)

Beat files:
    from beatcut.beat_io import load_cut_request, dump_cut_markers
"""

from ._version import __version__
from .beat_objects import (
    CUT_COLORS,
    BeatMarker,
    BeatType,
    Candidate,
    CandidateReason,
    CutMarker,
    DropMarker,
    MeasureInfo,
    PlanSegment,
)
from .core import (
    BeatAnalysis,
    CutPlacementEngine,
    add_time_variation,
    build_plan_segments,
    detect_drops,
    detect_measures,
    generate_cuts,
    optimize_cut_durations,
    snap_to_beat,
)

__all__ = [
    "__version__",
    # Data
    "CUT_COLORS",
    "BeatMarker",
    "BeatType",
    "Candidate",
    "CandidateReason",
    "CutMarker",
    "DropMarker",
    "MeasureInfo",
    "PlanSegment",
    # Engine
    "BeatAnalysis",
    "CutPlacementEngine",
    "generate_cuts",
    "detect_measures",
    "detect_drops",
    "optimize_cut_durations",
    # Timeline helpers
    "add_time_variation",
    "build_plan_segments",
    "snap_to_beat",
]
