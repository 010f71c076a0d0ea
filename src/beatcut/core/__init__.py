"""
Beatcut Core Module

Contains the cut placement pipeline:
- CutPlacementEngine: Main orchestration class
- detect_measures / detect_drops: Musical structure detection
- build_candidates / select_cuts: Scoring and selection
- optimize_cut_durations / generate_equidistant_cuts: Duration shaping
"""

from .cut_engine import (
    BeatAnalysis,
    CutPlacementEngine,
    generate_cuts,
    validate_beat_markers,
    validate_region,
)
from .measure_detector import detect_measure_grid, detect_measures, estimate_measure_duration
from .drop_detector import detect_drops
from .candidate_builder import build_candidates
from .cut_selector import select_cuts
from .duration_optimizer import (
    add_time_variation,
    generate_equidistant_cuts,
    optimize_cut_durations,
)
from .plan_segments import (
    build_plan_segments,
    max_recommended_plans,
    plan_count_ceiling,
    snap_to_beat,
)

__all__ = [
    "BeatAnalysis",
    "CutPlacementEngine",
    "generate_cuts",
    "validate_beat_markers",
    "validate_region",
    "detect_measure_grid",
    "detect_measures",
    "estimate_measure_duration",
    "detect_drops",
    "build_candidates",
    "select_cuts",
    "add_time_variation",
    "generate_equidistant_cuts",
    "optimize_cut_durations",
    "build_plan_segments",
    "max_recommended_plans",
    "plan_count_ceiling",
    "snap_to_beat",
]
