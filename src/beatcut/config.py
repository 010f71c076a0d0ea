"""
Centralized Configuration for Beatcut

Single Source of Truth for the tuning constants of the cut placement
engine. Every value defaults to the production behavior and can be
overridden per deployment through environment variables.

Usage:
    from beatcut.config import get_settings

    settings = get_settings()
    interval = settings.cutting.min_cut_interval
    if settings.features.verbose:
        ...
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple


def _env_float(name: str, default: str) -> float:
    return float(os.environ.get(name, default) or default)


def _env_int(name: str, default: str) -> int:
    return int(os.environ.get(name, default) or default)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


# =============================================================================
# Cut Placement Tuning
# =============================================================================
@dataclass
class CutTuning:
    """Lead times, priority bands and spacing used when placing cuts."""

    min_cut_interval: float = field(default_factory=lambda: _env_float("BEATCUT_MIN_CUT_INTERVAL", "0.8"))
    # Cuts never land closer than this to the region start
    region_margin: float = field(default_factory=lambda: _env_float("BEATCUT_REGION_MARGIN", "0.05"))

    # Lead times: cuts land slightly before the physical beat
    drop_lead: float = field(default_factory=lambda: _env_float("BEATCUT_DROP_LEAD", "0.05"))
    measure_start_lead: float = field(default_factory=lambda: _env_float("BEATCUT_MEASURE_START_LEAD", "0.03"))
    measure_mid_lead: float = field(default_factory=lambda: _env_float("BEATCUT_MEASURE_MID_LEAD", "0.03"))
    strong_beat_lead: float = field(default_factory=lambda: _env_float("BEATCUT_STRONG_BEAT_LEAD", "0.02"))
    backfill_lead: float = field(default_factory=lambda: _env_float("BEATCUT_BACKFILL_LEAD", "0.02"))

    # Priority bands (base + scale * confidence/intensity)
    drop_priority: float = 100.0
    measure_start_base: float = 80.0
    measure_start_scale: float = 20.0
    measure_mid_base: float = 60.0
    measure_mid_scale: float = 20.0
    strong_beat_base: float = 40.0
    strong_beat_scale: float = 20.0

    # Candidate matching windows
    dedup_window: float = 0.1
    measure_match_window: float = 0.2
    measure_mid_tolerance: float = 0.3


# =============================================================================
# Measure Detection
# =============================================================================
@dataclass
class MeasureConfig:
    """Thresholds for inferring the measure grid from strong beats."""

    min_beats: int = field(default_factory=lambda: _env_int("BEATCUT_MEASURE_MIN_BEATS", "8"))
    min_strong_beats: int = field(default_factory=lambda: _env_int("BEATCUT_MEASURE_MIN_STRONG", "3"))
    intensity_floor: float = 0.1
    beat_interval_range: Tuple[float, float] = (0.15, 2.0)
    measure_interval_range: Tuple[float, float] = (0.8, 6.0)
    min_measure_intervals: int = 2
    cluster_gap: float = 0.3
    min_cluster_size: int = 2
    beats_per_measure: int = field(default_factory=lambda: _env_int("BEATCUT_BEATS_PER_MEASURE", "4"))
    grid_tolerance: float = 0.3
    confidence_floor: float = 0.1
    min_confidence: float = field(default_factory=lambda: _env_float("BEATCUT_MEASURE_MIN_CONFIDENCE", "0.4"))


# =============================================================================
# Drop Detection
# =============================================================================
@dataclass
class DropConfig:
    """A drop is a strong beat after a long gap among strong beats."""

    min_silence: float = field(default_factory=lambda: _env_float("BEATCUT_DROP_MIN_SILENCE", "1.2"))
    min_intensity: float = field(default_factory=lambda: _env_float("BEATCUT_DROP_MIN_INTENSITY", "0.2"))


# =============================================================================
# Duration Shaping
# =============================================================================
@dataclass
class DurationConfig:
    """Display duration rules for generated cuts."""

    placeholder: float = 1.0
    floor: float = 0.3
    gap_margin: float = 0.1
    fallback_cap: float = 1.0
    fallback_ratio: float = 0.8
    max_variation: float = field(default_factory=lambda: _env_float("BEATCUT_MAX_VARIATION", "0.2"))


# =============================================================================
# Feature Flags
# =============================================================================
@dataclass
class FeatureConfig:
    """Runtime toggles."""

    verbose: bool = field(default_factory=lambda: _env_bool("VERBOSE", "true"))
    validate_beats: bool = field(default_factory=lambda: _env_bool("BEATCUT_VALIDATE_BEATS", "false"))


# =============================================================================
# Main Settings Class
# =============================================================================
@dataclass
class Settings:
    """
    Main configuration container.

    Usage:
        from beatcut.config import get_settings

        tuning = get_settings().cutting
    """

    cutting: CutTuning = field(default_factory=CutTuning)
    measures: MeasureConfig = field(default_factory=MeasureConfig)
    drops: DropConfig = field(default_factory=DropConfig)
    durations: DurationConfig = field(default_factory=DurationConfig)
    features: FeatureConfig = field(default_factory=FeatureConfig)

    def reload(self) -> "Settings":
        """Reload settings from environment (useful after env changes)."""
        return Settings()

    def to_env_dict(self) -> dict:
        """Convert the env-tunable settings back to environment variables."""
        return {
            "BEATCUT_MIN_CUT_INTERVAL": str(self.cutting.min_cut_interval),
            "BEATCUT_REGION_MARGIN": str(self.cutting.region_margin),
            "BEATCUT_DROP_LEAD": str(self.cutting.drop_lead),
            "BEATCUT_MEASURE_START_LEAD": str(self.cutting.measure_start_lead),
            "BEATCUT_MEASURE_MID_LEAD": str(self.cutting.measure_mid_lead),
            "BEATCUT_STRONG_BEAT_LEAD": str(self.cutting.strong_beat_lead),
            "BEATCUT_BACKFILL_LEAD": str(self.cutting.backfill_lead),
            "BEATCUT_MEASURE_MIN_BEATS": str(self.measures.min_beats),
            "BEATCUT_MEASURE_MIN_STRONG": str(self.measures.min_strong_beats),
            "BEATCUT_BEATS_PER_MEASURE": str(self.measures.beats_per_measure),
            "BEATCUT_MEASURE_MIN_CONFIDENCE": str(self.measures.min_confidence),
            "BEATCUT_DROP_MIN_SILENCE": str(self.drops.min_silence),
            "BEATCUT_DROP_MIN_INTENSITY": str(self.drops.min_intensity),
            "BEATCUT_MAX_VARIATION": str(self.durations.max_variation),
            "VERBOSE": str(self.features.verbose).lower(),
            "BEATCUT_VALIDATE_BEATS": str(self.features.validate_beats).lower(),
        }


# =============================================================================
# Global Settings Instance (Singleton)
# =============================================================================
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance (lazy initialization)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload of settings from environment."""
    global _settings
    _settings = Settings()
    return _settings
