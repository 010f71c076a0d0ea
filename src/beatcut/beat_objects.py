"""
Beat and Cut Data Objects

Data structures exchanged between the beat classifier, the cut placement
engine and the timeline that renders the result.

Usage:
    from beatcut.beat_objects import BeatMarker, BeatType, CutMarker

    beat = BeatMarker(time=1.5, intensity=0.8, type=BeatType.STRONG)
    beat = BeatMarker(time=1.5, intensity=0.8, type="strong")
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

import numpy as np


# Cut colors are cycled by selection index
CUT_COLORS = ("#F97316", "#3B82F6", "#10B981", "#8B5CF6", "#EF4444", "#F59E0B")


def color_for_index(index: int) -> str:
    """Palette color for the index-th cut."""
    return CUT_COLORS[index % len(CUT_COLORS)]


def new_cut_id() -> str:
    return str(uuid.uuid4())


class BeatType(str, Enum):
    """Strength class assigned by the beat classifier."""

    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


class CandidateReason(str, Enum):
    """Why a time was proposed as a cut, in decreasing precedence."""

    DROP = "drop"
    MEASURE_START = "measure_start"
    MEASURE_MID = "measure_mid"
    STRONG_BEAT = "strong_beat"


@dataclass(frozen=True)
class BeatMarker:
    """A detected audio onset."""

    time: float
    """Onset position in seconds."""

    intensity: float
    """Onset strength, >= 0 (typically 0-1)."""

    type: BeatType = BeatType.WEAK
    """Strength class."""

    def __post_init__(self):
        if not isinstance(self.type, BeatType):
            object.__setattr__(self, "type", BeatType(self.type))

    @property
    def is_strong(self) -> bool:
        return self.type is BeatType.STRONG


@dataclass(frozen=True)
class DropMarker(BeatMarker):
    """A strong beat following a long gap among strong beats."""

    silence_duration: float = 0.0
    """Gap to the previous strong beat in seconds."""

    is_drop: bool = True


@dataclass(frozen=True)
class MeasureInfo:
    """An inferred downbeat on the measure grid."""

    start_time: float
    bpm: float
    confidence: float
    """Grid fit in (0, 1]; 1.0 means the beat sits exactly on the grid."""


@dataclass(frozen=True)
class Candidate:
    """A scored cut position; ``time`` already includes the lead offset."""

    time: float
    intensity: float
    type: BeatType
    priority: float
    reason: CandidateReason

    @property
    def is_drop(self) -> bool:
        return self.reason is CandidateReason.DROP


@dataclass
class CutMarker:
    """
    A cut on the timeline.

    Ownership passes to the caller once returned; the timeline may drag
    ``time`` or delete the marker.
    """

    time: float
    color: str
    duration: float = 1.0
    id: str = field(default_factory=new_cut_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "time": self.time,
            "color": self.color,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class PlanSegment:
    """The stretch of timeline shown between two consecutive cuts."""

    plan_index: int
    """1-based plan number."""

    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


def beat_times(beats: Sequence[BeatMarker]) -> np.ndarray:
    """Onset times of a beat list as a float array."""
    return np.array([b.time for b in beats], dtype=float)


def strong_beats(beats: Sequence[BeatMarker]) -> List[BeatMarker]:
    """Strong beats in list order."""
    return [b for b in beats if b.is_strong]


def beats_in_region(beats: Sequence[BeatMarker], start_time: float, end_time: float) -> List[BeatMarker]:
    """Beats strictly inside ``(start_time, end_time)``."""
    return [b for b in beats if start_time < b.time < end_time]


__all__ = [
    "CUT_COLORS",
    "BeatType",
    "CandidateReason",
    "BeatMarker",
    "DropMarker",
    "MeasureInfo",
    "Candidate",
    "CutMarker",
    "PlanSegment",
    "color_for_index",
    "new_cut_id",
    "beat_times",
    "strong_beats",
    "beats_in_region",
]
