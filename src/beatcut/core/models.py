from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..beat_objects import BeatMarker, BeatType


class BeatMarkerModel(BaseModel):
    """Wire form of a detected beat."""
    model_config = ConfigDict(extra="ignore")

    time: float = Field(ge=0.0, allow_inf_nan=False)
    intensity: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    type: BeatType = BeatType.WEAK

    def to_marker(self) -> BeatMarker:
        return BeatMarker(time=self.time, intensity=self.intensity, type=self.type)


class CutRequest(BaseModel):
    """
    A beat list plus the optional region and plan count stored next to it.
    Region bounds are optional; callers supply whatever the file omits.
    """
    model_config = ConfigDict(extra="allow")

    beats: List[BeatMarkerModel] = Field(default_factory=list)
    start_time: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)
    end_time: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)
    plan_count: Optional[int] = None
    min_cut_interval: Optional[float] = Field(default=None, gt=0.0)

    @model_validator(mode="after")
    def check_region(self) -> "CutRequest":
        if self.start_time is not None and self.end_time is not None and self.start_time >= self.end_time:
            raise ValueError(f"start_time {self.start_time} must be before end_time {self.end_time}")
        return self

    def markers(self) -> List[BeatMarker]:
        """Beat markers sorted ascending by time."""
        return sorted((b.to_marker() for b in self.beats), key=lambda b: b.time)
