from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class DraftCategory(str, Enum):
    SCANTLING = "scantling"
    DESIGN = "design"
    INTERMEDIATE = "intermediate"


class WavePeriodType(str, Enum):
    TZ = "tz"  # mean zero-crossing period
    TP = "tp"  # peak period


@dataclass(slots=True)
class OperatingParameters:
    """User-entered operating condition used to pick and query a polar dataset."""

    draft_category: DraftCategory = DraftCategory.DESIGN
    draft_aft_peak_m: float = 10.0
    draft_fore_peak_m: float = 10.0
    gm_m: float = 2.0
    heading_deg: float = 18.0  # clockwise from North to bow
    speed_kn: float = 12.0
    max_roll_angle_deg: float = 20.0
    hs_m: float = 5.0
    tz_s: float = 10.0
    wave_direction_deg: float = 130.0
    wave_period_type: WavePeriodType = WavePeriodType.TZ

    def __post_init__(self) -> None:
        self.draft_category = DraftCategory(self.draft_category)
        self.wave_period_type = WavePeriodType(self.wave_period_type)

    @property
    def average_draft_m(self) -> float:
        return (self.draft_aft_peak_m + self.draft_fore_peak_m) / 2.0

    def copy(self, **changes) -> "OperatingParameters":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "draft_category": self.draft_category.value,
            "draft_aft_peak_m": self.draft_aft_peak_m,
            "draft_fore_peak_m": self.draft_fore_peak_m,
            "gm_m": self.gm_m,
            "heading_deg": self.heading_deg,
            "speed_kn": self.speed_kn,
            "max_roll_angle_deg": self.max_roll_angle_deg,
            "hs_m": self.hs_m,
            "tz_s": self.tz_s,
            "wave_direction_deg": self.wave_direction_deg,
            "wave_period_type": self.wave_period_type.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OperatingParameters":
        defaults = cls()
        kwargs = {}
        for key in defaults.to_dict():
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if key not in ("draft_category", "wave_period_type"):
                value = float(value)
            kwargs[key] = value
        return cls(**kwargs)
