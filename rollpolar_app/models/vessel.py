from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .operating import DraftCategory


@dataclass(slots=True, frozen=True)
class VesselInfo:
    imo: str = "Unknown"
    name: str = "Unknown"


@dataclass(slots=True, frozen=True)
class ParameterBounds:
    """Valid ranges of GM (m), Hs (m) and Tz (s) covered by the polar database."""

    gm_lower: float = 0.5
    gm_upper: float = 5.0
    hs_lower: float = 3.0
    hs_upper: float = 12.0
    tz_lower: float = 5.0
    tz_upper: float = 18.0

    def out_of_bounds(self, gm: float, hs: float, tz: float) -> Dict[str, float]:
        """Return the requested values lying outside the bounds, keyed by parameter name."""
        outside: Dict[str, float] = {}
        if not self.gm_lower <= gm <= self.gm_upper:
            outside["gm"] = gm
        if not self.hs_lower <= hs <= self.hs_upper:
            outside["hs"] = hs
        if not self.tz_lower <= tz <= self.tz_upper:
            outside["tz"] = tz
        return outside

    def contains(self, gm: float, hs: float, tz: float) -> bool:
        return not self.out_of_bounds(gm, hs, tz)


@dataclass(slots=True, frozen=True)
class RepresentativeDrafts:
    scantling: float = 0.0
    design: float = 0.0
    intermediate: float = 0.0

    def for_category(self, category: DraftCategory) -> float:
        return getattr(self, DraftCategory(category).value)


@dataclass(slots=True, frozen=True)
class ControlFile:
    """Parsed contents of the polar control file (proll.ctl)."""

    vessel_info: VesselInfo = field(default_factory=VesselInfo)
    parameter_bounds: ParameterBounds = field(default_factory=ParameterBounds)
    representative_drafts: RepresentativeDrafts = field(default_factory=RepresentativeDrafts)
