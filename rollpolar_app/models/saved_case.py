from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .operating import OperatingParameters
from .polar import PolarDataset


def _utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class SavedCase:
    case_id: str = ""
    parameters: OperatingParameters = field(default_factory=OperatingParameters)
    timestamp: datetime = field(default_factory=_utc_now)
    is_in_danger_zone: bool = False

    # Roll at the saved speed/heading, when a dataset was loaded
    roll_deg: float | None = None
    dataset: PolarDataset | None = None
