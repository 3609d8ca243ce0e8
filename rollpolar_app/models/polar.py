from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..services.errors import MalformedDataFile


@dataclass(slots=True)
class PolarDataset:
    """Roll-angle grid for one (draft, GM, Hs, Tz) combination.

    speeds: shape (N,), knots, strictly increasing  – rows
    headings: shape (M,), vessel-frame degrees, any order, full circle  – columns
    roll_matrix: shape (N, M), roll angle (deg) at each (speed, heading).
    """

    speeds: np.ndarray
    headings: np.ndarray
    roll_matrix: np.ndarray
    fitted_gm: float
    fitted_hs: float
    fitted_tz: float
    num_parameters: int = 0
    source_path: str = ""

    def __post_init__(self) -> None:
        self.speeds = np.asarray(self.speeds, dtype=float)
        self.headings = np.asarray(self.headings, dtype=float)
        self.roll_matrix = np.asarray(self.roll_matrix, dtype=float)
        expected = (self.speeds.size, self.headings.size)
        if self.roll_matrix.shape != expected:
            raise MalformedDataFile(
                f"Roll matrix shape {self.roll_matrix.shape} does not match "
                f"{expected[0]} speeds x {expected[1]} headings"
            )

    @property
    def num_speeds(self) -> int:
        return int(self.speeds.size)

    @property
    def num_headings(self) -> int:
        return int(self.headings.size)

    @property
    def max_speed(self) -> float:
        return float(self.speeds.max()) if self.speeds.size else 0.0

    @property
    def max_roll(self) -> float:
        return float(self.roll_matrix.max()) if self.roll_matrix.size else 0.0

    def snapshot(self) -> "PolarDataset":
        """Independent copy, safe to keep alongside a saved case."""
        return PolarDataset(
            speeds=self.speeds.copy(),
            headings=self.headings.copy(),
            roll_matrix=self.roll_matrix.copy(),
            fitted_gm=self.fitted_gm,
            fitted_hs=self.fitted_hs,
            fitted_tz=self.fitted_tz,
            num_parameters=self.num_parameters,
            source_path=self.source_path,
        )
