"""
Roll angle interpolation over a polar dataset (speed x heading grid).

Two modes are available:

LEGACY
    Speed: linear between the bracketing pair, extrapolating linearly with the
    first/last segment outside the grid (the old plots used the pair spanning
    the whole grid there, so values outside the speed range can differ).
    Heading: the nearest heading and the nearest *other* heading (circular
    distance), each interpolated along speed, then averaged with equal weight.
    The two headings need not lie on either side of the query, so the result
    is not continuous in heading.
    Inside the speed grid this reproduces the values of the existing polar plots.

BRACKETED
    Speed clamped to the grid range. Heading: the two grid headings either
    side of the query on the circle, weighted by angular distance.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

from ..config.limits import EPS, FIELD_ANGULAR_SEGMENTS, FIELD_RADIAL_SEGMENTS
from ..models import PolarDataset


class InterpolationMode(Enum):
    LEGACY = "legacy"
    BRACKETED = "bracketed"


@dataclass(slots=True)
class PolarField:
    """Roll resampled on a regular polar mesh (segment mid-points).

    angles_deg: shape (A,), vessel-frame heading of each angular segment
    speeds_kn: shape (R,), speed of each radial ring
    roll: shape (R, A)
    """

    angles_deg: np.ndarray
    speeds_kn: np.ndarray
    roll: np.ndarray


def circular_distance(a, b):
    """Unsigned angular distance in [0, 180] (works on arrays)."""
    d = np.abs(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)) % 360.0
    return np.minimum(d, 360.0 - d)


def _check(dataset: PolarDataset) -> None:
    if dataset.num_speeds == 0 or dataset.num_headings == 0:
        raise ValueError("Polar dataset is empty")


def _speed_segment(speeds: np.ndarray, speed: float, clamp: bool) -> Tuple[int, int, float]:
    """(i1, i2, factor) such that value = v[i1] * (1 - factor) + v[i2] * factor."""
    n = speeds.size
    if n == 1:
        return 0, 0, 0.0
    if clamp:
        speed = min(max(speed, float(speeds[0])), float(speeds[-1]))

    i1, i2 = n - 2, n - 1
    if speed < speeds[0]:
        i1, i2 = 0, 1
    else:
        for i in range(n - 1):
            if speeds[i] <= speed <= speeds[i + 1]:
                i1, i2 = i, i + 1
                break

    s1 = float(speeds[i1])
    s2 = float(speeds[i2])
    factor = (speed - s1) / (s2 - s1) if s2 > s1 else 0.0
    return i1, i2, factor


def _nearest_heading_pair(headings: np.ndarray, heading: float) -> Tuple[int, int]:
    """Nearest heading index, then nearest index other than that one (first minimum wins)."""
    dist = circular_distance(headings, heading)
    first = int(np.argmin(dist))
    if headings.size == 1:
        return first, 0
    others = dist.copy()
    others[first] = np.inf
    return first, int(np.argmin(others))


def _bracketing_headings(headings: np.ndarray, heading: float) -> Tuple[int, int, float]:
    """(lo, hi, weight) of the grid headings enclosing `heading` on the circle."""
    if headings.size == 1:
        return 0, 0, 0.0
    wrapped = np.mod(headings, 360.0)
    order = np.argsort(wrapped, kind="stable")
    sorted_angles = wrapped[order]
    # 0 and 360 in the same grid collapse to one heading
    keep = np.concatenate(([True], np.diff(sorted_angles) > EPS))
    order = order[keep]
    sorted_angles = sorted_angles[keep]
    m = sorted_angles.size
    if m == 1:
        return int(order[0]), int(order[0]), 0.0

    q = float(np.mod(heading, 360.0))
    k = int(np.searchsorted(sorted_angles, q, side="right"))
    lo_pos = (k - 1) % m
    hi_pos = k % m
    lo_angle = float(sorted_angles[lo_pos])
    hi_angle = float(sorted_angles[hi_pos])
    if k == 0:
        lo_angle -= 360.0
    if k == m:
        hi_angle += 360.0
    span = hi_angle - lo_angle
    weight = (q - lo_angle) / span if span > EPS else 0.0
    return int(order[lo_pos]), int(order[hi_pos]), weight


def interpolate_roll(
    dataset: PolarDataset,
    speed: float,
    heading: float,
    mode: InterpolationMode = InterpolationMode.LEGACY,
) -> float:
    """Roll angle (deg) at `speed` (kn) and vessel-frame `heading` (deg)."""
    _check(dataset)
    speeds = dataset.speeds
    roll = dataset.roll_matrix
    clamp = mode is InterpolationMode.BRACKETED
    s1, s2, f = _speed_segment(speeds, float(speed), clamp)

    def along_speed(col: int) -> float:
        return float(roll[s1, col]) * (1 - f) + float(roll[s2, col]) * f

    if mode is InterpolationMode.LEGACY:
        h1, h2 = _nearest_heading_pair(dataset.headings, float(heading))
        return (along_speed(h1) + along_speed(h2)) / 2

    lo, hi, w = _bracketing_headings(dataset.headings, float(heading))
    return along_speed(lo) * (1 - w) + along_speed(hi) * w


def resample_field(
    dataset: PolarDataset,
    angular_segments: int = FIELD_ANGULAR_SEGMENTS,
    radial_segments: int = FIELD_RADIAL_SEGMENTS,
    mode: InterpolationMode = InterpolationMode.LEGACY,
) -> PolarField:
    """
    Evaluate the interpolator on a fine polar mesh for the filled plot.

    Ring r covers speeds [r/R, (r+1)/R] * max_speed and sector a covers
    headings [a/A, (a+1)/A] * 360; each cell is sampled at its mid-point.
    Values equal interpolate_roll at the same points.
    """
    _check(dataset)
    if angular_segments <= 0 or radial_segments <= 0:
        raise ValueError("Segment counts must be positive")

    angles = (np.arange(angular_segments) + 0.5) / angular_segments * 360.0
    ratios = (np.arange(radial_segments) + 0.5) / radial_segments
    speeds_kn = dataset.max_speed * ratios
    clamp = mode is InterpolationMode.BRACKETED
    roll = dataset.roll_matrix

    seg = [_speed_segment(dataset.speeds, float(s), clamp) for s in speeds_kn]
    s1 = np.array([s[0] for s in seg], dtype=int)[:, None]
    s2 = np.array([s[1] for s in seg], dtype=int)[:, None]
    f = np.array([s[2] for s in seg], dtype=float)[:, None]

    if mode is InterpolationMode.LEGACY:
        pairs = [_nearest_heading_pair(dataset.headings, float(a)) for a in angles]
        h1 = np.array([p[0] for p in pairs], dtype=int)[None, :]
        h2 = np.array([p[1] for p in pairs], dtype=int)[None, :]
        v1 = roll[s1, h1] * (1 - f) + roll[s2, h1] * f
        v2 = roll[s1, h2] * (1 - f) + roll[s2, h2] * f
        values = (v1 + v2) / 2
    else:
        brackets = [_bracketing_headings(dataset.headings, float(a)) for a in angles]
        lo = np.array([b[0] for b in brackets], dtype=int)[None, :]
        hi = np.array([b[1] for b in brackets], dtype=int)[None, :]
        w = np.array([b[2] for b in brackets], dtype=float)[None, :]
        v_lo = roll[s1, lo] * (1 - f) + roll[s2, lo] * f
        v_hi = roll[s1, hi] * (1 - f) + roll[s2, hi] * f
        values = v_lo * (1 - w) + v_hi * w

    return PolarField(angles_deg=angles, speeds_kn=speeds_kn, roll=values)
