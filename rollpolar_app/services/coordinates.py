"""
Angle conventions for the polar plot.

Vessel frame: beta measured clockwise from the bow. The plot shows the
direction the waves travel towards, hence the 180 deg offset.
North-up: 0 deg at the top is true North. Heads-up: 0 deg at the top is the bow.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Tuple


class DirectionMode(str, Enum):
    NORTH_UP = "northup"
    HEADS_UP = "headsup"


def normalize_angle(angle: float) -> float:
    """Wrap into [0, 360)."""
    normalized = math.fmod(angle, 360.0)
    if normalized < 0:
        normalized += 360.0
    # fmod of tiny negatives can round up to exactly 360
    if normalized >= 360.0:
        normalized -= 360.0
    return normalized


def angle_difference(angle1: float, angle2: float) -> float:
    """Shortest signed rotation from angle1 to angle2, in (-180, 180]."""
    diff = normalize_angle(angle2 - angle1)
    if diff > 180.0:
        diff -= 360.0
    return diff


def to_north_up(beta_deg: float, vessel_heading_deg: float) -> float:
    return normalize_angle(180.0 + (vessel_heading_deg - beta_deg))


def to_heads_up(beta_deg: float) -> float:
    return normalize_angle(180.0 - beta_deg)


def to_display_angle(beta_deg: float, vessel_heading_deg: float, mode: DirectionMode) -> float:
    if DirectionMode(mode) is DirectionMode.NORTH_UP:
        return to_north_up(beta_deg, vessel_heading_deg)
    return to_heads_up(beta_deg)


def convert_wave_direction(wave_direction_deg: float, vessel_heading_deg: float, mode: DirectionMode) -> float:
    if DirectionMode(mode) is DirectionMode.NORTH_UP:
        return normalize_angle(wave_direction_deg)
    return normalize_angle(wave_direction_deg - vessel_heading_deg)


def polar_to_cartesian(r: float, theta_deg: float) -> Tuple[float, float]:
    rad = math.radians(theta_deg)
    return r * math.cos(rad), r * math.sin(rad)


def cartesian_to_polar(x: float, y: float) -> Tuple[float, float]:
    return math.hypot(x, y), math.degrees(math.atan2(y, x))


def average_draft(aft_draft_m: float, fore_draft_m: float) -> float:
    return (aft_draft_m + fore_draft_m) / 2.0


def format_angle(angle: float) -> str:
    return f"{normalize_angle(angle):.0f}°"


def format_speed(speed: float) -> str:
    return f"{speed:.1f} kn"
