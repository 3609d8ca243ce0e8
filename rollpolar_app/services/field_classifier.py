"""
Colour and severity classification of roll values for the polar plot.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Tuple

from ..config.limits import (
    COLOR_RAMP_BAND_EDGES,
    COLOR_RAMP_BAND_WIDTH,
    COLOR_RAMP_STOPS,
    DEFAULT_CONTOUR_LEVELS,
    TRAFFIC_LIGHT_MARGIN_DEG,
)

RGB = Tuple[int, int, int]


class DisplayMode(str, Enum):
    CONTINUOUS = "continuous"
    TRAFFIC_LIGHT = "trafficlight"


class TrafficLight(Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def hex_color(self) -> str:
        return _TRAFFIC_HEX[self]


_TRAFFIC_HEX = {
    TrafficLight.GREEN: "#2ecc71",
    TrafficLight.YELLOW: "#f39c12",
    TrafficLight.RED: "#e74c3c",
}


def _check_max(max_roll: float) -> None:
    if max_roll <= 0:
        raise ValueError(f"Maximum roll angle must be positive, got {max_roll}")


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def interpolate_color(color1: RGB, color2: RGB, factor: float) -> RGB:
    return tuple(_round_half_up(c1 + (c2 - c1) * factor) for c1, c2 in zip(color1, color2))  # type: ignore[return-value]


def continuous_color(roll: float, max_roll: float) -> RGB:
    """
    Colour on the blue -> red ramp for `roll` relative to `max_roll`.

    The ratio is capped at 1; five bands of width 0.2, the last one closed.
    """
    _check_max(max_roll)
    ratio = min(roll / max_roll, 1.0)
    band = 0
    for i, edge in enumerate(COLOR_RAMP_BAND_EDGES):
        if ratio >= edge:
            band = i
    t = (ratio - COLOR_RAMP_BAND_EDGES[band]) / COLOR_RAMP_BAND_WIDTH
    return interpolate_color(COLOR_RAMP_STOPS[band], COLOR_RAMP_STOPS[band + 1], t)


def rgb_css(color: RGB) -> str:
    r, g, b = color
    return f"rgb({r}, {g}, {b})"


def traffic_light(roll: float, max_roll: float) -> TrafficLight:
    if roll <= max_roll - TRAFFIC_LIGHT_MARGIN_DEG:
        return TrafficLight.GREEN
    if roll <= max_roll:
        return TrafficLight.YELLOW
    return TrafficLight.RED


def is_in_danger_zone(roll: float, max_roll: float) -> bool:
    return roll > max_roll


def classify(roll: float, max_roll: float, mode: DisplayMode) -> RGB | TrafficLight:
    if DisplayMode(mode) is DisplayMode.TRAFFIC_LIGHT:
        return traffic_light(roll, max_roll)
    return continuous_color(roll, max_roll)


def contour_levels(max_value: float, num_levels: int = DEFAULT_CONTOUR_LEVELS) -> List[float]:
    step = max_value / num_levels
    return [i * step for i in range(num_levels + 1)]
