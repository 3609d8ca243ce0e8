"""
Defaults and operational limits for polar loading and display.

The control file defaults are applied whenever a key is missing or its value
does not parse to a non-zero number.
"""

from __future__ import annotations

from typing import Dict, Tuple

# Control file keys -> default value used when the key is absent
CONTROL_FILE_DEFAULTS: Dict[str, str | float] = {
    "IMO": "Unknown",
    "VesselName": "Unknown",
    "GM_lower": 0.5,
    "GM_upper": 5.0,
    "Hs_lower": 3.0,
    "Hs_upper": 12.0,
    "Tz_lower": 5.0,
    "Tz_upper": 18.0,
    # Representative drafts (scantling, design, intermediate), m
    "Ts": 0.0,
    "Td": 0.0,
    "Ti": 0.0,
}

# Keys a strict parse insists on
CONTROL_FILE_BOUND_KEYS = ("GM_lower", "GM_upper", "Hs_lower", "Hs_upper", "Tz_lower", "Tz_upper")

# Traffic light: yellow band width below the allowed maximum roll (deg)
TRAFFIC_LIGHT_MARGIN_DEG = 5.0

# Saved case id length (characters, after trimming)
MAX_CASE_ID_LENGTH = 12

# Continuous colour ramp: blue -> cyan -> yellow -> orange -> red, one stop per 0.2 of max roll
COLOR_RAMP_STOPS: Tuple[Tuple[int, int, int], ...] = (
    (13, 71, 161),
    (25, 118, 210),
    (0, 188, 212),
    (255, 235, 59),
    (255, 152, 0),
    (244, 67, 54),
)
# Lower edge of each ramp band (ratio of max roll); the last band runs to 1.0 inclusive
COLOR_RAMP_BAND_EDGES: Tuple[float, ...] = (0.0, 0.2, 0.4, 0.6, 0.8)
COLOR_RAMP_BAND_WIDTH = 0.2

# Field resampling resolution for the filled polar plot
FIELD_ANGULAR_SEGMENTS = 360
FIELD_RADIAL_SEGMENTS = 50

# Contour levels for the continuous plot legend
DEFAULT_CONTOUR_LEVELS = 10

# Floating-point tolerance
EPS = 1e-9
