"""
Parser for the polar control file (proll.ctl).

Format: one ``KEY = value`` per line, ``#`` starts a comment line, blank lines
are ignored. Unknown keys are skipped; missing keys take the defaults from
``config.limits.CONTROL_FILE_DEFAULTS``.
"""

from __future__ import annotations

import logging
import re
from typing import List

from ..config.limits import CONTROL_FILE_BOUND_KEYS, CONTROL_FILE_DEFAULTS
from ..models import ControlFile, ParameterBounds, RepresentativeDrafts, VesselInfo
from .errors import ConfigReadError
from .file_service import FileSystem

_LOG = logging.getLogger(__name__)

# Leading decimal number, the way a lenient float parse reads "2.5m" as 2.5
_LEADING_FLOAT = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


def _content_lines(text: str) -> List[str]:
    lines = (ln.strip() for ln in text.splitlines())
    return [ln for ln in lines if ln and not ln.startswith("#")]


def extract_value(lines: List[str], key: str) -> str | None:
    """Value of the first line starting with `key`, or None if absent or without '='."""
    for line in lines:
        if line.startswith(key):
            _, sep, value = line.partition("=")
            if not sep:
                return None
            return value.strip()
    return None


def _leading_float(raw: str | None) -> float | None:
    if raw is None:
        return None
    m = _LEADING_FLOAT.match(raw)
    if not m:
        return None
    try:
        return float(m.group(0))
    except ValueError:
        return None


def _float_or_default(lines: List[str], key: str) -> float:
    value = _leading_float(extract_value(lines, key))
    # Zero counts as missing, as in the legacy loader
    if value is None or value == 0.0:
        _LOG.debug("Control file: '%s' missing or zero, using default %s", key, CONTROL_FILE_DEFAULTS[key])
        return float(CONTROL_FILE_DEFAULTS[key])
    return value


def _text_or_default(lines: List[str], key: str) -> str:
    value = extract_value(lines, key)
    if not value:
        _LOG.debug("Control file: '%s' missing, using default %s", key, CONTROL_FILE_DEFAULTS[key])
        return str(CONTROL_FILE_DEFAULTS[key])
    return value


def parse_control_file(text: str, strict: bool = False) -> ControlFile:
    """
    Parse control file text into vessel info, parameter bounds and drafts.

    With ``strict=True`` a missing GM/Hs/Tz bound raises ConfigReadError
    instead of falling back to the default.
    """
    lines = _content_lines(text)

    if strict:
        missing = [k for k in CONTROL_FILE_BOUND_KEYS if _leading_float(extract_value(lines, k)) is None]
        if missing:
            raise ConfigReadError(f"Control file is missing required keys: {', '.join(missing)}")

    vessel_info = VesselInfo(
        imo=_text_or_default(lines, "IMO"),
        name=_text_or_default(lines, "VesselName"),
    )
    bounds = ParameterBounds(
        gm_lower=_float_or_default(lines, "GM_lower"),
        gm_upper=_float_or_default(lines, "GM_upper"),
        hs_lower=_float_or_default(lines, "Hs_lower"),
        hs_upper=_float_or_default(lines, "Hs_upper"),
        tz_lower=_float_or_default(lines, "Tz_lower"),
        tz_upper=_float_or_default(lines, "Tz_upper"),
    )
    drafts = RepresentativeDrafts(
        scantling=_float_or_default(lines, "Ts"),
        design=_float_or_default(lines, "Td"),
        intermediate=_float_or_default(lines, "Ti"),
    )
    return ControlFile(vessel_info=vessel_info, parameter_bounds=bounds, representative_drafts=drafts)


def read_control_file(fs: FileSystem, path: str, strict: bool = False) -> ControlFile:
    """Read and parse the control file through the file-system collaborator."""
    try:
        raw = fs.read_binary_file(path)
    except OSError as exc:
        _LOG.warning("Control file: cannot read %s: %s", path, exc)
        raise ConfigReadError(f"Cannot read control file {path}: {exc}") from exc

    try:
        text = bytes(raw).decode("utf-8")
    except UnicodeDecodeError as exc:
        _LOG.warning("Control file: %s is not valid UTF-8 text", path)
        raise ConfigReadError(f"Control file {path} is not valid text: {exc}") from exc

    control = parse_control_file(text, strict=strict)
    _LOG.info(
        "Control file %s loaded: vessel '%s' (IMO %s)",
        path,
        control.vessel_info.name,
        control.vessel_info.imo,
    )
    return control
