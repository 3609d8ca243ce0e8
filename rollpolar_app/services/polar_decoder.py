"""
Decoder for binary polar files (*.bpolar).

Little-endian layout::

    int32    num_speeds
    int32    num_headings
    int32    num_parameters            (read for offsets only)
    float64  speeds[num_speeds]
    float64  headings[num_headings]    (vessel-frame degrees)
    float64  roll[num_speeds * num_headings]   row-major: speed, then heading

Every section is length-checked before it is read.
"""

from __future__ import annotations

import logging
import re
from typing import Tuple

import numpy as np

from ..models import OperatingParameters, PolarDataset
from .errors import DirectoryNotFound, MalformedDataFile
from .file_service import FileSystem

_LOG = logging.getLogger(__name__)

_HEADER_DTYPE = np.dtype("<i4")
_VALUE_DTYPE = np.dtype("<f8")
HEADER_SIZE = 3 * _HEADER_DTYPE.itemsize

_FITTED_TAG = re.compile(r"_H([\d.]+)_T([\d.]+)")
_NUMBER_PREFIX = re.compile(r"\d+\.?\d*|\.\d+")


def _prefix_float(raw: str) -> float | None:
    m = _NUMBER_PREFIX.match(raw)
    return float(m.group(0)) if m else None


def fitted_sea_state(path: str, requested: OperatingParameters) -> Tuple[float, float]:
    """(Hs, Tz) encoded in the file name, falling back to the requested values."""
    m = _FITTED_TAG.search(path)
    if not m:
        return requested.hs_m, requested.tz_s
    hs = _prefix_float(m.group(1))
    tz = _prefix_float(m.group(2))
    if hs is None or tz is None:
        return requested.hs_m, requested.tz_s
    return hs, tz


def _read_values(buf: memoryview, offset: int, count: int, what: str) -> Tuple[np.ndarray, int]:
    size = count * _VALUE_DTYPE.itemsize
    if offset + size > len(buf):
        raise MalformedDataFile(
            f"Polar file truncated: {what} needs {size} bytes at offset {offset}, "
            f"only {len(buf) - offset} available"
        )
    values = np.frombuffer(buf, dtype=_VALUE_DTYPE, count=count, offset=offset).astype(float)
    return values, offset + size


def decode_polar_dataset(
    data: bytes,
    source_path: str,
    requested: OperatingParameters,
    fitted_gm: float | None = None,
) -> PolarDataset:
    """Decode a polar buffer into a dataset; raises MalformedDataFile on any size mismatch."""
    buf = memoryview(bytes(data))
    if len(buf) < HEADER_SIZE:
        raise MalformedDataFile(
            f"Polar file {source_path} too short for header: {len(buf)} of {HEADER_SIZE} bytes"
        )

    num_speeds, num_headings, num_parameters = (
        int(v) for v in np.frombuffer(buf, dtype=_HEADER_DTYPE, count=3, offset=0)
    )
    if num_speeds <= 0 or num_headings <= 0:
        raise MalformedDataFile(
            f"Polar file {source_path} has empty or negative sizes: {num_speeds} speeds, {num_headings} headings"
        )

    expected = HEADER_SIZE + (num_speeds + num_headings + num_speeds * num_headings) * _VALUE_DTYPE.itemsize
    if len(buf) < expected:
        raise MalformedDataFile(
            f"Polar file {source_path} truncated: header implies {expected} bytes, got {len(buf)}"
        )

    offset = HEADER_SIZE
    speeds, offset = _read_values(buf, offset, num_speeds, "speeds")
    headings, offset = _read_values(buf, offset, num_headings, "headings")
    roll, offset = _read_values(buf, offset, num_speeds * num_headings, "roll matrix")
    if offset < len(buf):
        _LOG.debug("Polar file %s: ignoring %d trailing bytes", source_path, len(buf) - offset)

    hs, tz = fitted_sea_state(source_path, requested)
    dataset = PolarDataset(
        speeds=speeds,
        headings=headings,
        roll_matrix=roll.reshape(num_speeds, num_headings),
        fitted_gm=requested.gm_m if fitted_gm is None else fitted_gm,
        fitted_hs=hs,
        fitted_tz=tz,
        num_parameters=num_parameters,
        source_path=source_path,
    )
    _LOG.info(
        "Polar file %s: %d speeds x %d headings (%d parameters)",
        source_path,
        num_speeds,
        num_headings,
        num_parameters,
    )
    return dataset


def read_polar_dataset(
    fs: FileSystem,
    path: str,
    requested: OperatingParameters,
    fitted_gm: float | None = None,
) -> PolarDataset:
    """Read a polar file through the file-system collaborator and decode it."""
    try:
        data = fs.read_binary_file(path)
    except FileNotFoundError as exc:
        raise DirectoryNotFound(f"Polar file not found: {path}") from exc
    except OSError as exc:
        _LOG.warning("Polar file: cannot read %s: %s", path, exc)
        raise MalformedDataFile(f"Cannot read polar file {path}: {exc}") from exc
    return decode_polar_dataset(data, path, requested, fitted_gm=fitted_gm)
