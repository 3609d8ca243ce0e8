"""
Nearest-match search for a polar data file.

Database layout (relative to the file-system collaborator's base)::

    <root>/<draft category>/<folder with GM value, e.g. "GM=1.5m">/bin/MAXROLL_H<hs>_T<tz>.bpolar

The search runs in three stages: exact draft category folder, GM folder with
the closest embedded number, then the file closest in (Hs, Tz).
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Sequence, Tuple, TypeVar

from ..models import OperatingParameters
from .errors import DirectoryNotFound, NoMatchFound
from .file_service import FileSystem

_LOG = logging.getLogger(__name__)

DEFAULT_POLAR_ROOT = "PolarData"
BIN_FOLDER = "bin"

_NUMBER_RUN = re.compile(r"[\d.]+")
_NUMBER_PREFIX = re.compile(r"\d+\.?\d*|\.\d+")
_HS_TAG = re.compile(r"_H([\d.]+)_")
_TZ_TAG = re.compile(r"_T([\d.]+)\.")

T = TypeVar("T")


class TieBreak(Enum):
    """How equally distant candidates are ranked."""

    # First candidate in directory-listing order wins (listing order is not sorted)
    LISTING_ORDER = "listing_order"
    # Sort by (distance, name) first; independent of listing order
    SORTED = "sorted"


@dataclass(slots=True)
class DatasetMatch:
    path: str
    gm_folder: str
    gm_value: float
    gm_distance: float
    file_name: str
    hs: float
    tz: float
    distance: float


def _to_float(run: str) -> float | None:
    m = _NUMBER_PREFIX.match(run)
    if not m:
        return None
    return float(m.group(0))


def parse_embedded_number(name: str) -> float | None:
    """First run of digits/dots anywhere in `name` as a float ("GM=1.5m" -> 1.5)."""
    m = _NUMBER_RUN.search(name)
    if not m:
        return None
    return _to_float(m.group(0))


def parse_sea_state(name: str) -> Tuple[float, float] | None:
    """(Hs, Tz) from a file name like "MAXROLL_H10.0_T10.5.bpolar", or None."""
    h = _HS_TAG.search(name)
    t = _TZ_TAG.search(name)
    if not h or not t:
        return None
    hs = _to_float(h.group(1))
    tz = _to_float(t.group(1))
    if hs is None or tz is None:
        return None
    return hs, tz


def _pick_closest(
    candidates: Sequence[Tuple[str, float, T]],
    tie_break: TieBreak,
) -> Tuple[str, float, T] | None:
    """Candidate (name, distance, payload) with the smallest distance."""
    if not candidates:
        return None
    if tie_break is TieBreak.SORTED:
        return sorted(candidates, key=lambda c: (c[1], c[0]))[0]
    best = candidates[0]
    for cand in candidates[1:]:
        if cand[1] < best[1]:
            best = cand
    return best


def _list(fs: FileSystem, path: str) -> List[str]:
    if not fs.directory_exists(path):
        raise DirectoryNotFound(f"Directory not found: {path}")
    try:
        return list(fs.list_directory(path))
    except OSError as exc:
        raise DirectoryNotFound(f"Directory not found: {path}") from exc


def _rank(
    names: Sequence[str],
    distance: Callable[[str], Tuple[float, T] | None],
) -> List[Tuple[str, float, T]]:
    ranked: List[Tuple[str, float, T]] = []
    for name in names:
        scored = distance(name)
        if scored is None:
            continue
        dist, payload = scored
        ranked.append((name, dist, payload))
    return ranked


def find_closest_gm_folder(
    folders: Sequence[str],
    gm: float,
    tie_break: TieBreak = TieBreak.LISTING_ORDER,
) -> Tuple[str, float, float] | None:
    """Return (folder, gm_value, distance) for the folder whose number is closest to `gm`."""

    def score(name: str) -> Tuple[float, float] | None:
        value = parse_embedded_number(name)
        if value is None:
            return None
        return abs(value - gm), value

    best = _pick_closest(_rank(folders, score), tie_break)
    if best is None:
        return None
    name, dist, value = best
    return name, value, dist


def find_closest_data_file(
    files: Sequence[str],
    hs: float,
    tz: float,
    tie_break: TieBreak = TieBreak.LISTING_ORDER,
) -> Tuple[str, Tuple[float, float], float] | None:
    """
    Return (file, (file_hs, file_tz), distance) for the file closest to (hs, tz).

    Distance is plain Euclidean on raw values (metres against seconds, no
    scaling).
    """

    def score(name: str) -> Tuple[float, Tuple[float, float]] | None:
        sea_state = parse_sea_state(name)
        if sea_state is None:
            return None
        file_hs, file_tz = sea_state
        return math.sqrt((file_hs - hs) ** 2 + (file_tz - tz) ** 2), sea_state

    best = _pick_closest(_rank(files, score), tie_break)
    if best is None:
        return None
    name, dist, sea_state = best
    return name, sea_state, dist


def locate_dataset_match(
    fs: FileSystem,
    params: OperatingParameters,
    root: str = DEFAULT_POLAR_ROOT,
    tie_break: TieBreak = TieBreak.LISTING_ORDER,
) -> DatasetMatch:
    """Run the three-stage search and describe the chosen file."""
    draft_path = f"{root}/{params.draft_category.value}"
    _LOG.info(
        "Locating dataset: draft=%s gm=%.3f hs=%.3f tz=%.3f",
        params.draft_category.value,
        params.gm_m,
        params.hs_m,
        params.tz_s,
    )

    # Plain files in the draft folder are not GM candidates
    gm_folders = [name for name in _list(fs, draft_path) if fs.directory_exists(f"{draft_path}/{name}")]
    _LOG.debug("Available GM folders: %s", gm_folders)
    gm_match = find_closest_gm_folder(gm_folders, params.gm_m, tie_break)
    if gm_match is None:
        _LOG.warning("No GM folder with a numeric value under %s", draft_path)
        raise NoMatchFound(f"No matching GM folder found in {draft_path}")
    gm_folder, gm_value, gm_distance = gm_match
    _LOG.info("Selected GM folder: %s (GM %.3f)", gm_folder, gm_value)

    bin_path = f"{draft_path}/{gm_folder}/{BIN_FOLDER}"
    data_files = _list(fs, bin_path)
    _LOG.debug("Available data files (first 5): %s", data_files[:5])
    file_match = find_closest_data_file(data_files, params.hs_m, params.tz_s, tie_break)
    if file_match is None:
        _LOG.warning("No *_H<hs>_T<tz>.* data file under %s", bin_path)
        raise NoMatchFound(f"No matching data file found in {bin_path}")
    file_name, (file_hs, file_tz), distance = file_match
    _LOG.info("Selected data file: %s (distance %.3f)", file_name, distance)

    return DatasetMatch(
        path=f"{bin_path}/{file_name}",
        gm_folder=gm_folder,
        gm_value=gm_value,
        gm_distance=gm_distance,
        file_name=file_name,
        hs=file_hs,
        tz=file_tz,
        distance=distance,
    )


def locate_dataset(
    fs: FileSystem,
    params: OperatingParameters,
    root: str = DEFAULT_POLAR_ROOT,
    tie_break: TieBreak = TieBreak.LISTING_ORDER,
) -> str:
    """Path of the data file best matching the operating parameters."""
    return locate_dataset_match(fs, params, root=root, tie_break=tie_break).path
