"""
Session-level orchestration: control file, dataset loading, saved cases.

State: UNINITIALIZED -> CONTROL_FILE_LOADED -> DATASET_READY, and
DATASET_READY -> DATASET_READY on every later successful load. A failed load
leaves state, dataset and parameters untouched and re-raises the error.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..config.limits import MAX_CASE_ID_LENGTH
from ..models import ControlFile, OperatingParameters, PolarDataset, SavedCase
from .control_file import read_control_file
from .coordinates import DirectionMode, convert_wave_direction, to_display_angle
from .dataset_locator import DEFAULT_POLAR_ROOT, TieBreak, locate_dataset_match
from .errors import CaseValidationError, PolarDataError
from .field_classifier import (
    RGB,
    DisplayMode,
    TrafficLight,
    classify,
    is_in_danger_zone,
)
from .file_service import FileSystem
from .polar_decoder import read_polar_dataset
from .roll_interpolation import InterpolationMode, PolarField, interpolate_roll, resample_field

_LOG = logging.getLogger(__name__)


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    CONTROL_FILE_LOADED = "control_file_loaded"
    DATASET_READY = "dataset_ready"


@dataclass(slots=True)
class FieldSample:
    """One cell of the polar plot, ready for an external renderer."""

    display_angle: float
    speed: float
    roll: float
    classification: RGB | TrafficLight


def relative_wave_heading(params: OperatingParameters) -> float:
    """Wave direction in the vessel frame (deg clockwise from the bow)."""
    return convert_wave_direction(params.wave_direction_deg, params.heading_deg, DirectionMode.HEADS_UP)


class PolarSession:
    """Owns the control file, current parameters, loaded dataset and saved cases."""

    def __init__(
        self,
        fs: FileSystem,
        polar_root: str = DEFAULT_POLAR_ROOT,
        control_file_name: str = "proll.ctl",
        interpolation_mode: InterpolationMode = InterpolationMode.LEGACY,
        tie_break: TieBreak = TieBreak.LISTING_ORDER,
        case_repository=None,
    ) -> None:
        self._fs = fs
        self._root = polar_root
        self._control_file_name = control_file_name
        self.interpolation_mode = interpolation_mode
        self.tie_break = tie_break
        self._case_repo = case_repository

        self._lock = threading.Lock()
        self._state = SessionState.UNINITIALIZED
        self._control: ControlFile | None = None
        self._parameters = OperatingParameters()
        self._dataset: PolarDataset | None = None
        self._cases: List[SavedCase] = []
        # Bumped on every load request; only the latest request may apply its result
        self._generation = 0

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def control_file(self) -> ControlFile | None:
        return self._control

    @property
    def parameters(self) -> OperatingParameters:
        return self._parameters

    @property
    def dataset(self) -> PolarDataset | None:
        return self._dataset

    @property
    def saved_cases(self) -> Tuple[SavedCase, ...]:
        return tuple(self._cases)

    # ----------------------------------------------------------- control file

    def load_control_file(self, path: str | None = None, strict: bool = False) -> ControlFile:
        """Read the control file; replaces any previous one wholesale."""
        path = path or f"{self._root}/{self._control_file_name}"
        control = read_control_file(self._fs, path, strict=strict)
        with self._lock:
            self._control = control
            if self._state is SessionState.UNINITIALIZED:
                self._state = SessionState.CONTROL_FILE_LOADED
        outside = control.parameter_bounds.out_of_bounds(
            self._parameters.gm_m, self._parameters.hs_m, self._parameters.tz_s
        )
        if outside:
            _LOG.info("Current parameters outside control file bounds: %s", outside)
        return control

    def update_parameters(self, **changes) -> OperatingParameters:
        """Replace the current parameters with a copy carrying `changes`."""
        with self._lock:
            self._parameters = self._parameters.copy(**changes)
            return self._parameters

    # ---------------------------------------------------------------- loading

    def _require_control_file(self) -> None:
        if self._state is SessionState.UNINITIALIZED:
            raise RuntimeError("Load the control file before loading polar data")

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _resolve_dataset(self, params: OperatingParameters) -> PolarDataset:
        match = locate_dataset_match(self._fs, params, root=self._root, tie_break=self.tie_break)
        return read_polar_dataset(self._fs, match.path, params, fitted_gm=match.gm_value)

    def _apply(self, generation: int, params: OperatingParameters, dataset: PolarDataset) -> PolarDataset | None:
        with self._lock:
            if generation != self._generation:
                _LOG.info("Discarding stale dataset load #%d (latest is #%d)", generation, self._generation)
                return None
            self._dataset = dataset
            self._parameters = params
            self._state = SessionState.DATASET_READY
        return dataset

    def load_dataset(self, params: OperatingParameters | None = None) -> PolarDataset | None:
        """
        Locate and decode the dataset for `params` (default: current parameters).

        Returns None when a newer load was requested while this one was reading;
        the newer request's result is the one applied.
        """
        self._require_control_file()
        params = (params or self._parameters).copy()
        generation = self._next_generation()
        try:
            dataset = self._resolve_dataset(params)
        except PolarDataError as exc:
            if generation != self._generation:
                _LOG.info("Ignoring failure of stale dataset load #%d: %s", generation, exc)
                return None
            _LOG.warning("Dataset load failed: %s", exc)
            raise
        return self._apply(generation, params, dataset)

    def request_load(self, params: OperatingParameters | None = None) -> "asyncio.Task[PolarDataset | None]":
        """
        Start a non-blocking load on the running event loop.

        The file reads run in the default executor. If another request starts
        before this one finishes, this task resolves to None and its result
        is not applied.
        """
        self._require_control_file()
        params = (params or self._parameters).copy()
        generation = self._next_generation()
        return asyncio.get_running_loop().create_task(self._load_async(generation, params))

    async def _load_async(self, generation: int, params: OperatingParameters) -> PolarDataset | None:
        loop = asyncio.get_running_loop()
        try:
            dataset = await loop.run_in_executor(None, self._resolve_dataset, params)
        except PolarDataError as exc:
            if generation != self._generation:
                _LOG.info("Ignoring failure of stale dataset load #%d: %s", generation, exc)
                return None
            _LOG.warning("Dataset load failed: %s", exc)
            raise
        return self._apply(generation, params, dataset)

    async def load_dataset_async(self, params: OperatingParameters | None = None) -> PolarDataset | None:
        return await self.request_load(params)

    # ---------------------------------------------------------------- queries

    def _require_dataset(self) -> PolarDataset:
        if self._dataset is None:
            raise RuntimeError("No polar dataset loaded")
        return self._dataset

    def roll_at(self, speed: float, beta_deg: float) -> float:
        """Roll (deg) at `speed` and vessel-frame wave heading `beta_deg`."""
        return interpolate_roll(self._require_dataset(), speed, beta_deg, self.interpolation_mode)

    def current_roll(self) -> float:
        """Roll at the current speed and relative wave heading."""
        params = self._parameters
        return self.roll_at(params.speed_kn, relative_wave_heading(params))

    def field(self, angular_segments: int | None = None, radial_segments: int | None = None) -> PolarField:
        kwargs = {}
        if angular_segments is not None:
            kwargs["angular_segments"] = angular_segments
        if radial_segments is not None:
            kwargs["radial_segments"] = radial_segments
        return resample_field(self._require_dataset(), mode=self.interpolation_mode, **kwargs)

    def display_samples(
        self,
        direction_mode: DirectionMode = DirectionMode.NORTH_UP,
        display_mode: DisplayMode = DisplayMode.CONTINUOUS,
        angular_segments: int | None = None,
        radial_segments: int | None = None,
    ) -> List[FieldSample]:
        """Polar plot cells in display angles, classified for the chosen display mode."""
        params = self._parameters
        polar = self.field(angular_segments, radial_segments)
        samples: List[FieldSample] = []
        for r, speed in enumerate(polar.speeds_kn):
            for a, beta in enumerate(polar.angles_deg):
                roll = float(polar.roll[r, a])
                samples.append(
                    FieldSample(
                        display_angle=to_display_angle(float(beta), params.heading_deg, direction_mode),
                        speed=float(speed),
                        roll=roll,
                        classification=classify(roll, params.max_roll_angle_deg, display_mode),
                    )
                )
        return samples

    # ------------------------------------------------------------ saved cases

    def _validate_case_id(self, case_id: str) -> str:
        cid = (case_id or "").strip()
        if not cid or len(cid) > MAX_CASE_ID_LENGTH:
            raise CaseValidationError(f"Case ID must be 1-{MAX_CASE_ID_LENGTH} characters")
        if any(c.case_id == cid for c in self._cases):
            raise CaseValidationError(f"Case ID '{cid}' already exists")
        return cid

    def save_case(self, case_id: str, include_dataset: bool = True) -> SavedCase:
        """Snapshot the current parameters (and roll, if a dataset is loaded)."""
        with self._lock:
            cid = self._validate_case_id(case_id)
            params = self._parameters.copy()
            roll: float | None = None
            snapshot: PolarDataset | None = None
            if self._dataset is not None:
                roll = interpolate_roll(
                    self._dataset, params.speed_kn, relative_wave_heading(params), self.interpolation_mode
                )
                if include_dataset:
                    snapshot = self._dataset.snapshot()
            case = SavedCase(
                case_id=cid,
                parameters=params,
                is_in_danger_zone=roll is not None and is_in_danger_zone(roll, params.max_roll_angle_deg),
                roll_deg=roll,
                dataset=snapshot,
            )
            if self._case_repo is not None:
                self._case_repo.create(case)
            self._cases.append(case)
        _LOG.info("Saved case '%s' (roll=%s, danger=%s)", cid, roll, case.is_in_danger_zone)
        return case

    def get_case(self, case_id: str) -> Optional[SavedCase]:
        for case in self._cases:
            if case.case_id == case_id:
                return case
        return None

    def delete_case(self, case_id: str) -> bool:
        with self._lock:
            before = len(self._cases)
            self._cases = [c for c in self._cases if c.case_id != case_id]
            removed = len(self._cases) != before
            if removed and self._case_repo is not None:
                self._case_repo.delete(case_id)
        return removed

    def restore_cases(self) -> List[SavedCase]:
        """Load previously persisted cases (without dataset snapshots)."""
        if self._case_repo is None:
            return []
        with self._lock:
            self._cases = self._case_repo.list()
            return list(self._cases)
