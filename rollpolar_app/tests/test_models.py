"""Tests for domain models."""

from __future__ import annotations

import numpy as np
import pytest

from rollpolar_app.models import (
    ControlFile,
    DraftCategory,
    OperatingParameters,
    ParameterBounds,
    PolarDataset,
    RepresentativeDrafts,
    SavedCase,
    WavePeriodType,
)
from rollpolar_app.services.errors import MalformedDataFile


class TestOperatingParameters:
    def test_defaults(self):
        p = OperatingParameters()
        assert p.draft_category is DraftCategory.DESIGN
        assert (p.gm_m, p.hs_m, p.tz_s) == (2.0, 5.0, 10.0)
        assert (p.heading_deg, p.speed_kn, p.wave_direction_deg) == (18.0, 12.0, 130.0)
        assert p.max_roll_angle_deg == 20.0
        assert p.wave_period_type is WavePeriodType.TZ

    def test_enum_coercion(self):
        p = OperatingParameters(draft_category="scantling", wave_period_type="tp")
        assert p.draft_category is DraftCategory.SCANTLING
        assert p.wave_period_type is WavePeriodType.TP

    def test_invalid_category(self):
        with pytest.raises(ValueError):
            OperatingParameters(draft_category="ballast")

    def test_average_draft(self):
        assert OperatingParameters(draft_aft_peak_m=9.0, draft_fore_peak_m=7.0).average_draft_m == 8.0

    def test_copy_is_independent(self):
        p = OperatingParameters()
        q = p.copy(gm_m=3.0)
        assert q.gm_m == 3.0
        assert p.gm_m == 2.0

    def test_dict_roundtrip(self):
        p = OperatingParameters(draft_category=DraftCategory.INTERMEDIATE, gm_m=1.25, heading_deg=271.0)
        assert OperatingParameters.from_dict(p.to_dict()) == p

    def test_from_dict_fills_missing(self):
        p = OperatingParameters.from_dict({"gm_m": "3.5", "hs_m": None})
        assert p.gm_m == 3.5
        assert p.hs_m == 5.0


class TestControlFileModels:
    def test_bounds(self):
        b = ParameterBounds(gm_lower=1.0, gm_upper=4.0)
        assert b.contains(2.0, 5.0, 10.0)
        assert b.out_of_bounds(0.5, 13.0, 10.0) == {"gm": 0.5, "hs": 13.0}
        # bounds are inclusive
        assert b.contains(1.0, 3.0, 18.0)

    def test_representative_drafts(self):
        d = RepresentativeDrafts(scantling=12.0, design=10.5, intermediate=8.0)
        assert d.for_category(DraftCategory.INTERMEDIATE) == 8.0
        assert d.for_category("scantling") == 12.0

    def test_control_file_defaults(self):
        control = ControlFile()
        assert control.vessel_info.imo == "Unknown"
        assert control.parameter_bounds == ParameterBounds()


class TestPolarDataset:
    def test_properties(self, sample_dataset):
        assert sample_dataset.num_speeds == 4
        assert sample_dataset.num_headings == 9
        assert sample_dataset.max_speed == 15.0
        assert sample_dataset.max_roll == 9.0

    def test_shape_mismatch(self):
        with pytest.raises(MalformedDataFile):
            PolarDataset(
                speeds=[0.0, 10.0],
                headings=[0.0, 90.0, 180.0],
                roll_matrix=np.zeros((3, 2)),
                fitted_gm=1.0,
                fitted_hs=1.0,
                fitted_tz=1.0,
            )

    def test_snapshot_is_deep(self, sample_dataset):
        snap = sample_dataset.snapshot()
        snap.roll_matrix[0, 0] = 99.0
        assert sample_dataset.roll_matrix[0, 0] == 1.0
        assert snap.fitted_tz == sample_dataset.fitted_tz


def test_saved_case_defaults():
    case = SavedCase(case_id="A")
    assert case.timestamp.tzinfo is not None
    assert case.roll_deg is None
    assert not case.is_in_danger_zone
