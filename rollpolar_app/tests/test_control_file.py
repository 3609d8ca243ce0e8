"""Tests for control file parsing."""

from __future__ import annotations

import pytest

from rollpolar_app.models import DraftCategory
from rollpolar_app.services.control_file import extract_value, parse_control_file, read_control_file
from rollpolar_app.services.errors import ConfigReadError

from conftest import CONTROL_TEXT, FakeFileSystem


class TestParseControlFile:
    def test_full_file(self):
        control = parse_control_file(CONTROL_TEXT)
        assert control.vessel_info.imo == "9876543"
        assert control.vessel_info.name == "MV Test Carrier"
        b = control.parameter_bounds
        assert (b.gm_lower, b.gm_upper) == (1.0, 4.0)
        assert (b.hs_lower, b.hs_upper) == (2.0, 14.0)
        assert (b.tz_lower, b.tz_upper) == (6.0, 16.0)
        d = control.representative_drafts
        assert (d.scantling, d.design, d.intermediate) == (12.5, 11.0, 9.5)
        assert d.for_category(DraftCategory.DESIGN) == 11.0

    def test_empty_text_uses_defaults(self):
        control = parse_control_file("")
        assert control.vessel_info.imo == "Unknown"
        assert control.vessel_info.name == "Unknown"
        b = control.parameter_bounds
        assert (b.gm_lower, b.gm_upper, b.hs_lower, b.hs_upper, b.tz_lower, b.tz_upper) == (
            0.5, 5.0, 3.0, 12.0, 5.0, 18.0,
        )
        assert control.representative_drafts.design == 0.0

    def test_comments_and_blank_lines_ignored(self):
        text = "# GM_lower = 9\n\n   \n  GM_lower = 1.5  \n"
        assert parse_control_file(text).parameter_bounds.gm_lower == 1.5

    def test_zero_and_garbage_fall_back_to_default(self):
        text = "GM_lower = 0\nGM_upper = abc\nHs_upper = 11.5m\n"
        b = parse_control_file(text).parameter_bounds
        assert b.gm_lower == 0.5
        assert b.gm_upper == 5.0
        assert b.hs_upper == 11.5

    def test_first_matching_line_wins(self):
        text = "Td = 10\nTd = 20\n"
        assert parse_control_file(text).representative_drafts.design == 10.0

    def test_value_split_on_first_equals(self):
        lines = ["VesselName = A=B"]
        assert extract_value(lines, "VesselName") == "A=B"
        assert extract_value(["VesselName"], "VesselName") is None
        assert extract_value(lines, "IMO") is None

    def test_strict_requires_bounds(self):
        with pytest.raises(ConfigReadError) as exc:
            parse_control_file("IMO = 1\nGM_lower = 1\n", strict=True)
        assert "GM_upper" in str(exc.value)
        # Full file passes strict mode
        parse_control_file(CONTROL_TEXT, strict=True)


class TestReadControlFile:
    def test_reads_through_collaborator(self):
        fs = FakeFileSystem(files={"PolarData/proll.ctl": CONTROL_TEXT.encode("utf-8")})
        control = read_control_file(fs, "PolarData/proll.ctl")
        assert control.vessel_info.name == "MV Test Carrier"

    def test_undecodable_bytes(self):
        fs = FakeFileSystem(files={"proll.ctl": b"\xff\xfe\x00IMO"})
        with pytest.raises(ConfigReadError):
            read_control_file(fs, "proll.ctl")

    def test_missing_file(self):
        with pytest.raises(ConfigReadError):
            read_control_file(FakeFileSystem(), "proll.ctl")
