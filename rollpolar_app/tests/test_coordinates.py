"""Tests for display-frame angle conversions."""

from __future__ import annotations

import pytest

from rollpolar_app.services.coordinates import (
    DirectionMode,
    angle_difference,
    average_draft,
    cartesian_to_polar,
    convert_wave_direction,
    format_angle,
    format_speed,
    normalize_angle,
    polar_to_cartesian,
    to_display_angle,
    to_heads_up,
    to_north_up,
)


class TestNormalize:
    @pytest.mark.parametrize("angle", [-725.5, -360.0, -1e-3, 0.0, 37.5, 359.999, 360.0, 1080.25])
    def test_range(self, angle):
        assert 0.0 <= normalize_angle(angle) < 360.0

    @pytest.mark.parametrize("angle", [-90.0, 0.0, 37.5, 270.25])
    @pytest.mark.parametrize("k", [-3, -1, 1, 2, 5])
    def test_periodic(self, angle, k):
        assert normalize_angle(angle + 360 * k) == normalize_angle(angle)

    def test_values(self):
        assert normalize_angle(-90.0) == 270.0
        assert normalize_angle(360.0) == 0.0
        assert normalize_angle(450.0) == 90.0


class TestDisplayFrames:
    def test_north_up(self):
        assert to_north_up(90.0, 18.0) == 108.0
        assert to_north_up(0.0, 0.0) == 180.0
        assert to_north_up(270.0, 10.0) == 280.0

    def test_heads_up(self):
        assert to_heads_up(0.0) == 180.0
        assert to_heads_up(90.0) == 90.0
        assert to_heads_up(270.0) == 270.0
        assert to_heads_up(200.0) == 340.0

    def test_dispatch(self):
        assert to_display_angle(90.0, 18.0, DirectionMode.NORTH_UP) == 108.0
        assert to_display_angle(90.0, 18.0, DirectionMode.HEADS_UP) == 90.0
        assert to_display_angle(90.0, 18.0, "headsup") == 90.0

    def test_wave_direction(self):
        assert convert_wave_direction(130.0, 18.0, DirectionMode.NORTH_UP) == 130.0
        assert convert_wave_direction(-10.0, 18.0, DirectionMode.NORTH_UP) == 350.0
        assert convert_wave_direction(130.0, 18.0, DirectionMode.HEADS_UP) == 112.0
        assert convert_wave_direction(10.0, 30.0, DirectionMode.HEADS_UP) == 340.0


def test_angle_difference():
    assert angle_difference(350.0, 10.0) == pytest.approx(20.0)
    assert angle_difference(10.0, 350.0) == pytest.approx(-20.0)
    assert angle_difference(0.0, 180.0) == pytest.approx(180.0)


def test_polar_cartesian():
    x, y = polar_to_cartesian(2.0, 90.0)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(2.0)
    r, theta = cartesian_to_polar(0.0, -3.0)
    assert r == pytest.approx(3.0)
    assert theta == pytest.approx(-90.0)


def test_helpers():
    assert average_draft(9.0, 11.0) == 10.0
    assert format_angle(-90.0) == "270°"
    assert format_speed(12.345) == "12.3 kn"
