"""Unit tests for RGB colors."""

import pytest

from phongtracer.core.color import BLACK, WHITE, Color


class TestColor:
    """Tests for color arithmetic and comparison."""

    def test_channels(self):
        c = Color(-0.5, 0.4, 1.7)
        assert c.red == -0.5
        assert c.green == 0.4
        assert c.blue == 1.7

    def test_add(self):
        assert Color(0.9, 0.6, 0.75) + Color(0.7, 0.1, 0.25) == Color(1.6, 0.7, 1.0)

    def test_subtract(self):
        assert Color(0.9, 0.6, 0.75) - Color(0.7, 0.1, 0.25) == Color(0.2, 0.5, 0.5)

    def test_multiply_by_scalar(self):
        assert Color(0.2, 0.3, 0.4) * 2 == Color(0.4, 0.6, 0.8)
        assert 2 * Color(0.2, 0.3, 0.4) == Color(0.4, 0.6, 0.8)

    def test_hadamard_product(self):
        assert Color(1, 0.2, 0.4) * Color(0.9, 1, 0.1) == Color(0.9, 0.2, 0.04)

    def test_approximate_equality(self):
        assert Color(0.38066, 0.47583, 0.2855) == Color(0.380661, 0.475832, 0.285499)
        assert Color(0.5, 0.5, 0.5) != Color(0.5, 0.5, 0.5001)

    def test_constants(self):
        assert BLACK == Color(0, 0, 0)
        assert WHITE == Color(1, 1, 1)

    def test_iterates_channels(self):
        assert tuple(Color(0.1, 0.2, 0.3)) == pytest.approx((0.1, 0.2, 0.3))


class TestColorEncoding:
    """Tests for 8-bit channel encoding."""

    def test_to_rgb255_clamps(self):
        assert Color(1.5, 0.0, -0.5).to_rgb255() == (255, 0, 0)

    def test_to_rgb255_scales_by_256(self):
        assert Color(0.0, 0.5, 1.0).to_rgb255() == (0, 128, 255)

    def test_to_rgb255_truncates(self):
        assert Color(1.0, 0.8, 0.6).to_rgb255() == (255, 204, 153)

    def test_to_rgb255_maps_nan_to_zero(self):
        nan = float("nan")
        assert Color(nan, 0.5, nan).to_rgb255() == (0, 128, 0)
