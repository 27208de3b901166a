"""Unit tests for the camera: pixel geometry, ray generation and serial rendering.

The Taichi render backend is covered in test_integrator.py.
"""

import math

import pytest

from phongtracer.core.color import Color
from phongtracer.core.matrix import IDENTITY, MatrixNotInvertibleError
from phongtracer.core.transformations import rotation_y, scaling, translation, view_transform
from phongtracer.core.tuples import Point, Vector
from phongtracer.camera.camera import Camera

HALF_SQRT2 = math.sqrt(2) / 2


class TestCameraConstruction:
    """Tests for camera configuration."""

    def test_construct(self):
        c = Camera(160, 120, math.pi / 2)
        assert c.hsize == 160
        assert c.vsize == 120
        assert c.field_of_view == pytest.approx(math.pi / 2)
        assert c.transform == IDENTITY

    def test_pixel_size_horizontal_canvas(self):
        c = Camera(200, 125, math.pi / 2)
        assert c.pixel_size == pytest.approx(0.01)

    def test_pixel_size_vertical_canvas(self):
        c = Camera(125, 200, math.pi / 2)
        assert c.pixel_size == pytest.approx(0.01)

    def test_half_extents_follow_aspect(self):
        c = Camera(200, 100, math.pi / 2)
        assert c.half_width == pytest.approx(1.0)
        assert c.half_height == pytest.approx(0.5)

    @pytest.mark.parametrize("hsize, vsize", [(0, 10), (10, 0), (-5, 5)])
    def test_nonpositive_size_rejected(self, hsize, vsize):
        with pytest.raises(ValueError, match="size"):
            Camera(hsize, vsize, math.pi / 2)

    @pytest.mark.parametrize("fov", [0.0, math.pi, -1.0, 4.0])
    def test_field_of_view_out_of_range(self, fov):
        with pytest.raises(ValueError, match="Field of view"):
            Camera(10, 10, fov)

    def test_singular_transform_rejected(self):
        c = Camera(10, 10, math.pi / 2)
        with pytest.raises(MatrixNotInvertibleError):
            c.set_transform(scaling(0, 1, 1))
        assert c.transform == IDENTITY

    def test_set_transform_caches_inverse(self):
        c = Camera(10, 10, math.pi / 2)
        t = translation(1, 2, 3)
        c.set_transform(t)
        assert c.transform == t
        assert c.inverse_transform == t.inverse()


class TestRayForPixel:
    """Tests for generating primary rays."""

    def test_ray_through_center(self):
        c = Camera(201, 101, math.pi / 2)
        r = c.ray_for_pixel(100, 50)
        assert r.origin == Point(0, 0, 0)
        assert r.direction == Vector(0, 0, -1)

    def test_ray_through_corner(self):
        c = Camera(201, 101, math.pi / 2)
        r = c.ray_for_pixel(0, 0)
        assert r.origin == Point(0, 0, 0)
        assert r.direction == Vector(0.66519, 0.33259, -0.66851)

    def test_ray_with_transformed_camera(self):
        c = Camera(201, 101, math.pi / 2)
        c.set_transform(rotation_y(math.pi / 4) @ translation(0, -2, 5))
        r = c.ray_for_pixel(100, 50)
        assert r.origin == Point(0, 2, -5)
        assert r.direction == Vector(HALF_SQRT2, 0, -HALF_SQRT2)

    def test_directions_are_normalized(self):
        c = Camera(16, 9, math.pi / 3)
        for x, y in [(0, 0), (15, 8), (7, 3)]:
            assert c.ray_for_pixel(x, y).direction.magnitude() == pytest.approx(1.0)

    def test_pixels_row_major(self):
        c = Camera(3, 2, math.pi / 2)
        assert list(c.pixels()) == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]


class TestSerialRender:
    """Tests for the pure Python render backend."""

    def test_render_default_world(self, default_world):
        c = Camera(11, 11, math.pi / 2)
        c.set_transform(view_transform(Point(0, 0, -5), Point(0, 0, 0), Vector(0, 1, 0)))
        image = c.render(default_world, backend="python")
        assert image.width == 11
        assert image.height == 11
        assert image.pixel_at(5, 5) == Color(0.38066, 0.47583, 0.2855)

    def test_progress_callback(self, default_world):
        calls = []
        c = Camera(4, 11, math.pi / 2)
        c.render(
            default_world,
            backend="python",
            rows_per_batch=4,
            callback=lambda done, total: calls.append((done, total)),
        )
        assert calls == [(4, 11), (8, 11), (11, 11)]

    def test_unknown_backend(self, default_world):
        c = Camera(4, 4, math.pi / 2)
        with pytest.raises(ValueError, match="backend"):
            c.render(default_world, backend="cuda")

    def test_invalid_rows_per_batch(self, default_world):
        c = Camera(4, 4, math.pi / 2)
        with pytest.raises(ValueError, match="rows_per_batch"):
            c.render(default_world, backend="python", rows_per_batch=0)
