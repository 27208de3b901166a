"""Perspective camera that maps pixels to world-space rays.

The camera sits at the origin of its own coordinate space, looking down -z,
with the canvas one unit in front of it at z = -1. The field of view fixes
how much of that plane the canvas covers:

    half_view = tan(field_of_view / 2)

The longer canvas side spans 2 * half_view; the shorter side is scaled by the
aspect ratio. The view transform (usually from view_transform) places the
camera in the world; its inverse is cached so ray generation only pays for
two matrix-tuple products per pixel.

Rendering evaluates World.color_at for every pixel. Pixels are independent,
so the default "taichi" backend evaluates them in parallel inside a single
kernel per row batch; the "python" backend walks the pixels serially in
row-major order through the same public API the tests exercise.

Example:
    >>> import math
    >>> from phongtracer.camera.camera import Camera
    >>> from phongtracer.core.transformations import view_transform
    >>> from phongtracer.core.tuples import Point, Vector
    >>> camera = Camera(160, 120, math.pi / 3)
    >>> camera.set_transform(view_transform(Point(0, 1.5, -5), Point(0, 1, 0), Vector(0, 1, 0)))
    >>> canvas = camera.render(world)
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Literal

from phongtracer.core.matrix import IDENTITY, Matrix
from phongtracer.core.ray import Ray
from phongtracer.core.tuples import Point
from phongtracer.preview.canvas import Canvas

if TYPE_CHECKING:
    from phongtracer.scene.world import World

# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]

RenderBackend = Literal["taichi", "python"]

# Rows evaluated per kernel launch between progress callbacks
DEFAULT_ROWS_PER_BATCH = 64

CAMERA_ORIGIN = Point(0.0, 0.0, 0.0)


class Camera:
    """A pinhole camera with a configurable view transform.

    Args:
        hsize: Canvas width in pixels.
        vsize: Canvas height in pixels.
        field_of_view: Angle of view in radians, in (0, pi).
        transform: World-to-camera view transform. Defaults to identity.

    Raises:
        ValueError: If the canvas size or field of view is out of range.
        MatrixNotInvertibleError: If the transform is singular.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix = IDENTITY,
    ) -> None:
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi) radians, got {field_of_view}")

        self._hsize = int(hsize)
        self._vsize = int(vsize)
        self._field_of_view = float(field_of_view)

        half_view = math.tan(self._field_of_view / 2.0)
        aspect = self._hsize / self._vsize
        if aspect >= 1.0:
            self._half_width = half_view
            self._half_height = half_view / aspect
        else:
            self._half_width = half_view * aspect
            self._half_height = half_view
        self._pixel_size = (self._half_width * 2.0) / self._hsize

        self._transform = IDENTITY
        self._inverse_transform = IDENTITY
        self.set_transform(transform)

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def hsize(self) -> int:
        return self._hsize

    @property
    def vsize(self) -> int:
        return self._vsize

    @property
    def field_of_view(self) -> float:
        return self._field_of_view

    @property
    def half_width(self) -> float:
        return self._half_width

    @property
    def half_height(self) -> float:
        return self._half_height

    @property
    def pixel_size(self) -> float:
        """World-space size of one pixel on the canvas plane at z = -1."""
        return self._pixel_size

    @property
    def transform(self) -> Matrix:
        return self._transform

    @property
    def inverse_transform(self) -> Matrix:
        return self._inverse_transform

    def set_transform(self, transform: Matrix) -> None:
        """Replace the view transform.

        The inverse is computed before anything is changed, so a singular
        matrix leaves the camera untouched.

        Raises:
            MatrixNotInvertibleError: If the transform is singular.
            ValueError: If the transform is not 4x4.
        """
        if transform.shape != (4, 4):
            raise ValueError(f"Camera transform must be 4x4, got {transform.shape}")
        inverse = transform.inverse()
        self._transform = transform
        self._inverse_transform = inverse

    # =========================================================================
    # Ray generation
    # =========================================================================

    def ray_for_pixel(self, px: float, py: float) -> Ray:
        """Build the world-space ray through the centre of pixel (px, py).

        Args:
            px: Column, 0 at the left edge.
            py: Row, 0 at the top edge.

        Returns:
            A ray from the camera position with a unit direction.
        """
        xoffset = (px + 0.5) * self._pixel_size
        yoffset = (py + 0.5) * self._pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self._half_width - xoffset
        world_y = self._half_height - yoffset

        pixel = self._inverse_transform @ Point(world_x, world_y, -1.0)
        origin = self._inverse_transform @ CAMERA_ORIGIN
        direction = (pixel - origin).normalize()
        return Ray(origin, direction)

    def pixels(self) -> Iterator[tuple[int, int]]:
        """Enumerate (x, y) pixel coordinates in row-major order."""
        for y in range(self._vsize):
            for x in range(self._hsize):
                yield x, y

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(
        self,
        world: World,
        *,
        backend: RenderBackend = "taichi",
        rows_per_batch: int = DEFAULT_ROWS_PER_BATCH,
        callback: ProgressCallback | None = None,
    ) -> Canvas:
        """Render the world into a new canvas.

        Args:
            world: The scene to render.
            backend: "taichi" to evaluate pixels in parallel in a Taichi
                kernel (Taichi must already be initialised with
                default_fp=ti.f64), or "python" to evaluate them serially.
            rows_per_batch: Rows rendered between progress callbacks.
            callback: Optional callback called after each batch of rows with
                (rows_completed, total_rows).

        Returns:
            A Canvas of size hsize x vsize.

        Raises:
            ValueError: If the backend is unknown or rows_per_batch < 1.
            RuntimeError: If the world exceeds the Taichi kernel capacity.
        """
        if rows_per_batch < 1:
            raise ValueError(f"rows_per_batch must be at least 1, got {rows_per_batch}")

        if backend == "taichi":
            # Deferred: the integrator allocates Taichi fields at import time
            from phongtracer.core.integrator import render_canvas

            return render_canvas(self, world, rows_per_batch=rows_per_batch, callback=callback)
        if backend == "python":
            return self._render_serial(world, rows_per_batch, callback)
        raise ValueError(f"Unknown render backend: {backend}")

    def _render_serial(
        self,
        world: World,
        rows_per_batch: int,
        callback: ProgressCallback | None,
    ) -> Canvas:
        canvas = Canvas(self._hsize, self._vsize)
        for x, y in self.pixels():
            canvas.write_pixel(x, y, world.color_at(self.ray_for_pixel(x, y)))
            row_done = x == self._hsize - 1
            if callback is not None and row_done:
                rows = y + 1
                if rows % rows_per_batch == 0 or rows == self._vsize:
                    callback(rows, self._vsize)
        return canvas

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self._hsize}, vsize={self._vsize}, "
            f"field_of_view={self._field_of_view})"
        )
