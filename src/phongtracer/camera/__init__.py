"""Camera module for ray generation and rendering.

Components:
    camera: Pinhole camera mapping pixels to world-space rays

The camera enumerates pixels in row-major order and renders either serially
through World.color_at or in parallel through the Taichi integrator.
"""

from .camera import DEFAULT_ROWS_PER_BATCH, Camera, ProgressCallback

__all__ = [
    "Camera",
    "ProgressCallback",
    "DEFAULT_ROWS_PER_BATCH",
]
