"""Preview module: image storage and export.

Components:
    canvas: Pixel buffer with PPM encoding
    export: PNG and PPM writers
"""

from .canvas import Canvas
from .export import save_image, save_png, save_ppm, to_uint8

__all__ = [
    "Canvas",
    "save_image",
    "save_png",
    "save_ppm",
    "to_uint8",
]
