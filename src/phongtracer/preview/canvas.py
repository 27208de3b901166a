"""Pixel buffer for rendered images.

A Canvas stores linear RGB colors in a NumPy array of shape
(height, width, 3), row-major with y growing downward, so
``canvas.to_numpy()[y, x]`` is the pixel at column x, row y.

The PPM encoder writes plain-text ``P3`` files. Channels are scaled to
0-255 and clamped, with NaN written as 0. Body lines never exceed 70 characters.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from phongtracer.core.color import Color

PPM_MAX_LINE_LENGTH = 70
PPM_MAX_COLOR_VALUE = 255


class Canvas:
    """A width x height grid of colors, initially black.

    Args:
        width: Number of columns.
        height: Number of rows.

    Raises:
        ValueError: If either dimension is not positive.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @classmethod
    def from_numpy(cls, array: npt.ArrayLike) -> Canvas:
        """Wrap a (height, width, 3) array of linear colors.

        Raises:
            ValueError: If the array does not have three channels.
        """
        data = np.asarray(array, dtype=np.float64)
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (height, width, 3), got {data.shape}")
        canvas = cls(data.shape[1], data.shape[0])
        canvas._pixels[...] = data
        return canvas

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Set one pixel. Writes outside the canvas are silently dropped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self._pixels[y, x] = (color.red, color.green, color.blue)

    def pixel_at(self, x: int, y: int) -> Color:
        """Read one pixel.

        Raises:
            IndexError: If (x, y) lies outside the canvas.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        r, g, b = self._pixels[y, x]
        return Color(r, g, b)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the pixel array, shape (height, width, 3)."""
        return self._pixels.copy()

    def to_ppm(self) -> str:
        """Encode the canvas as a plain-text PPM (P3) document."""
        lines = ["P3", f"{self.width} {self.height}", str(PPM_MAX_COLOR_VALUE)]
        scaled = np.nan_to_num(self._pixels * 256.0, nan=0.0)
        encoded = np.clip(scaled, 0.0, PPM_MAX_COLOR_VALUE).astype(np.int64)
        for row in encoded:
            text = " ".join(str(int(value)) for value in row.reshape(-1))
            lines.extend(wrap_ppm_line(text))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height})"


def wrap_ppm_line(line: str, limit: int = PPM_MAX_LINE_LENGTH) -> list[str]:
    """Split a line of space-separated values into lines of at most ``limit`` characters.

    Breaks always fall on spaces; a single token longer than the limit is
    left intact.
    """
    lines: list[str] = []
    while len(line) > limit:
        cut = line.rfind(" ", 0, limit)
        if cut <= 0:
            break
        lines.append(line[:cut])
        line = line[cut + 1 :]
    lines.append(line)
    return lines
