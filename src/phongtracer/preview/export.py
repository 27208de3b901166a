"""Image export utilities for rendered canvases.

Supported formats:
    - PNG (8-bit via Pillow, optional gamma encoding)
    - PPM (plain-text P3)

Rendered colors are linear and may exceed 1.0 where several lights add up;
every exporter clamps to the displayable range.

Example:
    >>> from phongtracer.preview.export import save_image
    >>> canvas = camera.render(world)
    >>> save_image(canvas, "scene.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from phongtracer.preview.canvas import Canvas

SUPPORTED_SUFFIXES = (".png", ".ppm")


def to_uint8(canvas: Canvas, gamma: float = 1.0) -> npt.NDArray[np.uint8]:
    """Convert a canvas to an 8-bit RGB array of shape (height, width, 3).

    Channels are clamped to [0, 1] before gamma encoding. NaN becomes 0.

    Args:
        canvas: The canvas to convert.
        gamma: Gamma for encoding; 1.0 leaves values linear.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    image = np.clip(np.nan_to_num(canvas.to_numpy(), nan=0.0), 0.0, 1.0)
    if gamma != 1.0:
        image = np.power(image, 1.0 / gamma)
    return np.clip(image * 256.0, 0.0, 255.0).astype(np.uint8)


def save_png(canvas: Canvas, filepath: str | Path, *, gamma: float = 1.0) -> None:
    """Save the canvas as an 8-bit PNG file.

    Args:
        canvas: The canvas to save.
        filepath: Output file path.
        gamma: Gamma for encoding (default 1.0, linear). Use 2.2 for sRGB-ish output.
    """
    pil_image = PILImage.fromarray(to_uint8(canvas, gamma=gamma))
    pil_image.save(str(filepath))


def save_ppm(canvas: Canvas, filepath: str | Path) -> None:
    """Save the canvas as a plain-text PPM file."""
    Path(filepath).write_text(canvas.to_ppm(), encoding="ascii")


def save_image(canvas: Canvas, filepath: str | Path, *, gamma: float = 1.0) -> Path:
    """Save the canvas in the format implied by the file suffix.

    Args:
        canvas: The canvas to save.
        filepath: Output path ending in .png or .ppm.
        gamma: Gamma for PNG output; ignored for PPM.

    Returns:
        The output path.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix == ".png":
        save_png(canvas, path, gamma=gamma)
    elif suffix == ".ppm":
        save_ppm(canvas, path)
    else:
        raise ValueError(
            f"Unsupported image format '{suffix}'. Supported formats: {', '.join(SUPPORTED_SUFFIXES)}"
        )
    return path
