"""Image export for rendered canvases.

The tracer core stops at the Canvas; these helpers are its serialization
collaborators. They read the canvas through its (width, height, pixel data)
interface only.

Supported formats:
    - PPM (plain "P3" text, written directly)
    - PNG (8-bit via Pillow)

Example:
    >>> from raytracer.preview.export import save_png, save_ppm
    >>> save_ppm(canvas, "output.ppm")
    >>> save_png(canvas, "output.png", gamma=2.2)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raytracer.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    from raytracer.core.canvas import Canvas

logger = logging.getLogger(__name__)

# PPM header constants
PPM_MAGIC = "P3"
PPM_MAX_COLOR = 255
PPM_MAX_LINE_LENGTH = 70


def canvas_to_uint8(
    canvas: Canvas,
    *,
    tone_map: ToneMapMethod = "clamp",
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a canvas to an 8-bit (H, W, 3) array.

    Values are clamped to [0, 1], scaled to [0, 255] and rounded.
    """
    processed = process_image_for_display(canvas.to_numpy(), tone_map=tone_map, gamma=gamma)
    return np.rint(processed * PPM_MAX_COLOR).astype(np.uint8)


def canvas_to_ppm(canvas: Canvas) -> str:
    """Serialize a canvas as a plain-text PPM image.

    The output has a three-line header (magic number, dimensions, maximum
    color value) followed by one or more lines per pixel row. Lines never
    exceed 70 characters, and the file ends with a newline.
    """
    lines = [PPM_MAGIC, f"{canvas.width} {canvas.height}", str(PPM_MAX_COLOR)]
    pixels = canvas_to_uint8(canvas)

    for row in pixels:
        line = ""
        for value in row.reshape(-1):
            token = str(int(value))
            if not line:
                line = token
            elif len(line) + 1 + len(token) > PPM_MAX_LINE_LENGTH:
                lines.append(line)
                line = token
            else:
                line = f"{line} {token}"
        lines.append(line)

    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: str | Path) -> Path:
    """Write a canvas as a plain-text PPM file.

    Returns:
        The path written.
    """
    path = Path(filepath)
    path.write_text(canvas_to_ppm(canvas), encoding="ascii")
    logger.info("Saved %dx%d PPM to %s", canvas.width, canvas.height, path)
    return path


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "clamp",
    gamma: float = 1.0,
) -> Path:
    """Write a canvas as an 8-bit PNG file using Pillow.

    Returns:
        The path written.
    """
    path = Path(filepath)
    pil_image = PILImage.fromarray(canvas_to_uint8(canvas, tone_map=tone_map, gamma=gamma))
    pil_image.save(path)
    logger.info("Saved %dx%d PNG to %s", canvas.width, canvas.height, path)
    return path
