"""Preview module for output and visualization.

Components:
    display: Tone mapping, gamma and a Matplotlib preview window
    export: PPM and PNG export via Pillow

Example:
    >>> from raytracer.preview import save_png, save_ppm
    >>> save_ppm(canvas, "output.ppm")
    >>> save_png(canvas, "output.png")
"""

from .display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_canvas,
    tone_map_reinhard,
)
from .export import (
    canvas_to_ppm,
    canvas_to_uint8,
    save_png,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_canvas",
    "tone_map_reinhard",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    # Export functions
    "canvas_to_ppm",
    "canvas_to_uint8",
    "save_ppm",
    "save_png",
]
