"""Display pipeline for rendered canvases.

Phong shading produces linear colors that may exceed 1.0 (a bright specular
highlight over a lit diffuse surface). Before a canvas can be shown or written
as 8-bit data it is optionally tone mapped, gamma encoded and clamped to
[0, 1]. The Matplotlib preview is imported lazily so the rest of the package
does not depend on a GUI backend.

Example:
    >>> from raytracer.preview.display import show_canvas
    >>> show_canvas(canvas, tone_map="reinhard")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from raytracer.core.canvas import Canvas


# Type alias for tone mapping options
ToneMapMethod = Literal["none", "clamp", "reinhard"]


def tone_map_reinhard(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float64]:
    """Apply Reinhard tone mapping, c / (1 + c), after dropping negatives."""
    image = np.maximum(image, 0.0)
    return (image / (1.0 + image)).astype(np.float64)


def apply_gamma(image: npt.NDArray[np.floating], gamma: float = 1.0) -> npt.NDArray[np.float64]:
    """Gamma encode an image in [0, 1]: out = in^(1/gamma).

    A gamma of 1.0 leaves linear values unchanged, which matches the plain
    clamp-and-scale behaviour of PPM output.
    """
    if gamma == 1.0:
        return image.astype(np.float64)
    # Clamp first to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)
    return np.power(image, 1.0 / gamma)


def process_image_for_display(
    image: npt.NDArray[np.floating],
    tone_map: ToneMapMethod = "clamp",
    gamma: float = 1.0,
) -> npt.NDArray[np.float64]:
    """Turn a linear (H, W, 3) image into displayable values in [0, 1].

    Args:
        image: Linear image array.
        tone_map: "clamp" (or "none") clips to [0, 1]; "reinhard" compresses.
        gamma: Gamma encoding value.

    Raises:
        ValueError: If tone_map is not recognised.
    """
    if tone_map == "reinhard":
        result = tone_map_reinhard(image)
    elif tone_map in ("none", "clamp"):
        result = image.astype(np.float64)
    else:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0)


def show_canvas(
    canvas: Canvas,
    *,
    tone_map: ToneMapMethod = "clamp",
    gamma: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a canvas in a Matplotlib window.

    Args:
        canvas: The rendered canvas.
        tone_map: Tone mapping method.
        gamma: Gamma encoding value.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block until the window is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(canvas.to_numpy(), tone_map=tone_map, gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {canvas.width}x{canvas.height}")

    plt.tight_layout()
    plt.show(block=block)
