"""Serial render loop.

render() is the single integration point of the tracer: for every pixel it
asks the camera for a ray, asks the world for the color that ray sees, and
writes the result to a Canvas. Pixels are independent of each other, so the
loop order is irrelevant to the result; the Taichi backend in
raytracer.core.kernel runs the same computation in parallel.

Example:
    >>> import math
    >>> from raytracer.camera.pinhole import Camera
    >>> from raytracer.core.render import render
    >>> from raytracer.scene.world import default_world
    >>> canvas = render(Camera(11, 11, math.pi / 2), default_world())
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator
from typing import TYPE_CHECKING

from raytracer.core.canvas import Canvas

if TYPE_CHECKING:
    from raytracer.camera.pinhole import Camera
    from raytracer.scene.world import World

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


def render_rows(camera: Camera, world: World, canvas: Canvas) -> Generator[int, None, None]:
    """Render into an existing canvas one row at a time.

    Yields:
        The index of each row after it has been written.
    """
    for py in range(camera.vsize):
        for px in range(camera.hsize):
            ray = camera.ray_for_pixel(px, py)
            canvas.write_pixel(px, py, world.color_at(ray))
        yield py


def render(
    camera: Camera,
    world: World,
    callback: ProgressCallback | None = None,
) -> Canvas:
    """Render a world through a camera.

    Args:
        camera: The camera; its hsize and vsize set the canvas size.
        world: The scene to render. It is only read.
        callback: Optional callback invoked after each row with
            (rows_completed, total_rows).

    Returns:
        A new Canvas holding the linear, unclamped colors.
    """
    canvas = Canvas(camera.hsize, camera.vsize)
    logger.info(
        "Rendering %dx%d image with %d shapes",
        camera.hsize,
        camera.vsize,
        world.get_shape_count(),
    )
    start_time = time.perf_counter()

    for py in render_rows(camera, world, canvas):
        logger.debug("Finished row %d/%d", py + 1, camera.vsize)
        if callback is not None:
            callback(py + 1, camera.vsize)

    logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
    return canvas
