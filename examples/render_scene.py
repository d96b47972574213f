#!/usr/bin/env python3
"""Render a small demo scene.

This script demonstrates end-to-end rendering with the Phong ray tracer: a
striped floor, a back wall, three spheres (one with a gradient pattern) and a
single point light. It builds the world, sets up the camera from render
settings, renders with either backend and writes a PPM or PNG file.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 100)
    --height HEIGHT     Image height in pixels (default: 50)
    --fov RADIANS       Field of view in radians (default: pi/3)
    --backend NAME      "python" or "taichi" (default: python)
    --arch NAME         Taichi arch, "cpu" or "gpu" (default: cpu)
    --config FILE       JSON file with render settings (overrides defaults)
    --output OUTPUT     Output file path, .ppm or .png (default: scene.png)
    --gamma GAMMA       Gamma for PNG output (default: 1.0)
    --preview           Show the result in a Matplotlib window
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene --width 400 --height 200 --output scene.ppm
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
import time
from pathlib import Path

from raytracer.camera.pinhole import Camera
from raytracer.config import RenderSettings
from raytracer.core.canvas import Canvas
from raytracer.core.render import render
from raytracer.core.transform import (
    chain,
    rotation_x,
    rotation_y,
    scaling,
    translation,
    view_transform,
)
from raytracer.core.tuples import WHITE, Color, point, vector
from raytracer.geometry.shape import plane, sphere
from raytracer.materials.pattern import gradient_pattern, stripe_pattern
from raytracer.materials.phong import Material
from raytracer.preview.export import save_png, save_ppm
from raytracer.scene.light import PointLight
from raytracer.scene.world import World


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Image width in pixels (default: 100)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: 50)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=None,
        help="Field of view in radians (default: pi/3)",
    )
    parser.add_argument(
        "--backend",
        choices=["python", "taichi"],
        default=None,
        help="Render backend (default: python)",
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu"],
        default=None,
        help="Taichi architecture (default: cpu)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON file with render settings",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="scene.png",
        help="Output file path, .ppm or .png (default: scene.png)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=None,
        help="Gamma for PNG output (default: 1.0)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def load_settings(args: argparse.Namespace) -> RenderSettings:
    """Merge the optional JSON config file with command-line overrides."""
    data = {}
    if args.config is not None:
        data = json.loads(Path(args.config).read_text(encoding="utf-8"))

    overrides = {
        "width": args.width,
        "height": args.height,
        "field_of_view": args.fov,
        "backend": args.backend,
        "arch": args.arch,
        "gamma": args.gamma,
    }
    data.update({key: value for key, value in overrides.items() if value is not None})
    return RenderSettings.from_dict(data)


def create_demo_world() -> World:
    """Build the demo scene: floor, wall, three spheres and a light."""
    floor = plane(
        material=Material(
            specular=0.0,
            pattern=stripe_pattern(
                Color(1.0, 0.9, 0.9), Color(0.3, 0.2, 0.2), rotation_y(math.pi / 6)
            ),
        )
    )
    wall = plane(
        chain(rotation_x(math.pi / 2), translation(0, 0, 10)),
        Material(color=Color(0.6, 0.7, 0.9), specular=0.0),
        casts_shadow=False,
    )
    middle = sphere(
        translation(-0.5, 1, 0.5),
        Material(
            diffuse=0.7,
            specular=0.3,
            pattern=gradient_pattern(Color(0.1, 1.0, 0.5), Color(0.1, 0.3, 1.0), scaling(2, 1, 1)),
        ),
    )
    right = sphere(
        chain(scaling(0.5, 0.5, 0.5), translation(1.5, 0.5, -0.5)),
        Material(color=Color(0.5, 1.0, 0.1), diffuse=0.7, specular=0.3),
    )
    left = sphere(
        chain(scaling(0.33, 0.33, 0.33), translation(-1.5, 0.33, -0.75)),
        Material(color=Color(1.0, 0.8, 0.1), diffuse=0.7, specular=0.3),
    )
    light = PointLight(point(-10, 10, -10), WHITE)
    return World([floor, wall, middle, right, left], light)


def render_with_backend(
    settings: RenderSettings, camera: Camera, world: World, quiet: bool
) -> Canvas:
    """Render with the backend named in the settings."""
    if settings.backend == "taichi":
        import taichi as ti

        ti.init(arch=ti.gpu if settings.arch == "gpu" else ti.cpu)
        from raytracer.core.kernel import render_parallel

        return render_parallel(camera, world)

    def progress_callback(current: int, total: int) -> None:
        if not quiet:
            print(
                f"\r  Progress: {current}/{total} rows ({current / total * 100:.1f}%)",
                end="",
                flush=True,
            )

    canvas = render(camera, world, callback=progress_callback)
    if not quiet:
        print()  # Newline after progress
    return canvas


def render_scene(
    settings: RenderSettings,
    output_path: str,
    quiet: bool = False,
    preview: bool = False,
) -> Path:
    """Render the demo scene and save it.

    Args:
        settings: Image size, field of view, backend and gamma.
        output_path: Output file path; the suffix selects PPM or PNG.
        quiet: If True, suppress progress output.
        preview: If True, show the result in a Matplotlib window.

    Returns:
        Path to the saved image file.
    """
    if not quiet:
        print(f"Creating demo scene ({settings.width}x{settings.height}, {settings.backend})...")

    world = create_demo_world()
    camera = settings.make_camera(
        view_transform(point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0))
    )

    start_time = time.time()
    canvas = render_with_backend(settings, camera, world, quiet)

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".ppm":
        save_ppm(canvas, output_file)
    else:
        save_png(canvas, output_file, gamma=settings.gamma)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    if preview:
        from raytracer.preview.display import show_canvas

        show_canvas(canvas, gamma=settings.gamma)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args)
        render_scene(settings, args.output, quiet=args.quiet, preview=args.preview)
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
