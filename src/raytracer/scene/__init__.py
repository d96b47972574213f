"""Scene module for lights, intersections and the world.

Components:
    light: Point light source
    intersection: Intersection records, hit selection and hit preparation
    world: The World container with shading and shadow queries
"""

from .intersection import (
    Computations,
    Intersection,
    hit,
    intersect_shape,
    prepare_computations,
    sort_intersections,
)
from .light import PointLight
from .world import World, default_world

__all__ = [
    "PointLight",
    "Intersection",
    "Computations",
    "hit",
    "intersect_shape",
    "prepare_computations",
    "sort_intersections",
    "World",
    "default_world",
]
