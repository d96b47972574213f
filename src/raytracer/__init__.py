"""A CPU ray tracer with Phong shading and hard shadows.

This package renders scenes of spheres and planes lit by a point light, with
support for:
- Homogeneous tuple and 4x4 matrix algebra for affine transforms
- Ray-sphere and ray-plane intersection in each shape's local space
- Phong shading with hard shadows and procedural patterns
- A serial render loop and a data-parallel Taichi backend

Subpackages:
    core: Tuples, matrices, transforms, rays, the canvas and render loops
    geometry: Shape variant and the sphere and plane primitives
    materials: Phong material model and patterns
    scene: Point light, intersections and the World
    camera: Pinhole camera mapping pixels to rays
    preview: Display pipeline and PPM/PNG export
"""

__version__ = "0.1.0"
