"""Data-parallel Taichi render backend.

This module renders the same scene model as raytracer.core.render, but packs
the World and Camera into Taichi fields and evaluates every pixel in a
parallel kernel. Each kernel thread writes one pixel; the scene fields are
only read during the kernel, so no synchronisation is needed.

Scene storage uses a Structure-of-Arrays layout:
    - shape kind, inverse transform, inverse-transpose, shadow flag
    - material color and (ambient, diffuse, specular, shininess)
    - optional pattern kind, colors and inverse transform
    - a single point light and the camera's inverse view transform

Fields are float32, so the shadow ray origin uses a larger offset than the
float64 Python path (SHADOW_BIAS instead of EPSILON).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.core.kernel import TaichiRenderer
    >>> renderer = TaichiRenderer(world, camera)
    >>> canvas = renderer.render()
"""

import logging
import time
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti
import taichi.math as tm

from raytracer.core.canvas import Canvas
from raytracer.core.tuples import EPSILON
from raytracer.geometry.shape import ShapeKind
from raytracer.materials.pattern import PatternKind

if TYPE_CHECKING:
    from raytracer.camera.pinhole import Camera
    from raytracer.scene.world import World

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum number of shapes a renderer can hold
MAX_SHAPES = 4096

# Shadow ray offset along the normal (float32 needs more than EPSILON)
SHADOW_BIAS = 1e-4

# Sentinel "no hit" distance
T_MAX = 1e30

_SPHERE = int(ShapeKind.SPHERE)
_PLANE = int(ShapeKind.PLANE)
_STRIPE = int(PatternKind.STRIPE)
_GRADIENT = int(PatternKind.GRADIENT)
_NO_PATTERN = -1


@ti.data_oriented
class TaichiRenderer:
    """Parallel renderer for a World seen through a Camera.

    The scene is copied into Taichi fields at construction; later changes to
    the World are not seen until load_scene() is called again. ti.init() must
    have been called before creating a renderer.

    Args:
        world: The scene to render.
        camera: The camera; its hsize and vsize set the image size.

    Raises:
        RuntimeError: If the world holds more than MAX_SHAPES shapes.
    """

    def __init__(self, world: "World", camera: "Camera") -> None:
        self._width = camera.hsize
        self._height = camera.vsize
        self._capacity = max(world.get_shape_count(), 1)
        if self._capacity > MAX_SHAPES:
            raise RuntimeError(f"Maximum number of shapes ({MAX_SHAPES}) exceeded")

        cap = self._capacity

        # Shape storage
        self.shape_kind = ti.field(dtype=ti.i32, shape=cap)
        self.shape_inverse = ti.Matrix.field(4, 4, dtype=ti.f32, shape=cap)
        self.shape_inverse_t = ti.Matrix.field(4, 4, dtype=ti.f32, shape=cap)
        self.shape_casts_shadow = ti.field(dtype=ti.i32, shape=cap)
        self.num_shapes = ti.field(dtype=ti.i32, shape=())

        # Material storage: params = (ambient, diffuse, specular, shininess)
        self.material_color = ti.Vector.field(3, dtype=ti.f32, shape=cap)
        self.material_params = ti.Vector.field(4, dtype=ti.f32, shape=cap)
        self.pattern_kind = ti.field(dtype=ti.i32, shape=cap)
        self.pattern_a = ti.Vector.field(3, dtype=ti.f32, shape=cap)
        self.pattern_b = ti.Vector.field(3, dtype=ti.f32, shape=cap)
        self.pattern_inverse = ti.Matrix.field(4, 4, dtype=ti.f32, shape=cap)

        # Light
        self.light_enabled = ti.field(dtype=ti.i32, shape=())
        self.light_position = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.light_intensity = ti.Vector.field(3, dtype=ti.f32, shape=())

        # Camera
        self.camera_inverse = ti.Matrix.field(4, 4, dtype=ti.f32, shape=())
        self.half_width = ti.field(dtype=ti.f32, shape=())
        self.half_height = ti.field(dtype=ti.f32, shape=())
        self.pixel_size = ti.field(dtype=ti.f32, shape=())

        # Render target, (row, column) like Canvas
        self.image = ti.Vector.field(3, dtype=ti.f32, shape=(self._height, self._width))

        self._loaded = False
        self.load_scene(world, camera)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    # =========================================================================
    # Scene Upload (Python-side)
    # =========================================================================

    def load_scene(self, world: "World", camera: "Camera") -> None:
        """Copy a world and camera into the renderer's fields.

        Raises:
            RuntimeError: If the world no longer fits the allocated capacity.
            ValueError: If the camera size differs from the render target.
        """
        shapes = world.shapes
        if len(shapes) > self._capacity:
            raise RuntimeError(
                f"World has {len(shapes)} shapes but renderer capacity is {self._capacity}"
            )
        if (camera.hsize, camera.vsize) != (self._width, self._height):
            raise ValueError(
                f"Camera size {camera.hsize}x{camera.vsize} does not match "
                f"render target {self._width}x{self._height}"
            )

        cap = self._capacity
        kinds = np.zeros(cap, dtype=np.int32)
        inverses = np.zeros((cap, 4, 4), dtype=np.float32)
        inverses_t = np.zeros((cap, 4, 4), dtype=np.float32)
        casts_shadow = np.zeros(cap, dtype=np.int32)
        colors = np.zeros((cap, 3), dtype=np.float32)
        params = np.zeros((cap, 4), dtype=np.float32)
        pattern_kinds = np.full(cap, _NO_PATTERN, dtype=np.int32)
        pattern_a = np.zeros((cap, 3), dtype=np.float32)
        pattern_b = np.zeros((cap, 3), dtype=np.float32)
        pattern_inverses = np.zeros((cap, 4, 4), dtype=np.float32)

        for i, shape in enumerate(shapes):
            material = shape.material
            kinds[i] = int(shape.kind)
            inverses[i] = shape.inverse.to_numpy()
            inverses_t[i] = shape.inverse_transpose.to_numpy()
            casts_shadow[i] = 1 if shape.casts_shadow else 0
            colors[i] = tuple(material.color)
            params[i] = (material.ambient, material.diffuse, material.specular, material.shininess)
            if material.pattern is not None:
                pattern_kinds[i] = int(material.pattern.kind)
                pattern_a[i] = tuple(material.pattern.a)
                pattern_b[i] = tuple(material.pattern.b)
                pattern_inverses[i] = material.pattern.inverse.to_numpy()

        self.shape_kind.from_numpy(kinds)
        self.shape_inverse.from_numpy(inverses)
        self.shape_inverse_t.from_numpy(inverses_t)
        self.shape_casts_shadow.from_numpy(casts_shadow)
        self.material_color.from_numpy(colors)
        self.material_params.from_numpy(params)
        self.pattern_kind.from_numpy(pattern_kinds)
        self.pattern_a.from_numpy(pattern_a)
        self.pattern_b.from_numpy(pattern_b)
        self.pattern_inverse.from_numpy(pattern_inverses)
        self.num_shapes[None] = len(shapes)

        if world.light is None:
            self.light_enabled[None] = 0
        else:
            self.light_enabled[None] = 1
            position = world.light.position
            self.light_position[None] = [position.x, position.y, position.z]
            self.light_intensity[None] = list(world.light.intensity)

        self.camera_inverse.from_numpy(camera.inverse.to_numpy().astype(np.float32))
        self.half_width[None] = camera.half_width
        self.half_height[None] = camera.half_height
        self.pixel_size[None] = camera.pixel_size

        self._loaded = True
        logger.debug("Loaded %d shapes into Taichi fields", len(shapes))

    # =========================================================================
    # Geometry (Taichi functions)
    # =========================================================================

    @ti.func
    def _to_local(self, i: ti.i32, origin: vec3, direction: vec3):
        inv = self.shape_inverse[i]
        o = inv @ vec4(origin[0], origin[1], origin[2], 1.0)
        d = inv @ vec4(direction[0], direction[1], direction[2], 0.0)
        return vec3(o[0], o[1], o[2]), vec3(d[0], d[1], d[2])

    @ti.func
    def _intersect_shape(self, i: ti.i32, origin: vec3, direction: vec3):
        """Intersect shape i; returns (count, t0, t1) with t0 <= t1."""
        local_origin, local_direction = self._to_local(i, origin, direction)
        count = 0
        t0 = 0.0
        t1 = 0.0
        if self.shape_kind[i] == _SPHERE:
            a = local_direction.dot(local_direction)
            b = 2.0 * local_direction.dot(local_origin)
            c = local_origin.dot(local_origin) - 1.0
            discriminant = b * b - 4.0 * a * c
            if discriminant >= -EPSILON and a >= EPSILON:
                sqrt_d = ti.sqrt(ti.max(discriminant, 0.0))
                t0 = (-b - sqrt_d) / (2.0 * a)
                t1 = (-b + sqrt_d) / (2.0 * a)
                count = 2
        else:
            if ti.abs(local_direction[1]) >= EPSILON:
                t0 = -local_origin[1] / local_direction[1]
                t1 = t0
                count = 1
        return count, t0, t1

    @ti.func
    def _closest_hit(self, origin: vec3, direction: vec3):
        """Find the nearest non-negative hit; returns (shape_index, t), index -1 on miss."""
        best_i = -1
        best_t = T_MAX
        for i in range(self.num_shapes[None]):
            count, t0, t1 = self._intersect_shape(i, origin, direction)
            candidate = -1.0
            if count > 0:
                if t0 >= 0.0:
                    candidate = t0
                elif count > 1 and t1 >= 0.0:
                    candidate = t1
            # Strict comparison keeps the lower shape index on equal t
            if candidate >= 0.0 and candidate < best_t:
                best_t = candidate
                best_i = i
        return best_i, best_t

    @ti.func
    def _is_shadowed(self, position: vec3) -> ti.i32:
        to_light = self.light_position[None] - position
        distance = to_light.norm()
        direction = to_light / distance
        shadowed = 0
        for i in range(self.num_shapes[None]):
            if shadowed == 0 and self.shape_casts_shadow[i] == 1:
                count, t0, t1 = self._intersect_shape(i, position, direction)
                if count > 0 and t0 > 0.0 and t0 < distance:
                    shadowed = 1
                if count > 1 and t1 > 0.0 and t1 < distance:
                    shadowed = 1
        return shadowed

    @ti.func
    def _normal_at(self, i: ti.i32, position: vec3) -> vec3:
        local_point = self.shape_inverse[i] @ vec4(position[0], position[1], position[2], 1.0)
        local_normal = vec3(0.0, 1.0, 0.0)
        if self.shape_kind[i] == _SPHERE:
            local_normal = vec3(local_point[0], local_point[1], local_point[2])
        world_normal = self.shape_inverse_t[i] @ vec4(
            local_normal[0], local_normal[1], local_normal[2], 0.0
        )
        return vec3(world_normal[0], world_normal[1], world_normal[2]).normalized()

    # =========================================================================
    # Shading (Taichi functions)
    # =========================================================================

    @ti.func
    def _surface_color(self, i: ti.i32, position: vec3) -> vec3:
        color = self.material_color[i]
        kind = self.pattern_kind[i]
        if kind != _NO_PATTERN:
            object_point = self.shape_inverse[i] @ vec4(position[0], position[1], position[2], 1.0)
            pattern_point = self.pattern_inverse[i] @ object_point
            x = pattern_point[0]
            if kind == _STRIPE:
                if ti.cast(ti.floor(x), ti.i32) % 2 == 0:
                    color = self.pattern_a[i]
                else:
                    color = self.pattern_b[i]
            elif kind == _GRADIENT:
                fraction = x - ti.floor(x)
                color = self.pattern_a[i] + (self.pattern_b[i] - self.pattern_a[i]) * fraction
        return color

    @ti.func
    def _lighting(
        self, i: ti.i32, position: vec3, eye: vec3, normal: vec3, in_shadow: ti.i32
    ) -> vec3:
        params = self.material_params[i]
        intensity = self.light_intensity[None]
        effective = self._surface_color(i, position) * intensity
        ambient = effective * params[0]
        diffuse = vec3(0.0, 0.0, 0.0)
        specular = vec3(0.0, 0.0, 0.0)

        light_vector = (self.light_position[None] - position).normalized()
        light_dot_normal = light_vector.dot(normal)
        if in_shadow == 0 and light_dot_normal > 0.0:
            diffuse = effective * params[1] * light_dot_normal
            reflect_vector = -light_vector + 2.0 * light_vector.dot(normal) * normal
            reflect_dot_eye = reflect_vector.dot(eye)
            if reflect_dot_eye > 0.0:
                specular = intensity * params[2] * ti.pow(reflect_dot_eye, params[3])

        return ambient + diffuse + specular

    @ti.func
    def _color_at(self, origin: vec3, direction: vec3) -> vec3:
        result = vec3(0.0, 0.0, 0.0)
        i, t = self._closest_hit(origin, direction)
        if i >= 0 and self.light_enabled[None] == 1:
            position = origin + t * direction
            eye = -direction
            normal = self._normal_at(i, position)
            if normal.dot(eye) < 0.0:
                normal = -normal
            over_point = position + normal * SHADOW_BIAS
            in_shadow = self._is_shadowed(over_point)
            result = self._lighting(i, position, eye, normal, in_shadow)
        return result

    @ti.func
    def _ray_for_pixel(self, px: ti.i32, py: ti.i32):
        size = self.pixel_size[None]
        world_x = self.half_width[None] - (ti.cast(px, ti.f32) + 0.5) * size
        world_y = self.half_height[None] - (ti.cast(py, ti.f32) + 0.5) * size
        inv = self.camera_inverse[None]
        pixel = inv @ vec4(world_x, world_y, -1.0, 1.0)
        eye = inv @ vec4(0.0, 0.0, 0.0, 1.0)
        origin = vec3(eye[0], eye[1], eye[2])
        direction = (vec3(pixel[0], pixel[1], pixel[2]) - origin).normalized()
        return origin, direction

    # =========================================================================
    # Kernels
    # =========================================================================

    @ti.kernel
    def _render_kernel(self):
        # Outermost loop is parallelized; every pixel is independent
        for py, px in self.image:
            origin, direction = self._ray_for_pixel(px, py)
            self.image[py, px] = self._color_at(origin, direction)

    def render(self) -> Canvas:
        """Render the loaded scene.

        Returns:
            A new Canvas with the rendered colors.

        Raises:
            RuntimeError: If no scene has been loaded.
        """
        if not self._loaded:
            raise RuntimeError("No scene loaded. Call load_scene() first.")

        start_time = time.perf_counter()
        self._render_kernel()
        ti.sync()
        image = self.image.to_numpy().astype(np.float64)
        logger.info(
            "Taichi render of %dx%d finished in %.2fs",
            self._width,
            self._height,
            time.perf_counter() - start_time,
        )
        return Canvas.from_numpy(image)


def render_parallel(camera: "Camera", world: "World") -> Canvas:
    """Render a world through a camera with the Taichi backend.

    Convenience wrapper creating a one-shot TaichiRenderer.
    """
    return TaichiRenderer(world, camera).render()
