"""Parallel Phong integrator: renders a World through a Camera in Taichi.

This module evaluates the same pipeline as Camera.ray_for_pixel followed by
World.color_at, but for every pixel at once inside a Taichi kernel. Each
pixel reads only the packed scene and camera and writes only its own slot of
the output image, so the outer loop parallelises without synchronisation.

The scene is packed into preallocated Taichi fields (Structure of Arrays):

    per sphere: world-to-object matrix, normal matrix (its transpose),
                material color, (ambient, diffuse, specular, shininess)
    per light:  position, intensity
    camera:     inverse view transform

All arithmetic is float64. Taichi must be initialised with
``default_fp=ti.f64`` before this module is imported, since the fields are
allocated at import time:

    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from phongtracer.core.integrator import render_canvas
    >>> canvas = render_canvas(camera, world)

Hit selection matches Intersections.hit(): the smallest t >= 0 wins and ties
keep the first object in world order.
"""

# No postponed annotations here: Taichi evaluates ti.func parameter hints
# when it compiles a kernel
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from phongtracer.core.tuples import EPSILON
from phongtracer.preview.canvas import Canvas

if TYPE_CHECKING:
    from phongtracer.camera.camera import Camera, ProgressCallback
    from phongtracer.scene.world import World

vec3 = ti.types.vector(3, ti.f64)
vec4 = ti.types.vector(4, ti.f64)

# =============================================================================
# Scene Capacity
# =============================================================================

MAX_SPHERES = 1024
MAX_LIGHTS = 64

# Offset along the normal for shadow ray origins
SHADOW_BIAS = EPSILON

# =============================================================================
# Taichi Fields for Scene State
# =============================================================================

_sphere_inverse = ti.Matrix.field(4, 4, dtype=ti.f64, shape=MAX_SPHERES)
_sphere_normal = ti.Matrix.field(4, 4, dtype=ti.f64, shape=MAX_SPHERES)
_sphere_color = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
# (ambient, diffuse, specular, shininess)
_sphere_phong = ti.Vector.field(4, dtype=ti.f64, shape=MAX_SPHERES)
_num_spheres = ti.field(dtype=ti.i32, shape=())

_light_position = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
_light_intensity = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
_num_lights = ti.field(dtype=ti.i32, shape=())

_camera_inverse = ti.Matrix.field(4, 4, dtype=ti.f64, shape=())


# =============================================================================
# Scene Upload (Python-side)
# =============================================================================


def load_world(world: "World") -> None:
    """Copy the world's spheres and lights into the Taichi fields.

    Args:
        world: The scene to upload.

    Raises:
        RuntimeError: If the world has more than MAX_SPHERES objects or
            more than MAX_LIGHTS lights.
    """
    n_spheres = len(world.objects)
    n_lights = len(world.lights)
    if n_spheres > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded: {n_spheres}")
    if n_lights > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded: {n_lights}")

    inverses = np.zeros((MAX_SPHERES, 4, 4), dtype=np.float64)
    normals = np.zeros((MAX_SPHERES, 4, 4), dtype=np.float64)
    colors = np.zeros((MAX_SPHERES, 3), dtype=np.float64)
    phong = np.zeros((MAX_SPHERES, 4), dtype=np.float64)
    for i, obj in enumerate(world.objects):
        inverses[i] = obj.inverse_transform.to_numpy()
        normals[i] = obj.normal_transform.to_numpy()
        colors[i] = tuple(obj.material.color)
        phong[i] = obj.material.coefficients()

    positions = np.zeros((MAX_LIGHTS, 3), dtype=np.float64)
    intensities = np.zeros((MAX_LIGHTS, 3), dtype=np.float64)
    for i, light in enumerate(world.lights):
        positions[i] = (light.position.x, light.position.y, light.position.z)
        intensities[i] = tuple(light.intensity)

    _sphere_inverse.from_numpy(inverses)
    _sphere_normal.from_numpy(normals)
    _sphere_color.from_numpy(colors)
    _sphere_phong.from_numpy(phong)
    _num_spheres[None] = n_spheres

    _light_position.from_numpy(positions)
    _light_intensity.from_numpy(intensities)
    _num_lights[None] = n_lights


def load_camera(camera: "Camera") -> None:
    """Copy the camera's inverse view transform into its Taichi field."""
    _camera_inverse[None] = camera.inverse_transform.to_numpy().tolist()


def get_scene_counts() -> tuple[int, int]:
    """Return (spheres, lights) currently uploaded."""
    return int(_num_spheres[None]), int(_num_lights[None])


# =============================================================================
# Pipeline (Taichi-side)
# =============================================================================


@ti.func
def _nearest_hit(origin: vec4, direction: vec4):
    """Find the smallest non-negative t over all spheres.

    Each sphere transforms the ray into its object space and solves the
    unit-sphere quadratic there.

    Returns:
        Tuple (index, t). index is -1 when nothing is hit.
    """
    best_index = -1
    best_t = ti.cast(0.0, ti.f64)
    for i in range(_num_spheres[None]):
        inverse = _sphere_inverse[i]
        o = inverse @ origin
        d = inverse @ direction

        # Object-space origin minus sphere centre (0, 0, 0, 1)
        sphere_to_ray = vec4(o[0], o[1], o[2], o[3] - 1.0)
        a = d.dot(d)
        b = 2.0 * d.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0
        discriminant = b * b - 4.0 * a * c

        if discriminant >= 0.0:
            sqrt_d = ti.sqrt(discriminant)
            t1 = (-b - sqrt_d) / (2.0 * a)
            t2 = (-b + sqrt_d) / (2.0 * a)

            candidate = t2
            if t1 >= 0.0:
                candidate = t1

            if candidate >= 0.0:
                if best_index == -1 or candidate < best_t:
                    best_index = i
                    best_t = candidate

    return best_index, best_t


@ti.func
def _normal_at(index: ti.i32, world_point: vec4) -> vec3:
    object_point = _sphere_inverse[index] @ world_point
    object_normal = vec4(object_point[0], object_point[1], object_point[2], object_point[3] - 1.0)
    world_normal = _sphere_normal[index] @ object_normal
    return vec3(world_normal[0], world_normal[1], world_normal[2]).normalized()


@ti.func
def _reflect(incident: vec3, normal: vec3) -> vec3:
    return incident - normal * (2.0 * incident.dot(normal))


@ti.func
def _is_shadowed_from(point: vec3, light: ti.i32) -> ti.i32:
    """Return 1 if an object lies strictly between point and the light."""
    v = _light_position[light] - point
    distance = v.norm()
    direction = v / distance
    index, t = _nearest_hit(
        vec4(point[0], point[1], point[2], 1.0),
        vec4(direction[0], direction[1], direction[2], 0.0),
    )
    shadowed = 0
    if index >= 0 and t < distance:
        shadowed = 1
    return shadowed


@ti.func
def _lighting(
    index: ti.i32,
    light: ti.i32,
    point: vec3,
    eyev: vec3,
    normalv: vec3,
    in_shadow: ti.i32,
) -> vec3:
    """Phong contribution of one light; see materials.phong.lighting."""
    phong = _sphere_phong[index]
    intensity = _light_intensity[light]
    effective_color = _sphere_color[index] * intensity
    ambient = effective_color * phong[0]
    diffuse = vec3(0.0, 0.0, 0.0)
    specular = vec3(0.0, 0.0, 0.0)

    if in_shadow == 0:
        lightv = (_light_position[light] - point).normalized()
        light_dot_normal = lightv.dot(normalv)
        if light_dot_normal >= 0.0:
            diffuse = effective_color * (phong[1] * light_dot_normal)
            reflect_dot_eye = _reflect(-lightv, normalv).dot(eyev)
            if reflect_dot_eye > 0.0:
                specular = intensity * (phong[2] * reflect_dot_eye ** phong[3])

    return ambient + diffuse + specular


@ti.func
def _color_at(origin: vec4, direction: vec4) -> vec3:
    color = vec3(0.0, 0.0, 0.0)
    index, t = _nearest_hit(origin, direction)
    if index >= 0:
        hit_point = origin + direction * t
        point = vec3(hit_point[0], hit_point[1], hit_point[2])
        eyev = -vec3(direction[0], direction[1], direction[2])
        normalv = _normal_at(index, hit_point)
        if normalv.dot(eyev) < 0.0:
            normalv = -normalv
        over_point = point + normalv * SHADOW_BIAS

        for light in range(_num_lights[None]):
            shadowed = _is_shadowed_from(over_point, light)
            color += _lighting(index, light, over_point, eyev, normalv, shadowed)
    return color


@ti.func
def _ray_for_pixel(px: ti.i32, py: ti.i32, half_width: ti.f64, half_height: ti.f64, pixel_size: ti.f64):
    """Camera ray through the centre of pixel (px, py); see Camera.ray_for_pixel."""
    xoffset = (ti.cast(px, ti.f64) + 0.5) * pixel_size
    yoffset = (ti.cast(py, ti.f64) + 0.5) * pixel_size
    world_x = half_width - xoffset
    world_y = half_height - yoffset

    inverse = _camera_inverse[None]
    pixel = inverse @ vec4(world_x, world_y, -1.0, 1.0)
    origin = inverse @ vec4(0.0, 0.0, 0.0, 1.0)
    offset = pixel - origin
    direction = offset / offset.norm()
    return origin, direction


@ti.kernel
def _render_rows(
    image: ti.types.ndarray(),
    row_start: ti.i32,
    row_count: ti.i32,
    width: ti.i32,
    half_width: ti.f64,
    half_height: ti.f64,
    pixel_size: ti.f64,
):
    """Shade rows [row_start, row_start + row_count) into image[y, x, :]."""
    for x, r in ti.ndrange(width, row_count):
        y = row_start + r
        origin, direction = _ray_for_pixel(x, y, half_width, half_height, pixel_size)
        color = _color_at(origin, direction)
        for c in ti.static(range(3)):
            image[y, x, c] = color[c]


@ti.kernel
def _render_single_pixel(
    px: ti.i32,
    py: ti.i32,
    half_width: ti.f64,
    half_height: ti.f64,
    pixel_size: ti.f64,
) -> vec3:
    origin, direction = _ray_for_pixel(px, py, half_width, half_height, pixel_size)
    return _color_at(origin, direction)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_pixel(camera: "Camera", world: "World", px: int, py: int) -> tuple[float, float, float]:
    """Render a single pixel. Useful for testing and debugging.

    Returns:
        The (red, green, blue) color of the pixel.
    """
    load_world(world)
    load_camera(camera)
    color = _render_single_pixel(px, py, camera.half_width, camera.half_height, camera.pixel_size)
    return (float(color[0]), float(color[1]), float(color[2]))


def render_canvas(
    camera: "Camera",
    world: "World",
    *,
    rows_per_batch: int = 64,
    callback: "ProgressCallback | None" = None,
) -> Canvas:
    """Render the world into a new canvas.

    Rows are rendered in batches of rows_per_batch, one kernel launch per
    batch, with the pixels of a batch evaluated in parallel.

    Args:
        camera: The camera to render through.
        world: The scene.
        rows_per_batch: Rows per kernel launch.
        callback: Optional callback receiving (rows_completed, total_rows)
            after each batch.

    Returns:
        A Canvas of size camera.hsize x camera.vsize.

    Raises:
        RuntimeError: If the world exceeds MAX_SPHERES or MAX_LIGHTS.
        ValueError: If rows_per_batch is less than 1.
    """
    if rows_per_batch < 1:
        raise ValueError(f"rows_per_batch must be at least 1, got {rows_per_batch}")

    load_world(world)
    load_camera(camera)

    width, height = camera.hsize, camera.vsize
    image = np.zeros((height, width, 3), dtype=np.float64)

    row = 0
    while row < height:
        count = min(rows_per_batch, height - row)
        _render_rows(
            image,
            row,
            count,
            width,
            camera.half_width,
            camera.half_height,
            camera.pixel_size,
        )
        row += count
        if callback is not None:
            callback(row, height)

    return Canvas.from_numpy(image)
