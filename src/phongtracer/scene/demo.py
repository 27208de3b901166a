"""Demo scene: three spheres in a room corner.

The scene is built entirely from spheres:
- A floor: a unit sphere flattened to a 10 x 0.01 x 10 disc
- Left and right walls: the same disc stood upright and turned 45 degrees
  either side of the camera axis, meeting behind the spheres
- A large green sphere in the middle
- A smaller orange sphere on the left
- A small yellow-green sphere on the right

One white point light sits above and to the left of the camera.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from phongtracer.scene.demo import create_demo_scene
    >>> world, camera = create_demo_scene(320, 200)
    >>> canvas = camera.render(world)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from phongtracer.camera.camera import Camera
from phongtracer.core.color import Color
from phongtracer.core.transformations import (
    rotation_x,
    rotation_y,
    scaling,
    translation,
    view_transform,
)
from phongtracer.core.tuples import Point, Vector
from phongtracer.materials.phong import Material
from phongtracer.scene.light import PointLight
from phongtracer.scene.world import World

DEFAULT_WIDTH = 720
DEFAULT_HEIGHT = 480


@dataclass
class DemoSceneParams:
    """Tunable parts of the demo scene.

    Attributes:
        field_of_view: Camera field of view in radians.
        eye: Camera position.
        look_at: Point the camera looks at.
        light_position: Position of the single point light.
        light_color: Intensity of the light.
        wall_color: Color shared by the floor and both walls.
    """

    field_of_view: float = math.pi / 3
    eye: tuple[float, float, float] = (0.0, 1.5, -5.0)
    look_at: tuple[float, float, float] = (0.0, 1.0, 0.0)
    light_position: tuple[float, float, float] = (-10.0, 10.0, -10.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    wall_color: tuple[float, float, float] = (1.0, 0.9, 0.9)


def create_demo_scene(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    params: DemoSceneParams | None = None,
) -> tuple[World, Camera]:
    """Create the demo world and a camera framing it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        params: Scene parameters. Defaults to DemoSceneParams().

    Returns:
        Tuple of (world, camera). Objects are added in the order floor,
        left wall, right wall, middle, left, right.
    """
    if params is None:
        params = DemoSceneParams()

    world = World()

    # -------------------------------------------------------------------------
    # Room
    # -------------------------------------------------------------------------
    wall_material = Material(color=Color(*params.wall_color), specular=0.0)
    flat = scaling(10.0, 0.01, 10.0)

    world.new_sphere(transform=flat, material=wall_material)
    world.new_sphere(
        transform=translation(0.0, 0.0, 5.0) @ rotation_y(-math.pi / 4) @ rotation_x(math.pi / 2) @ flat,
        material=wall_material,
    )
    world.new_sphere(
        transform=translation(0.0, 0.0, 5.0) @ rotation_y(math.pi / 4) @ rotation_x(math.pi / 2) @ flat,
        material=wall_material,
    )

    # -------------------------------------------------------------------------
    # Spheres
    # -------------------------------------------------------------------------
    world.new_sphere(
        transform=translation(-0.5, 1.0, 0.5),
        material=Material(color=Color(0.1, 1.0, 0.5), diffuse=0.7, specular=0.3),
    )
    world.new_sphere(
        transform=translation(-1.5, 0.33, -0.75) @ scaling(0.33, 0.33, 0.33),
        material=Material(color=Color(1.0, 0.8, 0.1), diffuse=0.7, specular=0.3),
    )
    world.new_sphere(
        transform=translation(1.5, 0.5, -0.5) @ scaling(0.5, 0.5, 0.5),
        material=Material(color=Color(0.5, 1.0, 0.1), diffuse=0.7, specular=0.3),
    )

    world.add_light(PointLight(Point(*params.light_position), Color(*params.light_color)))

    camera = Camera(width, height, params.field_of_view)
    camera.set_transform(
        view_transform(Point(*params.eye), Point(*params.look_at), Vector(0.0, 1.0, 0.0))
    )
    return world, camera
