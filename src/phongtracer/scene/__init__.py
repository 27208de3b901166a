"""Scene module for scene assembly and ray queries.

Components:
    light: Point light sources
    ids: Explicit id allocation for scene objects
    world: World container with intersection, shading and shadow tests
    demo: Ready-made demo scene (room corner with three spheres)
"""

from .demo import DemoSceneParams, create_demo_scene
from .ids import ObjectIdAllocator
from .light import PointLight
from .world import World, default_world

__all__ = [
    "ObjectIdAllocator",
    "PointLight",
    "World",
    "default_world",
    # Demo scene
    "DemoSceneParams",
    "create_demo_scene",
]
