"""CPU/GPU ray tracer with Phong local illumination.

This package renders scenes of transformed spheres lit by point lights. Rays
are cast per pixel, intersected against every sphere in its object space,
and the nearest hit is shaded with the Phong model, including hard shadows.

Subpackages:
    core: Tuples, colors, matrices, transformations, rays and the parallel
        Taichi render kernel
    geometry: The sphere primitive and intersection bookkeeping
    materials: Phong material and lighting function
    scene: Point lights, object ids and the World container
    camera: Pinhole camera with ray generation and rendering
    preview: Canvas storage and image export (PNG, PPM)
"""

__version__ = "0.1.0"
