"""Ray-sphere tracer rendering false-colored surface normals.

This package casts one primary ray per pixel from a pinhole camera into a
small scene of spheres. Hits are colored by their surface normal, misses by
a vertical sky gradient. Rendering runs in a Taichi kernel, with a
pure-Python reference path over the same host-side types.

Taichi must be initialized (``ti.init(arch=..., default_fp=ti.f64)``) before
importing modules that declare Taichi fields (camera, scene, core.render).

Subpackages:
    core: Vector/point algebra, rays, colors, shading and the render driver
    geometry: Sphere primitive and ray-sphere intersection
    scene: Fixed-capacity scene, device storage and built-in scenes
    camera: Pinhole camera with ray generation
    preview: PPM and PNG export
"""

__version__ = "0.1.0"
