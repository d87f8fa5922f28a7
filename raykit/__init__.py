"""Building blocks of a CPU ray tracer: geometry, features, splines, frame buffer, textures, shading, scenes and recursive rendering."""

__version__ = "0.1.0"

__all__ = [
    "features",
    "geometry",
    "recursive",
    "render",
    "scene",
    "screen",
    "shading",
    "splines",
    "state",
    "texture",
]