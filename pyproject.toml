[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raykit"
version = "0.1.0"
description = "Building blocks of a CPU ray tracer: rays, materials, textures, gradient shading, B-splines, scenes, a frame buffer and recursive rendering."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["ray tracing", "rendering", "graphics", "b-spline", "shading", "texture", "bmp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["raykit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
