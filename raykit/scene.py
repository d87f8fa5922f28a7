"""Scene description and the built-in demo scenes."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Callable, Iterable, Union

import numpy as np

from raykit.geometry import Material, Mesh
from raykit.splines import BSpline

MeshLoader = Callable[..., list]
"""Called as ``load_mesh(path, normalize_vertex_positions=flag)``; returns a list of meshes."""


def _vec3(value) -> np.ndarray:
    array = np.array(value, dtype=float).reshape(-1)
    if array.shape == (1,):
        array = np.repeat(array, 3)
    if array.shape != (3,):
        raise ValueError(f"expected a vector of 3 components, got {array.shape[0]}")
    return array


class SceneType(IntEnum):
    """The built-in scenes, in the order the user interface lists them."""

    SINGLE_TRIANGLE = 0
    CUBE = 1
    CUBE_TEXTURED = 2
    CORNELL_BOX = 3
    CORNELL_BOX_TRANSPARENCY = 4
    CORNELL_BOX_PARALLELOGRAM_LIGHT = 5
    MONKEY = 6
    TEAPOT = 7
    DRAGON = 8
    SPHERES = 9
    CUSTOM = 10
    REFLECTIVE_SPHERE = 11


@dataclass(eq=False)
class PointLight:
    """A light emitting from a single point."""

    position: np.ndarray
    color: np.ndarray

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)
        self.color = _vec3(self.color)


@dataclass(eq=False)
class SegmentLight:
    """A line light whose colour varies linearly between its endpoints."""

    endpoint0: np.ndarray
    endpoint1: np.ndarray
    color0: np.ndarray
    color1: np.ndarray

    def __post_init__(self) -> None:
        self.endpoint0 = _vec3(self.endpoint0)
        self.endpoint1 = _vec3(self.endpoint1)
        self.color0 = _vec3(self.color0)
        self.color1 = _vec3(self.color1)


@dataclass(eq=False)
class ParallelogramLight:
    """An area light spanned by two edges from ``v0`` with a colour per corner."""

    v0: np.ndarray
    edge01: np.ndarray
    edge02: np.ndarray
    color0: np.ndarray
    color1: np.ndarray
    color2: np.ndarray
    color3: np.ndarray

    def __post_init__(self) -> None:
        self.v0 = _vec3(self.v0)
        self.edge01 = _vec3(self.edge01)
        self.edge02 = _vec3(self.edge02)
        self.color0 = _vec3(self.color0)
        self.color1 = _vec3(self.color1)
        self.color2 = _vec3(self.color2)
        self.color3 = _vec3(self.color3)


SceneLight = Union[PointLight, SegmentLight, ParallelogramLight]


@dataclass(eq=False)
class Sphere:
    """An analytic sphere with a material."""

    center: np.ndarray
    radius: float
    material: Material = field(default_factory=Material)

    def __post_init__(self) -> None:
        self.center = _vec3(self.center)
        self.radius = float(self.radius)
        if self.radius < 0:
            raise ValueError("sphere radius must not be negative")


@dataclass(eq=False)
class Scene:
    """Everything that is rendered: geometry, lights and environment data."""

    scene_type: SceneType = SceneType.SINGLE_TRIANGLE
    meshes: list[Mesh] = field(default_factory=list)
    spheres: list[Sphere] = field(default_factory=list)
    lights: list[SceneLight] = field(default_factory=list)
    environment_map: list[Mesh] = field(default_factory=list)
    environment_map_sphere_planet: list[Mesh] = field(default_factory=list)
    environment_map_cube_planet: list[Mesh] = field(default_factory=list)
    is_sphere_planet: bool = False
    is_cube_planet: bool = False
    map_size: int = 1
    bspline: BSpline = field(default_factory=BSpline)


_CORNELL_FILE = "CornellBox-Mirror-Rotated.obj"


def _white_point_light(position) -> PointLight:
    return PointLight(position, np.ones(3))


# Scenes made of one mesh file: (file name, normalise positions, light factory).
_MESH_SCENES: dict[SceneType, tuple[str, bool, Callable[[], list]]] = {
    SceneType.CUBE: (
        "cube.obj",
        False,
        lambda: [
            SegmentLight(
                endpoint0=(1.5, 0.5, -0.6),
                endpoint1=(-1.0, 0.5, -0.5),
                color0=(0.9, 0.2, 0.1),
                color1=(0.2, 1.0, 0.3),
            )
        ],
    ),
    SceneType.CUBE_TEXTURED: (
        "cube-textured.obj",
        False,
        lambda: [_white_point_light((-1.0, 1.5, -1.0))],
    ),
    SceneType.CORNELL_BOX: (
        _CORNELL_FILE,
        True,
        lambda: [_white_point_light((0.0, 0.58, 0.0))],
    ),
    SceneType.CORNELL_BOX_PARALLELOGRAM_LIGHT: (
        _CORNELL_FILE,
        True,
        lambda: [
            ParallelogramLight(
                v0=(-0.2, 0.5, 0.0),
                edge01=(0.4, 0.0, 0.0),
                edge02=(0.0, 0.0, 0.4),
                color0=(1.0, 0.0, 0.0),
                color1=(0.0, 1.0, 0.0),
                color2=(0.0, 0.0, 1.0),
                color3=(0.0, 1.0, 1.0),
            )
        ],
    ),
    SceneType.MONKEY: (
        "monkey.obj",
        True,
        lambda: [_white_point_light((-1.0, 1.0, -1.0)), _white_point_light((1.0, -1.0, -1.0))],
    ),
    SceneType.TEAPOT: ("teapot.obj", True, lambda: [_white_point_light((-1.0, 1.0, -1.0))]),
    SceneType.DRAGON: ("dragon.obj", True, lambda: [_white_point_light((-1.0, 1.0, -1.0))]),
    SceneType.CUSTOM: ("custom.obj", False, lambda: [_white_point_light((-1.0, 1.0, -1.0))]),
}


def _load(load_mesh: MeshLoader, path: Path, normalize: bool = False) -> list[Mesh]:
    return list(load_mesh(path, normalize_vertex_positions=normalize))


def load_scene_prebuilt(scene_type, data_dir: str | os.PathLike, load_mesh: MeshLoader) -> Scene:
    """Build one of the built-in scenes, reading its model files from ``data_dir``."""
    scene_type = SceneType(scene_type)
    data_dir = Path(data_dir)
    scene = Scene(scene_type=scene_type)
    scene.environment_map = _load(load_mesh, data_dir / "hollow_knight_cube.obj")
    scene.environment_map_sphere_planet = _load(load_mesh, data_dir / "planet_map.obj")
    scene.environment_map_cube_planet = _load(load_mesh, data_dir / "planet_cube_map.obj")

    if scene_type is SceneType.SINGLE_TRIANGLE:
        meshes = _load(load_mesh, data_dir / "triangle.obj")
        if not meshes:
            raise ValueError("triangle.obj holds no mesh")
        meshes[0].material.kd = np.ones(3)
        scene.meshes.extend(meshes)
        scene.lights.append(_white_point_light((-1.0, 1.0, -1.0)))
    elif scene_type is SceneType.CORNELL_BOX_TRANSPARENCY:
        meshes = _load(load_mesh, data_dir / _CORNELL_FILE, True)
        if len(meshes) < 7:
            raise ValueError(f"{_CORNELL_FILE} must hold at least 7 meshes, got {len(meshes)}")
        meshes[6].material = Material(kd=(1.0, 0.25, 0.25), ks=np.zeros(3), transparency=0.5)
        meshes[5].material = Material(kd=(0.25, 1.0, 0.25), ks=np.zeros(3), transparency=0.5)
        scene.meshes.extend(meshes)
        scene.lights.append(_white_point_light((0.0, 0.58, 0.0)))
    elif scene_type is SceneType.SPHERES:
        scene.spheres.extend([
            Sphere((3.0, -2.0, 10.2), 1.0, Material(kd=(0.8, 0.2, 0.2))),
            Sphere((-2.0, 2.0, 4.0), 2.0, Material(kd=(0.6, 0.8, 0.2))),
            Sphere((0.0, 0.0, 6.0), 0.75, Material(kd=(0.2, 0.2, 0.8))),
        ])
        scene.lights.append(PointLight((3.0, 0.0, 3.0), np.full(3, 15.0)))
    elif scene_type is SceneType.REFLECTIVE_SPHERE:
        scene.spheres.append(
            Sphere(np.zeros(3), 1.0, Material(kd=np.full(3, 0.5), ks=np.ones(3), shininess=2.0))
        )
    else:
        file_name, normalize, make_lights = _MESH_SCENES[scene_type]
        scene.meshes.extend(_load(load_mesh, data_dir / file_name, normalize))
        scene.lights.extend(make_lights())

    return scene


def load_scene_from_file(path: str | os.PathLike, lights: Iterable[SceneLight],
                         load_mesh: MeshLoader) -> Scene:
    """Build a scene from a single model file lit by ``lights``."""
    scene = Scene()
    scene.lights = list(lights)
    scene.meshes.extend(_load(load_mesh, Path(path)))
    return scene