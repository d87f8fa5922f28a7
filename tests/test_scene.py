from pathlib import Path

import numpy as np
import pytest

from raykit.geometry import Material, Mesh
from raykit.scene import (
    ParallelogramLight,
    PointLight,
    Scene,
    SceneType,
    SegmentLight,
    Sphere,
    load_scene_from_file,
    load_scene_prebuilt,
)


class FakeLoader:
    def __init__(self, count=1):
        self.count = count
        self.calls = []

    def __call__(self, path, normalize_vertex_positions=False):
        self.calls.append((Path(path), normalize_vertex_positions))
        return [Mesh(material=Material(kd=(0.1, 0.1, 0.1))) for _ in range(self.count)]

    def call_for(self, name):
        return [call for call in self.calls if call[0].name == name]


def test_environment_maps_always_loaded(tmp_path):
    loader = FakeLoader()
    scene = load_scene_prebuilt(SceneType.SPHERES, tmp_path, loader)
    names = [call[0].name for call in loader.calls]
    assert names == ["hollow_knight_cube.obj", "planet_map.obj", "planet_cube_map.obj"]
    assert len(scene.environment_map) == 1
    assert len(scene.environment_map_sphere_planet) == 1
    assert len(scene.environment_map_cube_planet) == 1
    assert all(call[0].parent == tmp_path for call in loader.calls)


def test_single_triangle_scene(tmp_path):
    loader = FakeLoader()
    scene = load_scene_prebuilt(SceneType.SINGLE_TRIANGLE, tmp_path, loader)
    assert scene.scene_type is SceneType.SINGLE_TRIANGLE
    assert len(scene.meshes) == 1
    np.testing.assert_allclose(scene.meshes[0].material.kd, [1.0, 1.0, 1.0])
    assert len(scene.lights) == 1
    light = scene.lights[0]
    assert isinstance(light, PointLight)
    np.testing.assert_allclose(light.position, [-1, 1, -1])
    np.testing.assert_allclose(light.color, [1, 1, 1])
    assert loader.call_for("triangle.obj") == [(tmp_path / "triangle.obj", False)]


def test_cube_has_segment_light(tmp_path):
    scene = load_scene_prebuilt(SceneType.CUBE, tmp_path, FakeLoader())
    (light,) = scene.lights
    assert isinstance(light, SegmentLight)
    np.testing.assert_allclose(light.endpoint0, [1.5, 0.5, -0.6])
    np.testing.assert_allclose(light.endpoint1, [-1, 0.5, -0.5])
    np.testing.assert_allclose(light.color0, [0.9, 0.2, 0.1])
    np.testing.assert_allclose(light.color1, [0.2, 1, 0.3])


def test_cornell_box_normalizes(tmp_path):
    loader = FakeLoader(count=8)
    scene = load_scene_prebuilt(SceneType.CORNELL_BOX, tmp_path, loader)
    assert len(scene.meshes) == 8
    assert loader.call_for("CornellBox-Mirror-Rotated.obj")[0][1] is True
    np.testing.assert_allclose(scene.lights[0].position, [0, 0.58, 0])


def test_cornell_box_transparency_materials(tmp_path):
    scene = load_scene_prebuilt(SceneType.CORNELL_BOX_TRANSPARENCY, tmp_path, FakeLoader(count=8))
    np.testing.assert_allclose(scene.meshes[6].material.kd, [1, 0.25, 0.25])
    np.testing.assert_allclose(scene.meshes[5].material.kd, [0.25, 1, 0.25])
    assert scene.meshes[6].material.transparency == 0.5
    assert scene.meshes[5].material.transparency == 0.5
    np.testing.assert_allclose(scene.meshes[5].material.ks, np.zeros(3))
    assert scene.meshes[4].material.transparency == 1.0


def test_cornell_box_transparency_needs_enough_meshes(tmp_path):
    with pytest.raises(ValueError):
        load_scene_prebuilt(SceneType.CORNELL_BOX_TRANSPARENCY, tmp_path, FakeLoader(count=3))


def test_parallelogram_light_scene(tmp_path):
    scene = load_scene_prebuilt(SceneType.CORNELL_BOX_PARALLELOGRAM_LIGHT, tmp_path, FakeLoader())
    (light,) = scene.lights
    assert isinstance(light, ParallelogramLight)
    np.testing.assert_allclose(light.v0, [-0.2, 0.5, 0])
    np.testing.assert_allclose(light.edge01, [0.4, 0, 0])
    np.testing.assert_allclose(light.edge02, [0, 0, 0.4])


def test_monkey_has_two_lights(tmp_path):
    scene = load_scene_prebuilt(SceneType.MONKEY, tmp_path, FakeLoader())
    assert len(scene.lights) == 2
    np.testing.assert_allclose(scene.lights[1].position, [1, -1, -1])


def test_spheres_scene_has_no_meshes(tmp_path):
    loader = FakeLoader()
    scene = load_scene_prebuilt(SceneType.SPHERES, tmp_path, loader)
    assert scene.meshes == []
    assert [sphere.radius for sphere in scene.spheres] == [1.0, 2.0, 0.75]
    np.testing.assert_allclose(scene.lights[0].color, [15, 15, 15])
    assert len(loader.calls) == 3


def test_reflective_sphere(tmp_path):
    scene = load_scene_prebuilt(SceneType.REFLECTIVE_SPHERE, tmp_path, FakeLoader())
    assert scene.lights == []
    (sphere,) = scene.spheres
    np.testing.assert_allclose(sphere.material.ks, [1, 1, 1])
    assert sphere.material.shininess == 2.0


def test_scene_type_accepts_integer(tmp_path):
    loader = FakeLoader()
    scene = load_scene_prebuilt(10, tmp_path, loader)
    assert scene.scene_type is SceneType.CUSTOM
    assert loader.call_for("custom.obj")


def test_unknown_scene_type(tmp_path):
    with pytest.raises(ValueError):
        load_scene_prebuilt(42, tmp_path, FakeLoader())


def test_load_scene_from_file(tmp_path):
    loader = FakeLoader(count=2)
    lights = [PointLight((0, 1, 0), (1, 1, 1))]
    scene = load_scene_from_file(tmp_path / "model.obj", lights, loader)
    assert len(scene.meshes) == 2
    assert scene.lights == lights
    assert scene.lights is not lights
    assert loader.calls == [(tmp_path / "model.obj", False)]


def test_scene_defaults():
    scene = Scene()
    assert scene.map_size == 1
    assert not scene.is_sphere_planet
    assert scene.bspline.position == []


def test_sphere_rejects_negative_radius():
    with pytest.raises(ValueError):
        Sphere((0, 0, 0), -1.0)