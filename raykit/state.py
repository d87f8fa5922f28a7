"""Per-render state handed through the renderer."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import numpy as np

from raykit.features import Features
from raykit.geometry import HitInfo, Ray
from raykit.scene import Scene


@dataclass(eq=False)
class RenderState:
    """Scene, features and acceleration structure plus a random sampler.

    ``bvh.intersect(state, ray)`` returns a :class:`HitInfo` or ``None`` and shortens
    ``ray.t`` to the hit distance. ``light_contribution(state, ray, hit_info)`` gives
    the light reflected at a hit; ``environment(state, ray)`` the colour of a miss,
    black when not given. ``sampler`` draws uniform numbers in [0, 1) and may be
    given as an integer seed.
    """

    scene: Scene
    features: Features
    bvh: Any
    light_contribution: Callable[["RenderState", Ray, HitInfo], Any]
    environment: Optional[Callable[["RenderState", Ray], Any]] = None
    sampler: random.Random = field(default_factory=lambda: random.Random(0))

    def __post_init__(self) -> None:
        if isinstance(self.sampler, int):
            self.sampler = random.Random(self.sampler)

    def intersect(self, ray: Ray) -> Optional[HitInfo]:
        """Trace ``ray`` through the acceleration structure."""
        return self.bvh.intersect(self, ray)

    def light_at(self, ray: Ray, hit_info: HitInfo) -> np.ndarray:
        """Return the light leaving the hit point back along ``ray``."""
        return np.asarray(self.light_contribution(self, ray, hit_info), dtype=float).reshape(3)

    def background(self, ray: Ray) -> np.ndarray:
        """Return the colour seen along a ray that hits nothing."""
        if self.environment is None:
            return np.zeros(3)
        return np.asarray(self.environment(self, ray), dtype=float).reshape(3)