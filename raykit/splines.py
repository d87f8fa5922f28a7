"""Uniform B-spline interpolation of positions and rotations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np


class SplineType(IntEnum):
    """Degree of a B-spline."""

    LINEAR = 0
    QUADRATIC = 1
    CUBIC = 2


@dataclass(eq=False)
class SplinePoint:
    """A camera position and yaw/pitch rotation on a spline."""

    position: np.ndarray
    rotation: np.ndarray


@dataclass(eq=False)
class BSpline:
    """Control points for position and rotation plus interpolation settings."""

    position: list = field(default_factory=list)
    rotation: list = field(default_factory=list)
    repeat_knots: bool = False
    spline_type: SplineType = SplineType.LINEAR
    t: float = 0.0
    ray_number: int = 1


def _as_points(control_points, minimum: int) -> np.ndarray:
    points = np.asarray(control_points, dtype=float)
    if points.ndim == 0 or len(points) < minimum:
        raise ValueError(f"at least {minimum} control points are required")
    return points


def _quadratic_sum(points: np.ndarray, t: float) -> np.ndarray:
    total = np.zeros(points.shape[1:])
    for i, point in enumerate(points):
        if i <= t < i + 1:
            total += point * ((t - i) * (t - i) * 0.5)
        elif i + 1 <= t <= i + 2:
            u = t - i - 1
            total += point * (-u * u + u + 0.5)
        elif i + 2 <= t < i + 3:
            u = t - i - 2
            total += point * ((1 - u) * (1 - u) * 0.5)
    return total


def interpolate_uniform_linear(control_points, t: float) -> np.ndarray:
    """Evaluate a clamped uniform linear B-spline at ``t`` in [0, 1]."""
    points = _as_points(control_points, 1)
    t = t * (len(points) - 1) + 1
    total = np.zeros(points.shape[1:])
    for i, point in enumerate(points):
        if i <= t < i + 1:
            total += point * (t - i)
        elif i + 1 <= t <= i + 2:
            total += point * (2 - t + i)
    return total


def interpolate_uniform_quadratic(control_points, t: float) -> np.ndarray:
    """Evaluate a uniform quadratic B-spline at ``t`` in [0, 1]."""
    points = _as_points(control_points, 2)
    t = t * (len(points) - 2) + 2
    return _quadratic_sum(points, t)


def interpolate_connected_quadratic(control_points, t: float) -> np.ndarray:
    """Evaluate a quadratic B-spline whose ends pass through the end control points."""
    points = _as_points(control_points, 2)
    count = len(points)
    t = t * (count + 2)
    total = np.zeros(points.shape[1:])

    if t < 1:
        total += points[0] * (1.0 - t) * (1.0 - t)
        total += points[1] * (2.0 * t - 1.5 * t * t)
    elif t < 2:
        total += points[1] * (2.0 - t) * (2.0 - t) / 2.0

    if t > count:
        t2 = 2.0 - (t - count)
        if t2 < 1:
            total += points[-1] * (1.0 - t2) * (1.0 - t2)
            total += points[-2] * (2.0 * t2 - 1.5 * t2 * t2)
        elif t2 < 2:
            total += points[-2] * (2.0 - t2) * (2.0 - t2) / 2.0

    return total + _quadratic_sum(points, t)


def interpolate_uniform_cubic(control_points, t: float) -> np.ndarray:
    """Evaluate a uniform cubic B-spline at ``t`` in [0, 1]."""
    points = _as_points(control_points, 3)
    t = t * (len(points) - 3) + 3
    total = np.zeros(points.shape[1:])
    for i, point in enumerate(points):
        if i <= t < i + 1:
            total += point * ((t - i) ** 3 / 6.0)
        elif i + 1 <= t <= i + 2:
            u = t - i - 1
            total += point * ((-3.0 * u ** 3 + 3 * u * u + 3 * u + 1.0) / 6.0)
        elif i + 2 <= t < i + 3:
            u = t - i - 2
            total += point * ((3 * u ** 3 - 6 * u * u + 4) / 6.0)
        elif i + 3 <= t < i + 4:
            u = t - i - 3
            total += point * ((-u ** 3 + 3 * u * u - 3 * u + 1) / 6.0)
    return total


def interpolate_connected_cubic(control_points, t: float) -> np.ndarray:
    """Evaluate the connected cubic variant, which is the uniform cubic spline."""
    return interpolate_uniform_cubic(control_points, t)


_UNIFORM = {
    SplineType.LINEAR: interpolate_uniform_linear,
    SplineType.QUADRATIC: interpolate_uniform_quadratic,
    SplineType.CUBIC: interpolate_uniform_cubic,
}

_CONNECTED = {
    SplineType.LINEAR: interpolate_uniform_linear,
    SplineType.QUADRATIC: interpolate_connected_quadratic,
    SplineType.CUBIC: interpolate_connected_cubic,
}


def interpolate_bspline(bspline: BSpline, t: float) -> SplinePoint:
    """Interpolate both position and rotation of ``bspline`` at ``t``."""
    table = _CONNECTED if bspline.repeat_knots else _UNIFORM
    interpolate = table[SplineType(bspline.spline_type)]
    return SplinePoint(interpolate(bspline.position, t), interpolate(bspline.rotation, t))