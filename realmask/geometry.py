"""Mutable geometric primitives usable as mask operands.

Shapes keep their parameters in numpy arrays and read them on every
query, so a shape that is moved or resized after being combined into a
composite mask changes that composite too.  ``move`` and the ``set_*``
methods mutate in place; the inherited :meth:`RealMask.translate` instead
returns a new, transformed mask.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

from ._common import (
    _F,
    BoundaryType,
    RealInterval,
    as_points,
    as_vector,
    check_axis,
)
from .errors import DimensionalityError
from .mask import RealMask

_Bool = npt.NDArray[np.bool_]

LINE_TOLERANCE = 1e-12

__all__ = [
    "Shape",
    "Box", "ClosedBox", "OpenBox",
    "Sphere", "ClosedSphere", "OpenSphere",
    "Ellipsoid", "ClosedEllipsoid", "OpenEllipsoid",
    "Polygon2D",
    "Line",
    "LINE_TOLERANCE",
]


def _check_positive(value: float, name: str) -> float:
    value = float(value)
    if not value > 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


# ===========================================================================
# Base class
# ===========================================================================

class Shape(RealMask):
    """Base class for bounded, mutable primitives.

    Subclasses implement :meth:`_contains` on a validated ``(..., n)``
    array, :meth:`bounding_interval`, and :meth:`_key` (the parameters
    compared by ``==``).
    """

    _boundary = BoundaryType.UNSPECIFIED

    def contains(self, points: npt.ArrayLike) -> _Bool:
        p = as_points(points, self.num_dimensions())
        return self._contains(p)

    def _contains(self, p: _F) -> _Bool:
        raise NotImplementedError

    def _key(self) -> tuple:
        raise NotImplementedError

    def boundary_type(self) -> BoundaryType:
        return self._boundary

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RealMask):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return all(np.array_equal(x, y) for x, y in zip(self._key(), other._key()))

    def __hash__(self) -> int:
        # parameters are mutable; hash only what cannot change
        return hash((type(self), self.num_dimensions()))


# ===========================================================================
# Boxes
# ===========================================================================

class Box(Shape):
    """Axis-aligned box from corner *min* to corner *max*."""

    def __init__(self, min: Sequence[float], max: Sequence[float]) -> None:
        lo = as_vector(min, name="min")
        hi = as_vector(max, lo.shape[0], "max")
        if np.any(lo > hi):
            raise ValueError(f"min {lo.tolist()} exceeds max {hi.tolist()}")
        self._min = lo
        self._max = hi

    def num_dimensions(self) -> int:
        return self._min.shape[0]

    def center(self) -> _F:
        return (self._min + self._max) / 2.0

    def side_length(self, d: int) -> float:
        check_axis(d, self.num_dimensions())
        return float(self._max[d] - self._min[d])

    def set_center(self, center: Sequence[float]) -> None:
        c = as_vector(center, self.num_dimensions(), "center")
        half = (self._max - self._min) / 2.0
        self._min = c - half
        self._max = c + half

    def set_side_length(self, d: int, length: float) -> None:
        check_axis(d, self.num_dimensions())
        length = _check_positive(length, "side length")
        c = (self._min[d] + self._max[d]) / 2.0
        self._min[d] = c - length / 2.0
        self._max[d] = c + length / 2.0

    def move(self, displacement: Sequence[float]) -> None:
        v = as_vector(displacement, self.num_dimensions(), "displacement")
        self._min = self._min + v
        self._max = self._max + v

    def bounding_interval(self) -> RealInterval:
        return RealInterval(self._min, self._max)

    def _key(self) -> tuple:
        return (self._min, self._max)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._min.tolist()}, {self._max.tolist()})"


class ClosedBox(Box):
    """Box including its faces."""

    _boundary = BoundaryType.CLOSED

    def _contains(self, p: _F) -> _Bool:
        return np.all((p >= self._min) & (p <= self._max), axis=-1)


class OpenBox(Box):
    """Box excluding its faces."""

    _boundary = BoundaryType.OPEN

    def _contains(self, p: _F) -> _Bool:
        return np.all((p > self._min) & (p < self._max), axis=-1)


# ===========================================================================
# Spheres and ellipsoids
# ===========================================================================

class Sphere(Shape):
    """N-sphere with *center* and *radius*."""

    def __init__(self, center: Sequence[float], radius: float) -> None:
        self._center = as_vector(center, name="center")
        self._radius = _check_positive(radius, "radius")

    def num_dimensions(self) -> int:
        return self._center.shape[0]

    def center(self) -> _F:
        return self._center.copy()

    def radius(self) -> float:
        return self._radius

    def set_center(self, center: Sequence[float]) -> None:
        self._center = as_vector(center, self.num_dimensions(), "center")

    def set_radius(self, radius: float) -> None:
        self._radius = _check_positive(radius, "radius")

    def move(self, displacement: Sequence[float]) -> None:
        self._center = self._center + as_vector(displacement, self.num_dimensions(), "displacement")

    def _distance2(self, p: _F) -> _F:
        return np.sum((p - self._center) ** 2, axis=-1)

    def bounding_interval(self) -> RealInterval:
        return RealInterval(self._center - self._radius, self._center + self._radius)

    def _key(self) -> tuple:
        return (self._center, self._radius)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._center.tolist()}, {self._radius})"


class ClosedSphere(Sphere):
    _boundary = BoundaryType.CLOSED

    def _contains(self, p: _F) -> _Bool:
        return self._distance2(p) <= self._radius ** 2


class OpenSphere(Sphere):
    _boundary = BoundaryType.OPEN

    def _contains(self, p: _F) -> _Bool:
        return self._distance2(p) < self._radius ** 2


class Ellipsoid(Shape):
    """Axis-aligned ellipsoid with *center* and per-axis *semi_axes*."""

    def __init__(self, center: Sequence[float], semi_axes: Sequence[float]) -> None:
        self._center = as_vector(center, name="center")
        axes = as_vector(semi_axes, self._center.shape[0], "semi_axes")
        if np.any(axes <= 0):
            raise ValueError(f"semi-axis lengths must be positive, got {axes.tolist()}")
        self._semi_axes = axes

    def num_dimensions(self) -> int:
        return self._center.shape[0]

    def center(self) -> _F:
        return self._center.copy()

    def semi_axis_length(self, d: int) -> float:
        return float(self._semi_axes[check_axis(d, self.num_dimensions())])

    def set_center(self, center: Sequence[float]) -> None:
        self._center = as_vector(center, self.num_dimensions(), "center")

    def set_semi_axis_length(self, d: int, length: float) -> None:
        check_axis(d, self.num_dimensions())
        self._semi_axes[d] = _check_positive(length, "semi-axis length")

    def move(self, displacement: Sequence[float]) -> None:
        self._center = self._center + as_vector(displacement, self.num_dimensions(), "displacement")

    def _level(self, p: _F) -> _F:
        return np.sum(((p - self._center) / self._semi_axes) ** 2, axis=-1)

    def bounding_interval(self) -> RealInterval:
        return RealInterval(self._center - self._semi_axes, self._center + self._semi_axes)

    def _key(self) -> tuple:
        return (self._center, self._semi_axes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._center.tolist()}, {self._semi_axes.tolist()})"


class ClosedEllipsoid(Ellipsoid):
    _boundary = BoundaryType.CLOSED

    def _contains(self, p: _F) -> _Bool:
        return self._level(p) <= 1.0


class OpenEllipsoid(Ellipsoid):
    _boundary = BoundaryType.OPEN

    def _contains(self, p: _F) -> _Bool:
        return self._level(p) < 1.0


# ===========================================================================
# Polygon
# ===========================================================================

class Polygon2D(Shape):
    """Simple 2-D polygon from N *vertices*, tested with the even-odd rule.

    Points exactly on an edge may fall either way, so the boundary type is
    UNSPECIFIED.
    """

    def __init__(self, vertices: Sequence[Sequence[float]]) -> None:
        v = np.array(vertices, dtype=float)
        if v.ndim != 2 or v.shape[1] != 2:
            raise DimensionalityError(f"vertices must be an Nx2 array, got shape {v.shape}")
        if v.shape[0] < 3:
            raise ValueError(f"polygon needs at least 3 vertices, got {v.shape[0]}")
        self._vertices = v

    def num_dimensions(self) -> int:
        return 2

    def num_vertices(self) -> int:
        return self._vertices.shape[0]

    def vertices(self) -> _F:
        return self._vertices.copy()

    def vertex(self, i: int) -> _F:
        if not 0 <= i < self.num_vertices():
            raise IndexError(f"vertex index {i} out of range")
        return self._vertices[i].copy()

    def set_vertex(self, i: int, position: Sequence[float]) -> None:
        if not 0 <= i < self.num_vertices():
            raise IndexError(f"vertex index {i} out of range")
        self._vertices[i] = as_vector(position, 2, "position")

    def move(self, displacement: Sequence[float]) -> None:
        self._vertices = self._vertices + as_vector(displacement, 2, "displacement")

    def _contains(self, p: _F) -> _Bool:
        x = p[..., 0, np.newaxis]
        y = p[..., 1, np.newaxis]
        xi, yi = self._vertices[:, 0], self._vertices[:, 1]
        xj, yj = np.roll(xi, 1), np.roll(yi, 1)
        straddles = (yi > y) != (yj > y)
        with np.errstate(divide="ignore", invalid="ignore"):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
        crossings = np.count_nonzero(straddles & (x < x_cross), axis=-1)
        return crossings % 2 == 1

    def bounding_interval(self) -> RealInterval:
        return RealInterval(self._vertices.min(axis=0), self._vertices.max(axis=0))

    def _key(self) -> tuple:
        return (self._vertices,)

    def __repr__(self) -> str:
        return f"Polygon2D({self._vertices.tolist()})"


# ===========================================================================
# Line segment
# ===========================================================================

class Line(Shape):
    """Closed line segment between two points in n-space.

    A point is on the segment when its distance to it is at most
    *tolerance* and it lies inside the segment's bounding box, so the
    bounding interval always contains every member.
    """

    _boundary = BoundaryType.CLOSED

    def __init__(
        self,
        point_one: Sequence[float],
        point_two: Sequence[float],
        tolerance: float = LINE_TOLERANCE,
    ) -> None:
        self._one = as_vector(point_one, name="point_one")
        self._two = as_vector(point_two, self._one.shape[0], "point_two")
        self._tolerance = float(tolerance)

    def num_dimensions(self) -> int:
        return self._one.shape[0]

    def endpoint_one(self) -> _F:
        return self._one.copy()

    def endpoint_two(self) -> _F:
        return self._two.copy()

    def set_endpoint_one(self, position: Sequence[float]) -> None:
        self._one = as_vector(position, self.num_dimensions(), "position")

    def set_endpoint_two(self, position: Sequence[float]) -> None:
        self._two = as_vector(position, self.num_dimensions(), "position")

    def move(self, displacement: Sequence[float]) -> None:
        v = as_vector(displacement, self.num_dimensions(), "displacement")
        self._one = self._one + v
        self._two = self._two + v

    def _contains(self, p: _F) -> _Bool:
        d = self._two - self._one
        rel = p - self._one
        length2 = float(d @ d)
        if length2 == 0.0:
            closest = rel
        else:
            t = np.clip((rel @ d) / length2, 0.0, 1.0)
            closest = rel - t[..., np.newaxis] * d
        near = np.sqrt(np.sum(closest ** 2, axis=-1)) <= self._tolerance
        return near & self.bounding_interval().contains(p)

    def bounding_interval(self) -> RealInterval:
        return RealInterval(np.minimum(self._one, self._two), np.maximum(self._one, self._two))

    def _key(self) -> tuple:
        return (self._one, self._two)

    def __repr__(self) -> str:
        return f"Line({self._one.tolist()}, {self._two.tolist()})"
