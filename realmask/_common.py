"""Shared types and helpers used throughout realmask.

This module provides:

* **Enums**: :class:`BoundaryType`, :class:`KnownConstant`
* **Intervals**: :class:`RealInterval`
* **Interval propagation**: :func:`intersect_intervals`,
  :func:`union_intervals`, :func:`transform_interval`
* **Boundary propagation**: :func:`combine_boundary_types`
* **Point helpers**: :func:`as_points`, :func:`as_vector`

Everything here is pure and stateless.  Import the public names from
:mod:`realmask` instead.
"""

from __future__ import annotations

import enum
import itertools
from typing import Optional, Sequence

import numpy as np
import numpy.typing as npt

from .errors import DimensionalityError

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]

__all__ = [
    "_F",
    "BoundaryType", "KnownConstant", "RealInterval",
    "intersect_intervals", "union_intervals", "transform_interval",
    "combine_boundary_types",
    "as_points", "as_vector", "check_axis", "check_num_dimensions",
]


# ===========================================================================
# Enums
# ===========================================================================

class BoundaryType(enum.Enum):
    """Whether points on the mathematical boundary of a mask belong to it."""

    OPEN = "open"
    CLOSED = "closed"
    UNSPECIFIED = "unspecified"

    def flip(self) -> BoundaryType:
        """Boundary type of the complement: OPEN <-> CLOSED."""
        if self is BoundaryType.OPEN:
            return BoundaryType.CLOSED
        if self is BoundaryType.CLOSED:
            return BoundaryType.OPEN
        return BoundaryType.UNSPECIFIED


class KnownConstant(enum.Enum):
    """Tag marking masks that are statically known to be everything or nothing."""

    NONE = "none"
    ALL = "all"
    EMPTY = "empty"

    def flip(self) -> KnownConstant:
        if self is KnownConstant.ALL:
            return KnownConstant.EMPTY
        if self is KnownConstant.EMPTY:
            return KnownConstant.ALL
        return KnownConstant.NONE


# ===========================================================================
# Point helpers
# ===========================================================================

def as_points(points: npt.ArrayLike, n: int) -> _F:
    """Return *points* as a float array of shape ``(..., n)``."""
    p = np.asarray(points, dtype=float)
    if p.ndim == 0 or p.shape[-1] != n:
        raise DimensionalityError(
            f"expected points with {n} coordinates, got shape {p.shape}"
        )
    return p


def as_vector(values: Sequence[float], n: Optional[int] = None, name: str = "position") -> _F:
    """Copy *values* into a 1-D float array, optionally checking its length."""
    v = np.array(values, dtype=float)
    if v.ndim != 1:
        raise DimensionalityError(f"{name} must be one-dimensional, got shape {v.shape}")
    if n is not None and v.shape[0] != n:
        raise DimensionalityError(f"{name} must have length {n}, got {v.shape[0]}")
    return v


def check_num_dimensions(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
        raise ValueError(f"number of dimensions must be a positive int, got {n!r}")
    return int(n)


def check_axis(d: int, n: int) -> int:
    """Validate a dimension index (negative indices are not accepted)."""
    if not 0 <= d < n:
        raise IndexError(f"dimension {d} out of range for {n}-D object")
    return d


# ===========================================================================
# Intervals
# ===========================================================================

class RealInterval:
    """Axis-aligned box given by per-dimension ``min`` and ``max`` arrays.

    A *degenerate* interval (``min[d] > max[d]`` for some ``d``) contains no
    points; :meth:`empty` builds the canonical one.
    """

    def __init__(self, min: Sequence[float], max: Sequence[float]) -> None:
        lo = as_vector(min, name="min")
        hi = as_vector(max, n=lo.shape[0], name="max")
        self._min = lo
        self._max = hi

    @classmethod
    def empty(cls, n: int) -> RealInterval:
        """Degenerate interval with ``+inf`` minima and ``-inf`` maxima."""
        return cls(np.full(n, np.inf), np.full(n, -np.inf))

    def num_dimensions(self) -> int:
        return self._min.shape[0]

    def real_min(self, d: int) -> float:
        return float(self._min[check_axis(d, self.num_dimensions())])

    def real_max(self, d: int) -> float:
        return float(self._max[check_axis(d, self.num_dimensions())])

    def min(self) -> _F:
        """Copy of the per-dimension minima."""
        return self._min.copy()

    def max(self) -> _F:
        """Copy of the per-dimension maxima."""
        return self._max.copy()

    def is_empty(self) -> bool:
        """True when the interval is degenerate in any dimension."""
        return bool(np.any(self._min > self._max))

    def contains(self, points: npt.ArrayLike) -> npt.NDArray[np.bool_]:
        """Closed containment test for a ``(..., n)`` array of points."""
        p = as_points(points, self.num_dimensions())
        return np.all((p >= self._min) & (p <= self._max), axis=-1)

    def corners(self) -> _F:
        """All ``2**n`` corners as an array of shape ``(2**n, n)``."""
        n = self.num_dimensions()
        pick_max = np.array(list(itertools.product((False, True), repeat=n)), dtype=bool)
        return np.where(pick_max, self._max, self._min)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RealInterval):
            return NotImplemented
        return np.array_equal(self._min, other._min) and np.array_equal(self._max, other._max)

    def __hash__(self) -> int:
        return hash((self._min.tobytes(), self._max.tobytes()))

    def __repr__(self) -> str:
        return f"RealInterval(min={self._min.tolist()}, max={self._max.tolist()})"


# ===========================================================================
# Interval propagation
# ===========================================================================

def intersect_intervals(a: RealInterval, b: RealInterval) -> RealInterval:
    """Per-dimension ``[max(min_a, min_b), min(max_a, max_b)]``."""
    _check_same_dims(a, b)
    return RealInterval(np.maximum(a._min, b._min), np.minimum(a._max, b._max))


def union_intervals(a: RealInterval, b: RealInterval) -> RealInterval:
    """Per-dimension ``[min(min_a, min_b), max(max_a, max_b)]``."""
    _check_same_dims(a, b)
    return RealInterval(np.minimum(a._min, b._min), np.maximum(a._max, b._max))


def transform_interval(interval: RealInterval, transform) -> Optional[RealInterval]:
    """Bounding box of *interval*'s corners after ``transform.apply``.

    Exact for affine maps: the image of a box is a parallelotope whose
    extreme points are images of the box corners.

    Intervals with infinite bounds are mapped per axis through the affine
    matrix, with ``0 * inf`` taken as ``0``.  Returns ``None`` when such an
    interval meets a transform that exposes no matrix.
    """
    n = interval.num_dimensions()
    if interval.is_empty():
        return RealInterval.empty(n)
    if np.all(np.isfinite(interval._min)) and np.all(np.isfinite(interval._max)):
        images = np.asarray(transform.apply(interval.corners()), dtype=float)
        return RealInterval(images.min(axis=0), images.max(axis=0))
    if not getattr(transform, "is_affine", False) or not hasattr(transform, "linear"):
        return None
    a = transform.linear()
    t = transform.translation_vector()
    with np.errstate(invalid="ignore"):
        lo = np.where(a == 0, 0.0, a * interval._min)
        hi = np.where(a == 0, 0.0, a * interval._max)
    return RealInterval(
        t + np.minimum(lo, hi).sum(axis=1),
        t + np.maximum(lo, hi).sum(axis=1),
    )


def _check_same_dims(a: RealInterval, b: RealInterval) -> None:
    if a.num_dimensions() != b.num_dimensions():
        raise DimensionalityError(
            f"intervals have {a.num_dimensions()} and {b.num_dimensions()} dimensions"
        )


# ===========================================================================
# Boundary propagation
# ===========================================================================

def combine_boundary_types(t0: BoundaryType, t1: BoundaryType) -> BoundaryType:
    """*t0* when both agree, otherwise UNSPECIFIED."""
    return t0 if t0 is t1 else BoundaryType.UNSPECIFIED
