"""Mask base class, ALL/EMPTY sentinels and predicate-backed masks."""

from __future__ import annotations

import functools
from typing import Callable, Optional, Sequence, Union

import numpy as np
import numpy.typing as npt

from ._common import (
    _F,
    BoundaryType,
    KnownConstant,
    RealInterval,
    as_points,
    check_num_dimensions,
)
from .errors import DimensionalityError, UnboundedMaskError

_Bool = npt.NDArray[np.bool_]
_Predicate = Callable[[_F], _Bool]

__all__ = [
    "RealMask",
    "AllMask", "EmptyMask", "PredicateMask",
    "all_mask", "empty_mask",
]


# ===========================================================================
# Base class
# ===========================================================================

class RealMask:
    """A region of N-dimensional real space given by a membership test.

    Subclasses implement :meth:`num_dimensions` and :meth:`contains`; the
    remaining queries have conservative defaults (unspecified boundary, no
    bounding interval, not known to be empty or all).

    Implements:
    - Queries:      :meth:`test`, :meth:`contains`, :meth:`boundary_type`,
                    :meth:`is_empty`, :meth:`is_all`, :meth:`bounding_interval`
    - Boolean ops:  :meth:`and_`, :meth:`or_`, :meth:`xor`, :meth:`minus`,
                    :meth:`negate` (also ``&``, ``|``, ``^``, ``-``, ``~``)
    - Transforms:   :meth:`transform`, :meth:`translate`, :meth:`scale`,
                    :meth:`rotate`
    """

    def num_dimensions(self) -> int:
        raise NotImplementedError

    def contains(self, points: npt.ArrayLike) -> _Bool:
        """Vectorised membership test for a ``(..., n)`` array of points."""
        raise NotImplementedError

    def test(self, point: Sequence[float]) -> bool:
        """Membership test for a single point of length ``num_dimensions()``."""
        p = as_points(point, self.num_dimensions())
        if p.ndim != 1:
            raise DimensionalityError(
                f"test() takes a single point, got shape {p.shape}; use contains()"
            )
        return bool(self.contains(p[np.newaxis])[0])

    def boundary_type(self) -> BoundaryType:
        return BoundaryType.UNSPECIFIED

    def known_constant(self) -> KnownConstant:
        return KnownConstant.NONE

    def is_empty(self) -> bool:
        return self.known_constant() is KnownConstant.EMPTY

    def is_all(self) -> bool:
        return self.known_constant() is KnownConstant.ALL

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def bounding_interval(self) -> Optional[RealInterval]:
        """Smallest known box containing the mask, or ``None`` if unbounded."""
        return None

    def is_bounded(self) -> bool:
        return self.bounding_interval() is not None

    def real_min(self, d: int) -> float:
        return self._require_interval().real_min(d)

    def real_max(self, d: int) -> float:
        return self._require_interval().real_max(d)

    def _require_interval(self) -> RealInterval:
        interval = self.bounding_interval()
        if interval is None:
            raise UnboundedMaskError(f"{type(self).__name__} has no bounding interval")
        return interval

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def and_(self, other: RealMask) -> RealMask:
        """Points in both this mask and *other*."""
        from .operators import AND
        return AND.apply(self, other)

    def or_(self, other: RealMask) -> RealMask:
        """Points in this mask, *other*, or both."""
        from .operators import OR
        return OR.apply(self, other)

    def xor(self, other: RealMask) -> RealMask:
        """Points in exactly one of this mask and *other*."""
        from .operators import XOR
        return XOR.apply(self, other)

    def minus(self, other: RealMask) -> RealMask:
        """Points in this mask but not in *other*."""
        from .operators import SUBTRACT
        return SUBTRACT.apply(self, other)

    def negate(self) -> RealMask:
        """Complement of this mask."""
        from .operators import NEGATE
        return NEGATE.apply(self)

    def __and__(self, other: object) -> RealMask:
        if not isinstance(other, RealMask):
            return NotImplemented
        return self.and_(other)

    def __or__(self, other: object) -> RealMask:
        if not isinstance(other, RealMask):
            return NotImplemented
        return self.or_(other)

    def __xor__(self, other: object) -> RealMask:
        if not isinstance(other, RealMask):
            return NotImplemented
        return self.xor(other)

    def __sub__(self, other: object) -> RealMask:
        if not isinstance(other, RealMask):
            return NotImplemented
        return self.minus(other)

    def __invert__(self) -> RealMask:
        return self.negate()

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def transform(self, transform_to_source) -> RealMask:
        """Mask whose point ``p`` is tested as ``self.test(transform_to_source(p))``.

        *transform_to_source* maps points of the new mask's space back into
        this mask's space, i.e. it is the inverse of the motion applied to
        the region.
        """
        from .operators import TransformOperator
        return TransformOperator(transform_to_source).apply(self)

    def translate(self, offset: Sequence[float]) -> RealMask:
        """Move the region by *offset*."""
        from .transform import AffineTransform
        return self.transform(AffineTransform.translation(-np.asarray(offset, dtype=float)))

    def scale(self, factor: Union[float, Sequence[float]]) -> RealMask:
        """Scale the region about the origin by *factor* (scalar or per axis)."""
        from .transform import AffineTransform
        f = np.broadcast_to(np.asarray(factor, dtype=float), (self.num_dimensions(),))
        if np.any(f == 0):
            raise ValueError("scale factor must be non-zero")
        return self.transform(AffineTransform.scaling(1.0 / f))

    def rotate(self, angle_rad: float, center: Optional[Sequence[float]] = None) -> RealMask:
        """Rotate a 2-D region counter-clockwise by *angle_rad* about *center*."""
        from .transform import AffineTransform
        if self.num_dimensions() != 2:
            raise DimensionalityError("rotate() is only defined for 2-D masks")
        return self.transform(AffineTransform.rotation_2d(-angle_rad, center))


# ===========================================================================
# Sentinels
# ===========================================================================

class AllMask(RealMask):
    """The whole of n-space.  Unbounded; boundary reported as OPEN."""

    def __init__(self, n: int) -> None:
        self._n = check_num_dimensions(n)

    def num_dimensions(self) -> int:
        return self._n

    def contains(self, points: npt.ArrayLike) -> _Bool:
        p = as_points(points, self._n)
        return np.ones(p.shape[:-1], dtype=bool)

    def boundary_type(self) -> BoundaryType:
        return BoundaryType.OPEN

    def known_constant(self) -> KnownConstant:
        return KnownConstant.ALL

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RealMask):
            return NotImplemented
        return type(other) is AllMask and other._n == self._n

    def __hash__(self) -> int:
        return hash((AllMask, self._n))

    def __repr__(self) -> str:
        return f"AllMask({self._n})"


class EmptyMask(RealMask):
    """No points at all.  Boundary reported as CLOSED, the dual of ALL.

    With ``bounded=True`` the mask carries a degenerate bounding interval
    so it can stand in wherever a bounded mask is expected.
    """

    def __init__(self, n: int, bounded: bool = False) -> None:
        self._n = check_num_dimensions(n)
        self._bounded = bool(bounded)

    def num_dimensions(self) -> int:
        return self._n

    def contains(self, points: npt.ArrayLike) -> _Bool:
        p = as_points(points, self._n)
        return np.zeros(p.shape[:-1], dtype=bool)

    def boundary_type(self) -> BoundaryType:
        return BoundaryType.CLOSED

    def known_constant(self) -> KnownConstant:
        return KnownConstant.EMPTY

    def bounding_interval(self) -> Optional[RealInterval]:
        return RealInterval.empty(self._n) if self._bounded else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RealMask):
            return NotImplemented
        return (
            type(other) is EmptyMask
            and other._n == self._n
            and other._bounded == self._bounded
        )

    def __hash__(self) -> int:
        return hash((EmptyMask, self._n, self._bounded))

    def __repr__(self) -> str:
        return f"EmptyMask({self._n}, bounded={self._bounded})"


@functools.lru_cache(maxsize=None)
def all_mask(n: int) -> AllMask:
    """Shared ALL sentinel for *n* dimensions."""
    return AllMask(n)


@functools.lru_cache(maxsize=None)
def empty_mask(n: int, bounded: bool = False) -> EmptyMask:
    """Shared EMPTY sentinel for *n* dimensions."""
    return EmptyMask(n, bounded)


# ===========================================================================
# Predicate-backed leaf
# ===========================================================================

class PredicateMask(RealMask):
    """Leaf mask wrapping a vectorised predicate.

    Parameters
    ----------
    predicate:
        Callable taking a ``(..., n)`` float array and returning a boolean
        array of shape ``(...)``.
    num_dimensions:
        Dimensionality of the space.
    boundary_type:
        What the predicate does on its boundary, if known.
    interval:
        Optional bounding interval; points outside it are never members.
    known_constant:
        Tag for predicates known to be constant.
    """

    def __init__(
        self,
        predicate: _Predicate,
        num_dimensions: int,
        boundary_type: BoundaryType = BoundaryType.UNSPECIFIED,
        interval: Optional[RealInterval] = None,
        known_constant: KnownConstant = KnownConstant.NONE,
    ) -> None:
        self._n = check_num_dimensions(num_dimensions)
        if interval is not None and interval.num_dimensions() != self._n:
            raise DimensionalityError(
                f"interval has {interval.num_dimensions()} dimensions, mask has {self._n}"
            )
        self._predicate = predicate
        self._boundary_type = boundary_type
        self._interval = interval
        self._known_constant = known_constant

    def num_dimensions(self) -> int:
        return self._n

    def contains(self, points: npt.ArrayLike) -> _Bool:
        p = as_points(points, self._n)
        inside = np.broadcast_to(np.asarray(self._predicate(p), dtype=bool), p.shape[:-1])
        if self._interval is not None:
            inside = inside & self._interval.contains(p)
        return inside

    def boundary_type(self) -> BoundaryType:
        return self._boundary_type

    def known_constant(self) -> KnownConstant:
        return self._known_constant

    def bounding_interval(self) -> Optional[RealInterval]:
        return self._interval
