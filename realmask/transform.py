"""Coordinate transforms accepted by :meth:`RealMask.transform`.

A transform passed to a mask maps points of the *new* mask's space back
into the operand's space ("transform to source").  Any object with a
vectorised ``apply(points)`` works.  ``num_dimensions()`` is optional and,
when present, is checked against the operand.  Objects that also report
``is_affine = True``, ``is_invertible()`` and ``inverse()`` let the
transformed mask keep a bounding interval.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Union

import numpy as np
import numpy.typing as npt

from ._common import _F, as_points, as_vector, check_num_dimensions
from .errors import DimensionalityError

INVERTIBILITY_TOLERANCE = 1e-12

__all__ = ["AffineTransform", "FunctionTransform", "INVERTIBILITY_TOLERANCE"]


class AffineTransform:
    """``p -> A @ p + t`` in n dimensions.

    Parameters
    ----------
    matrix:
        Either an ``n x (n+1)`` matrix ``[A | t]`` or the homogeneous
        ``(n+1) x (n+1)`` form whose last row is ``[0, ..., 0, 1]``.
    """

    is_affine = True

    def __init__(self, matrix: npt.ArrayLike) -> None:
        m = np.array(matrix, dtype=float)
        if m.ndim != 2:
            raise ValueError(f"affine matrix must be 2-D, got shape {m.shape}")
        rows, cols = m.shape
        if cols == rows + 1:
            pass
        elif rows == cols and rows >= 2:
            expected = np.zeros(cols)
            expected[-1] = 1.0
            if not np.array_equal(m[-1], expected):
                raise ValueError("last row of a homogeneous matrix must be [0, ..., 0, 1]")
            m = m[:-1]
        else:
            raise ValueError(f"cannot read an affine transform from shape {m.shape}")
        m.flags.writeable = False
        self._matrix = m
        self._inverse: Optional[AffineTransform] = None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls, n: int) -> AffineTransform:
        return cls.from_linear(np.eye(n))

    @classmethod
    def from_linear(
        cls, linear: npt.ArrayLike, translation: Optional[Sequence[float]] = None
    ) -> AffineTransform:
        """Build ``[linear | translation]`` (zero translation by default)."""
        a = np.array(linear, dtype=float)
        if a.ndim != 2 or a.shape[0] != a.shape[1]:
            raise ValueError(f"linear part must be square, got shape {a.shape}")
        t = np.zeros(a.shape[0]) if translation is None else as_vector(translation, a.shape[0], "translation")
        return cls(np.hstack([a, t[:, np.newaxis]]))

    @classmethod
    def translation(cls, offset: Sequence[float]) -> AffineTransform:
        t = as_vector(offset, name="offset")
        return cls.from_linear(np.eye(t.shape[0]), t)

    @classmethod
    def scaling(cls, factors: Union[float, Sequence[float]], n: Optional[int] = None) -> AffineTransform:
        """Axis-aligned scaling; a scalar *factor* needs *n*."""
        f = np.asarray(factors, dtype=float)
        if f.ndim == 0:
            if n is None:
                raise ValueError("n is required for a scalar scale factor")
            f = np.full(n, float(f))
        return cls.from_linear(np.diag(f))

    @classmethod
    def rotation_2d(
        cls, angle_rad: float, center: Optional[Sequence[float]] = None
    ) -> AffineTransform:
        """Counter-clockwise rotation by *angle_rad* about *center*."""
        c = np.cos(angle_rad)
        s = np.sin(angle_rad)
        rot = np.array([[c, -s], [s, c]])
        pivot = np.zeros(2) if center is None else as_vector(center, 2, "center")
        return cls.from_linear(rot, pivot - rot @ pivot)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def num_dimensions(self) -> int:
        return self._matrix.shape[0]

    def matrix(self) -> _F:
        """Copy of the ``n x (n+1)`` matrix."""
        return self._matrix.copy()

    def linear(self) -> _F:
        return self._matrix[:, :-1].copy()

    def translation_vector(self) -> _F:
        return self._matrix[:, -1].copy()

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def apply(self, points: npt.ArrayLike) -> _F:
        """Map a ``(..., n)`` array of points."""
        p = as_points(points, self.num_dimensions())
        return p @ self._matrix[:, :-1].T + self._matrix[:, -1]

    __call__ = apply

    def is_invertible(self, tol: float = INVERTIBILITY_TOLERANCE) -> bool:
        return bool(abs(np.linalg.det(self._matrix[:, :-1])) > tol)

    def inverse(self) -> AffineTransform:
        """Inverse transform; ``t.inverse().inverse()`` is ``t`` itself."""
        if self._inverse is None:
            if not self.is_invertible():
                raise ValueError("affine transform is singular")
            inv = np.linalg.inv(self._matrix[:, :-1])
            result = AffineTransform.from_linear(inv, -inv @ self._matrix[:, -1])
            result._inverse = self
            self._inverse = result
        return self._inverse

    def concatenate(self, other: AffineTransform) -> AffineTransform:
        """``self ∘ other``: apply *other* first, then this transform."""
        if other.num_dimensions() != self.num_dimensions():
            raise DimensionalityError(
                f"cannot concatenate {self.num_dimensions()}-D and "
                f"{other.num_dimensions()}-D transforms"
            )
        a1, t1 = self._matrix[:, :-1], self._matrix[:, -1]
        a2, t2 = other._matrix[:, :-1], other._matrix[:, -1]
        return AffineTransform.from_linear(a1 @ a2, a1 @ t2 + t1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return np.array_equal(self._matrix, other._matrix)

    def __hash__(self) -> int:
        return hash(self._matrix.tobytes())

    def __repr__(self) -> str:
        return f"AffineTransform({self._matrix.tolist()})"


class FunctionTransform:
    """Arbitrary (non-affine) transform from vectorised callables.

    Masks transformed by a ``FunctionTransform`` are never bounded: corner
    images say nothing about the image of a box under a general map.
    """

    is_affine = False

    def __init__(
        self,
        n: int,
        forward: Callable[[_F], _F],
        inverse: Optional[Callable[[_F], _F]] = None,
    ) -> None:
        self._n = check_num_dimensions(n)
        self._forward = forward
        self._inverse_fn = inverse

    def num_dimensions(self) -> int:
        return self._n

    def apply(self, points: npt.ArrayLike) -> _F:
        return np.asarray(self._forward(as_points(points, self._n)), dtype=float)

    __call__ = apply

    def is_invertible(self) -> bool:
        return self._inverse_fn is not None

    def inverse(self) -> FunctionTransform:
        if self._inverse_fn is None:
            raise ValueError("transform has no inverse")
        return FunctionTransform(self._n, self._inverse_fn, self._forward)
