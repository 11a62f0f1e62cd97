"""Composite masks: an operator applied to one or two operand masks.

A composite never copies or snapshots its operands.  Every query is
forwarded to the operator together with the operands as they are *now*,
so moving or resizing a leaf shape is visible through every mask built
from it.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from ._common import BoundaryType, KnownConstant, RealInterval, as_points
from .errors import DimensionalityError
from .mask import RealMask

__all__ = [
    "CompositeMask", "BinaryCompositeMask", "UnaryCompositeMask",
    "check_dimensions",
]


def check_dimensions(operands: Sequence[RealMask]) -> int:
    """Return the shared dimensionality of *operands* or raise."""
    for m in operands:
        if not isinstance(m, RealMask):
            raise TypeError(f"operands must be RealMask instances, got {type(m).__name__}")
    n = operands[0].num_dimensions()
    for m in operands[1:]:
        if m.num_dimensions() != n:
            raise DimensionalityError(
                f"operands have mismatched dimensionality: {n} and {m.num_dimensions()}"
            )
    return n


class CompositeMask(RealMask):
    """Mask defined by ``operator`` over an ordered tuple of operands.

    Two composites are equal when their operators are equal and their
    operands are pairwise equal in the same order; ``a & b`` is therefore
    not equal to ``b & a`` even though both contain the same points.
    """

    def __init__(self, operator, operands: Sequence[RealMask]) -> None:
        operands = tuple(operands)
        if len(operands) != operator.arity:
            raise TypeError(
                f"{operator} takes {operator.arity} operand(s), got {len(operands)}"
            )
        self._n = check_dimensions(operands)
        self._operator = operator
        self._operands: Tuple[RealMask, ...] = operands
        self._predicate = operator.predicate(*(m.contains for m in operands))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def operator(self):
        return self._operator

    @property
    def operands(self) -> Tuple[RealMask, ...]:
        return self._operands

    def operand(self, i: int) -> RealMask:
        if not 0 <= i < len(self._operands):
            raise IndexError(f"operand index {i} out of range for {self._operator}")
        return self._operands[i]

    # ------------------------------------------------------------------
    # Mask queries
    # ------------------------------------------------------------------

    def num_dimensions(self) -> int:
        return self._n

    def contains(self, points: npt.ArrayLike) -> npt.NDArray[np.bool_]:
        p = as_points(points, self._n)
        return np.asarray(self._predicate(p), dtype=bool)

    def boundary_type(self) -> BoundaryType:
        return self._operator.boundary_type(*self._operands)

    def bounding_interval(self) -> Optional[RealInterval]:
        return self._operator.bounding_interval(*self._operands)

    def is_empty(self) -> bool:
        return self._operator.is_empty(*self._operands)

    def is_all(self) -> bool:
        return self._operator.is_all(*self._operands)

    def known_constant(self) -> KnownConstant:
        return self._operator.known_constant(*self._operands)

    # ------------------------------------------------------------------
    # Structural equality
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RealMask):
            return NotImplemented
        if not isinstance(other, CompositeMask):
            return False
        if self._operator != other._operator:
            return False
        if len(self._operands) != len(other._operands):
            return False
        return all(bool(x == y) for x, y in zip(self._operands, other._operands))

    def __hash__(self) -> int:
        # operand state is mutable, so only the fixed structure is hashed
        return hash((self._operator.kind, len(self._operands), self._n))

    def __repr__(self) -> str:
        args = ", ".join(repr(m) for m in self._operands)
        return f"{type(self).__name__}({self._operator!r}, {args})"


class BinaryCompositeMask(CompositeMask):
    """Result of AND, OR, XOR or SUBTRACT."""

    def __init__(self, operator, arg0: RealMask, arg1: RealMask) -> None:
        super().__init__(operator, (arg0, arg1))

    @property
    def arg0(self) -> RealMask:
        return self._operands[0]

    @property
    def arg1(self) -> RealMask:
        return self._operands[1]


class UnaryCompositeMask(CompositeMask):
    """Result of NEGATE or TRANSFORM."""

    def __init__(self, operator, arg0: RealMask) -> None:
        super().__init__(operator, (arg0,))

    @property
    def arg0(self) -> RealMask:
        return self._operands[0]
