"""Operator registry: how each boolean / transform operator combines masks.

Every operator answers five questions about its result given the current
operands: the membership predicate, the boundary type, the bounding
interval, whether the result is empty and whether it is everything.
:meth:`MaskOperator.apply` additionally short-circuits operations on the
ALL / EMPTY sentinels before building a composite node.

==========  =====================  ====================================
Operator    Membership             Bounding interval
==========  =====================  ====================================
AND         ``a & b``              intersection (or the bounded operand's)
OR          ``a | b``              union, only if both are bounded
XOR         ``a ^ b``              union, only if both are bounded
SUBTRACT    ``a & ~b``             ``a``'s interval
NEGATE      ``~a``                 none (see :class:`NegateOperator`)
TRANSFORM   ``a(T(p))``            corners of ``a`` mapped through ``T⁻¹``
==========  =====================  ====================================

XOR emptiness is best effort: it is exact for sentinel and structurally
equal operands; otherwise only a degenerate bounding interval reveals it.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Dict, Optional, Type, Union

import numpy as np
import numpy.typing as npt

from ._common import (
    BoundaryType,
    KnownConstant,
    RealInterval,
    combine_boundary_types,
    intersect_intervals,
    transform_interval,
    union_intervals,
)
from .composite import BinaryCompositeMask, UnaryCompositeMask, check_dimensions
from .errors import DimensionalityError
from .mask import RealMask

logger = logging.getLogger(__name__)

_Bool = npt.NDArray[np.bool_]
_Contains = Callable[[np.ndarray], _Bool]

_ALL = KnownConstant.ALL
_EMPTY = KnownConstant.EMPTY
_NONE = KnownConstant.NONE

__all__ = [
    "OperatorKind", "MaskOperator",
    "AndOperator", "OrOperator", "XorOperator", "SubtractOperator",
    "NegateOperator", "TransformOperator",
    "AND", "OR", "XOR", "SUBTRACT", "NEGATE",
    "OPERATORS", "operator_for",
]


class OperatorKind(enum.Enum):
    AND = "and"
    OR = "or"
    XOR = "xor"
    SUBTRACT = "subtract"
    NEGATE = "negate"
    TRANSFORM = "transform"


# ===========================================================================
# Base class
# ===========================================================================

class MaskOperator:
    """Stateless combination rules for one operator kind."""

    kind: OperatorKind
    arity: int

    def predicate(self, *tests: _Contains) -> _Contains:
        raise NotImplementedError

    def boundary_type(self, *operands: RealMask) -> BoundaryType:
        raise NotImplementedError

    def bounding_interval(self, *operands: RealMask) -> Optional[RealInterval]:
        raise NotImplementedError

    def _constant(self, *tags: KnownConstant) -> KnownConstant:
        raise NotImplementedError

    def _is_empty(self, *operands: RealMask) -> bool:
        raise NotImplementedError

    def _is_all(self, *operands: RealMask) -> bool:
        raise NotImplementedError

    def simplify(self, *operands: RealMask) -> Optional[RealMask]:
        """Sentinel short-circuit result, or ``None`` to build a composite."""
        return None

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    def known_constant(self, *operands: RealMask) -> KnownConstant:
        return self._constant(*(m.known_constant() for m in operands))

    def is_empty(self, *operands: RealMask) -> bool:
        if self.known_constant(*operands) is _EMPTY:
            return True
        interval = self.bounding_interval(*operands)
        if interval is not None and interval.is_empty():
            return True
        return self._is_empty(*operands)

    def is_all(self, *operands: RealMask) -> bool:
        if self.known_constant(*operands) is _ALL:
            return True
        return self._is_all(*operands)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def check(self, *operands: RealMask) -> None:
        if len(operands) != self.arity:
            raise TypeError(f"{self} takes {self.arity} operand(s), got {len(operands)}")
        check_dimensions(operands)

    def apply(self, *operands: RealMask) -> RealMask:
        """Combine *operands*, short-circuiting sentinel cases."""
        self.check(*operands)
        result = self.simplify(*operands)
        if result is not None:
            logger.debug("%s short-circuited to %r", self, result)
            return result
        if self.arity == 2:
            node: RealMask = BinaryCompositeMask(self, *operands)
        else:
            node = UnaryCompositeMask(self, *operands)
        logger.debug("built %s node over %d-D operands", self, node.num_dimensions())
        return node

    def __repr__(self) -> str:
        return self.kind.name


# ===========================================================================
# Binary operators
# ===========================================================================

class AndOperator(MaskOperator):
    kind = OperatorKind.AND
    arity = 2

    def predicate(self, a: _Contains, b: _Contains) -> _Contains:
        return lambda p: np.logical_and(a(p), b(p))

    def boundary_type(self, a: RealMask, b: RealMask) -> BoundaryType:
        return combine_boundary_types(a.boundary_type(), b.boundary_type())

    def bounding_interval(self, a: RealMask, b: RealMask) -> Optional[RealInterval]:
        ia = a.bounding_interval()
        ib = b.bounding_interval()
        if ia is None:
            return ib
        if ib is None:
            return ia
        return intersect_intervals(ia, ib)

    def _constant(self, k0: KnownConstant, k1: KnownConstant) -> KnownConstant:
        if _EMPTY in (k0, k1):
            return _EMPTY
        if k0 is _ALL and k1 is _ALL:
            return _ALL
        return _NONE

    def _is_empty(self, a: RealMask, b: RealMask) -> bool:
        return a.is_empty() or b.is_empty()

    def _is_all(self, a: RealMask, b: RealMask) -> bool:
        return a.is_all() and b.is_all()

    def simplify(self, a: RealMask, b: RealMask) -> Optional[RealMask]:
        k0, k1 = a.known_constant(), b.known_constant()
        if k0 is _EMPTY:
            return a
        if k1 is _EMPTY:
            return b
        if k0 is _ALL:
            return b
        if k1 is _ALL:
            return a
        return None


class OrOperator(MaskOperator):
    kind = OperatorKind.OR
    arity = 2

    def predicate(self, a: _Contains, b: _Contains) -> _Contains:
        return lambda p: np.logical_or(a(p), b(p))

    def boundary_type(self, a: RealMask, b: RealMask) -> BoundaryType:
        return combine_boundary_types(a.boundary_type(), b.boundary_type())

    def bounding_interval(self, a: RealMask, b: RealMask) -> Optional[RealInterval]:
        ia = a.bounding_interval()
        ib = b.bounding_interval()
        if ia is None or ib is None:
            return None
        return union_intervals(ia, ib)

    def _constant(self, k0: KnownConstant, k1: KnownConstant) -> KnownConstant:
        if _ALL in (k0, k1):
            return _ALL
        if k0 is _EMPTY and k1 is _EMPTY:
            return _EMPTY
        return _NONE

    def _is_empty(self, a: RealMask, b: RealMask) -> bool:
        return a.is_empty() and b.is_empty()

    def _is_all(self, a: RealMask, b: RealMask) -> bool:
        return a.is_all() or b.is_all()

    def simplify(self, a: RealMask, b: RealMask) -> Optional[RealMask]:
        k0, k1 = a.known_constant(), b.known_constant()
        if k0 is _ALL:
            return a
        if k1 is _ALL:
            return b
        if k0 is _EMPTY:
            return b
        if k1 is _EMPTY:
            return a
        return None


class XorOperator(MaskOperator):
    kind = OperatorKind.XOR
    arity = 2

    def predicate(self, a: _Contains, b: _Contains) -> _Contains:
        return lambda p: np.logical_xor(a(p), b(p))

    def boundary_type(self, a: RealMask, b: RealMask) -> BoundaryType:
        return BoundaryType.UNSPECIFIED

    def bounding_interval(self, a: RealMask, b: RealMask) -> Optional[RealInterval]:
        ia = a.bounding_interval()
        ib = b.bounding_interval()
        if ia is None or ib is None:
            return None
        return union_intervals(ia, ib)

    def _constant(self, k0: KnownConstant, k1: KnownConstant) -> KnownConstant:
        if k0 is _NONE or k1 is _NONE:
            return _NONE
        return _EMPTY if k0 is k1 else _ALL

    def _is_empty(self, a: RealMask, b: RealMask) -> bool:
        if a.is_empty() and b.is_empty():
            return True
        if a.is_all() and b.is_all():
            return True
        return bool(a == b)

    def _is_all(self, a: RealMask, b: RealMask) -> bool:
        return (a.is_all() and b.is_empty()) or (a.is_empty() and b.is_all())

    def simplify(self, a: RealMask, b: RealMask) -> Optional[RealMask]:
        k0, k1 = a.known_constant(), b.known_constant()
        if k0 is _EMPTY:
            return b
        if k1 is _EMPTY:
            return a
        if k0 is _ALL:
            return NEGATE.apply(b)
        if k1 is _ALL:
            return NEGATE.apply(a)
        return None


class SubtractOperator(MaskOperator):
    kind = OperatorKind.SUBTRACT
    arity = 2

    def predicate(self, a: _Contains, b: _Contains) -> _Contains:
        return lambda p: np.logical_and(a(p), np.logical_not(b(p)))

    def boundary_type(self, a: RealMask, b: RealMask) -> BoundaryType:
        return combine_boundary_types(a.boundary_type(), b.boundary_type().flip())

    def bounding_interval(self, a: RealMask, b: RealMask) -> Optional[RealInterval]:
        return a.bounding_interval()

    def _constant(self, k0: KnownConstant, k1: KnownConstant) -> KnownConstant:
        if k0 is _EMPTY or k1 is _ALL:
            return _EMPTY
        if k0 is _ALL and k1 is _EMPTY:
            return _ALL
        return _NONE

    def _is_empty(self, a: RealMask, b: RealMask) -> bool:
        return a.is_empty() or b.is_all() or bool(a == b)

    def _is_all(self, a: RealMask, b: RealMask) -> bool:
        return a.is_all() and b.is_empty()

    def simplify(self, a: RealMask, b: RealMask) -> Optional[RealMask]:
        k0, k1 = a.known_constant(), b.known_constant()
        if k1 is _EMPTY:
            return a
        if k1 is _ALL:
            # stays a node: empty, but keeps a's own interval
            return None
        if k0 is _ALL:
            return NEGATE.apply(b)
        if k0 is _EMPTY:
            return a
        return None


# ===========================================================================
# Unary operators
# ===========================================================================

class NegateOperator(MaskOperator):
    """Complement.

    The complement of a bounded region is unbounded, so a negation only
    has a bounding interval when it is known to be empty (NEGATE of an
    ALL-flavoured mask) or when it undoes another negation.
    """

    kind = OperatorKind.NEGATE
    arity = 1

    def predicate(self, a: _Contains) -> _Contains:
        return lambda p: np.logical_not(a(p))

    def boundary_type(self, a: RealMask) -> BoundaryType:
        return a.boundary_type().flip()

    def bounding_interval(self, a: RealMask) -> Optional[RealInterval]:
        if a.known_constant() is _ALL:
            return RealInterval.empty(a.num_dimensions())
        if isinstance(a, UnaryCompositeMask) and a.operator is self:
            return a.arg0.bounding_interval()
        return None

    def _constant(self, k0: KnownConstant) -> KnownConstant:
        return k0.flip()

    def _is_empty(self, a: RealMask) -> bool:
        return a.is_all()

    def _is_all(self, a: RealMask) -> bool:
        return a.is_empty()


class TransformOperator(MaskOperator):
    """Pull a mask back through *transform_to_source*.

    A point ``p`` of the result is a member iff
    ``operand.test(transform_to_source.apply(p))``.
    """

    kind = OperatorKind.TRANSFORM
    arity = 1

    def __init__(self, transform_to_source) -> None:
        if not callable(getattr(transform_to_source, "apply", None)):
            raise TypeError("transform must provide an apply(points) method")
        self._transform = transform_to_source

    @property
    def transform_to_source(self):
        return self._transform

    def check(self, *operands: RealMask) -> None:
        super().check(*operands)
        n = operands[0].num_dimensions()
        dims = getattr(self._transform, "num_dimensions", None)
        if dims is None:
            return
        tn = dims()
        if tn != n:
            raise DimensionalityError(f"{tn}-D transform applied to a {n}-D mask")

    def predicate(self, a: _Contains) -> _Contains:
        transform = self._transform
        return lambda p: a(transform.apply(p))

    def boundary_type(self, a: RealMask) -> BoundaryType:
        return a.boundary_type()

    def bounding_interval(self, a: RealMask) -> Optional[RealInterval]:
        interval = a.bounding_interval()
        if interval is None:
            return None
        t = self._transform
        if not getattr(t, "is_affine", False) or not t.is_invertible():
            return None
        return transform_interval(interval, t.inverse())

    def _constant(self, k0: KnownConstant) -> KnownConstant:
        return k0

    def _is_empty(self, a: RealMask) -> bool:
        return a.is_empty()

    def _is_all(self, a: RealMask) -> bool:
        return a.is_all()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransformOperator):
            return NotImplemented
        return self._transform is other._transform or bool(self._transform == other._transform)

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        return f"TRANSFORM({self._transform!r})"


# ===========================================================================
# Registry
# ===========================================================================

AND = AndOperator()
OR = OrOperator()
XOR = XorOperator()
SUBTRACT = SubtractOperator()
NEGATE = NegateOperator()

OPERATORS: Dict[OperatorKind, Union[MaskOperator, Type[TransformOperator]]] = {
    OperatorKind.AND: AND,
    OperatorKind.OR: OR,
    OperatorKind.XOR: XOR,
    OperatorKind.SUBTRACT: SUBTRACT,
    OperatorKind.NEGATE: NEGATE,
    OperatorKind.TRANSFORM: TransformOperator,
}


def operator_for(kind: Union[OperatorKind, str]) -> Union[MaskOperator, Type[TransformOperator]]:
    """Look up the operator for *kind* (TRANSFORM yields the class)."""
    try:
        return OPERATORS[OperatorKind(kind)]
    except ValueError:
        raise KeyError(f"unknown operator kind {kind!r}") from None
