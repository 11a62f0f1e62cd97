"""Exceptions raised by realmask."""

from __future__ import annotations

__all__ = ["MaskError", "DimensionalityError", "UnboundedMaskError"]


class MaskError(Exception):
    """Base class for realmask errors."""


class DimensionalityError(MaskError, ValueError):
    """Operands, points or transforms disagree on the number of dimensions."""


class UnboundedMaskError(MaskError, TypeError):
    """An interval query was made on a mask without a bounding interval."""
