"""
realmask — N-dimensional Mask Composition Algebra
=================================================

A library for building regions of N-dimensional real space out of simple
shapes with boolean and coordinate-transform operators.  Composite masks
are live: they hold references to their operands and re-evaluate on every
query, so moving a shape moves every mask built from it.

Implemented features
--------------------
- Primitive shapes: boxes, spheres, ellipsoids (open and closed), 2-D
  polygons, line segments
- Boolean operations: AND, OR, XOR, SUBTRACT, NEGATE (``&``, ``|``, ``^``,
  ``-``, ``~``)
- Transforms: affine (translate, scale, rotate, shear) and arbitrary
  function transforms
- Derived facts: boundary type, bounding interval, emptiness, ALL / EMPTY
  sentinels with short-circuiting
- Raster sampling: :func:`rasterize`, :func:`sample_mask`

Quick start
-----------
::

    from realmask import ClosedBox, OpenBox, sample_mask

    box1 = ClosedBox([1, 3], [7, 10])
    box2 = OpenBox([3, 3], [12, 13])
    both = box1 & box2

    both.test([4, 5])            # True
    both.bounding_interval()     # RealInterval(min=[3, 3], max=[7, 10])

    image = sample_mask(both, ((0.0, 14.0), (0.0, 14.0)), (256, 256))
"""

from ._common import (
    BoundaryType,
    KnownConstant,
    RealInterval,
    intersect_intervals,
    union_intervals,
    transform_interval,
    combine_boundary_types,
)

from .errors import (
    MaskError,
    DimensionalityError,
    UnboundedMaskError,
)

from .mask import (
    RealMask,
    AllMask,
    EmptyMask,
    PredicateMask,
    all_mask,
    empty_mask,
)

from .composite import (
    CompositeMask,
    BinaryCompositeMask,
    UnaryCompositeMask,
)

from .operators import (
    OperatorKind,
    MaskOperator,
    TransformOperator,
    AND,
    OR,
    XOR,
    SUBTRACT,
    NEGATE,
    OPERATORS,
    operator_for,
)

from .transform import (
    AffineTransform,
    FunctionTransform,
    INVERTIBILITY_TOLERANCE,
)

from .geometry import (
    Shape,
    ClosedBox,
    OpenBox,
    ClosedSphere,
    OpenSphere,
    ClosedEllipsoid,
    OpenEllipsoid,
    Polygon2D,
    Line,
    LINE_TOLERANCE,
)

from .grid import rasterize, sample_mask, save_npy

from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    # Enums and intervals
    "BoundaryType",
    "KnownConstant",
    "RealInterval",
    "intersect_intervals",
    "union_intervals",
    "transform_interval",
    "combine_boundary_types",

    # Errors
    "MaskError",
    "DimensionalityError",
    "UnboundedMaskError",

    # Masks
    "RealMask",
    "AllMask",
    "EmptyMask",
    "PredicateMask",
    "all_mask",
    "empty_mask",
    "CompositeMask",
    "BinaryCompositeMask",
    "UnaryCompositeMask",

    # Operators
    "OperatorKind",
    "MaskOperator",
    "TransformOperator",
    "AND",
    "OR",
    "XOR",
    "SUBTRACT",
    "NEGATE",
    "OPERATORS",
    "operator_for",

    # Transforms
    "AffineTransform",
    "FunctionTransform",
    "INVERTIBILITY_TOLERANCE",

    # Shapes
    "Shape",
    "ClosedBox",
    "OpenBox",
    "ClosedSphere",
    "OpenSphere",
    "ClosedEllipsoid",
    "OpenEllipsoid",
    "Polygon2D",
    "Line",
    "LINE_TOLERANCE",

    # Grid utilities
    "rasterize",
    "sample_mask",
    "save_npy",

    # Logging
    "setup_logging",
]
