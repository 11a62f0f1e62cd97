"""Raster sampling utilities for masks."""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from ._common import as_vector
from .errors import DimensionalityError
from .mask import RealMask

logger = logging.getLogger(__name__)

_Bool = npt.NDArray[np.bool_]
_Bounds = Sequence[Tuple[float, float]]

__all__ = ["rasterize", "sample_mask", "save_npy"]


def rasterize(
    mask: RealMask,
    shape: Sequence[int],
    origin: Optional[Sequence[float]] = None,
    spacing: Optional[Sequence[float]] = None,
) -> _Bool:
    """Evaluate *mask* at the nodes of a regular grid.

    Parameters
    ----------
    mask:
        Any :class:`RealMask`.
    shape:
        Number of samples along each dimension, in dimension order.
    origin:
        Coordinates of sample ``(0, ..., 0)``.  Defaults to the origin.
    spacing:
        Distance between neighbouring samples per dimension.  Defaults to 1.

    Returns
    -------
    numpy.ndarray
        Boolean array of shape *shape*; element ``idx`` is
        ``mask.test(origin + idx * spacing)``.
    """
    n = mask.num_dimensions()
    if len(shape) != n:
        raise DimensionalityError(f"shape has {len(shape)} entries, mask has {n} dimensions")
    o = np.zeros(n) if origin is None else as_vector(origin, n, "origin")
    h = np.ones(n) if spacing is None else as_vector(spacing, n, "spacing")

    axes = [o[d] + h[d] * np.arange(shape[d]) for d in range(n)]
    p = np.stack(np.meshgrid(*axes, indexing="ij"), axis=-1)
    logger.debug("rasterizing %d-D mask on grid %s", n, tuple(shape))
    return mask.contains(p)


def sample_mask(
    mask: RealMask,
    bounds: _Bounds,
    resolution: Sequence[int],
) -> _Bool:
    """Sample *mask* on a uniform cell-centred grid.

    Parameters
    ----------
    mask:
        A mask whose ``contains()`` accepts ``(..., n)`` arrays.
    bounds:
        ``((x0, x1), (y0, y1), ...)`` physical extents of the domain.
    resolution:
        ``(nx, ny, ...)`` number of cells along each axis.

    Returns
    -------
    numpy.ndarray
        Boolean array with the axes reversed (``(ny, nx)`` in 2-D,
        ``(nz, ny, nx)`` in 3-D), row-major like an image.
    """
    n = mask.num_dimensions()
    if len(bounds) != n or len(resolution) != n:
        raise DimensionalityError(
            f"bounds and resolution need {n} entries, got {len(bounds)} and {len(resolution)}"
        )
    centres = []
    for (lo, hi), cells in zip(bounds, resolution):
        centres.append(np.linspace(lo, hi, cells, endpoint=False) + (hi - lo) / (2.0 * cells))

    grids = np.meshgrid(*reversed(centres), indexing="ij")
    p = np.stack(grids[::-1], axis=-1)
    return mask.contains(p)


def save_npy(path: str, image: npt.NDArray) -> None:
    """Save *image* to *path* (creates parent directories if needed)."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.save(path, image)
