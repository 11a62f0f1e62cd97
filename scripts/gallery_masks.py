"""Render a page of realmask shapes and compositions as binary images.

Usage::

    python scripts/gallery_masks.py                   # saves gallery_masks.png
    python scripts/gallery_masks.py --out my_file.png # custom output path

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np

from realmask import sample_mask

# ---------------------------------------------------------------------------
# Mask catalogue: (label, mask)
# ---------------------------------------------------------------------------

def _make_masks() -> list[tuple[str, object]]:
    from realmask import (
        ClosedBox, OpenBox, ClosedSphere, ClosedEllipsoid, Polygon2D, Line,
        AffineTransform,
    )

    box = ClosedBox([-0.6, -0.4], [0.4, 0.5])
    disk = ClosedSphere([0.2, 0.1], 0.5)
    ellipse = ClosedEllipsoid([0.0, 0.0], [0.8, 0.35])
    tri = Polygon2D([[-0.7, -0.6], [0.0, 0.8], [0.7, -0.6]])
    shear = AffineTransform([[1.0, 0.6, 0.0], [0.0, 1.0, 0.0]])

    masks = [
        ("ClosedBox",            box),
        ("ClosedSphere",         disk),
        ("ClosedEllipsoid",      ellipse),
        ("Polygon2D",            tri),
        ("Line",                 Line([-0.8, -0.8], [0.8, 0.8], tolerance=0.02)),
        ("box & disk",           box & disk),
        ("box | disk",           box | disk),
        ("box ^ disk",           box ^ disk),
        ("box - disk",           box - disk),
        ("~disk",                ~disk),
        ("tri - ellipse",        tri - ellipse),
        ("ellipse.rotate(45°)",  ellipse.rotate(np.pi / 4)),
        ("box sheared",          box.transform(shear.inverse())),
        ("disk.translate",       disk.translate([-0.4, 0.3])),
        ("OpenBox ^ tri",        OpenBox([-0.3, -0.3], [0.3, 0.3]) ^ tri),
    ]
    return masks


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

_BOUNDS = ((-1.0, 1.0), (-1.0, 1.0))
_RES    = (256, 256)
_EXTENT = [-1, 1, -1, 1]


def render_gallery(masks: list[tuple[str, object]], out_path: str, ncols: int = 5) -> None:
    nrows = (len(masks) + ncols - 1) // ncols
    fig, axes = plt.subplots(
        nrows, ncols,
        figsize=(ncols * 3.2, nrows * 3.2),
        facecolor="#111111",
    )
    axes = np.asarray(axes).ravel()

    for ax, (label, mask) in zip(axes, masks):
        image = sample_mask(mask, _BOUNDS, _RES)
        ax.set_facecolor("#111111")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(label, color="white", fontsize=7, pad=3)
        for spine in ax.spines.values():
            spine.set_edgecolor("#444444")

        ax.imshow(image.astype(float), origin="lower", extent=_EXTENT, cmap="gray",
                  vmin=0, vmax=1, interpolation="nearest")

        interval = mask.bounding_interval()
        if interval is not None and not interval.is_empty():
            (x0, y0), (x1, y1) = interval.min(), interval.max()
            ax.plot([x0, x1, x1, x0, x0], [y0, y0, y1, y1, y0],
                    color="#ff5555", linewidth=0.8)
        ax.set_xlim(_EXTENT[0], _EXTENT[1])
        ax.set_ylim(_EXTENT[2], _EXTENT[3])

    # Hide unused axes
    for ax in axes[len(masks):]:
        ax.set_visible(False)

    fig.suptitle("realmask — Mask Composition Gallery (red: bounding interval)",
                 color="white", fontsize=13, y=1.002)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=200, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render realmask shapes and compositions to a PNG gallery.")
    parser.add_argument("--out", default="gallery_masks.png", help="Output PNG path")
    parser.add_argument("--cols", type=int, default=5, help="Number of columns (default 5)")
    args = parser.parse_args()

    render_gallery(_make_masks(), args.out, ncols=args.cols)


if __name__ == "__main__":
    main()
