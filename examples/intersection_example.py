"""
Intersection Example: a closed box AND an open box

Mathematical expectation:
- box1 = closed [1, 7] x [3, 10], box2 = open (3, 12) x (3, 13)
- Intersection keeps points in both:
  - (4, 5) is strictly inside both -> inside
  - (7, 10) is a corner of box1 (closed) and inside box2 -> inside
  - (3, 3) is a corner of box2 (open) -> outside
- Boundary type: CLOSED and OPEN disagree -> UNSPECIFIED
- Bounding interval: [3, 7] x [3, 10]
- Moving box1 by (1.5, 3) updates the intersection without rebuilding it
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np

from realmask import BoundaryType, ClosedBox, OpenBox, sample_mask


def main():
    box1 = ClosedBox([1, 3], [7, 10])
    box2 = OpenBox([3, 3], [12, 13])
    inter = box1 & box2

    interval = inter.bounding_interval()
    image = sample_mask(inter, ((0.0, 14.0), (0.0, 14.0)), (140, 140))

    print("=" * 60)
    print("INTERSECTION EXAMPLE: ClosedBox AND OpenBox")
    print("=" * 60)
    print(f"test(4, 5)  (should be True):  {inter.test([4, 5])}")
    print(f"test(7, 10) (should be True):  {inter.test([7, 10])}")
    print(f"test(3, 3)  (should be False): {inter.test([3, 3])}")
    print(f"Boundary type (should be UNSPECIFIED): {inter.boundary_type().name}")
    print(f"Bounding interval (should be [3, 3] - [7, 10]): "
          f"{interval.min().tolist()} - {interval.max().tolist()}")
    print(f"Sampled cells inside: {int(image.sum())}")

    # Pixel area vs analytic area of [3, 7] x [3, 10]
    cell_area = (14.0 / 140) ** 2
    area = image.sum() * cell_area
    print(f"Sampled area (should be ~28): {area:.3f}")

    box1.move([1.5, 3])
    moved = inter.bounding_interval()
    print(f"After moving box1 (should be [3, 6] - [8.5, 13]): "
          f"{moved.min().tolist()} - {moved.max().tolist()}")

    success = (
        inter.test([5, 7])
        and inter.boundary_type() is BoundaryType.UNSPECIFIED
        and np.isclose(area, 28.0, atol=0.5)
        and moved.min().tolist() == [3.0, 6.0]
        and moved.max().tolist() == [8.5, 13.0]
    )
    print("\n" + "=" * 60)
    if success:
        print("✅ INTERSECTION TEST PASSED")
    else:
        print("❌ INTERSECTION TEST FAILED")
    print("=" * 60)


if __name__ == "__main__":
    main()
