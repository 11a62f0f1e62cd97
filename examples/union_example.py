"""
Union Example: an open ellipse OR an open circle

Mathematical expectation:
- Ellipse centred (6, 4) with semi-axes (5, 2); circle centred (-2, 4.5) radius 2.5
- Both are open, so the union is OPEN
- Union bounds: [-4.5, 11] x [2, 7]
- (-4.25, 4.5) is inside the circle only -> inside
- (0.5, 4.5) lies exactly on the circle and just left of the ellipse -> outside
- Negating both operands and OR-ing gives an unbounded mask (De Morgan: the
  complement of their intersection)
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np

from realmask import BoundaryType, OpenEllipsoid, OpenSphere, sample_mask


def main():
    ellipse = OpenEllipsoid([6, 4], [5, 2])
    circle = OpenSphere([-2, 4.5], 2.5)
    union = ellipse | circle

    r = union.bounding_interval()
    print("=" * 60)
    print("UNION EXAMPLE: OpenEllipsoid OR OpenSphere")
    print("=" * 60)
    print(f"Boundary type (should be OPEN): {union.boundary_type().name}")
    print(f"Bounds (should be [-4.5, 2] - [11, 7]): {r.min().tolist()} - {r.max().tolist()}")
    print(f"test(-4.25, 4.5) (should be True):  {union.test([-4.25, 4.5])}")
    print(f"test(0.5, 4.5)   (should be False): {union.test([0.5, 4.5])}")

    complement = ~ellipse | ~circle
    grid = ((-6.0, 12.0), (0.0, 9.0))
    res = (180, 90)
    lhs = sample_mask(complement, grid, res)
    rhs = ~sample_mask(ellipse & circle, grid, res)
    print(f"De Morgan holds on a {res[0]}x{res[1]} grid: {np.array_equal(lhs, rhs)}")
    print(f"Complement bounded (should be False): {complement.is_bounded()}")

    success = (
        union.boundary_type() is BoundaryType.OPEN
        and r.min().tolist() == [-4.5, 2.0]
        and r.max().tolist() == [11.0, 7.0]
        and union.test([-4.25, 4.5])
        and not union.test([0.5, 4.5])
        and np.array_equal(lhs, rhs)
        and not complement.is_bounded()
    )
    print("\n" + "=" * 60)
    if success:
        print("✅ UNION TEST PASSED")
    else:
        print("❌ UNION TEST FAILED")
    print("=" * 60)


if __name__ == "__main__":
    main()
