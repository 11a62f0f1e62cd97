"""
Subtraction Example: a sphere with a triangular bite taken out

Mathematical expectation:
- Base: closed sphere at (10, 2) radius 5.5
- Cutter: triangle (5, 0), (10, 5), (15, 0)
- Subtraction keeps base points outside the cutter:
  - (14, 1.5) is in the sphere, outside the triangle -> inside
  - (10, 2) is in both -> outside (hole)
- Bounding interval is the base's: [4.5, 15.5] x [-3.5, 7.5]
- Moving the cutter down by 5 reopens (10, 2) but leaves the bounds alone
- Moving the base to (26, 3) shifts the bounds to [20.5, 31.5] x [-2.5, 8.5]
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from realmask import ClosedSphere, Polygon2D


def main():
    base = ClosedSphere([10, 2], 5.5)
    cutter = Polygon2D([[5, 0], [10, 5], [15, 0]])
    diff = base - cutter

    def bounds():
        r = diff.bounding_interval()
        return r.min().tolist(), r.max().tolist()

    print("=" * 60)
    print("SUBTRACTION EXAMPLE: Sphere minus triangle")
    print("=" * 60)
    print(f"test(14, 1.5) (should be True):  {diff.test([14, 1.5])}")
    print(f"test(10, 2)   (should be False): {diff.test([10, 2])}")
    print(f"Bounds (should be [4.5, -3.5] - [15.5, 7.5]): {bounds()}")

    ok = diff.test([14, 1.5]) and not diff.test([10, 2])
    ok = ok and bounds() == ([4.5, -3.5], [15.5, 7.5])

    cutter.move([0, -5])
    print(f"After moving cutter, test(10, 2) (should be True): {diff.test([10, 2])}")
    print(f"Bounds unchanged: {bounds()}")
    ok = ok and diff.test([10, 2]) and bounds() == ([4.5, -3.5], [15.5, 7.5])

    base.set_center([26, 3])
    print(f"After moving base, bounds (should be [20.5, -2.5] - [31.5, 8.5]): {bounds()}")
    ok = ok and bounds() == ([20.5, -2.5], [31.5, 8.5])

    print("\n" + "=" * 60)
    if ok:
        print("✅ SUBTRACTION TEST PASSED")
    else:
        print("❌ SUBTRACTION TEST FAILED")
    print("=" * 60)


if __name__ == "__main__":
    main()
