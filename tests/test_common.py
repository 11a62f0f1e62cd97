"""Tests for the shared enums, intervals and helpers in realmask._common."""

import numpy as np
import numpy.testing as npt
import pytest

from realmask import (
    AffineTransform, FunctionTransform,
    BoundaryType, KnownConstant, RealInterval,
    DimensionalityError, MaskError,
    combine_boundary_types, intersect_intervals, union_intervals, transform_interval,
)


class TestBoundaryType:
    def test_flip(self):
        assert BoundaryType.OPEN.flip() is BoundaryType.CLOSED
        assert BoundaryType.CLOSED.flip() is BoundaryType.OPEN
        assert BoundaryType.UNSPECIFIED.flip() is BoundaryType.UNSPECIFIED

    @pytest.mark.parametrize("t0,t1,expected", [
        (BoundaryType.OPEN, BoundaryType.OPEN, BoundaryType.OPEN),
        (BoundaryType.CLOSED, BoundaryType.CLOSED, BoundaryType.CLOSED),
        (BoundaryType.OPEN, BoundaryType.CLOSED, BoundaryType.UNSPECIFIED),
        (BoundaryType.CLOSED, BoundaryType.UNSPECIFIED, BoundaryType.UNSPECIFIED),
        (BoundaryType.UNSPECIFIED, BoundaryType.UNSPECIFIED, BoundaryType.UNSPECIFIED),
    ])
    def test_combine(self, t0, t1, expected):
        assert combine_boundary_types(t0, t1) is expected


class TestKnownConstant:
    def test_flip(self):
        assert KnownConstant.ALL.flip() is KnownConstant.EMPTY
        assert KnownConstant.EMPTY.flip() is KnownConstant.ALL
        assert KnownConstant.NONE.flip() is KnownConstant.NONE


class TestRealInterval:
    def test_accessors(self):
        r = RealInterval([1, 2], [3, 5])
        assert r.num_dimensions() == 2
        assert r.real_min(1) == 2
        assert r.real_max(0) == 3
        npt.assert_array_equal(r.min(), [1, 2])
        npt.assert_array_equal(r.max(), [3, 5])

    def test_min_returns_copy(self):
        r = RealInterval([1, 2], [3, 5])
        r.min()[0] = 100
        assert r.real_min(0) == 1

    def test_axis_out_of_range(self):
        with pytest.raises(IndexError):
            RealInterval([1, 2], [3, 5]).real_min(2)

    def test_length_mismatch(self):
        with pytest.raises(DimensionalityError):
            RealInterval([1, 2], [3, 5, 7])

    def test_dimensionality_error_is_value_error(self):
        assert issubclass(DimensionalityError, ValueError)
        assert issubclass(DimensionalityError, MaskError)

    def test_empty(self):
        r = RealInterval.empty(3)
        assert r.is_empty()
        assert not r.contains([0, 0, 0])
        assert not RealInterval([0, 0], [0, 0]).is_empty()

    def test_contains_is_closed(self):
        r = RealInterval([0, 0], [1, 1])
        npt.assert_array_equal(
            r.contains([[0, 0], [1, 1], [0.5, 1.0001]]), [True, True, False]
        )

    def test_corners(self):
        corners = RealInterval([0, 10], [1, 20]).corners()
        assert corners.shape == (4, 2)
        assert {tuple(c) for c in corners.tolist()} == {(0, 10), (0, 20), (1, 10), (1, 20)}

    def test_equality(self):
        assert RealInterval([0, 0], [1, 1]) == RealInterval([0.0, 0.0], [1.0, 1.0])
        assert RealInterval([0, 0], [1, 1]) != RealInterval([0, 0], [1, 2])
        assert hash(RealInterval([0, 0], [1, 1])) == hash(RealInterval([0, 0], [1, 1]))


class TestIntervalPropagation:
    def test_intersect(self):
        r = intersect_intervals(RealInterval([1, 3], [7, 10]), RealInterval([3, 3], [12, 13]))
        assert r == RealInterval([3, 3], [7, 10])

    def test_intersect_disjoint_is_degenerate(self):
        r = intersect_intervals(RealInterval([0, 0], [1, 1]), RealInterval([2, 2], [3, 3]))
        assert r.is_empty()

    def test_union(self):
        r = union_intervals(RealInterval([3, 3], [7, 7]), RealInterval([4, 4], [8, 8]))
        assert r == RealInterval([3, 3], [8, 8])

    def test_mismatched_dimensions(self):
        with pytest.raises(DimensionalityError):
            union_intervals(RealInterval([0], [1]), RealInterval([0, 0], [1, 1]))

    def test_transform(self):
        shear = AffineTransform([[1, 2, 0], [0, 1, 0]])
        r = transform_interval(RealInterval([1, 3], [4, 9]), shear)
        assert r == RealInterval([7, 3], [22, 9])

    def test_transform_empty_stays_empty(self):
        r = transform_interval(RealInterval.empty(2), AffineTransform.translation([1, 1]))
        assert r.is_empty()

    def test_transform_half_infinite(self):
        half = RealInterval([0, -np.inf], [np.inf, 5])
        r = transform_interval(half, AffineTransform([[2, 0, 1], [0, 1, -1]]))
        assert r == RealInterval([1, -np.inf], [np.inf, 4])
        assert not r.is_empty()

    def test_transform_infinite_without_matrix(self):
        half = RealInterval([0, -np.inf], [np.inf, 5])
        assert transform_interval(half, FunctionTransform(2, lambda p: p)) is None
