"""Tests for realmask grid utilities."""

import os

import numpy as np
import numpy.testing as npt
import pytest

from realmask import (
    ClosedBox, ClosedSphere, DimensionalityError,
    rasterize, sample_mask, save_npy,
)


class TestRasterize:
    def test_dimension_order(self):
        b = ClosedBox([0, 0], [2, 0])
        img = rasterize(b, (4, 2))
        assert img.shape == (4, 2)
        npt.assert_array_equal(img[:, 0], [True, True, True, False])
        assert not img[:, 1].any()

    def test_origin_and_spacing(self):
        s = ClosedSphere([10, 10], 1)
        img = rasterize(s, (3, 3), origin=[9, 9], spacing=[1, 1])
        expected = np.array([
            [False, True, False],
            [True, True, True],
            [False, True, False],
        ])
        npt.assert_array_equal(img, expected)

    def test_three_dimensional(self):
        s = ClosedSphere([1, 1, 1], 0.5)
        img = rasterize(s, (3, 3, 3))
        assert img.shape == (3, 3, 3)
        assert img.sum() == 1
        assert img[1, 1, 1]

    def test_shape_length_mismatch(self):
        with pytest.raises(DimensionalityError):
            rasterize(ClosedSphere([0, 0], 1), (3, 3, 3))

    def test_follows_mutation(self):
        b = ClosedBox([0, 0], [1, 1])
        before = rasterize(b, (4, 4))
        b.move([2, 2])
        after = rasterize(b, (4, 4))
        assert before[0, 0] and not after[0, 0]
        assert after[3, 3] and not before[3, 3]


class TestSampleMask:
    def test_output_shape_reversed(self):
        s = ClosedSphere([0, 0], 0.3)
        img = sample_mask(s, ((-1, 1), (-1, 1)), (16, 32))
        assert img.shape == (32, 16)
        assert img.dtype == bool

    def test_cell_centred_at_origin(self):
        s = ClosedSphere([0, 0], 0.02)
        img = sample_mask(s, ((-1, 1), (-1, 1)), (65, 65))
        assert img[32, 32]
        assert img.sum() == 1

    def test_row_major_y_first(self):
        # thin box along x at the top of the domain
        b = ClosedBox([-1, 0.5], [1, 1])
        img = sample_mask(b, ((-1, 1), (-1, 1)), (8, 8))
        assert img[-1].all()
        assert not img[0].any()

    def test_three_dimensional_shape(self):
        s = ClosedSphere([0, 0, 0], 0.5)
        img = sample_mask(s, ((-1, 1), (-1, 1), (-1, 1)), (4, 6, 8))
        assert img.shape == (8, 6, 4)

    def test_bounds_mismatch(self):
        with pytest.raises(DimensionalityError):
            sample_mask(ClosedSphere([0, 0], 1), ((-1, 1),), (4, 4))


class TestSaveNpy:
    def test_creates_parent_dirs(self, tmp_path):
        img = sample_mask(ClosedSphere([0, 0], 0.5), ((-1, 1), (-1, 1)), (8, 8))
        path = os.path.join(tmp_path, "nested", "dir", "mask.npy")
        save_npy(path, img)
        npt.assert_array_equal(np.load(path), img)
