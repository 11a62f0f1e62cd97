"""Tests for AffineTransform and FunctionTransform."""

import numpy as np
import numpy.testing as npt
import pytest

from realmask import AffineTransform, FunctionTransform, DimensionalityError


def _p(*xy) -> np.ndarray:
    """Single point as shape ``(1, n)``."""
    return np.array([list(xy)], dtype=float)


class TestAffineTransform:
    def test_identity(self):
        t = AffineTransform.identity(3)
        npt.assert_array_equal(t.apply(_p(1, 2, 3)), _p(1, 2, 3))
        assert t.num_dimensions() == 3

    def test_homogeneous_form_accepted(self):
        t = AffineTransform([[1, 0, 2], [0, 1, 3], [0, 0, 1]])
        assert t == AffineTransform.translation([2, 3])

    def test_bad_homogeneous_row(self):
        with pytest.raises(ValueError):
            AffineTransform([[1, 0, 2], [0, 1, 3], [1, 0, 1]])

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            AffineTransform([[1, 0, 0, 0], [0, 1, 0, 0]])

    def test_translation(self):
        t = AffineTransform.translation([1, -2])
        npt.assert_array_equal(t(_p(0, 0)), _p(1, -2))
        npt.assert_array_equal(t.translation_vector(), [1, -2])

    def test_scaling(self):
        npt.assert_array_equal(AffineTransform.scaling([2, 3]).apply(_p(1, 1)), _p(2, 3))
        npt.assert_array_equal(AffineTransform.scaling(2, n=2).apply(_p(1, 1)), _p(2, 2))
        with pytest.raises(ValueError):
            AffineTransform.scaling(2)

    def test_rotation_about_center(self):
        t = AffineTransform.rotation_2d(np.pi / 2, center=[1, 1])
        npt.assert_allclose(t.apply(_p(2, 1)), _p(1, 2), atol=1e-12)
        npt.assert_allclose(t.apply(_p(1, 1)), _p(1, 1), atol=1e-12)

    def test_apply_batch_shape(self):
        t = AffineTransform.translation([1, 1])
        assert t.apply(np.zeros((4, 5, 2))).shape == (4, 5, 2)

    def test_apply_wrong_dimension(self):
        with pytest.raises(DimensionalityError):
            AffineTransform.identity(2).apply(_p(1, 2, 3))

    def test_inverse(self):
        t = AffineTransform.from_linear([[2, 0], [0, 4]], [1, 1])
        p = _p(3, -5)
        npt.assert_allclose(t.inverse().apply(t.apply(p)), p)

    def test_inverse_is_linked(self):
        t = AffineTransform.translation([5, 6.25])
        assert t.inverse().inverse() is t

    def test_singular_not_invertible(self):
        t = AffineTransform([[1, 0, 0], [0, 0, 0]])
        assert not t.is_invertible()
        with pytest.raises(ValueError):
            t.inverse()

    def test_concatenate_applies_other_first(self):
        shift = AffineTransform.translation([1, 0])
        double = AffineTransform.scaling([2, 2])
        npt.assert_array_equal(double.concatenate(shift).apply(_p(1, 1)), _p(4, 2))
        npt.assert_array_equal(shift.concatenate(double).apply(_p(1, 1)), _p(3, 2))

    def test_concatenate_dimension_mismatch(self):
        with pytest.raises(DimensionalityError):
            AffineTransform.identity(2).concatenate(AffineTransform.identity(3))

    def test_matrix_is_read_only_copy(self):
        t = AffineTransform.identity(2)
        m = t.matrix()
        m[0, 0] = 5
        assert t.matrix()[0, 0] == 1
        assert t.matrix().shape == (2, 3)

    def test_equality_and_hash(self):
        assert AffineTransform.identity(2) == AffineTransform.translation([0, 0])
        assert hash(AffineTransform.identity(2)) == hash(AffineTransform.translation([0, 0]))
        assert AffineTransform.identity(2) != AffineTransform.translation([0, 1])


class TestFunctionTransform:
    def test_apply(self):
        t = FunctionTransform(2, lambda p: p ** 2)
        npt.assert_array_equal(t.apply(_p(2, 3)), _p(4, 9))
        assert not t.is_affine

    def test_without_inverse(self):
        t = FunctionTransform(2, lambda p: p - 10.0)
        assert not t.is_invertible()
        with pytest.raises(ValueError):
            t.inverse()

    def test_with_inverse(self):
        t = FunctionTransform(1, np.exp, np.log)
        assert t.is_invertible()
        npt.assert_allclose(t.inverse().apply(t.apply(_p(0.5))), _p(0.5))

    @pytest.mark.parametrize("n", [0, -2, True, 2.0])
    def test_bad_dimension_count(self, n):
        with pytest.raises(ValueError):
            FunctionTransform(n, lambda p: p)
