"""Tests for composite introspection, structural equality and the registry."""

import numpy as np
import pytest

from realmask import (
    AND, OR, XOR, SUBTRACT, NEGATE, OPERATORS,
    AffineTransform,
    BinaryCompositeMask, UnaryCompositeMask, CompositeMask,
    ClosedBox, OpenBox, ClosedSphere, OpenEllipsoid,
    OperatorKind, TransformOperator, operator_for,
)


class TestIntrospection:
    def test_binary_composite(self):
        rm = ClosedBox([1, 3], [7, 10]) & OpenBox([3, 3], [12, 13])
        assert isinstance(rm, BinaryCompositeMask)
        assert isinstance(rm.operand(0), ClosedBox)
        assert isinstance(rm.operand(1), OpenBox)
        assert rm.arg0 is rm.operand(0)
        assert rm.arg1 is rm.operand(1)
        assert rm.operator is AND

    def test_unary_composite(self):
        b = OpenBox([1, 1], [19, 19])
        rm = b.negate()
        assert isinstance(rm, UnaryCompositeMask)
        assert rm.operator is NEGATE
        assert rm.operands[0] is b
        assert len(rm.operands) == 1

    def test_transform_composite(self):
        b = OpenBox([0, 1], [12, 19])
        t = AffineTransform.translation([1, 5])
        i = t.inverse()
        rm = b.transform(i)
        assert isinstance(rm, UnaryCompositeMask)
        assert isinstance(rm.operator, TransformOperator)
        assert rm.operator.kind is OperatorKind.TRANSFORM
        assert isinstance(rm.operands[0], OpenBox)
        r = rm.operator.transform_to_source
        assert isinstance(r, AffineTransform)
        np.testing.assert_array_equal(r.matrix(), i.matrix())

    def test_operand_index_out_of_range(self):
        rm = ClosedBox([0, 0], [1, 1]) | ClosedBox([2, 2], [3, 3])
        with pytest.raises(IndexError):
            rm.operand(2)
        with pytest.raises(IndexError):
            rm.negate().operand(1)

    def test_operands_are_shared_not_copied(self):
        b = ClosedBox([0, 0], [1, 1])
        rm1 = b & ClosedSphere([0, 0], 1)
        rm2 = b | ClosedSphere([5, 5], 1)
        assert rm1.arg0 is rm2.arg0

    def test_wrong_arity_rejected(self):
        with pytest.raises(TypeError):
            AND.apply(ClosedBox([0, 0], [1, 1]))
        with pytest.raises(TypeError):
            UnaryCompositeMask(AND, ClosedBox([0, 0], [1, 1]))


class TestEquality:
    def test_simple_composite_equality(self):
        b = ClosedBox([0, 0], [6, 4])
        b2 = ClosedBox([0, 0], [6, 4])
        s = ClosedSphere([6, 4], 5)
        s2 = ClosedSphere([6, 4], 5)

        a = b & s
        assert a == b2 & s2
        # operand order matters
        assert a != s & b
        assert a != b | s

    def test_nested_composite_equality(self):
        cb, cb2 = ClosedBox([0, 0], [6, 4]), ClosedBox([0, 0], [6, 4])
        cs, cs2 = ClosedSphere([6, 4], 5), ClosedSphere([6, 4], 5)
        oe, oe2 = OpenEllipsoid([10, 10], [2.5, 7]), OpenEllipsoid([10, 10], [2.5, 7])
        ob, ob2 = OpenBox([7, -5], [13.5, 0.5]), OpenBox([7, -5], [13.5, 0.5])

        rm = ob ^ ~(oe | (cb & cs))
        rm2 = ob2 ^ ~(oe2 | (cb2 & cs2))
        rm3 = ob2 ^ ~(oe2 | (cb2 ^ cs2))
        rm4 = ob2 ^ ~(ob2 | (cb2 & cs2))

        assert rm == rm2
        assert rm != rm3
        assert rm != rm4

    def test_equality_follows_operand_mutation(self):
        b = ClosedBox([0, 0], [6, 4])
        rm = b & ClosedSphere([6, 4], 5)
        rm2 = ClosedBox([0, 0], [6, 4]) & ClosedSphere([6, 4], 5)
        assert rm == rm2
        b.move([1, 0])
        assert rm != rm2

    def test_equal_composites_hash_equal(self):
        rm = ClosedBox([0, 0], [6, 4]) - ClosedSphere([6, 4], 5)
        rm2 = ClosedBox([0, 0], [6, 4]) - ClosedSphere([6, 4], 5)
        assert hash(rm) == hash(rm2)

    def test_transform_composites_compare_transforms(self):
        b = ClosedBox([0, 0], [1, 1])
        t1 = b.translate([1, 2])
        t2 = b.translate([1, 2])
        t3 = b.translate([2, 1])
        assert t1 == t2
        assert t1 != t3

    def test_composite_not_equal_to_leaf(self):
        b = ClosedBox([0, 0], [1, 1])
        assert (b & ClosedSphere([0, 0], 1)) != b
        assert not isinstance(b, CompositeMask)


class TestRegistry:
    def test_every_kind_registered(self):
        assert set(OPERATORS) == set(OperatorKind)

    def test_lookup(self):
        assert operator_for(OperatorKind.AND) is AND
        assert operator_for("or") is OR
        assert operator_for("xor") is XOR
        assert operator_for("subtract") is SUBTRACT
        assert operator_for("negate") is NEGATE
        assert operator_for("transform") is TransformOperator

    def test_unknown_kind(self):
        with pytest.raises(KeyError):
            operator_for("nand")

    def test_arities(self):
        for op in (AND, OR, XOR, SUBTRACT):
            assert op.arity == 2
        assert NEGATE.arity == 1
        assert TransformOperator.arity == 1

    def test_repr(self):
        assert repr(AND) == "AND"
        assert repr(NEGATE) == "NEGATE"
