from fractions import Fraction

import pytest

from module_bases import SparseCoefficients


def test_zero_entries_are_dropped(rationals):
    c = SparseCoefficients(rationals, {0: 1, 1: 0, 2: Fraction(1, 2)})
    assert c.support == frozenset({0, 2})
    assert len(c) == 2
    assert c[1] == 0
    assert c["missing"] == 0


def test_arithmetic(rationals):
    a = SparseCoefficients(rationals, {0: 1, 1: 2})
    b = SparseCoefficients(rationals, {1: -2, 5: 3})

    assert (a + b) == SparseCoefficients(rationals, {0: 1, 5: 3})
    assert (a - a).is_zero()
    assert (a + (-a)) == SparseCoefficients.zero(rationals)
    assert a.scale(0).is_zero()
    assert a.scale(Fraction(1, 2)) == SparseCoefficients(rationals, {0: Fraction(1, 2), 1: 1})


def test_characteristic_two_cancels(gf2):
    a = SparseCoefficients.single(gf2, "x")
    assert (a + a).support == frozenset()


def test_single_and_restrict(rationals):
    c = SparseCoefficients.single(rationals, 3, 7)
    assert c.support == frozenset({3})
    assert c[3] == 7

    d = SparseCoefficients(rationals, {0: 1, 1: 1, 2: 1}).restrict([0, 2, 9])
    assert d.support == frozenset({0, 2})


def test_to_dense(rationals):
    c = SparseCoefficients(rationals, {"b": 2})
    assert c.to_dense(["a", "b", "c"]) == [0, 2, 0]


def test_mixed_fields_are_rejected(rationals, gf2):
    with pytest.raises(ValueError):
        SparseCoefficients.single(rationals, 0) + SparseCoefficients.single(gf2, 0)


def test_coefficients_are_unhashable(rationals):
    with pytest.raises(TypeError):
        hash(SparseCoefficients.single(rationals, 0))
