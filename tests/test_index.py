import pytest

from module_bases import (ADJOINED, ALEPH_0, AbstractIndexSet, Cardinal, ExtendedIndexSet, FiniteIndexSet,
                          NaturalNumbers, PreconditionViolation)

from .conftest import tagged_index_set


def test_cardinal_ordering():
    assert Cardinal.finite(0) < Cardinal.finite(3) < ALEPH_0 < Cardinal.aleph(1)
    assert Cardinal.aleph(0) == ALEPH_0
    assert max(Cardinal.finite(10**6), ALEPH_0) == ALEPH_0


def test_cardinal_arithmetic():
    assert Cardinal.finite(2) + Cardinal.finite(3) == Cardinal.finite(5)
    assert Cardinal.finite(2) * Cardinal.finite(3) == Cardinal.finite(6)
    assert ALEPH_0 + Cardinal.finite(1) == ALEPH_0
    assert ALEPH_0 * Cardinal.finite(5) == ALEPH_0
    assert Cardinal.finite(0) * ALEPH_0 == Cardinal.finite(0)
    assert Cardinal.aleph(1) * ALEPH_0 == Cardinal.aleph(1)


def test_cardinal_display_and_validation():
    assert str(ALEPH_0) == "ℵ0"
    assert str(Cardinal.finite(4)) == "4"
    with pytest.raises(ValueError):
        Cardinal()
    with pytest.raises(ValueError):
        Cardinal(count=1, aleph=0)
    with pytest.raises(ValueError):
        Cardinal.finite(-1)


def test_natural_numbers():
    naturals = NaturalNumbers()
    assert naturals.is_infinite
    assert naturals.cardinality == ALEPH_0
    assert 0 in naturals and 7 in naturals
    assert -1 not in naturals and True not in naturals and "a" not in naturals
    assert naturals.sample(3) == [0, 1, 2]
    assert naturals.pick_outside({0, 1, 2, 5}) == 3
    assert naturals.pick_outside(set()) == 0


def test_finite_index_set():
    labels = FiniteIndexSet(["a", "b", "a", "c"])
    assert list(labels) == ["a", "b", "c"]
    assert labels.cardinality == Cardinal.finite(3)
    assert labels.pick_outside({"a"}) == "b"
    assert labels.pick_outside({"a", "b", "c"}) is None


def test_abstract_index_set_must_be_infinite():
    with pytest.raises(PreconditionViolation):
        AbstractIndexSet("small", Cardinal.finite(3), lambda x: True, lambda taken: 0)


def test_abstract_index_set_checks_its_oracle():
    broken = AbstractIndexSet("broken", ALEPH_0, lambda x: isinstance(x, int), lambda taken: 0)
    with pytest.raises(PreconditionViolation):
        broken.pick_outside({0})
    with pytest.raises(PreconditionViolation):
        broken.sample(2)


def test_tagged_index_set():
    reals = tagged_index_set("r", Cardinal.aleph(1))
    assert ("r", 3) in reals
    assert ("s", 3) not in reals
    assert reals.sample(2) == [("r", 0), ("r", 1)]
    assert reals.pick_outside({("r", 0), ("r", 4)}) == ("r", 5)


def test_extended_index_set():
    base = FiniteIndexSet(["a", "b", "c"])
    extended = ExtendedIndexSet(base)
    assert extended.cardinality == Cardinal.finite(4)
    assert ADJOINED in extended and "a" in extended
    assert list(extended)[0] is ADJOINED
    assert extended.pick_outside(set()) is ADJOINED
    assert extended.pick_outside({ADJOINED, "a"}) == "b"
    assert extended.label is ADJOINED


def test_extending_twice_takes_a_fresh_label():
    once = ExtendedIndexSet(FiniteIndexSet(["a"]))
    twice = ExtendedIndexSet(once)
    assert twice.label != ADJOINED
    assert repr(twice.label) == "ADJOINED_1"
    assert twice.cardinality == Cardinal.finite(3)
    assert list(twice) == [twice.label, ADJOINED, "a"]
    assert twice.pick_outside({twice.label}) is ADJOINED
    assert ExtendedIndexSet(twice).label not in twice


def test_extended_infinite_index_set():
    extended = ExtendedIndexSet(NaturalNumbers())
    assert extended.cardinality == ALEPH_0
    assert extended.sample(3) == [ADJOINED, 0, 1]
