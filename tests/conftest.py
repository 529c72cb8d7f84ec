import itertools

import matplotlib

matplotlib.use("Agg")

import pytest

from module_bases import (AbstractIndexSet, Basis, Cardinal, CoordinateSpace, FiniteField, FreeModule,
                          LinearlyIndependentFamily, NaturalNumbers, Rationals)


def tagged_index_set(tag: str, cardinality: Cardinal) -> AbstractIndexSet:
    """An infinite index set of labels (tag, n); only its countable part is ever sampled."""

    def contains(label):
        return isinstance(label, tuple) and len(label) == 2 and label[0] == tag and isinstance(label[1], int)

    def pick_outside(taken):
        used = [label[1] for label in taken if contains(label)]
        return (tag, max(used, default=-1) + 1)

    return AbstractIndexSet(tag, cardinality, contains, pick_outside,
                            enumerate=lambda: ((tag, n) for n in itertools.count()))


@pytest.fixture
def rationals():
    return Rationals()


@pytest.fixture
def gf2():
    return FiniteField(2)


@pytest.fixture(params=["rationals", "gf5"])
def field(request):
    if request.param == "rationals":
        return Rationals()
    return FiniteField(5)


@pytest.fixture
def q3(rationals):
    return CoordinateSpace(rationals, 3)


@pytest.fixture
def q3_basis(q3):
    return Basis.standard(q3)


@pytest.fixture
def naturals_module(rationals):
    return FreeModule(rationals, NaturalNumbers())


@pytest.fixture
def telescoping(naturals_module):
    return Basis.telescoping(naturals_module)


@pytest.fixture
def units(naturals_module):
    # e_k has telescoping coordinates 1 at labels 0..k, so e_i is the first member using label i
    return LinearlyIndependentFamily(naturals_module, naturals_module.unit, index_set=naturals_module.index_set,
                                     name="units", locate=lambda i: i)
