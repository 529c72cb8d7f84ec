import pytest

from module_bases import (ADJOINED, Basis, LinearlyIndependentFamily, LogicInconsistency, MaximalityChecker,
                          NaturalNumbers, PreconditionViolation, supports_cover_all)


def family_of(space, *rows):
    return LinearlyIndependentFamily(space, {i: space.element(row) for i, row in enumerate(rows)})


def test_maximal_family_covers(q3, q3_basis):
    family = family_of(q3, [1, 0, 0], [0, 1, 0], [0, 0, 1])
    assert supports_cover_all(q3_basis, family, maximal=True)
    assert MaximalityChecker(q3_basis).is_maximal(family)


def test_non_maximal_family_does_not_cover(q3, q3_basis):
    assert not supports_cover_all(q3_basis, family_of(q3, [1, 0, 0]), maximal=False)


def test_false_maximality_claim_exhibits_extension(q3, q3_basis):
    family = family_of(q3, [1, 0, 0])
    with pytest.raises(LogicInconsistency) as excinfo:
        supports_cover_all(q3_basis, family, maximal=True)

    extension = excinfo.value.extension
    assert excinfo.value.witness in {1, 2}
    assert extension.label == excinfo.value.witness
    assert extension.family.is_independent(q3_basis)
    assert len(extension.family.members()) == 2
    assert not family.contains_element(extension.vector)
    assert q3.equal(extension.family.vector(ADJOINED), q3_basis.to_module(extension.label))


def test_covering_family_can_still_extend(q3, q3_basis):
    family = family_of(q3, [1, 1, 0], [0, 0, 1])
    checker = MaximalityChecker(q3_basis)
    assert checker.supports_cover_all(family, maximal=True)
    assert not checker.is_maximal(family)

    extension = checker.find_extension(family)
    assert extension.label == 0
    assert extension.family.is_independent(q3_basis)


def test_no_extension_of_a_basis(q3, q3_basis):
    family = family_of(q3, [1, 1, 0], [0, 1, 0], [0, 1, 1])
    assert MaximalityChecker(q3_basis).find_extension(family) is None


def test_dependent_family_is_rejected(q3, q3_basis):
    checker = MaximalityChecker(q3_basis)
    dependent = family_of(q3, [1, 0, 0], [2, 0, 0])
    with pytest.raises(PreconditionViolation):
        checker.extension_at(dependent, 1)
    with pytest.raises(PreconditionViolation):
        checker.is_maximal(dependent)


def test_extension_at_covered_label(q3, q3_basis):
    with pytest.raises(PreconditionViolation):
        MaximalityChecker(q3_basis).extension_at(family_of(q3, [1, 1, 0]), 0)


def test_infinite_family_maximality_is_a_witness(telescoping, units):
    checker = MaximalityChecker(telescoping, probes=range(10))
    assert checker.supports_cover_all(units, maximal=True)
    with pytest.raises(PreconditionViolation):
        checker.is_maximal(units)


def test_infinite_family_false_claim(naturals_module):
    basis = Basis.standard(naturals_module)
    shifted = LinearlyIndependentFamily(naturals_module, lambda k: naturals_module.unit(k + 1),
                                        index_set=NaturalNumbers(), locate=lambda i: i - 1 if i > 0 else None)
    with pytest.raises(LogicInconsistency) as excinfo:
        supports_cover_all(basis, shifted, maximal=True, probes=[0, 1, 2])

    assert excinfo.value.witness == 0
    extended = excinfo.value.extension.family
    assert extended.locate(0, basis) is ADJOINED
    assert extended.vector(ADJOINED) == naturals_module.unit(0)


def test_extend_step_by_step_to_a_basis(q3, q3_basis):
    checker = MaximalityChecker(q3_basis)
    family = family_of(q3, [1, 0, 0])
    labels = []
    while True:
        extension = checker.find_extension(family)
        if extension is None:
            break
        labels.append(extension.label)
        family = extension.family

    assert sorted(labels) == [1, 2]
    assert len(family.members()) == 3
    assert len(set(family.index_set)) == 3
    assert checker.is_maximal(family)
    assert checker.supports_cover_all(family, maximal=True)


def test_false_claim_on_an_extended_family(q3, q3_basis):
    checker = MaximalityChecker(q3_basis)
    first = checker.find_extension(family_of(q3, [1, 0, 0]))
    with pytest.raises(LogicInconsistency) as excinfo:
        checker.supports_cover_all(first.family, maximal=True)

    extended = excinfo.value.extension.family
    assert extended.index_set.label != ADJOINED
    assert extended.is_independent(q3_basis)
    assert q3.equal(extended.vector(extended.index_set.label), q3_basis.to_module(excinfo.value.witness))
