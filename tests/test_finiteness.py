import pytest

from module_bases import (Basis, Cardinal, CoordinateSpace, FiniteIndexSet, LogicInconsistency, NotFinite,
                          PreconditionViolation, SparseCoefficients, ZeroRing, basis_is_finite_given_finite_span,
                          finite_span_certificate)

SPANNING_ROWS = ([1, 1, 0], [0, 1, 1], [1, 0, 1])


def test_rational_three_space(q3, q3_basis):
    spanning_set = [q3.element(row) for row in SPANNING_ROWS]
    assert basis_is_finite_given_finite_span(spanning_set, q3_basis)

    certificate = finite_span_certificate(spanning_set, q3_basis)
    assert certificate.basis_size == Cardinal.finite(3)
    assert certificate.support == frozenset({0, 1, 2})
    assert certificate.support_sizes == (2, 2, 2)
    assert certificate.support_bound == 6
    assert certificate.spanning_size == 3


@pytest.mark.parametrize(
    "rows",
    [
        SPANNING_ROWS,
        ([1, 0, 0], [0, 1, 0], [0, 0, 1], [1, 1, 1]),
        ([1, 2, 3], [0, 1, 2], [0, 0, 1], [0, 0, 0]),
        ([2, 0, 0], [0, 3, 0], [1, 1, 4]),
    ],
)
def test_basis_size_is_bounded_by_supports(rows, rationals):
    space = CoordinateSpace(rationals, 3)
    for basis in (Basis.standard(space), Basis.from_matrix(space, [[1, 1, 1], [0, 1, 1], [0, 0, 1]])):
        certificate = finite_span_certificate([space.element(row) for row in rows], basis)
        assert certificate.is_finite
        assert certificate.basis_size.count <= len(certificate.support) <= certificate.support_bound


def test_not_spanning_over_gf2(gf2):
    space = CoordinateSpace(gf2, 3)
    with pytest.raises(LogicInconsistency) as excinfo:
        finite_span_certificate([space.element(row) for row in SPANNING_ROWS], Basis.standard(space))
    assert excinfo.value.context["rank"] == 2


def test_missing_direction(q3, q3_basis):
    with pytest.raises(LogicInconsistency) as excinfo:
        finite_span_certificate([q3.element([1, 0, 0]), q3.element([0, 1, 0])], q3_basis)
    assert excinfo.value.witness == 2
    assert not isinstance(excinfo.value, NotFinite)


def test_infinite_basis_is_not_finitely_spanned(naturals_module, telescoping):
    spanning_set = [naturals_module.unit(0), naturals_module.unit(3)]
    with pytest.raises(NotFinite) as excinfo:
        basis_is_finite_given_finite_span(spanning_set, telescoping)
    assert isinstance(excinfo.value, LogicInconsistency)
    assert excinfo.value.witness not in {0, 1, 2, 3}
    assert excinfo.value.context["support_size"] == 4


def test_zero_ring_is_rejected():
    space = CoordinateSpace(ZeroRing(), 2)
    with pytest.raises(PreconditionViolation):
        finite_span_certificate([space.element([1, 0])], Basis.standard(space))


def test_broken_basis_is_rejected(q3, rationals):
    broken = Basis(q3, FiniteIndexSet(range(3)), q3.standard_vector,
                   lambda x: SparseCoefficients.single(rationals, 0))
    with pytest.raises(PreconditionViolation):
        finite_span_certificate([q3.element([0, 1, 0])], broken)


def test_certificate_to_dict(q3, q3_basis):
    certificate = finite_span_certificate([q3.element(row) for row in SPANNING_ROWS], q3_basis)
    data = certificate.to_dict()
    assert data["basis_size"] == "3"
    assert data["support"] == ["0", "1", "2"]
