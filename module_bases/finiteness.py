import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Tuple

from .errors import LogicInconsistency, NotFinite, PreconditionViolation
from .index import Cardinal
from .support import finite_union_of_supports

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FiniteSpanCertificate:
    """
    Evidence that a basis is finite because a finite set spans the module.

    The chain of bounds is basis_size <= len(support) <= support_bound.
    """

    basis_size: Cardinal
    support: frozenset
    support_bound: int
    spanning_size: int
    support_sizes: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_finite(self) -> bool:
        return self.basis_size.is_finite

    def to_dict(self) -> Dict[str, Any]:
        return {
            "basis_size": str(self.basis_size),
            "support": sorted(repr(label) for label in self.support),
            "support_bound": self.support_bound,
            "spanning_size": self.spanning_size,
            "support_sizes": list(self.support_sizes),
        }


def finite_span_certificate(spanning_set: Iterable[Any], basis) -> FiniteSpanCertificate:
    """
    Show that a basis is finite given a finite spanning set.

    Every spanning element lives in the span of the basis vectors on the union S of
    their supports, so those finitely many basis vectors span the module. A basis
    label outside S would give a basis vector in that span, which its coordinates
    forbid; hence the index set is S itself and is finite.

    Args:
        spanning_set: Finite collection of elements claimed to span the module
        basis: Any basis of the module

    Returns:
        A FiniteSpanCertificate

    Raises:
        PreconditionViolation: If the ring is trivial or the basis does not rebuild
            a spanning element from its coordinates
        NotFinite: If the index set is infinite; the witness is a basis label whose
            vector is outside the span of spanning_set
        LogicInconsistency: If the index set is finite but spanning_set does not span
    """
    module = basis.module
    field_ = basis.field

    if not field_.is_nontrivial():
        raise PreconditionViolation("The ring must be nontrivial", {"field": field_})

    elements = list(spanning_set)
    supports = [basis.support(element) for element in elements]
    S = finite_union_of_supports(elements, basis)
    images = {label: basis.to_module(label) for label in S}

    # Each spanning element is a combination of the basis vectors on S
    for element in elements:
        coefficients = basis.repr(element)
        rebuilt = module.linear_combination((value, images[label]) for label, value in coefficients.items())
        if not module.equal(rebuilt, element):
            raise PreconditionViolation("Basis does not rebuild an element from its coordinates",
                                        {"element": element, "coefficients": coefficients})

    outside = basis.index_set.pick_outside(S)
    if outside is not None:
        context = {"witness": outside, "support_size": len(S)}
        if basis.index_set.is_infinite:
            raise NotFinite(
                f"Basis vector {outside!r} is outside the span of the {len(elements)} given elements, "
                f"so they cannot span a module with infinite basis {basis.index_set}",
                context,
            )
        raise LogicInconsistency(f"Basis vector {outside!r} is outside the span of the given elements", context)

    # S covers the index set; over a field the spanning claim is also checkable by rank
    matrix, _ = basis.coefficient_matrix(elements)
    rank = field_.rank(matrix)
    if rank != len(S):
        raise LogicInconsistency("The given elements do not span the module",
                                 {"rank": rank, "basis_size": len(S)})

    certificate = FiniteSpanCertificate(
        basis_size=basis.cardinality,
        support=S,
        support_bound=sum(len(support) for support in supports),
        spanning_size=len(elements),
        support_sizes=tuple(len(support) for support in supports),
    )
    _logger.debug("Basis %s is finite of size %s (support bound %d)", basis, certificate.basis_size,
                  certificate.support_bound)
    return certificate


def basis_is_finite_given_finite_span(spanning_set: Iterable[Any], basis) -> bool:
    """True when a finite spanning set forces the basis to be finite; see finite_span_certificate."""
    return finite_span_certificate(spanning_set, basis).is_finite
