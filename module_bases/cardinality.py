import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from .errors import LogicInconsistency, PreconditionViolation
from .family import LinearlyIndependentFamily
from .index import ALEPH_0, Cardinal
from .maximality import MaximalityChecker

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardinalInequality:
    """
    The bound |ι| <= |κ| for a basis indexed by ι and a maximal family indexed by κ,
    with the intermediate bounds it was derived from.

    Attributes:
        lower: |ι|, the size of the basis
        upper: |κ|, the size of the family
        range_bound: Bound on the number of distinct supports, at most |κ|
        union_bound: Bound on the union of the supports (range_bound * ℵ0 when infinite)
    """

    lower: Cardinal
    upper: Cardinal
    range_bound: Cardinal
    union_bound: Cardinal

    @property
    def holds(self) -> bool:
        return self.lower <= self.upper

    @property
    def ordering(self) -> str:
        if self.lower == self.upper:
            return "="
        return "<" if self.lower < self.upper else ">"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lower": str(self.lower),
            "upper": str(self.upper),
            "range_bound": str(self.range_bound),
            "union_bound": str(self.union_bound),
            "ordering": self.ordering,
        }

    def __str__(self) -> str:
        return f"{self.lower} {self.ordering} {self.upper}"


class CardinalityComparator:
    """
    Bounds the size of an infinite basis by the size of a maximal independent family.

    The supports Φ(k) = supp(repr(v(k))) are finite and, by maximality, cover the basis
    labels. A union of |range Φ| finite sets has at most |range Φ| * ℵ0 elements, and
    |range Φ| <= |κ|; for infinite ι this gives |ι| <= |κ|.
    """

    def __init__(self, basis, probes: Optional[Iterable[Any]] = None):
        self.basis = basis
        self.checker = MaximalityChecker(basis, probes=probes)

    def support_map(self, family: LinearlyIndependentFamily) -> Callable[[Any], frozenset]:
        """Φ: family label -> support of its member."""
        return lambda k: self.basis.support(family.vector(k))

    def range_bound(self, family: LinearlyIndependentFamily) -> Cardinal:
        """Bound on |range Φ|: the exact count for finite families, |κ| otherwise."""
        if family.is_finite:
            phi = self.support_map(family)
            distinct = {phi(k) for k in family.index_set}
            return Cardinal.finite(len(distinct))
        return family.index_set.cardinality

    def bound(self, family: LinearlyIndependentFamily, maximal: bool, basis_infinite: bool) -> CardinalInequality:
        """
        Derive |ι| <= |κ|.

        Args:
            family: A linearly independent family indexed by κ
            maximal: Whether the caller asserts the family is maximal
            basis_infinite: Whether the caller asserts the basis is infinite

        Returns:
            The CardinalInequality

        Raises:
            PreconditionViolation: If the basis is not infinite, or the family is not
                asserted maximal and its supports do not cover the labels
            LogicInconsistency: If the caller's witnesses contradict the bound
        """
        index_set = self.basis.index_set
        if not basis_infinite:
            raise PreconditionViolation("The comparison is only for infinite bases; compare finite sizes directly",
                                        {"basis": self.basis})
        if not index_set.is_infinite:
            raise PreconditionViolation(f"Basis index set {index_set} is finite but was asserted infinite",
                                        {"cardinality": index_set.cardinality})

        if not self.checker.supports_cover_all(family, maximal):
            raise PreconditionViolation(f"Supports of {family} do not cover {index_set}; the bound needs a maximal family",
                                        {"family": family})

        lower = index_set.cardinality
        upper = family.index_set.cardinality
        # A covering family of an infinite basis is infinite, so range_bound is |κ|
        range_bound = self.range_bound(family)
        union_bound = range_bound * ALEPH_0

        if not lower <= union_bound:
            raise LogicInconsistency(
                f"{range_bound} finite supports cannot cover {lower} basis labels",
                {"lower": lower, "range_bound": range_bound},
            )

        result = CardinalInequality(lower=lower, upper=upper, range_bound=range_bound, union_bound=union_bound)
        if not result.holds:
            raise LogicInconsistency(
                f"Basis of size {lower} cannot be covered by a maximal family of size {upper}",
                {"lower": lower, "upper": upper},
            )

        _logger.debug("Cardinality bound for %s: %s", family, result)
        return result


def cardinality_bound(basis, family: LinearlyIndependentFamily, maximal: bool, basis_infinite: bool,
                      probes: Optional[Iterable[Any]] = None) -> CardinalInequality:
    """See CardinalityComparator.bound."""
    return CardinalityComparator(basis, probes=probes).bound(family, maximal, basis_infinite)
