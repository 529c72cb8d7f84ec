import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .errors import LogicInconsistency, PreconditionViolation
from .family import LinearlyIndependentFamily
from .support import SupportCover, arbitrary_union_of_supports

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Extension:
    """A family extended by one basis vector, with the label of that vector."""

    family: LinearlyIndependentFamily
    label: Any
    vector: Any


class MaximalityChecker:
    """
    Decides whether linearly independent families can be extended inside a module.

    The covering argument: if some basis label i is used by no member of the family,
    adjoining the basis vector at i keeps the family independent, since comparing
    coordinates at i forces the new coefficient to vanish. A maximal family therefore
    has supports covering every label.
    """

    def __init__(self, basis, probes: Optional[Iterable[Any]] = None):
        """
        Args:
            basis: Basis used to expand the families
            probes: Basis labels inspected when basis and family are both infinite
        """
        self.basis = basis
        self.probes = list(probes) if probes is not None else None

    def cover(self, family: LinearlyIndependentFamily) -> SupportCover:
        return arbitrary_union_of_supports(family, self.basis, probes=self.probes)

    def extension_at(self, family: LinearlyIndependentFamily, label: Any) -> Extension:
        """
        Adjoin the basis vector at an uncovered label.

        Args:
            family: An independent family whose members all have coordinate zero at label
            label: The uncovered basis label

        Returns:
            The Extension; for finite families its independence is checked by rank over
            every label, and the new vector is checked to be outside the family's range

        Raises:
            PreconditionViolation: If label is covered, the basis is broken, or the
                family turns out to be dependent
        """
        basis = self.basis
        field = basis.field
        if not field.is_nontrivial():
            raise PreconditionViolation("The ring must be nontrivial", {"field": field})

        vector = basis.to_module(label)
        if field.is_zero(basis.repr(vector)[label]):
            raise PreconditionViolation(f"Basis vector {label!r} has coordinate zero at its own label",
                                        {"label": label})

        if family.is_finite:
            for k, member in family.members():
                if not field.is_zero(basis.repr(member)[label]):
                    raise PreconditionViolation(f"Label {label!r} is in the support of member {k!r}",
                                                {"label": label, "member": k})
            # The coordinate at label separates the new vector from every member
            if family.contains_element(vector):
                raise LogicInconsistency(f"Basis vector {label!r} is already in the family", {"label": label})

        extended = family.extend(vector, basis)
        if extended.is_finite and not extended.is_independent(basis):
            raise PreconditionViolation(f"Family {family} is not linearly independent", {"family": family})

        _logger.debug("Extended %s by basis vector %r", family, label)
        return Extension(extended, label, vector)

    def find_extension(self, family: LinearlyIndependentFamily) -> Optional[Extension]:
        """
        Find a basis vector that can be adjoined to the family, if any.

        An uncovered label is tried first. A finite family over a finite basis can also
        fail to span while covering every label; then each basis vector is tried in turn.

        Returns:
            An Extension, or None if none was found
        """
        cover = self.cover(family)
        if not cover.covers_all:
            return self.extension_at(family, cover.witness)

        if family.is_finite and self.basis.index_set.is_finite:
            for label in self.basis.index_set:
                vector = self.basis.to_module(label)
                extended = family.extend(vector, self.basis)
                if extended.is_independent(self.basis):
                    _logger.debug("Extended %s by basis vector %r after rank search", family, label)
                    return Extension(extended, label, vector)

        return None

    def is_maximal(self, family: LinearlyIndependentFamily) -> bool:
        """
        Check maximality of a finite independent family over a finite basis.

        Raises:
            PreconditionViolation: If the family or the basis is infinite, or the family
                is not independent
        """
        if not (family.is_finite and self.basis.index_set.is_finite):
            raise PreconditionViolation("Maximality is only decided for finite families over finite bases; "
                                        "infinite families must carry it as a witness",
                                        {"family": family})
        if not family.is_independent(self.basis):
            raise PreconditionViolation(f"Family {family} is not linearly independent", {"family": family})
        return self.find_extension(family) is None

    def supports_cover_all(self, family: LinearlyIndependentFamily, maximal: bool) -> bool:
        """
        Check that the supports of the family cover every basis label.

        Args:
            family: A linearly independent family
            maximal: Whether the caller asserts the family is maximal

        Returns:
            True if the supports cover the index set; False if they do not and the
            family was not asserted maximal

        Raises:
            LogicInconsistency: If the family was asserted maximal but an uncovered label
                exists; the error carries the witness label and the Extension
        """
        cover = self.cover(family)
        if cover.covers_all:
            return True

        extension = self.extension_at(family, cover.witness)
        if maximal:
            raise LogicInconsistency(
                f"Family {family} was claimed maximal but extends by basis vector {cover.witness!r}",
                {"witness": cover.witness, "extension": extension},
            )
        return False


def supports_cover_all(basis, family: LinearlyIndependentFamily, maximal: bool,
                       probes: Optional[Iterable[Any]] = None) -> bool:
    """See MaximalityChecker.supports_cover_all."""
    return MaximalityChecker(basis, probes=probes).supports_cover_all(family, maximal)
