import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from . import config
from .errors import PreconditionViolation
from .index import ExtendedIndexSet, FiniteIndexSet, IndexSet
from .module import ModuleSpace

_logger = logging.getLogger(__name__)


class LinearlyIndependentFamily:
    """
    An indexed family v: κ -> M of module elements, claimed linearly independent.

    Finite families are given as a mapping and can check their own independence.
    Infinite families are given as a callable; their independence is a witness the
    caller vouches for. An infinite family may carry a ``locate`` oracle that, for a
    basis label i, returns some k whose coordinates use i (or None if there is none).
    """

    def __init__(self, module: ModuleSpace, vectors: Union[Mapping[Any, Any], Callable[[Any], Any]],
                 index_set: Optional[IndexSet] = None, name: str = "",
                 locate: Optional[Callable[[Any], Optional[Any]]] = None):
        """
        Initialize a family.

        Args:
            module: The module the family lives in
            vectors: Mapping label -> element, or a callable for infinite families
            index_set: Labels of the family (default: the mapping's keys)
            name: Optional name for the family
            locate: Optional oracle basis label -> family label whose support contains it

        Raises:
            PreconditionViolation: If a callable is given without an index set
        """
        self.module = module
        self.name = name
        self._locate = locate

        if isinstance(vectors, Mapping):
            self._vectors: Optional[Dict[Any, Any]] = dict(vectors)
            self._function = None
            self.index_set = index_set if index_set is not None else FiniteIndexSet(self._vectors)
        else:
            if index_set is None:
                raise PreconditionViolation("A family given by a function needs an index set")
            self._vectors = None
            self._function = vectors
            self.index_set = index_set

    @property
    def is_finite(self) -> bool:
        return self.index_set.is_finite

    def vector(self, label: Any) -> Any:
        if label not in self.index_set:
            raise ValueError(f"Label {label!r} is not in the family's index set {self.index_set}")
        if self._vectors is not None:
            return self._vectors[label]
        return self._function(label)

    def __call__(self, label: Any) -> Any:
        return self.vector(label)

    def members(self) -> List[Tuple[Any, Any]]:
        """All (label, element) pairs of a finite family."""
        if not self.is_finite:
            raise PreconditionViolation(f"Family {self} is infinite and cannot be listed")
        return [(label, self.vector(label)) for label in self.index_set]

    def contains_element(self, element: Any) -> bool:
        """Whether element is in the range of a finite family."""
        return any(self.module.equal(vector, element) for _, vector in self.members())

    def is_independent(self, basis) -> bool:
        """
        Check linear independence of a finite family over a field.

        Coordinates in a basis are an isomorphism, so the family is independent
        exactly when its coefficient matrix has full column rank.
        """
        if not basis.field.is_nontrivial():
            raise PreconditionViolation("Linear independence is vacuous over the zero ring",
                                        {"field": basis.field})
        members = self.members()
        if not members:
            return True
        matrix, _ = basis.coefficient_matrix(vector for _, vector in members)
        if matrix.shape[0] == 0:
            return False
        return basis.field.rank(matrix) == len(members)

    def locate(self, label: Any, basis) -> Optional[Any]:
        """
        Find a family label whose coordinates use the basis label.

        Uses the locate oracle when given; otherwise scans a finite family in full,
        or the first SEARCH_LIMIT members of an enumerable infinite one.

        Returns:
            A family label k with basis.repr(v(k))[label] != 0, or None if none exists

        Raises:
            PreconditionViolation: If the answer cannot be decided
        """
        if self._locate is not None:
            return self._locate(label)

        field = basis.field
        if self.is_finite:
            candidates = self.index_set
        elif self.index_set.enumerable:
            candidates = self.index_set.sample(config.SEARCH_LIMIT)
        else:
            raise PreconditionViolation(
                f"Family {self} is infinite, not enumerable and has no locate oracle",
                {"label": label},
            )

        _logger.debug("Scanning %s for a member using basis label %r", self, label)
        for k in candidates:
            if not field.is_zero(basis.repr(self.vector(k))[label]):
                return k

        if not self.is_finite:
            raise PreconditionViolation(
                f"No member of {self} among the first {config.SEARCH_LIMIT} uses basis label {label!r}; "
                f"supply a locate oracle to decide",
                {"label": label, "search_limit": config.SEARCH_LIMIT},
            )
        return None

    def extend(self, vector: Any, basis=None) -> 'LinearlyIndependentFamily':
        """
        Adjoin one element to the family under a fresh label.

        The label is ADJOINED for the first extension and a deeper adjoined label for
        each further one; it is available as ``index_set.label`` on the result.

        Args:
            vector: The new element
            basis: Basis used to answer locate queries for the new element; needed
                only when the family is infinite

        Returns:
            The extended family
        """
        index_set = ExtendedIndexSet(self.index_set)
        name = f"{self.name} + 1" if self.name else ""

        if self._vectors is not None and self.index_set.is_finite:
            vectors = dict(self._vectors)
            vectors[index_set.label] = vector
            return LinearlyIndependentFamily(self.module, vectors, index_set=index_set, name=name)

        def function(label):
            return vector if label == index_set.label else self.vector(label)

        locate = None
        if basis is not None:
            new_support = basis.support(vector)

            def locate(label):
                if label in new_support:
                    return index_set.label
                return self.locate(label, basis)

        return LinearlyIndependentFamily(self.module, function, index_set=index_set, name=name, locate=locate)

    def __str__(self) -> str:
        label = f"'{self.name}' " if self.name else ""
        return f"Family {label}indexed by {self.index_set}"

    def __repr__(self) -> str:
        return self.__str__()
