import logging
import numpy as np
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from . import config
from .coefficients import SparseCoefficients
from .errors import PreconditionViolation
from .index import Cardinal, FiniteIndexSet, IndexSet, NaturalNumbers
from .module import CoordinateSpace, FreeModule, ModuleSpace

_logger = logging.getLogger(__name__)


class Basis:
    """
    A basis of a module, given by its two mutually inverse directions.

    ``to_module`` sends a label to its basis vector and ``represent`` sends an element
    to its finitely supported coordinates. Both are trusted: the algebra layer that
    builds the basis is responsible for ``represent(to_module(i))`` being the indicator
    at ``i`` and for every element being the combination of its coordinates.
    """

    def __init__(self, module: ModuleSpace, index_set: IndexSet,
                 to_module: Callable[[Any], Any], represent: Callable[[Any], SparseCoefficients],
                 name: str = ""):
        """
        Initialize a basis.

        Args:
            module: The module the basis vectors live in
            index_set: Labels of the basis vectors
            to_module: Label -> basis vector
            represent: Element -> SparseCoefficients over index_set
            name: Optional name for the basis
        """
        self.module = module
        self.index_set = index_set
        self.name = name
        self._to_module = to_module
        self._represent = represent

    @property
    def field(self):
        return self.module.field

    @property
    def cardinality(self) -> Cardinal:
        return self.index_set.cardinality

    def to_module(self, label: Any) -> Any:
        """The basis vector with the given label."""
        if label not in self.index_set:
            raise ValueError(f"Label {label!r} is not in the index set {self.index_set}")
        return self._to_module(label)

    def repr(self, element: Any) -> SparseCoefficients:
        """The coordinates of an element in this basis."""
        return self._represent(element)

    def support(self, element: Any) -> frozenset:
        return self.repr(element).support

    def linear_combination(self, coefficients: SparseCoefficients) -> Any:
        """Inverse of repr: combine basis vectors with the given coordinates."""
        return self.module.linear_combination(
            (value, self.to_module(label)) for label, value in coefficients.items()
        )

    def coefficient_matrix(self, elements: Iterable[Any]) -> Tuple[np.ndarray, List[Any]]:
        """
        Coordinates of finitely many elements as the columns of a matrix.

        Returns:
            Tuple of (matrix, row labels); the rows are the labels in the union of the
            supports, in order of first appearance
        """
        representations = [self.repr(element) for element in elements]

        rows: Dict[Any, None] = {}
        for coefficients in representations:
            for label in coefficients:
                rows.setdefault(label, None)
        row_labels = list(rows)

        matrix = self.field.zero_matrix(len(row_labels), len(representations))
        for c, coefficients in enumerate(representations):
            for r, label in enumerate(row_labels):
                matrix[r, c] = coefficients[label]

        return matrix, row_labels

    def is_valid(self, labels: Optional[Iterable[Any]] = None) -> bool:
        """
        Check the basis invariants on finitely many labels.

        A label passes if repr of its basis vector is the indicator at the label and
        the vector is rebuilt from those coordinates.

        Args:
            labels: Labels to check (default: all labels of a finite index set, or a
                sample of an enumerable infinite one)

        Returns:
            True if every checked label passes, False otherwise
        """
        if labels is None:
            if self.index_set.is_finite:
                labels = list(self.index_set)
            elif self.index_set.enumerable:
                labels = self.index_set.sample(config.PROBE_COUNT)
            else:
                labels = []

        for label in labels:
            vector = self.to_module(label)
            coefficients = self.repr(vector)
            if coefficients != SparseCoefficients.single(self.field, label):
                _logger.debug("repr of basis vector %r is %r", label, coefficients)
                return False
            if not self.module.equal(self.linear_combination(coefficients), vector):
                _logger.debug("basis vector %r is not rebuilt from its coordinates", label)
                return False

        return True

    @classmethod
    def standard(cls, module: Union[CoordinateSpace, FreeModule], name: str = "") -> 'Basis':
        """
        The standard basis: unit vectors of F^n, or the unit functions of a free module.
        """
        field = module.field

        if isinstance(module, CoordinateSpace):
            index_set = FiniteIndexSet(range(module.dimension))

            def represent(x):
                x = module.element(x)
                return SparseCoefficients(field, {i: x[i] for i in range(module.dimension)})

            return cls(module, index_set, module.standard_vector, represent, name=name or "standard")

        if isinstance(module, FreeModule):
            return cls(module, module.index_set, module.unit, lambda x: x, name=name or "standard")

        raise ValueError(f"No standard basis for {module}")

    @classmethod
    def from_matrix(cls, space: CoordinateSpace, matrix: Union[np.ndarray, List[List[Any]]],
                    name: str = "") -> 'Basis':
        """
        The basis of F^n formed by the columns of an invertible matrix.

        Raises:
            PreconditionViolation: If the matrix is not square of size n or not invertible
        """
        field = space.field
        matrix_F = field.matrix(matrix)
        n = space.dimension

        if matrix_F.shape != (n, n):
            raise PreconditionViolation(
                f"Matrix dimensions {matrix_F.shape} don't match the space dimension {n}",
                {"space": space.name},
            )
        if field.rank(matrix_F) != n:
            raise PreconditionViolation("Columns of a basis matrix must be linearly independent",
                                        {"rank": field.rank(matrix_F), "dimension": n})

        def to_module(i):
            return matrix_F[:, i].copy()

        def represent(x):
            coordinates = field.find_vector_coordinates(matrix_F, space.element(x))
            return SparseCoefficients(field, {i: coordinates[i] for i in range(n)})

        return cls(space, FiniteIndexSet(range(n)), to_module, represent, name=name)

    @classmethod
    def telescoping(cls, module: FreeModule, name: str = "") -> 'Basis':
        """
        The basis b_0 = e_0, b_n = e_n - e_(n-1) of the free module over the naturals.

        The coordinates of x are the tail sums c_n = x_n + x_(n+1) + ..., which vanish
        past the largest label of x, so every representation stays finite.
        """
        if not isinstance(module.index_set, NaturalNumbers):
            raise PreconditionViolation("The telescoping basis needs the natural numbers as labels",
                                        {"index_set": module.index_set})
        field = module.field

        def to_module(n):
            if n == 0:
                return module.unit(0)
            return module.unit(n) - module.unit(n - 1)

        def represent(x):
            if x.is_zero():
                return SparseCoefficients.zero(field)
            tail = field.zero
            coordinates = {}
            for n in range(max(x.support), -1, -1):
                tail = tail + x[n]
                coordinates[n] = tail
            return SparseCoefficients(field, coordinates)

        return cls(module, module.index_set, to_module, represent, name=name or "telescoping")

    def __str__(self) -> str:
        label = f"'{self.name}' " if self.name else ""
        return f"Basis {label}of {self.module} indexed by {self.index_set}"

    def __repr__(self) -> str:
        return self.__str__()
