import numpy as np
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .coefficients import SparseCoefficients
from .field import Field
from .index import IndexSet


class ModuleSpace:
    """
    A module over a field, seen only through its additive structure and scalar action.
    Elements are plain values; the space knows how to add, scale and compare them.
    """

    def __init__(self, field: Field, name: str = ""):
        self.field = field
        self.name = name

    def zero(self) -> Any:
        raise NotImplementedError

    def add(self, x: Any, y: Any) -> Any:
        raise NotImplementedError

    def scale(self, scalar: Any, x: Any) -> Any:
        raise NotImplementedError

    def equal(self, x: Any, y: Any) -> bool:
        raise NotImplementedError

    def linear_combination(self, terms: Iterable[Tuple[Any, Any]]) -> Any:
        """
        Sum of scalar * element over (scalar, element) pairs.

        Args:
            terms: Finite iterable of (scalar, element) pairs

        Returns:
            The combined element (the zero element for no terms)
        """
        total = self.zero()
        for scalar, element in terms:
            total = self.add(total, self.scale(scalar, element))
        return total


class CoordinateSpace(ModuleSpace):
    """
    The vector space F^n. Elements are 1-D field arrays of length n.
    """

    def __init__(self, field: Field, dimension: int, name: str = ""):
        if dimension < 0:
            raise ValueError(f"Dimension must be non-negative, got {dimension}")
        super().__init__(field, name=name or f"{field}^{dimension}")
        self.dimension = dimension

    def element(self, values: Union[List[Any], np.ndarray]) -> np.ndarray:
        vector = self.field.vector(values)
        if vector.shape != (self.dimension,):
            raise ValueError(f"Vector shape {vector.shape} doesn't match dimension {self.dimension}")
        return vector

    def standard_vector(self, i: int) -> np.ndarray:
        vector = self.field.zero_vector(self.dimension)
        vector[i] = self.field.one
        return vector

    def zero(self) -> np.ndarray:
        return self.field.zero_vector(self.dimension)

    def add(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        return x + y

    def scale(self, scalar: Any, x: np.ndarray) -> np.ndarray:
        return self.field.element(scalar) * x

    def equal(self, x: np.ndarray, y: np.ndarray) -> bool:
        return self.field.arrays_equal(x, y)

    def __str__(self) -> str:
        return f"Coordinate space {self.name}"


class FreeModule(ModuleSpace):
    """
    Finitely supported functions from an index set to the field.
    Elements are SparseCoefficients; the index set may be infinite.
    """

    def __init__(self, field: Field, index_set: IndexSet, name: str = ""):
        super().__init__(field, name=name or f"{field}^({index_set})")
        self.index_set = index_set

    def element(self, entries: Optional[Mapping[Any, Any]] = None) -> SparseCoefficients:
        coefficients = SparseCoefficients(self.field, entries)
        outside = [label for label in coefficients.support if label not in self.index_set]
        if outside:
            raise ValueError(f"Labels {outside} are not in the index set {self.index_set}")
        return coefficients

    def unit(self, label: Any) -> SparseCoefficients:
        return SparseCoefficients.single(self.field, label)

    def zero(self) -> SparseCoefficients:
        return SparseCoefficients.zero(self.field)

    def add(self, x: SparseCoefficients, y: SparseCoefficients) -> SparseCoefficients:
        return x + y

    def scale(self, scalar: Any, x: SparseCoefficients) -> SparseCoefficients:
        return x.scale(scalar)

    def equal(self, x: SparseCoefficients, y: SparseCoefficients) -> bool:
        return x == y

    def __str__(self) -> str:
        return f"Free module {self.name}"
