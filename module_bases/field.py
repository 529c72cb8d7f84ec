import galois
import numpy as np
from fractions import Fraction
from typing import Union, List, Tuple, Optional, Any


class Field:
    """
    Linear algebra shared by every scalar ring in this package.
    Matrices and vectors are numpy arrays; subclasses decide how entries are built.
    """

    characteristic: int = 0
    degree: int = 1
    zero: Any = None
    one: Any = None

    def element(self, value: Any) -> Any:
        raise NotImplementedError

    def vector(self, values: Any) -> np.ndarray:
        raise NotImplementedError

    def matrix(self, values: Any) -> np.ndarray:
        raise NotImplementedError

    def zero_matrix(self, rows: int, cols: int) -> np.ndarray:
        raise NotImplementedError

    def zero_vector(self, size: int) -> np.ndarray:
        """Generate a zero vector of the given length."""
        return self.zero_matrix(1, size)[0].copy()

    def identity_matrix(self, size: int) -> np.ndarray:
        """Generate an identity matrix of the given size."""
        identity = self.zero_matrix(size, size)
        for i in range(size):
            identity[i, i] = self.one
        return identity

    def is_zero(self, value: Any) -> bool:
        return bool(value == self.zero)

    def is_nontrivial(self) -> bool:
        """A ring is nontrivial when its additive and multiplicative identities differ."""
        return not self.is_zero(self.one)

    def arrays_equal(self, a: np.ndarray, b: np.ndarray) -> bool:
        return a.shape == b.shape and bool(np.all(a == b))

    def row_reduce(self, matrix: np.ndarray, ncols: Optional[int] = None) -> Tuple[np.ndarray, int]:
        """
        Convert a matrix to row-reduced echelon form by exact Gaussian elimination.
        Used for fields galois cannot represent, such as the rationals.

        Args:
            matrix: The matrix to reduce
            ncols: Number of columns to consider for pivots (default: all columns)

        Returns:
            Tuple of (reduced matrix, number of pivots found)
        """
        A_rre = self.matrix(matrix).copy()

        if A_rre.ndim != 2:
            raise ValueError(f"Only 2-D matrices can be converted to reduced row echelon form, not {A_rre.ndim}-D.")

        if ncols is None:
            ncols = A_rre.shape[1]

        p = 0  # The pivot row
        if A_rre.shape[0] == 0:
            return A_rre, p

        for j in range(ncols):
            # Find a pivot in column j at or below row p
            idxs = np.nonzero(A_rre[p:, j])[0]
            if idxs.size == 0:
                continue
            i = p + idxs[0]

            # Swap row p and i. The pivot is now located at row p.
            A_rre[[p, i], :] = A_rre[[i, p], :]

            # Force pivot value to be 1
            A_rre[p, :] /= A_rre[p, j]

            # Force zeros above and below the pivot
            idxs = np.nonzero(A_rre[:, j])[0].tolist()
            idxs.remove(p)
            if idxs:
                A_rre[idxs, :] -= A_rre[idxs, j].reshape(-1, 1) * A_rre[p, :]

            p += 1
            if p == A_rre.shape[0]:
                break

        return A_rre, p

    def rank(self, matrix: np.ndarray) -> int:
        """
        Compute the rank of a matrix.

        Raises:
            ValueError: If input is not a 2D matrix
        """
        if len(matrix.shape) != 2:
            raise ValueError("Input must be a 2D matrix")
        if matrix.size == 0:
            return 0

        _, pivots = self.row_reduce(matrix)
        return pivots

    def find_vector_coordinates(self, basis: np.ndarray, vector: np.ndarray) -> Optional[np.ndarray]:
        """
        Find the coordinates of a vector in terms of the columns of a matrix.

        Args:
            basis: Matrix whose columns are the spanning vectors
            vector: Vector to express in the columns

        Returns:
            The coordinates of the vector, or None if the vector is not in the column span
        """
        basis_F = self.matrix(basis)
        vector_F = self.vector(vector)

        m, n = basis_F.shape
        if vector_F.shape != (m,):
            raise ValueError(f"Dimension mismatch: basis has {m} rows but vector has shape {vector_F.shape}")

        # Create augmented matrix [basis | vector]
        augmented = self.zero_matrix(m, n + 1)
        augmented[:, :n] = basis_F
        augmented[:, n] = vector_F

        ref, p = self.row_reduce(augmented, ncols=n)

        # Check if the system is consistent
        for i in range(p, m):
            if not self.is_zero(ref[i, n]):
                return None

        # Free variables are zero, so each pivot variable is read off its row
        solution = self.zero_vector(n)
        for i in range(p):
            pivot_col = next(j for j in range(n) if not self.is_zero(ref[i, j]))
            solution[pivot_col] = ref[i, n]

        if not self.arrays_equal(basis_F @ solution, vector_F):
            return None

        return solution


class FiniteField(Field):
    """
    A wrapper around the galois library for finite field operations.
    Provides field arithmetic, matrix operations, etc.
    """

    def __init__(self, characteristic: int, degree: int = 1):
        """
        Initialize a finite field GF(p^n).

        Args:
            characteristic: The characteristic p of the field (must be prime)
            degree: The degree n of the field extension (default: 1)
        """
        self.characteristic = characteristic
        self.degree = degree
        self.order = characteristic ** degree

        # Create the Galois field using the galois library
        self.GF = galois.GF(self.order)

        # Set up the zero and one elements
        self.zero = self.GF(0)
        self.one = self.GF(1)

    def _reduce(self, values: Any) -> Any:
        if isinstance(values, self.GF):
            return values
        if self.degree == 1:
            # Plain integers are taken modulo p so that -1 means p - 1
            values = np.mod(np.array(values, dtype=np.int64), self.characteristic)
        return self.GF(values)

    def element(self, value: Union[int, str, List[int]]) -> Any:
        """
        Create an element of the finite field.

        Args:
            value: Integer value, string representation, or list of coefficients for field extension

        Returns:
            An element of the finite field
        """
        return self._reduce(value)

    def vector(self, values: Union[List[Union[int, str]], np.ndarray]) -> np.ndarray:
        """Create a vector over the finite field."""
        return self._reduce(values)

    def matrix(self, values: Union[List[List[Union[int, str]]], np.ndarray]) -> np.ndarray:
        """
        Create a matrix over the finite field.

        Args:
            values: A 2D list or numpy array of values (can contain integers or string representations)

        Returns:
            A matrix over the finite field
        """
        return self._reduce(values)

    def identity_matrix(self, size: int) -> np.ndarray:
        """Generate an identity matrix of the given size."""
        return self.GF.Identity(size)

    def zero_matrix(self, rows: int, cols: int) -> np.ndarray:
        """Generate a zero matrix of the given dimensions."""
        return self.GF.Zeros((rows, cols))

    def row_reduce(self, matrix: np.ndarray, ncols: Optional[int] = None) -> Tuple[np.ndarray, int]:
        """
        Convert a matrix to row-reduced echelon form using the galois library.

        Args:
            matrix: The matrix to reduce
            ncols: Number of columns to consider for pivots (default: all columns)

        Returns:
            Tuple of (reduced matrix, number of pivots found)
        """
        # Ensure matrix is in the field
        matrix_GF = self.matrix(matrix)

        if not matrix_GF.ndim == 2:
            raise ValueError(f"Only 2-D matrices can be converted to reduced row echelon form, not {matrix_GF.ndim}-D.")

        if ncols is None:
            ncols = matrix_GF.shape[1]
        if matrix_GF.shape[0] == 0 or ncols == 0:
            return matrix_GF.copy(), 0

        A_rre = matrix_GF.row_reduce(ncols=ncols)

        # Pivot rows are exactly the rows that are nonzero among the first ncols columns
        pivots = int(np.count_nonzero(np.count_nonzero(A_rre[:, :ncols].view(np.ndarray), axis=1)))
        return A_rre, pivots

    def rank(self, matrix: np.ndarray) -> int:
        """
        Compute the rank of a matrix over the field.

        Raises:
            ValueError: If input is not a 2D matrix
        """
        if len(matrix.shape) != 2:
            raise ValueError("Input must be a 2D matrix")
        if matrix.size == 0:
            return 0

        # Convert to GF matrix if needed
        matrix_GF = self.matrix(matrix)
        return int(np.linalg.matrix_rank(matrix_GF))

    def __str__(self) -> str:
        """String representation of the finite field."""
        if self.degree == 1:
            return f"Finite Field GF({self.characteristic})"
        else:
            return f"Finite Field GF({self.characteristic}^{self.degree})"


class Rationals(Field):
    """
    The rational numbers with exact arithmetic.
    Entries are fractions.Fraction held in numpy object arrays, so row reduction never rounds.
    """

    def __init__(self):
        self.characteristic = 0
        self.degree = 1
        self.order = float('inf')

        self.zero = self._coerce(0)
        self.one = self._coerce(1)

    def _coerce(self, value: Any) -> Fraction:
        return Fraction(value)

    def _coerce_array(self, values: Any) -> np.ndarray:
        arr = np.array(values, dtype=object)
        out = np.empty(arr.shape, dtype=object)
        for idx in np.ndindex(arr.shape):
            out[idx] = self._coerce(arr[idx])
        return out

    def element(self, value: Union[int, str, Fraction]) -> Fraction:
        return self._coerce(value)

    def vector(self, values: Union[List[Any], np.ndarray]) -> np.ndarray:
        return self._coerce_array(values)

    def matrix(self, values: Union[List[List[Any]], np.ndarray]) -> np.ndarray:
        return self._coerce_array(values)

    def zero_matrix(self, rows: int, cols: int) -> np.ndarray:
        return np.full((rows, cols), self.zero, dtype=object)

    def __str__(self) -> str:
        return "Q (rational numbers)"


class ZeroRing(Rationals):
    """
    The degenerate ring in which 0 = 1.
    Every element collapses to zero; no basis argument applies over it.
    """

    def _coerce(self, value: Any) -> Fraction:
        return Fraction(0)

    def __str__(self) -> str:
        return "Zero ring"
