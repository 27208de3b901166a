"""Dense matrices for affine transforms.

Matrices are immutable float64 values backed by NumPy. The dimensions are
fixed at construction and checked whenever two matrices are combined. 4x4
matrices act on homogeneous tuples; the smaller sizes exist mostly for the
cofactor recursion used by the determinant.

Inversion goes through the classical adjugate: every cofactor divided by the
determinant. A singular matrix raises MatrixNotInvertibleError instead of
producing garbage, so scene setup can report a bad transform before any ray
is traced.

Example:
    >>> from phongtracer.core.matrix import Matrix
    >>> m = Matrix([[2, 0], [0, 4]])
    >>> m.determinant()
    8.0
    >>> m.inverse()[1, 1]
    0.25
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from phongtracer.core.tuples import EPSILON, Tuple, typed_like


class MatrixNotInvertibleError(ValueError):
    """Raised when inverting a matrix whose determinant is zero."""


class Matrix:
    """An immutable rows x cols matrix of floats.

    Args:
        rows: Nested sequence of row values, or a 2-D NumPy array.

    Raises:
        ValueError: If the rows are empty, ragged or not two-dimensional.
    """

    __slots__ = ("_data",)

    def __init__(self, rows: Sequence[Sequence[float]] | npt.ArrayLike) -> None:
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.size == 0:
            raise ValueError(f"Matrix requires a non-empty 2-D array, got shape {data.shape}")
        data.flags.writeable = False
        self._data = data

    @classmethod
    def identity(cls, n: int = 4) -> Matrix:
        return cls(np.identity(n, dtype=np.float64))

    @property
    def shape(self) -> tuple[int, int]:
        return (int(self._data.shape[0]), int(self._data.shape[1]))

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._data[row, col])

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the underlying array."""
        return self._data.copy()

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def __matmul__(self, other: Matrix | Tuple) -> Matrix | Tuple:
        """Multiply by another matrix or apply this matrix to a tuple.

        Raises:
            ValueError: If the shapes are incompatible.
        """
        if isinstance(other, Matrix):
            if self.cols != other.rows:
                raise ValueError(f"Cannot multiply {self.shape} matrix by {other.shape} matrix")
            return Matrix(self._data @ other._data)
        if isinstance(other, Tuple):
            if self.shape != (4, 4):
                raise ValueError(f"Only 4x4 matrices apply to tuples, got {self.shape}")
            x, y, z, w = (self._data @ np.array(other.components(), dtype=np.float64)).tolist()
            return typed_like(other, x, y, z, w)
        return NotImplemented

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    # ------------------------------------------------------------------
    # Determinant and inversion
    # ------------------------------------------------------------------

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row.

        Raises:
            ValueError: If the matrix is not square.
        """
        self._require_square("determinant")
        if self.rows == 1:
            return float(self._data[0, 0])
        if self.rows == 2:
            d = self._data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return sum(float(self._data[0, col]) * self.cofactor(0, col) for col in range(self.cols))

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        reduced = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> Matrix:
        """Invert via cofactors.

        Returns:
            The matrix M^-1 such that M @ M^-1 is the identity.

        Raises:
            MatrixNotInvertibleError: If the determinant is zero.
        """
        det = self.determinant()
        if det == 0.0:
            raise MatrixNotInvertibleError(f"Matrix is not invertible (determinant is 0):\n{self._data}")
        n = self.rows
        result = np.empty((n, n), dtype=np.float64)
        for row in range(n):
            for col in range(n):
                # Transposed placement turns the cofactor matrix into the adjugate
                result[col, row] = self.cofactor(row, col) / det
        return Matrix(result)

    def _require_square(self, operation: str) -> None:
        if self.rows != self.cols:
            raise ValueError(f"{operation} requires a square matrix, got {self.shape}")

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()})"


IDENTITY = Matrix.identity(4)
