"""Dense square matrices for affine transforms.

Matrices here are small (2x2 up to 4x4), immutable and backed by a read-only
NumPy float64 array. Inversion uses cofactor expansion and the adjugate, which
is exact enough for the fixed small sizes used by the tracer and exposes the
intermediate minors and cofactors for testing.

Multiplication uses the ``@`` operator and is not commutative: in
``a @ b @ p`` the transform ``b`` is applied to ``p`` first.

Example:
    >>> from raytracer.core.matrix import Matrix
    >>> m = Matrix([[1, 2], [3, 4]])
    >>> m.determinant()
    -2.0
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from raytracer.core.tuples import EPSILON, Tuple

# Largest matrix size the tracer needs (homogeneous 3D transforms)
MAX_MATRIX_SIZE = 4


class NonInvertibleMatrixError(ValueError):
    """Raised when inverting a matrix whose determinant is negligible relative to its rows.

    For transforms this signals a malformed scene and is raised while the
    scene is being built, never mid-render.
    """


class Matrix:
    """An immutable N x N matrix (N <= 4).

    Args:
        rows: Row-major values, either nested sequences or a NumPy array.

    Raises:
        ValueError: If the data is not square or larger than 4x4.
    """

    __slots__ = ("_data",)

    def __init__(self, rows: Sequence[Sequence[float]] | npt.NDArray[np.float64]) -> None:
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {data.shape}")
        if data.shape[0] > MAX_MATRIX_SIZE or data.shape[0] == 0:
            raise ValueError(f"Matrix size must be in [1, {MAX_MATRIX_SIZE}], got {data.shape[0]}")
        data.flags.writeable = False
        self._data = data

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        """Create the identity matrix of the given size."""
        return cls(np.identity(size))

    @property
    def size(self) -> int:
        return int(self._data.shape[0])

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self._data[index])

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the underlying array."""
        return self._data.copy()

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    # =========================================================================
    # Comparison
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size != other.size:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    # =========================================================================
    # Multiplication
    # =========================================================================

    def __matmul__(self, other: Matrix | Tuple) -> Matrix | Tuple:
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValueError(
                    f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size} matrix"
                )
            return Matrix(self._data @ other._data)
        if isinstance(other, Tuple):
            if self.size != 4:
                raise ValueError("Only 4x4 matrices can transform tuples")
            x, y, z, w = self._data @ np.array((other.x, other.y, other.z, other.w))
            return Tuple(float(x), float(y), float(z), float(w))
        return NotImplemented

    # =========================================================================
    # Transpose, determinant, inverse
    # =========================================================================

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        if self.size < 2:
            raise ValueError("Cannot take a submatrix of a 1x1 matrix")
        reduced = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def determinant(self) -> float:
        """Compute the determinant by cofactor expansion along the first row."""
        if self.size == 1:
            return float(self._data[0, 0])
        if self.size == 2:
            d = self._data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return sum(float(self._data[0, col]) * self.cofactor(0, col) for col in range(self.size))

    def is_invertible(self) -> bool:
        """Test the determinant against the Hadamard bound of the rows.

        |det| never exceeds the product of the row lengths, so the ratio is a
        scale-free measure of singularity: uniformly tiny but well-conditioned
        transforms (a sphere of radius 0.02) stay invertible, while a zero
        row or nearly dependent rows do not.
        """
        bound = float(np.prod(np.linalg.norm(self._data, axis=1)))
        return abs(self.determinant()) > EPSILON * bound

    def inverse(self) -> Matrix:
        """Compute the inverse via the adjugate.

        Returns:
            The matrix M^-1 such that M @ M^-1 is the identity.

        Raises:
            NonInvertibleMatrixError: If the determinant is negligible relative
                to the matrix scale (see is_invertible).
        """
        det = self.determinant()
        if not self.is_invertible():
            raise NonInvertibleMatrixError(f"Matrix is not invertible (determinant = {det})")

        n = self.size
        if n == 1:
            return Matrix([[1.0 / det]])

        result = np.empty((n, n), dtype=np.float64)
        for row in range(n):
            for col in range(n):
                # Transposed assignment builds the adjugate directly
                result[col, row] = self.cofactor(row, col) / det
        return Matrix(result)


IDENTITY = Matrix.identity()
