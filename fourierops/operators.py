"""
Module containing the common base class for derivative-type operators on
periodic grids, together with the exceptions raised on size mismatches.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from fourierops.checks import PeriodicOperatorAxiomChecks


class DimensionMismatch(ValueError):
    """Raised when vector, buffer, grid or transform sizes disagree."""


class GridConsistencyError(DimensionMismatch):
    """Raised when a compute/evaluate grid pair violates its invariants."""


def check_vector_size(name: str, x, n: int) -> None:
    """
    Raise `DimensionMismatch` unless `x` is a 1-D vector of length `n`.

    Args:
        name: Label used in the error message.
        x: The array to check.
        n: The required length.
    """
    shape = np.shape(x)
    if len(shape) != 1 or shape[0] != n:
        raise DimensionMismatch(
            f"{name} must be a vector of length {n}, got shape {shape}"
        )


class PeriodicDerivativeOperator(PeriodicOperatorAxiomChecks, ABC):
    """
    Abstract base for linear operators acting on samples of a periodic
    function on a uniform grid.

    Concrete operators implement `apply_to`, writing the result into a
    caller-supplied vector. Calling the operator allocates the destination
    and returns it. The dense matrix representation is built column by
    column from the action on unit vectors.
    """

    @property
    @abstractmethod
    def derivative_order(self) -> int:
        """Order of the derivative approximated by the operator."""

    @property
    @abstractmethod
    def is_symmetric(self) -> bool:
        """True if the operator is symmetric in the Euclidean inner product."""

    @property
    @abstractmethod
    def grid(self) -> np.ndarray:
        """The evaluate grid, including both boundaries."""

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of nodes of the compute grid."""

    @abstractmethod
    def apply_to(self, dest: np.ndarray, source: np.ndarray) -> None:
        """Write the action of the operator on `source` into `dest`."""

    @property
    def shape(self) -> Tuple[int, int]:
        """Shape of the operator's matrix representation."""
        return (self.size, self.size)

    @property
    def matrix(self) -> np.ndarray:
        """Dense matrix representation relative to the nodal basis."""
        return self._compute_matrix()

    def _compute_matrix(self) -> np.ndarray:
        n = self.size
        matrix = np.zeros((n, n), dtype=self.grid.dtype)
        cx = np.zeros(n, dtype=self.grid.dtype)
        column = np.empty(n, dtype=self.grid.dtype)
        for i in range(n):
            cx[i] = 1
            self.apply_to(column, cx)
            matrix[:, i] = column
            cx[i] = 0
        return matrix

    def _check_apply_sizes(self, dest, source) -> None:
        check_vector_size("source", source, self.size)
        check_vector_size("dest", dest, self.size)
        dtype = np.asarray(dest).dtype
        if not np.issubdtype(dtype, np.floating):
            raise TypeError(f"dest must have a floating point dtype, got {dtype}")

    def __call__(self, source: np.ndarray) -> np.ndarray:
        """Action of the operator on a vector, returned as a new array."""
        source = np.asarray(source)
        check_vector_size("source", source, self.size)
        dest = np.empty(self.size, dtype=np.result_type(source.dtype, self.grid.dtype))
        self.apply_to(dest, source)
        return dest
