"""
Compute/evaluate grid pairs for uniformly sampled periodic functions.

The compute grid holds the N nodes used by the transforms and includes the
left boundary only. The evaluate grid adds the right boundary and so holds
N + 1 nodes. Both share origin and spacing.
"""

from __future__ import annotations

import numpy as np

from fourierops.operators import DimensionMismatch, GridConsistencyError


def _readonly(x) -> np.ndarray:
    x = np.array(x)
    x.flags.writeable = False
    return x


def _spacing_tolerance(compute: np.ndarray, evaluate: np.ndarray):
    """
    Tolerances for comparing node spacings.

    Rounding of each node scales with the magnitude of the nodes, not with
    the spacing, so the absolute tolerance follows the largest endpoint.
    """
    real_type = np.result_type(compute.dtype, evaluate.dtype, np.float32)
    eps = np.finfo(real_type).eps
    scale = max(abs(float(evaluate[0])), abs(float(evaluate[-1])))
    return 4 * eps, 4 * eps * scale


class GridPair:
    """
    An immutable pair of uniform grids on one period [xmin, xmax).

    The constructor accepts raw arrays and validates every invariant of the
    pair. Use `GridPair.uniform` to build one from the domain bounds.
    """

    def __init__(self, compute, evaluate):
        """
        Args:
            compute: The N nodes of the compute grid.
            evaluate: The N + 1 nodes of the evaluate grid.

        Raises:
            GridConsistencyError: If the pair is inconsistent.
        """
        compute = _readonly(compute)
        evaluate = _readonly(evaluate)

        if compute.ndim != 1 or evaluate.ndim != 1:
            raise GridConsistencyError("grids must be one-dimensional")
        if len(compute) == 0:
            raise GridConsistencyError("the compute grid must not be empty")
        if len(compute) != len(evaluate) - 1:
            raise GridConsistencyError(
                f"compute grid has {len(compute)} nodes but evaluate grid has "
                f"{len(evaluate)}; expected one more evaluate node"
            )
        if compute[0] != evaluate[0]:
            raise GridConsistencyError(
                f"grids start at different points: {compute[0]} != {evaluate[0]}"
            )
        if not compute[-1] < evaluate[-1]:
            raise GridConsistencyError(
                "the compute grid must exclude the right boundary "
                f"({compute[-1]} >= {evaluate[-1]})"
            )

        step = (evaluate[-1] - evaluate[0]) / (len(evaluate) - 1)
        rtol, atol = _spacing_tolerance(compute, evaluate)
        if not np.allclose(np.diff(evaluate), step, rtol=rtol, atol=atol):
            raise GridConsistencyError("the evaluate grid is not uniform")
        if len(compute) > 1 and not np.allclose(
            np.diff(compute), step, rtol=rtol, atol=atol
        ):
            raise GridConsistencyError(
                "the compute grid spacing differs from the evaluate grid spacing"
            )

        self._compute = compute
        self._evaluate = evaluate
        self._step = step

    @classmethod
    def uniform(cls, xmin: float, xmax: float, n: int, dtype=np.float64) -> "GridPair":
        """
        Builds the grid pair for `n` nodes on [xmin, xmax).

        Args:
            xmin: Left boundary, included in both grids.
            xmax: Right boundary, included only in the evaluate grid.
            n: Number of compute nodes.
            dtype: Floating point type of the nodes.
        """
        if n < 1:
            raise DimensionMismatch(f"the number of nodes must be >= 1, got {n}")
        if not xmin < xmax:
            raise ValueError("xmin must be < xmax")
        evaluate = np.linspace(xmin, xmax, n + 1, dtype=dtype)
        return cls(evaluate[:-1], evaluate)

    @property
    def compute(self) -> np.ndarray:
        """The N compute nodes (read-only)."""
        return self._compute

    @property
    def evaluate(self) -> np.ndarray:
        """The N + 1 evaluate nodes (read-only)."""
        return self._evaluate

    @property
    def size(self) -> int:
        return len(self._compute)

    @property
    def xmin(self) -> float:
        return self._evaluate[0]

    @property
    def xmax(self) -> float:
        return self._evaluate[-1]

    @property
    def period(self) -> float:
        return self.xmax - self.xmin

    @property
    def step(self) -> float:
        """The common node spacing."""
        return self._step

    @property
    def dtype(self):
        return self._evaluate.dtype
