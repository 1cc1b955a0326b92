"""
Provides a self-checking mechanism for periodic derivative operators.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


class PeriodicOperatorAxiomChecks:
    """
    A mixin for checking the properties of a periodic derivative operator.

    Verifies linearity, that constants lie in the kernel, and the adjoint
    identity in the Euclidean inner product: skew-symmetry for odd
    operators, symmetry for diffusive ones.
    """

    def _check_linearity(self, x, y, a: float, b: float):
        """Verifies the linearity property: L(ax + by) = a*L(x) + b*L(y)"""
        lhs = self(a * x + b * y)
        rhs = a * self(x) + b * self(y)

        relative_error = np.linalg.norm(lhs - rhs) / (np.linalg.norm(rhs) + 1e-12)
        if relative_error > 1e-9:
            raise AssertionError(
                f"Linearity check failed: L(ax+by) != aL(x)+bL(y). Relative error: {relative_error:.2e}"
            )

    def _check_constant_annihilation(self, c: float):
        """Verifies that the operator maps constants to zero."""
        u = np.full(self.size, c, dtype=self.grid.dtype)
        result = self(u)
        scale = abs(c) * np.sqrt(self.size) + 1e-12
        error = np.linalg.norm(result) / scale
        if error > 1e-9:
            raise AssertionError(
                f"Constant annihilation failed: |L(c)| / |c| = {error:.2e}"
            )

    def _check_adjoint_definition(self, x, y):
        """Verifies <L(x), y> = s <x, L(y)> with s = +1 (symmetric) or -1 (skew)."""
        sign = 1.0 if self.is_symmetric else -1.0
        lhs = np.dot(self(x), y)
        rhs = sign * np.dot(x, self(y))
        scale = np.linalg.norm(self(x)) * np.linalg.norm(y) + 1e-12
        if abs(lhs - rhs) / scale > 1e-9:
            kind = "Symmetry" if self.is_symmetric else "Skew-symmetry"
            raise AssertionError(
                f"{kind} check failed: <L(x),y> = {lhs:.4e}, but s<x,L(y)> = {rhs:.4e}"
            )

    def check(self, n_checks: int = 5, rng: Optional[np.random.Generator] = None) -> None:
        """
        Runs randomized checks for linearity, constants and adjoints.

        Args:
            n_checks: The number of randomized trials to perform.
            rng: Random generator for the trial vectors.

        Raises:
            AssertionError: If any of the checks fail.
        """
        if rng is None:
            rng = np.random.default_rng()
        logger.info(
            "Running %d randomized checks for %s...", n_checks, self.__class__.__name__
        )
        for _ in range(n_checks):
            x1 = rng.standard_normal(self.size)
            x2 = rng.standard_normal(self.size)
            y = rng.standard_normal(self.size)
            a, b = rng.standard_normal(2)

            self._check_linearity(x1, x2, a, b)
            self._check_constant_annihilation(a)
            self._check_adjoint_definition(x1, y)
        logger.info("All %d periodic operator checks passed.", n_checks)
