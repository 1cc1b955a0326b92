"""
Module containing an abstract test class for periodic derivative operators.

This class defines a "contract" of tests that any concrete implementation of
`PeriodicDerivativeOperator` should pass.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import pytest
import numpy as np

from fourierops.operators import DimensionMismatch

if TYPE_CHECKING:
    from fourierops.operators import PeriodicDerivativeOperator


class PeriodicOperatorChecks:
    """
    An abstract base class for testing PeriodicDerivativeOperator
    implementations.

    To use this, create a concrete test class that inherits from this one
    and provide a pytest fixture named `operator` that returns an instance of
    the operator you want to test.
    """

    # =========================================================================
    # Pytest Fixtures
    # =========================================================================

    @pytest.fixture
    def rng(self) -> np.random.Generator:
        return np.random.default_rng(42)

    @pytest.fixture
    def x(self, operator: "PeriodicDerivativeOperator", rng) -> np.ndarray:
        """A random vector on the compute grid."""
        return rng.standard_normal(operator.size)

    @pytest.fixture
    def x2(self, operator: "PeriodicDerivativeOperator", rng) -> np.ndarray:
        """A second random vector for linearity tests."""
        return rng.standard_normal(operator.size)

    @pytest.fixture
    def y(self, operator: "PeriodicDerivativeOperator", rng) -> np.ndarray:
        """A random vector for adjoint tests."""
        return rng.standard_normal(operator.size)

    @pytest.fixture
    def a(self, rng) -> float:
        return rng.standard_normal()

    @pytest.fixture
    def b(self, rng) -> float:
        return rng.standard_normal()

    # =========================================================================
    # Core Operator Property Tests
    # =========================================================================

    def test_grid_has_one_more_node(self, operator: "PeriodicDerivativeOperator"):
        assert len(operator.grid) == operator.size + 1
        assert operator.shape == (operator.size, operator.size)

    def test_linearity(self, operator, x, x2, a, b):
        """
        Tests the linearity property: A(a*x + b*x2) = a*A(x) + b*A(x2).
        """
        lhs = operator(a * x + b * x2)
        rhs = a * operator(x) + b * operator(x2)
        assert np.allclose(lhs, rhs, atol=1e-12)

    def test_constant_is_annihilated(self, operator):
        u = np.full(operator.size, 3.7)
        assert np.allclose(operator(u), 0.0, atol=1e-12)

    def test_adjoint_identity(self, operator, x, y):
        """
        Tests <A(x), y> = s <x, A(y)> with s = 1 for symmetric operators and
        s = -1 for skew ones.
        """
        sign = 1.0 if operator.is_symmetric else -1.0
        lhs = np.dot(operator(x), y)
        rhs = sign * np.dot(x, operator(y))
        assert np.isclose(lhs, rhs)

    def test_apply_to_matches_call(self, operator, x):
        dest = np.empty(operator.size)
        assert operator.apply_to(dest, x) is None
        assert np.allclose(dest, operator(x))

    def test_apply_to_is_repeatable(self, operator, x, x2):
        """The scratch buffer must not leak state between applications."""
        first = operator(x)
        operator(x2)
        assert np.allclose(operator(x), first)

    def test_apply_to_leaves_source_untouched(self, operator, x):
        original = x.copy()
        operator(x)
        assert np.array_equal(x, original)

    def test_matrix_matches_action(self, operator, x):
        assert np.allclose(operator.matrix @ x, operator(x))

    def test_self_check(self, operator, rng):
        operator.check(n_checks=3, rng=rng)

    @pytest.mark.parametrize("offset", [-1, 1])
    def test_source_size_mismatch(self, operator, offset):
        dest = np.zeros(operator.size)
        source = np.zeros(operator.size + offset)
        with pytest.raises(DimensionMismatch):
            operator.apply_to(dest, source)

    @pytest.mark.parametrize("offset", [-1, 1])
    def test_dest_size_mismatch(self, operator, offset):
        dest = np.zeros(operator.size + offset)
        source = np.zeros(operator.size)
        with pytest.raises(DimensionMismatch):
            operator.apply_to(dest, source)

    @pytest.mark.parametrize("dtype", [np.int64, np.int32, np.bool_])
    def test_non_floating_dest_rejected(self, operator, x, dtype):
        dest = np.zeros(operator.size, dtype=dtype)
        with pytest.raises(TypeError):
            operator.apply_to(dest, x)
        assert np.all(dest == 0)

    def test_single_precision_dest_accepted(self, operator, x):
        dest = np.empty(operator.size, dtype=np.float32)
        operator.apply_to(dest, x)
        assert np.allclose(dest, operator(x), rtol=1e-5, atol=1e-4)

    def test_two_dimensional_source_rejected(self, operator):
        with pytest.raises(DimensionMismatch):
            operator(np.zeros((operator.size, 1)))
