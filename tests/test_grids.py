"""
Tests for the compute/evaluate grid pair.
"""

import pytest
import numpy as np

from fourierops.grids import GridPair
from fourierops.operators import DimensionMismatch, GridConsistencyError


@pytest.mark.parametrize("n", [1, 2, 7, 16])
@pytest.mark.parametrize("xmin, xmax", [(0.0, 2 * np.pi), (-1.0, 3.5)])
def test_uniform_grid_invariants(n, xmin, xmax):
    grids = GridPair.uniform(xmin, xmax, n)

    assert len(grids.compute) == n
    assert len(grids.evaluate) == n + 1
    assert grids.compute[0] == grids.evaluate[0] == xmin
    assert grids.compute[-1] < grids.evaluate[-1]
    assert np.isclose(grids.evaluate[-1], xmax)
    assert np.isclose(grids.step, (xmax - xmin) / n)
    assert np.isclose(grids.period, xmax - xmin)
    assert grids.size == n


def test_compute_grid_is_evaluate_grid_without_right_boundary():
    grids = GridPair.uniform(0.0, 1.0, 4)
    assert np.allclose(grids.compute, [0.0, 0.25, 0.5, 0.75])
    assert np.allclose(grids.evaluate, [0.0, 0.25, 0.5, 0.75, 1.0])


def test_grids_are_read_only():
    grids = GridPair.uniform(0.0, 1.0, 4)
    with pytest.raises(ValueError):
        grids.compute[0] = 1.0
    with pytest.raises(ValueError):
        grids.evaluate[0] = 1.0


def test_raw_arrays_are_copied():
    evaluate = np.linspace(0.0, 1.0, 5)
    grids = GridPair(evaluate[:-1], evaluate)
    evaluate[0] = -1.0
    assert grids.evaluate[0] == 0.0


def test_single_precision():
    grids = GridPair.uniform(np.float32(0), np.float32(1), 8, dtype=np.float32)
    assert grids.dtype == np.float32


def test_non_positive_size_rejected():
    with pytest.raises(DimensionMismatch):
        GridPair.uniform(0.0, 1.0, 0)


def test_reversed_bounds_rejected():
    with pytest.raises(ValueError):
        GridPair.uniform(1.0, 0.0, 4)


class TestRawConstructor:
    """Each invariant of the pair is checked when building from raw arrays."""

    def test_length_mismatch(self):
        evaluate = np.linspace(0.0, 1.0, 5)
        with pytest.raises(GridConsistencyError):
            GridPair(evaluate[:-2], evaluate)

    def test_different_origin(self):
        evaluate = np.linspace(0.0, 1.0, 5)
        with pytest.raises(GridConsistencyError):
            GridPair(evaluate[:-1] + 0.1, evaluate)

    def test_different_spacing(self):
        evaluate = np.linspace(0.0, 1.0, 5)
        compute = np.linspace(0.0, 0.9, 4)
        with pytest.raises(GridConsistencyError):
            GridPair(compute, evaluate)

    def test_compute_grid_must_exclude_right_boundary(self):
        evaluate = np.array([0.0, -1.0])
        with pytest.raises(GridConsistencyError, match="right boundary"):
            GridPair(np.array([0.0]), evaluate)

    def test_non_uniform_evaluate_grid(self):
        evaluate = np.array([0.0, 0.1, 0.5, 1.0])
        with pytest.raises(GridConsistencyError):
            GridPair(evaluate[:-1], evaluate)

    def test_empty_compute_grid(self):
        with pytest.raises(GridConsistencyError):
            GridPair(np.array([]), np.array([0.0]))

    def test_consistency_error_is_a_dimension_mismatch(self):
        assert issubclass(GridConsistencyError, DimensionMismatch)
        assert issubclass(DimensionMismatch, ValueError)


class TestSpacingTolerance:
    """Uniformity is judged relative to the rounding of the node values."""

    def test_single_precision_with_many_nodes(self):
        grids = GridPair.uniform(0.0, 2 * np.pi, 4096, dtype=np.float32)
        assert grids.size == 4096
        assert grids.dtype == np.float32

    def test_domain_far_from_origin(self):
        grids = GridPair.uniform(1e9, 1e9 + 1.0, 1000)
        assert grids.size == 1000
        assert np.isclose(grids.step, 1e-3)

    def test_non_uniform_grid_with_tiny_period(self):
        with pytest.raises(GridConsistencyError, match="not uniform"):
            GridPair([0.0, 1e-10, 5e-10], [0.0, 1e-10, 5e-10, 6e-10])

    def test_compute_spacing_mismatch_with_tiny_period(self):
        evaluate = np.linspace(0.0, 4e-10, 5)
        compute = np.array([0.0, 0.9e-10, 1.8e-10, 2.7e-10])
        with pytest.raises(GridConsistencyError, match="compute grid spacing"):
            GridPair(compute, evaluate)
