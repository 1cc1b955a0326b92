"""
Fourier spectral derivative and spectral viscosity operators on periodic
uniform grids.

Both operators apply a diagonal scaling in frequency space between a real
FFT and an unnormalized inverse real FFT. The 1/N normalization missing
from the inverse transform is folded into the scaling factors.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from fourierops.configs import TransformConfig
from fourierops.grids import GridPair
from fourierops.operators import (
    DimensionMismatch,
    PeriodicDerivativeOperator,
)
from fourierops.transforms import (
    ForwardRealTransform,
    InverseRealTransform,
    half_spectrum_size,
    plan_brfft,
    plan_rfft,
)

logger = logging.getLogger(__name__)


def _float_type(*values, dtype=None):
    if dtype is not None:
        return np.dtype(dtype)
    return np.result_type(np.float32, *[np.asarray(v).dtype for v in values])


class FourierDerivativeOperator(PeriodicDerivativeOperator):
    """
    First derivative of periodic samples computed through the Fourier
    expansion via real discrete Fourier transforms.

    The operator owns a complex scratch buffer which every application
    overwrites, so one instance must not be applied concurrently.
    """

    def __init__(
        self,
        jac: float,
        grids: GridPair,
        tmp: np.ndarray,
        forward: ForwardRealTransform,
        inverse: InverseRealTransform,
    ):
        """
        Args:
            jac: Scaling factor 2*pi / (xmax - xmin) / N. The 1/N accounts for
                the unnormalized inverse transform.
            grids: The compute/evaluate grid pair.
            tmp: Complex scratch buffer of length N//2 + 1.
            forward: Forward real transform of N samples.
            inverse: Unnormalized inverse real transform to N samples.

        Raises:
            DimensionMismatch: If the sizes of the components disagree.
        """
        if len(inverse) != len(tmp):
            raise DimensionMismatch(
                f"scratch buffer has {len(tmp)} entries, the inverse transform "
                f"expects {len(inverse)}"
            )
        if len(inverse) != len(forward) // 2 + 1:
            raise DimensionMismatch(
                f"inverse transform expects {len(inverse)} coefficients, the "
                f"forward transform produces {len(forward) // 2 + 1}"
            )
        if grids.size != len(forward):
            raise DimensionMismatch(
                f"compute grid has {grids.size} nodes, the forward transform "
                f"expects {len(forward)}"
            )
        if inverse.output_size != len(forward):
            raise DimensionMismatch(
                f"inverse transform produces {inverse.output_size} samples, the "
                f"forward transform expects {len(forward)}"
            )

        self._jac = grids.dtype.type(jac)
        self._grids = grids
        self._tmp = tmp
        self._forward = forward
        self._inverse = inverse

        # i*k*jac for every wavenumber below the Nyquist mode
        k = np.arange(len(tmp) - 1)
        self._multipliers = (1j * self._jac * k).astype(tmp.dtype)

        logger.debug(
            "FourierDerivativeOperator on [%s, %s] with %d modes, jac=%.6e",
            grids.xmin,
            grids.xmax,
            grids.size,
            self._jac,
        )

    @classmethod
    def uniform(
        cls,
        xmin: float,
        xmax: float,
        n: int,
        /,
        *,
        dtype=None,
        config: Optional[TransformConfig] = None,
    ) -> "FourierDerivativeOperator":
        """
        Constructs the operator on a uniform grid between `xmin` and `xmax`
        using `n` Fourier modes.

        Args:
            xmin: Left boundary of the period.
            xmax: Right boundary of the period.
            n: Number of modes (compute nodes), at least 1.
            dtype: Floating point type. Defaults to the precision of the bounds.
            config: Options for the FFT backend.
        """
        if n < 1:
            raise DimensionMismatch(f"the number of modes must be >= 1, got {n}")

        real_type = _float_type(xmin, xmax, dtype=dtype)
        complex_type = np.result_type(real_type, np.complex64)

        jac = 2 * real_type.type(np.pi) / (xmax - xmin) / n
        grids = GridPair.uniform(xmin, xmax, n, dtype=real_type)
        u = np.zeros(n, dtype=real_type)
        forward = plan_rfft(u, config)
        uhat = np.zeros(half_spectrum_size(n), dtype=complex_type)
        inverse = plan_brfft(uhat, n, config)

        return cls(jac, grids, uhat, forward, inverse)

    @property
    def jac(self) -> float:
        """The scaling factor 2*pi / period / N."""
        return self._jac

    @property
    def grids(self) -> GridPair:
        return self._grids

    @property
    def grid(self) -> np.ndarray:
        return self._grids.evaluate

    @property
    def size(self) -> int:
        return self._grids.size

    @property
    def derivative_order(self) -> int:
        return 1

    @property
    def is_symmetric(self) -> bool:
        return False

    @property
    def scratch(self) -> np.ndarray:
        """The complex work buffer shared with wrapping operators."""
        return self._tmp

    @property
    def forward(self) -> ForwardRealTransform:
        return self._forward

    @property
    def inverse(self) -> InverseRealTransform:
        return self._inverse

    def apply_to(self, dest: np.ndarray, source: np.ndarray) -> None:
        """
        Writes the first derivative of `source` into `dest`.

        The Nyquist mode is dropped rather than differentiated.
        """
        self._check_apply_sizes(dest, source)
        tmp = self._tmp

        self._forward.transform(source, out=tmp)
        tmp[:-1] *= self._multipliers
        tmp[-1] = 0
        self._inverse.inverse_transform(tmp, out=dest)


def fourier_derivative_operator(
    xmin: float,
    xmax: float,
    n: int,
    /,
    *,
    dtype=None,
    config: Optional[TransformConfig] = None,
) -> FourierDerivativeOperator:
    """
    Constructs the `FourierDerivativeOperator` on a uniform grid between
    `xmin` and `xmax` using `n` Fourier modes.
    """
    return FourierDerivativeOperator.uniform(xmin, xmax, n, dtype=dtype, config=config)


def fourier_derivative_matrix(n: int, xmin: float = 0.0, xmax: float = 2 * np.pi) -> np.ndarray:
    """
    Computes the Fourier derivative matrix with respect to the nodal basis,
    see Kopriva (2009) Implementing Spectral Methods for PDEs, Algorithm 18.

    Off the diagonal D[i, j] = (-1)^(i+j) cot((i-j) pi / n) pi / (xmax - xmin).
    The diagonal is minus the off-diagonal row sum, so every row sums to
    zero. For even `n` this reproduces `FourierDerivativeOperator`.

    Args:
        n: Number of nodes.
        xmin: Left boundary of the period.
        xmax: Right boundary of the period.

    Returns:
        The dense (n, n) matrix.
    """
    if n < 1:
        raise DimensionMismatch(f"the number of nodes must be >= 1, got {n}")
    if not xmin < xmax:
        raise ValueError("xmin must be < xmax")

    real_type = _float_type(xmin, xmax)
    jac_2 = real_type.type(np.pi) / (xmax - xmin)

    i, j = np.indices((n, n))
    off = i != j
    sign = np.where((i + j) % 2 == 0, 1, -1)

    D = np.zeros((n, n), dtype=real_type)
    D[off] = sign[off] / np.tan((i - j)[off] * np.pi / n) * jac_2
    D[np.diag_indices(n)] = -D.sum(axis=1)
    return D


class FourierSpectralViscosity(PeriodicDerivativeOperator):
    """
    Spectral viscosity on a periodic grid: a diffusive operator damping
    the Fourier modes at and above a cutoff wavenumber.

    The operator wraps a `FourierDerivativeOperator` and reuses its grids,
    transforms and scratch buffer. Applying either one overwrites the
    buffer, so they must not be applied concurrently.
    """

    def __init__(self, strength: float, cutoff: int, D: FourierDerivativeOperator):
        """
        Args:
            strength: The viscosity strength epsilon > 0.
            cutoff: 1-based index of the first damped mode, at least 1.
            D: The derivative operator whose machinery is reused.
        """
        if not strength > 0:
            raise ValueError(f"strength must be positive, got {strength}")
        if cutoff < 1:
            raise DimensionMismatch(f"cutoff must be >= 1, got {cutoff}")

        self._strength = D.grids.dtype.type(strength)
        self._cutoff = int(cutoff)
        self._D = D
        self._coefficients = self._compute_coefficients()

        logger.debug(
            "FourierSpectralViscosity with %d modes, strength=%.6e, cutoff=%d",
            D.size,
            self._strength,
            self._cutoff,
        )

    def _compute_coefficients(self) -> np.ndarray:
        D = self._D
        n = D.size
        jac = n * D.jac**2  # squared for the second derivative, n for the inverse transform

        coefficients = np.zeros(len(D.scratch), dtype=D.grids.dtype)
        k = np.arange(self._cutoff - 1, len(coefficients))
        if len(k) == 0:
            return coefficients

        # the first damped wavenumber k = cutoff - 1 zeroes the denominator
        damped = k[1:]
        ratio = (n - damped) / (damped - self._cutoff + 1)
        coefficients[self._cutoff:] = (
            -self._strength * damped**2 * jac * np.exp(-(ratio**2))
        )
        return coefficients

    @property
    def strength(self) -> float:
        return self._strength

    @property
    def cutoff(self) -> int:
        return self._cutoff

    @property
    def coefficients(self) -> np.ndarray:
        """Real damping factor per non-negative wavenumber (read-only view)."""
        view = self._coefficients.view()
        view.flags.writeable = False
        return view

    @property
    def derivative_operator(self) -> FourierDerivativeOperator:
        return self._D

    @property
    def grid(self) -> np.ndarray:
        return self._D.grid

    @property
    def size(self) -> int:
        return self._D.size

    @property
    def derivative_order(self) -> int:
        return self._D.derivative_order

    @property
    def is_symmetric(self) -> bool:
        return True

    def apply_to(self, dest: np.ndarray, source: np.ndarray) -> None:
        """Writes the spectral viscosity applied to `source` into `dest`."""
        self._check_apply_sizes(dest, source)
        D = self._D
        tmp = D.scratch
        if len(tmp) != len(self._coefficients):
            raise DimensionMismatch(
                f"scratch buffer has {len(tmp)} entries but there are "
                f"{len(self._coefficients)} coefficients"
            )

        D.forward.transform(source, out=tmp)
        tmp *= self._coefficients
        D.inverse.inverse_transform(tmp, out=dest)

    def plot_coefficients(
        self,
        fig: Optional[Figure] = None,
        ax: Optional[Axes] = None,
        **kwargs,
    ) -> Tuple[Figure, Axes]:
        """
        Plots the damping coefficients against the wavenumber.

        Args:
            fig: An existing Matplotlib Figure object. Defaults to None.
            ax: An existing Matplotlib Axes object. Defaults to None.
            **kwargs: Keyword arguments forwarded to `ax.plot()`.

        Returns:
            A tuple (figure, axes) containing the plot objects.
        """
        figsize = kwargs.pop("figsize", (10, 8))

        if fig is None:
            fig = plt.figure(figsize=figsize)
        if ax is None:
            ax = fig.add_subplot()

        ax.plot(np.arange(len(self._coefficients)), self._coefficients, **kwargs)
        ax.axvline(self._cutoff - 1, color="k", linestyle="--", linewidth=0.8)
        ax.set_xlabel("wavenumber k")
        ax.set_ylabel("damping coefficient")
        return fig, ax


def spectral_viscosity_operator(
    D: FourierDerivativeOperator,
    strength: Optional[float] = None,
    cutoff: Optional[int] = None,
) -> FourierSpectralViscosity:
    """
    Builds a `FourierSpectralViscosity` on top of `D`.

    Args:
        D: The derivative operator to wrap.
        strength: Viscosity strength, defaults to 1/N.
        cutoff: First damped mode, defaults to round(sqrt(N)).
    """
    n = D.size
    if strength is None:
        strength = 1 / n
    if cutoff is None:
        cutoff = int(round(np.sqrt(n)))
    return FourierSpectralViscosity(strength, cutoff, D)
