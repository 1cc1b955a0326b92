"""
Real FFT plans used by the spectral operators.

The operators only rely on the small `RealTransform` interface, so the FFT
backend can be swapped without touching the derivative logic. The default
plans wrap `scipy.fft`. Both directions are unnormalized: the forward
transform is the plain DFT sum and the inverse omits the usual 1/n.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
from scipy.fft import irfft, rfft

from fourierops.configs import TransformConfig
from fourierops.operators import DimensionMismatch, check_vector_size


def half_spectrum_size(n: int) -> int:
    """Number of non-negative wavenumbers of a real signal of length n."""
    return n // 2 + 1


class RealTransform(ABC):
    """
    A planned transform between n real samples and their n//2 + 1 complex
    Fourier coefficients.
    """

    def __init__(self, n: int, config: Optional[TransformConfig] = None):
        """
        Args:
            n: Number of real samples.
            config: Options forwarded to the FFT backend.
        """
        if n < 1:
            raise DimensionMismatch(f"transform length must be >= 1, got {n}")
        self._n = n
        self._config = config if config is not None else TransformConfig()

    @property
    def n(self) -> int:
        """Length of the real signal."""
        return self._n

    @property
    def config(self) -> TransformConfig:
        return self._config

    @property
    @abstractmethod
    def input_size(self) -> int:
        """Expected length of the input vector."""

    @property
    @abstractmethod
    def output_size(self) -> int:
        """Length of the output vector."""

    def __len__(self) -> int:
        return self.input_size

    def _store(self, result: np.ndarray, out: Optional[np.ndarray]) -> np.ndarray:
        if out is None:
            return result
        check_vector_size("out", out, self.output_size)
        if not np.can_cast(result.dtype, out.dtype, casting="same_kind"):
            raise TypeError(
                f"cannot write {result.dtype} results into an {out.dtype} buffer"
            )
        np.copyto(out, result, casting="same_kind")
        return out


class ForwardRealTransform(RealTransform):
    """Real samples -> half-spectrum."""

    @property
    def input_size(self) -> int:
        return self.n

    @property
    def output_size(self) -> int:
        return half_spectrum_size(self.n)

    def transform(self, u, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Maps n real samples to their half-spectrum.

        Args:
            u: Real vector of length n.
            out: Optional complex buffer of length n//2 + 1 receiving the result.
        """
        check_vector_size("u", u, self.input_size)
        return self._store(self._rfft(np.asarray(u)), out)

    @abstractmethod
    def _rfft(self, u: np.ndarray) -> np.ndarray:
        pass


class InverseRealTransform(RealTransform):
    """Half-spectrum -> real samples, unnormalized."""

    @property
    def input_size(self) -> int:
        return half_spectrum_size(self.n)

    @property
    def output_size(self) -> int:
        return self.n

    def inverse_transform(self, uhat, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Maps a half-spectrum back to n real samples without dividing by n.

        Args:
            uhat: Complex vector of length n//2 + 1.
            out: Optional real buffer of length n receiving the result.
        """
        check_vector_size("uhat", uhat, self.input_size)
        return self._store(self._brfft(np.asarray(uhat)), out)

    @abstractmethod
    def _brfft(self, uhat: np.ndarray) -> np.ndarray:
        pass


class RealFFTPlan(ForwardRealTransform):
    """Forward real FFT backed by `scipy.fft.rfft`."""

    def _rfft(self, u: np.ndarray) -> np.ndarray:
        return rfft(u, n=self.n, norm="backward", **self.config.fft_kwargs())


class InverseRealFFTPlan(InverseRealTransform):
    """
    Unnormalized inverse real FFT backed by `scipy.fft.irfft`.

    ``norm="forward"`` moves the 1/n factor onto the forward direction, so
    the inverse is the bare sum. Callers fold the 1/n into their own scaling.
    """

    def _brfft(self, uhat: np.ndarray) -> np.ndarray:
        return irfft(uhat, n=self.n, norm="forward", **self.config.ifft_kwargs())


def plan_rfft(u, config: Optional[TransformConfig] = None) -> RealFFTPlan:
    """Plans a forward real FFT for vectors shaped like `u`."""
    return RealFFTPlan(len(u), config)


def plan_brfft(uhat, n: int, config: Optional[TransformConfig] = None) -> InverseRealFFTPlan:
    """
    Plans an unnormalized inverse real FFT producing `n` samples from
    half-spectra shaped like `uhat`.
    """
    if len(uhat) != half_spectrum_size(n):
        raise DimensionMismatch(
            f"a half-spectrum for {n} samples has {half_spectrum_size(n)} "
            f"entries, got {len(uhat)}"
        )
    return InverseRealFFTPlan(n, config)
