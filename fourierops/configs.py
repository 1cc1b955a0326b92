"""
Configuration objects for the real FFT backend.

Transform tuning (thread count, input reuse) is kept out of the operator
signatures and passed around as a single `TransformConfig`.
"""

import copy
from dataclasses import dataclass
from typing import Optional


@dataclass
class TransformConfig:
    """
    Configuration for the scipy.fft real transforms used by the operators.

    Attributes:
        workers: Number of threads handed to `scipy.fft`. ``None`` uses the
            scipy default (serial), negative values count back from
            ``os.cpu_count()``.
        overwrite_x: Allow the inverse transform to clobber its input. Only
            the operator's own scratch buffer is ever passed to the inverse
            transform, so this never touches caller data.

    Example:
        >>> config = TransformConfig()
        >>> threaded = config.copy(workers=4)
    """

    workers: Optional[int] = None
    overwrite_x: bool = False

    def copy(self, **overrides) -> 'TransformConfig':
        """
        Create a copy with optional parameter overrides.

        Example:
            >>> base = TransformConfig()
            >>> fast = base.copy(overwrite_x=True)
        """
        new_config = copy.copy(self)
        for key, value in overrides.items():
            if hasattr(new_config, key):
                setattr(new_config, key, value)
            else:
                raise ValueError(f"Unknown parameter: {key}")
        return new_config

    @classmethod
    def serial(cls) -> 'TransformConfig':
        """Preset for single-threaded transforms."""
        return cls(workers=1)

    @classmethod
    def parallel(cls, workers: int = -1) -> 'TransformConfig':
        """Preset using all available cores (or `workers` threads)."""
        return cls(workers=workers, overwrite_x=True)

    def fft_kwargs(self) -> dict:
        """Keyword arguments forwarded to the forward `scipy.fft` call."""
        return {"workers": self.workers}

    def ifft_kwargs(self) -> dict:
        """Keyword arguments forwarded to the inverse `scipy.fft` call."""
        return {"workers": self.workers, "overwrite_x": self.overwrite_x}
