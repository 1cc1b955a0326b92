from fourierops.configs import TransformConfig

from fourierops.operators import (
    DimensionMismatch,
    GridConsistencyError,
    PeriodicDerivativeOperator,
)

from fourierops.checks import PeriodicOperatorAxiomChecks

from fourierops.grids import GridPair

from fourierops.transforms import (
    RealTransform,
    ForwardRealTransform,
    InverseRealTransform,
    RealFFTPlan,
    InverseRealFFTPlan,
    half_spectrum_size,
    plan_rfft,
    plan_brfft,
)

from fourierops.fourier import (
    FourierDerivativeOperator,
    fourier_derivative_operator,
    fourier_derivative_matrix,
    FourierSpectralViscosity,
    spectral_viscosity_operator,
)
