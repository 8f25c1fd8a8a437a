__all__ = [
    "RandomSource",
    "orthogonal_basis",
    "is_parallel",
    "SpectralSampler",
    "wavenumbers",
    "InverseTransform_base",
    "InverseTransform_FFT",
    "InverseTransform_FFTW",
    "hermitian_symmetrize",
    "make_inverse_transform",
    "mean_square",
    "normalize_rms",
    "TurbulentFieldGrid",
    "rms_field_strength",
    "mean_field",
    "mode_energies",
    "shell_power_spectrum",
    "spectral_divergence",
]

from .diagnostics import mean_field, mode_energies, rms_field_strength, shell_power_spectrum, spectral_divergence
from .inverse_transforms import (InverseTransform_base, InverseTransform_FFT, InverseTransform_FFTW,
                                 hermitian_symmetrize, make_inverse_transform)
from .normalization import mean_square, normalize_rms
from .orthogonal_basis import is_parallel, orthogonal_basis
from .random_source import RandomSource
from .spectral_sampler import SpectralSampler, wavenumbers
from .turbulent_field_grid import TurbulentFieldGrid
