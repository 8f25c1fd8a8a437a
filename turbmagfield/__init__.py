"""
Synthetic turbulent magnetic fields on periodic grids, intended as background fields for charged particle propagation.

turbmagfield synthesizes three-dimensional, divergence-free random vector fields in Fourier space. Power is injected
into a band of wavenumbers set by a minimum and maximum turbulence length scale with a power-law spectrum (Kolmogorov
by default), each mode receives a random polarization perpendicular to its wavevector and a random phase, and the
inverse-transformed field is rescaled to a prescribed RMS strength.
"""

from .common import correlation_length
from .field_generation import (
    InverseTransform_FFT,
    InverseTransform_FFTW,
    RandomSource,
    SpectralSampler,
    TurbulentFieldGrid,
    mean_field,
    mode_energies,
    normalize_rms,
    orthogonal_basis,
    rms_field_strength,
    shell_power_spectrum,
    spectral_divergence,
)
from .parameters import ConfigurationError, GridGeometry, TurbulenceParameters

__all__ = [
    # Field Generation
    "InverseTransform_FFT",
    "InverseTransform_FFTW",
    "RandomSource",
    "SpectralSampler",
    "TurbulentFieldGrid",
    "normalize_rms",
    "orthogonal_basis",
    # Diagnostics
    "mean_field",
    "mode_energies",
    "rms_field_strength",
    "shell_power_spectrum",
    "spectral_divergence",
    # Parameters
    "ConfigurationError",
    "GridGeometry",
    "TurbulenceParameters",
    "correlation_length",
]
