"""Several dataclasses that make it easy to pass around parameters."""

from dataclasses import dataclass
from numbers import Integral
from typing import Union

import numpy as np

__all__ = ["ConfigurationError", "TurbulenceParameters", "GridGeometry"]


#######################################################################################################
# 	Turbulence spectrum parameters
#######################################################################################################


@dataclass(frozen=True)
class TurbulenceParameters:
    r"""Define the turbulence spectrum of a synthesized field.

    The spectral amplitude of every Fourier mode with wavenumber :math:`k` inside the turbulence band
    :math:`[k_{\min}, k_{\max}]` has variance proportional to :math:`k^{\alpha}`, where :math:`\alpha` is the
    spectral index. Modes outside of the band carry no power.

    Args
    ----
    l_min : float
        Minimum turbulence length scale; sets the upper edge of the band, :math:`k_{\max} = h / l_{\min}`.
    l_max : float
        Maximum turbulence length scale; sets the lower edge of the band, :math:`k_{\min} = h / l_{\max}`.
    b_rms : float
        Target root-mean-square field strength after normalization.
    spectral_index : float
        Power-law exponent :math:`\alpha` of the spectrum, by default :math:`-11/3` (Kolmogorov).
    """

    l_min: float
    l_max: float
    b_rms: float
    spectral_index: float = -11.0 / 3.0

    def __post_init__(self):
        for name in ("l_min", "l_max", "b_rms", "spectral_index"):
            if not np.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite.")

        if self.l_min <= 0 or self.l_max <= 0:
            raise ValueError("Turbulence length scales l_min and l_max must be positive.")

        if self.l_min >= self.l_max:
            raise ValueError("Must have l_min < l_max for the turbulence band.")

        if self.b_rms <= 0:
            raise ValueError("RMS field strength b_rms must be positive.")

    def k_min(self, spacing: float) -> float:
        """Lower edge of the turbulence band in units of inverse grid cells."""
        return spacing / self.l_max

    def k_max(self, spacing: float) -> float:
        """Upper edge of the turbulence band in units of inverse grid cells."""
        return spacing / self.l_min


#######################################################################################################
# 	Grid geometry
#######################################################################################################


@dataclass(frozen=True, eq=False)
class GridGeometry:
    r"""Define a cubic, uniformly spaced grid of :math:`n^3` cells.

    Args
    ----
    origin : Union[tuple[float, float, float], np.ndarray, list[float]]
        Position of the first grid cell; coerced to a float numpy array of length 3.
    samples : int
        Number of cells :math:`n` along each edge of the grid.
    spacing : float
        Edge length :math:`h` of a single cell.
    """

    origin: Union[tuple[float, float, float], "np.ndarray", list[float]]
    samples: int
    spacing: float

    def __post_init__(self):
        origin = np.asarray(self.origin, dtype=float)
        if origin.shape != (3,):
            raise ValueError("Grid origin must be a 3-vector.")
        object.__setattr__(self, "origin", origin)

        if isinstance(self.samples, bool) or not isinstance(self.samples, Integral):
            raise ValueError("Number of samples must be an integer.")

        if self.samples <= 0:
            raise ValueError("Number of samples must be positive.")

        if not np.isfinite(self.spacing) or self.spacing <= 0:
            raise ValueError("Grid spacing must be positive.")

    @property
    def shape(self) -> tuple[int, int, int]:
        """Shape of a real-space scalar component."""
        n = int(self.samples)
        return (n, n, n)

    @property
    def half_shape(self) -> tuple[int, int, int]:
        """Shape of the reduced (Hermitian) frequency-space representation."""
        n = int(self.samples)
        return (n, n, n // 2 + 1)

    @property
    def extent(self) -> float:
        """Physical edge length of the grid, which is also its period."""
        return self.samples * self.spacing

    @property
    def num_cells(self) -> int:
        return int(self.samples) ** 3


class ConfigurationError(ValueError):
    """Raised when a parameter combination leaves no Fourier mode inside the turbulence band."""
