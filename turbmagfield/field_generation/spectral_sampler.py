"""
This module implements the sampling of a band-limited, power-law, transverse vector spectrum.

Notes
-----

The sampler operates on the reduced half-grid of shape ``(n, n, n // 2 + 1)``: the synthesized field is real, so its
Fourier transform is Hermitian-symmetric and the remaining half of frequency space is implied.
"""

import logging

import numpy as np
from tqdm import tqdm

from ..common import power_law_amplitude
from ..loggers import simple_fprint
from ..parameters import ConfigurationError, GridGeometry, TurbulenceParameters
from .orthogonal_basis import orthogonal_basis
from .random_source import RandomSource


def wavenumbers(samples: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Discrete wavenumbers along each axis of the half-grid, in units of inverse grid cells.

    The two full axes run from 0 up to just under 1/2 and then wrap to negative values (``np.fft.fftfreq``); the
    reduced last axis keeps the first ``samples // 2 + 1`` entries of the same sequence.

    Parameters
    ----------
    samples : int
        Number of grid cells along each edge.

    Returns
    -------
    tuple[np.ndarray, np.ndarray, np.ndarray]
        Wavenumbers along x, y and the reduced z axis.
    """
    K = np.fft.fftfreq(samples)
    return K, K, K[: samples // 2 + 1]


class SpectralSampler:
    r"""
    Sampler of the Fourier coefficients of a turbulent vector field.

    For each wavevector :math:`\boldsymbol{k}` of the half-grid with :math:`k_{\min} \leq |\boldsymbol{k}| \leq
    k_{\max}` a complex vector coefficient

    .. math::
        \widehat{\boldsymbol{B}}(\boldsymbol{k}) = \xi\, |\boldsymbol{k}|^{\alpha / 2}
        \left(\hat{e}_1 \cos\theta + \hat{e}_2 \sin\theta\right) e^{i \phi}

    is drawn, where :math:`\hat{e}_1, \hat{e}_2` span the plane perpendicular to :math:`\boldsymbol{k}`,
    :math:`\theta` and :math:`\phi` are uniform on :math:`[0, 2\pi)` and :math:`\xi` is standard normal. Since the
    polarization is perpendicular to :math:`\boldsymbol{k}` the field is solenoidal. Wavevectors outside of the band
    get a zero coefficient.

    Wavevectors are visited in row-major order over ``(ix, iy, iz)`` and each in-band wavevector consumes exactly
    three draws, ``uniform()``, ``normal()``, ``uniform()``, in that order; out-of-band wavevectors consume none.
    This ordering fixes the field obtained for a given seed.
    """

    def __init__(self, geometry: GridGeometry, turbulence: TurbulenceParameters):
        """
        Parameters
        ----------
        geometry : GridGeometry
            Grid on which the field is synthesized.
        turbulence : TurbulenceParameters
            Band limits and spectral index of the field.
        """
        self.geometry = geometry
        self.turbulence = turbulence

        self.k_min = turbulence.k_min(geometry.spacing)
        self.k_max = turbulence.k_max(geometry.spacing)

        kx, ky, kz = wavenumbers(geometry.samples)
        self.wavevectors = np.stack(np.meshgrid(kx, ky, kz, indexing="ij"), axis=-1)
        self.magnitudes = np.linalg.norm(self.wavevectors, axis=-1)

    def in_band_mask(self) -> np.ndarray:
        """Boolean mask over the half-grid of the wavevectors inside the turbulence band."""
        k = self.magnitudes
        return ~((k < self.k_min) | (k > self.k_max))

    @property
    def num_modes(self) -> int:
        """Number of wavevectors of the half-grid inside the turbulence band."""
        return int(np.count_nonzero(self.in_band_mask()))

    def check_band(self):
        """Reject a turbulence band that contains no discrete wavevector.

        Raises
        ------
        ConfigurationError
            If no wavevector of the grid falls inside the band, in which case the synthesized field would vanish
            identically and could not be normalized.
        """
        if self.num_modes == 0:
            raise ConfigurationError(
                f"Turbulence band [{self.k_min:.6g}, {self.k_max:.6g}] (inverse cells) contains no wavevector of a grid "
                f"with {self.geometry.samples} samples and spacing {self.geometry.spacing}; adjust l_min and l_max."
            )

    def sample(
        self, random_source: RandomSource, verbose: bool = False
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Draw the Fourier coefficients of one field realization.

        Parameters
        ----------
        random_source : RandomSource
            Source of all random draws.
        verbose : bool, optional
            Whether to display a progress bar over the in-band wavevectors, by default False.

        Returns
        -------
        tuple[np.ndarray, np.ndarray, np.ndarray]
            Complex coefficients of the x, y and z field components, each of shape ``geometry.half_shape``.

        Raises
        ------
        ConfigurationError
            If the turbulence band is empty or contains the zero wavevector; raised before any random draw.
        """
        self.check_band()

        mask = self.in_band_mask()
        # the zero wavevector must never carry power, otherwise the field acquires a mean
        if mask[0, 0, 0]:
            raise ConfigurationError(
                f"Turbulence band [{self.k_min:.6g}, {self.k_max:.6g}] contains the zero wavevector; "
                "k_min must be positive."
            )

        # boolean indexing preserves row-major order
        k_vectors = self.wavevectors[mask]
        k = self.magnitudes[mask]
        n_modes = k.size

        simple_fprint(f"Sampling {n_modes} in-band wavevectors", loc="SpectralSampler", level=logging.DEBUG)

        draws = np.empty((n_modes, 3))
        for i in tqdm(range(n_modes), desc="Sampling modes", disable=not verbose):
            draws[i, 0] = random_source.uniform()
            draws[i, 1] = random_source.normal()
            draws[i, 2] = random_source.uniform()

        e1, e2 = orthogonal_basis(k_vectors)

        theta = 2 * np.pi * draws[:, 0]
        b = e1 * np.cos(theta)[:, np.newaxis] + e2 * np.sin(theta)[:, np.newaxis]
        b *= (draws[:, 1] * power_law_amplitude(k, self.turbulence.spectral_index))[:, np.newaxis]

        phase = 2 * np.pi * draws[:, 2]

        B_hat = np.zeros(tuple(self.geometry.half_shape) + (3,), dtype="complex128")
        B_hat[mask] = b * (np.cos(phase) + 1j * np.sin(phase))[:, np.newaxis]

        return tuple(np.ascontiguousarray(B_hat[..., i]) for i in range(3))
