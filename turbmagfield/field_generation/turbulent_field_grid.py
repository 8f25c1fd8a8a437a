"""
This module implements the turbulent magnetic field grid forward facing API
"""

import warnings
from pathlib import Path
from typing import Optional, Union

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from ..common import correlation_length, is_singular_spectral_index
from ..loggers import equals_border_fprint, simple_fprint
from ..parameters import GridGeometry, TurbulenceParameters
from .inverse_transforms import TRANSFORM_METHODS, make_inverse_transform
from .normalization import normalize_rms
from .random_source import RandomSource
from .spectral_sampler import SpectralSampler


class TurbulentFieldGrid:
    r"""
    .. _turbulent-field-grid-reference:
    Cubic grid holding a random, divergence-free vector field with a band-limited power-law spectrum, used as a
    turbulent magnetic field.

    The field is synthesized in Fourier space,

    .. math::
        \boldsymbol{B}(\boldsymbol{x}) = w \sum_{k_{\min} \leq |\boldsymbol{k}| \leq k_{\max}}
        \xi_{\boldsymbol{k}} |\boldsymbol{k}|^{\alpha / 2} \hat{\boldsymbol{b}}_{\boldsymbol{k}}
        e^{i (2 \pi \boldsymbol{k} \cdot \boldsymbol{x} / h + \phi_{\boldsymbol{k}})},

    where :math:`\hat{\boldsymbol{b}}_{\boldsymbol{k}} \perp \boldsymbol{k}` is a random unit polarization,
    :math:`\xi_{\boldsymbol{k}}` is standard normal, :math:`\phi_{\boldsymbol{k}}` is a uniform random phase, the band is
    :math:`k_{\min} = h / l_{\max}` to :math:`k_{\max} = h / l_{\min}` in units of inverse cells, and the weight
    :math:`w` sets the spatial RMS field strength to :math:`B_{\mathrm{rms}}`.

    The field is generated once at construction and regenerated in full by :py:meth:`set_seed`. Regeneration replaces
    the stored array with a new one; it is not safe to call concurrently with reads of the field.
    """

    def __init__(
        self,
        origin: Union[tuple[float, float, float], np.ndarray, list[float]],
        samples: int,
        spacing: float,
        l_min: float,
        l_max: float,
        b_rms: float,
        spectral_index: float = -11.0 / 3.0,
        seed: Optional[int] = None,
        transform_method: str = "fft",
        verbose: bool = False,
    ):
        """
        Parameters
        ----------
        origin : Union[tuple[float, float, float], np.ndarray, list[float]]
            Position of the first grid cell.
        samples : int
            Number of cells along each edge of the cubic grid.
        spacing : float
            Edge length of a single cell.
        l_min : float
            Minimum turbulence length scale.
        l_max : float
            Maximum turbulence length scale.
        b_rms : float
            Target RMS field strength.
        spectral_index : float, optional
            Power-law exponent of the spectrum, by default -11/3 (Kolmogorov).
        seed : Optional[int], optional
            Pseudo-random number generator seed, by default None. See ``np.random.RandomState``.
        transform_method : str, optional
            Inverse transform backend, one of ``"fft"`` (``scipy.fft``) or ``"fftw"`` (``pyfftw``), by default
            ``"fft"``.
        verbose : bool, optional
            Whether to display a progress bar while sampling, by default False.

        Raises
        ------
        ValueError
            If any parameter is invalid, e.g. ``l_min >= l_max`` or a non-positive ``samples``, ``spacing`` or
            ``b_rms``, or if ``transform_method`` is unknown.
        ConfigurationError
            If no discrete wavevector of the grid falls inside the turbulence band. This is raised before any random
            draw or transform.
        """
        self.geometry = GridGeometry(origin=origin, samples=samples, spacing=spacing)
        self.turbulence = TurbulenceParameters(l_min=l_min, l_max=l_max, b_rms=b_rms, spectral_index=spectral_index)

        if transform_method not in TRANSFORM_METHODS:
            raise ValueError(f"transform_method must be one of: {', '.join(TRANSFORM_METHODS)}")
        self.transform_method = transform_method
        self.verbose = verbose

        if is_singular_spectral_index(spectral_index):
            warnings.warn(
                f"Spectral index {spectral_index} makes the closed-form correlation length singular; "
                "get_correlation_length() will raise.",
                UserWarning,
            )

        self.sampler = SpectralSampler(self.geometry, self.turbulence)
        self.sampler.check_band()

        self.random = RandomSource(seed)

        self._interpolator = None
        self._field = self._synthesize()

    def _synthesize(self) -> np.ndarray:
        """Run one full synthesis and return the new field array.

        Frequency-space coefficients and transform buffers are local to this call.
        """
        n = self.geometry.samples
        simple_fprint(
            f"Synthesizing {n}^3 turbulent field with {self.sampler.num_modes} modes in band "
            f"[{self.sampler.k_min:.4g}, {self.sampler.k_max:.4g}]",
            loc="TurbulentFieldGrid",
        )

        coefficients = self.sampler.sample(self.random, verbose=self.verbose)

        transform = make_inverse_transform(self.transform_method, self.geometry)
        components = tuple(transform(c) for c in coefficients)

        return normalize_rms(components, self.turbulence.b_rms)

    def set_seed(self, seed: int):
        """Reseed the random source and regenerate the whole field.

        Parameters and geometry are unchanged. The previous field is only replaced once the new one is complete.

        Parameters
        ----------
        seed : int
            Any integer; values outside the unsigned 32-bit range wrap modulo 2**32.
        """
        equals_border_fprint(f"Regenerating field with seed {seed}", loc="TurbulentFieldGrid")
        self.random.seed(seed)
        field = self._synthesize()
        self._field = field
        self._interpolator = None

    ### Accessors
    @property
    def field(self) -> np.ndarray:
        """Read-only view of the field, of shape ``(n, n, n, 3)``."""
        view = self._field.view()
        view.flags.writeable = False
        return view

    @property
    def origin(self) -> np.ndarray:
        return self.geometry.origin.copy()

    @property
    def samples(self) -> int:
        return self.geometry.samples

    @property
    def spacing(self) -> float:
        return self.geometry.spacing

    @property
    def l_min(self) -> float:
        return self.turbulence.l_min

    @property
    def l_max(self) -> float:
        return self.turbulence.l_max

    def get_rms_field_strength(self) -> float:
        """Target RMS field strength the field is normalized to."""
        return self.turbulence.b_rms

    def get_power_spectral_index(self) -> float:
        return self.turbulence.spectral_index

    def get_correlation_length(self) -> float:
        """Closed-form correlation length of the spectrum; see :py:func:`turbmagfield.common.correlation_length`."""
        return correlation_length(self.turbulence.l_min, self.turbulence.l_max, self.turbulence.spectral_index)

    ### Field lookup
    def get_field(self, position: np.ndarray) -> np.ndarray:
        """Field at arbitrary positions by trilinear interpolation, with the grid repeated periodically.

        Cell ``(i, j, k)`` sits at ``origin + (i, j, k) * spacing`` and the grid repeats with period
        ``samples * spacing`` along every axis.

        Parameters
        ----------
        position : np.ndarray
            A single position of shape ``(3,)`` or several of shape ``(m, 3)``.

        Returns
        -------
        np.ndarray
            Field vectors of shape ``(3,)`` or ``(m, 3)`` respectively.
        """
        position = np.asarray(position, dtype=float)
        if position.shape[-1:] != (3,) or position.ndim > 2:
            raise ValueError("Positions must be of shape (3,) or (m, 3).")

        if self._interpolator is None:
            n, h = self.geometry.samples, self.geometry.spacing
            # one wrapped layer of cells so that the last cell interpolates towards the first
            nodes = np.arange(n + 1) * h
            padded = np.pad(self._field, ((0, 1), (0, 1), (0, 1), (0, 0)), mode="wrap")
            self._interpolator = RegularGridInterpolator((nodes, nodes, nodes), padded, method="linear")

        relative = np.mod(position - self.geometry.origin, self.geometry.extent)
        return self._interpolator(relative)

    ### Output
    def save_to_vtk(self, filepath: Union[str, Path] = "./turbulent_field") -> str:
        """Save the field as VTK image cell data.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path of the output file without extension.

        Returns
        -------
        str
            Full path of the written ``.vti`` file.
        """
        from pyevtk.hl import imageToVTK

        h = float(self.geometry.spacing)
        field_vtk = tuple([np.copy(self._field[..., i], order="C") for i in range(3)])

        cellData = {"B": field_vtk}

        return imageToVTK(
            str(filepath),
            origin=tuple(float(x) for x in self.geometry.origin),
            spacing=(h, h, h),
            cellData=cellData,
        )
