"""Inverse spectral transforms for the ``TurbulentFieldGrid`` class."""

import logging
import os

import numpy as np
import scipy.fft as fft

from ..loggers import simple_fprint
from ..parameters import GridGeometry

METHOD_FFT = "fft"
METHOD_FFTW = "fftw"

TRANSFORM_METHODS = (METHOD_FFT, METHOD_FFTW)


def hermitian_symmetrize(coefficients: np.ndarray) -> np.ndarray:
    r"""Make the self-conjugate planes of a half-grid spectrum Hermitian.

    In the reduced representation only the planes ``iz = 0`` and, for even ``n``, ``iz = n // 2`` contain both a
    wavevector :math:`\boldsymbol{k}` and its mirror :math:`-\boldsymbol{k}`. On these planes the coefficients are
    replaced by :math:`\frac{1}{2}\left(\widehat{B}(\boldsymbol{k}) + \widehat{B}^*(-\boldsymbol{k})\right)`, which is
    the part of the spectrum that a complex-to-real transform can represent. Afterwards every backend returns the same
    real field.

    If both coefficients are perpendicular to :math:`\boldsymbol{k}` the average is as well, so a transverse spectrum
    stays transverse away from the Nyquist planes. On a Nyquist plane (``ix``, ``iy`` or ``iz`` equal to ``n // 2``)
    the stored mirror entry belongs to the aliased wavevector rather than to :math:`-\boldsymbol{k}`, and the
    projected coefficient is in general not transverse.

    Parameters
    ----------
    coefficients : np.ndarray
        Complex coefficients of shape ``(n, n, n // 2 + 1)``.

    Returns
    -------
    np.ndarray
        Symmetrized copy of ``coefficients``.
    """
    n = coefficients.shape[0]
    out = np.array(coefficients, dtype="complex128", copy=True)

    planes = [0]
    if n % 2 == 0 and n > 1:
        planes.append(n // 2)

    for iz in planes:
        plane = out[:, :, iz]
        # mirrored[ix, iy] = plane[-ix % n, -iy % n]
        mirrored = np.roll(plane[::-1, ::-1], 1, axis=(0, 1))
        out[:, :, iz] = 0.5 * (plane + np.conj(mirrored))

    return out


class InverseTransform_base:
    r"""Meta class for the complex-to-real inverse transforms.

    Each transform maps the complex half-grid coefficients of one field component to the real field on the grid. All
    transforms use the unnormalized backward convention

    .. math::
        B(\boldsymbol{x}) = \sum_{\boldsymbol{k}} \widehat{B}(\boldsymbol{k})
        e^{2 \pi i \boldsymbol{k} \cdot \boldsymbol{x}},

    i.e. a positive exponent and no :math:`1/n^3` factor. The absolute scale is removed by the normalization step in
    any case, but the sign and scaling convention must agree between backends.
    """

    def __init__(self, geometry: GridGeometry):
        """
        Parameters
        ----------
        geometry : GridGeometry
            The grid to transform onto.
        """
        self.shape = geometry.shape
        self.half_shape = geometry.half_shape

    def __call__(self, coefficients: np.ndarray) -> np.ndarray:
        """Transform one component to real space."""
        if coefficients.shape != tuple(self.half_shape):
            raise ValueError(f"Expected coefficients of shape {self.half_shape}, got {coefficients.shape}.")

        return self._transform(hermitian_symmetrize(coefficients))

    def _transform(self, coefficients: np.ndarray) -> np.ndarray:
        raise NotImplementedError("Subclasses must implement this method.")


class InverseTransform_FFT(InverseTransform_base):
    """Inverse transform using ``scipy.fft``, a simpler interface than FFTW that needs no planning."""

    def _transform(self, coefficients):
        return fft.irfftn(coefficients, s=self.shape, axes=(0, 1, 2), norm="forward")


class InverseTransform_FFTW(InverseTransform_base):
    """Inverse transform with FFTW.

    The plan is created with the ``"FFTW_ESTIMATE", "FFTW_DESTROY_INPUT"`` flags. The transform is multi-threaded
    across ``OMP_NUM_THREADS`` threads, or a single thread if that variable is unset. The aligned scratch buffers
    belong to this object and are released with it.
    """

    def __init__(self, geometry: GridGeometry):
        super().__init__(geometry)

        import pyfftw

        # WARN: User might have OMP_NUM_THREADS set to something invalid here
        n_cpu = int(os.environ.get("OMP_NUM_THREADS", 1))

        flags = ("FFTW_ESTIMATE", "FFTW_DESTROY_INPUT")
        self.fft_x = pyfftw.empty_aligned(self.shape, dtype="float64")
        self.fft_y = pyfftw.empty_aligned(self.half_shape, dtype="complex128")
        self.ifft_plan = pyfftw.FFTW(
            self.fft_y,
            self.fft_x,
            axes=(0, 1, 2),
            direction="FFTW_BACKWARD",
            flags=flags,
            threads=n_cpu,
            normalise_idft=False,
        )

    def _transform(self, coefficients):
        self.fft_y[:] = coefficients
        self.ifft_plan()
        return np.array(self.fft_x, copy=True)


def make_inverse_transform(method: str, geometry: GridGeometry) -> InverseTransform_base:
    """Initialize an inverse transform.

    Parameters
    ----------
    method : str
        One of "fft", "fftw".
    geometry : GridGeometry
        The grid to transform onto.

    Returns
    -------
    InverseTransform_base
        The transform object.

    Raises
    ------
    ValueError
        If method is not one of the above.
    """
    simple_fprint(f"Using inverse transform method '{method}'", loc="InverseTransform", level=logging.DEBUG)

    if method == METHOD_FFT:
        return InverseTransform_FFT(geometry)

    elif method == METHOD_FFTW:
        return InverseTransform_FFTW(geometry)

    else:
        raise ValueError(f'Unknown inverse transform method "{method}".')
