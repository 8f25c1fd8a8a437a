"""
Statistical diagnostics of synthesized vector fields.

All functions take a field of shape ``(n, n, n, 3)`` on a periodic, uniformly spaced grid.
"""

__all__ = ["rms_field_strength", "mean_field", "mode_energies", "shell_power_spectrum", "spectral_divergence"]

import numpy as np
import scipy.fft as fft


def _check_field(field: np.ndarray):
    if field.ndim != 4 or field.shape[-1] != 3:
        raise ValueError("Last dimension of vector field must be 3, consider reshaping your vector field.")


def rms_field_strength(field: np.ndarray) -> float:
    """Spatial root-mean-square magnitude of a vector field."""
    _check_field(field)
    return float(np.sqrt(np.mean(np.sum(field**2, axis=-1))))


def mean_field(field: np.ndarray) -> np.ndarray:
    """Spatial mean of each vector component."""
    _check_field(field)
    return field.mean(axis=(0, 1, 2))


def mode_energies(field: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    r"""Energy of every Fourier mode of a vector field.

    The energies are normalized such that their sum equals :math:`\langle |\boldsymbol{B}|^2 \rangle` (Parseval).

    Parameters
    ----------
    field : np.ndarray
        Vector field of shape ``(n, n, n, 3)``.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        Wavenumber magnitudes in units of inverse grid cells and the corresponding mode energies, both of shape
        ``(n, n, n)``.
    """
    _check_field(field)

    B_hat = fft.fftn(field, axes=(0, 1, 2), norm="forward")
    energies = np.sum(np.abs(B_hat) ** 2, axis=-1)

    K = [fft.fftfreq(field.shape[j]) for j in range(3)]
    k = np.array(np.meshgrid(*K, indexing="ij"))
    k_mag = np.sqrt(np.sum(k**2, axis=0))

    return k_mag, energies


def shell_power_spectrum(field: np.ndarray, average: bool = False) -> tuple[np.ndarray, np.ndarray]:
    """Shell-binned power spectrum of a vector field on a cubic grid.

    Modes are binned into spherical shells of unit width in index space, i.e. shell ``s`` holds the modes with
    ``round(|k| * n) == s``.

    Parameters
    ----------
    field : np.ndarray
        Vector field of shape ``(n, n, n, 3)``.
    average : bool, optional
        If True, return the mean energy per mode in each shell instead of the total shell energy, by default False.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        Shell wavenumbers (in units of inverse grid cells) and the energy in each shell. Empty shells are dropped.
    """
    k_mag, energies = mode_energies(field)
    n = field.shape[0]

    shells = np.rint(k_mag * n).astype(int).ravel()
    totals = np.bincount(shells, weights=energies.ravel())
    counts = np.bincount(shells)

    occupied = counts > 0
    spectrum = totals[occupied]
    if average:
        spectrum = spectrum / counts[occupied]

    return np.arange(totals.size)[occupied] / n, spectrum


def spectral_divergence(field: np.ndarray, spacing: float) -> np.ndarray:
    r"""Evaluate the point-wise divergence of a periodic vector field spectrally.

    .. math::
        \operatorname{div} \boldsymbol{B} = \mathcal{F}^{-1}\left[\frac{2 \pi i}{h} \boldsymbol{k} \cdot
        \widehat{\boldsymbol{B}}(\boldsymbol{k})\right]

    with :math:`\boldsymbol{k}` in units of inverse grid cells and :math:`h` the grid spacing. For a field synthesized
    from transverse Fourier modes this vanishes up to rounding, unlike a finite-difference estimate.

    Parameters
    ----------
    field : np.ndarray
        Vector field of shape ``(n, n, n, 3)``.
    spacing : float
        Grid spacing :math:`h`.

    Returns
    -------
    np.ndarray
        Point-wise divergence of shape ``(n, n, n)``.
    """
    _check_field(field)
    shape = field.shape[:3]

    K = [fft.fftfreq(shape[0]), fft.fftfreq(shape[1]), fft.rfftfreq(shape[2])]
    k = np.meshgrid(*K, indexing="ij")

    div_hat = np.zeros(k[0].shape, dtype="complex128")
    for j in range(3):
        div_hat += 2j * np.pi / spacing * k[j] * fft.rfftn(field[..., j], axes=(0, 1, 2))

    return fft.irfftn(div_hat, s=shape, axes=(0, 1, 2))
