"""Implementations of common functions.

Specifically, the power-law spectral weighting and the closed-form correlation length of a band-limited power-law
spectrum.
"""

__all__ = ["correlation_length", "is_singular_spectral_index", "power_law_amplitude", "singular_spectral_indices"]

import numpy as np


def singular_spectral_indices() -> tuple[float, float]:
    r"""Spectral indices at which the closed-form correlation length is singular.

    With :math:`a = -\alpha - 2` the closed form has removable singularities at :math:`a = 0` and :math:`a = 1`,
    i.e. at :math:`\alpha = -2` and :math:`\alpha = -3`.
    """
    return (-2.0, -3.0)


def is_singular_spectral_index(spectral_index: float, atol: float = 1e-12) -> bool:
    """Whether ``spectral_index`` lies within ``atol`` of one of :py:func:`singular_spectral_indices`."""
    return any(abs(spectral_index - s) <= atol for s in singular_spectral_indices())


def correlation_length(l_min: float, l_max: float, spectral_index: float) -> float:
    r"""Evaluate the correlation length of a power-law spectrum confined to :math:`[l_{\min}, l_{\max}]`.

    .. math::
        L_c = \frac{l_{\max}}{2} \frac{a - 1}{a} \frac{1 - r^a}{1 - r^{a - 1}},
        \quad a = -\alpha - 2, \quad r = \frac{l_{\min}}{l_{\max}}.

    As :math:`r \to 1` the correlation length tends to :math:`l_{\max} / 2`.

    Parameters
    ----------
    l_min : float
        Minimum turbulence length scale.
    l_max : float
        Maximum turbulence length scale.
    spectral_index : float
        Power-law exponent :math:`\alpha` of the spectrum.

    Returns
    -------
    float
        The correlation length, in the same units as ``l_min`` and ``l_max``.

    Raises
    ------
    ValueError
        If the length scales do not satisfy ``0 < l_min < l_max``.
    ValueError
        If ``spectral_index`` is one of the singular values -2 or -3 (:math:`a = 0` or :math:`a = 1`), at which the
        closed form is undefined. No limit is taken; callers must avoid these indices.
    """
    if l_min <= 0 or l_max <= 0 or l_min >= l_max:
        raise ValueError("Correlation length requires 0 < l_min < l_max.")

    if is_singular_spectral_index(spectral_index):
        raise ValueError(
            f"Closed-form correlation length is singular for spectral index {spectral_index}; "
            f"avoid spectral indices {singular_spectral_indices()}."
        )

    a = -spectral_index - 2.0
    r = l_min / l_max
    return float(l_max / 2 * (a - 1) / a * (1 - r**a) / (1 - r ** (a - 1)))


def power_law_amplitude(k: np.ndarray, spectral_index: float) -> np.ndarray:
    r"""Evaluate the amplitude weighting :math:`k^{\alpha / 2}` of a Fourier mode.

    The variance of a mode's amplitude then scales as :math:`k^{\alpha}`.

    Parameters
    ----------
    k : np.ndarray
        Wavenumber magnitudes; must be strictly positive.
    spectral_index : float
        Power-law exponent :math:`\alpha`.

    Returns
    -------
    np.ndarray
        Amplitude weights of the same shape as ``k``.
    """
    return np.power(k, spectral_index / 2.0)
