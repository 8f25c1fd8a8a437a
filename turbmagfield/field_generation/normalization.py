"""Normalization of a synthesized vector field to a target RMS strength."""

from typing import Sequence

import numpy as np

from ..parameters import ConfigurationError


def mean_square(components: Sequence[np.ndarray]) -> float:
    r"""Spatial average :math:`\langle B_x^2 + B_y^2 + B_z^2 \rangle` over all cells."""
    total = sum(np.sum(np.square(c)) for c in components)
    return float(total / components[0].size)


def normalize_rms(components: Sequence[np.ndarray], b_rms: float) -> np.ndarray:
    r"""Assemble the vector field and rescale it to the RMS strength ``b_rms``.

    Every cell is multiplied by :math:`w = B_{\mathrm{rms}} / \sqrt{\langle |\boldsymbol{B}|^2 \rangle}`, so that
    afterwards the spatial RMS magnitude equals ``b_rms`` up to rounding.

    Parameters
    ----------
    components : Sequence[np.ndarray]
        The real x, y and z components, each of shape ``(n, n, n)``.
    b_rms : float
        Target RMS field strength.

    Returns
    -------
    np.ndarray
        The normalized field of shape ``(n, n, n, 3)``.

    Raises
    ------
    ConfigurationError
        If the field vanishes identically, in which case no rescaling can reach ``b_rms``.
    """
    if len(components) != 3:
        raise ValueError("Expected the three components of a vector field.")

    ms = mean_square(components)
    if not ms > 0.0:
        raise ConfigurationError(
            "Synthesized field vanishes identically and cannot be normalized; the turbulence band holds no power."
        )

    weight = b_rms / np.sqrt(ms)

    return np.stack(components, axis=-1) * weight
