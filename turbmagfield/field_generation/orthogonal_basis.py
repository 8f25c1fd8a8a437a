"""Construction of orthonormal bases perpendicular to wavevectors."""

__all__ = ["REFERENCE_DIRECTION", "PARALLEL_TOLERANCE", "orthogonal_basis", "is_parallel"]

import numpy as np

REFERENCE_DIRECTION = np.array([1.0, 1.0, 1.0])
PARALLEL_TOLERANCE = 1e-6

# Fixed pair perpendicular to (1, 1, 1), used where the cross product with the reference degenerates.
_DEGENERATE_E1 = np.array([-1.0, 1.0, 0.0]) / np.sqrt(2.0)
_DEGENERATE_E2 = np.array([1.0, 1.0, -2.0]) / np.sqrt(6.0)


def is_parallel(k: np.ndarray, direction: np.ndarray = REFERENCE_DIRECTION, tol: float = PARALLEL_TOLERANCE):
    """Test whether vectors are parallel (or anti-parallel) to ``direction``.

    Two vectors are considered parallel if the angle between them (or between one and the negation of the other) is
    below ``tol`` radians.

    Parameters
    ----------
    k : np.ndarray
        Vectors of shape ``(3,)`` or ``(..., 3)``; must be non-zero.
    direction : np.ndarray, optional
        Reference direction, by default ``(1, 1, 1)``.
    tol : float, optional
        Angular tolerance in radians, by default 1e-6.

    Returns
    -------
    Union[bool, np.ndarray]
        Boolean, or boolean array of shape ``k.shape[:-1]``.
    """
    k = np.asarray(k, dtype=float)
    cos_angle = np.abs(k @ direction) / (np.linalg.norm(k, axis=-1) * np.linalg.norm(direction))
    angle = np.arccos(np.clip(cos_angle, 0.0, 1.0))
    return angle < tol


def orthogonal_basis(k: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    r"""Build two unit vectors spanning the plane perpendicular to ``k``.

    For a generic wavevector, :math:`\hat{e}_1 \propto r \times k` and :math:`\hat{e}_2 \propto k \times \hat{e}_1`
    with the reference direction :math:`r = (1, 1, 1)`. The cross product vanishes when ``k`` is parallel to
    :math:`r`; in that case the fixed pair :math:`(-1, 1, 0) / \sqrt{2}` and :math:`(1, 1, -2) / \sqrt{6}` is
    returned instead, which is perpendicular to :math:`r` by construction. Since the polarization angle is drawn
    uniformly afterwards, the orientation of the pair within the plane is irrelevant.

    Parameters
    ----------
    k : np.ndarray
        A single non-zero wavevector of shape ``(3,)``, or a stack of them of shape ``(..., 3)``.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        The pair ``(e1, e2)``, each of the same shape as ``k``; ``e1``, ``e2`` and ``k`` are mutually perpendicular
        and ``e1``, ``e2`` have unit length.

    Raises
    ------
    ValueError
        If the last axis of ``k`` is not of length 3, or if any wavevector is zero.
    """
    k = np.asarray(k, dtype=float)
    if k.shape[-1:] != (3,):
        raise ValueError("Wavevectors must have 3 components along the last axis.")

    if np.any(np.linalg.norm(k, axis=-1) == 0.0):
        raise ValueError("Cannot build a basis perpendicular to the zero wavevector.")

    degenerate = np.asarray(is_parallel(k))

    with np.errstate(divide="ignore", invalid="ignore"):
        e1 = np.cross(REFERENCE_DIRECTION, k)
        e2 = np.cross(k, e1)
        e1 = e1 / np.linalg.norm(e1, axis=-1, keepdims=True)
        e2 = e2 / np.linalg.norm(e2, axis=-1, keepdims=True)

    e1 = np.where(degenerate[..., np.newaxis], _DEGENERATE_E1, e1)
    e2 = np.where(degenerate[..., np.newaxis], _DEGENERATE_E2, e2)

    return e1, e2
