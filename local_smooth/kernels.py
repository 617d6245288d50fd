"""
Weight kernels on the normalised distance ``u = d / h``.

Every kernel is vectorised over numpy arrays and vanishes for ``|u| > 1``.
"""
import numpy as np

from .errors import InvalidInputError


def box(u):
    """Uniform kernel: ``W(u) = 1`` for ``|u| <= 1``."""
    u = np.abs(np.asarray(u, dtype=float))
    return np.where(u <= 1, 1.0, 0.0)


def tricube(u):
    """Tri-weight (tricube) kernel: ``W(u) = (1 - |u|^3)^3`` for ``|u| <= 1``."""
    u = np.abs(np.asarray(u, dtype=float))
    return np.clip(1 - u**3, 0, None)**3


def gaussian(u):
    """Gaussian kernel ``W(u) = exp(-u^2 / 2)``, truncated to ``|u| <= 1``."""
    u = np.abs(np.asarray(u, dtype=float))
    return np.where(u <= 1, np.exp(-0.5 * u**2), 0.0)


KERNELS = {
    'box': box,
    'uniform': box,
    'tricube': tricube,
    'tri-weight': tricube,
    'triweight': tricube,
    'gaussian': gaussian,
    'normal': gaussian,
}


def get_kernel(kernel):
    """
    Resolve a kernel name or pass a callable through.

    Parameters
    ----------
    kernel : str or callable
        One of the names in ``KERNELS`` (case-insensitive) or a function
        mapping normalised distances to non-negative weights.

    Returns
    -------
    callable
    """
    if callable(kernel):
        return kernel
    if isinstance(kernel, str):
        try:
            return KERNELS[kernel.lower()]
        except KeyError:
            pass
    raise InvalidInputError(
        f"Unknown kernel {kernel!r}; expected a callable or one of {sorted(KERNELS)}."
    )
