"""
Weighted least-squares polynomial fit in the neighbourhood of one point.
"""
from dataclasses import dataclass
import math
import numpy as np
from scipy import linalg

from .errors import InvalidInputError, SingularFitError


def check_deriv(order):
    """Validate a derivative order: a non-negative integer."""
    if isinstance(order, (bool, np.bool_)) or not isinstance(order, (int, np.integer)) or order < 0:
        raise InvalidInputError(f"Derivative order must be a non-negative integer, got {order!r}.")
    return int(order)


@dataclass(frozen=True, eq=False)
class LocalFit:
    """
    Result of the local regression at a single query point.

    Attributes
    ----------
    x0 : float
        Query point; the polynomial is expressed in powers of ``x - x0``.
    coef : np.ndarray
        Coefficients ``beta_0, ..., beta_degree``.
    index : np.ndarray
        Indices of the observations inside the window.
    weights : np.ndarray
        Weights used for those observations (kernel times observation weight).
    h_eff : float
        Largest distance from ``x0`` inside the window.
    """

    x0: float
    coef: np.ndarray
    index: np.ndarray
    weights: np.ndarray
    h_eff: float

    @property
    def degree(self):
        return self.coef.shape[0] - 1

    @property
    def value(self):
        """Fitted value at ``x0``: the intercept of the centred polynomial."""
        return float(self.coef[0])

    def derivative(self, order=1):
        """
        Estimate of the ``order``-th derivative at ``x0``.

        Orders above the local degree are zero.
        """
        order = check_deriv(order)
        if order > self.degree:
            return 0.0
        return float(self.coef[order] * math.factorial(order))


def weighted_polyfit(x_local, y_local, weights, degree, h_eff, query_x, rcond=1e-10):
    """
    Fit a polynomial in ``x_local`` by weighted least squares.

    The local coordinate is divided by ``h_eff`` before solving so the
    conditioning test does not depend on the units of ``x``; the returned
    coefficients are in the original units.

    Parameters
    ----------
    x_local : np.ndarray
        Centred predictor values ``x_i - query_x``.
    y_local : np.ndarray
        Responses.
    weights : np.ndarray
        Non-negative weights.
    degree : int
        Polynomial degree.
    h_eff : float
        Scale of ``x_local``.
    query_x : float
        Used only in error messages.
    rcond : float
        A design matrix whose smallest singular value is below ``rcond``
        times its largest is rejected.

    Returns
    -------
    np.ndarray
        Coefficients in increasing powers.
    """
    total = weights.sum()
    if total <= 0:
        raise SingularFitError(query_x, "all weights in the window are zero")

    if degree == 0:
        return np.array([np.dot(weights, y_local) / total])

    scale = h_eff if h_eff > 0 else 1.0
    z = x_local / scale

    sqrt_w = np.sqrt(weights)
    X_des = np.vander(z, degree + 1, increasing=True)
    X_w = X_des * sqrt_w[:, None]
    y_w = y_local * sqrt_w

    beta, _, _, sv = linalg.lstsq(X_w, y_w, lapack_driver='gelsd')
    if sv[0] <= 0 or sv[-1] < rcond * sv[0]:
        raise SingularFitError(
            query_x,
            f"condition number exceeds {1 / rcond:.3g} (x values in the window may coincide)",
        )
    return beta / scale ** np.arange(degree + 1)
