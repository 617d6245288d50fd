"""Exceptions raised by the local polynomial smoother."""
import numpy as np


class SmoothingError(Exception):
    """Base class for all smoothing errors."""


class InvalidInputError(SmoothingError, ValueError):
    """
    The dataset or the configuration is outside the valid domain.

    Raised before any computation: empty dataset, non-finite values,
    mismatched shapes, negative weights, span outside (0, 1], non-positive
    bandwidth, degree outside {0, 1, 2} or an unknown kernel.
    """


class InsufficientDataError(SmoothingError):
    """
    Fewer than ``degree + 1`` observations fall inside the window.

    Parameters
    ----------
    query_x : float
        The query point being fitted.
    n_points : int
        Number of observations kept by the window.
    degree : int
        Degree of the local polynomial.
    """

    def __init__(self, query_x, n_points, degree):
        self.query_x = query_x
        self.n_points = n_points
        self.degree = degree
        super().__init__(
            f"Window at x={query_x!r} holds {n_points} observation(s); "
            f"a degree {degree} fit needs at least {degree + 1}."
        )


class SingularFitError(SmoothingError, np.linalg.LinAlgError):
    """
    The weighted design matrix of a local fit is numerically singular.
    """

    def __init__(self, query_x, reason):
        self.query_x = query_x
        super().__init__(f"Singular local fit at x={query_x!r}: {reason}")
