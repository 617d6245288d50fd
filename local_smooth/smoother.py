from dataclasses import dataclass, field, replace
import numpy as np

from .curve import FittedCurve
from .dataset import as_dataset
from .errors import InsufficientDataError, InvalidInputError
from .kernels import get_kernel
from .local_fit import LocalFit, check_deriv, weighted_polyfit
from .logger import local_smooth_logger as logger
from .window import Span, make_window


@dataclass
class LocalPolynomialSmoother:
    """
    Local weighted polynomial regression (loess) and its bin-smoother
    special case.

    The estimate at a query point ``x0`` is the intercept of a polynomial
    in ``x - x0`` fitted by weighted least squares to the observations in
    a window around ``x0``, with weights given by a kernel of the
    distance to ``x0``. Degree 0 is the (kernel-weighted) bin mean.

    Parameters
    ----------
    degree : int, default=1
        Local polynomial degree, 0, 1 or 2.
    window : FixedBandwidth or Span, optional
        Window policy. Mutually exclusive with ``span`` and ``bandwidth``.
    span : float, optional
        Fraction of the data in each window, ``0 < span <= 1``.
    bandwidth : float, optional
        Absolute half-width of the window, ``> 0``.
    kernel : str or callable, optional
        Kernel of the normalised distance. Defaults to ``'tricube'`` for
        degree 1 and 2, ``'box'`` for degree 0.
    rcond : float, default=1e-10
        Relative singular value tolerance of the local design matrix.

    Notes
    -----
    If none of ``window``, ``span`` and ``bandwidth`` is given the window
    is ``Span(0.75)``. After construction ``window`` always holds the
    resolved policy.
    """

    degree: int = 1
    window: object = None
    span: float = None
    bandwidth: float = None
    kernel: object = None
    rcond: float = 1e-10

    _kernel_fn: object = field(init=False, default=None, repr=False, compare=False)
    _default_kernel: bool = field(init=False, default=False, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.degree, bool) or self.degree not in (0, 1, 2):
            raise InvalidInputError(f"Degree must be 0, 1 or 2, got {self.degree!r}.")
        self.degree = int(self.degree)

        self.window = make_window(self.window, self.span, self.bandwidth)
        if isinstance(self.window, Span):
            self.span, self.bandwidth = self.window.s, None
        else:
            self.span, self.bandwidth = None, self.window.h

        self._default_kernel = self.kernel is None
        if self._default_kernel:
            self.kernel = 'box' if self.degree == 0 else 'tricube'
        self._kernel_fn = get_kernel(self.kernel)

        if not self.rcond > 0:
            raise InvalidInputError(f"`rcond` must be positive, got {self.rcond!r}.")

    def with_options(self, **changes):
        """
        Copy of this smoother with some options changed.

        Passing ``span`` or ``bandwidth`` replaces the current window.
        """
        if {'span', 'bandwidth', 'window'} & set(changes):
            changes.setdefault('window', None)
            changes.setdefault('span', None)
            changes.setdefault('bandwidth', None)
        else:
            changes.update(span=None, bandwidth=None)
        if self._default_kernel and 'kernel' not in changes:
            # a default kernel follows the degree
            changes['kernel'] = None
        return replace(self, **changes)

    def local_fit(self, dataset, query_x):
        """
        Local regression at one query point.

        Parameters
        ----------
        dataset : Dataset or iterable of (x, y)
            Observations.
        query_x : float
            Point at which to estimate the trend.

        Returns
        -------
        LocalFit
        """
        data = as_dataset(dataset)
        query_x = self._check_query(query_x)
        return self._local_fit(data, query_x)

    def fit(self, dataset, query_x):
        """
        Fitted value ``y_hat(query_x)``.

        Raises
        ------
        InvalidInputError
            Invalid dataset or non-finite ``query_x``.
        InsufficientDataError
            Fewer than ``degree + 1`` observations in the window.
        SingularFitError
            The weighted local design matrix is singular.
        """
        return self.local_fit(dataset, query_x).value

    def fit_curve(self, dataset, query_xs, n_jobs=1, on_error='raise'):
        """
        Lazy sequence of fitted values, one per query point.

        Parameters
        ----------
        dataset : Dataset or iterable of (x, y)
            Observations.
        query_xs : array-like
            Query points.
        n_jobs : int, default=1
            Number of worker threads used when the curve is evaluated.
        on_error : {'raise', 'nan'}
            What to do with points whose local fit fails.

        Returns
        -------
        FittedCurve
        """
        data = as_dataset(dataset)
        query_xs = np.array(query_xs, dtype=float, ndmin=1)
        if query_xs.ndim != 1:
            raise InvalidInputError(f"Query points must be one-dimensional, got shape {query_xs.shape}.")
        if not np.all(np.isfinite(query_xs)):
            raise InvalidInputError("Query points contain NaN or infinite values.")
        return FittedCurve(self, data, query_xs, n_jobs=n_jobs, on_error=on_error)

    def predict(self, dataset, query_xs, deriv=0, n_jobs=1, on_error='raise'):
        """
        Fitted values (or derivative estimates) at ``query_xs`` as an array.

        Parameters
        ----------
        deriv : int, default=0
            Derivative order; 0 gives the fitted values. Orders above
            ``degree`` give zeros.
        """
        deriv = check_deriv(deriv)
        curve = self.fit_curve(dataset, query_xs, n_jobs=n_jobs, on_error=on_error)
        return curve.to_numpy(deriv=deriv)

    def _check_query(self, query_x):
        try:
            query_x = float(query_x)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Query point must be a real number, got {query_x!r}.") from e
        if not np.isfinite(query_x):
            raise InvalidInputError(f"Query point must be finite, got {query_x!r}.")
        return query_x

    def _local_fit(self, data, query_x):
        # data is a validated Dataset and query_x a finite float here
        dists = np.abs(data.x - query_x)
        idx = self.window.select(dists)
        if idx.shape[0] < self.degree + 1:
            raise InsufficientDataError(query_x, int(idx.shape[0]), self.degree)

        local_d = dists[idx]
        h_eff = float(local_d.max())
        if h_eff > 0:
            kernel_w = np.asarray(self._kernel_fn(local_d / h_eff), dtype=float)
        else:
            kernel_w = np.asarray(self._kernel_fn(np.zeros_like(local_d)), dtype=float)
        if kernel_w.shape != local_d.shape or not np.all(np.isfinite(kernel_w)) or np.any(kernel_w < 0):
            raise InvalidInputError("Kernel must return finite, non-negative weights of matching shape.")
        weights = kernel_w * data.w[idx]

        logger.debug("x=%g: %d points in window, h_eff=%g", query_x, idx.shape[0], h_eff)

        coef = weighted_polyfit(data.x[idx] - query_x,
                                data.y[idx],
                                weights,
                                self.degree,
                                h_eff,
                                query_x,
                                rcond=self.rcond)
        return LocalFit(x0=query_x, coef=coef, index=idx, weights=weights, h_eff=h_eff)


__all__ = ['LocalPolynomialSmoother']
