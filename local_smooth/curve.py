"""
Lazy, restartable sequence of fitted values over a grid of query points.
"""
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
import numpy as np

from .errors import InsufficientDataError, InvalidInputError, SingularFitError
from .local_fit import check_deriv
from .logger import local_smooth_logger as logger

_ON_ERROR = ('raise', 'nan')


class FittedCurve(Sequence):
    """
    Fitted values of a smoother at a fixed set of query points.

    Nothing is computed at construction. Indexing fits a single point,
    iterating fits every point in order, and each new iteration starts
    from scratch. The fits are independent, so with ``n_jobs > 1`` they
    are spread over a thread pool sharing the read-only dataset.

    Parameters
    ----------
    smoother : LocalPolynomialSmoother
        Configured smoother.
    data : Dataset
        Observations.
    query_x : np.ndarray
        Finite query points.
    n_jobs : int, default=1
        Number of worker threads.
    on_error : {'raise', 'nan'}, default='raise'
        ``'nan'`` leaves a gap for points whose window is too small or
        whose local design is singular; ``'raise'`` propagates the error.
    """

    def __init__(self, smoother, data, query_x, n_jobs=1, on_error='raise'):
        if on_error not in _ON_ERROR:
            raise InvalidInputError(f"`on_error` must be one of {_ON_ERROR}, got {on_error!r}.")
        if isinstance(n_jobs, bool) or int(n_jobs) != n_jobs or n_jobs < 1:
            raise InvalidInputError(f"`n_jobs` must be a positive integer, got {n_jobs!r}.")
        self.smoother = smoother
        self.data = data
        self.query_x = np.array(query_x, dtype=float)
        self.query_x.flags.writeable = False
        self.n_jobs = int(n_jobs)
        self.on_error = on_error

    def __len__(self):
        return self.query_x.shape[0]

    def __getitem__(self, i):
        if isinstance(i, slice):
            return FittedCurve(self.smoother, self.data, self.query_x[i],
                               n_jobs=self.n_jobs, on_error=self.on_error)
        return self._evaluate(self.query_x[i])

    def __iter__(self):
        if self.n_jobs == 1:
            for x0 in self.query_x:
                yield self._evaluate(x0)
        else:
            with ThreadPoolExecutor(max_workers=self.n_jobs) as ex:
                yield from ex.map(self._evaluate, self.query_x)

    def to_numpy(self, deriv=0):
        """
        Evaluate every point.

        Parameters
        ----------
        deriv : int, default=0
            Derivative order to return instead of the fitted value.

        Returns
        -------
        np.ndarray
        """
        deriv = check_deriv(deriv)
        if deriv == 0:
            return np.fromiter(iter(self), dtype=float, count=len(self))

        def _one(x0):
            return self._evaluate(x0, deriv=deriv)

        if self.n_jobs == 1:
            values = [_one(x0) for x0 in self.query_x]
        else:
            with ThreadPoolExecutor(max_workers=self.n_jobs) as ex:
                values = list(ex.map(_one, self.query_x))
        return np.asarray(values, dtype=float)

    def __array__(self, dtype=None, copy=None):
        out = self.to_numpy()
        return out if dtype is None else out.astype(dtype)

    def _evaluate(self, x0, deriv=0):
        x0 = float(x0)
        try:
            local = self.smoother._local_fit(self.data, x0)
        except (InsufficientDataError, SingularFitError) as e:
            if self.on_error == 'raise':
                raise
            logger.warning("Leaving a gap at x=%g: %s", x0, e)
            return np.nan
        if deriv == 0:
            return local.value
        return local.derivative(deriv)

    def __repr__(self):
        return f"FittedCurve(n_points={len(self)}, n_jobs={self.n_jobs}, on_error={self.on_error!r})"
