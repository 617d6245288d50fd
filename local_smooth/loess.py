from dataclasses import dataclass, field
import numpy as np
from sklearn.exceptions import NotFittedError

from .dataset import Dataset
from .smoother import LocalPolynomialSmoother


def ksmooth(x, y, bandwidth, kernel='box', x_points=None):
    """
    Kernel (bin) smoother with a fixed bandwidth.

    Degree 0 local regression: the fitted value at each point is the
    kernel-weighted mean of the responses within ``bandwidth`` of it.

    Parameters
    ----------
    x, y : array-like
        Observations.
    bandwidth : float
        Half-width of the window.
    kernel : str or callable, default='box'
        ``'box'`` gives the plain bin mean; ``'gaussian'`` smooths the edges
        of the bins.
    x_points : array-like, optional
        Points to evaluate at. Defaults to the sorted unique ``x``.

    Returns
    -------
    x_points : np.ndarray
    fitted : np.ndarray
    """
    data = Dataset(x, y)
    if x_points is None:
        x_points = np.unique(data.x)
    smoother = LocalPolynomialSmoother(degree=0, bandwidth=bandwidth, kernel=kernel)
    curve = smoother.fit_curve(data, x_points)
    return np.asarray(curve.query_x), curve.to_numpy()


def loess(x, y, span=0.75, degree=2, kernel='tricube', x_points=None):
    """
    Local polynomial regression with a proportional span.

    Parameters
    ----------
    x, y : array-like
        Observations.
    span : float, default=0.75
        Fraction of the observations used in each local fit.
    degree : int, default=2
        Local polynomial degree.
    kernel : str or callable, default='tricube'
    x_points : array-like, optional
        Points to evaluate at. Defaults to ``x``.

    Returns
    -------
    np.ndarray
        Fitted values at ``x_points``.
    """
    data = Dataset(x, y)
    if x_points is None:
        x_points = data.x
    smoother = LocalPolynomialSmoother(degree=degree, span=span, kernel=kernel)
    return smoother.predict(data, x_points)


@dataclass
class LoessSmoother:
    """
    Stateful loess smoother over a fixed set of predictor values.

    Parameters
    ----------
    x : np.ndarray
        The predictor variable.
    w : np.ndarray, optional
        Weights for the observations.
    span : float, optional
        The smoothing parameter (fraction of points to use as neighbors).
        Default is 0.75 unless ``bandwidth`` is given.
    degree : int, optional
        The degree of the local polynomial (0, 1 or 2). Default is 1.
    kernel : str or callable, optional
        Kernel name or function; the default depends on ``degree``.
    bandwidth : float, optional
        Fixed window half-width, used instead of ``span``.
    """

    x: np.ndarray
    w: np.ndarray = None
    span: float = None
    degree: int = 1
    kernel: object = None
    bandwidth: float = None

    y: np.ndarray = field(init=False, default=None)
    smoother_: LocalPolynomialSmoother = field(init=False, default=None, repr=False)
    _data: Dataset = field(init=False, default=None, repr=False)

    def __post_init__(self):
        self.x = np.asarray(self.x, dtype=float)
        if self.w is not None:
            self.w = np.asarray(self.w, dtype=float)
        self.smoother_ = LocalPolynomialSmoother(degree=self.degree,
                                                 span=self.span,
                                                 bandwidth=self.bandwidth,
                                                 kernel=self.kernel)
        self.span = self.smoother_.span
        self.kernel = self.smoother_.kernel
        self._coef = self._intercept = self._y_hat_train = None

    def smooth(self, y, sample_weight=None):
        """
        Fit the Loess model.

        Parameters
        ----------
        y : np.ndarray
            Response variable.
        sample_weight : np.ndarray, optional
            Observation weights. If provided, updates the instance weights.
        """
        if sample_weight is not None:
            self.w = np.asarray(sample_weight, dtype=float)
        self._data = Dataset(self.x, y, w=self.w)
        self.y = np.asarray(self._data.y)
        self._coef = self._intercept = self._y_hat_train = None
        return self

    def update_weights(self, w):
        """
        Update the observation weights.

        Parameters
        ----------
        w : np.ndarray
            New weights.
        """
        self.w = np.asarray(w, dtype=float)
        if self.y is not None:
            self._data = Dataset(self.x, self.y, w=self.w)
        self._coef = self._intercept = self._y_hat_train = None

    def _check_fitted(self):
        if self._data is None:
            raise NotFittedError("Model has not been fitted yet. Call smooth(y) first.")

    def _get_y_hat_train(self):
        self._check_fitted()
        if self._y_hat_train is None:
            self._y_hat_train = self.smoother_.predict(self._data, self.x)
        return self._y_hat_train

    def _compute_linear_part(self):
        if self._coef is None:
            y_hat = self._get_y_hat_train()
            w_eff = self.w if self.w is not None else np.ones(len(self.x))

            sqrt_w = np.sqrt(w_eff)
            X = np.vander(self.x, 2)
            beta = np.linalg.lstsq(X * sqrt_w[:, None], y_hat * sqrt_w, rcond=None)[0]

            self._intercept = beta[1]
            self._coef = beta[0]

    @property
    def intercept_(self):
        self._compute_linear_part()
        return self._intercept

    @property
    def coef_(self):
        self._compute_linear_part()
        return self._coef

    @property
    def nonlinear_(self):
        """
        The non-linear component of the fitted loess curve.
        """
        if self._data is None:
            return None
        linear_part = self.coef_ * self.x + self.intercept_
        return self._get_y_hat_train() - linear_part

    def predict(self, x_new=None, deriv=0):
        """
        Predict the response for a new set of predictor variables.

        Parameters
        ----------
        x_new : np.ndarray, optional
            The predictor variables. If None, uses the initial `x` values.
        deriv : int, optional
            The order of the derivative to compute (default is 0).

        Returns
        -------
        np.ndarray
            The predicted response or its derivative.
        """
        self._check_fitted()
        if x_new is None:
            if deriv == 0:
                return self._get_y_hat_train().copy()
            x_new = self.x
        return self.smoother_.predict(self._data, np.atleast_1d(x_new), deriv=deriv)
