from dataclasses import dataclass, field
import numpy as np
from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.utils.validation import check_is_fitted

from .dataset import Dataset
from .errors import InvalidInputError
from .smoother import LocalPolynomialSmoother


def _as_predictor(X):
    X = np.asarray(X, dtype=float)
    if X.ndim == 2:
        if X.shape[1] != 1:
            raise InvalidInputError(f"Local regression takes a single predictor, got {X.shape[1]} columns.")
        X = X[:, 0]
    elif X.ndim != 1:
        raise InvalidInputError(f"Expected a 1-D array or a single column, got shape {X.shape}.")
    return X


@dataclass
class LocalRegression(RegressorMixin, BaseEstimator):
    """
    Local polynomial regression as a scikit-learn estimator.

    Parameters
    ----------
    degree : int, default=1
        Local polynomial degree, 0, 1 or 2.
    span : float, optional
        Fraction of the training data in each window. Used when
        ``bandwidth`` is not given; defaults to 0.75.
    bandwidth : float, optional
        Absolute half-width of the window.
    kernel : str or callable, optional
        Kernel name or function; the default depends on ``degree``.
    on_error : {'raise', 'nan'}, default='raise'
        Policy for prediction points whose local fit fails.

    Attributes
    ----------
    smoother_ : LocalPolynomialSmoother
        The configured smoother.
    dataset_ : Dataset
        The training observations.
    """

    degree: int = 1
    span: float = None
    bandwidth: float = None
    kernel: object = None
    on_error: str = 'raise'

    smoother_: LocalPolynomialSmoother = field(init=False, repr=False)
    dataset_: Dataset = field(init=False, repr=False)

    def fit(self, X, y, sample_weight=None):
        """
        Store the training data.

        Parameters
        ----------
        X : np.ndarray
            Predictor, 1-D or a single column.
        y : np.ndarray
            Response.
        sample_weight : np.ndarray, optional
            Observation weights.

        Returns
        -------
        self : LocalRegression
        """
        self.smoother_ = LocalPolynomialSmoother(degree=self.degree,
                                                 span=self.span,
                                                 bandwidth=self.bandwidth,
                                                 kernel=self.kernel)
        self.dataset_ = Dataset(_as_predictor(X), y, w=sample_weight)
        self.n_features_in_ = 1
        return self

    def predict(self, X):
        """
        Fitted values at the rows of ``X``.

        Parameters
        ----------
        X : np.ndarray
            Predictor, 1-D or a single column.

        Returns
        -------
        np.ndarray
        """
        check_is_fitted(self, 'dataset_')
        return self.smoother_.predict(self.dataset_, _as_predictor(X), on_error=self.on_error)
