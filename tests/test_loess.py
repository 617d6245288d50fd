"""
Tests for the loess helpers.

The span / tricube path is compared against a naive implementation
(`naive_loess.LoessNaive`), with and without observation weights. The
convenience functions and the stateful `LoessSmoother` are checked
against `LocalPolynomialSmoother` directly.
"""
import pickle
import numpy as np
import pytest
from sklearn.exceptions import NotFittedError

from local_smooth import (LoessSmoother,
                          LocalPolynomialSmoother,
                          Dataset,
                          ksmooth,
                          loess)
from .naive_loess import LoessNaive

def test_loess_consistency():
    """
    Smoother and naive implementation agree.
    """
    rng = np.random.default_rng(42)
    n = 100
    x = np.sort(rng.uniform(0, 10, n))
    y = np.sin(x) + rng.normal(0, 0.2, n)
    x_new = np.linspace(0, 10, 50)

    for span in [0.333, 0.705]:
        for degree in [0, 1, 2]:
            naive = LoessNaive(x, span=span, degree=degree).fit(y)
            smoother = LoessSmoother(x, span=span, degree=degree, kernel='tricube')
            smoother.smooth(y)

            np.testing.assert_allclose(smoother.predict(x_new), naive.predict(x_new),
                                       rtol=1e-7, atol=1e-8,
                                       err_msg=f"Mismatch for span={span}, degree={degree}")

def test_loess_weights():
    """
    Test with observation weights.
    """
    rng = np.random.default_rng(123)
    n = 50
    x = np.sort(rng.uniform(0, 10, n))
    y = x * 0.5 + rng.normal(0, 0.5, n)
    w = rng.uniform(0.1, 2.0, n)
    x_new = np.linspace(0, 10, 20)

    naive = LoessNaive(x, w=w, span=0.51, degree=1).fit(y)
    smoother = LoessSmoother(x, w=w, span=0.51, degree=1)
    smoother.smooth(y)

    np.testing.assert_allclose(smoother.predict(x_new), naive.predict(x_new), rtol=1e-7, atol=1e-8)

    unweighted = LoessSmoother(x, span=0.51, degree=1)
    unweighted.smooth(y)
    assert not np.allclose(unweighted.predict(x_new), smoother.predict(x_new))

    unweighted.update_weights(w)
    np.testing.assert_allclose(unweighted.predict(x_new), smoother.predict(x_new))

def test_single_prediction():
    """
    Test prediction on a single point (scalar vs array).
    """
    x = np.linspace(0, 10, 20)
    y = np.sin(x)

    fitter = LoessSmoother(x, span=0.5)
    fitter.smooth(y)

    pred = fitter.predict([5.0])
    assert pred.shape == (1,)
    assert not np.isnan(pred[0])
    np.testing.assert_array_equal(fitter.predict(5.0), pred)

def test_loess_smoother_linear_part():
    x = np.linspace(-2, 2, 41)
    y = 1.0 + 0.5 * x

    fitter = LoessSmoother(x, span=0.3, degree=1)
    assert fitter.nonlinear_ is None
    with pytest.raises(NotFittedError):
        fitter.predict()

    fitter.smooth(y)
    np.testing.assert_allclose(fitter.predict(), y, atol=1e-9)
    np.testing.assert_allclose(fitter.coef_, 0.5, atol=1e-9)
    np.testing.assert_allclose(fitter.intercept_, 1.0, atol=1e-9)
    np.testing.assert_allclose(fitter.nonlinear_, 0, atol=1e-9)
    np.testing.assert_allclose(fitter.predict(deriv=1), 0.5, atol=1e-9)

def test_loess_smoother_bandwidth():
    x = np.arange(10.0)
    y = x**2
    fitter = LoessSmoother(x, degree=0, bandwidth=1.0)
    assert fitter.span is None
    assert fitter.kernel == 'box'
    fitter.smooth(y)
    assert fitter.predict([5.0])[0] == (16 + 25 + 36) / 3

def test_ksmooth_is_bin_mean():
    x = [-3, -1, 0, 1, 3]
    y = [1, 2, 3, 4, 5]

    x_points, fitted = ksmooth(x, y, bandwidth=1.5)
    np.testing.assert_array_equal(x_points, [-3, -1, 0, 1, 3])
    np.testing.assert_allclose(fitted, [1.0, 2.5, 3.0, 3.5, 5.0])

    x_points, fitted = ksmooth(x, y, bandwidth=1.5, x_points=[0.0])
    assert fitted[0] == 3.0

def test_ksmooth_gaussian_matches_smoother():
    rng = np.random.default_rng(1)
    x = rng.uniform(0, 5, 30)
    y = rng.normal(size=30)
    x_points = np.linspace(0.5, 4.5, 5)

    _, fitted = ksmooth(x, y, bandwidth=1.0, kernel='gaussian', x_points=x_points)
    smoother = LocalPolynomialSmoother(degree=0, bandwidth=1.0, kernel='gaussian')
    np.testing.assert_array_equal(fitted, smoother.predict(Dataset(x, y), x_points))

def test_loess_function_defaults_to_quadratic():
    x = np.linspace(0, 4, 30)
    y = 3.0 - x + 2.0 * x**2

    np.testing.assert_allclose(loess(x, y), y, atol=1e-9)
    np.testing.assert_allclose(loess(x, y, x_points=[1.7]), [3.0 - 1.7 + 2.0 * 1.7**2], atol=1e-9)
    assert not np.allclose(loess(x, y, degree=1, span=0.5), y, atol=1e-6)

def test_loess_smoother_predict_returns_copy():
    x = np.linspace(0, 5, 25)
    y = np.sin(x)
    fitter = LoessSmoother(x, span=0.4)
    fitter.smooth(y)

    fitted = fitter.predict()
    nonlinear = fitter.nonlinear_.copy()
    fitted[:] = 0.0

    assert not np.allclose(fitter.predict(), 0.0)
    np.testing.assert_array_equal(fitter.nonlinear_, nonlinear)

def test_loess_smoother_pickle():
    x = np.linspace(0, 5, 25)
    y = np.sin(x)
    fitter = LoessSmoother(x, span=0.4, degree=2)
    fitter.smooth(y)

    restored = pickle.loads(pickle.dumps(fitter))
    np.testing.assert_array_equal(restored.predict([1.0, 2.5]), fitter.predict([1.0, 2.5]))
