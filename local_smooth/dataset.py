"""
Observations and the read-only dataset the smoother works on.
"""
from typing import NamedTuple
import numpy as np

from .errors import InvalidInputError


class Observation(NamedTuple):
    x: float
    y: float


def _frozen_vector(values, name):
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"`{name}` must be numeric.") from e
    if arr.ndim != 1:
        raise InvalidInputError(f"`{name}` must be one-dimensional, got shape {arr.shape}.")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"`{name}` contains NaN or infinite values.")
    arr.flags.writeable = False
    return arr


class Dataset:
    """
    Ordered, immutable collection of ``(x, y)`` observations.

    The arrays are copied on construction and flagged read-only, so
    fitting never changes the caller's data.

    Parameters
    ----------
    x : array-like
        Predictor values. Need not be sorted; duplicates are allowed.
    y : array-like
        Responses, same length as ``x``.
    w : array-like, optional
        Non-negative observation weights multiplying the kernel weights.
        Defaults to ones.
    """

    __slots__ = ('x', 'y', 'w')

    def __init__(self, x, y, w=None):
        x = _frozen_vector(x, 'x')
        y = _frozen_vector(y, 'y')
        if x.shape[0] == 0:
            raise InvalidInputError("Dataset is empty.")
        if y.shape != x.shape:
            raise InvalidInputError(
                f"`x` and `y` must have the same length, got {x.shape[0]} and {y.shape[0]}."
            )
        if w is None:
            w = np.ones_like(x)
            w.flags.writeable = False
        else:
            w = _frozen_vector(w, 'w')
            if w.shape != x.shape:
                raise InvalidInputError(
                    f"`w` must have the same length as `x`, got {w.shape[0]} and {x.shape[0]}."
                )
            if np.any(w < 0):
                raise InvalidInputError("Observation weights must be non-negative.")
        object.__setattr__(self, 'x', x)
        object.__setattr__(self, 'y', y)
        object.__setattr__(self, 'w', w)

    def __setattr__(self, name, value):
        raise AttributeError("Dataset is immutable.")

    def __reduce__(self):
        return (Dataset, (self.x, self.y, self.w))

    @classmethod
    def from_observations(cls, observations, w=None):
        """Build a dataset from an iterable of ``(x, y)`` pairs."""
        pairs = [tuple(obs) for obs in observations]
        if not pairs:
            raise InvalidInputError("Dataset is empty.")
        if any(len(p) != 2 for p in pairs):
            raise InvalidInputError("Observations must be (x, y) pairs.")
        x, y = zip(*pairs)
        return cls(x, y, w=w)

    def __len__(self):
        return self.x.shape[0]

    def __iter__(self):
        for xi, yi in zip(self.x, self.y):
            yield Observation(float(xi), float(yi))

    def __getitem__(self, i):
        return Observation(float(self.x[i]), float(self.y[i]))

    def __repr__(self):
        return f"Dataset(n={len(self)})"


def as_dataset(data):
    """
    Coerce ``data`` to a ``Dataset``.

    Accepts a ``Dataset``, an ``(n, 2)`` array or an iterable of
    ``(x, y)`` pairs.
    """
    if isinstance(data, Dataset):
        return data
    if isinstance(data, np.ndarray):
        if data.ndim != 2 or data.shape[1] != 2:
            raise InvalidInputError(f"Expected an (n, 2) array of observations, got shape {data.shape}.")
        return Dataset(data[:, 0], data[:, 1])
    try:
        return Dataset.from_observations(data)
    except TypeError as e:
        raise InvalidInputError(f"Cannot interpret {type(data).__name__} as observations.") from e
