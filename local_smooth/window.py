"""
Window policies: which observations take part in a local fit.
"""
from dataclasses import dataclass
import numpy as np

from .errors import InvalidInputError


@dataclass(frozen=True)
class FixedBandwidth:
    """
    Keep every observation within absolute distance ``h`` of the query point.

    Parameters
    ----------
    h : float
        Bandwidth, strictly positive.
    """

    h: float

    def __post_init__(self):
        h = float(self.h)
        if not np.isfinite(h) or h <= 0:
            raise InvalidInputError(f"Bandwidth must be a finite number > 0, got {self.h!r}.")
        object.__setattr__(self, 'h', h)

    def select(self, dists):
        """Indices (in original order) of the observations in the window."""
        return np.flatnonzero(dists <= self.h)


@dataclass(frozen=True)
class Span:
    """
    Keep the ``ceil(s * N)`` observations nearest to the query point.

    Equidistant observations are taken in original index order.

    Parameters
    ----------
    s : float
        Fraction of the dataset in each window, ``0 < s <= 1``.
    """

    s: float

    def __post_init__(self):
        s = float(self.s)
        if not np.isfinite(s) or s <= 0 or s > 1:
            raise InvalidInputError(f"Span must lie in (0, 1], got {self.s!r}.")
        object.__setattr__(self, 's', s)

    def n_neighbors(self, n):
        """Window size for a dataset of ``n`` observations."""
        target = self.s * n
        nearest = round(target)
        # 0.3 * 10 is 3.0000000000000004 in floating point
        if abs(target - nearest) < 1e-9:
            target = nearest
        return int(min(max(np.ceil(target), 1), n))

    def select(self, dists):
        """Indices (in original order) of the observations in the window."""
        k = self.n_neighbors(len(dists))
        order = np.argsort(dists, kind='stable')
        return np.sort(order[:k])


def make_window(window=None, span=None, bandwidth=None):
    """
    Build a window policy from the user-facing parameters.

    At most one of ``window``, ``span`` and ``bandwidth`` may be given;
    with none of them the window is ``Span(0.75)``.

    Parameters
    ----------
    window : FixedBandwidth or Span, optional
        A ready-made policy.
    span : float, optional
        Proportional span, see ``Span``.
    bandwidth : float, optional
        Absolute bandwidth, see ``FixedBandwidth``.

    Returns
    -------
    FixedBandwidth or Span
    """
    given = [v is not None for v in (window, span, bandwidth)]
    if sum(given) > 1:
        raise InvalidInputError("Only one of `window`, `span` or `bandwidth` can be provided.")
    if window is not None:
        if not isinstance(window, (FixedBandwidth, Span)):
            raise InvalidInputError(f"Unsupported window {window!r}.")
        return window
    if bandwidth is not None:
        return FixedBandwidth(bandwidth)
    if span is not None:
        return Span(span)
    return Span(0.75)
