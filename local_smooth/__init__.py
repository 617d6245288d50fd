from .dataset import Dataset, Observation, as_dataset
from .errors import (SmoothingError,
                     InvalidInputError,
                     InsufficientDataError,
                     SingularFitError)
from .kernels import box, tricube, gaussian, get_kernel
from .window import FixedBandwidth, Span, make_window
from .local_fit import LocalFit
from .smoother import LocalPolynomialSmoother
from .curve import FittedCurve
from .loess import LoessSmoother, ksmooth, loess
from .estimator import LocalRegression

__version__ = "0.1.0"
