"""Contains the name for the logger of local_smooth modules.

``local_smooth`` logs through the standard
`Logging <https://docs.python.org/3/library/logging.html>`__ library:

* ``DEBUG``: per query point window size and effective bandwidth.
* ``WARNING``: a query point could not be fitted and was left as a gap.

The library installs no handlers. Calling applications configure the
format and level themselves, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "local_smooth"
local_smooth_logger = logging.getLogger(logger_name)
