"""
primarycensored
===============

Primary event censored delay distributions: censored CDFs, densities,
interval masses, quantiles and random variates for delays whose primary
event time is only known to lie within a window, optionally truncated at a
maximum observable delay.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .censored import *
from .censored import __all__ as _censored_all
from .config import *
from .config import __all__ as _config_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .families import *
from .families import __all__ as _family_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("primarycensored")
__all__ = [
    "__version__",
    *_censored_all,
    *_config_all,
    *_distr_all,
    *_errors_all,
    *_family_all,
    *_types_all,
]

del _censored_all
del _config_all
del _distr_all
del _errors_all
del _family_all
del _types_all
