"""
Built-in delay families and primary event distributions.

This package contains the distributions that are available by default in
primarycensored, together with the closed-form censored CDFs they admit.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from primarycensored.families.builtins.delay import (
    configure_exponential_family,
    configure_gamma_family,
    configure_lognormal_family,
    configure_weibull_family,
)
from primarycensored.families.builtins.primary import (
    configure_expgrowth_primary,
    configure_uniform_primary,
)

__all__ = [
    "configure_gamma_family",
    "configure_lognormal_family",
    "configure_weibull_family",
    "configure_exponential_family",
    "configure_uniform_primary",
    "configure_expgrowth_primary",
]
