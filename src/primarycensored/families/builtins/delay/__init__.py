"""
Built-in delay distribution families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from primarycensored.families.builtins.delay.exponential import configure_exponential_family
from primarycensored.families.builtins.delay.gamma import configure_gamma_family
from primarycensored.families.builtins.delay.lognormal import configure_lognormal_family
from primarycensored.families.builtins.delay.weibull import configure_weibull_family

__all__ = [
    "configure_exponential_family",
    "configure_gamma_family",
    "configure_lognormal_family",
    "configure_weibull_family",
]
