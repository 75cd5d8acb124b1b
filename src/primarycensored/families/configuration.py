"""
Distribution Families Configuration
====================================

This module configures the built-in delay families and primary event
distributions of primarycensored:

- Delay families: gamma, lognormal, weibull, exponential.
- Primary event distributions: uniform, expgrowth.

Notes
-----
- Delay families are registered in the global :class:`ParametricFamilyRegister`.
- Primary distributions are registered in the global
  :class:`PrimaryDistributionRegister`; their closed-form censored CDFs seed
  the analytical solution register.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from primarycensored.families.builtins import (
    configure_expgrowth_primary,
    configure_exponential_family,
    configure_gamma_family,
    configure_lognormal_family,
    configure_uniform_primary,
    configure_weibull_family,
)
from primarycensored.families.registry import (
    ParametricFamilyRegister,
    PrimaryDistributionRegister,
)


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all built-in delay families and primary
    event distributions.

    Returns
    -------
    ParametricFamilyRegister
        The global register of delay families.
    """
    configure_gamma_family()
    configure_lognormal_family()
    configure_weibull_family()
    configure_exponential_family()
    configure_uniform_primary()
    configure_expgrowth_primary()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registers.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
    PrimaryDistributionRegister._reset()
