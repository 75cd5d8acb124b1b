"""
Delay families and primary event distributions.

This package provides the framework for defining parametric delay
families, the primary event distributions over the primary window, and
the registers through which both are looked up by name.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .configuration import configure_families_register, reset_families_register
from .distribution import DelayDistribution
from .parametric_family import ParametricFamily
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .primary import PrimaryDistribution
from .registry import ParametricFamilyRegister, PrimaryDistributionRegister

__all__ = [
    "ParametricFamilyRegister",
    "PrimaryDistributionRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "ParametricFamily",
    "DelayDistribution",
    "PrimaryDistribution",
    "constraint",
    "parametrization",
    "configure_families_register",
    "reset_families_register",
]
