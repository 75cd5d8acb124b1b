"""
Exponential delay family.

Contains the Exponential family with rate (base) and scale parametrizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import cast

import numpy as np

from primarycensored.families.parametric_family import ParametricFamily
from primarycensored.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from primarycensored.families.registry import ParametricFamilyRegister
from primarycensored.types import CharacteristicName, DelayName, NumericArray


def configure_exponential_family() -> None:
    """
    Configure and register the Exponential delay family.
    """
    if ParametricFamilyRegister.contains(DelayName.EXPONENTIAL):
        return

    EXPONENTIAL_DOC = """
    Exponential delay distribution.

    Probability density function (rate λ):
        f(x) = λ exp(-λ x) for x ≥ 0

    Partial expectation:
        ∫_0^x t f(t) dt = (1 - exp(-λx)(1 + λx)) / λ
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Exponential density at ``x``."""
        p = cast(_Rate, parameters)
        x = np.asarray(x, dtype=float)
        return np.where(x >= 0, p.rate * np.exp(-p.rate * np.maximum(x, 0.0)), 0.0)

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Exponential CDF at ``x``; zero for ``x <= 0``."""
        p = cast(_Rate, parameters)
        x = np.asarray(x, dtype=float)
        return np.where(x <= 0, 0.0, -np.expm1(-p.rate * np.maximum(x, 0.0)))

    def partial_expectation(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """``∫_0^x t f(t) dt``; zero for ``x <= 0``."""
        p = cast(_Rate, parameters)
        x = np.asarray(x, dtype=float)
        lx = p.rate * np.maximum(x, 0.0)
        return np.where(x <= 0, 0.0, (-np.expm1(-lx) - lx * np.exp(-lx)) / p.rate)

    def sample(parameters: Parametrization, size: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``size`` exponential delays."""
        p = cast(_Rate, parameters)
        return np.asarray(rng.exponential(scale=1.0 / p.rate, size=size), dtype=float)

    Exponential = ParametricFamily(
        name=DelayName.EXPONENTIAL,
        distr_parametrizations=["rate", "scale"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PARTIAL_EXPECTATION: partial_expectation,
        },
        sampler=sample,
    )
    Exponential.__doc__ = EXPONENTIAL_DOC

    @parametrization(family=Exponential, name="rate")
    class _Rate(Parametrization):
        """
        Rate parametrization of the exponential distribution.

        Parameters
        ----------
        rate : float
            Rate parameter (λ) of the distribution
        """

        rate: float

        @constraint(description="rate > 0")
        def check_rate_positive(self) -> bool:
            """Check that rate parameter is positive."""
            return self.rate > 0

    @parametrization(family=Exponential, name="scale")
    class _Scale(Parametrization):
        """
        Scale parametrization of the exponential distribution.

        Parameters
        ----------
        scale : float
            Scale parameter (β) of the distribution, β = 1/λ
        """

        scale: float

        @constraint(description="scale > 0")
        def check_scale_positive(self) -> bool:
            """Check that scale parameter is positive."""
            return self.scale > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            """Transform to the rate parametrization."""
            return _Rate(rate=1.0 / self.scale)

    ParametricFamilyRegister.register(Exponential)
