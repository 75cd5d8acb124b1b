"""
Weibull delay family.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import cast

import numpy as np
from scipy import stats
from scipy.special import gamma as gamma_fn
from scipy.special import gammainc

from primarycensored.families.parametric_family import ParametricFamily
from primarycensored.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from primarycensored.families.registry import ParametricFamilyRegister
from primarycensored.types import CharacteristicName, DelayName, NumericArray


def configure_weibull_family() -> None:
    """
    Configure and register the Weibull delay family.
    """
    if ParametricFamilyRegister.contains(DelayName.WEIBULL):
        return

    WEIBULL_DOC = """
    Weibull delay distribution with shape k and scale λ.

    CDF:
        F(x) = 1 - exp(-(x/λ)^k) for x > 0

    Partial expectation:
        ∫_0^x t f(t) dt = λ Γ(1 + 1/k) P(1 + 1/k, (x/λ)^k)
    """

    def _scaled(p: _ShapeScale, x: NumericArray) -> NumericArray:
        return np.power(np.maximum(x, 0.0) / p.scale, p.shape)

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Weibull density at ``x``."""
        p = cast(_ShapeScale, parameters)
        return np.asarray(stats.weibull_min.pdf(x, c=p.shape, scale=p.scale), dtype=float)

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Weibull CDF at ``x``; zero for ``x <= 0``."""
        p = cast(_ShapeScale, parameters)
        x = np.asarray(x, dtype=float)
        return np.where(x <= 0, 0.0, -np.expm1(-_scaled(p, x)))

    def partial_expectation(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """``∫_0^x t f(t) dt``; zero for ``x <= 0``."""
        p = cast(_ShapeScale, parameters)
        x = np.asarray(x, dtype=float)
        a = 1.0 + 1.0 / p.shape
        return np.where(x <= 0, 0.0, p.scale * gamma_fn(a) * gammainc(a, _scaled(p, x)))

    def sample(parameters: Parametrization, size: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``size`` Weibull delays."""
        p = cast(_ShapeScale, parameters)
        return np.asarray(
            stats.weibull_min.rvs(c=p.shape, scale=p.scale, size=size, random_state=rng),
            dtype=float,
        )

    Weibull = ParametricFamily(
        name=DelayName.WEIBULL,
        distr_parametrizations=["shape_scale"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PARTIAL_EXPECTATION: partial_expectation,
        },
        sampler=sample,
    )
    Weibull.__doc__ = WEIBULL_DOC

    @parametrization(family=Weibull, name="shape_scale")
    class _ShapeScale(Parametrization):
        """
        Parameters
        ----------
        shape : float
            Shape parameter k.
        scale : float
            Scale parameter λ.
        """

        shape: float
        scale: float

        @constraint(description="shape > 0")
        def check_shape_positive(self) -> bool:
            return self.shape > 0

        @constraint(description="scale > 0")
        def check_scale_positive(self) -> bool:
            return self.scale > 0

    ParametricFamilyRegister.register(Weibull)
