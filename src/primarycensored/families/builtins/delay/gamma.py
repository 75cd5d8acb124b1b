"""
Gamma delay family.

Contains the Gamma family with shape/scale (base) and shape/rate
parametrizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import cast

import numpy as np
from scipy import stats
from scipy.special import gammainc

from primarycensored.families.parametric_family import ParametricFamily
from primarycensored.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from primarycensored.families.registry import ParametricFamilyRegister
from primarycensored.types import CharacteristicName, DelayName, NumericArray


def configure_gamma_family() -> None:
    """
    Configure and register the Gamma delay family.
    """
    if ParametricFamilyRegister.contains(DelayName.GAMMA):
        return

    GAMMA_DOC = """
    Gamma delay distribution.

    Probability density function (shape k, scale θ):
        f(x) = x^(k-1) exp(-x/θ) / (Γ(k) θ^k) for x > 0

    Partial expectation:
        ∫_0^x t f(t) dt = k θ P(k + 1, x/θ)
    where P is the regularised lower incomplete gamma function.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Gamma density at ``x``."""
        p = cast(_ShapeScale, parameters)
        return np.asarray(stats.gamma.pdf(x, a=p.shape, scale=p.scale), dtype=float)

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Gamma CDF at ``x``; zero for ``x <= 0``."""
        p = cast(_ShapeScale, parameters)
        x = np.asarray(x, dtype=float)
        return np.where(x <= 0, 0.0, gammainc(p.shape, np.maximum(x, 0.0) / p.scale))

    def partial_expectation(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """``∫_0^x t f(t) dt``; zero for ``x <= 0``."""
        p = cast(_ShapeScale, parameters)
        x = np.asarray(x, dtype=float)
        return np.where(
            x <= 0,
            0.0,
            p.shape * p.scale * gammainc(p.shape + 1.0, np.maximum(x, 0.0) / p.scale),
        )

    def sample(parameters: Parametrization, size: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``size`` gamma delays."""
        p = cast(_ShapeScale, parameters)
        return np.asarray(
            stats.gamma.rvs(a=p.shape, scale=p.scale, size=size, random_state=rng), dtype=float
        )

    Gamma = ParametricFamily(
        name=DelayName.GAMMA,
        distr_parametrizations=["shape_scale", "shape_rate"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PARTIAL_EXPECTATION: partial_expectation,
        },
        sampler=sample,
    )
    Gamma.__doc__ = GAMMA_DOC

    @parametrization(family=Gamma, name="shape_scale")
    class _ShapeScale(Parametrization):
        """
        Shape/scale parametrization of the gamma distribution.

        Parameters
        ----------
        shape : float
            Shape parameter k.
        scale : float
            Scale parameter θ.
        """

        shape: float
        scale: float

        @constraint(description="shape > 0")
        def check_shape_positive(self) -> bool:
            return self.shape > 0

        @constraint(description="scale > 0")
        def check_scale_positive(self) -> bool:
            return self.scale > 0

    @parametrization(family=Gamma, name="shape_rate")
    class _ShapeRate(Parametrization):
        """
        Shape/rate parametrization of the gamma distribution.

        Parameters
        ----------
        shape : float
            Shape parameter k.
        rate : float
            Rate parameter, ``1 / scale``.
        """

        shape: float
        rate: float

        @constraint(description="shape > 0")
        def check_shape_positive(self) -> bool:
            return self.shape > 0

        @constraint(description="rate > 0")
        def check_rate_positive(self) -> bool:
            return self.rate > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _ShapeScale(shape=self.shape, scale=1.0 / self.rate)

    ParametricFamilyRegister.register(Gamma)
