"""
Lognormal delay family, parametrized on the log scale.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import cast

import numpy as np
from scipy import stats
from scipy.special import ndtr

from primarycensored.families.parametric_family import ParametricFamily
from primarycensored.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from primarycensored.families.registry import ParametricFamilyRegister
from primarycensored.types import CharacteristicName, DelayName, NumericArray


def configure_lognormal_family() -> None:
    """
    Configure and register the Lognormal delay family.
    """
    if ParametricFamilyRegister.contains(DelayName.LOGNORMAL):
        return

    LOGNORMAL_DOC = """
    Lognormal delay distribution.

    ``log X`` is normal with mean ``meanlog`` (μ) and standard deviation
    ``sdlog`` (σ).

    Partial expectation:
        ∫_0^x t f(t) dt = exp(μ + σ²/2) Φ((log x - μ - σ²) / σ)
    """

    def _log(x: NumericArray) -> NumericArray:
        with np.errstate(divide="ignore"):
            return np.log(np.maximum(x, 0.0))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Lognormal density at ``x``."""
        p = cast(_LogScale, parameters)
        return np.asarray(
            stats.lognorm.pdf(x, s=p.sdlog, scale=np.exp(p.meanlog)), dtype=float
        )

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Lognormal CDF at ``x``; zero for ``x <= 0``."""
        p = cast(_LogScale, parameters)
        x = np.asarray(x, dtype=float)
        return np.where(x <= 0, 0.0, ndtr((_log(x) - p.meanlog) / p.sdlog))

    def partial_expectation(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """``∫_0^x t f(t) dt``; zero for ``x <= 0``."""
        p = cast(_LogScale, parameters)
        x = np.asarray(x, dtype=float)
        var = p.sdlog**2
        mean = np.exp(p.meanlog + 0.5 * var)
        return np.where(x <= 0, 0.0, mean * ndtr((_log(x) - p.meanlog - var) / p.sdlog))

    def sample(parameters: Parametrization, size: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``size`` lognormal delays."""
        p = cast(_LogScale, parameters)
        return np.asarray(rng.lognormal(mean=p.meanlog, sigma=p.sdlog, size=size), dtype=float)

    Lognormal = ParametricFamily(
        name=DelayName.LOGNORMAL,
        distr_parametrizations=["log_scale"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PARTIAL_EXPECTATION: partial_expectation,
        },
        sampler=sample,
    )
    Lognormal.__doc__ = LOGNORMAL_DOC

    @parametrization(family=Lognormal, name="log_scale")
    class _LogScale(Parametrization):
        """
        Parameters
        ----------
        meanlog : float
            Mean of ``log X``.
        sdlog : float
            Standard deviation of ``log X``.
        """

        meanlog: float
        sdlog: float

        @constraint(description="sdlog > 0")
        def check_sdlog_positive(self) -> bool:
            return self.sdlog > 0

    ParametricFamilyRegister.register(Lognormal)
