"""
Uniform primary event distribution.

Contains the uniform density over the primary window and the closed-form
censored CDF it admits for every delay family that provides a partial
expectation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Mapping
from typing import TYPE_CHECKING

import numpy as np

from primarycensored.errors import ArgumentValidationError
from primarycensored.families.primary import PrimaryDistribution
from primarycensored.families.registry import PrimaryDistributionRegister
from primarycensored.types import CharacteristicName, DelayName, NumericArray, PrimaryName

if TYPE_CHECKING:
    from typing import Any

    from primarycensored.families.parametric_family import ParametricFamily
    from primarycensored.families.parametrizations import Parametrization


def _check_pwindow(pwindow: float) -> float:
    pwindow = float(pwindow)
    if not pwindow >= 0:
        raise ArgumentValidationError(f"pwindow must be non-negative, got {pwindow!r}")
    return pwindow


def uniform_pdf(x: NumericArray | float, pwindow: float, **_: Any) -> NumericArray:
    """
    Uniform density on ``[0, pwindow]``.

    With ``pwindow == 0`` the primary event is known exactly: the density is
    ``1`` at ``x == 0`` and ``0`` elsewhere.

    Raises
    ------
    ArgumentValidationError
        If ``pwindow`` is negative.
    """
    pwindow = _check_pwindow(pwindow)
    x = np.asarray(x, dtype=float)
    if pwindow == 0.0:
        return np.where(x == 0.0, 1.0, 0.0)
    return np.where((x >= 0.0) & (x <= pwindow), 1.0 / pwindow, 0.0)


def uniform_cdf(x: NumericArray | float, pwindow: float, **_: Any) -> NumericArray:
    """Uniform CDF ``x / pwindow`` clipped to ``[0, 1]``."""
    pwindow = _check_pwindow(pwindow)
    x = np.asarray(x, dtype=float)
    if pwindow == 0.0:
        return np.where(x >= 0.0, 1.0, 0.0)
    return np.clip(x / pwindow, 0.0, 1.0)


def uniform_sample(
    size: int, pwindow: float, rng: np.random.Generator, **_: Any
) -> NumericArray:
    """Draw ``size`` primary times ``u * pwindow``."""
    pwindow = _check_pwindow(pwindow)
    return rng.random(size) * pwindow


def uniform_censored_cdf(
    q: NumericArray,
    pwindow: float,
    family: ParametricFamily,
    parameters: Parametrization,
    args: Mapping[str, float],
) -> NumericArray:
    """
    Closed-form censored CDF for a uniform primary event.

    With ``G(x) = x F(x) - PE(x)``, where ``PE`` is the partial expectation
    ``∫_0^x t f(t) dt`` of the delay and ``G(x) = 0`` for ``x <= 0``,

        F_cens(q) = (G(q) - G(q - pwindow)) / pwindow.

    Parameters
    ----------
    q : NumericArray
        Finite evaluation points.
    pwindow : float
        Positive primary window width.
    family : ParametricFamily
        Delay family; must provide ``cdf`` and ``partial_expectation``.
    parameters : Parametrization
        Delay parameters.
    args : Mapping[str, float]
        Primary arguments (unused).
    """
    cdf = family.characteristic(CharacteristicName.CDF, parameters)
    partial_expectation = family.characteristic(
        CharacteristicName.PARTIAL_EXPECTATION, parameters
    )

    def G(x: NumericArray) -> NumericArray:
        positive = np.maximum(x, 0.0)
        return np.where(x <= 0, 0.0, positive * cdf(positive) - partial_expectation(positive))

    q = np.asarray(q, dtype=float)
    values = (G(q) - G(q - pwindow)) / pwindow
    return np.clip(values, 0.0, 1.0)


def configure_uniform_primary() -> None:
    """
    Configure and register the uniform primary event distribution.
    """
    if PrimaryDistributionRegister.contains(PrimaryName.UNIFORM):
        return

    solutions = {
        DelayName.GAMMA: uniform_censored_cdf,
        DelayName.LOGNORMAL: uniform_censored_cdf,
        DelayName.WEIBULL: uniform_censored_cdf,
        DelayName.EXPONENTIAL: uniform_censored_cdf,
    }

    PrimaryDistributionRegister.register(
        PrimaryDistribution(
            name=PrimaryName.UNIFORM,
            pdf=uniform_pdf,
            cdf=uniform_cdf,
            sampler=uniform_sample,
            analytical_solutions=solutions,
        )
    )
