"""
Exponentially growing primary event distribution.

Models primary events whose incidence grows (``r > 0``) or decays
(``r < 0``) exponentially across the primary window. The growth rate ``r``
is a required primary argument. For ``|r| < 1e-10`` the uniform limit is
used.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Mapping
from typing import TYPE_CHECKING

import numpy as np

from primarycensored.errors import MissingArgumentError
from primarycensored.families.builtins.primary.uniform import (
    uniform_cdf,
    uniform_pdf,
    uniform_sample,
)
from primarycensored.families.primary import PrimaryDistribution
from primarycensored.families.registry import PrimaryDistributionRegister
from primarycensored.types import DelayName, NumericArray, PrimaryName

if TYPE_CHECKING:
    from primarycensored.families.parametric_family import ParametricFamily
    from primarycensored.families.parametrizations import Parametrization

R_TOLERANCE = 1e-10
"""Growth rates smaller than this in magnitude are treated as zero."""


def _growth_rate(r: float | None) -> float:
    if r is None:
        raise MissingArgumentError(
            f"Primary distribution '{PrimaryName.EXPGROWTH}' requires argument(s): r"
        )
    return float(r)


def expgrowth_pdf(
    x: NumericArray | float, pwindow: float, r: float | None = None
) -> NumericArray:
    """
    Density ``r exp(r x) / (exp(r pwindow) - 1)`` on ``[0, pwindow]``.

    Raises
    ------
    MissingArgumentError
        If ``r`` is not supplied.
    """
    r = _growth_rate(r)
    if abs(r) < R_TOLERANCE or pwindow == 0:
        return uniform_pdf(x, pwindow)

    x = np.asarray(x, dtype=float)
    inside = (x >= 0.0) & (x <= pwindow)
    if r > 0:
        # scaled by exp(-r pwindow) to avoid overflow
        density = r * np.exp(r * (x - pwindow)) / -np.expm1(-r * pwindow)
    else:
        density = r * np.exp(r * x) / np.expm1(r * pwindow)
    return np.where(inside, density, 0.0)


def expgrowth_cdf(
    x: NumericArray | float, pwindow: float, r: float | None = None
) -> NumericArray:
    """
    CDF ``expm1(r x) / expm1(r pwindow)`` clipped to ``[0, 1]``.

    Raises
    ------
    MissingArgumentError
        If ``r`` is not supplied.
    """
    r = _growth_rate(r)
    if abs(r) < R_TOLERANCE or pwindow == 0:
        return uniform_cdf(x, pwindow)

    x = np.clip(np.asarray(x, dtype=float), 0.0, pwindow)
    if r > 0:
        values = (np.exp(r * (x - pwindow)) - np.exp(-r * pwindow)) / -np.expm1(-r * pwindow)
    else:
        values = np.expm1(r * x) / np.expm1(r * pwindow)
    return np.clip(values, 0.0, 1.0)


def expgrowth_sample(
    size: int, pwindow: float, rng: np.random.Generator, r: float | None = None
) -> NumericArray:
    """
    Draw ``size`` primary times by inverting the CDF in closed form.

    Raises
    ------
    MissingArgumentError
        If ``r`` is not supplied.
    """
    r = _growth_rate(r)
    if abs(r) < R_TOLERANCE or pwindow == 0:
        return uniform_sample(size, pwindow, rng)
    u = rng.random(size)
    return np.clip(np.log1p(u * np.expm1(r * pwindow)) / r, 0.0, pwindow)


def expgrowth_exponential_censored_cdf(
    q: NumericArray,
    pwindow: float,
    family: ParametricFamily,
    parameters: Parametrization,
    args: Mapping[str, float],
) -> NumericArray:
    """
    Closed-form censored CDF of an exponential delay (rate ``λ``) under an
    exponentially growing primary event.

    With ``m = clip(q, 0, pwindow)`` and ``c = r / expm1(r pwindow)``:

        F_cens(q) = F_p(m) - c exp(-λ q) expm1((r + λ) m) / (r + λ)

    ``c`` tends to ``1 / pwindow`` as ``r -> 0`` and the last factor tends to
    ``m`` as ``r + λ -> 0``.
    """
    r = _growth_rate(args.get("r"))
    rate = family.to_base(parameters).parameters["rate"]
    q = np.asarray(q, dtype=float)
    m = np.clip(q, 0.0, pwindow)

    c = 1.0 / pwindow if abs(r) < R_TOLERANCE else r / np.expm1(r * pwindow)
    s = r + rate
    if abs(s) < R_TOLERANCE:
        integral = m
    else:
        integral = np.expm1(s * m) / s

    values = expgrowth_cdf(m, pwindow, r=r) - c * np.exp(-rate * q) * integral
    return np.clip(values, 0.0, 1.0)


def configure_expgrowth_primary() -> None:
    """
    Configure and register the exponential growth primary event distribution.
    """
    if PrimaryDistributionRegister.contains(PrimaryName.EXPGROWTH):
        return

    PrimaryDistributionRegister.register(
        PrimaryDistribution(
            name=PrimaryName.EXPGROWTH,
            pdf=expgrowth_pdf,
            cdf=expgrowth_cdf,
            sampler=expgrowth_sample,
            required_args=("r",),
            analytical_solutions={DelayName.EXPONENTIAL: expgrowth_exponential_censored_cdf},
        )
    )
