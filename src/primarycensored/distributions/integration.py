"""
Numerical Integration Engine
============================

Censored CDF of a delay with CDF ``F`` under a primary event with density
``f_p`` on ``[0, pwindow]``:

    F_cens(q) = ∫_0^pwindow F(q - p) f_p(p) dp

Each point is integrated independently with adaptive quadrature; the kink of
the integrand at ``p = q`` is passed to the integrator as a breakpoint.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np
from scipy import integrate as _sp_integrate

from primarycensored.errors import IntegrationError

if TYPE_CHECKING:
    from primarycensored.config import NumericalOptions
    from primarycensored.types import ArrayFunc, Interval1D, NumericArray, ScalarFunc


def _scalar(func: ArrayFunc) -> ScalarFunc:
    def _wrap(x: float) -> float:
        return float(np.asarray(func(np.asarray([x], dtype=float)), dtype=float)[0])

    return _wrap


def quad_or_raise(
    integrand: ScalarFunc,
    lower: float,
    upper: float,
    options: NumericalOptions,
    points: list[float] | None = None,
    context: str = "",
) -> float:
    """
    Integrate ``integrand`` over ``[lower, upper]`` with ``scipy.integrate.quad``.

    Integration warnings (no convergence, roundoff, divergence) are escalated
    to :class:`IntegrationError`.

    Raises
    ------
    IntegrationError
        If the quadrature reports a problem.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("error", _sp_integrate.IntegrationWarning)
        try:
            value, _ = _sp_integrate.quad(
                integrand,
                lower,
                upper,
                epsabs=options.epsabs,
                epsrel=options.epsrel,
                limit=options.limit,
                points=points,
            )
        except _sp_integrate.IntegrationWarning as exc:
            raise IntegrationError(f"Quadrature failed{context}: {exc}") from exc
    return float(value)


def integrate_censored_cdf_scalar(
    delay_cdf: ArrayFunc,
    primary_pdf: Callable[[NumericArray, float], NumericArray],
    q: float,
    interval: Interval1D,
    options: NumericalOptions,
) -> float:
    """
    Censored CDF at a single finite ``q``.

    Parameters
    ----------
    delay_cdf : ArrayFunc
        Delay CDF bound to its parameters.
    primary_pdf : Callable[[NumericArray, float], NumericArray]
        Primary density ``(x, pwindow)`` bound to its arguments.
    q : float
        Evaluation point.
    interval : Interval1D
        Support of the primary event time. A degenerate interval at ``0``
        returns ``delay_cdf(q)``.
    options : NumericalOptions
        Quadrature tolerances.

    Raises
    ------
    IntegrationError
        If the quadrature does not converge.
    """
    cdf = _scalar(delay_cdf)
    if interval.is_degenerate:
        return cdf(q - interval.left)

    pwindow = interval.width

    def density(p: float) -> float:
        return float(np.asarray(primary_pdf(np.asarray([p], dtype=float), pwindow))[0])

    def integrand(p: float) -> float:
        return min(max(cdf(q - p), 0.0), 1.0) * density(p)

    points = [q] if interval.left < q < interval.right else None
    return quad_or_raise(
        integrand,
        interval.left,
        interval.right,
        options,
        points=points,
        context=f" for q={q}, pwindow={pwindow}",
    )


def integrate_censored_cdf(
    delay_cdf: ArrayFunc,
    primary_pdf: Callable[[NumericArray, float], NumericArray],
    q: NumericArray,
    interval: Interval1D,
    options: NumericalOptions,
) -> NumericArray:
    """Vectorised :func:`integrate_censored_cdf_scalar` over finite ``q``."""
    q = np.asarray(q, dtype=float)
    values = [
        integrate_censored_cdf_scalar(delay_cdf, primary_pdf, float(qi), interval, options)
        for qi in q.ravel()
    ]
    return np.asarray(values, dtype=float).reshape(q.shape)
