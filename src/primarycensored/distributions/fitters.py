"""
Conversions between characteristics of a univariate continuous distribution:

- ``cdf -> pdf`` by finite differences,
- ``cdf -> ppf`` by bracket expansion and Brent's method,
- ``pdf -> cdf`` by adaptive quadrature.

Every fitted characteristic is vectorised and wrapped in a
:class:`~primarycensored.distributions.computation.FittedComputationMethod`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from math import inf, isfinite, isnan
from typing import TYPE_CHECKING, Any, cast

import numpy as np
from mypy_extensions import KwArg
from scipy import optimize as _sp_optimize

from primarycensored.config import DEFAULT_OPTIONS
from primarycensored.distributions.computation import FittedComputationMethod
from primarycensored.distributions.integration import quad_or_raise
from primarycensored.errors import ArgumentValidationError, BracketingError
from primarycensored.types import CharacteristicName, NumericArray

if TYPE_CHECKING:
    from primarycensored.config import NumericalOptions
    from primarycensored.types import ArrayFunc, ScalarFunc

type ArrayMethod = FittedComputationMethod[NumericArray, NumericArray]


def fit_cdf_to_pdf(
    cdf: ArrayFunc,
    lower: float = 0.0,
    upper: float = inf,
    step: float = 1e-4,
) -> ArrayMethod:
    """
    Fit ``pdf`` as a finite-difference derivative of ``cdf``.

    The step is ``h = step * max(1, |x|)``. Central differences are used
    inside the support, a forward difference where ``x - h < lower`` and a
    backward difference where ``x + h > upper``. The density is ``0`` outside
    ``[lower, upper)`` and clamped to be non-negative. All CDF evaluations of
    one call are made in a single batch.

    Parameters
    ----------
    cdf : ArrayFunc
        Vectorised CDF.
    lower, upper : float
        Support of the distribution.
    step : float, default 1e-4
        Relative finite-difference step.

    Returns
    -------
    FittedComputationMethod
        Fitted ``cdf -> pdf`` conversion.
    """

    def _pdf(x: NumericArray, **_: Any) -> NumericArray:
        x = np.asarray(x, dtype=float)
        inside = (x >= lower) & (x < upper)
        xs = np.where(inside, x, lower)
        h = step * np.maximum(1.0, np.abs(xs))

        forward = xs - h < lower
        backward = ~forward & (xs + h > upper)
        left = np.where(forward, xs, xs - h)
        right = np.where(backward, xs, xs + h)

        values = np.asarray(cdf(np.concatenate([left.ravel(), right.ravel()])), dtype=float)
        f_left, f_right = np.split(values, 2)
        density = (f_right.reshape(x.shape) - f_left.reshape(x.shape)) / (right - left)

        out = np.where(inside, np.maximum(density, 0.0), 0.0)
        return np.where(np.isnan(x), np.nan, out)

    pdf_func = cast(Callable[[NumericArray, KwArg(Any)], NumericArray], _pdf)
    return FittedComputationMethod(
        target=CharacteristicName.PDF, sources=[CharacteristicName.CDF], func=pdf_func
    )


def _ppf_brentq_from_cdf(
    cdf: ScalarFunc,
    *,
    lower: float,
    upper: float,
    init_step: float,
    options: NumericalOptions,
) -> ScalarFunc:
    """
    Build a scalar ``ppf`` from a scalar non-decreasing ``cdf``.

    Notes
    -----
    ``p == 0`` maps to ``lower`` and ``p == 1`` to ``upper``. For an
    unbounded ``upper`` the right end of the bracket starts at ``init_step``
    and grows by ``options.expand_factor`` at most ``options.max_expand``
    times.
    """

    def _bracket(p: float) -> tuple[float, float]:
        if isfinite(upper):
            return lower, upper
        left = lower
        right = max(lower, 0.0) + init_step
        for _ in range(options.max_expand):
            if cdf(right) >= p:
                return left, right
            left = right
            right = lower + (right - lower) * options.expand_factor
        raise BracketingError(
            f"Could not bracket quantile p={p} below x={right} "
            f"after {options.max_expand} expansions"
        )

    def _ppf(p: float) -> float:
        if isnan(p):
            return float("nan")
        if p == 0.0:
            return lower
        if p == 1.0:
            return upper
        if cdf(lower) >= p:
            return lower

        left, right = _bracket(p)
        try:
            root = _sp_optimize.brentq(
                lambda x: cdf(x) - p,
                left,
                right,
                xtol=options.root_xtol,
                maxiter=options.root_maxiter,
            )
        except (ValueError, RuntimeError) as exc:
            raise BracketingError(
                f"Root finding failed for p={p} on [{left}, {right}]: {exc}"
            ) from exc
        return float(root)

    return _ppf


def fit_cdf_to_ppf(
    cdf: ArrayFunc,
    lower: float = 0.0,
    upper: float = inf,
    options: NumericalOptions = DEFAULT_OPTIONS,
    init_step: float = 1.0,
) -> ArrayMethod:
    """
    Fit ``ppf`` by numerically inverting ``cdf``.

    Parameters
    ----------
    cdf : ArrayFunc
        Vectorised non-decreasing CDF supported on ``[lower, upper]``.
    lower, upper : float
        Support bounds; ``upper`` may be ``inf``.
    options : NumericalOptions
        Root-finding tolerances and bracket growth.
    init_step : float, default 1.0
        Initial right end of the bracket for an unbounded support.

    Returns
    -------
    FittedComputationMethod
        Fitted ``cdf -> ppf`` conversion. Probabilities outside ``[0, 1]``
        raise :class:`ArgumentValidationError`; ``NaN`` maps to ``NaN``.
    """

    def scalar_cdf(x: float) -> float:
        return float(np.asarray(cdf(np.asarray([x], dtype=float)), dtype=float)[0])

    ppf_scalar = _ppf_brentq_from_cdf(
        scalar_cdf, lower=lower, upper=upper, init_step=init_step, options=options
    )

    def _ppf(p: NumericArray, **_: Any) -> NumericArray:
        p = np.asarray(p, dtype=float)
        if np.any((p < 0.0) | (p > 1.0)):
            raise ArgumentValidationError("Probabilities must lie in [0, 1]")
        values = [ppf_scalar(float(pi)) for pi in p.ravel()]
        return np.asarray(values, dtype=float).reshape(p.shape)

    ppf_func = cast(Callable[[NumericArray, KwArg(Any)], NumericArray], _ppf)
    return FittedComputationMethod(
        target=CharacteristicName.PPF, sources=[CharacteristicName.CDF], func=ppf_func
    )


def fit_pdf_to_cdf(
    pdf: ArrayFunc,
    lower: float,
    upper: float,
    options: NumericalOptions = DEFAULT_OPTIONS,
) -> ArrayMethod:
    """
    Fit ``cdf`` on the bounded support ``[lower, upper]`` by integrating ``pdf``.

    Returns
    -------
    FittedComputationMethod
        Fitted ``pdf -> cdf`` conversion, clipped to ``[0, 1]``.
    """

    def density(t: float) -> float:
        return float(np.asarray(pdf(np.asarray([t], dtype=float)), dtype=float)[0])

    def _cdf_scalar(x: float) -> float:
        if isnan(x):
            return float("nan")
        if x <= lower:
            return 0.0
        val = quad_or_raise(density, lower, min(x, upper), options, context=f" for x={x}")
        return min(max(val, 0.0), 1.0)

    def _cdf(x: NumericArray, **_: Any) -> NumericArray:
        x = np.asarray(x, dtype=float)
        values = [_cdf_scalar(float(xi)) for xi in x.ravel()]
        return np.asarray(values, dtype=float).reshape(x.shape)

    cdf_func = cast(Callable[[NumericArray, KwArg(Any)], NumericArray], _cdf)
    return FittedComputationMethod(
        target=CharacteristicName.CDF, sources=[CharacteristicName.PDF], func=cdf_func
    )


def fit_cdf_to_pmf(cdf: ArrayFunc, width: float, upper: float = inf) -> ArrayMethod:
    """
    Fit the mass of the interval ``[x, x + width)`` as ``cdf(x + width) - cdf(x)``.

    Raises
    ------
    ArgumentValidationError
        (on call) If some ``x + width`` exceeds ``upper``.
    """

    def _pmf(x: NumericArray, **_: Any) -> NumericArray:
        x = np.asarray(x, dtype=float)
        if np.any(x + width > upper):
            raise ArgumentValidationError(
                f"Interval upper bounds x + {width} must not exceed D={upper}"
            )
        values = np.asarray(cdf(np.concatenate([x.ravel(), (x + width).ravel()])), dtype=float)
        f_low, f_high = np.split(values, 2)
        return np.maximum(f_high - f_low, 0.0).reshape(x.shape)

    pmf_func = cast(Callable[[NumericArray, KwArg(Any)], NumericArray], _pmf)
    return FittedComputationMethod(
        target=CharacteristicName.PMF, sources=[CharacteristicName.CDF], func=pmf_func
    )


__all__ = [
    "fit_cdf_to_pdf",
    "fit_cdf_to_pmf",
    "fit_cdf_to_ppf",
    "fit_pdf_to_cdf",
]
