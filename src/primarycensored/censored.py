"""
Functional Interface
====================

Entry points for primary event censored delay distributions:

- :func:`censored_cdf` — censored (and optionally truncated) CDF.
- :func:`censored_pdf` — its density, by finite differences.
- :func:`censored_pmf` — probability mass of secondary censoring intervals.
- :func:`censored_quantile` — quantile function, by inversion.
- :func:`sample_censored` — random observed delays.

Short aliases ``ppcens``, ``dpcens``, ``qpcens`` and ``rpcens`` refer to the
same functions.

Examples
--------
>>> from primarycensored import censored_cdf
>>> censored_cdf([1.0, 2.0], "gamma", pwindow=1.0, shape=1.77, rate=0.44)  # doctest: +SKIP
array([0.0788..., 0.2443...])
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf
from numbers import Integral
from typing import TYPE_CHECKING, Any

import numpy as np

from primarycensored.config import DEFAULT_OPTIONS, CensoringWindow
from primarycensored.distributions.fitters import fit_cdf_to_pdf, fit_cdf_to_pmf, fit_cdf_to_ppf
from primarycensored.distributions.sampling import PrimaryCensoredSampler
from primarycensored.distributions.strategies import (
    DefaultDispatchStrategy,
    resolve_delay,
    resolve_primary,
)
from primarycensored.distributions.truncation import TruncatedCdf
from primarycensored.errors import ArgumentValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from numpy.typing import ArrayLike

    from primarycensored.config import NumericalOptions
    from primarycensored.distributions.strategies import DelayLike, PrimaryLike
    from primarycensored.types import NumericArray


def _as_output(values: NumericArray, like: ArrayLike) -> float | NumericArray:
    if np.ndim(like) == 0:
        return float(np.asarray(values).reshape(()))
    return values


def _truncated_cdf(
    delay: DelayLike,
    window: CensoringWindow,
    primary: PrimaryLike,
    primary_args: Mapping[str, Any] | None,
    delay_name: str | None,
    primary_name: str | None,
    options: NumericalOptions,
    delay_params: Mapping[str, Any],
) -> TruncatedCdf:
    delay_spec = resolve_delay(delay, delay_name, delay_params)
    primary_spec = resolve_primary(primary, primary_name, primary_args)
    descriptor = DefaultDispatchStrategy(options).build(delay_spec, primary_spec, window)
    return TruncatedCdf(descriptor, window, options)


def censored_cdf(
    q: ArrayLike,
    delay: DelayLike,
    pwindow: float = 1.0,
    D: float = inf,
    primary: PrimaryLike = None,
    primary_args: Mapping[str, Any] | None = None,
    *,
    delay_name: str | None = None,
    primary_name: str | None = None,
    options: NumericalOptions | None = None,
    **delay_params: Any,
) -> float | NumericArray:
    """
    Primary event censored CDF.

    Parameters
    ----------
    q : array_like
        Quantiles.
    delay : str, ParametricFamily, DelayDistribution or callable
        Delay distribution: a registered family name (``"gamma"``,
        ``"lognormal"``, ``"weibull"``, ``"exponential"``), a family, a bound
        distribution, or a vectorised CDF ``(q, **delay_params)``.
    pwindow : float, default 1.0
        Primary event window width.
    D : float, default inf
        Truncation bound.
    primary : str, PrimaryDistribution, callable or None
        Primary event distribution; ``None`` is uniform over the window.
    primary_args : Mapping[str, Any], optional
        Auxiliary arguments of the primary distribution (e.g. ``{"r": 0.2}``).
    delay_name, primary_name : str, optional
        Name tags overriding the inferred ones; they select closed forms.
    options : NumericalOptions, optional
        Numerical tunables.
    **delay_params
        Delay parameters, e.g. ``shape=1.77, rate=0.44``.

    Returns
    -------
    float or NumericArray
        CDF values in ``[0, 1]``; a float for scalar ``q``.
    """
    options = options or DEFAULT_OPTIONS
    window = CensoringWindow(pwindow=pwindow, D=D)
    cdf = _truncated_cdf(
        delay, window, primary, primary_args, delay_name, primary_name, options, delay_params
    )
    return _as_output(cdf(np.asarray(q, dtype=float)), q)


def censored_pdf(
    x: ArrayLike,
    delay: DelayLike,
    pwindow: float = 1.0,
    D: float = inf,
    primary: PrimaryLike = None,
    primary_args: Mapping[str, Any] | None = None,
    *,
    delay_name: str | None = None,
    primary_name: str | None = None,
    options: NumericalOptions | None = None,
    **delay_params: Any,
) -> float | NumericArray:
    """
    Primary event censored density, the finite-difference derivative of
    :func:`censored_cdf`.

    Arguments are those of :func:`censored_cdf`. The density is ``0`` outside
    ``[0, D)``.
    """
    options = options or DEFAULT_OPTIONS
    window = CensoringWindow(pwindow=pwindow, D=D)
    cdf = _truncated_cdf(
        delay, window, primary, primary_args, delay_name, primary_name, options, delay_params
    )
    pdf = fit_cdf_to_pdf(cdf, lower=0.0, upper=window.D, step=options.fd_step)
    return _as_output(pdf(np.asarray(x, dtype=float)), x)


def censored_pmf(
    x: ArrayLike,
    delay: DelayLike,
    swindow: float = 1.0,
    pwindow: float = 1.0,
    D: float = inf,
    primary: PrimaryLike = None,
    primary_args: Mapping[str, Any] | None = None,
    *,
    delay_name: str | None = None,
    primary_name: str | None = None,
    options: NumericalOptions | None = None,
    **delay_params: Any,
) -> float | NumericArray:
    """
    Probability that the observed delay falls in ``[x, x + swindow)``.

    Computed as ``F(x + swindow) - F(x)`` with ``F`` the (truncated) censored
    CDF.

    Raises
    ------
    ArgumentValidationError
        If some ``x + swindow`` exceeds ``D``.
    """
    options = options or DEFAULT_OPTIONS
    window = CensoringWindow(pwindow=pwindow, swindow=swindow, D=D)
    cdf = _truncated_cdf(
        delay, window, primary, primary_args, delay_name, primary_name, options, delay_params
    )
    pmf = fit_cdf_to_pmf(cdf, window.swindow, window.D)
    return _as_output(pmf(np.asarray(x, dtype=float)), x)


def censored_quantile(
    p: ArrayLike,
    delay: DelayLike,
    pwindow: float = 1.0,
    D: float = inf,
    primary: PrimaryLike = None,
    primary_args: Mapping[str, Any] | None = None,
    *,
    delay_name: str | None = None,
    primary_name: str | None = None,
    options: NumericalOptions | None = None,
    **delay_params: Any,
) -> float | NumericArray:
    """
    Quantile function of the censored distribution, by root finding on
    :func:`censored_cdf`.

    ``p == 0`` maps to ``0`` and ``p == 1`` to ``D``.

    Raises
    ------
    ArgumentValidationError
        If some ``p`` lies outside ``[0, 1]``.
    BracketingError
        If a quantile cannot be bracketed or located.
    """
    options = options or DEFAULT_OPTIONS
    window = CensoringWindow(pwindow=pwindow, D=D)
    cdf = _truncated_cdf(
        delay, window, primary, primary_args, delay_name, primary_name, options, delay_params
    )
    ppf = fit_cdf_to_ppf(cdf, 0.0, window.D, options, init_step=max(1.0, window.pwindow))
    return _as_output(ppf(np.asarray(p, dtype=float)), p)


def sample_censored(
    n: int,
    delay: DelayLike,
    pwindow: float = 1.0,
    swindow: float = 1.0,
    D: float = inf,
    primary: PrimaryLike = None,
    primary_args: Mapping[str, Any] | None = None,
    *,
    random_state: np.random.Generator | int | None = None,
    delay_name: str | None = None,
    primary_name: str | None = None,
    options: NumericalOptions | None = None,
    **delay_params: Any,
) -> NumericArray:
    """
    Draw ``n`` observed delays.

    Each draw is a primary event time plus a delay; totals at or beyond ``D``
    are rejected and the rest are rounded down to multiples of ``swindow``
    (unless ``swindow == 0``).

    Parameters
    ----------
    n : int
        Number of draws.
    random_state : numpy.random.Generator, int or None
        Generator or seed.

    Other arguments are those of :func:`censored_cdf`.

    Raises
    ------
    ArgumentValidationError
        If ``n`` is not a non-negative integer.
    SamplingError
        If truncation rejects nearly all draws.
    """
    if not isinstance(n, Integral) or isinstance(n, bool) or n < 0:
        raise ArgumentValidationError(f"n must be a non-negative integer, got {n!r}")

    options = options or DEFAULT_OPTIONS
    window = CensoringWindow(pwindow=pwindow, swindow=swindow, D=D)
    delay_spec = resolve_delay(delay, delay_name, delay_params)
    primary_spec = resolve_primary(primary, primary_name, primary_args)
    DefaultDispatchStrategy(options).build(delay_spec, primary_spec, window)

    rng = np.random.default_rng(random_state)
    sampler = PrimaryCensoredSampler(delay_spec, primary_spec, window, options)
    return sampler.sample(int(n), rng)


ppcens = censored_cdf
dpcens = censored_pdf
qpcens = censored_quantile
rpcens = sample_censored


__all__ = [
    "censored_cdf",
    "censored_pdf",
    "censored_pmf",
    "censored_quantile",
    "sample_censored",
    "ppcens",
    "dpcens",
    "qpcens",
    "rpcens",
]
