"""
Fail-fast checks on user-supplied delay CDFs and primary densities.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import isfinite
from typing import TYPE_CHECKING

import numpy as np

from primarycensored.distributions.integration import quad_or_raise
from primarycensored.errors import DistributionValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from primarycensored.config import NumericalOptions
    from primarycensored.types import ArrayFunc, Interval1D, NumericArray

PRIMARY_NORMALIZATION_TOLERANCE = 1e-3


def sentinel_points(D: float) -> NumericArray:
    """Points a delay CDF is checked at: ``[1, 10, 100]`` or ``[1, D/2, D]``, ascending."""
    if isfinite(D):
        return np.sort(np.array([1.0, D / 2.0, D], dtype=float))
    return np.array([1.0, 10.0, 100.0], dtype=float)


def validate_delay_cdf(delay_cdf: ArrayFunc, D: float) -> None:
    """
    Check a delay CDF at the sentinel points.

    Raises
    ------
    DistributionValidationError
        If a value is not finite, falls outside ``[0, 1]``, or the values
        decrease.
    """
    points = sentinel_points(D)
    try:
        values = np.asarray(delay_cdf(points), dtype=float)
    except (TypeError, ValueError) as exc:
        raise DistributionValidationError(f"Delay CDF could not be evaluated: {exc}") from exc

    if values.shape != points.shape:
        raise DistributionValidationError(
            f"Delay CDF must be vectorised: got shape {values.shape} for input {points.shape}"
        )
    if not np.all(np.isfinite(values)):
        raise DistributionValidationError(f"Delay CDF is not finite at {points.tolist()}")
    if np.any(values < 0.0) or np.any(values > 1.0):
        raise DistributionValidationError(
            f"Delay CDF values {values.tolist()} at {points.tolist()} are outside [0, 1]"
        )
    if np.any(np.diff(values) < 0.0):
        raise DistributionValidationError(
            f"Delay CDF is decreasing: {values.tolist()} at {points.tolist()}"
        )


def validate_primary_pdf(
    primary_pdf: Callable[[NumericArray, float], NumericArray],
    interval: Interval1D,
    options: NumericalOptions,
) -> None:
    """
    Check a primary density at the endpoints of its support ``interval``.

    With ``options.check_primary_normalization`` the density is also
    integrated over a non-degenerate interval and must give one within ``1e-3``.

    Raises
    ------
    DistributionValidationError
        If the density is negative or not finite at either endpoint, or
        is not normalised.
    """
    pwindow = interval.width
    endpoints = np.array([interval.left, interval.right], dtype=float)
    values = np.asarray(primary_pdf(endpoints, pwindow), dtype=float)
    if not np.all(np.isfinite(values)) or np.any(values < 0.0):
        raise DistributionValidationError(
            f"Primary density must be finite and non-negative at {interval.left} and "
            f"{interval.right}, got {values.tolist()}"
        )

    if options.check_primary_normalization and not interval.is_degenerate:

        def density(p: float) -> float:
            return float(np.asarray(primary_pdf(np.asarray([p]), pwindow))[0])

        total = quad_or_raise(
            density, interval.left, interval.right, options, context=" for primary density"
        )
        if abs(total - 1.0) > PRIMARY_NORMALIZATION_TOLERANCE:
            raise DistributionValidationError(
                f"Primary density integrates to {total:.6g} over "
                f"[{interval.left}, {interval.right}], expected 1"
            )
