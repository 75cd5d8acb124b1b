"""
Configuration Structures
========================

- :class:`CensoringWindow` — primary window, secondary interval and truncation.
- :class:`NumericalOptions` — tolerances and limits of the numerical engine.

Both are frozen and validated on construction; every field carries a
documented default.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from math import inf, isfinite, isnan

from primarycensored.errors import ArgumentValidationError
from primarycensored.types import Interval1D


@dataclass(frozen=True, slots=True)
class CensoringWindow:
    """
    Observation windows of a primary event censored delay.

    Parameters
    ----------
    pwindow : float, default 1.0
        Width of the primary event window. ``0`` means the primary event
        time is known exactly.
    swindow : float, default 1.0
        Width of the secondary censoring interval. Only used by samplers and
        interval masses; ``0`` disables rounding.
    D : float, default inf
        Truncation bound (maximum observable delay).

    Raises
    ------
    ArgumentValidationError
        If a window is negative or non-finite, or ``D`` is not positive.
    """

    pwindow: float = 1.0
    swindow: float = 1.0
    D: float = inf

    def __post_init__(self) -> None:
        for name in ("pwindow", "swindow"):
            value = float(getattr(self, name))
            if not isfinite(value) or value < 0:
                raise ArgumentValidationError(
                    f"{name} must be a finite non-negative number, got {value!r}"
                )
            object.__setattr__(self, name, value)

        D = float(self.D)
        if isnan(D) or D <= 0:
            raise ArgumentValidationError(f"D must be positive (or inf), got {D!r}")
        object.__setattr__(self, "D", D)

    @property
    def is_truncated(self) -> bool:
        """Whether a finite truncation bound is in effect."""
        return isfinite(self.D)

    @property
    def primary_interval(self) -> Interval1D:
        """Support ``[0, pwindow]`` of the primary event time."""
        return Interval1D(0.0, self.pwindow)


@dataclass(frozen=True, slots=True)
class NumericalOptions:
    """
    Tunables of the numerical engine.

    Parameters
    ----------
    use_analytical : bool, default True
        Use closed-form solutions when one is registered for the
        (delay, primary) pair. ``False`` forces numerical integration.
    epsabs, epsrel : float, default 1e-10
        Absolute / relative error targets of the adaptive quadrature.
    limit : int, default 200
        Maximum number of quadrature subintervals.
    fd_step : float, default 1e-4
        Finite-difference step relative to ``max(1, |x|)``.
    root_xtol : float, default 1e-10
        Absolute tolerance of the root finder used for CDF inversion.
    root_maxiter : int, default 200
        Maximum iterations of the root finder.
    max_expand : int, default 60
        Maximum geometric expansions when bracketing an unbounded quantile.
    expand_factor : float, default 2.0
        Growth factor of the bracket.
    min_normalizer : float, default 1e-12
        Smallest admissible truncation normaliser ``F(D)``.
    max_rejection_rounds : int, default 100
        Maximum rounds of rejection sampling under truncation.
    max_batch_size : int, default 1_000_000
        Largest batch drawn in one rejection round.
    check_primary_normalization : bool, default False
        Verify that a primary density integrates to one over its window.
    """

    use_analytical: bool = True
    epsabs: float = 1e-10
    epsrel: float = 1e-10
    limit: int = 200
    fd_step: float = 1e-4
    root_xtol: float = 1e-10
    root_maxiter: int = 200
    max_expand: int = 60
    expand_factor: float = 2.0
    min_normalizer: float = 1e-12
    max_rejection_rounds: int = 100
    max_batch_size: int = 1_000_000
    check_primary_normalization: bool = False

    def __post_init__(self) -> None:
        positive = {
            "epsabs": self.epsabs,
            "epsrel": self.epsrel,
            "fd_step": self.fd_step,
            "root_xtol": self.root_xtol,
            "min_normalizer": self.min_normalizer,
        }
        for name, value in positive.items():
            if not (isfinite(value) and value > 0):
                raise ArgumentValidationError(f"{name} must be positive, got {value!r}")

        counts = {
            "limit": self.limit,
            "root_maxiter": self.root_maxiter,
            "max_expand": self.max_expand,
            "max_rejection_rounds": self.max_rejection_rounds,
            "max_batch_size": self.max_batch_size,
        }
        for name, value in counts.items():
            if int(value) != value or value < 1:
                raise ArgumentValidationError(f"{name} must be a positive integer, got {value!r}")

        if not self.expand_factor > 1.0:
            raise ArgumentValidationError(
                f"expand_factor must be greater than 1, got {self.expand_factor!r}"
            )


DEFAULT_OPTIONS = NumericalOptions()
"""Options used when a caller passes none."""


__all__ = [
    "CensoringWindow",
    "NumericalOptions",
    "DEFAULT_OPTIONS",
]
