"""
Sampling
========

This module defines the samplers of primary event censored delays:

- :class:`InverseTransformSampler` — draws from any continuous CDF by
  applying its numerically inverted ``ppf`` to i.i.d. uniforms.
- :class:`PrimaryCensoredSampler` — draws primary event times and delays,
  adds them, rejects totals at or beyond ``D`` and rounds down to the
  secondary censoring interval.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from functools import partial
from math import ceil, inf
from typing import TYPE_CHECKING

import numpy as np

from primarycensored.config import DEFAULT_OPTIONS
from primarycensored.distributions.fitters import fit_cdf_to_ppf, fit_pdf_to_cdf
from primarycensored.errors import ArgumentValidationError, SamplingError

if TYPE_CHECKING:
    from primarycensored.config import CensoringWindow, NumericalOptions
    from primarycensored.distributions.strategies import DelaySpec, PrimarySpec
    from primarycensored.types import ArrayFunc, NumericArray

logger = logging.getLogger(__name__)

BATCH_SAFETY_FACTOR = 1.1


class InverseTransformSampler:
    """
    Sampler drawing ``ppf(U)`` for ``U ~ U(0, 1)``.

    Parameters
    ----------
    cdf : ArrayFunc
        Vectorised CDF supported on ``[lower, upper]``.
    lower, upper : float
        Support bounds; ``upper`` may be ``inf``.
    options : NumericalOptions, optional
        Root-finding tolerances.
    init_step : float, default 1.0
        Initial bracket width for an unbounded support.
    """

    def __init__(
        self,
        cdf: ArrayFunc,
        lower: float = 0.0,
        upper: float = inf,
        options: NumericalOptions = DEFAULT_OPTIONS,
        init_step: float = 1.0,
    ) -> None:
        self.ppf = fit_cdf_to_ppf(cdf, lower, upper, options, init_step)

    def sample(self, size: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``size`` values."""
        return self.ppf(rng.random(size))


class PrimaryCensoredSampler:
    """
    End-to-end sampler of observed (censored, truncated) delays.

    Primary event times come from the primary distribution's exact sampler,
    else from inverting its CDF, else from inverting the integral of its
    density. Delays come from the family sampler, else from inverting the
    delay CDF.

    Parameters
    ----------
    delay : DelaySpec
        Resolved delay distribution.
    primary : PrimarySpec
        Resolved primary event distribution.
    window : CensoringWindow
        Primary window, secondary interval and truncation bound.
    options : NumericalOptions, optional
        Rejection limits and root-finding tolerances.
    """

    def __init__(
        self,
        delay: DelaySpec,
        primary: PrimarySpec,
        window: CensoringWindow,
        options: NumericalOptions = DEFAULT_OPTIONS,
    ) -> None:
        self.delay = delay
        self.primary = primary
        self.window = window
        self.options = options
        self._primary_inverse: InverseTransformSampler | None = None
        self._delay_inverse: InverseTransformSampler | None = None

    def _primary_times(self, size: int, rng: np.random.Generator) -> NumericArray:
        interval = self.window.primary_interval
        pwindow = interval.width
        if self.primary.has_sampler:
            times = self.primary.sample(size, pwindow, rng)
            if not np.all(interval.contains(times)):
                raise SamplingError(
                    f"Primary sampler '{self.primary.name}' drew times outside "
                    f"[{interval.left}, {interval.right}]"
                )
            return times
        if interval.is_degenerate:
            return np.full(size, interval.left, dtype=float)
        if self._primary_inverse is None:
            if self.primary.has_cdf:
                cdf = partial(self.primary.cdf, pwindow=pwindow)
            else:
                pdf = partial(self.primary.pdf, pwindow=pwindow)
                cdf = fit_pdf_to_cdf(pdf, interval.left, interval.right, self.options)
            self._primary_inverse = InverseTransformSampler(
                cdf, interval.left, interval.right, self.options, init_step=pwindow
            )
        return self._primary_inverse.sample(size, rng)

    def _delays(self, size: int, rng: np.random.Generator) -> NumericArray:
        if self.delay.has_sampler:
            return self.delay.sample(size, rng)
        if self._delay_inverse is None:
            self._delay_inverse = InverseTransformSampler(
                self.delay.cdf, 0.0, inf, self.options, init_step=max(1.0, self.window.pwindow)
            )
        return self._delay_inverse.sample(size, rng)

    def _batch_size(self, remaining: int, acceptance: float) -> int:
        if acceptance <= 0.0:
            return self.options.max_batch_size
        wanted = ceil(remaining / acceptance * BATCH_SAFETY_FACTOR)
        return max(1, min(self.options.max_batch_size, max(remaining, wanted)))

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        """
        Draw ``n`` observed delays.

        Raises
        ------
        ArgumentValidationError
            If ``n`` is negative.
        SamplingError
            If truncation rejects too many draws within
            ``options.max_rejection_rounds`` rounds.
        """
        if n < 0:
            raise ArgumentValidationError(f"n must be non-negative, got {n}")

        D = self.window.D
        accepted: list[NumericArray] = []
        count = 0
        drawn_total = 0
        accepted_total = 0
        acceptance = 1.0

        for round_no in range(1, self.options.max_rejection_rounds + 1):
            if count >= n:
                break
            remaining = n - count
            batch = self._batch_size(remaining, acceptance)
            totals = self._primary_times(batch, rng) + self._delays(batch, rng)
            if self.window.is_truncated:
                totals = totals[totals < D]

            drawn_total += batch
            accepted_total += totals.size
            acceptance = accepted_total / drawn_total
            logger.debug(
                "Rejection round %d: kept %d of %d draws (acceptance %.3g)",
                round_no,
                totals.size,
                batch,
                acceptance,
            )

            kept = totals[:remaining]
            accepted.append(kept)
            count += kept.size

        if count < n:
            raise SamplingError(
                f"Drew only {count} of {n} samples below D={D} in "
                f"{self.options.max_rejection_rounds} rounds (acceptance rate {acceptance:.3g})"
            )

        observed = np.concatenate(accepted) if accepted else np.empty(0, dtype=float)
        swindow = self.window.swindow
        if swindow > 0:
            observed = np.floor(observed / swindow) * swindow
        return observed


__all__ = [
    "InverseTransformSampler",
    "PrimaryCensoredSampler",
]
