"""
Truncation of a censored CDF at the maximum observable delay ``D``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

import numpy as np

from primarycensored.config import DEFAULT_OPTIONS
from primarycensored.distributions.computation import evaluate_cdf
from primarycensored.errors import TruncationError

if TYPE_CHECKING:
    from primarycensored.config import CensoringWindow, NumericalOptions
    from primarycensored.distributions.computation import PrimaryCensored
    from primarycensored.types import NumericArray


class TruncatedCdf:
    """
    Censored CDF normalised by its value at ``D``.

    With infinite ``D`` the raw censored CDF is returned unchanged. Otherwise
    values are ``raw(q) / raw(D)`` for ``q < D`` and exactly ``1`` for
    ``q >= D``. The normaliser is computed once per instance, on first use.

    Parameters
    ----------
    descriptor : PrimaryCensored
        Distribution descriptor.
    window : CensoringWindow
        Primary window and truncation bound.
    options : NumericalOptions, optional
        Supplies the smallest admissible normaliser.

    Raises
    ------
    TruncationError
        (on call) If ``raw(D)`` does not exceed ``options.min_normalizer``.
    """

    def __init__(
        self,
        descriptor: PrimaryCensored,
        window: CensoringWindow,
        options: NumericalOptions = DEFAULT_OPTIONS,
    ) -> None:
        self.descriptor = descriptor
        self.window = window
        self.options = options
        self._normalizer: float | None = None

    def raw(self, q: NumericArray | float) -> NumericArray:
        """Untruncated censored CDF."""
        return evaluate_cdf(self.descriptor, q, self.window.pwindow)

    @property
    def normalizer(self) -> float:
        """``raw(D)``; ``1`` without truncation."""
        if not self.window.is_truncated:
            return 1.0
        if self._normalizer is None:
            norm = float(self.raw(np.array([self.window.D]))[0])
            if not norm > self.options.min_normalizer:
                raise TruncationError(
                    f"Normaliser F({self.window.D}) = {norm!r} is too small "
                    f"(pwindow={self.window.pwindow}); the distribution has no mass below D"
                )
            self._normalizer = norm
        return self._normalizer

    def __call__(self, q: NumericArray | float) -> NumericArray:
        q = np.asarray(q, dtype=float)
        if not self.window.is_truncated:
            return self.raw(q)

        D = self.window.D
        norm = self.normalizer
        out = np.where(q >= D, 1.0, np.nan)
        below = q < D
        if below.any():
            out[below] = np.clip(self.raw(q[below]) / norm, 0.0, 1.0)
        return out
