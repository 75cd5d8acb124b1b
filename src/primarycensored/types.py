"""
Core Type Definitions
=====================

Fundamental types and name tags used throughout primarycensored.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from math import inf
from typing import Any, cast, overload

import numpy as np
from numpy.typing import NDArray

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[np.float64]
"""Type alias for float arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

ScalarFunc = Callable[[float], float]
"""Type alias for scalar functions (float -> float)."""

ArrayFunc = Callable[[NumericArray], NumericArray]
"""Type alias for vectorised functions (array -> array of the same shape)."""


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    Closed interval ``[left, right]`` on the real line.

    Parameters
    ----------
    left : float, default=-inf
        Left endpoint.
    right : float, default=inf
        Right endpoint.

    Notes
    -----
    A degenerate interval (``left == right``) contains exactly one point,
    which is how a zero-width primary window is represented.
    """

    left: float = -inf
    right: float = inf

    def __post_init__(self) -> None:
        if self.left > self.right:
            raise ValueError(f"Interval is empty: [{self.left}, {self.right}]")

    @property
    def width(self) -> float:
        """Length of the interval."""
        return self.right - self.left

    @property
    def is_degenerate(self) -> bool:
        """Whether the interval collapses to a single point."""
        return self.left == self.right

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Check if point(s) lie in the interval.

        Parameters
        ----------
        x : Number or NumericArray
            Point(s) to check.

        Returns
        -------
        bool or BoolArray
            True for points within ``[left, right]``.
        """
        arr = np.asarray(x)
        result = (arr >= self.left) & (arr <= self.right)
        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))


class CharacteristicName(StrEnum):
    """
    Names of the characteristics a delay family can provide.

    Attributes
    ----------
    PDF : str
        Probability density function.
    CDF : str
        Cumulative distribution function.
    PARTIAL_EXPECTATION : str
        ``x -> ∫_0^x t f(t) dt``, used by closed-form censored CDFs.
    PPF : str
        Percent point function (quantile).
    PMF : str
        Probability mass of a secondary censoring interval.
    """

    PDF = "pdf"
    CDF = "cdf"
    PPF = "ppf"
    PMF = "pmf"
    PARTIAL_EXPECTATION = "partial_expectation"


class DelayName(StrEnum):
    """Name tags of the built-in delay distribution families."""

    GAMMA = "gamma"
    LOGNORMAL = "lognormal"
    WEIBULL = "weibull"
    EXPONENTIAL = "exponential"
    CUSTOM = "custom"


class PrimaryName(StrEnum):
    """Name tags of the built-in primary event distributions."""

    UNIFORM = "uniform"
    EXPGROWTH = "expgrowth"
    CUSTOM = "custom"


__all__ = [
    "NumPyNumber",
    "Number",
    "NumericArray",
    "BoolArray",
    "ScalarFunc",
    "ArrayFunc",
    "Interval1D",
    "CharacteristicName",
    "DelayName",
    "PrimaryName",
]
