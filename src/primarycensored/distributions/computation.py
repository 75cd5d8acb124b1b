"""
Computation Primitives
======================

This module defines the building blocks used to evaluate a primary event
censored distribution:

- :class:`SolutionKey` — the ``(delay, primary)`` name pair a closed form is
  registered under.
- :class:`AnalyticalComputation` — a closed-form censored CDF bound to the
  delay family, its parameters and the primary arguments.
- :class:`NumericalComputation` — the censored CDF obtained by integrating
  the delay CDF against the primary density.
- :data:`PrimaryCensored` — the distribution descriptor, one of the two.
- :class:`FittedComputationMethod` — a characteristic derived from another
  one (e.g. a PDF by differencing a CDF), ready to be called.

Notes
-----
- Descriptors are immutable and built fresh for every top-level call.
- Every callable here is vectorised: arrays in, arrays of the same shape out.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

import numpy as np
from mypy_extensions import KwArg

from primarycensored.config import DEFAULT_OPTIONS, NumericalOptions
from primarycensored.distributions.integration import integrate_censored_cdf
from primarycensored.types import CharacteristicName, Interval1D

if TYPE_CHECKING:
    from primarycensored.families.parametric_family import ParametricFamily
    from primarycensored.families.parametrizations import Parametrization
    from primarycensored.families.primary import AnalyticalSolution
    from primarycensored.types import ArrayFunc, NumericArray

    type BoundPrimaryPdf = Callable[[NumericArray, float], NumericArray]


class SolutionKey(NamedTuple):
    """Name pair identifying a closed-form censored CDF."""

    delay: str
    primary: str


@dataclass(frozen=True, slots=True)
class AnalyticalComputation:
    """
    Censored CDF with a closed form.

    Parameters
    ----------
    kind : SolutionKey
        Name pair the solution was found under.
    solution : AnalyticalSolution
        Closed-form censored CDF.
    family : ParametricFamily
        Delay family.
    parameters : Parametrization
        Delay parameters.
    primary_args : Mapping[str, float]
        Auxiliary arguments of the primary distribution.
    delay_cdf : ArrayFunc
        Delay CDF bound to its parameters.
    primary_pdf : Callable[[NumericArray, float], NumericArray]
        Primary density bound to its arguments.
    """

    kind: SolutionKey
    solution: AnalyticalSolution
    family: ParametricFamily
    parameters: Parametrization
    primary_args: Mapping[str, float]
    delay_cdf: ArrayFunc
    primary_pdf: BoundPrimaryPdf


@dataclass(frozen=True, slots=True)
class NumericalComputation:
    """
    Censored CDF by numerical integration over the primary window.

    Parameters
    ----------
    delay_cdf : ArrayFunc
        Delay CDF bound to its parameters.
    primary_pdf : Callable[[NumericArray, float], NumericArray]
        Primary density bound to its arguments.
    options : NumericalOptions
        Quadrature tolerances.
    """

    delay_cdf: ArrayFunc
    primary_pdf: BoundPrimaryPdf
    options: NumericalOptions = field(default=DEFAULT_OPTIONS)
    kind: None = None


type PrimaryCensored = AnalyticalComputation | NumericalComputation


def evaluate_cdf(
    descriptor: PrimaryCensored, q: NumericArray | float, pwindow: float
) -> NumericArray:
    """
    Evaluate the (untruncated) censored CDF described by ``descriptor``.

    Parameters
    ----------
    descriptor : PrimaryCensored
        Distribution descriptor.
    q : array_like
        Evaluation points.
    pwindow : float
        Primary window width. ``0`` yields the delay CDF itself.

    Returns
    -------
    NumericArray
        Values in ``[0, 1]`` with the shape of ``q``. ``NaN`` maps to ``NaN``,
        ``+inf`` to ``1`` and ``-inf`` to ``0``.
    """
    q = np.asarray(q, dtype=float)
    out = np.empty(q.shape, dtype=float)
    out[np.isnan(q)] = np.nan
    out[q == np.inf] = 1.0
    out[q == -np.inf] = 0.0

    finite = np.isfinite(q)
    if not finite.any():
        return out

    points = q[finite]
    if pwindow == 0:
        values = np.asarray(descriptor.delay_cdf(points), dtype=float)
    else:
        match descriptor:
            case AnalyticalComputation(
                solution=solution, family=family, parameters=parameters, primary_args=args
            ):
                values = solution(points, pwindow, family, parameters, args)
            case NumericalComputation(
                delay_cdf=delay_cdf, primary_pdf=primary_pdf, options=options
            ):
                values = integrate_censored_cdf(
                    delay_cdf, primary_pdf, points, Interval1D(0.0, pwindow), options
                )
            case _:
                raise TypeError(f"Unknown distribution descriptor: {type(descriptor).__name__}")

    out[finite] = np.clip(values, 0.0, 1.0)
    return out


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """Characteristic derived from another one (ready-to-use).

    Parameters
    ----------
    target : CharacteristicName
        Destination characteristic.
    sources : Sequence[CharacteristicName]
        Source characteristics.
    func : Callable[[In, KwArg(Any)], Out]
        Callable implementing the derived characteristic.
    """

    target: CharacteristicName
    sources: Sequence[CharacteristicName]
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the derived characteristic."""
        return self.func(data, **options)


__all__ = [
    "AnalyticalComputation",
    "FittedComputationMethod",
    "NumericalComputation",
    "PrimaryCensored",
    "SolutionKey",
    "evaluate_cdf",
]
