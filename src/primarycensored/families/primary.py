"""
Primary event distributions.

A primary event distribution describes when, within a window ``[0, pwindow]``,
the primary event happened. It always has a density, and may additionally
provide a closed-form CDF, an exact sampler, and closed-form censored CDFs for
specific delay families (the latter feed the analytical solution registry).

Callable signatures
-------------------
- density / CDF: ``(x, pwindow, **args) -> values``
- sampler: ``(size, pwindow, rng, **args) -> draws``
- analytical solution: ``(q, pwindow, family, parameters, args) -> values``
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from primarycensored.errors import MissingArgumentError, MissingCapabilityError

if TYPE_CHECKING:
    import numpy as np

    from primarycensored.families.parametric_family import ParametricFamily
    from primarycensored.families.parametrizations import Parametrization
    from primarycensored.types import NumericArray

PrimaryFunc = Callable[..., Any]
"""``(x, pwindow, **args) -> values``"""

PrimarySampler = Callable[..., Any]
"""``(size, pwindow, rng, **args) -> draws``"""

AnalyticalSolution = Callable[
    ["NumericArray", float, "ParametricFamily", "Parametrization", Mapping[str, float]],
    "NumericArray",
]
"""Closed-form censored CDF ``(q, pwindow, family, parameters, args) -> values``."""


@dataclass(frozen=True, slots=True)
class PrimaryDistribution:
    """
    Descriptor of a primary event distribution over ``[0, pwindow]``.

    Parameters
    ----------
    name : str
        Name tag used for analytical solution lookup.
    pdf : Callable
        Density ``(x, pwindow, **args)``; must integrate to one over the window.
    cdf : Callable, optional
        Closed-form CDF with the same signature as ``pdf``.
    sampler : Callable, optional
        Exact sampler ``(size, pwindow, rng, **args)``.
    required_args : tuple[str, ...]
        Auxiliary arguments that must be supplied.
    analytical_solutions : Mapping[str, AnalyticalSolution]
        Closed-form censored CDFs keyed by delay family name.
    """

    name: str
    pdf: PrimaryFunc
    cdf: PrimaryFunc | None = None
    sampler: PrimarySampler | None = None
    required_args: tuple[str, ...] = ()
    analytical_solutions: Mapping[str, AnalyticalSolution] = field(default_factory=dict)

    def check_args(self, args: Mapping[str, Any]) -> None:
        """
        Ensure every required auxiliary argument is present.

        Raises
        ------
        MissingArgumentError
            If some required argument is absent or ``None``.
        """
        missing = [a for a in self.required_args if args.get(a) is None]
        if missing:
            raise MissingArgumentError(
                f"Primary distribution '{self.name}' requires argument(s): {', '.join(missing)}"
            )

    def sample(
        self, size: int, pwindow: float, rng: np.random.Generator, **args: Any
    ) -> NumericArray:
        """
        Draw ``size`` primary event times with the exact sampler.

        Raises
        ------
        MissingCapabilityError
            If the distribution has no exact sampler.
        """
        if self.sampler is None:
            raise MissingCapabilityError(
                f"Primary distribution '{self.name}' provides no sampler."
            )
        self.check_args(args)
        return self.sampler(size, pwindow, rng, **args)


__all__ = [
    "AnalyticalSolution",
    "PrimaryDistribution",
    "PrimaryFunc",
    "PrimarySampler",
]
