"""
Resolution and Dispatch Strategies
==================================

This module turns the user-facing arguments into a distribution descriptor:

- :func:`resolve_delay` / :func:`resolve_primary` — normalise a delay or
  primary distribution given by name, object or plain callable into a
  :class:`DelaySpec` / :class:`PrimarySpec` carrying its name tag.
- :class:`DispatchStrategy` — protocol for building descriptors.
- :class:`DefaultDispatchStrategy` — validates the inputs, then prefers a
  registered closed form and falls back to numerical integration.

Notes
-----
- Identity is by name tag only. A callable without an explicit name is
  tagged ``"custom"`` and always integrated numerically.
- The absence of a closed form is a normal outcome and is logged at DEBUG.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np
from mypy_extensions import KwArg

from primarycensored.config import DEFAULT_OPTIONS
from primarycensored.distributions.computation import (
    AnalyticalComputation,
    NumericalComputation,
    SolutionKey,
)
from primarycensored.distributions.registry import analytical_solution_register
from primarycensored.distributions.validation import validate_delay_cdf, validate_primary_pdf
from primarycensored.errors import (
    ArgumentValidationError,
    MissingCapabilityError,
    ParametrizationError,
)
from primarycensored.families.configuration import configure_families_register
from primarycensored.families.distribution import DelayDistribution
from primarycensored.families.parametric_family import ParametricFamily
from primarycensored.families.primary import PrimaryDistribution
from primarycensored.families.registry import (
    ParametricFamilyRegister,
    PrimaryDistributionRegister,
)
from primarycensored.types import CharacteristicName, DelayName, NumericArray, PrimaryName

if TYPE_CHECKING:
    from primarycensored.config import CensoringWindow, NumericalOptions
    from primarycensored.distributions.computation import PrimaryCensored
    from primarycensored.families.parametrizations import Parametrization
    from primarycensored.types import ArrayFunc

logger = logging.getLogger(__name__)

type CustomDelayCdf = Callable[[NumericArray, KwArg(Any)], NumericArray]
type DelayLike = str | ParametricFamily | DelayDistribution | CustomDelayCdf
type PrimaryLike = str | PrimaryDistribution | Callable[..., Any] | None


@dataclass(frozen=True, slots=True)
class DelaySpec:
    """
    A resolved delay distribution.

    Parameters
    ----------
    name : str
        Name tag used for closed-form lookup.
    cdf : ArrayFunc
        Delay CDF bound to its parameters.
    family : ParametricFamily, optional
        Family the parameters belong to; ``None`` for an unparametrised
        callable.
    parameters : Parametrization, optional
        Base parameters within ``family``.
    """

    name: str
    cdf: ArrayFunc
    family: ParametricFamily | None = None
    parameters: Parametrization | None = None

    @property
    def has_sampler(self) -> bool:
        """Whether delays can be drawn exactly from the family."""
        return self.family is not None and self.family.has_sampler

    def sample(self, size: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``size`` delays with the family sampler."""
        if self.family is None or self.parameters is None:
            raise MissingCapabilityError(f"Delay '{self.name}' has no family sampler.")
        return np.asarray(self.family.sample(self.parameters, size, rng), dtype=float)


@dataclass(frozen=True, slots=True)
class PrimarySpec:
    """
    A resolved primary event distribution with its auxiliary arguments.

    Parameters
    ----------
    name : str
        Name tag used for closed-form lookup.
    distribution : PrimaryDistribution
        Underlying distribution.
    args : Mapping[str, float]
        Auxiliary arguments, e.g. the growth rate ``r``.
    """

    name: str
    distribution: PrimaryDistribution
    args: Mapping[str, Any] = field(default_factory=dict)

    @property
    def has_cdf(self) -> bool:
        return self.distribution.cdf is not None

    @property
    def has_sampler(self) -> bool:
        return self.distribution.sampler is not None

    def pdf(self, x: NumericArray, pwindow: float) -> NumericArray:
        """Primary density at ``x``."""
        return np.asarray(self.distribution.pdf(x, pwindow, **self.args), dtype=float)

    def cdf(self, x: NumericArray, pwindow: float) -> NumericArray:
        """Primary CDF at ``x`` (requires a closed-form CDF)."""
        if self.distribution.cdf is None:
            raise MissingCapabilityError(
                f"Primary distribution '{self.name}' has no closed-form CDF."
            )
        return np.asarray(self.distribution.cdf(x, pwindow, **self.args), dtype=float)

    def sample(self, size: int, pwindow: float, rng: np.random.Generator) -> NumericArray:
        """Draw ``size`` primary times with the exact sampler."""
        return np.asarray(self.distribution.sample(size, pwindow, rng, **self.args), dtype=float)


def _family_spec(
    family: ParametricFamily, name: str | None, delay_params: Mapping[str, Any]
) -> DelaySpec:
    parameters = family.parametrize(**delay_params)
    return DelaySpec(
        name=name or family.name,
        cdf=family.characteristic(CharacteristicName.CDF, parameters),
        family=family,
        parameters=parameters,
    )


def resolve_delay(
    delay: DelayLike,
    delay_name: str | None = None,
    delay_params: Mapping[str, Any] | None = None,
) -> DelaySpec:
    """
    Normalise a delay distribution argument.

    Parameters
    ----------
    delay : str, ParametricFamily, DelayDistribution or callable
        Registered family name, family, bound distribution, or a vectorised
        CDF ``(q, **delay_params)``.
    delay_name : str, optional
        Explicit name tag. For a callable naming a registered family, the
        parameters are matched to that family's parametrizations so that its
        closed forms apply; when no parametrization matches the parameter
        names the callable is integrated numerically.
    delay_params : Mapping[str, Any], optional
        Delay parameters.

    Raises
    ------
    ArgumentValidationError
        If ``delay`` has an unsupported type or an unknown name, or if
        parameters are passed with an already bound distribution.
    ParametrizationError
        If parameters match no parametrization of a family, or violate its
        constraints.
    """
    configure_families_register()
    params = dict(delay_params or {})

    if isinstance(delay, str):
        return _family_spec(ParametricFamilyRegister.get(delay), delay_name, params)

    if isinstance(delay, ParametricFamily):
        return _family_spec(delay, delay_name, params)

    if isinstance(delay, DelayDistribution):
        if params:
            raise ArgumentValidationError(
                f"Delay distribution '{delay.family_name}' is already parametrised; "
                f"got extra parameters {sorted(params)}"
            )
        bound_family = delay.family
        return DelaySpec(
            name=delay_name or delay.family_name,
            cdf=bound_family.characteristic(CharacteristicName.CDF, delay.parameters),
            family=bound_family,
            parameters=delay.parameters,
        )

    if callable(delay):
        custom = delay

        def cdf(q: NumericArray) -> NumericArray:
            return np.asarray(custom(q, **params), dtype=float)

        name = delay_name or DelayName.CUSTOM
        family: ParametricFamily | None = None
        parameters: Parametrization | None = None
        if ParametricFamilyRegister.contains(name):
            candidate = ParametricFamilyRegister.get(name)
            try:
                candidate.match_parametrization(frozenset(params))
            except ParametrizationError:
                logger.debug(
                    "Parameters %s do not match family '%s'; treating delay as custom",
                    sorted(params),
                    name,
                )
            else:
                family = candidate
                parameters = candidate.parametrize(**params)
        return DelaySpec(name=str(name), cdf=cdf, family=family, parameters=parameters)

    raise ArgumentValidationError(
        "delay must be a family name, a ParametricFamily, a DelayDistribution or a "
        f"callable CDF, got {type(delay).__name__}"
    )


def resolve_primary(
    primary: PrimaryLike = None,
    primary_name: str | None = None,
    primary_args: Mapping[str, Any] | None = None,
) -> PrimarySpec:
    """
    Normalise a primary event distribution argument.

    Parameters
    ----------
    primary : str, PrimaryDistribution, callable or None
        Registered name, distribution, or a density ``(x, pwindow, **args)``.
        ``None`` selects the uniform distribution.
    primary_name : str, optional
        Explicit name tag.
    primary_args : Mapping[str, Any], optional
        Auxiliary arguments of the primary distribution.

    Raises
    ------
    MissingArgumentError
        If a required auxiliary argument is missing.
    ArgumentValidationError
        If ``primary`` has an unsupported type or an unknown name.
    """
    configure_families_register()
    args = dict(primary_args or {})

    if primary is None:
        distribution = PrimaryDistributionRegister.get(PrimaryName.UNIFORM)
    elif isinstance(primary, str):
        distribution = PrimaryDistributionRegister.get(primary)
    elif isinstance(primary, PrimaryDistribution):
        distribution = primary
    elif callable(primary):
        distribution = PrimaryDistribution(name=primary_name or PrimaryName.CUSTOM, pdf=primary)
    else:
        raise ArgumentValidationError(
            "primary must be None, a primary distribution name, a PrimaryDistribution or a "
            f"callable density, got {type(primary).__name__}"
        )

    distribution.check_args(args)
    return PrimarySpec(
        name=str(primary_name or distribution.name), distribution=distribution, args=args
    )


class DispatchStrategy(Protocol):
    """Protocol for building distribution descriptors."""

    options: NumericalOptions

    def build(
        self, delay: DelaySpec, primary: PrimarySpec, window: CensoringWindow
    ) -> PrimaryCensored: ...


class DefaultDispatchStrategy:
    """
    Default descriptor builder.

    Resolution order
    ----------------
    1. Validate the delay CDF at the sentinel points and the primary density
       at the window endpoints.
    2. If closed forms are enabled and the delay is parametrised, look up the
       ``(delay, primary)`` name pair in the analytical solution register.
    3. Found: return an :class:`AnalyticalComputation`.
    4. Otherwise: return a :class:`NumericalComputation`.

    Parameters
    ----------
    options : NumericalOptions, optional
        Numerical tunables; ``use_analytical=False`` forces integration.
    """

    def __init__(self, options: NumericalOptions = DEFAULT_OPTIONS) -> None:
        self.options = options

    def build(
        self, delay: DelaySpec, primary: PrimarySpec, window: CensoringWindow
    ) -> PrimaryCensored:
        """
        Build the descriptor for ``delay`` under ``primary``.

        Raises
        ------
        DistributionValidationError
            If the delay CDF or the primary density fails its checks.
        """
        validate_delay_cdf(delay.cdf, window.D)
        validate_primary_pdf(primary.pdf, window.primary_interval, self.options)

        key = SolutionKey(delay.name, primary.name)
        solution = None
        if self.options.use_analytical and delay.family is not None:
            solution = analytical_solution_register().get(*key)

        if solution is not None and delay.family is not None and delay.parameters is not None:
            logger.debug("Using analytical solution for %s", key)
            return AnalyticalComputation(
                kind=key,
                solution=solution,
                family=delay.family,
                parameters=delay.parameters,
                primary_args=primary.args,
                delay_cdf=delay.cdf,
                primary_pdf=primary.pdf,
            )

        logger.debug("No analytical solution for %s; using numerical integration", key)
        return NumericalComputation(
            delay_cdf=delay.cdf, primary_pdf=primary.pdf, options=self.options
        )


__all__ = [
    "DefaultDispatchStrategy",
    "DelaySpec",
    "DispatchStrategy",
    "PrimarySpec",
    "resolve_delay",
    "resolve_primary",
]
