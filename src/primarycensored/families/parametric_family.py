"""
Delay distribution families.

A :class:`ParametricFamily` groups the characteristics of a delay
distribution (CDF, PDF, partial expectation) and its random-variate
sampler, all defined on the base parametrization, together with the
parametrizations a caller may use to supply parameters.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import partial
from typing import TYPE_CHECKING, dataclass_transform

from primarycensored.errors import MissingCapabilityError, ParametrizationError
from primarycensored.families.distribution import DelayDistribution

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    import numpy as np

    from primarycensored.families.parametrizations import Parametrization
    from primarycensored.types import ArrayFunc, CharacteristicName, NumericArray

    type ParametrizedFunction = Callable[[Parametrization, NumericArray], NumericArray]
    type ParametrizedSampler = Callable[[Parametrization, int, np.random.Generator], NumericArray]


class ParametricFamily:
    """
    A delay distribution family with one or more parametrizations.

    Parameters
    ----------
    name : str
        Name tag of the family; analytic solutions are looked up by it.
    distr_parametrizations : list[str]
        Parametrization names, the first being the base parametrization.
    distr_characteristics : dict[CharacteristicName, Callable]
        Characteristic functions ``(base_parameters, x) -> values``.
    sampler : Callable, optional
        Random-variate generator ``(base_parameters, size, rng) -> draws``.
    """

    def __init__(
        self,
        name: str,
        distr_parametrizations: list[str],
        distr_characteristics: Mapping[CharacteristicName, ParametrizedFunction],
        sampler: ParametrizedSampler | None = None,
    ):
        if not distr_parametrizations:
            raise ValueError(f"Family '{name}' needs at least one parametrization.")
        self._name = name
        self.parametrization_names: list[str] = list(distr_parametrizations)
        self.base_parametrization_name: str = self.parametrization_names[0]
        self.distr_characteristics: dict[CharacteristicName, ParametrizedFunction] = dict(
            distr_characteristics
        )
        self._sampler = sampler
        self._parametrizations: dict[str, type[Parametrization]] = {}

    def __repr__(self) -> str:
        return f"ParametricFamily(name={self._name!r})"

    @property
    def name(self) -> str:
        """Name tag of the family."""
        return self._name

    @property
    def parametrizations(self) -> dict[str, type[Parametrization]]:
        """Mapping from parametrization names to classes."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Base parametrization class.

        Raises
        ------
        ValueError
            If the base parametrization has not been registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    @property
    def has_sampler(self) -> bool:
        """Whether the family provides an exact random-variate generator."""
        return self._sampler is not None

    def register_parametrization(
        self, name: str, parametrization_class: type[Parametrization]
    ) -> None:
        """
        Register a parametrization class.

        Raises
        ------
        ValueError
            If ``name`` is not declared by the family or is already registered.
        """
        if name not in self.parametrization_names:
            raise ValueError(f"Family '{self._name}' does not declare parametrization '{name}'.")
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: str) -> type[Parametrization]:
        """Fetch a parametrization class by name (``KeyError`` if unknown)."""
        return self._parametrizations[name]

    def match_parametrization(self, names: set[str] | frozenset[str]) -> type[Parametrization]:
        """
        Find the parametrization whose parameter names are exactly ``names``.

        Raises
        ------
        ParametrizationError
            If no registered parametrization accepts these names.
        """
        for pname in self.parametrization_names:
            cls = self._parametrizations.get(pname)
            if cls is not None and cls.field_names() == names:
                return cls
        expected = "; ".join(
            f"({', '.join(sorted(cls.field_names()))})" for cls in self._parametrizations.values()
        )
        raise ParametrizationError(
            f"No parametrization of '{self._name}' accepts parameters "
            f"({', '.join(sorted(names))}); expected one of: {expected}"
        )

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """Convert ``parameters`` to the base parametrization."""
        if parameters.name == self.base_parametrization_name:
            return parameters
        base = parameters.transform_to_base_parametrization()
        base.validate()
        return base

    def parametrize(
        self, parametrization_name: str | None = None, **parameters_values: float
    ) -> Parametrization:
        """
        Build validated base parameters from keyword values.

        Parameters
        ----------
        parametrization_name : str, optional
            Parametrization to use. When omitted it is inferred from the
            keyword names.
        **parameters_values
            Parameter values.

        Returns
        -------
        Parametrization
            Validated parameters in the base parametrization.
        """
        if parametrization_name is None:
            cls = self.match_parametrization(frozenset(parameters_values))
        else:
            cls = self._parametrizations[parametrization_name]
        try:
            parameters = cls(**{k: float(v) for k, v in parameters_values.items()})
        except TypeError as exc:
            raise ParametrizationError(f"Invalid parameters for '{self._name}': {exc}") from exc
        parameters.validate()
        return self.to_base(parameters)

    def has_characteristic(self, characteristic: CharacteristicName) -> bool:
        """Whether the family defines ``characteristic``."""
        return characteristic in self.distr_characteristics

    def characteristic(
        self, characteristic: CharacteristicName, parameters: Parametrization
    ) -> ArrayFunc:
        """
        Bind a characteristic function to base parameters.

        Raises
        ------
        KeyError
            If the family does not define ``characteristic``.
        """
        func = self.distr_characteristics[characteristic]
        return partial(func, self.to_base(parameters))

    def sample(
        self, parameters: Parametrization, size: int, rng: np.random.Generator
    ) -> NumericArray:
        """
        Draw ``size`` delays.

        Raises
        ------
        MissingCapabilityError
            If the family has no sampler.
        """
        if self._sampler is None:
            raise MissingCapabilityError(f"Family '{self._name}' provides no sampler.")
        return self._sampler(self.to_base(parameters), size, rng)

    def distribution(
        self, parametrization_name: str | None = None, **parameters_values: Any
    ) -> DelayDistribution:
        """
        Create a delay distribution with the given parameters.

        Examples
        --------
        >>> gamma = ParametricFamilyRegister.get("gamma")  # doctest: +SKIP
        >>> gamma(shape=2.0, rate=0.5).cdf(1.0)  # doctest: +SKIP
        """
        parameters = self.parametrize(parametrization_name, **parameters_values)
        return DelayDistribution(self._name, parameters)

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """Class decorator registering a parametrization of this family."""
        from primarycensored.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name)

    __call__ = distribution
