"""
Parametrizations of delay distribution families.

A parametrization is a frozen dataclass holding the parameter values of a
delay family together with the constraints they must satisfy. Families may
offer several parametrizations (e.g. gamma by ``shape, scale`` or by
``shape, rate``); each non-base one knows how to convert itself to the base.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from math import isfinite
from typing import TYPE_CHECKING, ParamSpec

from primarycensored.errors import ParametrizationError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from primarycensored.families.parametric_family import ParametricFamily


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values.

    Parameters
    ----------
    description : str
        Human-readable description, reported when the check fails.
    check : Callable[[Any], bool]
        Predicate over the parametrization instance.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Abstract base class for delay parametrizations.

    Attributes set by :func:`parametrization`
    -----------------------------------------
    __family__ : ParametricFamily
        Owning family.
    __param_name__ : str
        Name of the parametrization within the family.
    """

    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[str]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def name(self) -> str:
        """Name of this parametrization."""
        return self.__class__.__param_name__

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Names of the parameters this parametrization accepts."""
        return frozenset(f.name for f in fields(cls))  # type: ignore[arg-type]

    @property
    def parameters(self) -> dict[str, float]:
        """Parameters as a plain dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    def validate(self) -> None:
        """
        Check finiteness and every declared constraint.

        Raises
        ------
        ParametrizationError
            If a value is not finite or a constraint does not hold.
        """
        for key, value in self.parameters.items():
            if not isfinite(value):
                raise ParametrizationError(f"Parameter {key} must be finite, got {value!r}")
        for item in self._constraints:
            if not item.check(self):
                raise ParametrizationError(
                    f'Constraint "{item.description}" does not hold for {self.parameters}'
                )

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Convert to the base parametrization of the family.

        The default returns ``self``; alternative parametrizations override it.
        """
        return self


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def _collect_constraints(cls: type[Parametrization]) -> list[ParametrizationConstraint]:
    collected: list[ParametrizationConstraint] = []
    for attr_name, attr in cls.__dict__.items():
        if isinstance(attr, staticmethod | classmethod):
            if getattr(attr.__func__, "__is_constraint", False):
                raise TypeError(f"@constraint '{attr_name}' must be an instance method")
            continue
        if isfunction(attr) and getattr(attr, "__is_constraint", False):
            desc = getattr(attr, "__constraint_description", attr_name)
            collected.append(ParametrizationConstraint(description=desc, check=attr))
    return collected


def parametrization(
    *,
    family: ParametricFamily,
    name: str,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Register a class as a parametrization of ``family``.

    The class is turned into a frozen slotted dataclass if it is not one
    already, and its ``@constraint`` methods are collected.

    Parameters
    ----------
    family : ParametricFamily
        Family to register with.
    name : str
        Name of the parametrization.
    """

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__family__ = family
        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)

        family.register_parametrization(name, cls)
        return cls

    return decorator


__all__ = [
    "Parametrization",
    "ParametrizationConstraint",
    "constraint",
    "parametrization",
]
