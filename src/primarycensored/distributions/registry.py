"""
Analytical Solution Registry
============================

Singleton register of closed-form censored CDFs keyed by the
``(delay, primary)`` name pair.

- No auto-configuration in the constructor.
- :func:`analytical_solution_register` is wrapped in ``@lru_cache``; it builds
  the singleton and seeds it from every registered primary distribution's
  solutions for every registered delay family.

Notes
-----
- Looking up a pair without a closed form is a normal outcome: ``get``
  returns ``None`` and callers fall back to numerical integration.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache
from typing import TYPE_CHECKING, ClassVar

from primarycensored.distributions.computation import SolutionKey
from primarycensored.families.configuration import configure_families_register
from primarycensored.families.registry import (
    ParametricFamilyRegister,
    PrimaryDistributionRegister,
)

if TYPE_CHECKING:
    from primarycensored.families.primary import AnalyticalSolution


class AnalyticalSolutionRegister:
    """
    Singleton holding the closed-form censored CDFs.

    Notes
    -----
    Use :func:`analytical_solution_register` to obtain the configured
    instance.
    """

    _instance: ClassVar[AnalyticalSolutionRegister | None] = None
    _solutions: dict[SolutionKey, AnalyticalSolution]

    def __new__(cls) -> AnalyticalSolutionRegister:
        if cls._instance is None:
            self = super().__new__(cls)
            self._solutions = {}
            cls._instance = self
        return cls._instance

    def register(self, delay: str, primary: str, solution: AnalyticalSolution) -> None:
        """
        Register a closed form for the ``(delay, primary)`` pair.

        Raises
        ------
        ValueError
            If the pair already has a solution.
        """
        key = SolutionKey(str(delay), str(primary))
        if key in self._solutions:
            raise ValueError(f"Analytical solution for {key} already found in register")
        self._solutions[key] = solution

    def get(self, delay: str, primary: str) -> AnalyticalSolution | None:
        """Closed form for the pair, or ``None`` if there is none."""
        return self._solutions.get(SolutionKey(str(delay), str(primary)))

    def __contains__(self, key: object) -> bool:
        return key in self._solutions

    def keys(self) -> list[SolutionKey]:
        """All registered name pairs."""
        return sorted(self._solutions)

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None


@lru_cache(maxsize=1)
def analytical_solution_register() -> AnalyticalSolutionRegister:
    """
    Return the configured analytical solution register.

    The built-in families are configured first; then each registered
    primary distribution contributes its closed forms for the delay
    families that are registered.
    """
    configure_families_register()
    reg = AnalyticalSolutionRegister()
    for primary in PrimaryDistributionRegister.all():
        for delay_name, solution in primary.analytical_solutions.items():
            if ParametricFamilyRegister.contains(delay_name):
                reg.register(delay_name, primary.name, solution)
    return reg


def reset_analytical_solution_register() -> None:
    """Clear the cached register (used by tests)."""
    analytical_solution_register.cache_clear()
    AnalyticalSolutionRegister._reset()


__all__ = [
    "AnalyticalSolutionRegister",
    "analytical_solution_register",
    "reset_analytical_solution_register",
]
