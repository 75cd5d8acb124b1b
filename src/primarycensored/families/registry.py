"""
Global registers for delay families and primary event distributions.

Both registers are singletons so that families configured once at import
of :mod:`primarycensored.families.configuration` are visible everywhere.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from primarycensored.errors import ArgumentValidationError

if TYPE_CHECKING:
    from typing import ClassVar

    from primarycensored.families.parametric_family import ParametricFamily
    from primarycensored.families.primary import PrimaryDistribution


class ParametricFamilyRegister:
    """
    Singleton register of delay families, keyed by name.
    """

    _instance: ClassVar[ParametricFamilyRegister | None] = None
    _registered_families: dict[str, ParametricFamily]

    def __new__(cls) -> ParametricFamilyRegister:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered_families = {}
        return cls._instance

    @classmethod
    def get(cls, name: str) -> ParametricFamily:
        """
        Retrieve a family by name.

        Raises
        ------
        ArgumentValidationError
            If no family with the given name exists.
        """
        self = cls()
        if name not in self._registered_families:
            known = ", ".join(sorted(self._registered_families))
            raise ArgumentValidationError(
                f"No delay family '{name}' found in register (known: {known})"
            )
        return self._registered_families[name]

    @classmethod
    def contains(cls, name: str) -> bool:
        """Whether a family called ``name`` is registered."""
        return name in cls()._registered_families

    @classmethod
    def names(cls) -> list[str]:
        """Names of all registered families."""
        return sorted(cls()._registered_families)

    @classmethod
    def register(cls, family: ParametricFamily) -> None:
        """
        Register a family.

        Raises
        ------
        ValueError
            If a family with the same name is already registered.
        """
        self = cls()
        if family.name in self._registered_families:
            raise ValueError(f"Family {family.name} already found in register")
        self._registered_families[family.name] = family

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None


class PrimaryDistributionRegister:
    """
    Singleton register of primary event distributions, keyed by name.
    """

    _instance: ClassVar[PrimaryDistributionRegister | None] = None
    _registered: dict[str, PrimaryDistribution]

    def __new__(cls) -> PrimaryDistributionRegister:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered = {}
        return cls._instance

    @classmethod
    def get(cls, name: str) -> PrimaryDistribution:
        """
        Retrieve a primary distribution by name.

        Raises
        ------
        ArgumentValidationError
            If nothing is registered under ``name``.
        """
        self = cls()
        if name not in self._registered:
            known = ", ".join(sorted(self._registered))
            raise ArgumentValidationError(
                f"No primary distribution '{name}' found in register (known: {known})"
            )
        return self._registered[name]

    @classmethod
    def contains(cls, name: str) -> bool:
        """Whether a primary distribution called ``name`` is registered."""
        return name in cls()._registered

    @classmethod
    def all(cls) -> list[PrimaryDistribution]:
        """All registered primary distributions, ordered by name."""
        registered = cls()._registered
        return [registered[name] for name in sorted(registered)]

    @classmethod
    def register(cls, primary: PrimaryDistribution) -> None:
        """
        Register a primary distribution.

        Raises
        ------
        ValueError
            If the name is already taken.
        """
        self = cls()
        if primary.name in self._registered:
            raise ValueError(f"Primary distribution {primary.name} already found in register")
        self._registered[primary.name] = primary

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None
