"""
Delay distributions with concrete parameter values.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from primarycensored.families.registry import ParametricFamilyRegister
from primarycensored.types import CharacteristicName

if TYPE_CHECKING:
    from primarycensored.families.parametric_family import ParametricFamily
    from primarycensored.families.parametrizations import Parametrization
    from primarycensored.types import NumericArray


@dataclass(frozen=True, slots=True)
class DelayDistribution:
    """
    A delay family bound to validated base parameters.

    Parameters
    ----------
    family_name : str
        Name of the registered family.
    parameters : Parametrization
        Base parameters of the distribution.
    """

    family_name: str
    parameters: Parametrization

    @property
    def family(self) -> ParametricFamily:
        """The registered family of this distribution."""
        return ParametricFamilyRegister.get(self.family_name)

    def cdf(self, q: NumericArray | float) -> NumericArray:
        """Delay CDF at ``q``."""
        fn = self.family.characteristic(CharacteristicName.CDF, self.parameters)
        return fn(np.asarray(q, dtype=float))

    def pdf(self, x: NumericArray | float) -> NumericArray:
        """Delay density at ``x``."""
        fn = self.family.characteristic(CharacteristicName.PDF, self.parameters)
        return fn(np.asarray(x, dtype=float))

    def sample(
        self, n: int, random_state: np.random.Generator | int | None = None
    ) -> NumericArray:
        """Draw ``n`` delays."""
        rng = np.random.default_rng(random_state)
        return self.family.sample(self.parameters, n, rng)
