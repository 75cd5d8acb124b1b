from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import numpy as np

from primarycensored.families import ParametricFamily, Parametrization, constraint
from primarycensored.types import CharacteristicName


class TestBaseFamily:
    def make_default_family(
        self,
        distr_characteristics: dict[CharacteristicName, Any] | None = None,
        with_sampler: bool = True,
    ) -> ParametricFamily:
        if distr_characteristics is None:
            distr_characteristics = {
                CharacteristicName.PDF: lambda p, x: np.full_like(x, p.value),
                CharacteristicName.CDF: lambda p, x: np.clip(x * p.value, 0.0, 1.0),
            }

        def sampler(p: Any, size: int, rng: np.random.Generator) -> Any:
            return rng.random(size) / p.value

        fam = ParametricFamily(
            name="Default",
            distr_parametrizations=["base", "alt"],
            distr_characteristics=distr_characteristics,
            sampler=sampler if with_sampler else None,
        )

        @fam.parametrization(name="base")
        class Base(Parametrization):
            value: float

            @constraint(description="value > 0")
            def check_value_positive(self) -> bool:
                return self.value > 0

        @fam.parametrization(name="alt")
        class Alt(Parametrization):
            inverse: float

            @constraint(description="inverse > 0")
            def check_inverse_positive(self) -> bool:
                return self.inverse > 0

            def transform_to_base_parametrization(self) -> Parametrization:
                return Base(value=1.0 / self.inverse)  # type: ignore[call-arg]

        return fam
