"""
Common utilities for delay family tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from collections.abc import Callable
from typing import Any

import numpy as np
from scipy import integrate

from primarycensored.families.parametric_family import ParametricFamily
from primarycensored.families.parametrizations import Parametrization
from primarycensored.types import CharacteristicName


class BaseDistributionTest:
    """Base class for all delay families' tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Helper method to assert arrays are almost equal."""
        if precision is None:
            precision = BaseDistributionTest.CALCULATION_PRECISION

        np.testing.assert_array_almost_equal(actual, expected, decimal=int(-math.log10(precision)))

    def assert_partial_expectation_matches_quadrature(
        self,
        family: ParametricFamily,
        parameters: Parametrization,
        reference_pdf: Callable[[float], float],
        points: list[float],
    ) -> None:
        """Compare the closed-form partial expectation with ``∫_0^x t f(t) dt``."""
        partial_expectation = family.characteristic(
            CharacteristicName.PARTIAL_EXPECTATION, parameters
        )
        actual = partial_expectation(np.asarray(points))
        expected = np.array(
            [
                integrate.quad(lambda t: t * reference_pdf(t), 0.0, x, limit=200)[0]
                for x in points
            ]
        )
        self.assert_arrays_almost_equal(actual, expected, precision=1e-8)
