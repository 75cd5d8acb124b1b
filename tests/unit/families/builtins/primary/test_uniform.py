"""
Tests for the uniform primary event distribution and its closed-form
censored CDF.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import numpy as np
import pytest

from primarycensored.config import CensoringWindow
from primarycensored.distributions.computation import NumericalComputation, evaluate_cdf
from primarycensored.errors import ArgumentValidationError
from primarycensored.families.builtins.primary.uniform import (
    uniform_cdf,
    uniform_censored_cdf,
    uniform_pdf,
    uniform_sample,
)
from primarycensored.families.configuration import configure_families_register
from primarycensored.families.registry import PrimaryDistributionRegister
from primarycensored.types import CharacteristicName, DelayName, PrimaryName
from tests.unit.families.builtins.delay.base import BaseDistributionTest


class TestUniformPrimary(BaseDistributionTest):
    """Uniform density, CDF and sampler."""

    def test_pdf_is_constant_inside_window(self) -> None:
        x = np.array([-0.1, 0.0, 0.5, 2.0, 2.1])
        self.assert_arrays_almost_equal(uniform_pdf(x, 2.0), np.array([0, 0.5, 0.5, 0.5, 0]))

    def test_cdf_is_clipped(self) -> None:
        x = np.array([-1.0, 0.0, 1.0, 2.0, 5.0])
        self.assert_arrays_almost_equal(uniform_cdf(x, 2.0), np.array([0, 0, 0.5, 1, 1]))

    def test_zero_window_is_point_mass(self) -> None:
        x = np.array([-1.0, 0.0, 1.0])
        self.assert_arrays_almost_equal(uniform_pdf(x, 0.0), np.array([0.0, 1.0, 0.0]))
        self.assert_arrays_almost_equal(uniform_cdf(x, 0.0), np.array([0.0, 1.0, 1.0]))

    def test_negative_window_rejected(self) -> None:
        with pytest.raises(ArgumentValidationError, match="pwindow"):
            uniform_pdf(0.5, -1.0)

    def test_sample_stays_in_window(self) -> None:
        draws = uniform_sample(5_000, 3.0, np.random.default_rng(1))
        assert draws.shape == (5_000,)
        assert np.all((draws >= 0.0) & (draws < 3.0))
        assert abs(draws.mean() - 1.5) < 0.05

    def test_registered_with_analytical_solutions(self) -> None:
        configure_families_register()
        primary = PrimaryDistributionRegister.get(PrimaryName.UNIFORM)

        assert primary.required_args == ()
        assert set(primary.analytical_solutions) == {
            DelayName.GAMMA,
            DelayName.LOGNORMAL,
            DelayName.WEIBULL,
            DelayName.EXPONENTIAL,
        }


class TestUniformCensoredCdf(BaseDistributionTest):
    """The closed form agrees with numerical integration."""

    @pytest.mark.parametrize(
        "name, params",
        [
            (DelayName.GAMMA, {"shape": 1.77, "rate": 0.44}),
            (DelayName.LOGNORMAL, {"meanlog": 1.5, "sdlog": 0.5}),
            (DelayName.WEIBULL, {"shape": 1.5, "scale": 3.0}),
            (DelayName.EXPONENTIAL, {"rate": 0.5}),
        ],
    )
    @pytest.mark.parametrize("pwindow", [0.5, 1.0, 3.0])
    def test_matches_numerical_integration(
        self, name: str, params: dict[str, float], pwindow: float
    ) -> None:
        family = configure_families_register().get(name)
        parameters = family.parametrize(**params)
        q = np.array([0.0, 0.2, 0.5, 1.0, 2.0, 4.0, 10.0])

        closed = uniform_censored_cdf(q, pwindow, family, parameters, {})
        numeric = evaluate_cdf(
            NumericalComputation(
                delay_cdf=family.characteristic(CharacteristicName.CDF, parameters),
                primary_pdf=lambda x, w: uniform_pdf(x, w),
            ),
            q,
            pwindow,
        )
        self.assert_arrays_almost_equal(closed, numeric, precision=1e-6)

    def test_exponential_reference_values(self) -> None:
        family = configure_families_register().get(DelayName.EXPONENTIAL)
        parameters = family.parametrize(rate=1.0)
        w = 2.0

        inside = uniform_censored_cdf(np.array([1.0]), w, family, parameters, {})
        beyond = uniform_censored_cdf(np.array([5.0]), w, family, parameters, {})

        self.assert_arrays_almost_equal(inside, np.array([(1.0 - (1.0 - np.exp(-1.0))) / w]))
        self.assert_arrays_almost_equal(beyond, np.array([1.0 - np.exp(-5.0) * np.expm1(w) / w]))

    def test_zero_at_and_below_origin(self) -> None:
        family = configure_families_register().get(DelayName.GAMMA)
        parameters = family.parametrize(shape=2.0, scale=1.0)
        values = uniform_censored_cdf(np.array([-3.0, 0.0]), 1.0, family, parameters, {})

        assert np.all(values == 0.0)
