"""
Tests for the Lognormal delay family.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import numpy as np
import pytest
from scipy.stats import lognorm

from primarycensored.errors import ParametrizationError
from primarycensored.families.configuration import configure_families_register
from primarycensored.families.parametric_family import ParametricFamily
from primarycensored.types import DelayName
from tests.unit.families.builtins.delay.base import BaseDistributionTest


class TestLognormalFamily(BaseDistributionTest):
    """Test suite for the Lognormal delay family."""

    @pytest.fixture
    def family(self) -> ParametricFamily:
        return configure_families_register().get(DelayName.LOGNORMAL)

    def test_family_properties(self, family: ParametricFamily) -> None:
        assert family.name == DelayName.LOGNORMAL
        assert family.parametrization_names == ["log_scale"]

    def test_sdlog_must_be_positive(self, family: ParametricFamily) -> None:
        with pytest.raises(ParametrizationError, match="sdlog > 0"):
            family.parametrize(meanlog=0.0, sdlog=0.0)

    def test_negative_meanlog_is_allowed(self, family: ParametricFamily) -> None:
        params = family.parametrize(meanlog=-1.0, sdlog=0.5)
        assert params.parameters == {"meanlog": -1.0, "sdlog": 0.5}

    def test_cdf_and_pdf_match_scipy(self, family: ParametricFamily) -> None:
        dist = family(meanlog=1.5, sdlog=0.5)
        x = np.array([-1.0, 0.0, 0.5, 2.0, 4.5, 20.0])
        reference = lognorm(s=0.5, scale=np.exp(1.5))

        self.assert_arrays_almost_equal(dist.cdf(x), reference.cdf(x))
        self.assert_arrays_almost_equal(dist.pdf(x), reference.pdf(x))

    def test_partial_expectation(self, family: ParametricFamily) -> None:
        params = family.parametrize(meanlog=0.0, sdlog=1.0)
        reference = lognorm(s=1.0, scale=1.0)
        self.assert_partial_expectation_matches_quadrature(
            family, params, lambda t: float(reference.pdf(t)), [0.1, 0.5, 1.0, 5.0]
        )

    def test_sampling(self, family: ParametricFamily) -> None:
        dist = family(meanlog=0.0, sdlog=0.5)
        samples = dist.sample(20_000, random_state=3)

        assert samples.shape == (20_000,)
        assert abs(np.median(samples) - 1.0) < 0.05
