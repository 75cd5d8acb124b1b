from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf
from typing import Any

import numpy as np
import pytest

from primarycensored.config import DEFAULT_OPTIONS, NumericalOptions
from primarycensored.distributions.computation import FittedComputationMethod
from primarycensored.distributions.fitters import (
    fit_cdf_to_pdf,
    fit_cdf_to_pmf,
    fit_cdf_to_ppf,
    fit_pdf_to_cdf,
)
from primarycensored.errors import ArgumentValidationError, BracketingError
from primarycensored.types import CharacteristicName
from tests.unit.distributions.test_basic import exponential_cdf, uniform_density


class TestFittedMethods:
    def test_fitters_build_plain_instances(self) -> None:
        methods = [
            fit_cdf_to_pdf(exponential_cdf),
            fit_cdf_to_ppf(exponential_cdf),
            fit_pdf_to_cdf(lambda x: uniform_density(x, 1.0), 0.0, 1.0),
            fit_cdf_to_pmf(exponential_cdf, 1.0),
        ]

        for method in methods:
            assert type(method) is FittedComputationMethod
            assert not hasattr(method, "__orig_class__")


class TestFitCdfToPdf:
    def test_exponential_density(self) -> None:
        pdf = fit_cdf_to_pdf(exponential_cdf)
        x = np.array([0.5, 1.0, 3.0])

        assert pdf.target == CharacteristicName.PDF
        np.testing.assert_allclose(pdf(x), np.exp(-x), rtol=1e-6)

    def test_forward_difference_at_lower_bound(self) -> None:
        pdf = fit_cdf_to_pdf(exponential_cdf)
        assert float(pdf(np.array([0.0]))[0]) == pytest.approx(1.0, rel=1e-3)

    def test_backward_difference_at_upper_bound(self) -> None:
        def truncated(q: Any) -> Any:
            return np.minimum(exponential_cdf(q) / exponential_cdf(np.array(2.0)), 1.0)

        pdf = fit_cdf_to_pdf(truncated, upper=2.0)
        expected = np.exp(-2.0) / (1.0 - np.exp(-2.0))
        assert float(pdf(np.array([2.0 - 1e-6]))[0]) == pytest.approx(expected, rel=1e-3)

    def test_outside_support_and_nan(self) -> None:
        pdf = fit_cdf_to_pdf(exponential_cdf, upper=5.0)
        values = pdf(np.array([-1.0, 5.0, 7.0, np.nan]))

        assert values[:3].tolist() == [0.0, 0.0, 0.0]
        assert np.isnan(values[3])

    def test_single_batched_cdf_call(self) -> None:
        calls: list[int] = []

        def counting(q: Any) -> Any:
            calls.append(np.asarray(q).size)
            return exponential_cdf(q)

        fit_cdf_to_pdf(counting)(np.linspace(0.1, 5.0, 7))
        assert calls == [14]


class TestFitCdfToPpf:
    def test_inverts_exponential(self) -> None:
        ppf = fit_cdf_to_ppf(exponential_cdf)
        p = np.array([0.1, 0.5, 0.99])

        assert ppf.target == CharacteristicName.PPF
        np.testing.assert_allclose(ppf(p), -np.log1p(-p), atol=1e-8)

    def test_endpoints(self) -> None:
        ppf = fit_cdf_to_ppf(exponential_cdf, 0.0, 4.0)
        values = ppf(np.array([0.0, 1.0, np.nan]))

        assert values[0] == 0.0
        assert values[1] == 4.0
        assert np.isnan(values[2])

    def test_unbounded_upper_quantile_is_inf(self) -> None:
        ppf = fit_cdf_to_ppf(exponential_cdf)
        assert ppf(np.array([1.0]))[0] == inf

    def test_invalid_probability(self) -> None:
        ppf = fit_cdf_to_ppf(exponential_cdf)
        with pytest.raises(ArgumentValidationError, match=r"\[0, 1\]"):
            ppf(np.array([0.5, 1.5]))

    def test_bracketing_failure(self) -> None:
        def never_reaches(q: Any) -> Any:
            return 0.5 * exponential_cdf(q)

        ppf = fit_cdf_to_ppf(never_reaches, options=NumericalOptions(max_expand=5))
        with pytest.raises(BracketingError, match="Could not bracket"):
            ppf(np.array([0.9]))


class TestFitPdfToCdf:
    def test_uniform(self) -> None:
        cdf = fit_pdf_to_cdf(lambda x: uniform_density(x, 2.0), 0.0, 2.0, DEFAULT_OPTIONS)
        values = cdf(np.array([-1.0, 0.5, 1.0, 2.0, 3.0, np.nan]))

        assert cdf.target == CharacteristicName.CDF
        np.testing.assert_allclose(values[:5], [0.0, 0.25, 0.5, 1.0, 1.0], atol=1e-10)
        assert np.isnan(values[5])


class TestFitCdfToPmf:
    def test_interval_masses(self) -> None:
        pmf = fit_cdf_to_pmf(exponential_cdf, 1.0)
        x = np.array([0.0, 1.0, 2.0])

        assert pmf.target == CharacteristicName.PMF
        np.testing.assert_allclose(pmf(x), np.exp(-x) - np.exp(-(x + 1.0)), rtol=1e-12)

    def test_exceeding_bound(self) -> None:
        pmf = fit_cdf_to_pmf(exponential_cdf, 1.0, upper=3.0)

        assert pmf(np.array([2.0]))[0] > 0
        with pytest.raises(ArgumentValidationError, match="must not exceed D=3.0"):
            pmf(np.array([2.5]))
