from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from primarycensored.config import CensoringWindow, NumericalOptions
from primarycensored.distributions.computation import evaluate_cdf
from primarycensored.distributions.truncation import TruncatedCdf
from primarycensored.errors import TruncationError
from tests.unit.distributions.test_basic import DistributionTestBase


class TestTruncatedCdf(DistributionTestBase):
    def test_untruncated_is_raw(self) -> None:
        window = CensoringWindow(pwindow=1.0)
        descriptor = self.make_descriptor(window=window)
        cdf = TruncatedCdf(descriptor, window)
        q = np.array([0.5, 2.0, 10.0])

        assert cdf.normalizer == 1.0
        np.testing.assert_array_equal(cdf(q), evaluate_cdf(descriptor, q, 1.0))

    def test_normalised_below_bound(self) -> None:
        window = CensoringWindow(pwindow=1.0, D=8.0)
        descriptor = self.make_descriptor(window=window)
        cdf = TruncatedCdf(descriptor, window)
        q = np.array([1.0, 3.0, 7.5])

        expected = evaluate_cdf(descriptor, q, 1.0) / evaluate_cdf(descriptor, np.array([8.0]), 1.0)
        np.testing.assert_allclose(cdf(q), expected, rtol=1e-14)

    def test_exactly_one_at_and_above_bound(self) -> None:
        window = CensoringWindow(pwindow=1.0, D=8.0)
        cdf = TruncatedCdf(self.make_descriptor(window=window), window)
        values = cdf(np.array([8.0, 9.0, np.inf]))

        assert values.tolist() == [1.0, 1.0, 1.0]

    def test_nan_and_negative(self) -> None:
        window = CensoringWindow(pwindow=1.0, D=8.0)
        cdf = TruncatedCdf(self.make_descriptor(window=window), window)
        values = cdf(np.array([np.nan, -1.0, -np.inf]))

        assert np.isnan(values[0])
        assert values[1] == 0.0
        assert values[2] == 0.0

    def test_normaliser_is_cached(self) -> None:
        window = CensoringWindow(pwindow=1.0, D=8.0)
        cdf = TruncatedCdf(self.make_descriptor(window=window), window)

        first = cdf.normalizer
        assert cdf._normalizer == first
        assert cdf.normalizer == first

    def test_independent_of_batch(self) -> None:
        window = CensoringWindow(pwindow=1.0, D=10.0)
        options = NumericalOptions(use_analytical=False)
        descriptor = self.make_descriptor(window=window, options=options)
        q = np.array([0.5, 1.0, 2.5, 4.0, 9.0])

        batched = TruncatedCdf(descriptor, window, options)(q)
        one_by_one = [
            float(TruncatedCdf(descriptor, window, options)(np.array([qi]))[0]) for qi in q
        ]

        np.testing.assert_array_equal(batched, one_by_one)

    def test_zero_normaliser(self) -> None:
        window = CensoringWindow(pwindow=0.0, D=0.001)
        descriptor = self.make_descriptor(window=window, shape=50.0, scale=1.0)
        cdf = TruncatedCdf(descriptor, window)

        with pytest.raises(TruncationError, match="too small"):
            cdf(np.array([0.0005]))
