from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import numpy as np
import pytest

from primarycensored.config import DEFAULT_OPTIONS, CensoringWindow, NumericalOptions
from primarycensored.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
    NumericalComputation,
    SolutionKey,
    evaluate_cdf,
)
from primarycensored.distributions.strategies import (
    DefaultDispatchStrategy,
    resolve_delay,
    resolve_primary,
)
from primarycensored.types import CharacteristicName, NumericArray


def exponential_cdf(q: NumericArray, rate: float = 1.0, **_: Any) -> NumericArray:
    q = np.asarray(q, dtype=float)
    return np.where(q <= 0, 0.0, -np.expm1(-rate * np.maximum(q, 0.0)))


def uniform_density(x: NumericArray, pwindow: float, **_: Any) -> NumericArray:
    x = np.asarray(x, dtype=float)
    return np.where((x >= 0) & (x <= pwindow), 1.0 / pwindow, 0.0)


def exponential_uniform_reference(q: float, w: float) -> float:
    """Censored CDF of a unit-rate exponential delay under a uniform primary."""
    if q <= 0:
        return 0.0
    if q < w:
        return (q - (1.0 - np.exp(-q))) / w
    return 1.0 - np.exp(-q) * np.expm1(w) / w


class DistributionTestBase:
    """Builders shared by the distribution engine tests."""

    def make_numerical(self, options: NumericalOptions = DEFAULT_OPTIONS) -> NumericalComputation:
        return NumericalComputation(
            delay_cdf=exponential_cdf, primary_pdf=uniform_density, options=options
        )

    def make_descriptor(
        self,
        delay: Any = "gamma",
        window: CensoringWindow | None = None,
        primary: Any = None,
        primary_args: dict[str, float] | None = None,
        options: NumericalOptions = DEFAULT_OPTIONS,
        **delay_params: Any,
    ) -> AnalyticalComputation | NumericalComputation:
        params = delay_params or {"shape": 1.77, "rate": 0.44}
        return DefaultDispatchStrategy(options).build(
            resolve_delay(delay, delay_params=params),
            resolve_primary(primary, primary_args=primary_args),
            window or CensoringWindow(),
        )


class TestEvaluateCdf(DistributionTestBase):
    def test_non_finite_points(self) -> None:
        q = np.array([np.nan, np.inf, -np.inf, 2.0])
        values = evaluate_cdf(self.make_numerical(), q, 1.0)

        assert np.isnan(values[0])
        assert values[1] == 1.0
        assert values[2] == 0.0
        assert 0.0 < values[3] < 1.0

    def test_only_non_finite_points(self) -> None:
        values = evaluate_cdf(self.make_numerical(), np.array([np.inf, -np.inf]), 1.0)
        assert values.tolist() == [1.0, 0.0]

    def test_zero_window_is_delay_cdf(self) -> None:
        q = np.array([0.5, 1.0, 3.0])
        descriptor = self.make_descriptor()

        np.testing.assert_allclose(evaluate_cdf(descriptor, q, 0.0), descriptor.delay_cdf(q))

    def test_preserves_shape(self) -> None:
        q = np.array([[0.5, 1.0], [2.0, 4.0]])
        values = evaluate_cdf(self.make_numerical(), q, 1.0)

        assert values.shape == (2, 2)

    def test_numerical_matches_reference(self) -> None:
        q = np.array([0.25, 0.5, 1.0, 3.0])
        values = evaluate_cdf(self.make_numerical(), q, 1.0)
        expected = [exponential_uniform_reference(float(qi), 1.0) for qi in q]

        np.testing.assert_allclose(values, expected, atol=1e-9)

    def test_analytical_descriptor_is_used(self) -> None:
        descriptor = self.make_descriptor("exponential", rate=1.0)

        assert isinstance(descriptor, AnalyticalComputation)
        assert descriptor.kind == SolutionKey("exponential", "uniform")
        values = evaluate_cdf(descriptor, np.array([0.5, 3.0]), 1.0)
        expected = [exponential_uniform_reference(0.5, 1.0), exponential_uniform_reference(3, 1)]
        np.testing.assert_allclose(values, expected, atol=1e-12)

    def test_unknown_descriptor(self) -> None:
        with pytest.raises(TypeError, match="Unknown distribution descriptor"):
            evaluate_cdf(object(), np.array([1.0]), 1.0)  # type: ignore[arg-type]


class TestFittedComputationMethod:
    def test_call_forwards_options(self) -> None:
        method = FittedComputationMethod(
            target=CharacteristicName.PDF,
            sources=[CharacteristicName.CDF],
            func=lambda x, **kw: x * kw.get("scale", 1.0),
        )

        assert method(2.0) == 2.0
        assert method(2.0, scale=3.0) == 6.0
        assert method.target == CharacteristicName.PDF
        assert list(method.sources) == [CharacteristicName.CDF]
