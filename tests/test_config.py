from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import FrozenInstanceError
from math import inf

import pytest

from primarycensored.config import DEFAULT_OPTIONS, CensoringWindow, NumericalOptions
from primarycensored.errors import ArgumentValidationError
from primarycensored.types import Interval1D


class TestCensoringWindow:
    def test_defaults(self) -> None:
        window = CensoringWindow()

        assert (window.pwindow, window.swindow, window.D) == (1.0, 1.0, inf)
        assert not window.is_truncated
        assert window.primary_interval == Interval1D(0.0, 1.0)

    def test_coerces_to_float(self) -> None:
        window = CensoringWindow(pwindow=2, swindow=0, D=10)

        assert isinstance(window.pwindow, float)
        assert isinstance(window.D, float)
        assert window.is_truncated

    def test_zero_window_is_degenerate(self) -> None:
        assert CensoringWindow(pwindow=0.0).primary_interval.is_degenerate

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"pwindow": -1.0}, "pwindow"),
            ({"pwindow": inf}, "pwindow"),
            ({"swindow": -0.5}, "swindow"),
            ({"D": 0.0}, "D must be positive"),
            ({"D": float("nan")}, "D must be positive"),
        ],
    )
    def test_invalid(self, kwargs: dict[str, float], message: str) -> None:
        with pytest.raises(ArgumentValidationError, match=message):
            CensoringWindow(**kwargs)

    def test_frozen(self) -> None:
        with pytest.raises(FrozenInstanceError):
            CensoringWindow().pwindow = 2.0  # type: ignore[misc]


class TestNumericalOptions:
    def test_defaults(self) -> None:
        assert DEFAULT_OPTIONS.use_analytical
        assert DEFAULT_OPTIONS.epsabs == 1e-10
        assert DEFAULT_OPTIONS.limit == 200
        assert not DEFAULT_OPTIONS.check_primary_normalization

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"epsabs": 0.0}, "epsabs must be positive"),
            ({"fd_step": -1e-4}, "fd_step must be positive"),
            ({"limit": 0}, "limit must be a positive integer"),
            ({"max_rejection_rounds": 2.5}, "max_rejection_rounds"),
            ({"expand_factor": 1.0}, "expand_factor must be greater than 1"),
        ],
    )
    def test_invalid(self, kwargs: dict[str, float], message: str) -> None:
        with pytest.raises(ArgumentValidationError, match=message):
            NumericalOptions(**kwargs)  # type: ignore[arg-type]


class TestInterval1D:
    def test_contains(self) -> None:
        interval = Interval1D(0.0, 2.0)

        assert 1.0 in interval
        assert 3.0 not in interval
        assert interval.contains(2.0)
        assert interval.contains([-1.0, 0.5]).tolist() == [False, True]  # type: ignore[arg-type]
        assert interval.width == 2.0

    def test_empty(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            Interval1D(1.0, 0.0)
