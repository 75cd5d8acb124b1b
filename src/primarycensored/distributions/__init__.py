"""
Distributions subpackage

Numerical engine for primary event censored distributions:

- distribution descriptors and their evaluation (:mod:`.computation`);
- adaptive quadrature over the primary window (:mod:`.integration`);
- closed-form solution register (:mod:`.registry`);
- name resolution and dispatch (:mod:`.strategies`);
- input checks (:mod:`.validation`);
- truncation at ``D`` (:mod:`.truncation`);
- characteristic conversions (:mod:`.fitters`);
- samplers (:mod:`.sampling`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .computation import (
    AnalyticalComputation,
    FittedComputationMethod,
    NumericalComputation,
    PrimaryCensored,
    SolutionKey,
    evaluate_cdf,
)
from .fitters import fit_cdf_to_pdf, fit_cdf_to_pmf, fit_cdf_to_ppf, fit_pdf_to_cdf
from .registry import (
    AnalyticalSolutionRegister,
    analytical_solution_register,
    reset_analytical_solution_register,
)
from .sampling import InverseTransformSampler, PrimaryCensoredSampler
from .strategies import (
    DefaultDispatchStrategy,
    DelaySpec,
    DispatchStrategy,
    PrimarySpec,
    resolve_delay,
    resolve_primary,
)
from .truncation import TruncatedCdf

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "NumericalComputation",
    "PrimaryCensored",
    "SolutionKey",
    "FittedComputationMethod",
    "evaluate_cdf",
    # fitters
    "fit_cdf_to_pdf",
    "fit_cdf_to_pmf",
    "fit_cdf_to_ppf",
    "fit_pdf_to_cdf",
    # registry
    "AnalyticalSolutionRegister",
    "analytical_solution_register",
    "reset_analytical_solution_register",
    # sampling
    "InverseTransformSampler",
    "PrimaryCensoredSampler",
    # strategies
    "DispatchStrategy",
    "DefaultDispatchStrategy",
    "DelaySpec",
    "PrimarySpec",
    "resolve_delay",
    "resolve_primary",
    # truncation
    "TruncatedCdf",
]
