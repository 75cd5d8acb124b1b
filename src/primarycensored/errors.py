"""
Exception Hierarchy
===================

Argument errors derive from :class:`ValueError` and numerical failures from
:class:`RuntimeError`, so callers may catch either the built-in or the
package-specific type. Asking a distribution for an operation it does not
provide raises :class:`MissingCapabilityError`, a :class:`NotImplementedError`.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class PrimaryCensoredError(Exception):
    """Base class for all errors raised by primarycensored."""


class ArgumentValidationError(PrimaryCensoredError, ValueError):
    """Raised when an argument is invalid before any computation starts."""


class MissingArgumentError(ArgumentValidationError):
    """Raised when a distribution is missing a required auxiliary argument."""


class DistributionValidationError(ArgumentValidationError):
    """Raised when a user-supplied CDF or density fails its sanity checks."""


class ParametrizationError(ArgumentValidationError):
    """Raised when delay parameters match no parametrization or break a constraint."""


class MissingCapabilityError(PrimaryCensoredError, NotImplementedError):
    """Raised when a distribution lacks the sampler or closed-form CDF requested."""


class NumericalError(PrimaryCensoredError, RuntimeError):
    """Raised when a numerical procedure fails."""


class IntegrationError(NumericalError):
    """Raised when adaptive quadrature does not converge."""


class BracketingError(NumericalError):
    """Raised when a root cannot be bracketed or located during CDF inversion."""


class TruncationError(NumericalError):
    """Raised when the truncation normaliser is (numerically) zero."""


class SamplingError(NumericalError):
    """Raised when rejection sampling cannot produce the requested draws."""


__all__ = [
    "PrimaryCensoredError",
    "ArgumentValidationError",
    "MissingArgumentError",
    "DistributionValidationError",
    "ParametrizationError",
    "MissingCapabilityError",
    "NumericalError",
    "IntegrationError",
    "BracketingError",
    "TruncationError",
    "SamplingError",
]
