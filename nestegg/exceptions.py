"""
Custom exceptions for NestEgg.

Purpose
-------
Provides a unified exception hierarchy for consistent error handling
across all NestEgg modules. All exceptions inherit from NestEggError,
enabling catch-all handling when needed.

Exception Hierarchy
-------------------
NestEggError (base)
├── ConfigurationError - Invalid configuration or parameters
│   └── InvalidConfigurationError - Out-of-domain engine parameter
├── ValidationError - Input snapshot validation failures
│   └── TimeIndexError - Month/date errors
└── SerializationError - Malformed or incompatible plan files

Unreachable targets are NOT errors: they are returned as
``MonthsEstimate.never()`` and callers branch on them.

Usage
-----
>>> from nestegg.exceptions import InvalidConfigurationError
>>>
>>> raise InvalidConfigurationError("cash_ratio must be in (0, 1), got 1.2")
>>>
>>> # Catch all NestEgg exceptions
>>> try:
...     cfg = MortgageConfig(cash_ratio=0.0, ...)
... except NestEggError as e:
...     print(f"NestEgg error: {e}")
"""


class NestEggError(Exception):
    """
    Base exception for all NestEgg errors.

    Examples
    --------
    >>> try:
    ...     result = evaluate(financials, cfg)
    ... except NestEggError as e:
    ...     logger.error(f"Evaluation failed: {e}")
    """
    pass


class ConfigurationError(NestEggError):
    """
    Invalid configuration or parameters.

    Raised when a plan or settings object cannot be turned into a usable
    engine configuration (missing sections, incompatible combinations).
    """
    pass


class InvalidConfigurationError(ConfigurationError, ValueError):
    """
    Out-of-domain parameter passed to the engine.

    Raised before any computation when, for example:
    - cash_ratio or dti_limit is outside (0, 1)
    - an annual rate is negative
    - loan_years is not a positive integer

    The engine never coerces such values into range.

    Examples
    --------
    >>> raise InvalidConfigurationError(
    ...     "cash_ratio must be in (0, 1), got 0.0. "
    ...     "A zero cash ratio makes the cash ceiling undefined."
    ... )
    """
    pass


class ValidationError(NestEggError, ValueError):
    """
    Input snapshot validation failures.

    Raised when household figures fail basic checks, such as negative
    balances or non-finite amounts.

    Examples
    --------
    >>> raise ValidationError(f"liquid_savings must be non-negative, got {value}")
    """
    pass


class TimeIndexError(ValidationError):
    """
    Month/date errors.

    Raised when a month count or calendar date cannot be interpreted,
    e.g. a negative month offset when projecting a reached date.
    """
    pass


class SerializationError(NestEggError):
    """
    Plan file could not be read or does not match the expected schema.

    Examples
    --------
    >>> raise SerializationError(f"Plan file {path} is missing 'household' section")
    """
    pass
