# xenratio - Exceptions
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

"""Exception hierarchy for xenratio."""

from __future__ import annotations
from typing import Optional


# Parse failures that have an obvious fix
PARSE_HINTS = {
    'Parameters must be integer': "Write the decimal as a fraction, e.g. '3/2' instead of '1.5/1'.",
    'Double sign': "Only the leading '-' is allowed, e.g. '-1.5'.",
    'Bad exponent': "Exponents are integers, e.g. '37e-2'.",
    'Invalid repeating decimal': "Quote the repeating digits at the end, e.g. \"0.1'6'\".",
}


class XenRatioError(Exception):
    """Base class for all xenratio exceptions."""
    pass


class ParseError(XenRatioError, ValueError):
    """Raised when a string cannot be parsed as a rational number."""

    def __init__(self, message: str, text: Optional[str] = None):
        suggestion = PARSE_HINTS.get(message)
        full_message = message
        if text is not None:
            full_message += f": {text!r}"
        if suggestion:
            full_message += f"\n  Suggestion: {suggestion}"
        super().__init__(full_message)
        self.text = text
        self.suggestion = suggestion


class FractionOverflowError(XenRatioError, OverflowError):
    """Raised when a numerator or denominator exceeds the safe integer ceiling."""

    def __init__(self, message: str, component: Optional[str] = None):
        super().__init__(message)
        self.component = component


class DivisionByZero(XenRatioError, ZeroDivisionError):
    """Raised on division by a zero rational number."""
    pass


class DomainError(XenRatioError, ValueError):
    """Raised for NaN, unrepresentable Infinity or an input outside an operation's domain."""
    pass


class OutOfPrimes(XenRatioError):
    """Raised when factorization needs more primes than the prime table holds."""

    def __init__(self, message: str = 'Out of primes', limit: Optional[int] = None):
        if limit is not None:
            message += f" (table ends at {limit})"
        super().__init__(message)
        self.limit = limit


class FactorizationError(XenRatioError):
    """Raised when a factorization search stops at a composite cofactor."""

    def __init__(self, value: int, limit: Optional[int] = None):
        message = f"Unable to split composite {value}"
        if limit is not None:
            message += f" within search limit {limit}"
        super().__init__(message)
        self.value = value
        self.limit = limit
