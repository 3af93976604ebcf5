# xenratio
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

"""
xenratio - Exact ratios and prime exponent vectors for tuning theory.

This package models musical intervals as exact rational numbers and as
vectors of prime exponents (monzos). Rational numbers never silently lose
precision: every component stays below the safe integer ceiling 2**53 - 1
or an error is raised.

Example:
    >>> import xenratio as xr
    >>> fifth = xr.Rational('3/2')
    >>> fifth * fifth
    Rational(9, 4)
    >>> (fifth * fifth).geo_mod(2)
    Rational(9, 8)
    >>> xr.to_monzo(fifth)
    [-1, 1]
    >>> xr.prime_limit('81/80')
    5

Key Features:
    - Overflow-safe exact arithmetic with pre-reduction
    - Geometric modulo, greatest common radical and rational logarithms
    - Continued fractions and repeating decimal strings
    - Monzo conversion with truncation residuals
    - Factorization of arbitrarily large integers
"""

import logging

__version__ = "0.1.0"

# Rational numbers
from .rational import (
    MAX_SAFE_INTEGER,
    Rational,
    RationalEncoder,
    RationalValue,
    gcd,
    lcm,
    mmod,
    modc,
)

# Prime tables and factorization
from .primes import (
    PRIMES,
    LOG_PRIMES,
    SEVEN_SMOOTH_TABLE,
    strip_seven_smooth,
    is_prime,
    nth_prime,
    prime_range,
    factorize_integer,
    prime_factorize,
)

# Monzos
from .monzo import (
    Monzo,
    MonzoResidual,
    monzos_equal,
    add_monzos,
    sub_monzos,
    scale_monzo,
    to_monzo,
    to_monzo_and_residual,
    integer_to_monzo_and_residual,
    monzo_to_ratio,
    monzo_to_fraction,
    monzo_to_integer,
    prime_limit,
    resolve_monzo,
)

# Cents
from .conversion import value_to_cents, cents_to_value

# Configuration
from .config import Config, DEFAULT_CONFIG

# Exceptions
from .exceptions import (
    XenRatioError,
    ParseError,
    FractionOverflowError,
    DivisionByZero,
    DomainError,
    OutOfPrimes,
    FactorizationError,
)

# Silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Rational numbers
    "MAX_SAFE_INTEGER",
    "Rational",
    "RationalEncoder",
    "RationalValue",
    "gcd",
    "lcm",
    "mmod",
    "modc",
    # Prime tables and factorization
    "PRIMES",
    "LOG_PRIMES",
    "SEVEN_SMOOTH_TABLE",
    "strip_seven_smooth",
    "is_prime",
    "nth_prime",
    "prime_range",
    "factorize_integer",
    "prime_factorize",
    # Monzos
    "Monzo",
    "MonzoResidual",
    "monzos_equal",
    "add_monzos",
    "sub_monzos",
    "scale_monzo",
    "to_monzo",
    "to_monzo_and_residual",
    "integer_to_monzo_and_residual",
    "monzo_to_ratio",
    "monzo_to_fraction",
    "monzo_to_integer",
    "prime_limit",
    "resolve_monzo",
    # Cents
    "value_to_cents",
    "cents_to_value",
    # Configuration
    "Config",
    "DEFAULT_CONFIG",
    # Exceptions
    "XenRatioError",
    "ParseError",
    "FractionOverflowError",
    "DivisionByZero",
    "DomainError",
    "OutOfPrimes",
    "FactorizationError",
]
