# xenratio - Prime Tables and Factorization
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

"""
The process-wide prime table and large-integer factorization.

The tables are built once at import time and never mutated, so they can be
shared freely between threads.

Example:
    >>> from xenratio.primes import prime_factorize
    >>> prime_factorize(360)
    {2: 3, 3: 2, 5: 1}
    >>> prime_factorize('-10/9')
    {-1: 1, 2: 1, 3: -2, 5: 1}
"""

from __future__ import annotations
import bisect
import logging
import math
from typing import Optional, Union

from sympy import factorint, isprime, primerange
from sympy import prime as sympy_prime

from .config import DEFAULT_CONFIG, Config
from .exceptions import DomainError, FactorizationError
from .rational import Rational, RationalValue

logger = logging.getLogger(__name__)

_TABLE_SIZE = 1000
_SIEVE_BOUND = 7920

# 3**2 * 5 * 7
SEVEN_SMOOTH_MODULUS = 315


def _sieve(bound: int) -> tuple[int, ...]:
    is_composite = bytearray(bound)
    primes = []
    for candidate in range(2, bound):
        if is_composite[candidate]:
            continue
        primes.append(candidate)
        for multiple in range(candidate * candidate, bound, candidate):
            is_composite[multiple] = 1
    return tuple(primes)


def _seven_smooth_entry(residue: int) -> tuple[int, tuple[int, int, int]]:
    divisor = math.gcd(residue, SEVEN_SMOOTH_MODULUS) or SEVEN_SMOOTH_MODULUS
    exponents = []
    for prime in (3, 5, 7):
        exponent = 0
        while divisor % prime ** (exponent + 1) == 0:
            exponent += 1
        exponents.append(exponent)
    return divisor, tuple(exponents)


# The first 1000 primes: 2, 3, 5, ..., 7919
PRIMES: tuple[int, ...] = _sieve(_SIEVE_BOUND)[:_TABLE_SIZE]

LOG_PRIMES: tuple[float, ...] = tuple(math.log(p) for p in PRIMES)

# Entry r is the largest {3, 5, 7}-smooth divisor shared by every n with
# n % 315 == r, together with that divisor's exponents of 3, 5 and 7.
SEVEN_SMOOTH_TABLE: tuple[tuple[int, tuple[int, int, int]], ...] = tuple(
    _seven_smooth_entry(r) for r in range(SEVEN_SMOOTH_MODULUS)
)

_PRIME_SET = frozenset(PRIMES)


def strip_seven_smooth(n: int) -> tuple[int, int, int, int]:
    """
    Remove every factor of 3, 5 and 7 from a positive integer.

    Peels many factors at a time using SEVEN_SMOOTH_TABLE.

    Returns:
        Tuple (e3, e5, e7, rest) with n == 3**e3 * 5**e5 * 7**e7 * rest.

    Example:
        >>> strip_seven_smooth(2 * 3**4 * 5 * 7**2 * 11)
        (4, 1, 2, 22)
    """
    if n < 1:
        raise DomainError(f"Cannot strip factors from {n}")
    e3 = e5 = e7 = 0
    while True:
        divisor, (a, b, c) = SEVEN_SMOOTH_TABLE[n % SEVEN_SMOOTH_MODULUS]
        if divisor == 1:
            return e3, e5, e7, n
        n //= divisor
        e3 += a
        e5 += b
        e7 += c


def is_prime(n: int) -> bool:
    """
    Check if an integer is prime.

    Small inputs are looked up in the prime table. Larger ones go to
    sympy.isprime, which is exact below 2**64 and a strong probable prime
    test beyond.
    """
    if n < 2:
        return False
    if n <= PRIMES[-1]:
        return n in _PRIME_SET
    return isprime(n)


def nth_prime(k: int) -> int:
    """
    The k-th prime, counting from nth_prime(1) == 2.

    Continues past the table with sympy.prime.
    """
    if k < 1:
        raise DomainError(f"Prime ordinals start at 1, got {k}")
    if k <= len(PRIMES):
        return PRIMES[k - 1]
    return int(sympy_prime(k))


def prime_range(start: int, end: int) -> list[int]:
    """
    Primes p with start <= p < end.

    Example:
        >>> prime_range(10, 30)
        [11, 13, 17, 19, 23, 29]
    """
    result = list(PRIMES[bisect.bisect_left(PRIMES, start):bisect.bisect_left(PRIMES, end)])
    beyond = max(start, PRIMES[-1] + 1)
    if beyond < end:
        result.extend(int(p) for p in primerange(beyond, end))
    return result


def _trial_divide(n: int) -> tuple[dict[int, int], int]:
    """Factor out every table prime. Returns the exponents found and the rest."""
    factors = {}
    twos = (n & -n).bit_length() - 1
    if twos:
        factors[2] = twos
        n >>= twos
    e3, e5, e7, n = strip_seven_smooth(n)
    for prime, exponent in ((3, e3), (5, e5), (7, e7)):
        if exponent:
            factors[prime] = exponent
    for prime in PRIMES[4:]:
        if prime * prime > n:
            # Nothing below prime divides the rest so it is prime itself
            if n > 1:
                factors[n] = 1
                n = 1
            break
        exponent = 0
        while n % prime == 0:
            n //= prime
            exponent += 1
        if exponent:
            factors[prime] = exponent
    return factors, n


def factorize_integer(n: int, config: Optional[Config] = None) -> dict[int, int]:
    """
    Factorize a positive integer of any size.

    Table primes are divided out directly. A cofactor beyond the table is
    handed to sympy.factorint with Config.factorization_limit as its search
    limit.

    Returns:
        Mapping of prime to exponent, in increasing order of primes.

    Raises:
        FactorizationError: If the search stops at a composite cofactor.
    """
    if n < 1:
        raise DomainError(f"Cannot factorize {n}")
    config = config or DEFAULT_CONFIG
    factors, rest = _trial_divide(n)
    if rest > 1:
        logger.debug("Factoring %d-bit cofactor %d beyond the prime table", rest.bit_length(), rest)
        found = factorint(rest, limit=config.factorization_limit, use_rho=True, use_pm1=True)
        for factor, exponent in found.items():
            factor = int(factor)
            # factorint leaves composite cofactors when the limit is hit
            if not isprime(factor):
                raise FactorizationError(factor, config.factorization_limit)
            factors[factor] = factors.get(factor, 0) + int(exponent)
    return dict(sorted(factors.items()))


def prime_factorize(
    value: Union[int, RationalValue],
    config: Optional[Config] = None,
) -> dict[int, int]:
    """
    Factorize an integer or a rational number into primes.

    Args:
        value: An int of any size, or anything Rational accepts.
        config: Optional Config for the factorization search limit.

    Returns:
        Mapping of prime to exponent. Primes of the denominator have negative
        exponents, a negative value maps -1 to 1, zero gives {0: 1} and one
        gives {}.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        numerator, denominator = value, 1
    else:
        value = Rational(value)
        numerator, denominator = value.s * value.n, value.d

    if not numerator:
        return {0: 1}
    result = {}
    if numerator < 0:
        result[-1] = 1
        numerator = -numerator
    result.update(factorize_integer(numerator, config))
    for prime, exponent in factorize_integer(denominator, config).items():
        result[prime] = -exponent
    return dict(sorted(result.items()))
