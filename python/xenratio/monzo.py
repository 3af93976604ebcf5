# xenratio - Monzos
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

"""
Conversion between rational numbers and prime exponent vectors (monzos).

A monzo [a, b, c, ...] represents 2**a * 3**b * 5**c * ... Trailing zeros
are insignificant, so [1, 0] and [1] both represent 2.

Plain ints of any size go through the integer functions without a ceiling.
Everything else is converted to Rational first.

Example:
    >>> from xenratio.monzo import to_monzo, monzo_to_fraction
    >>> to_monzo(360)
    [3, 2, 1]
    >>> to_monzo('250/243')
    [1, -5, 3]
    >>> monzo_to_fraction([3, -2, -1])
    Rational(8, 45)
"""

from __future__ import annotations
import logging
import math
from typing import Iterable, NamedTuple, Optional, Sequence, Union

from .config import DEFAULT_CONFIG, Config
from .exceptions import DomainError, OutOfPrimes, XenRatioError
from .primes import PRIMES, strip_seven_smooth
from .rational import Rational, RationalValue

logger = logging.getLogger(__name__)

Monzo = list[int]

MonzoValue = Union[Sequence[int], RationalValue]


class MonzoResidual(NamedTuple):
    """A truncated monzo and the factor it cannot represent."""
    monzo: Monzo
    residual: Union[Rational, int]


def monzos_equal(a: Sequence[int], b: Sequence[int]) -> bool:
    """
    Check if two monzos represent the same number.

    Example:
        >>> monzos_equal([1, 2], [1, 2, 0, 0])
        True
    """
    if len(a) < len(b):
        a, b = b, a
    if any(x != y for x, y in zip(a, b)):
        return False
    return not any(a[len(b):])


def add_monzos(a: Sequence[int], b: Sequence[int]) -> Monzo:
    """Monzo of the product of the numbers a and b represent."""
    if len(a) < len(b):
        a, b = b, a
    result = list(a)
    for i, component in enumerate(b):
        result[i] += component
    return result


def sub_monzos(a: Sequence[int], b: Sequence[int]) -> Monzo:
    """Monzo of the quotient of the numbers a and b represent."""
    result = list(a)
    for i, component in enumerate(b):
        if i < len(result):
            result[i] -= component
        else:
            result.append(-component)
    return result


def scale_monzo(monzo: Sequence[int], amount: int) -> Monzo:
    """Monzo of the number raised to an integer power."""
    return [amount * component for component in monzo]


def _trim(monzo: Monzo) -> Monzo:
    while monzo and not monzo[-1]:
        monzo.pop()
    return monzo


def _out_of_primes(n: int) -> OutOfPrimes:
    logger.debug("Prime factors of %d exceed the prime table", n)
    return OutOfPrimes(limit=PRIMES[-1])


def _integer_to_monzo(n: int) -> Monzo:
    if n < 1:
        raise DomainError(f"Cannot convert number {n} to monzo")
    if n == 1:
        return []

    # Bit-magic for the 2-limit
    twos = (n & -n).bit_length() - 1
    n >>= twos
    result = [twos]
    if n == 1:
        return result

    e3, e5, e7, n = strip_seven_smooth(n)
    result.extend((e3, e5, e7))
    if n == 1:
        return _trim(result)

    # Accumulate increasingly complex factors into the probe
    # until it reaches the input value.
    probe = 1
    index = len(result)
    result.append(0)
    while True:
        next_probe = probe * PRIMES[index]
        if n % next_probe:
            index += 1
            if index >= len(PRIMES):
                raise _out_of_primes(n)
            result.append(0)
        else:
            probe = next_probe
            result[index] += 1
            if probe == n:
                return result


def to_monzo(n: RationalValue) -> Monzo:
    """
    Prime exponents of a positive integer or rational number.

    Returns the shortest vector that spans every prime factor.

    Raises:
        DomainError: For zero, negative numbers and non-integral floats.
        OutOfPrimes: If a prime factor is beyond the prime table.
    """
    if isinstance(n, int) and not isinstance(n, bool):
        return _integer_to_monzo(n)
    if isinstance(n, float):
        if not n.is_integer():
            raise DomainError(f"Cannot convert number {n} to monzo")
        return _integer_to_monzo(int(n))
    value = Rational(n)
    if value.s <= 0:
        raise DomainError(f"Cannot convert number {value.to_fraction()} to monzo")
    return sub_monzos(_integer_to_monzo(value.n), _integer_to_monzo(value.d))


def _factor_prefix(n: int, number_of_components: int) -> tuple[Monzo, int]:
    """Exponents of the first primes dividing the positive integer n and the rest."""
    result = [0] * number_of_components
    if not number_of_components:
        return result, n

    twos = (n & -n).bit_length() - 1
    result[0] = twos
    n >>= twos

    start = 1
    if number_of_components >= 4:
        e3, e5, e7, n = strip_seven_smooth(n)
        result[1:4] = [e3, e5, e7]
        start = 4
    for index in range(start, number_of_components):
        if n == 1:
            break
        prime = PRIMES[index]
        while n % prime == 0:
            n //= prime
            result[index] += 1
    return result, n


def _check_components(number_of_components: int) -> None:
    if number_of_components < 0:
        raise DomainError(f"Number of components must be non-negative, got {number_of_components}")
    if number_of_components > len(PRIMES):
        raise OutOfPrimes(limit=PRIMES[-1])


def to_monzo_and_residual(n: RationalValue, number_of_components: int) -> MonzoResidual:
    """
    Prime exponents truncated to a number of components.

    Args:
        n: Rational number to convert.
        number_of_components: Length of the resulting monzo.

    Returns:
        MonzoResidual with the monzo and the Rational residual that the
        monzo cannot represent. The residual has the sign of n. Zero
        converts to an all-zero monzo with a zero residual whatever the
        number of components.

    Example:
        >>> to_monzo_and_residual('12345/678', 3)
        MonzoResidual(monzo=[-1, 0, 1], residual=Rational(823, 113))
    """
    value = Rational(n)
    if not value.n:
        return MonzoResidual([0] * max(number_of_components, 0), Rational(0))
    _check_components(number_of_components)

    numerator, n_rest = _factor_prefix(value.n, number_of_components)
    denominator, d_rest = _factor_prefix(value.d, number_of_components)
    monzo = [a - b for a, b in zip(numerator, denominator)]
    # Remainders of a fraction in lowest terms are coprime
    return MonzoResidual(monzo, Rational(value.s * n_rest, d_rest))


def integer_to_monzo_and_residual(n: int, number_of_components: int) -> MonzoResidual:
    """
    Prime exponents of an integer of any size truncated to a number of components.

    Same as to_monzo_and_residual but the residual is an int.

    Example:
        >>> integer_to_monzo_and_residual(-2 * 3**40 * 101, 2)
        MonzoResidual(monzo=[1, 40], residual=-101)
    """
    if not n:
        return MonzoResidual([0] * max(number_of_components, 0), 0)
    _check_components(number_of_components)
    monzo, rest = _factor_prefix(abs(n), number_of_components)
    return MonzoResidual(monzo, rest if n > 0 else -rest)


def monzo_to_ratio(monzo: Iterable[int]) -> tuple[int, int]:
    """
    Numerator and denominator of a monzo without any size limit.

    Example:
        >>> monzo_to_ratio([-60, 40])
        (12157665459056928801, 1152921504606846976)
    """
    numerator = 1
    denominator = 1
    for index, component in enumerate(monzo):
        if not component:
            continue
        if index >= len(PRIMES):
            raise OutOfPrimes(limit=PRIMES[-1])
        if component > 0:
            numerator *= PRIMES[index] ** component
        else:
            denominator *= PRIMES[index] ** -component
    return numerator, denominator


def monzo_to_fraction(monzo: Iterable[int]) -> Rational:
    """
    Rational number a monzo represents.

    Raises:
        FractionOverflowError: If the result exceeds the safe integer ceiling.
    """
    numerator, denominator = monzo_to_ratio(monzo)
    return Rational(numerator, denominator)


def monzo_to_integer(monzo: Iterable[int]) -> int:
    """Integer a monzo without negative components represents."""
    numerator, denominator = monzo_to_ratio(monzo)
    if denominator != 1:
        raise DomainError('Monzo has negative components')
    return numerator


def _integer_prime_limit(n: int, as_ordinal: bool, max_limit: int) -> Union[int, float]:
    if n < 1:
        return math.nan

    index = -1
    if not n & 1:
        index = 0
        n >>= (n & -n).bit_length() - 1
    if n > 1:
        e3, e5, e7, n = strip_seven_smooth(n)
        for i, exponent in ((1, e3), (2, e5), (3, e7)):
            if exponent:
                index = i
    if n > 1:
        # Accumulate increasingly complex factors into the probe
        # until it reaches the input value.
        probe = 1
        index = 4
        while True:
            if index >= len(PRIMES) or PRIMES[index] > max_limit:
                return math.inf
            next_probe = probe * PRIMES[index]
            if n % next_probe:
                index += 1
            elif next_probe == n:
                break
            else:
                probe = next_probe

    if index < 0:
        return 0 if as_ordinal else 1
    if PRIMES[index] > max_limit:
        return math.inf
    return index + 1 if as_ordinal else PRIMES[index]


def prime_limit(
    n: RationalValue,
    as_ordinal: bool = False,
    max_limit: Optional[int] = None,
    config: Optional[Config] = None,
) -> Union[int, float]:
    """
    Largest prime in the factorization of an integer or a fraction.

    Args:
        n: Integer (any size) or rational number.
        as_ordinal: Return the 1-based index of the prime instead
                    (2 -> 1, 3 -> 2, 5 -> 3, ...).
        max_limit: Largest prime considered. Defaults to
                   Config.max_prime_limit.
        config: Config supplying the default max_limit.

    Returns:
        The prime or its ordinal. 1 (ordinal 0) for n == 1,
        float('inf') if the limit is beyond max_limit or the prime table and
        float('nan') if n is not a positive number.

    Examples:
        >>> prime_limit(45)
        5
        >>> prime_limit(21, True)
        4
        >>> prime_limit(123456789, False, 97)
        inf
    """
    if max_limit is None:
        max_limit = (config or DEFAULT_CONFIG).max_prime_limit
    if isinstance(n, int) and not isinstance(n, bool):
        return _integer_prime_limit(n, as_ordinal, max_limit)
    if isinstance(n, float):
        if not n.is_integer():
            return math.nan
        return _integer_prime_limit(int(n), as_ordinal, max_limit)
    try:
        value = Rational(n)
    except (XenRatioError, TypeError, ValueError):
        return math.nan
    if value.s <= 0:
        return math.nan
    return max(
        _integer_prime_limit(value.n, as_ordinal, max_limit),
        _integer_prime_limit(value.d, as_ordinal, max_limit),
    )


def resolve_monzo(value: MonzoValue) -> Monzo:
    """
    Normalize a value into a monzo.

    Sequences of ints are taken to be monzos already. Everything else is
    converted with to_monzo.
    """
    if isinstance(value, (list, tuple)):
        return list(value)
    return to_monzo(value)
