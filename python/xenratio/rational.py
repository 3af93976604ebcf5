# xenratio - Rational Numbers
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

"""
Exact rational numbers bounded by the safe integer ceiling.

Every numerator and denominator stays at or below MAX_SAFE_INTEGER (2**53 - 1),
the largest integer an IEEE double holds without loss. Arithmetic cancels
common factors *before* multiplying so that intermediate products stay below
the ceiling whenever the operands allow it. Anything that would exceed it
raises FractionOverflowError instead of silently losing precision.

Example:
    >>> from xenratio.rational import Rational
    >>> Rational('123456789/94906267').add('987654321/94906267')
    Rational(1111111110, 94906267)
    >>> Rational(4, 9).pow('1/2')
    Rational(2, 3)
    >>> Rational(2).pow('1/2') is None
    True
    >>> str(Rational(5, 11))
    "0.'45'"
"""

from __future__ import annotations
import json
import logging
import math
import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Mapping, Optional, Union

from .config import DEFAULT_CONFIG, Config
from .conversion import value_to_cents
from .exceptions import (
    DivisionByZero,
    DomainError,
    FractionOverflowError,
    ParseError,
    XenRatioError,
)

logger = logging.getLogger(__name__)

MAX_SAFE_INTEGER = 2**53 - 1

# Continued fraction fallback used when defloating overshoots the ceiling
_MAX_DEFLOAT_TERMS = 20
_MAX_DEFLOAT_COEFFICIENT = 1e12

# Decimal exponents beyond this can only describe zero or an overflow
_MAX_DECIMAL_EXPONENT = 1000

# Longer digit strings cannot reduce under the ceiling and exceed int() limits
_MAX_DIGITS = 4000

# Errors that make an operand unusable in the predicate methods
_OPERAND_ERRORS = (XenRatioError, TypeError, ValueError)

_DIGITS = re.compile(r'\d*')
_INTEGER = re.compile(r'[-+]?\d+')

# Type for things that can be converted to Rational
RationalValue = Union['Rational', int, float, str, Fraction, Mapping[str, Any]]


def gcd(a: int, b: int) -> int:
    """
    Greatest common divisor of two integers.

    Zero is the identity element: gcd(0, x) == gcd(x, 0) == |x|.
    The result is never negative.
    """
    return math.gcd(a, b)


def lcm(a: int, b: int) -> int:
    """
    Least common multiple of two integers.

    Zero if either argument is zero. Satisfies gcd(a, b) * lcm(a, b) == a * b.
    """
    if not a:
        return a
    return (a // gcd(a, b)) * b


def mmod(a: int, b: int) -> int:
    """Mathematical modulo. The result has the sign of the divisor."""
    return a % b


def modc(a: int, b: int) -> int:
    """
    Ceiling modulo. Maps a into the range (0, |b|] like a clock face.

    Returns 0 for a zero divisor.

    Example:
        >>> [modc(i, 12) for i in (0, 1, 12, 13)]
        [12, 1, 12, 1]
    """
    if not b:
        return 0
    b = abs(b)
    return a % b or b


def _sign(x: Union[int, float]) -> int:
    return (x > 0) - (x < 0)


def _is_nan(x: Any) -> bool:
    return isinstance(x, float) and math.isnan(x)


def _is_inf(x: Any) -> bool:
    return isinstance(x, float) and math.isinf(x)


def _is_integral(x: Union[int, float]) -> bool:
    return isinstance(x, int) or x.is_integer()


def _log_ratio(n: int, d: int) -> float:
    """Natural logarithm of n/d for positive integers."""
    if abs(n - d) < min(n, d):
        # Near unity the difference of logs cancels to zero
        return math.log1p((n - d) / d)
    # math.log is accurate for integers beyond float range
    return math.log(n) - math.log(d)


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _fold_continued(coefficients: list[int]) -> tuple[int, int]:
    """Collapse continued fraction coefficients into a numerator/denominator pair."""
    n, d = coefficients[-1], 1
    for coefficient in reversed(coefficients[:-1]):
        n, d = d + n * coefficient, n
    return n, d


def _integer_root(x: int, k: int) -> Optional[int]:
    """Exact k-th root of a non-negative integer or None if it is irrational."""
    if x < 2:
        return x
    # 2**k > x leaves no integer candidates
    if k >= x.bit_length():
        return None
    if k == 2:
        root = math.isqrt(x)
    else:
        root = round(x ** (1.0 / k))
        while root ** k > x:
            root -= 1
        while (root + 1) ** k <= x:
            root += 1
    if root ** k == x:
        return root
    return None


def _check_ceiling(n: Union[int, float], d: Union[int, float]) -> None:
    if d > MAX_SAFE_INTEGER:
        raise FractionOverflowError('Denominator above safe limit', 'denominator')
    if n > MAX_SAFE_INTEGER:
        if _is_inf(n):
            raise DomainError('Cannot represent Infinity as a fraction')
        raise FractionOverflowError('Numerator above safe limit', 'numerator')


def _reduce(s: int, n: int, d: int) -> tuple[int, int, int]:
    """Cancel the common factor and check the reduced result against the ceiling."""
    common = gcd(n, d)
    if common > 1:
        n //= common
        d //= common
    _check_ceiling(n, d)
    if not n:
        return 0, 0, 1
    return s, n, d


def _best_convergent(x: float) -> tuple[int, int]:
    """Longest continued fraction convergent of x that fits under the ceiling."""
    coefficients: list[int] = []
    for _ in range(_MAX_DEFLOAT_TERMS):
        coefficient = math.floor(x)
        if coefficient > _MAX_DEFLOAT_COEFFICIENT:
            break
        coefficients.append(coefficient)
        if x == coefficient:
            break
        x = 1 / (x - coefficient)
    if not coefficients:
        raise FractionOverflowError('Numerator above safe limit', 'numerator')

    for length in range(len(coefficients), 0, -1):
        n, d = _fold_continued(coefficients[:length])
        if n <= MAX_SAFE_INTEGER and d <= MAX_SAFE_INTEGER:
            return n, d
    # The first coefficient alone is bounded by _MAX_DEFLOAT_COEFFICIENT
    raise FractionOverflowError('Numerator above safe limit', 'numerator')


def _defloat(s: int, n: Union[int, float], d: Union[int, float]) -> tuple[int, int, int]:
    """
    Remove the implicit power of two denominator of IEEE floats.

    Falls back to a continued fraction approximation if the doubled
    components would not fit under the ceiling.
    """
    while not (_is_integral(n) and _is_integral(d)):
        if n > MAX_SAFE_INTEGER or d > MAX_SAFE_INTEGER:
            break
        n *= 2
        d *= 2
    if n > MAX_SAFE_INTEGER or d > MAX_SAFE_INTEGER:
        approximation = n / d
        n, d = _best_convergent(approximation)
        logger.debug("Approximated %r as %d/%d", approximation, n, d)
    return _reduce(s, int(n), int(d))


def _from_pair(numerator: Any, denominator: Any) -> tuple[int, int, int]:
    if isinstance(numerator, bool) or not isinstance(numerator, (int, float)):
        raise TypeError('Numerator must be a number when denominator is given')
    if isinstance(denominator, bool) or not isinstance(denominator, (int, float)):
        raise TypeError('Denominator must be a number')
    if _is_nan(numerator) or _is_nan(denominator):
        raise DomainError('Cannot represent NaN as a fraction')

    s = _sign(numerator) * _sign(denominator)
    n = abs(numerator)
    d = abs(denominator)

    if _is_inf(d):
        if _is_inf(n):
            raise DomainError('Cannot represent NaN as a fraction')
        return 0, 0, 1

    _check_ceiling(n, d)
    if not d:
        raise DivisionByZero('Division by Zero')
    return _defloat(s, n, d)


def _from_mapping(data: Mapping[str, Any]) -> tuple[int, int, int]:
    if 'n' not in data or 'd' not in data:
        raise TypeError("Mapping must have 'n' and 'd' keys")
    n = data['n']
    d = data['d']
    for value in (n, d, data.get('s', 1)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Mapping components must be numbers, got {value!r}")
        if _is_nan(value):
            raise DomainError('Cannot represent NaN as a fraction')
    if not d:
        raise DivisionByZero('Division by Zero')

    s = _sign(data['s']) if 's' in data else 1
    if d < 0:
        s = -s
    if n < 0:
        s = -s
    elif not n:
        s = 0
    n = abs(n)
    d = abs(d)

    if _is_inf(d):
        if _is_inf(n):
            raise DomainError('Cannot represent NaN as a fraction')
        return 0, 0, 1
    if _is_inf(n):
        raise DomainError('Cannot represent Infinity as a fraction')
    if n != int(n) or d != int(d):
        raise DomainError('Mapping components must be integers')
    if n and not s:
        raise DomainError('Zero sign requires a zero numerator')
    return _reduce(s, int(n), int(d))


def _parse_digits(digits: str) -> int:
    if len(digits.lstrip('0')) > _MAX_DIGITS:
        raise FractionOverflowError('Too many digits')
    return int(digits or '0')


def _parse_integer(text: str, original: str) -> int:
    if text.startswith(('--', '-+', '+-', '++')):
        raise ParseError('Double sign', original)
    if not _INTEGER.fullmatch(text):
        raise ParseError('Invalid integer', original)
    if text[0] == '-':
        return -_parse_digits(text[1:])
    return _parse_digits(text.lstrip('+'))


def _parse(original: str) -> tuple[int, int]:
    """
    Parse a string into a signed numerator and a denominator.

    Grammar: ['-']digits['.'digits["'"digits"'"]]['/'['-']digits]['e'['-']digits]
    """
    text = original.strip().lower()
    if not text:
        raise ParseError('Empty string', original)

    exponent = 0
    if 'e' in text:
        text, exponent_text = text.split('e', 1)
        if not _INTEGER.fullmatch(exponent_text):
            raise ParseError('Bad exponent', original)
        exponent = _parse_integer(exponent_text, original)

    if '/' in text:
        if '.' in text:
            raise ParseError('Parameters must be integer', original)
        numerator_text, denominator_text = text.split('/', 1)
        if numerator_text == '-':
            numerator = -1
        elif numerator_text:
            numerator = _parse_integer(numerator_text, original)
        else:
            numerator = 1
        denominator = _parse_integer(denominator_text, original) if denominator_text else 1
    elif '.' in text:
        whole, fractional = text.split('.', 1)
        fractional, quote, cycle = fractional.partition("'")
        if quote:
            # The cycle is quoted and ends the decimal
            if not cycle.endswith("'") or len(cycle) < 2:
                raise ParseError('Invalid repeating decimal', original)
            cycle = cycle[:-1]
        sign = 1
        if whole.startswith('-'):
            sign = -1
            whole = whole[1:]
        if whole.startswith(('-', '+')):
            raise ParseError('Double sign', original)
        for part in (whole, fractional, cycle):
            if not _DIGITS.fullmatch(part):
                raise ParseError('Invalid decimal', original)
        numerator = _parse_digits(whole + fractional)
        denominator = 10 ** len(fractional)
        if cycle:
            cycle_denominator = (10 ** len(cycle) - 1) * denominator
            numerator = numerator * cycle_denominator + denominator * _parse_digits(cycle)
            denominator *= cycle_denominator
        numerator *= sign
    else:
        numerator = _parse_integer(text, original)
        denominator = 1

    if not denominator:
        raise DivisionByZero('Division by Zero')
    if exponent and numerator:
        if abs(exponent) > _MAX_DECIMAL_EXPONENT:
            raise FractionOverflowError('Exponent out of range', 'numerator' if exponent > 0 else 'denominator')
        if exponent > 0:
            numerator *= 10 ** exponent
        else:
            denominator *= 10 ** -exponent
    return numerator, denominator


@dataclass(frozen=True, eq=False)
class Rational:
    """
    An exact rational number in lowest terms with an explicit sign.

    Attributes:
        s: Sign, one of -1, 0 or 1.
        n: Numerator magnitude, 0 <= n <= MAX_SAFE_INTEGER.
        d: Denominator, 0 < d <= MAX_SAFE_INTEGER.

    Rationals are immutable and can be used as dictionary keys. They hash
    like the equal int or fractions.Fraction.
    """
    s: int
    n: int
    d: int

    def __init__(self, numerator: RationalValue, denominator: Optional[Union[int, float]] = None):
        """
        Create a rational number.

        Args:
            numerator: An int or float, a string such as '3/2', '-1.25',
                       "0.'3'" or '37e-2', another Rational, a
                       fractions.Fraction or a mapping {'n': .., 'd': ..}
                       with an optional 's'.
            denominator: Optional int or float denominator. An infinite
                         denominator produces zero.

        Raises:
            ParseError: If a string is malformed.
            FractionOverflowError: If a component exceeds MAX_SAFE_INTEGER.
            DivisionByZero: If the denominator is zero.
            DomainError: For NaN or an infinite value.
            TypeError: For unsupported input types.
        """
        if denominator is not None:
            s, n, d = _from_pair(numerator, denominator)
        elif isinstance(numerator, Rational):
            s, n, d = numerator.s, numerator.n, numerator.d
        elif isinstance(numerator, (int, float)) and not isinstance(numerator, bool):
            s, n, d = _from_pair(numerator, 1)
        elif isinstance(numerator, str):
            num, den = _parse(numerator)
            s, n, d = _reduce(_sign(num) * _sign(den), abs(num), abs(den))
        elif isinstance(numerator, Fraction):
            s, n, d = _reduce(_sign(numerator), abs(numerator.numerator), numerator.denominator)
        elif isinstance(numerator, Mapping):
            s, n, d = _from_mapping(numerator)
        else:
            raise TypeError(f"Cannot convert {type(numerator).__name__} to Rational")

        # Bypass frozen dataclass __setattr__
        object.__setattr__(self, 's', s)
        object.__setattr__(self, 'n', n)
        object.__setattr__(self, 'd', d)

    @classmethod
    def _make(cls, s: int, n: int, d: int) -> Rational:
        """Wrap components that are already normalized."""
        result = object.__new__(cls)
        object.__setattr__(result, 's', s)
        object.__setattr__(result, 'n', n)
        object.__setattr__(result, 'd', d)
        return result

    @property
    def numerator(self) -> int:
        """Signed numerator."""
        return self.s * self.n

    @property
    def denominator(self) -> int:
        return self.d

    def as_fraction(self) -> Fraction:
        """Convert to fractions.Fraction."""
        return Fraction(self.s * self.n, self.d)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: RationalValue) -> Rational:
        """
        Add two rational numbers.

        Example:
            >>> Rational({'n': 2, 'd': 3}).add('14.9')
            Rational(467, 30)
        """
        other = Rational(other)
        # Must pre-reduce to avoid blowing the limits
        factor = gcd(self.d, other.d)
        df = other.d // factor
        return Rational(
            self.s * self.n * df + other.s * other.n * (self.d // factor),
            df * self.d,
        )

    def sub(self, other: RationalValue) -> Rational:
        """Subtract another rational number from this one."""
        other = Rational(other)
        # Must pre-reduce to avoid blowing the limits
        factor = gcd(self.d, other.d)
        df = other.d // factor
        return Rational(
            self.s * self.n * df - other.s * other.n * (self.d // factor),
            df * self.d,
        )

    def mul(self, other: RationalValue) -> Rational:
        """
        Multiply two rational numbers.

        Example:
            >>> Rational("-17.'345'").mul(3)
            Rational(-5776, 111)
        """
        other = Rational(other)
        # Must pre-reduce to avoid blowing the limits
        nd_factor = gcd(self.n, other.d)
        dn_factor = gcd(self.d, other.n)
        return Rational(
            self.s * (self.n // nd_factor) * other.s * (other.n // dn_factor),
            (self.d // dn_factor) * (other.d // nd_factor),
        )

    def div(self, other: RationalValue) -> Rational:
        """
        Divide this rational number by another.

        Raises:
            DivisionByZero: If other is zero.
        """
        other = Rational(other)
        if not other.n:
            raise DivisionByZero('Division by Zero')
        # Must pre-reduce to avoid blowing the limits
        n_factor = gcd(self.n, other.n)
        d_factor = gcd(self.d, other.d)
        return Rational(
            self.s * (self.n // n_factor) * other.s * (other.d // d_factor),
            (self.d // d_factor) * (other.n // n_factor),
        )

    def lens_add(self, other: RationalValue) -> Rational:
        """
        Harmonic addition following the thin lens equation 1/f = 1/u + 1/v.

        Zero if either term is zero, matching the limit where a term vanishes.
        Terms of opposite sign can cancel: Rational(1).lens_add(-1) raises
        DivisionByZero.

        Example:
            >>> Rational('5/3').lens_add('3/2')
            Rational(15, 19)
        """
        other = Rational(other)
        if not other.n or not self.n:
            return Rational(0)
        # Must pre-reduce to avoid blowing the limits
        numerator = lcm(self.n, other.n)
        return Rational(
            numerator,
            self.s * (numerator // self.n) * self.d + other.s * (numerator // other.n) * other.d,
        )

    def lens_sub(self, other: RationalValue) -> Rational:
        """Harmonic subtraction 1/u = 1/f - 1/v, the inverse of lens_add."""
        other = Rational(other)
        if not other.n or not self.n:
            return Rational(0)
        numerator = lcm(self.n, other.n)
        return Rational(
            numerator,
            self.s * (numerator // self.n) * self.d - other.s * (numerator // other.n) * other.d,
        )

    def _common_terms(self, other: Rational) -> tuple[int, int, int]:
        if not other.n:
            raise DivisionByZero('Division by Zero')
        # Must pre-reduce to avoid blowing the limits
        denominator = lcm(self.d, other.d)
        dividend = (denominator // self.d) * self.n
        divisor = other.n * (denominator // other.d)
        return dividend, divisor, denominator

    def mod(self, other: RationalValue) -> Rational:
        """
        Computational modulo. The sign follows the dividend and the sign of
        the divisor is ignored.

        Examples:
            >>> Rational(5).mod(3)
            Rational(2, 1)
            >>> Rational(-5).mod(3)
            Rational(-2, 1)
        """
        dividend, divisor, denominator = self._common_terms(Rational(other))
        return Rational(self.s * (dividend % divisor), denominator)

    def mmod(self, other: RationalValue) -> Rational:
        """
        Mathematical modulo. The result has the sign of the divisor.

        Example:
            >>> Rational(-5).mmod(3)
            Rational(1, 1)
        """
        other = Rational(other)
        dividend, divisor, denominator = self._common_terms(other)
        return Rational(mmod(self.s * dividend, other.s * divisor), denominator)

    def _integer_power(self, exponent: int) -> Rational:
        if not exponent:
            return Rational(1)
        if exponent < 0:
            if not self.n:
                raise DivisionByZero('Division by Zero')
            base_n, base_d = self.d, self.n
            exponent = -exponent
        else:
            base_n, base_d = self.n, self.d
        # Refuse before materializing astronomically large powers
        if base_n > 1 and (base_n.bit_length() - 1) * exponent > 53:
            raise FractionOverflowError('Numerator above safe limit', 'numerator')
        if base_d > 1 and (base_d.bit_length() - 1) * exponent > 53:
            raise FractionOverflowError('Denominator above safe limit', 'denominator')
        sign = -1 if self.s < 0 and exponent % 2 else abs(self.s)
        return Rational(sign * base_n ** exponent, base_d ** exponent)

    def pow(self, other: RationalValue) -> Optional[Rational]:
        """
        Raise to a rational power if the result is rational.

        Returns:
            The exact power or None if the result is irrational.

        Examples:
            >>> Rational('9/4').pow('3/2')
            Rational(27, 8)
            >>> Rational('-1/2').pow(-3)
            Rational(-8, 1)
            >>> Rational(2).pow('1/2') is None
            True
        """
        exponent = Rational(other)
        if not exponent.s:
            return Rational(1)
        if exponent.d == 1:
            return self._integer_power(exponent.s * exponent.n)
        if not self.s:
            if exponent.s < 0:
                raise DivisionByZero('Division by Zero')
            return Rational(0)
        if self.s < 0 and exponent.d % 2 == 0:
            return None
        n_root = _integer_root(self.n, exponent.d)
        if n_root is None:
            return None
        d_root = _integer_root(self.d, exponent.d)
        if d_root is None:
            return None
        # Roots of coprime integers are coprime
        return Rational._make(self.s, n_root, d_root)._integer_power(exponent.s * exponent.n)

    def sqrt(self) -> Optional[Rational]:
        """Exact square root or None."""
        return self.pow(Rational._make(1, 1, 2))

    def inverse(self) -> Rational:
        """
        Exchange numerator and denominator.

        Raises:
            DivisionByZero: If this is zero.
        """
        if not self.n:
            raise DivisionByZero('Division by Zero')
        return Rational._make(self.s, self.d, self.n)

    def neg(self) -> Rational:
        return Rational._make(-self.s, self.n, self.d)

    def abs(self) -> Rational:
        return Rational._make(abs(self.s), self.n, self.d)

    def gabs(self) -> Rational:
        """
        Geometric absolute value. Discards sign and returns the superunitary
        one of |x| and 1/|x|.

        Example:
            >>> Rational(-1, 2).gabs()
            Rational(2, 1)
        """
        if self.n < self.d:
            return Rational({'n': self.d, 'd': self.n})
        return self.abs()

    def is_unity(self) -> bool:
        return self.s == 1 and self.n == 1 and self.d == 1

    # ------------------------------------------------------------------
    # Rounding
    # ------------------------------------------------------------------

    def floor(self) -> Rational:
        return Rational((self.s * self.n) // self.d)

    def ceil(self) -> Rational:
        return Rational(-((-self.s * self.n) // self.d))

    def round(self) -> Rational:
        """Round half up."""
        return Rational((2 * self.s * self.n + self.d) // (2 * self.d))

    def round_to(self, other: RationalValue) -> Rational:
        """
        Round to a multiple of another rational number. Halves round away from zero.

        Example:
            >>> Rational('0.78').round_to('1/9')
            Rational(7, 9)
        """
        other = Rational(other)
        if not other.n:
            raise DivisionByZero('Division by Zero')
        multiple = (2 * self.n * other.d + self.d * other.n) // (2 * self.d * other.n)
        return Rational(self.s * multiple * other.n, other.d)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, other: RationalValue) -> Union[int, float]:
        """
        Compare two rational numbers.

        Returns:
            An int with the sign of (self - other) or float('nan') if other
            cannot be converted.
        """
        try:
            other = Rational(other)
        except _OPERAND_ERRORS:
            return math.nan
        return self.s * self.n * other.d - other.s * other.n * self.d

    def equals(self, other: RationalValue) -> bool:
        """Check for equality. False if other cannot be converted."""
        try:
            other = Rational(other)
        except _OPERAND_ERRORS:
            return False
        return self.s == other.s and self.n == other.n and self.d == other.d

    def divisible(self, other: RationalValue) -> bool:
        """
        Check if this is an integer multiple of other.

        Examples:
            >>> Rational('7.5').divisible('5/2')
            True
            >>> Rational('7/4').divisible('5/2')
            False
        """
        try:
            other = Rational(other)
        except _OPERAND_ERRORS:
            return False
        if not other.n:
            return False
        n_factor = gcd(self.n, other.n)
        d_factor = gcd(self.d, other.d)
        return (
            (self.n // n_factor) * (other.d // d_factor)
        ) % ((other.n // n_factor) * (self.d // d_factor)) == 0

    # ------------------------------------------------------------------
    # Fractional gcd/lcm and their geometric analogues
    # ------------------------------------------------------------------

    def gcd(self, other: RationalValue) -> Rational:
        """
        Fractional gcd. Both operands are integer multiples of the result.

        Always non-negative.

        Example:
            >>> Rational(5, 8).gcd('3/7')
            Rational(1, 56)
        """
        other = Rational(other)
        return Rational(gcd(other.n, self.n), lcm(self.d, other.d))

    def lcm(self, other: RationalValue) -> Rational:
        """
        Fractional lcm. The result is an integer multiple of both operands.

        Has the sign of the product of the operands.
        """
        other = Rational(other)
        return Rational(self.s * other.s * lcm(other.n, self.n), gcd(other.d, self.d))

    def geo_mod(self, other: RationalValue) -> Rational:
        """
        Geometric modulo. Divide by powers of other until the magnitude lies
        between 1 (inclusive) and |other| (exclusive).

        A negative modulus flips the sign once per division.

        Examples:
            >>> Rational(5).geo_mod(2)
            Rational(5, 4)
            >>> Rational(1, 11).geo_mod(3)
            Rational(27, 11)
            >>> Rational(1, 11).geo_mod('-1/3')
            Rational(9, 11)

        Raises:
            DomainError: If |other| is 1 or either operand is zero.
            FractionOverflowError: If the result cannot fit under the ceiling.
        """
        other = Rational(other)
        if other.n == other.d:
            raise DomainError('Geometric modulo by 1')
        if not self.s or not other.s:
            raise DomainError('Unable to calculate geometric modulo of zero')

        s, n, d = self.s, self.n, self.d
        on, od = other.n, other.d

        step = _log_ratio(on, od)
        if not step:
            raise DomainError('Geometric modulo by a value indistinguishable from 1')
        octaves = math.floor(_log_ratio(n, d) / step)
        # Beyond this many steps the result cannot fit under the ceiling
        if (abs(octaves) - 1) * (max(on, od).bit_length() - 1) > 2 * 53:
            raise FractionOverflowError('Geometric modulo out of range')

        if octaves > 0:
            n *= od ** octaves
            d *= on ** octaves
        elif octaves < 0:
            n *= on ** -octaves
            d *= od ** -octaves

        # Fine-tune to fix floating point issues.
        if on > od:
            if n * od >= d * on:
                octaves += 1
                n *= od
                d *= on
            if n < d:
                octaves -= 1
                n *= on
                d *= od
        else:
            if n * od <= d * on:
                octaves += 1
                n *= od
                d *= on
            if n > d:
                octaves -= 1
                n *= on
                d *= od

        if other.s < 0 and octaves % 2:
            s = -s
        return Rational({'s': s, 'n': n, 'd': d})

    def gcr(
        self,
        other: RationalValue,
        max_iter: Optional[int] = None,
        config: Optional[Config] = None,
    ) -> Optional[Rational]:
        """
        Greatest common radical, if it exists.

        Never subunitary. Unity is the identity: gcr(1, x) == gcr(x, 1) == x.

        Args:
            other: The other rational number.
            max_iter: Maximum Euclidean rounds. Defaults to
                      Config.max_radical_iterations.
            config: Config supplying the default bound.

        Examples:
            >>> Rational(8).gcr(4)
            Rational(2, 1)
            >>> Rational('1/2').gcr('1/3') is None
            True
        """
        if max_iter is None:
            max_iter = (config or DEFAULT_CONFIG).max_radical_iterations
        a = self.gabs()
        b = Rational(other).gabs()
        if a.is_unity():
            return b
        if b.is_unity():
            return a
        for _ in range(max_iter):
            try:
                a = a.geo_mod(b)
                if a.is_unity():
                    return b
                b = b.geo_mod(a)
                if b.is_unity():
                    return a
            except (DomainError, FractionOverflowError):
                return None
        return None

    def _radical_exponents(self, other: Rational, radical: Rational) -> tuple[int, int]:
        base = 1 / _log_ratio(radical.n, radical.d)
        return (
            round(_log_ratio(self.n, self.d) * base),
            round(_log_ratio(other.n, other.d) * base),
        )

    def log(
        self,
        other: RationalValue,
        max_iter: Optional[int] = None,
        config: Optional[Config] = None,
    ) -> Optional[Rational]:
        """
        Logarithmic division: the rational p/q with self == other ** (p/q).

        Examples:
            >>> Rational(64, 27).log('16/9')
            Rational(3, 2)
            >>> Rational(64, 27).log(7) is None
            True
            >>> Rational(-8).log(-2)
            Rational(3, 1)

        Returns:
            The exponent or None if it does not exist.
        """
        other = Rational(other)
        if other.n == other.d:
            if other.s > 0:
                # Follows from an identity between gcr and lcr
                return Rational(1) if self.is_unity() else None
            if self.n == self.d:
                return Rational(0) if self.s > 0 else Rational(1)
            return None
        radical = self.gcr(other, max_iter, config)
        if radical is None:
            return None

        n, d = self._radical_exponents(other, radical)

        if other.s < 0:
            if d % 2 == 0:
                return None
            if n % 2:
                if self.s > 0:
                    return None
            elif self.s < 0:
                return None
        elif self.s < 0:
            return None

        return Rational(n, d)

    def lcr(
        self,
        other: RationalValue,
        max_iter: Optional[int] = None,
        config: Optional[Config] = None,
    ) -> Optional[Rational]:
        """
        Least common radicand, if it exists.

        Unity if either input is unity. Subunitary if exactly one of the
        inputs is subunitary, superunitary otherwise.

        Example:
            >>> Rational(8).lcr(4)
            Rational(64, 1)
        """
        other = Rational(other)
        radical = self.gcr(other, max_iter, config)
        if radical is None:
            return None
        if radical.is_unity():
            return Rational(1)
        n, d = self._radical_exponents(other, radical)
        return radical.pow(n * d)

    def geo_round_to(self, other: RationalValue) -> Optional[Rational]:
        """
        Round to the nearest integer power of another rational number.

        A negative value needs a negative base raised to an odd power.

        Examples:
            >>> Rational('5/4').geo_round_to('9/8')
            Rational(81, 64)
            >>> Rational('10/7').geo_round_to('-9/8')
            Rational(6561, 4096)
            >>> Rational('-5/4').geo_round_to('9/8') is None
            True

        Raises:
            DomainError: If other is zero.
            FractionOverflowError: If the nearest power exceeds the ceiling.
        """
        other = Rational(other)
        if not self.s:
            return self
        if not other.s:
            raise DomainError('Cannot round to a power of zero')
        if other.n == other.d:
            if self.s < 0:
                return Rational(-1) if other.s < 0 else None
            return Rational(1)

        exponent = _log_ratio(self.n, self.d) / _log_ratio(other.n, other.d)
        if self.s < 0:
            if other.s > 0:
                return None
            rounded = _round_half_up((exponent + 1) * 0.5) * 2 - 1
        elif other.s < 0:
            rounded = _round_half_up(exponent * 0.5) * 2
        else:
            rounded = _round_half_up(exponent)
        return other._integer_power(rounded)

    # ------------------------------------------------------------------
    # Continued fractions
    # ------------------------------------------------------------------

    def to_continued(self, max_length: Optional[int] = None, config: Optional[Config] = None) -> list[int]:
        """
        Continued fraction coefficients of the absolute value.

        Of the two valid expansions the shorter one is returned. At most
        max_length (default Config.max_continued_length) terms are produced.

        Example:
            >>> Rational('7/8').to_continued()
            [0, 1, 7]
        """
        if max_length is None:
            max_length = (config or DEFAULT_CONFIG).max_continued_length
        result = []
        a, b = self.n, self.d
        for _ in range(max_length):
            coefficient = a // b
            result.append(coefficient)
            a, b = b, a - coefficient * b
            if a == 1:
                break
        return result

    def simplify(self, epsilon: Optional[float] = None, config: Optional[Config] = None) -> Rational:
        """
        The first convergent within an absolute tolerance.

        Args:
            epsilon: Absolute tolerance. Defaults to Config.simplify_epsilon.
            config: Config supplying the default tolerance and the
                    continued fraction length.
        """
        if epsilon is None:
            epsilon = (config or DEFAULT_CONFIG).simplify_epsilon
        continued = self.to_continued(config=config)
        value = self.n / self.d
        for i in range(1, len(continued)):
            n, d = _fold_continued(continued[:i])
            if abs(n / d - value) <= epsilon:
                return Rational(self.s * n, d)
        return self

    def simplify_relative(self, tolerance: Optional[float] = None, config: Optional[Config] = None) -> Rational:
        """
        The first convergent within a relative tolerance measured in cents.

        Args:
            tolerance: Tolerance in cents. Defaults to Config.relative_tolerance.
            config: Config supplying the default tolerance and the
                    continued fraction length.
        """
        if tolerance is None:
            tolerance = (config or DEFAULT_CONFIG).relative_tolerance
        if not self.n:
            return self
        continued = self.to_continued(config=config)
        cents = value_to_cents(self.n / self.d)
        for i in range(1, len(continued)):
            n, d = _fold_continued(continued[:i])
            # Zero is infinitely far away in cents
            if n and abs(value_to_cents(n / d) - cents) <= tolerance:
                return Rational(self.s * n, d)
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_string(self, max_cycle_length: Optional[int] = None, config: Optional[Config] = None) -> str:
        """
        Decimal representation with a quoted repeating cycle.

        The cycle search gives up after max_cycle_length digits (default
        Config.max_cycle_length) and marks the truncated expansion with '...'.

        Examples:
            >>> Rational("100.'91823'").to_string()
            "100.'91823'"
            >>> Rational(1, 6).to_string()
            "0.1'6'"
        """
        if max_cycle_length is None:
            max_cycle_length = (config or DEFAULT_CONFIG).max_cycle_length
        result = '-' if self.s < 0 else ''
        result += str(self.n // self.d)
        remainder = self.n % self.d
        if not remainder:
            return result
        result += '.'

        digits = []
        # Position of the digit each remainder produces
        history = {remainder: 0}
        for i in range(max_cycle_length):
            remainder *= 10
            digits.append(str(remainder // self.d))
            remainder %= self.d
            if not remainder:
                return result + ''.join(digits)
            if remainder in history:
                start = history[remainder]
                decimals = ''.join(digits)
                return f"{result}{decimals[:start]}'{decimals[start:]}'"
            history[remainder] = i + 1

        logger.debug("No decimal cycle of %r within %d digits", self, max_cycle_length)
        return result + ''.join(digits) + '...'

    def to_fraction(self) -> str:
        """
        Fraction string such as '4/3', or just the numerator for integers.

        Example:
            >>> Rational("1.'3'").to_fraction()
            '4/3'
        """
        n = self.s * self.n
        if self.d == 1:
            return str(n)
        return f"{n}/{self.d}"

    def to_json(self) -> dict[str, int]:
        """Signed numerator and unsigned denominator."""
        return {'n': self.s * self.n, 'd': self.d}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Rational:
        """Inverse of to_json."""
        return cls(data)

    @staticmethod
    def object_hook(obj: dict[str, Any]) -> Any:
        """
        Revive rationals serialized by to_json. Everything else is returned as is.

        Example:
            >>> json.loads('[{"n": -5, "d": 3}, 2]', object_hook=Rational.object_hook)
            [Rational(-5, 3), 2]

        Raises:
            FractionOverflowError: If a component exceeds MAX_SAFE_INTEGER.
        """
        if len(obj) == 2:
            n = obj.get('n')
            d = obj.get('d')
            if (
                isinstance(n, int) and not isinstance(n, bool)
                and isinstance(d, int) and not isinstance(d, bool)
            ):
                return Rational({'n': n, 'd': d})
        return obj

    # ------------------------------------------------------------------
    # Python number protocol
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"Rational({self.s * self.n}, {self.d})"

    def __str__(self) -> str:
        return self.to_string()

    def __float__(self) -> float:
        return self.s * self.n / self.d

    def __int__(self) -> int:
        return int(self.as_fraction())

    def __bool__(self) -> bool:
        return bool(self.s)

    def __floor__(self) -> int:
        return (self.s * self.n) // self.d

    def __ceil__(self) -> int:
        return -((-self.s * self.n) // self.d)

    def __round__(self, ndigits: Optional[int] = None):
        if ndigits is None:
            return round(self.as_fraction())
        return Rational(round(self.as_fraction(), ndigits))

    def __hash__(self) -> int:
        return hash(self.as_fraction())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Rational):
            return self.s == other.s and self.n == other.n and self.d == other.d
        if isinstance(other, _NUMBER_TYPES):
            return self.as_fraction() == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Rational):
            return self.compare(other) < 0
        if isinstance(other, _NUMBER_TYPES):
            return self.as_fraction() < other
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, Rational):
            return self.compare(other) <= 0
        if isinstance(other, _NUMBER_TYPES):
            return self.as_fraction() <= other
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, Rational):
            return self.compare(other) > 0
        if isinstance(other, _NUMBER_TYPES):
            return self.as_fraction() > other
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, Rational):
            return self.compare(other) >= 0
        if isinstance(other, _NUMBER_TYPES):
            return self.as_fraction() >= other
        return NotImplemented

    def __neg__(self) -> Rational:
        return self.neg()

    def __pos__(self) -> Rational:
        return self

    def __abs__(self) -> Rational:
        return self.abs()

    def __add__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return Rational(other).add(self)

    def __sub__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return Rational(other).sub(self)

    def __mul__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return Rational(other).mul(self)

    def __truediv__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return Rational(other).div(self)

    def __mod__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return self.mmod(other)

    def __rmod__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return Rational(other).mmod(self)

    def __pow__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        result = self.pow(other)
        if result is None:
            raise DomainError(f"{self.to_fraction()} ** {Rational(other).to_fraction()} is irrational")
        return result

    def __rpow__(self, other: Any) -> Rational:
        if not isinstance(other, _OPERAND_TYPES):
            return NotImplemented
        return Rational(other).__pow__(self)


_NUMBER_TYPES = (int, float, Fraction)
_OPERAND_TYPES = (Rational, int, float, Fraction)


class RationalEncoder(json.JSONEncoder):
    """
    JSON encoder that serializes Rational instances with to_json.

    Example:
        >>> json.dumps([Rational(-5, 3)], cls=RationalEncoder)
        '[{"n": -5, "d": 3}]'
    """

    def default(self, o: Any) -> Any:
        if isinstance(o, Rational):
            return o.to_json()
        return super().default(o)
