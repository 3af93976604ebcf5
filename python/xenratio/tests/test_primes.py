# xenratio - Prime Tests
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

"""
Tests for the prime tables, primality testing and factorization.
"""

import logging

import pytest

from xenratio import primes
from xenratio.config import Config
from xenratio.primes import (
    LOG_PRIMES,
    PRIMES,
    SEVEN_SMOOTH_TABLE,
    factorize_integer,
    is_prime,
    nth_prime,
    prime_factorize,
    prime_range,
    strip_seven_smooth,
)
from xenratio.rational import Rational
from xenratio.exceptions import DomainError, FactorizationError


def naive_is_prime(n):
    if n < 2:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


class TestPrimeTable:
    """Tests for PRIMES and LOG_PRIMES."""

    def test_has_no_gaps(self):
        assert PRIMES[0] == 2
        assert list(PRIMES) == [n for n in range(2, 7920) if naive_is_prime(n)]

    def test_size(self):
        assert len(PRIMES) == 1000
        assert PRIMES[-1] == 7919

    def test_log_primes(self):
        assert len(LOG_PRIMES) == len(PRIMES)
        assert LOG_PRIMES[0] == pytest.approx(0.6931471805599453)


class TestSevenSmoothTable:
    """Tests for the 315-residue lookup table."""

    def test_entries(self):
        assert len(SEVEN_SMOOTH_TABLE) == 315
        assert SEVEN_SMOOTH_TABLE[0] == (315, (2, 1, 1))
        assert SEVEN_SMOOTH_TABLE[1] == (1, (0, 0, 0))
        assert SEVEN_SMOOTH_TABLE[9] == (9, (2, 0, 0))
        assert SEVEN_SMOOTH_TABLE[35] == (35, (0, 1, 1))

    def test_divisor_matches_exponents(self):
        for divisor, (e3, e5, e7) in SEVEN_SMOOTH_TABLE:
            assert divisor == 3 ** e3 * 5 ** e5 * 7 ** e7

    def test_strip(self):
        assert strip_seven_smooth(2 * 3 ** 4 * 5 * 7 ** 2 * 11) == (4, 1, 2, 22)
        assert strip_seven_smooth(1) == (0, 0, 0, 1)

    def test_matches_trial_division(self):
        for n in range(1, 5000):
            expected = []
            rest = n
            for prime in (3, 5, 7):
                exponent = 0
                while rest % prime == 0:
                    rest //= prime
                    exponent += 1
                expected.append(exponent)
            assert strip_seven_smooth(n) == (*expected, rest), f"failed with {n}"

    def test_rejects_zero(self):
        with pytest.raises(DomainError):
            strip_seven_smooth(0)


class TestPrimality:
    """Tests for is_prime, nth_prime and prime_range."""

    def test_small_numbers(self):
        for n in range(-5, 20000):
            assert is_prime(n) == naive_is_prime(n), f"failed with {n}"

    def test_large_primes(self):
        assert is_prime(2 ** 61 - 1)
        assert is_prime(1000000007)
        assert not is_prime(1000000007 * 998244353)

    def test_strong_pseudoprime(self):
        # Strong pseudoprime to every base from 2 through 31
        assert not is_prime(3825123056546413051)

    def test_nth_prime(self):
        assert nth_prime(1) == 2
        assert nth_prime(1000) == 7919
        assert nth_prime(1001) == 7927
        with pytest.raises(DomainError):
            nth_prime(0)

    def test_prime_range(self):
        assert prime_range(10, 30) == [11, 13, 17, 19, 23, 29]
        assert prime_range(7900, 7960) == [7901, 7907, 7919, 7927, 7933, 7937, 7949, 7951]
        assert prime_range(20, 20) == []


class TestPrimeFactorize:
    """Tests for prime_factorize."""

    def test_integer(self):
        assert prime_factorize(360) == {2: 3, 3: 2, 5: 1}

    def test_special_values(self):
        assert prime_factorize(0) == {0: 1}
        assert prime_factorize(1) == {}
        assert prime_factorize(-1) == {-1: 1}

    def test_rational(self):
        assert prime_factorize('-10/9') == {-1: 1, 2: 1, 3: -2, 5: 1}
        assert prime_factorize(Rational(1029, 1024)) == {2: -10, 3: 1, 7: 3}

    def test_large_prime_factors(self):
        n = 1000000007 * 998244353
        assert prime_factorize(n) == {998244353: 1, 1000000007: 1}

    def test_repeated_large_factor(self):
        p = 2 ** 31 - 1
        assert prime_factorize(12 * p ** 3) == {2: 2, 3: 1, p: 3}

    def test_mersenne_number(self):
        # 2**67 - 1 = 193707721 * 761838257287
        assert prime_factorize(2 ** 67 - 1) == {193707721: 1, 761838257287: 1}

    def test_product_reconstructs_value(self):
        for n in (2 ** 64 + 1, 10 ** 18 + 9, 600851475143, 3 ** 40 - 1):
            product = 1
            for prime, exponent in prime_factorize(n).items():
                assert is_prime(prime)
                product *= prime ** exponent
            assert product == n

    def test_factorize_integer_rejects_non_positive(self):
        with pytest.raises(DomainError):
            factorize_integer(0)

    def test_search_limit_reaches_factorint(self, monkeypatch):
        limits = []

        def recording_factorint(n, **kwargs):
            limits.append(kwargs['limit'])
            return {998244353: 1, 1000000007: 1}

        monkeypatch.setattr(primes, 'factorint', recording_factorint)
        n = 1000000007 * 998244353
        assert factorize_integer(n, Config(factorization_limit=12345)) == {998244353: 1, 1000000007: 1}
        assert factorize_integer(n) == {998244353: 1, 1000000007: 1}
        assert limits == [12345, None]

    def test_composite_cofactor_is_reported(self, monkeypatch):
        # A limited search hands back the cofactor unsplit
        monkeypatch.setattr(primes, 'factorint', lambda n, **kwargs: {n: 1})
        n = 1000000007 * 998244353
        with pytest.raises(FactorizationError) as info:
            prime_factorize(6 * n, Config(factorization_limit=10000))
        assert info.value.value == n
        assert info.value.limit == 10000

    def test_table_primes_skip_factorint(self, monkeypatch):
        def unreachable(n, **kwargs):
            raise AssertionError(f"factorint called with {n}")

        monkeypatch.setattr(primes, 'factorint', unreachable)
        assert prime_factorize(2 ** 5 * 7919 ** 2 * 7907) == {2: 5, 7907: 1, 7919: 2}
        # Residues below 7919**2 without table factors are prime
        assert prime_factorize(33 * 1000003) == {3: 1, 11: 1, 1000003: 1}

    def test_cofactor_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='xenratio.primes'):
            assert prime_factorize(2 ** 67 - 1) == {193707721: 1, 761838257287: 1}
        assert caplog.records
        assert 'beyond the prime table' in caplog.records[0].getMessage()
