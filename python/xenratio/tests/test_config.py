# xenratio - Configuration Tests
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

"""
Tests for the configuration module and the bounds it feeds into the
iterative algorithms.
"""

import math
import pytest
from fractions import Fraction

from xenratio.config import Config, DEFAULT_CONFIG
from xenratio.monzo import prime_limit
from xenratio.rational import Rational


class TestConfig:
    """Tests for Config."""

    def test_default_values(self):
        """Test default configuration values."""
        cfg = Config()
        assert cfg.max_continued_length == 1000
        assert cfg.max_cycle_length == 128
        assert cfg.max_radical_iterations == 100
        assert cfg.max_prime_limit == 7919
        assert cfg.factorization_limit is None
        assert cfg.simplify_epsilon == 0.001
        assert cfg.relative_tolerance == 3.5

    def test_compatible_preset(self):
        """Test that the compatible preset matches the defaults."""
        assert Config.compatible() == Config()

    def test_extended_preset(self):
        """Test extended preset."""
        cfg = Config.extended()
        assert cfg.max_continued_length == 10000
        assert cfg.max_cycle_length == 4096
        assert cfg.max_radical_iterations == 1000

    def test_fraction_tolerances_are_converted(self):
        """Test that Fraction tolerances become floats."""
        cfg = Config(simplify_epsilon=Fraction(1, 100), relative_tolerance=Fraction(7, 2))
        assert cfg.simplify_epsilon == 0.01
        assert isinstance(cfg.relative_tolerance, float)
        assert cfg.relative_tolerance == 3.5

    @pytest.mark.parametrize('field', [
        'max_continued_length',
        'max_cycle_length',
        'max_radical_iterations',
        'max_prime_limit',
        'factorization_limit',
    ])
    def test_invalid_bounds(self, field):
        """Test that non-positive bounds are rejected."""
        with pytest.raises(ValueError, match=field):
            Config(**{field: 0})

    def test_invalid_tolerance(self):
        """Test that negative tolerances are rejected."""
        with pytest.raises(ValueError):
            Config(simplify_epsilon=-1)

    def test_repr(self):
        """Test string representation."""
        r = repr(Config())
        assert 'max_continued_length=1000' in r
        assert 'max_cycle_length=128' in r

    def test_default_config(self):
        """Test that the shared defaults are the default values."""
        assert DEFAULT_CONFIG == Config()


class TestConfigBounds:
    """Tests that the configured bounds reach the algorithms."""

    def test_cycle_length(self):
        cfg = Config.extended()
        text = Rational(1, 257).to_string(cfg.max_cycle_length)
        assert text.endswith("'")
        assert Rational(1, 257).to_string().endswith('...')

    def test_continued_length(self):
        cfg = Config(max_continued_length=4)
        assert len(Rational(89, 55).to_continued(cfg.max_continued_length)) == 4

    def test_radical_iterations(self):
        cfg = Config(max_radical_iterations=1)
        assert Rational(1024, 243).gcr('27/64', cfg.max_radical_iterations) is None
        assert Rational(1024, 243).gcr('27/64') == Rational(4, 3)

    def test_config_argument(self):
        extended = Config.extended()
        assert Rational(1, 257).to_string(config=extended).endswith("'")
        short = Config(max_continued_length=4)
        assert Rational(89, 55).to_continued(config=short) == [1, 1, 1, 1]

    def test_config_reaches_radicals(self):
        cfg = Config(max_radical_iterations=1)
        assert Rational(1024, 243).gcr('27/64', config=cfg) is None
        assert Rational(1024, 243).log('27/64', config=cfg) is None
        assert Rational(1024, 243).lcr('27/64', config=cfg) is None
        assert Rational(1024, 243).log('27/64') == Rational(-5, 3)

    def test_config_reaches_simplify(self):
        loose = Config(simplify_epsilon=0.01, relative_tolerance=50.0)
        assert Rational(math.pi).simplify(config=loose) == Rational(22, 7)
        assert Rational(math.pi).simplify_relative(config=loose) == Rational(22, 7)

    def test_config_reaches_prime_limit(self):
        cfg = Config(max_prime_limit=97)
        assert prime_limit(123456789, config=cfg) == math.inf
        assert prime_limit(45, config=cfg) == 5

    def test_explicit_argument_wins(self):
        cfg = Config(max_continued_length=2)
        assert Rational(89, 55).to_continued(3, config=cfg) == [1, 1, 1]
        assert Rational(1, 257).to_string(4096, config=Config()).endswith("'")
