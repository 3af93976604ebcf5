# xenratio - Configuration
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

"""Iteration bounds and tolerances for xenratio."""

from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional


@dataclass
class Config:
    """
    Bounds that keep every iterative algorithm finite.

    Pass an instance as the config argument of Rational.gcr, log, lcr,
    to_continued, simplify, simplify_relative, to_string, prime_limit and
    prime_factorize. Explicit per-call arguments take precedence.

    Attributes:
        max_continued_length: Maximum number of continued fraction terms.
        max_cycle_length: Maximum number of decimal digits searched for a
                          repeating cycle before the expansion is truncated.
        max_radical_iterations: Maximum Euclidean rounds in gcr/lcr/log.
        max_prime_limit: Default largest prime considered by prime_limit.
        factorization_limit: Search limit handed to sympy.factorint for
                             cofactors beyond the prime table. None searches
                             until the factorization is complete.
        simplify_epsilon: Default absolute tolerance of Rational.simplify.
        relative_tolerance: Default tolerance of Rational.simplify_relative
                            in cents.
    """
    max_continued_length: int = 1000
    max_cycle_length: int = 128
    max_radical_iterations: int = 100
    max_prime_limit: int = 7919
    factorization_limit: Optional[int] = None
    simplify_epsilon: float = 0.001
    relative_tolerance: float = 3.5

    def __post_init__(self):
        # Tolerances are compared against floats
        if isinstance(self.simplify_epsilon, Fraction):
            self.simplify_epsilon = float(self.simplify_epsilon)
        if isinstance(self.relative_tolerance, Fraction):
            self.relative_tolerance = float(self.relative_tolerance)

        for name in (
            'max_continued_length',
            'max_cycle_length',
            'max_radical_iterations',
            'max_prime_limit',
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.factorization_limit is not None and (
            not isinstance(self.factorization_limit, int) or self.factorization_limit < 1
        ):
            raise ValueError(
                f"factorization_limit must be None or a positive integer, got {self.factorization_limit!r}"
            )
        if self.simplify_epsilon < 0 or self.relative_tolerance < 0:
            raise ValueError("Tolerances must be non-negative")

    @classmethod
    def compatible(cls) -> Config:
        """The historical bounds (default)."""
        return cls()

    @classmethod
    def extended(cls) -> Config:
        """Longer decimal cycles and expansions for high complexity values."""
        return cls(
            max_continued_length=10000,
            max_cycle_length=4096,
            max_radical_iterations=1000,
        )

    def __repr__(self) -> str:
        return (
            f"Config(max_continued_length={self.max_continued_length}, "
            f"max_cycle_length={self.max_cycle_length}, "
            f"max_radical_iterations={self.max_radical_iterations})"
        )


# Shared read-only defaults. Pass an explicit Config or argument to override.
DEFAULT_CONFIG = Config()
