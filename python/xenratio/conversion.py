# xenratio - Conversion
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

"""Conversion between multiplicative ratios and cents."""

import math


def value_to_cents(value: float) -> float:
    """
    Convert a ratio to cents.

    Example:
        >>> value_to_cents(2)
        1200.0
    """
    return 1200 * math.log2(value)


def cents_to_value(cents: float) -> float:
    """Convert cents to a ratio."""
    return 2 ** (cents / 1200)
