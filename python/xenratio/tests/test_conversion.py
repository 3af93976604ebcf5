# xenratio - Conversion Tests
# Copyright (c) 2024 xenratio Contributors. All rights reserved.

import pytest

from xenratio.conversion import cents_to_value, value_to_cents


class TestCents:
    """Tests for conversion between ratios and cents."""

    def test_octave(self):
        assert value_to_cents(2) == 1200.0
        assert cents_to_value(1200) == 2.0

    def test_fifth(self):
        assert value_to_cents(1.5) == pytest.approx(701.955, abs=1e-3)

    def test_round_trip(self):
        for cents in (-1200.0, 0.0, 3.5, 386.3137):
            assert value_to_cents(cents_to_value(cents)) == pytest.approx(cents)

    def test_non_positive(self):
        with pytest.raises(ValueError):
            value_to_cents(0)
