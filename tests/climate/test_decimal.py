"""Tests for exact decimal conversion."""

import pytest

from worldgen.climate import decimal_to_fixed
from worldgen.exceptions import DecimalFormatError


class TestDecimalToFixed:
    """Tests for decimal_to_fixed."""

    @pytest.mark.parametrize(
        "text,precision,expected",
        [
            ("0.0", 1, 0),
            ("0", 1, 0),
            ("5", 7, 50000000),
            ("7.5", 0, 7),
            ("-1.2", 1, -12),
            ("-1.2", 4, -12000),
            ("3.05", 4, 30500),
            ("0.7", 4, 7000),
            ("2.5354", 4, 25354),
            ("-0.45", 4, -4500),
            ("0.0001", 3, 0),
            ("0.0001", 4, 1),
            ("+0.55", 4, 5500),
            ("1.23456", 4, 12345),
        ],
    )
    def test_conversion(self, text, precision, expected) -> None:
        assert decimal_to_fixed(text, precision) == expected

    def test_default_precision(self) -> None:
        assert decimal_to_fixed("0.55") == 5500

    @pytest.mark.parametrize("text", ["a20.6", "20.a6", "20.6x", "", "-", "1e-3", ".5"])
    def test_invalid(self, text) -> None:
        with pytest.raises(DecimalFormatError, match="Invalid decimal literal"):
            decimal_to_fixed(text)
