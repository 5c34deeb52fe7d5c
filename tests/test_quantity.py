"""
Tests for resource quantity parsing.
"""

from decimal import Decimal

import pytest

from podset_equality.model.quantity import Quantity, QuantityError, parse_resource_list


class TestQuantityParse:
    """Parsing quantity strings to exact values."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1", Decimal("1")),
            ("100m", Decimal("0.1")),
            ("2500m", Decimal("2.5")),
            ("1.5", Decimal("1.5")),
            ("128Mi", Decimal(128 * 1024**2)),
            ("1Gi", Decimal(1024**3)),
            ("1.5Gi", Decimal(1536 * 1024**2)),
            ("512M", Decimal(512 * 10**6)),
            ("1k", Decimal(1000)),
            ("1E", Decimal(10**18)),
            ("1e3", Decimal(1000)),
            ("5E-1", Decimal("0.5")),
            ("250u", Decimal("0.00025")),
            ("10n", Decimal("0.00000001")),
            (".5", Decimal("0.5")),
            ("+2", Decimal(2)),
            ("-1", Decimal(-1)),
        ],
    )
    def test_values(self, text, expected):
        assert Quantity.parse(text).value == expected

    def test_plain_numbers_from_yaml(self):
        assert Quantity.parse(2) == Quantity.parse("2")
        assert Quantity.parse(0.5) == Quantity.parse("500m")

    def test_exponent_out_of_range(self):
        with pytest.raises(QuantityError):
            Quantity.parse("1e9999999999999999999")

    @pytest.mark.parametrize("text", ["", "abc", "1Xi", "1.2.3", "Mi", "1 Gi", "1e"])
    def test_invalid(self, text):
        with pytest.raises(QuantityError):
            Quantity.parse(text)

    def test_bool_rejected(self):
        with pytest.raises(QuantityError):
            Quantity.parse(True)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError, match="Invalid resource quantity"):
            Quantity.parse("lots")


class TestQuantityEquality:
    """Quantities compare by value, not spelling."""

    def test_equal_across_units(self):
        assert Quantity.parse("1") == Quantity.parse("1000m")
        assert Quantity.parse("1Gi") == Quantity.parse("1024Mi")
        assert Quantity.parse("1k") == Quantity.parse("1e3")

    def test_not_float_approximation(self):
        assert Quantity.parse("0.1") != Quantity.parse("100000001n")

    def test_long_values_stay_exact(self):
        a = Quantity.parse("12345678901234567890.000000001")
        b = Quantity.parse("12345678901234567890.000000002")
        assert a != b
        assert Quantity.parse("99999999999999999999999999999") != Quantity.parse("100000000000000000000000000000")

    def test_long_values_with_suffix_stay_exact(self):
        a = Quantity.parse("1234567890123456789012345678901Ei")
        b = Quantity.parse("1234567890123456789012345678902Ei")
        assert a != b
        assert a.value == Decimal(1234567890123456789012345678901 * 2**60)
        assert Quantity.parse("1000000000000000000000000000001k").value == Decimal("1000000000000000000000000000001000")

    @pytest.mark.parametrize(
        "text,expected",
        [("0.5n", "1n"), ("1.1n", "2n"), ("0.0000000001", "1n"), ("-0.5n", "-1n")],
    )
    def test_finer_than_nano_rounds_up(self, text, expected):
        assert Quantity.parse(text) == Quantity.parse(expected)

    def test_zero_below_nano_stays_zero(self):
        assert Quantity.parse("0e-20") == Quantity.parse("0")

    def test_hash_follows_value(self):
        assert len({Quantity.parse("1"), Quantity.parse("1000m")}) == 1

    def test_str_keeps_raw(self):
        assert str(Quantity.parse("250m")) == "250m"


class TestParseResourceList:
    """ResourceList parsing."""

    def test_none_is_empty(self):
        assert parse_resource_list(None) == {}

    def test_parses_each_entry(self):
        result = parse_resource_list({"cpu": "1", "memory": "1Gi", "nvidia.com/gpu": 1})
        assert result == {
            "cpu": Quantity.parse("1000m"),
            "memory": Quantity.parse("1024Mi"),
            "nvidia.com/gpu": Quantity.parse("1"),
        }

    def test_not_a_mapping(self):
        with pytest.raises(QuantityError):
            parse_resource_list(["cpu"])
