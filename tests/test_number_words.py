from decimal import Decimal

import pytest

from receiptly.services.number_words import (
    MAX_SUPPORTED,
    AmountOutOfRangeError,
    words_of,
)


@pytest.mark.parametrize("n, words", [
    (0, "Zero"),
    (7, "Seven"),
    (15, "Fifteen"),
    (40, "Forty"),
    (99, "Ninety Nine"),
    (100, "One Hundred"),
    (305, "Three Hundred Five"),
    (1000, "One Thousand"),
    (50000, "Fifty Thousand"),
    (100000, "One Lakh"),
    (1500000, "Fifteen Lakh"),
    (10000000, "One Crore"),
    (100000000, "Ten Crore"),
    (123456789, "Twelve Crore Thirty Four Lakh Fifty Six Thousand Seven Hundred Eighty Nine"),
])
def test_indian_grouping(n, words):
    assert words_of(n) == words


def test_strings_and_decimals_use_integer_part():
    assert words_of("50000") == "Fifty Thousand"
    assert words_of("2,50,000") == "Two Lakh Fifty Thousand"
    assert words_of("1250.99") == "One Thousand Two Hundred Fifty"
    assert words_of(Decimal("999.5")) == "Nine Hundred Ninety Nine"


@pytest.mark.parametrize("junk", [None, "", "   ", "abc", "NaN"])
def test_non_numeric_is_zero(junk):
    assert words_of(junk) == "Zero"


def test_largest_supported_amount():
    assert words_of(9_999_999_999).startswith("Nine Hundred Ninety Nine Crore")


def test_out_of_range_fails_loudly():
    with pytest.raises(AmountOutOfRangeError):
        words_of(10_000_000_000)
    with pytest.raises(AmountOutOfRangeError):
        words_of(-5)


@pytest.mark.parametrize("amount", ["1e999999999", "-1e999999999", "9" * 5000, 10 ** 5000],
                         ids=["exponent", "negative-exponent", "long-string", "long-int"])
def test_huge_amounts_rejected_before_conversion(amount):
    with pytest.raises(AmountOutOfRangeError) as ei:
        words_of(amount)
    assert str(MAX_SUPPORTED) in str(ei.value)


def test_exponent_forms_inside_range():
    assert words_of("5e4") == "Fifty Thousand"
    assert words_of("Infinity") == "Zero"
