from datetime import datetime

import pytest

from receiptly.services.receipt_numbers import (
    ReceiptNumberPolicy,
    format_receipt_number,
    sequence_receipt_number,
    timestamp_receipt_number,
)

NOW = datetime(2025, 9, 3, 16, 50, 12)


def test_sequence_format():
    assert sequence_receipt_number(7, now=NOW) == "RCT-2025-0007"
    assert sequence_receipt_number(12345, now=NOW) == "RCT-2025-12345"


def test_sequence_numbers_sort_with_the_counter():
    numbers = [sequence_receipt_number(n, now=NOW) for n in range(1, 50)]
    assert numbers == sorted(numbers)
    assert sequence_receipt_number(1, now=NOW) < sequence_receipt_number(2, now=NOW)


def test_sequence_needs_a_value():
    with pytest.raises(ValueError):
        format_receipt_number(ReceiptNumberPolicy.SEQUENCE, None, now=NOW)
    with pytest.raises(ValueError):
        sequence_receipt_number(-1, now=NOW)


def test_timestamp_format():
    assert timestamp_receipt_number(now=NOW) == "RCT-2509-1650"
    assert timestamp_receipt_number(now=datetime(2026, 1, 5, 7, 3)) == "RCT-2601-0703"


def test_timestamp_ignores_sequence_and_collides_within_a_minute():
    a = format_receipt_number("timestamp", 1, now=NOW)
    b = format_receipt_number("timestamp", 99, now=NOW.replace(second=59))
    assert a == b == "RCT-2509-1650"


def test_custom_prefix():
    assert sequence_receipt_number(3, now=NOW, prefix="RR") == "RR-2025-0003"


def test_unknown_policy():
    with pytest.raises(ValueError):
        format_receipt_number("random", 1, now=NOW)
