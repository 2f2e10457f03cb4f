# receiptly/models/__init__.py
from .receipt import ReceiptEntry, ReceiptSequence

__all__ = [
    "ReceiptEntry",
    "ReceiptSequence",
]
