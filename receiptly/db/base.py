# receiptly/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Receipt history + sequence tables inherit from this."""
    pass
