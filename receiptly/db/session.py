# receiptly/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from receiptly.core.config import settings


def make_engine(db_uri: str) -> Engine:
    kwargs = {"pool_pre_ping": True, "future": True}
    if db_uri.startswith("sqlite"):
        # sessions are handed across FastAPI's worker threads
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(db_uri, **kwargs)


engine: Engine = make_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
)


def init_db(bind: Engine = engine) -> None:
    """Create missing tables. No migrations; safe to run multiple times."""
    from receiptly.db.base import Base
    from receiptly.models import receipt  # noqa: F401

    Base.metadata.create_all(bind=bind)
