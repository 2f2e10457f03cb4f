import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from receiptly.api.deps import get_db
from receiptly.db.session import init_db
from receiptly.main import app


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine, autoflush=False, future=True)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    Session = sessionmaker(bind=engine, autoflush=False, future=True)

    def _get_db():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def signature_png():
    from io import BytesIO

    from PIL import Image, ImageDraw

    im = Image.new("RGBA", (400, 120), (0, 0, 0, 0))
    ImageDraw.Draw(im).line([(10, 100), (150, 20), (390, 90)], fill=(0, 0, 0, 255), width=4)
    buf = BytesIO()
    im.save(buf, format="PNG")
    return buf.getvalue()
