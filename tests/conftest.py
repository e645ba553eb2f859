"""Test fixtures for pipeline and API tests."""

import base64
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Callable, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker


def ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent.parent
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.append(str(src_path))


ensure_src_on_path()

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("VISION_API_KEY", "test-key")
os.environ.setdefault("LEARNER_CONCURRENCY", "2")

from api.errors import register_exception_handlers
from api.routers import additives, candidates, scan
from models import Base, ReferenceIngredient, get_db
from models.database import build_engine
from services.text_extraction import BaseTextExtractor


class FakeTextExtractor(BaseTextExtractor):
    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls = 0

    async def extract_text(self, image: bytes) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


def encode_image(data: bytes = b"\x89PNG fake label photo") -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    # File database: the learner writes from worker threads on separate connections.
    engine = build_engine(f"sqlite:///{tmp_path / 'halalscan-test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def add_reference(db_session) -> Callable[..., ReferenceIngredient]:
    def _add(name: str, status: str, description: str = "", code=None, category: str = ""):
        row = ReferenceIngredient(
            name=name,
            status=status,
            description=description,
            code=code,
            category=category,
        )
        db_session.add(row)
        db_session.commit()
        return row

    return _add


@pytest.fixture(scope="function")
def fake_extractor():
    return FakeTextExtractor()


@pytest.fixture(scope="function")
def test_app():
    @asynccontextmanager
    async def test_lifespan(app: FastAPI) -> AsyncGenerator:
        yield

    app = FastAPI(
        title="HalalScan Test",
        description="Classify food ingredient labels by halal status",
        version="0.1.0",
        lifespan=test_lifespan,
    )
    register_exception_handlers(app)

    app.include_router(scan.router, prefix="/api/v1", tags=["scan"])
    app.include_router(scan.legacy_router, prefix="/api", tags=["scan"])
    app.include_router(additives.router, prefix="/api/v1/additives", tags=["additives"])
    app.include_router(candidates.router, prefix="/api/v1/candidates", tags=["candidates"])

    @app.get("/")
    async def root():
        return {
            "name": "HalalScan",
            "version": "0.1.0",
            "status": "running",
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.fixture(scope="function")
def client(session_factory, fake_extractor, test_app: FastAPI):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    test_app.dependency_overrides[get_db] = override_get_db
    test_app.dependency_overrides[scan.get_session_factory] = lambda: session_factory
    test_app.dependency_overrides[scan.get_text_extractor] = lambda: fake_extractor
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
