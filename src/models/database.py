from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings


class Base(DeclarativeBase):
    pass


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite://")


def is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def sqlite_connect_args(url: str) -> dict:
    if not is_sqlite_url(url):
        return {}
    return {"check_same_thread": False, "timeout": 30}


def apply_sqlite_pragmas(connection) -> None:
    cursor = connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def _engine_args(url: str) -> dict:
    args = {
        "connect_args": sqlite_connect_args(url),
        "echo": settings.debug,
    }
    if is_memory_url(url):
        args["poolclass"] = StaticPool
    return args


def _on_connect(dbapi_connection, _):
    apply_sqlite_pragmas(dbapi_connection)


def build_engine(url: str):
    built = create_engine(url, **_engine_args(url))
    if is_sqlite_url(url) and not is_memory_url(url):
        event.listen(built, "connect", _on_connect)
    return built


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    from models import domain  # noqa: F401

    Base.metadata.create_all(bind=engine)
