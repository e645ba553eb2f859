from contextlib import contextmanager
from typing import Callable, Optional

from sqlalchemy.orm import Session

from models.database import SessionLocal, init_db
from models.db_retry import commit_with_retry

SessionFactory = Callable[[], Session]

_initialized = False


def _ensure_initialized() -> None:
    global _initialized
    if not _initialized:
        init_db()
        _initialized = True


def _factory(session_factory: Optional[SessionFactory]) -> SessionFactory:
    if session_factory is None:
        _ensure_initialized()
        return SessionLocal
    return session_factory


@contextmanager
def store_session(write: bool = False, session_factory: Optional[SessionFactory] = None):
    """Open a session from ``session_factory`` (the app's by default), committing on exit when ``write``."""
    db = _factory(session_factory)()
    try:
        yield db
        if write:
            commit_with_retry(db)
    except Exception:
        if write:
            db.rollback()
        raise
    finally:
        db.close()
