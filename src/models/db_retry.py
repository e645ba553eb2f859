import logging
import time
from typing import Callable, TypeVar

from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_locked_message(message: str) -> bool:
    lowered = message.lower()
    return "database is locked" in lowered or "database is busy" in lowered


def is_sqlite_locked_error(exc: OperationalError) -> bool:
    message = str(getattr(exc, "orig", exc))
    return _is_locked_message(message)


def _should_retry(exc: OperationalError, attempt: int, retries: int) -> bool:
    return is_sqlite_locked_error(exc) and attempt < retries - 1


def _sleep_for_retry(delay: float, attempt: int) -> None:
    time.sleep(delay * (2 ** attempt))


def commit_with_retry(session, retries: int = 3, delay: float = 0.1) -> None:
    for attempt in range(retries):
        try:
            session.commit()
            return
        except OperationalError as exc:
            session.rollback()
            if not _should_retry(exc, attempt, retries):
                raise
            logger.warning(f"Commit hit a locked database, retrying (attempt {attempt + 1})")
            _sleep_for_retry(delay, attempt)


def read_with_retry(
    session,
    query_fn: Callable[[object], T],
    retries: int = 3,
    delay: float = 0.1,
) -> T:
    for attempt in range(retries):
        try:
            return query_fn(session)
        except OperationalError as exc:
            session.rollback()
            if not _should_retry(exc, attempt, retries):
                raise
            logger.warning(f"Read hit a locked database, retrying (attempt {attempt + 1})")
            _sleep_for_retry(delay, attempt)
    raise RuntimeError("read_with_retry exhausted without result")
