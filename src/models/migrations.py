from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.util.exc import CommandError

logger = logging.getLogger(__name__)

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def upgrade_db(revision: str = "head") -> None:
    config = Config(str(ALEMBIC_INI))
    logger.info(f"Upgrading ingredient database to revision {revision}")
    try:
        command.upgrade(config, revision)
    except CommandError as exc:
        message = (
            "Ingredient database migration failed. "
            "The database may be stamped with a revision that is missing in this repo. "
            f"Original error: {exc}"
        )
        raise RuntimeError(message) from exc
