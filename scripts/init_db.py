"""Create the ingredient tables, either directly or through Alembic."""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models import init_db
from models.migrations import upgrade_db

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Run Alembic migrations instead of create_all",
    )
    args = parser.parse_args()

    if args.migrate:
        upgrade_db()
    else:
        init_db()
    logger.info("Database tables are ready")


if __name__ == "__main__":
    main()
