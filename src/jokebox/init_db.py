"""Create the schema directly from the ORM metadata.

Alembic migrations are the normal path; this is for throwaway local databases.
"""

import argparse
import logging

from jokebox.core.logging import configure_logging
from jokebox.core.settings import settings
from jokebox.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def init_db(*, reset: bool = False) -> None:
    """Initialize the database by creating all tables, optionally dropping them first."""
    if reset:
        drop_tables()
        logger.warning("Dropped all tables at %s", settings.effective_database_url)
    create_tables()
    logger.info("Database initialized at %s", settings.effective_database_url)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the jokebox tables.")
    parser.add_argument("--reset", action="store_true", help="drop existing tables first")
    configure_logging(settings)
    init_db(reset=parser.parse_args().reset)
