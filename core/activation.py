# core/activation.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from core.sa.database import Database
from core.sa.models import BookMeta

logger = logging.getLogger(__name__)


def activate(database: Database) -> bool:
    """Create the schema, including the book_meta side table.

    Safe to call repeatedly: existing tables are left untouched. Failures are
    logged, not raised. Returns whether the side table exists afterwards.
    """
    table_name = BookMeta.__tablename__
    try:
        database.init_db()
    except SQLAlchemyError as e:
        logger.error("Error creating tables: %s", e)

    try:
        exists = database.has_table(table_name)
    except SQLAlchemyError as e:
        logger.error("Error checking for %s: %s", table_name, e)
        return False

    if not exists:
        logger.error("Error: The %s table could not be created.", table_name)
    else:
        logger.info("Activation complete, %s is present", table_name)
    return exists
