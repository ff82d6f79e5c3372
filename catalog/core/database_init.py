"""Database initialization - runs on backend startup."""
import logging

from sqlalchemy.exc import SQLAlchemyError

from catalog.infrastructure.persistence import models  # noqa: F401  registers tables on Base
from catalog.infrastructure.persistence.db import Base, engine

logger = logging.getLogger(__name__)


def initialize_database(bind=None) -> bool:
    """Create any missing catalog tables.

    Existing tables are left untouched, so this is safe to run on every start.
    """
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database schema initialized successfully")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Error initializing database: {e}")
        return False
