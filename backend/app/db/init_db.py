"""
Create the journal tables: python -m app.db.init_db
"""
import logging
from app.core.config import settings
from app.db.session import init_db

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.info("Creating tables...")
    tables = init_db()
    logger.info(f"Tables ready: {', '.join(tables)}")
