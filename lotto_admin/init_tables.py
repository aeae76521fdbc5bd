# lotto_admin/init_tables.py
import logging

from lotto_admin.core.config import settings
from lotto_admin.core.logging_config import configure_logging
from lotto_admin.db.session import engine
from lotto_admin.db.base_class import Base
from lotto_admin.models import lotto, user  # noqa: F401  register models on Base.metadata

logger = logging.getLogger(__name__)


def init_db(bind=None):
    # Only creates missing tables; existing tables are left untouched
    Base.metadata.create_all(bind=bind or engine)


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    logger.info("Creating database tables...")
    init_db()
    logger.info("Tables created")
