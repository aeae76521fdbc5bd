"""Logging configuration."""

import logging


def configure_logging(level_name: str = "INFO") -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    # SQL echo is far too chatty for report endpoints
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
