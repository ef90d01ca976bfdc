# backend/app/core/logging.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL statements are controlled by DATABASE_ECHO, keep the engine logger quiet
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
