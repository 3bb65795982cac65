import logging
import sys
from .config import settings


LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)


def setup_logging() -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

    # Clear and re-add to avoid duplicate handlers with reload
    root.handlers = []
    root.addHandler(handler)

    # SQL echo is noisy at DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
