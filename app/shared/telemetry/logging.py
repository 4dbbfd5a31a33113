"""Process-wide logging setup: stdout, one line per record, tagged with the request ID."""

import logging
import sys

from app.core.config import get_settings
from app.shared.context import RequestIdLogFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def setup_logging() -> None:
    """Configure the root logger (DEBUG when settings.debug, else INFO).

    Records logged outside a request carry ``-`` as their request ID.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdLogFilter())
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[handler],
    )
    # SQL echo is controlled by database_echo, not by the app log level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
