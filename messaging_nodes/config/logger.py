import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from datetime import datetime, timezone

from messaging_nodes.config.settings import settings

# --- Configuration ---
LOG_FILE_NAME = "app.log"
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 5


# --- Formatters ---
class UTCFormatter(logging.Formatter):
    """Custom formatter that enforces UTC timestamps."""

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.strftime(datefmt) if datefmt else dt.isoformat()


formatter = UTCFormatter(
    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S %Z",
)


# --- Root Logger Setup ---
def setup_logging(log_dir: str | None = None, level: str | None = None) -> None:
    log_dir = log_dir or settings.log_dir
    level = (level or settings.log_level).upper()
    os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE_NAME),
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        handlers=[file_handler, console_handler],
    )

    def handle_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logging.critical(
            "Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = handle_exception

    # aiohttp access/client chatter
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("aiohttp.client").setLevel(logging.WARNING)
