import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from common.config.settings import settings

# === File output path ===
BASE_LOG_DIR = Path(__file__).resolve().parent.parent.parent / "logs"
LOG_FORMAT = '[%(asctime)s] %(levelname)s | %(name)s | %(message)s | context=%(context)s'

# === Colors for terminal logs ===
COLOR_MAP = {
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[92m",  # Green
    "WARNING": "\033[93m",  # Yellow
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[95m",  # Magenta
    "ENDC": "\033[0m"
}


class SafeFormatter(logging.Formatter):
    def format(self, record):
        if not hasattr(record, "context"):
            record.context = {}
        return super().format(record)


class ColorFormatter(SafeFormatter):
    def format(self, record):
        levelname = record.levelname
        color = COLOR_MAP.get(levelname, "")
        record.levelname = f"{color}{levelname}{COLOR_MAP['ENDC']}"
        try:
            return super().format(record)
        finally:
            # other handlers share the same record
            record.levelname = levelname


def _build_logger() -> logging.Logger:
    built = logging.getLogger("mulluk")
    built.setLevel(logging.DEBUG if settings.ENVIRONMENT == "development" else logging.INFO)
    built.propagate = False

    if built.handlers:
        return built

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    built.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        BASE_LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = BASE_LOG_DIR / f"mulluk_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(SafeFormatter(LOG_FORMAT))
        built.addHandler(file_handler)

    return built


logger = _build_logger()


# === Public Logging Functions ===
def _extra_context(extra: Optional[dict] = None):
    return {"context": extra or {}}


def log_info(message: str, extra: Optional[dict] = None):
    logger.info(message, extra=_extra_context(extra))


def log_warning(message: str, extra: Optional[dict] = None):
    logger.warning(message, extra=_extra_context(extra))


def log_error(message: str, extra: Optional[dict] = None, exc_info: bool = False):
    logger.error(message, extra=_extra_context(extra), exc_info=exc_info)
