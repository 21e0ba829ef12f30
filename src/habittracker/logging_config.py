"""Console and rotating JSON-file logging for the ``habittracker`` logger tree."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path

from .config import BaseConfig

LOGGER_NAME = "habittracker"
LOG_FILENAME = "habittracker.log"

# ``extra=`` keys copied into the JSON line; anything else is ignored.
CONTEXT_FIELDS = ("habit_id", "category_id", "operation", "database_url")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, carrying the record identifiers it was logged with."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach a console handler and a rotating JSON file handler.

    The file lives at ``<DATA_DIR>/logs/habittracker.log``. Calling this
    again replaces the handlers instead of stacking them.
    """
    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if config.DEV_MODE else logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%H:%M:%S")
    )
    logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=logs_dir / LOG_FILENAME,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(JSONFormatter())
    logger.addHandler(file_handler)

    logger.info("Logging initialized")
    return logger
