import logging
import sys
from typing import Optional

LOGGER_NAME = "soundcloud"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure console (and optional file) logging for the app and the client library.

    Safe to call more than once; earlier handlers are replaced.
    """

    numeric_level = getattr(logging, str(level or "INFO").upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    handlers: list[logging.Handler] = []

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    handlers.append(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in (LOGGER_NAME, "soundcloud_api"):
        target = logging.getLogger(name)
        for old in list(target.handlers):
            target.removeHandler(old)
            old.close()
        for handler in handlers:
            target.addHandler(handler)
        target.setLevel(numeric_level)
        target.propagate = False

    return logger


def log_info(message: str) -> None:
    logger.info(message)


def log_success(message: str) -> None:
    logger.info(f"✅ {message}")


def log_warning(message: str) -> None:
    logger.warning(f"⚠️ {message}")


def log_error(message: str) -> None:
    logger.error(f"❌ {message}")


def apply_logging_config(config: dict) -> logging.Logger:
    """(Re)apply log_level / log_file from config."""
    return setup_logging(config.get("log_level", "INFO"), config.get("log_file") or None)
