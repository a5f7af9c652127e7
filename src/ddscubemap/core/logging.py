"""Logging setup for ddscubemap."""

import logging
import logging.handlers
import os
import threading
from typing import Optional

logger = logging.getLogger("ddscubemap")

# 10 MB max per log file, keep 3 rotated backups
_LOG_MAX_BYTES = 10 * 1024 * 1024
_LOG_BACKUP_COUNT = 3
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_setup_lock = threading.Lock()


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Configure console (and optional rotating file) logging.

    A bare process, such as the CLI, gets root handlers with the package
    format. When a host application already configured the root logger,
    only the ``ddscubemap`` logger is adjusted.
    """
    with _setup_lock:
        _setup_logging_impl(level, log_file)


def _setup_logging_impl(level: str, log_file: Optional[str]):
    handlers = [logging.StreamHandler()]
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file, maxBytes=_LOG_MAX_BYTES, backupCount=_LOG_BACKUP_COUNT,
            encoding="utf-8",
        ))
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Warning: Invalid log level '{level}', defaulting to INFO")
        numeric_level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=numeric_level,
            format=_LOG_FORMAT,
            handlers=handlers,
        )
        # Keep the package logger in step if an earlier call narrowed it.
        logger.setLevel(numeric_level)
        return

    # Embedded mode: only touch the ddscubemap logger hierarchy so we
    # don't affect unrelated libraries that share the root logger.
    logger.setLevel(numeric_level)
    if log_file:
        existing_files = {
            getattr(h, "baseFilename", None)
            for h in logger.handlers
            if isinstance(h, logging.FileHandler)
        }
        file_handler = handlers[1]
        if file_handler.baseFilename not in existing_files:
            logger.info("Adding file handler: %s", file_handler.baseFilename)
            file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
            logger.addHandler(file_handler)
        else:
            file_handler.close()
