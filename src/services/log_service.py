"""Logging configuration for the console output provider."""

import logging
import os
import sys
import time
from logging.handlers import TimedRotatingFileHandler

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

DEFAULT_MAX_BYTES = 1024 * 1024  # 1 MB
DEFAULT_BACKUP_COUNT = 3


class ProviderLogFileHandler(TimedRotatingFileHandler):
    """Status log file rotated at midnight or when it would outgrow max_bytes.

    The file is opened lazily so a run that never logs leaves no file
    behind. The size check counts the pending record, so a rotated file
    never exceeds max_bytes unless a single record does.
    """

    def __init__(
        self,
        filename: str,
        max_bytes: int = DEFAULT_MAX_BYTES,
        backup_count: int = DEFAULT_BACKUP_COUNT,
        when: str = "midnight",
        encoding: str = "utf-8",
    ):
        if max_bytes < 0:
            raise ValueError("max_bytes must be non-negative")
        self.max_bytes = max_bytes
        super().__init__(
            filename,
            when=when,
            backupCount=backup_count,
            encoding=encoding,
            delay=True,
        )

    def shouldRollover(self, record) -> bool:
        if int(time.time()) >= self.rolloverAt:
            return True
        return self._would_exceed_size(record)

    def doRollover(self):
        super().doRollover()
        # Size rollovers happen mid-interval; keep the next midnight boundary
        self.rolloverAt = self.computeRollover(int(time.time()))

    def _would_exceed_size(self, record) -> bool:
        if self.max_bytes <= 0:
            return False
        if self.stream is None:
            self.stream = self._open()
        self.stream.seek(0, os.SEEK_END)
        size = self.stream.tell()
        if size == 0:
            return False
        text = self.format(record) + self.terminator
        pending = len(text.encode(self.encoding or "utf-8"))
        return size + pending > self.max_bytes


def configure_logging(
    level: int = logging.INFO,
    log_dir: str | None = None,
    log_file: str = "console-output.log",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """Configure root logger for status output.

    Status lines always go to stderr; stdout is reserved for formatted
    envelopes.

    Args:
        level: Logging level.
        log_dir: Directory for a rotating log file. No file when None.
        log_file: Log file name inside log_dir.
        max_bytes: Max file size before rotation.
        backup_count: Number of backup files to keep.

    Returns:
        Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = ProviderLogFileHandler(
            filename=os.path.join(log_dir, log_file),
            max_bytes=max_bytes,
            backup_count=backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
