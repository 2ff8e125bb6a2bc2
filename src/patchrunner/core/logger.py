"""Structured JSON logging for patchrunner.

Log records are emitted as JSON lines with free-form key-value context, to a
rotating file under ~/.patchrunner/logs/ and to the console.
"""

import json
import logging
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


class PatchRunnerLogger:
    """Structured JSON logger with rotation and operation timing.

    Key-value pairs passed to the level methods are merged into the JSON
    record, e.g. ``logger.info("Edit applied", resource_id=path, replacements=3)``.
    """

    log_dir: Path | None
    log_file: Path | None

    def __init__(
        self,
        log_dir: str | None = None,
        max_bytes: int = 5 * 1024 * 1024,  # 5MB
        backup_count: int = 3,
        level: str | None = None,
    ) -> None:
        """Initialize logger.

        Args:
            log_dir: Directory for log files (defaults to ~/.patchrunner/logs/)
            max_bytes: Maximum size before rotation
            backup_count: Number of rotated files to keep
            level: Log level (DEBUG/INFO/WARN/ERROR), reads PATCHRUNNER_LOG_LEVEL if not provided
        """
        disable_file_logging = os.environ.get("PATCHRUNNER_DISABLE_FILE_LOGGING", "").lower() in (
            "1",
            "true",
            "yes",
        )

        self._logger = logging.getLogger("patchrunner")
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)

        if not disable_file_logging:
            if log_dir is None:
                self.log_dir = Path("~/.patchrunner/logs").expanduser()
            else:
                self.log_dir = Path(log_dir)

            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.log_dir / "patchrunner.log"

            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setFormatter(JSONFormatter())
            self._logger.addHandler(file_handler)
        else:
            self.log_dir = None
            self.log_file = None

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(JSONFormatter())
        self._logger.addHandler(console_handler)

        # WARNING by default so CLI output stays readable
        self.set_level(level or os.environ.get("PATCHRUNNER_LOG_LEVEL", "WARNING"))

    def set_level(self, level: str) -> None:
        """Set logging level.

        Args:
            level: One of DEBUG, INFO, WARN/WARNING, ERROR
        """
        level_upper = level.upper()
        if level_upper == "WARN":
            level_upper = "WARNING"

        self._logger.setLevel(getattr(logging, level_upper, logging.INFO))

    def debug(self, msg: str, **kv: Any) -> None:
        self._logger.debug(msg, extra={"kv": kv})

    def info(self, msg: str, **kv: Any) -> None:
        self._logger.info(msg, extra={"kv": kv})

    def warn(self, msg: str, **kv: Any) -> None:
        self._logger.warning(msg, extra={"kv": kv})

    def error(self, msg: str, **kv: Any) -> None:
        self._logger.error(msg, extra={"kv": kv})

    def flush(self) -> None:
        """Flush all attached handlers."""
        for handler in self._logger.handlers:
            handler.flush()

    @contextmanager
    def operation(self, operation_name: str, **kv: Any) -> Iterator[None]:
        """Log the start and end of an operation with its duration.

        Example:
            with logger.operation("multi_edit", resource_id="src/app.py"):
                outcome = run_edit(...)
        """
        start_time = time.time()
        self.debug(f"{operation_name}_start", **kv)

        try:
            yield
        finally:
            duration_ms = (time.time() - start_time) * 1000
            self.info(f"{operation_name}_end", duration_ms=duration_ms, **kv)


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=UTC)
        timestamp = dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

        log_data = {
            "timestamp": timestamp,
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if hasattr(record, "kv") and record.kv:
            log_data.update(record.kv)

        # default=str keeps tuples of counts and paths serializable
        return json.dumps(log_data, default=str)
