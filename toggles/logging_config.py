from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

_TEXT_FMT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        # Add extra fields if they exist
        if hasattr(record, "extra_data"):
            log_entry.update(getattr(record, "extra_data"))

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "text", stream: Optional[TextIO] = None) -> bool:
    """
    Install one handler on the root logger, writing to ``stream``
    (stdout when not given; the CLI passes stderr).

    Does nothing (returns False) when the root logger already has
    handlers. Importing the package never calls this.
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    log_level = getattr(logging, level.upper(), logging.INFO)

    if fmt == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(_TEXT_FMT)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=[handler])
    return True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
