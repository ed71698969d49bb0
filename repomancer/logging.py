"""Logging utilities for repomancer commands."""

from __future__ import annotations

import logging
import re
from pathlib import Path

_LOGGER_NAME = "repomancer"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the repomancer hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the repomancer logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[repomancer] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


REDACTED = "***REDACTED***"

_CREDENTIAL_PATTERN = re.compile(
    r"(?i)(authorization:\s*(?:bearer|token)\s+|access_token=|token=)[^\s&\"']+"
)


def redact(message: str, *secrets: str | None) -> str:
    """Mask credentials in a log message, including any explicitly given secrets."""
    for secret in secrets:
        if secret:
            message = message.replace(secret, REDACTED)
    return _CREDENTIAL_PATTERN.sub(lambda match: f"{match.group(1)}{REDACTED}", message)


__all__ = ["REDACTED", "configure_logging", "get_logger", "redact"]
