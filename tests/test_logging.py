from __future__ import annotations

import logging
from pathlib import Path

from repomancer.logging import REDACTED, configure_logging, get_logger, redact


def test_redact_masks_explicit_secrets_and_credential_patterns() -> None:
    message = "GET /repos?access_token=abc123 failed; Authorization: Bearer ghp_xyz; token seen: s3cr3t"

    masked = redact(message, "s3cr3t", None)

    assert "abc123" not in masked
    assert "ghp_xyz" not in masked
    assert "s3cr3t" not in masked
    assert masked.count(REDACTED) == 3


def test_configure_logging_replaces_handlers(tmp_path: Path) -> None:
    log_file = tmp_path / "repomancer.log"

    configure_logging(verbose=True)
    logger = configure_logging(verbose=True, log_file=log_file)
    get_logger("assembler").debug("hello from the assembler")

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    for handler in logger.handlers:
        handler.flush()
        if isinstance(handler, logging.FileHandler):
            handler.close()
    assert "hello from the assembler" in log_file.read_text(encoding="utf-8")
