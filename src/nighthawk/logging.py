"""Per-rule log files for nighthawk.

The engine always logs through the ``nighthawk.rules`` logger, tagging every
record with the rule it concerns. Nothing is written to disk until a host
calls ``setup_logging``, which installs a ``RuleLogHandler`` that routes
records to:
- nighthawk-{rule}.log: Evaluation history of one rule
- nighthawk-error.log: ERROR+ records from all rules, tagged with the rule name

Usage:
    from nighthawk.logging import setup_logging, get_rule_logger

    setup_logging(log_dir=Path("logs"))

    logger = get_rule_logger("not_enough_backlinks")
    logger.info("Rule fired")
    logger.error("Fact lookup failed")  # Rule log AND error log
"""

from __future__ import annotations

import hashlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_DIR = Path.home() / ".local" / "state" / "nighthawk"

DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3

RULES_LOGGER = "nighthawk.rules"

RULE_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
ERROR_FORMAT = "%(asctime)s [%(levelname)s] [%(rule)s] %(message)s"


def log_file_name(rule: str) -> str:
    """
    File name of a rule's log.

    Names that need sanitizing get a short digest of the raw name appended,
    so distinct rules never share a file.
    """
    safe_name = "".join(c if c.isalnum() or c in "_.-" else "-" for c in rule)
    if safe_name != rule or not safe_name.strip("."):
        digest = hashlib.sha1(rule.encode("utf-8")).hexdigest()[:8]
        safe_name = f"{safe_name}-{digest}"
    return f"nighthawk-{safe_name}.log"


def get_rule_logger(rule: str) -> logging.LoggerAdapter:
    """Logger whose records are tagged with the given rule name."""
    return logging.LoggerAdapter(logging.getLogger(RULES_LOGGER), {"rule": rule})


class RuleLogHandler(logging.Handler):
    """Routes tagged records to per-rule files and ERROR+ records to a shared file."""

    def __init__(self, log_dir: Path, max_bytes: int, backup_count: int) -> None:
        super().__init__()
        self.log_dir = log_dir
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self._rule_handlers: dict[str, RotatingFileHandler] = {}
        self._error_handler = self._open("nighthawk-error.log", ERROR_FORMAT)
        self._error_handler.setLevel(logging.ERROR)

    def _open(self, file_name: str, fmt: str) -> RotatingFileHandler:
        handler = RotatingFileHandler(
            self.log_dir / file_name,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
        )
        handler.setFormatter(logging.Formatter(fmt))
        return handler

    def rule_handler(self, rule: str) -> RotatingFileHandler:
        # Keyed on the raw name: one file per distinct rule.
        if rule not in self._rule_handlers:
            self._rule_handlers[rule] = self._open(log_file_name(rule), RULE_FORMAT)
        return self._rule_handlers[rule]

    def emit(self, record: logging.LogRecord) -> None:
        rule = getattr(record, "rule", None)
        if rule is not None:
            self.rule_handler(rule).handle(record)
        else:
            record.rule = "-"
        if record.levelno >= logging.ERROR:
            self._error_handler.handle(record)

    def close(self) -> None:
        for handler in self._rule_handlers.values():
            handler.close()
        self._rule_handlers.clear()
        self._error_handler.close()
        super().close()


def setup_logging(
    log_dir: Path | None = None,
    log_level: str = "INFO",
    max_bytes: int | None = None,
    backup_count: int | None = None,
) -> RuleLogHandler:
    """Start writing rule logs to files.

    Calling it again replaces the handler installed by the previous call.

    Args:
        log_dir: Directory for log files (default: ~/.local/state/nighthawk)
        log_level: Minimum log level (default: INFO)
        max_bytes: Max size per log file before rotation (default: 5MB)
        backup_count: Number of backup files to keep (default: 3)

    Returns:
        The installed handler.
    """
    reset_logging()

    directory = log_dir or DEFAULT_LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)

    handler = RuleLogHandler(
        directory,
        max_bytes=max_bytes or DEFAULT_MAX_BYTES,
        backup_count=backup_count if backup_count is not None else DEFAULT_BACKUP_COUNT,
    )
    logger = logging.getLogger("nighthawk")
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    return handler


def reset_logging() -> None:
    """Remove and close the handlers installed by ``setup_logging``."""
    logger = logging.getLogger("nighthawk")
    for handler in logger.handlers[:]:
        if isinstance(handler, RuleLogHandler):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
