"""Logging configuration for importorder.

Two loggers are used: the audit logger records every file that is rewritten
or backed up, the debug logger traces discovery and per-file progress.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

AUDIT_LOGGER = "importorder.audit"
DEBUG_LOGGER = "importorder.debug"

AUDIT_FORMAT = "%(asctime)s - %(levelname)s - [AUDIT] %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(levelname)s - %(threadName)s - %(message)s"


def _replace_handlers(logger: logging.Logger, *handlers: logging.Handler) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)


def _dated_file_handler(log_dir: Path, kind: str, fmt: str) -> logging.FileHandler:
    handler = logging.FileHandler(log_dir / f"importorder_{kind}_{datetime.now():%Y%m%d}.log")
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(log_dir: Optional[Path] = None, debug: bool = False) -> None:
    """Configure the audit and debug loggers for a run.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        log_dir: Directory for dated log files. If None, only stderr is used
            and the audit trail is not kept.
        debug: Emit per-file progress on stderr (and to a debug log file when
            ``log_dir`` is set).
    """
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(DEBUG_FORMAT))

    audit_handlers = []
    debug_handlers = [console]
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        audit_handlers.append(_dated_file_handler(log_dir, "audit", AUDIT_FORMAT))
        if debug:
            debug_handlers.append(_dated_file_handler(log_dir, "debug", DEBUG_FORMAT))

    audit_logger = logging.getLogger(AUDIT_LOGGER)
    audit_logger.setLevel(logging.INFO)
    _replace_handlers(audit_logger, *audit_handlers)

    # Quiet unless asked; failures still reach stderr.
    debug_logger = logging.getLogger(DEBUG_LOGGER)
    debug_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    _replace_handlers(debug_logger, *debug_handlers)


def get_audit_logger() -> logging.Logger:
    """Get the audit logger."""
    return logging.getLogger(AUDIT_LOGGER)


def get_debug_logger() -> logging.Logger:
    """Get the debug logger."""
    return logging.getLogger(DEBUG_LOGGER)
