"""Logging setup for the school portal client."""

import logging
import re
import sys
from pathlib import Path

LOGGER_NAME = "school_client"

_BEARER = re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+")


class TokenRedactingFilter(logging.Filter):
    """Masks bearer tokens that end up in request or error messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "Bearer" in message:
            record.msg = _BEARER.sub(r"\1***", message)
            record.args = ()
        return True


def setup_logger(
    name: str = LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Path | None = None,
) -> logging.Logger:
    """
    Configure the client logger once; later calls only return it.

    Module loggers created with get_logger(__name__) propagate here, so a
    single setup in the Streamlit entry point covers services and the api
    client.

    Args:
        name: Root logger name for the client.
        level: Logging level.
        log_file: Optional log file; stderr is always attached.

    Returns:
        Configured logger.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(level)
    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    redact = TokenRedactingFilter()

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    h.addFilter(redact)
    log.addHandler(h)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        fh.addFilter(redact)
        log.addHandler(fh)

    return log


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the client logger, or a child of it for a module name."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name.rsplit('.', 1)[-1]}"
    return logging.getLogger(name)
