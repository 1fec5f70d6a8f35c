"""Load and validate environment variables. Uses python-dotenv.

Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv


def _project_root() -> Path:
    """Resolve project root (the directory holding app.py)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Uses override=True so .env values take precedence over existing env vars.
    """
    load_dotenv(_project_root() / ".env", override=True)


def get_required(key: str) -> str:
    """
    Get required env var. Raises if missing or empty.

    Raises:
        ValueError: If key is missing or empty after trimming.
    """
    load_config()
    val = os.getenv(key, "").strip()
    if not val:
        raise ValueError(
            f"Missing required environment variable: {key}. "
            "Set it in .env or export it."
        )
    return val


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def server_url() -> str:
    """Optional: backend origin, also used to resolve media paths. Default http://localhost:3000."""
    return get_optional("SCHOOL_SERVER_URL", "http://localhost:3000").rstrip("/")


def api_path() -> str:
    """Optional: REST prefix on the server. Default /api."""
    path = get_optional("SCHOOL_API_PATH", "/api")
    return "/" + path.strip("/") if path.strip("/") else ""


def api_base_url() -> str:
    """Base URL every API path is joined to."""
    return server_url() + api_path()


def api_timeout() -> int:
    """Optional: per-request timeout in seconds. Default 30."""
    return get_optional_int("SCHOOL_API_TIMEOUT", 30)


def log_level() -> int:
    """Optional: LOG_LEVEL name (DEBUG, INFO, ...). Default INFO."""
    name = get_optional("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def log_file() -> Path | None:
    """Optional: LOG_FILE path; relative paths resolve against the project root."""
    val = get_optional("LOG_FILE", "")
    if not val:
        return None
    path = Path(val)
    return path if path.is_absolute() else _project_root() / path


def project_root() -> Path:
    """Project root directory."""
    return _project_root()
