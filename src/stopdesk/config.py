"""Environment-based configuration.

Optional environment variables
------------------------------
- STOPDESK_COMMUNES_SOURCE (default: data/communes.json)
    URL or local path of the commune dataset.
- STOPDESK_DESKS_SOURCE (default: data/desks.json)
    URL or local path of the desk dataset.
- STOPDESK_MATCH_THRESHOLD (default: 0.3)
    Maximum fuzzy dissimilarity (0..1). Lower is stricter.
- STOPDESK_MATCH_LIMIT (default: 10)
- STOPDESK_HTTP_TIMEOUT (default: 10)
- STOPDESK_API_HOST (default: 0.0.0.0)
- STOPDESK_API_PORT (default: 8000)
- STOPDESK_LOG_LEVEL (default: INFO)

A `.env` file can provide any of these (see `load_dotenv_if_present`).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .loader import DEFAULT_TIMEOUT
from .matcher import DEFAULT_LIMIT, DEFAULT_THRESHOLD

logger = logging.getLogger(__name__)


def _parse_env_line(line: str) -> tuple[str, str] | None:
    """Parse one `KEY=value` line; comments, blanks and bare words yield None."""
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None

    key, value = (part.strip() for part in line.split("=", 1))
    if not key:
        return None

    # Remove simple quotes.
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return key, value


def load_dotenv_if_present() -> list[str]:
    """Load a local `.env` file if present.

    Behavior:
    - If `STOPDESK_ENV_FILE` is set, load that file.
    - Otherwise try `.env` in the current working directory. There is no
      fallback next to this module: the package is installed into
      site-packages, where nobody keeps a `.env`.

    Precedence:
    - Real environment variables always win.
    - `.env` only fills missing variables.

    Returns:
        The variable names that were taken from the file.
    """
    explicit = os.getenv("STOPDESK_ENV_FILE")
    env_path = Path(explicit).expanduser() if explicit else Path.cwd() / ".env"
    if not env_path.is_file():
        if explicit:
            logger.warning("STOPDESK_ENV_FILE=%s does not exist", explicit)
        return []

    applied: list[str] = []
    for raw in env_path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_env_line(raw)
        if parsed is None:
            continue
        key, value = parsed
        if key in os.environ:
            continue
        os.environ[key] = value
        applied.append(key)

    logger.debug("Loaded %s from %s", applied, env_path)
    return applied


def _get_env_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


def _get_env_float(name: str, default: float) -> float:
    """Read an environment variable as float with a default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid float env var {name}={raw!r}") from e


def _get_env_int(name: str, default: int) -> int:
    """Read an environment variable as int with a default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise RuntimeError(f"Invalid int env var {name}={raw!r}") from e


@dataclass(frozen=True)
class Settings:
    communes_source: str = "data/communes.json"
    desks_source: str = "data/desks.json"
    match_threshold: float = DEFAULT_THRESHOLD
    match_limit: int = DEFAULT_LIMIT
    http_timeout: float = DEFAULT_TIMEOUT
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment (after loading `.env`)."""
        load_dotenv_if_present()

        threshold = _get_env_float("STOPDESK_MATCH_THRESHOLD", DEFAULT_THRESHOLD)
        if not (0.0 <= threshold <= 1.0):
            raise RuntimeError("STOPDESK_MATCH_THRESHOLD must be in range [0, 1]")

        limit = _get_env_int("STOPDESK_MATCH_LIMIT", DEFAULT_LIMIT)
        if limit < 1:
            raise RuntimeError("STOPDESK_MATCH_LIMIT must be >= 1")

        timeout = _get_env_float("STOPDESK_HTTP_TIMEOUT", DEFAULT_TIMEOUT)
        if timeout <= 0:
            raise RuntimeError("STOPDESK_HTTP_TIMEOUT must be > 0")

        port = _get_env_int("STOPDESK_API_PORT", 8000)
        if not (1 <= port <= 65535):
            raise RuntimeError("STOPDESK_API_PORT must be in range [1, 65535]")

        return cls(
            communes_source=_get_env_str("STOPDESK_COMMUNES_SOURCE", cls.communes_source),
            desks_source=_get_env_str("STOPDESK_DESKS_SOURCE", cls.desks_source),
            match_threshold=threshold,
            match_limit=limit,
            http_timeout=timeout,
            api_host=_get_env_str("STOPDESK_API_HOST", cls.api_host),
            api_port=port,
            log_level=_get_env_str("STOPDESK_LOG_LEVEL", cls.log_level).upper(),
        )
