"""
Runtime configuration, read from the environment and an optional `.env` file.

Only the retrieval and caching layers read these values.
"""

from __future__ import annotations

import logging
from os import environ
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_CACHE_TTL: int = 3600


def _env_int(name: str, default: int) -> int:
    """
    Read a positive integer from the environment.

    Args:
        name:    Variable to read.
        default: Value used when the variable is unset or malformed.

    Return:
        int: Parsed value, or `default`.

    """

    raw: str | None = environ.get(name)
    if raw is None or raw.strip() == "":
        return default

    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, not an integer; using %d", name, raw, default)
        return default

    if value <= 0:
        logger.warning("Ignoring %s=%r, not positive; using %d", name, raw, default)
        return default

    return value


GITHUB_TOKEN: str | None = environ.get("GITHUB_TOKEN") or None
USER_AGENT: str = "Commita/1.0"

CACHE_TTL: int = _env_int("CACHE_TTL", DEFAULT_CACHE_TTL)
CACHE_DIR: Path = Path(
    environ.get("COMMITA_CACHE_DIR") or str(Path.home() / ".cache" / "commita")
)

PER_PAGE: int = 100
BATCH_SIZE: int = 5
BATCH_DELAY: float = 0.5

# public: 60 req/hour primary limit, authenticated: 5000 req/hour
AUTH_LIMITS: tuple[int, int] = (200, 500)
PUBLIC_LIMITS: tuple[int, int] = (50, 200)
