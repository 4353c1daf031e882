"""
Cache-or-fetch orchestration between GitHub retrieval and the analyzer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .analyzer import analyze
from .cache import cache_key
from .errors import UserNotFoundError
from .fetch import fetch_all_commits, validate_username
from .models import AnalysisResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from .cache import TTLStore
    from .models import CommitRecord

    Fetcher = Callable[[str, str | None], tuple[list[CommitRecord], int]]

logger = logging.getLogger(__name__)


def get_analysis(
    username: str,
    token: str | None = None,
    store: TTLStore | None = None,
    fetcher: Fetcher = fetch_all_commits,
) -> tuple[AnalysisResult, bool]:
    """
    Return a user's analysis, from the cache when possible.

    Args:
        username: GitHub login.
        token:    Token for private-inclusive retrieval, `None` for public data.
        store:    Cache to consult and fill. No caching when not provided.
        fetcher:  Function collecting `(commits, repos_scanned)` for a user.

    Return:
        (AnalysisResult, bool): The analysis and whether it came from an
                                authenticated fetch.

    Raises:
        InvalidUsernameError: When `username` is not a GitHub login.
        UserNotFoundError:    When the user does not exist or has no commits.
        CommitaError:         When retrieval fails otherwise.

    """

    validate_username(username)
    authenticated: bool = bool(token)
    key: str = cache_key(username, authenticated)

    if store is not None:
        cached = store.get(key)
        if cached is not None:
            try:
                analysis = AnalysisResult.from_dict(cached)
            except (KeyError, TypeError, ValueError):
                logger.warning("Discarding malformed cache entry for %r", username)
                store.delete(key)
            else:
                logger.info("Cache hit for %r (%s)", username, key.split(":")[1])
                return analysis, authenticated

        logger.info("Cache miss for %r, fetching from GitHub", username)

    commits, repos_scanned = fetcher(username, token)
    logger.info("Fetched %d commits from %d repos", len(commits), repos_scanned)

    if not commits:
        msg = f"No commits found for {username}"
        raise UserNotFoundError(msg)

    analysis = analyze(username, commits, repos_scanned)

    if store is not None:
        store.set(key, analysis.to_dict())

    return analysis, authenticated


def cache_control(authenticated: bool) -> str:
    """
    HTTP `Cache-Control` value for a card.

    Cards built from private data must not be shared by caches.
    """

    return "private, no-cache" if authenticated else "public, max-age=3600"
