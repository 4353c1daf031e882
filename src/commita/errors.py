"""
Exceptions raised by the retrieval, caching and output layers.

The analyzer and the renderer never raise these; failures are classified
here before they reach whoever presents them to a user.
"""

from __future__ import annotations


class CommitaError(Exception):
    """
    Base class for every error the package raises on purpose.
    """


class InvalidUsernameError(CommitaError):
    """
    The requested name is not a valid GitHub login.
    """


class UserNotFoundError(CommitaError):
    """
    GitHub has no such user, or the user has no commits to analyze.
    """


class RateLimitError(CommitaError):
    """
    The GitHub API rate limit is exhausted.
    """

    def __init__(self, msg: str, reset_at: str = "unknown") -> None:
        super().__init__(msg)
        self.reset_at = reset_at


class AccessDeniedError(CommitaError):
    """
    GitHub refused the request (bad credentials or forbidden resource).
    """


class UpstreamError(CommitaError):
    """
    Any other GitHub API or transport failure.
    """


class CacheError(CommitaError):
    """
    Descriptive exception for cache-handling errors.
    """


class CardError(CommitaError):
    """
    A rendered card could not be validated or written.
    """
