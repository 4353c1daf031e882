"""
Functions for collecting a user's commits from the GitHub API.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from time import sleep as time_sleep
from typing import TYPE_CHECKING

from github import Github
from github.Auth import Token
from github.GithubException import (
    BadCredentialsException,
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)
from requests.exceptions import RequestException

from .errors import (
    AccessDeniedError,
    CommitaError,
    InvalidUsernameError,
    RateLimitError,
    UpstreamError,
    UserNotFoundError,
)
from .models import CommitRecord
from .settings import (
    AUTH_LIMITS,
    BATCH_DELAY,
    BATCH_SIZE,
    GITHUB_TOKEN,
    PER_PAGE,
    PUBLIC_LIMITS,
    USER_AGENT,
)
from .utils import to_iso_z

if TYPE_CHECKING:
    from collections.abc import Callable

    from github.Commit import Commit
    from github.Repository import Repository

logger = logging.getLogger(__name__)

USERNAME_RE = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,37}[a-zA-Z0-9])?$")
EMPTY_REPO_ERR: int = 409


def validate_username(username: str) -> str:
    """
    Check that `username` is a valid GitHub login.

    Args:
        username: Name to check.

    Return:
        str: The same name.

    Raises:
        InvalidUsernameError: When the name cannot be a GitHub login.

    """

    if not username or not USERNAME_RE.match(username):
        msg = f"Invalid GitHub username: {username!r}"
        raise InvalidUsernameError(msg)

    return username


def make_client(token: str | None = None) -> Github:
    """
    Build a PyGithub client, authenticated when a token is given.
    """

    if token:
        return Github(auth=Token(token), per_page=PER_PAGE, user_agent=USER_AGENT)

    return Github(per_page=PER_PAGE, user_agent=USER_AGENT)


def classify_error(e: GithubException | RequestException) -> CommitaError:
    """
    Map a PyGithub or transport exception onto the package's error types.

    Args:
        e: Exception raised while talking to GitHub.

    Return:
        CommitaError: Not found, rate limited, access denied or upstream error.

    """

    if isinstance(e, RequestException):
        return UpstreamError(f"GitHub request failed: {e!s}")

    headers: dict[str, str] = dict(e.headers or {})

    if isinstance(e, UnknownObjectException) or e.status == 404:
        return UserNotFoundError("GitHub user not found")

    if isinstance(e, RateLimitExceededException) or (
        e.status == 403 and headers.get("x-ratelimit-remaining") == "0"
    ):
        reset: str | None = headers.get("x-ratelimit-reset")
        reset_at = (
            to_iso_z(datetime.fromtimestamp(int(reset), tz=UTC))
            if reset and reset.isdigit()
            else "unknown"
        )
        return RateLimitError(
            f"GitHub API rate limit exceeded. Resets at {reset_at}", reset_at
        )

    if isinstance(e, BadCredentialsException) or e.status in (401, 403):
        return AccessDeniedError("GitHub API access forbidden")

    return UpstreamError(f"GitHub API error: {e.status}")


def get_repos(gh: Github, username: str, authenticated: bool) -> list[Repository]:
    """
    Get the non-fork repositories owned by `username`, most recently pushed first.

    Args:
        gh:            Client to query with.
        username:      Owner of the repositories.
        authenticated: List the token owner's private repos too.

    Return:
        list[Repository]: At most as many repos as the mode's limit allows.

    Raises:
        CommitaError: When GitHub refuses or fails the request.

    """

    max_repos: int = (AUTH_LIMITS if authenticated else PUBLIC_LIMITS)[0]
    repos: list[Repository] = []

    try:
        if authenticated:
            paginated = gh.get_user().get_repos(affiliation="owner", sort="pushed")
        else:
            paginated = gh.get_user(username).get_repos(type="owner", sort="pushed")

        for repo in paginated:
            if len(repos) >= max_repos:
                break
            if repo.fork:
                continue
            repos.append(repo)
    except (GithubException, RequestException) as e:
        raise classify_error(e) from e

    return repos


def get_repo_commits(repo: Repository, author: str, limit: int) -> list[CommitRecord]:
    """
    Get the commits `author` made in `repo`.

    Args:
        repo:   Repository to read.
        author: Login the commits are filtered by.
        limit:  Maximum number of commits to collect.

    Return:
        list[CommitRecord]: Newest first. Empty for an empty repository.

    Raises:
        CommitaError: When GitHub refuses or fails the request.

    """

    records: list[CommitRecord] = []

    try:
        for commit in repo.get_commits(author=author):
            if len(records) >= limit:
                break

            record = _to_record(commit, repo.name)
            if record is not None:
                records.append(record)
    except GithubException as e:
        if e.status == EMPTY_REPO_ERR:
            return records
        raise classify_error(e) from e
    except RequestException as e:
        raise classify_error(e) from e

    return records


def fetch_all_commits(
    username: str,
    token: str | None = GITHUB_TOKEN,
    client: Github | None = None,
    sleep: Callable[[float], None] = time_sleep,
) -> tuple[list[CommitRecord], int]:
    """
    Collect every commit `username` authored across their repositories.

    Repositories are read in small concurrent batches with a pause between
    batches. A repository that fails is logged and skipped, unless the
    rate limit ran out.

    Args:
        username: GitHub login.
        token:    Token for authenticated, private-inclusive retrieval.
        client:   Client to use instead of building one from `token`.
        sleep:    Pause function used between batches.

    Return:
        (list[CommitRecord], int): Commits and the number of repos scanned.

    Raises:
        CommitaError: When the repositories cannot be listed, or the rate
                      limit is exhausted midway.

    """

    authenticated: bool = bool(token)
    gh: Github = client if client is not None else make_client(token)
    max_commits: int = (AUTH_LIMITS if authenticated else PUBLIC_LIMITS)[1]

    mode = "authenticated (private+public)" if authenticated else "public only"
    logger.info("Fetching repos for %r [%s]", username, mode)

    repos: list[Repository] = get_repos(gh, username, authenticated)
    logger.info("Found %d repos (excluding forks)", len(repos))

    commits: list[CommitRecord] = []
    batches: int = (len(repos) + BATCH_SIZE - 1) // BATCH_SIZE

    with ThreadPoolExecutor(max_workers=BATCH_SIZE) as pool:
        for n, start in enumerate(range(0, len(repos), BATCH_SIZE), start=1):
            batch = repos[start : start + BATCH_SIZE]
            logger.info(
                "Fetching commits batch %d/%d: %s",
                n,
                batches,
                ", ".join(repo.name for repo in batch),
            )

            futures = [
                pool.submit(get_repo_commits, repo, username, max_commits)
                for repo in batch
            ]
            for repo, future in zip(batch, futures):
                try:
                    commits.extend(future.result())
                except RateLimitError:
                    raise
                except CommitaError as e:
                    logger.warning("Skipping %s: %s", repo.name, e)

            if start + BATCH_SIZE < len(repos):
                sleep(BATCH_DELAY)

    remaining, limit = gh.rate_limiting
    logger.info(
        "Total: %d commits from %d repos (rate limit %s/%s)",
        len(commits),
        len(repos),
        remaining,
        limit,
    )

    return commits, len(repos)


def _to_record(commit: Commit, repo_name: str) -> CommitRecord | None:
    data = commit.commit
    author = getattr(data, "author", None)
    authored: datetime | None = getattr(author, "date", None)
    if authored is None:
        return None

    message: str = (data.message or "").split("\n")[0]

    return CommitRecord(
        id=commit.sha,
        message=message,
        timestamp=to_iso_z(authored),
        repo=repo_name,
    )
