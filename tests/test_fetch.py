from __future__ import annotations

import unittest
from datetime import UTC, datetime
from unittest.mock import MagicMock

from github.GithubException import (
    BadCredentialsException,
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)
from requests.exceptions import ConnectionError as RequestsConnectionError

from commita import (
    AccessDeniedError,
    InvalidUsernameError,
    RateLimitError,
    UpstreamError,
    UserNotFoundError,
)
from commita.fetch import (
    classify_error,
    fetch_all_commits,
    get_repo_commits,
    get_repos,
    validate_username,
)


def make_repo(name: str, fork: bool = False, commits: list | None = None) -> MagicMock:
    repo = MagicMock()
    repo.name = name
    repo.fork = fork
    repo.get_commits.return_value = commits or []
    return repo


def make_commit(sha: str, message: str, when: datetime | None) -> MagicMock:
    commit = MagicMock()
    commit.sha = sha
    commit.commit.message = message
    commit.commit.author.date = when
    return commit


class ValidateUsernameTests(unittest.TestCase):
    def test_accepts_github_logins(self) -> None:
        for name in ("octocat", "a", "some-user-42"):
            self.assertEqual(validate_username(name), name)

    def test_rejects_invalid_logins(self) -> None:
        for name in ("", "-lead", "trail-", "has space", "under_score", "x" * 40):
            with self.assertRaises(InvalidUsernameError):
                validate_username(name)


class ClassifyErrorTests(unittest.TestCase):
    def test_not_found(self) -> None:
        err = classify_error(UnknownObjectException(404, {"message": "Not Found"}, {}))
        self.assertIsInstance(err, UserNotFoundError)

    def test_rate_limit_carries_reset_time(self) -> None:
        err = classify_error(
            RateLimitExceededException(403, {}, {"x-ratelimit-reset": "1741600800"})
        )

        self.assertIsInstance(err, RateLimitError)
        self.assertTrue(err.reset_at.endswith("Z"))
        self.assertIn(err.reset_at, str(err))

    def test_forbidden_with_exhausted_quota_is_rate_limit(self) -> None:
        err = classify_error(GithubException(403, {}, {"x-ratelimit-remaining": "0"}))
        self.assertIsInstance(err, RateLimitError)

    def test_bad_credentials(self) -> None:
        err = classify_error(BadCredentialsException(401, {}, {}))
        self.assertIsInstance(err, AccessDeniedError)

    def test_server_and_transport_errors(self) -> None:
        self.assertIsInstance(classify_error(GithubException(502, {}, {})), UpstreamError)
        self.assertIsInstance(classify_error(RequestsConnectionError("reset")), UpstreamError)


class GetReposTests(unittest.TestCase):
    def test_skips_forks_in_public_mode(self) -> None:
        gh = MagicMock()
        gh.get_user.return_value.get_repos.return_value = [
            make_repo("mine"),
            make_repo("forked", fork=True),
            make_repo("other"),
        ]

        repos = get_repos(gh, "octocat", authenticated=False)

        self.assertEqual([r.name for r in repos], ["mine", "other"])
        gh.get_user.assert_called_once_with("octocat")
        gh.get_user.return_value.get_repos.assert_called_once_with(
            type="owner", sort="pushed"
        )

    def test_authenticated_mode_lists_token_owner_repos(self) -> None:
        gh = MagicMock()
        gh.get_user.return_value.get_repos.return_value = []

        get_repos(gh, "octocat", authenticated=True)

        gh.get_user.assert_called_once_with()
        gh.get_user.return_value.get_repos.assert_called_once_with(
            affiliation="owner", sort="pushed"
        )

    def test_unknown_user_is_classified(self) -> None:
        gh = MagicMock()
        gh.get_user.side_effect = UnknownObjectException(404, {}, {})

        with self.assertRaises(UserNotFoundError):
            get_repos(gh, "ghost", authenticated=False)


class GetRepoCommitsTests(unittest.TestCase):
    def test_keeps_first_line_and_author_date(self) -> None:
        when = datetime(2025, 3, 10, 10, 0, tzinfo=UTC)
        repo = make_repo(
            "repo",
            commits=[
                make_commit("a1", "feat: thing\n\nlong body", when),
                make_commit("b2", "no date", None),
            ],
        )

        records = get_repo_commits(repo, "octocat", limit=10)

        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].id, "a1")
        self.assertEqual(records[0].message, "feat: thing")
        self.assertEqual(records[0].timestamp, "2025-03-10T10:00:00Z")
        self.assertEqual(records[0].repo, "repo")
        repo.get_commits.assert_called_once_with(author="octocat")

    def test_respects_limit(self) -> None:
        when = datetime(2025, 3, 10, tzinfo=UTC)
        repo = make_repo("repo", commits=[make_commit(str(i), "m", when) for i in range(5)])

        self.assertEqual(len(get_repo_commits(repo, "octocat", limit=3)), 3)

    def test_empty_repository_yields_nothing(self) -> None:
        repo = make_repo("empty")
        repo.get_commits.side_effect = GithubException(409, {"message": "Git Repository is empty."}, {})

        self.assertEqual(get_repo_commits(repo, "octocat", limit=10), [])


class FetchAllCommitsTests(unittest.TestCase):
    def _client(self, repos: list[MagicMock]) -> MagicMock:
        gh = MagicMock()
        gh.get_user.return_value.get_repos.return_value = repos
        gh.rate_limiting = (4999, 5000)
        return gh

    def test_collects_commits_in_batches(self) -> None:
        when = datetime(2025, 3, 10, tzinfo=UTC)
        repos = [
            make_repo(f"r{i}", commits=[make_commit(f"s{i}", "m", when)]) for i in range(7)
        ]
        sleep = MagicMock()

        commits, scanned = fetch_all_commits(
            "octocat", token="tok", client=self._client(repos), sleep=sleep
        )

        self.assertEqual(scanned, 7)
        self.assertEqual([c.id for c in commits], [f"s{i}" for i in range(7)])
        sleep.assert_called_once()

    def test_failing_repository_is_skipped(self) -> None:
        when = datetime(2025, 3, 10, tzinfo=UTC)
        broken = make_repo("broken")
        broken.get_commits.side_effect = GithubException(500, {}, {})
        repos = [broken, make_repo("ok", commits=[make_commit("s1", "m", when)])]

        commits, scanned = fetch_all_commits(
            "octocat", token=None, client=self._client(repos), sleep=MagicMock()
        )

        self.assertEqual(scanned, 2)
        self.assertEqual([c.id for c in commits], ["s1"])

    def test_rate_limit_aborts_the_fetch(self) -> None:
        limited = make_repo("limited")
        limited.get_commits.side_effect = RateLimitExceededException(403, {}, {})

        with self.assertRaises(RateLimitError):
            fetch_all_commits(
                "octocat", token=None, client=self._client([limited]), sleep=MagicMock()
            )


if __name__ == "__main__":
    unittest.main()
