"""Shared fixtures: repository builders and an in-memory profile source."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from portfolio_site.domain.entities import CommitWeek, Identity, Repository
from portfolio_site.domain.exceptions import GitHubApiError

BASE_TIME = datetime(2024, 6, 1, tzinfo=timezone.utc)


def make_repo(name: str, **overrides) -> Repository:
    """Build a Repository with sensible defaults."""
    fields = {
        "html_url": f"https://github.com/octocat/{name}",
        "language": "Python",
        "updated_at": BASE_TIME,
    }
    fields.update(overrides)
    return Repository(name=name, **fields)


def make_repos(count: int) -> list[Repository]:
    """``count`` repositories, repo-00 updated most recently."""
    return [
        make_repo(
            f"repo-{i:02d}",
            stargazers_count=i,
            updated_at=BASE_TIME - timedelta(days=i),
        )
        for i in range(count)
    ]


class FakeProfileSource:
    """In-memory ProfileSource.

    ``languages`` and ``activity`` map repository names to either a payload
    or an exception instance, which is raised instead.
    """

    def __init__(
        self,
        identity: Identity | Exception | None = None,
        repositories: list[Repository] | Exception | None = None,
        languages: dict | None = None,
        activity: dict | None = None,
    ) -> None:
        self.identity = identity or Identity(login="octocat", name="The Octocat")
        self.repositories = repositories if repositories is not None else []
        self.languages = languages or {}
        self.activity = activity or {}
        self.calls: list[tuple[str, ...]] = []

    async def fetch_identity(self) -> Identity:
        self.calls.append(("identity",))
        if isinstance(self.identity, Exception):
            raise self.identity
        return self.identity

    async def fetch_repositories(self, per_page: int) -> list[Repository]:
        self.calls.append(("repositories", str(per_page)))
        if isinstance(self.repositories, Exception):
            raise self.repositories
        return list(self.repositories)

    async def fetch_languages(self, owner: str, repo: str) -> dict[str, int]:
        self.calls.append(("languages", owner, repo))
        result = self.languages.get(repo, {})
        if isinstance(result, Exception):
            raise result
        return dict(result)

    async def fetch_commit_activity(self, owner: str, repo: str) -> list[CommitWeek]:
        self.calls.append(("activity", owner, repo))
        result = self.activity.get(repo, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


@pytest.fixture
def network_error() -> GitHubApiError:
    return GitHubApiError("Network error fetching https://api.github.com: boom")
