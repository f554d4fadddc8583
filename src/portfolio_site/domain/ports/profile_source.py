"""Port: profile source, defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from portfolio_site.domain.entities import CommitWeek, Identity, Repository


class ProfileSource(Protocol):
    """Abstract contract for fetching an account's public footprint."""

    async def fetch_identity(self) -> Identity:
        """Return the authenticated account."""
        ...

    async def fetch_repositories(self, per_page: int) -> list[Repository]:
        """Return one page of the account's repositories, most recently updated first."""
        ...

    async def fetch_languages(self, owner: str, repo: str) -> dict[str, int]:
        """Return language → byte-count mapping for one repository."""
        ...

    async def fetch_commit_activity(self, owner: str, repo: str) -> list[CommitWeek]:
        """Return the weekly commit-activity series for one repository."""
        ...
