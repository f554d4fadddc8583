"""Profile aggregation use case: identity, repositories, languages, commits.

Builds one :class:`Snapshot` per call.  The fetch order is fixed: identity
first (everything else needs the login), then the repository list, then two
fan-out batches (languages and commit activity) issued together and joined
before folding.  Every failure is absorbed where it happens:

* identity fails      → empty snapshot
* repository list     → no repositories, identity still shown
* one sub-resource    → that repository contributes zero
* statistics pending  → same as a failed sub-resource, not retried

There is no cache, retry, backoff or cancellation.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from typing import Awaitable, Iterable, Mapping, Sequence, TypeVar

from portfolio_site.domain.entities import CommitWeek, Identity, Repository, Snapshot
from portfolio_site.domain.exceptions import GitHubError, StatisticsNotReadyError
from portfolio_site.domain.ports.profile_source import ProfileSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ── Folds ───────────────────────────────────────────────────────────────────


def fold_language_totals(maps: Iterable[Mapping[str, int]]) -> dict[str, int]:
    """Sum byte counts per language across repositories."""
    totals: Counter[str] = Counter()
    for languages in maps:
        for language, size in languages.items():
            totals[language] += size
    return dict(totals)


def fold_commit_total(series: Iterable[Sequence[CommitWeek]]) -> int:
    """Sum every weekly total across every repository."""
    return sum(week.total for weeks in series for week in weeks)


def fold_weekly_commits(series: Iterable[Sequence[CommitWeek]]) -> dict[int, int]:
    """Sum commits per week timestamp across repositories, ordered by week."""
    per_week: Counter[int] = Counter()
    for weeks in series:
        for week in weeks:
            per_week[week.week] += week.total
    return dict(sorted(per_week.items()))


# ── Use case ────────────────────────────────────────────────────────────────


class AggregateProfileUseCase:
    """Fetches and folds everything the portfolio page shows.

    Parameters
    ----------
    profile_source:
        Adapter that can talk to the GitHub REST API.
    repos_per_page:
        Size of the single repository page requested.  Deeper pages are
        never followed.
    """

    def __init__(self, profile_source: ProfileSource, repos_per_page: int = 100) -> None:
        self._source = profile_source
        self._repos_per_page = repos_per_page

    async def fetch_snapshot(self) -> Snapshot:
        """Build a snapshot.  Never raises; degrades to ``Snapshot.empty()``."""
        try:
            identity = await self._source.fetch_identity()
        except GitHubError as exc:
            logger.warning("Identity fetch failed, rendering empty profile: %s", exc)
            return Snapshot.empty()

        logger.info("Building portfolio snapshot for %s", identity.login)
        repositories = await self._fetch_repositories()

        language_maps, activity = await asyncio.gather(
            asyncio.gather(*(self._languages(identity, repo) for repo in repositories)),
            asyncio.gather(*(self._commit_activity(identity, repo) for repo in repositories)),
        )

        snapshot = Snapshot(
            identity=identity,
            repositories=tuple(repositories),
            language_totals=fold_language_totals(language_maps),
            total_commits=fold_commit_total(activity),
            weekly_commits=fold_weekly_commits(activity),
        )
        logger.info(
            "Snapshot for %s: %d repositories, %d languages, %d commits",
            identity.login,
            len(snapshot.repositories),
            len(snapshot.language_totals),
            snapshot.total_commits,
        )
        return snapshot

    # ── Fetch steps ─────────────────────────────────────────────────────

    async def _fetch_repositories(self) -> list[Repository]:
        try:
            return await self._source.fetch_repositories(self._repos_per_page)
        except GitHubError as exc:
            logger.warning("Repository list fetch failed, continuing without projects: %s", exc)
            return []

    async def _languages(self, identity: Identity, repo: Repository) -> dict[str, int]:
        owner = repo.owner or identity.login
        return await _settle(
            self._source.fetch_languages(owner, repo.name),
            {},
            f"languages for {owner}/{repo.name}",
        )

    async def _commit_activity(self, identity: Identity, repo: Repository) -> list[CommitWeek]:
        owner = repo.owner or identity.login
        return await _settle(
            self._source.fetch_commit_activity(owner, repo.name),
            [],
            f"commit activity for {owner}/{repo.name}",
        )


async def _settle(call: Awaitable[T], neutral: T, label: str) -> T:
    """Await *call*; on a GitHub failure log it and return *neutral* instead."""
    try:
        return await call
    except StatisticsNotReadyError:
        # TODO: counts stay low for fresh repositories until GitHub finishes
        # computing; decide whether to retry or flag the total as partial.
        logger.info("Skipping %s: statistics not computed yet", label)
        return neutral
    except GitHubError as exc:
        logger.debug("Skipping %s: %s", label, exc)
        return neutral
