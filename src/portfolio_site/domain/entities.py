"""Domain entities: pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping

ALL_LANGUAGES = "All"


class SortKey(str, Enum):
    """Orderings offered by the project grid."""

    UPDATED = "updated"
    STARS = "stars"
    NAME = "name"


@dataclass(frozen=True, slots=True)
class Identity:
    """The authenticated GitHub account being showcased."""

    login: str
    name: str | None = None
    bio: str | None = None
    location: str | None = None
    email: str | None = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    avatar_url: str | None = None
    html_url: str | None = None
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.login


@dataclass(frozen=True, slots=True)
class Repository:
    """One repository owned by the identity."""

    name: str
    html_url: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    size: int = 0
    topics: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None
    default_branch: str = "main"
    fork: bool = False
    owner: str | None = None


@dataclass(frozen=True, slots=True)
class CommitWeek:
    """One record of the weekly commit-activity series."""

    total: int
    week: int
    days: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Everything the page renders, fetched in one pass.

    ``language_totals`` and ``total_commits`` are folds over ``repositories``
    as they were at fetch time.  A repository whose sub-fetch failed
    contributes nothing to them.
    """

    identity: Identity | None = None
    repositories: tuple[Repository, ...] = ()
    language_totals: Mapping[str, int] = field(default_factory=dict)
    total_commits: int = 0
    weekly_commits: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "repositories", tuple(self.repositories))
        for name in ("language_totals", "weekly_commits"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @classmethod
    def empty(cls) -> Snapshot:
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.identity is None


@dataclass(frozen=True, slots=True)
class ViewState:
    """Transient grid state: page, search text, language filter, sort key.

    Never mutated.  Every transition returns a new record so the page number
    cannot go stale relative to the filters it was computed for.
    """

    page: int = 1
    search: str = ""
    language: str = ALL_LANGUAGES
    sort: SortKey = SortKey.UPDATED

    def with_search(self, search: str) -> ViewState:
        return replace(self, search=search, page=1)

    def with_language(self, language: str) -> ViewState:
        return replace(self, language=language or ALL_LANGUAGES, page=1)

    def with_sort(self, sort: SortKey) -> ViewState:
        return replace(self, sort=sort, page=1)

    def go_to_page(self, page: int, total_pages: int) -> ViewState:
        """Move to *page*; out-of-range requests leave the state unchanged."""
        if 1 <= page <= total_pages:
            return replace(self, page=page)
        return self


@dataclass(frozen=True, slots=True)
class RepositoryPage:
    """One page of the filtered, sorted repository list."""

    items: tuple[Repository, ...]
    page: int
    total_pages: int
    total_count: int
    page_size: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
