"""Pure derivations behind the project grid: filter, sort, paginate.

None of these functions mutate their input; the snapshot's repository tuple
is shared by every request-scoped view built from it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, Sequence

from portfolio_site.domain.entities import (
    ALL_LANGUAGES,
    Repository,
    RepositoryPage,
    SortKey,
    ViewState,
)
from portfolio_site.domain.exceptions import InvalidViewStateError

DEFAULT_PAGE_SIZE = 9

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class LanguageShare:
    """A language's share of all bytes across the account's repositories."""

    language: str
    bytes: int
    percentage: float


def parse_sort_key(value: str) -> SortKey:
    """Interpret a user-supplied sort name (``updated``, ``stars``, ``name``)."""
    try:
        return SortKey(value.strip().lower())
    except ValueError as exc:
        options = ", ".join(key.value for key in SortKey)
        raise InvalidViewStateError(
            f"Unknown sort key '{value}'. Expected one of: {options}."
        ) from exc


def filter_repositories(
    repos: Sequence[Repository], search: str = "", language: str = ALL_LANGUAGES
) -> list[Repository]:
    """Keep repositories whose name contains *search* and whose language matches."""
    needle = search.strip().casefold()
    return [
        repo
        for repo in repos
        if needle in repo.name.casefold()
        and (language == ALL_LANGUAGES or repo.language == language)
    ]


def _updated_key(repo: Repository) -> datetime:
    updated = repo.updated_at
    if updated is None:
        return _EPOCH
    if updated.tzinfo is None:
        return updated.replace(tzinfo=timezone.utc)
    return updated


def sort_repositories(repos: Sequence[Repository], key: SortKey) -> list[Repository]:
    """Return a new list ordered by *key*."""
    if key is SortKey.STARS:
        return sorted(repos, key=lambda r: r.stargazers_count, reverse=True)
    if key is SortKey.NAME:
        return sorted(repos, key=lambda r: r.name.casefold())
    return sorted(repos, key=_updated_key, reverse=True)


def total_pages(count: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(count / page_size) if count > 0 else 0


def paginate(
    repos: Sequence[Repository], page: int, page_size: int = DEFAULT_PAGE_SIZE
) -> RepositoryPage:
    """Slice one page out of *repos*; pages are 1-based."""
    pages = total_pages(len(repos), page_size)
    start = (page - 1) * page_size
    items = tuple(repos[start : start + page_size]) if page >= 1 else ()
    return RepositoryPage(
        items=items,
        page=page,
        total_pages=pages,
        total_count=len(repos),
        page_size=page_size,
    )


def derive_view(
    repos: Sequence[Repository],
    state: ViewState,
    page_size: int = DEFAULT_PAGE_SIZE,
    requested_page: int | None = None,
) -> tuple[ViewState, RepositoryPage]:
    """Filter, sort and paginate *repos* for *state*.

    When *requested_page* is given, navigation goes through
    :meth:`ViewState.go_to_page`, so an out-of-range page leaves the state's
    page as it was.  Returns the resulting state alongside the page.
    """
    filtered = filter_repositories(repos, state.search, state.language)
    ordered = sort_repositories(filtered, state.sort)
    pages = total_pages(len(ordered), page_size)
    if requested_page is not None:
        state = state.go_to_page(requested_page, pages)
    return state, paginate(ordered, state.page, page_size)


def language_options(repos: Sequence[Repository]) -> list[str]:
    """``"All"`` followed by every distinct primary language, alphabetically."""
    languages = {repo.language for repo in repos if repo.language}
    return [ALL_LANGUAGES, *sorted(languages, key=str.casefold)]


def language_breakdown(
    language_totals: Mapping[str, int], limit: int | None = None
) -> list[LanguageShare]:
    """Languages ordered by byte count with their percentage of the total."""
    total_bytes = sum(language_totals.values()) or 1
    ranked = sorted(language_totals.items(), key=lambda x: (-x[1], x[0]))
    if limit is not None:
        ranked = ranked[:limit]
    return [
        LanguageShare(
            language=language,
            bytes=size,
            percentage=round(size / total_bytes * 100, 1),
        )
        for language, size in ranked
    ]
