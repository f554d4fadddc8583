"""Pydantic response DTOs for the JSON API boundary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from portfolio_site.domain.entities import RepositoryPage, Snapshot, ViewState


class IdentitySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class RepositorySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    html_url: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    size: int = 0
    topics: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None
    default_branch: str = "main"
    fork: bool = False


class SnapshotResponse(BaseModel):
    """Response from ``GET /api/snapshot``."""

    identity: IdentitySchema | None
    repositories: list[RepositorySchema]
    language_totals: dict[str, int]
    total_commits: int
    weekly_commits: dict[int, int]

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> SnapshotResponse:
        return cls(
            identity=(
                IdentitySchema.model_validate(snapshot.identity)
                if snapshot.identity
                else None
            ),
            repositories=[
                RepositorySchema.model_validate(repo) for repo in snapshot.repositories
            ],
            language_totals=dict(snapshot.language_totals),
            total_commits=snapshot.total_commits,
            weekly_commits=dict(snapshot.weekly_commits),
        )


class RepositoryPageResponse(BaseModel):
    """Response from ``GET /api/repositories``."""

    items: list[RepositorySchema]
    page: int
    total_pages: int
    total_count: int
    page_size: int
    search: str
    language: str
    sort: str

    @classmethod
    def from_page(cls, state: ViewState, page: RepositoryPage) -> RepositoryPageResponse:
        return cls(
            items=[RepositorySchema.model_validate(repo) for repo in page.items],
            page=page.page,
            total_pages=page.total_pages,
            total_count=page.total_count,
            page_size=page.page_size,
            search=state.search,
            language=state.language,
            sort=state.sort.value,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
