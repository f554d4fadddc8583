"""Routes: the portfolio page and its JSON twins, thin over the use case."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from portfolio_site.domain.entities import (
    ALL_LANGUAGES,
    Repository,
    RepositoryPage,
    SortKey,
    ViewState,
)
from portfolio_site.infrastructure.config import Settings
from portfolio_site.interface.dependencies import (
    get_app_settings,
    get_showcase,
    get_use_case,
)
from portfolio_site.interface.schemas import (
    ErrorResponse,
    RepositoryPageResponse,
    SnapshotResponse,
)
from portfolio_site.services.aggregate_profile import AggregateProfileUseCase
from portfolio_site.services.repo_view import (
    derive_view,
    language_breakdown,
    language_options,
    parse_sort_key,
)
from portfolio_site.services.showcase import Showcase, stat_cards

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def _view(
    repos: tuple[Repository, ...],
    q: str,
    language: str,
    sort: SortKey,
    page: int,
    page_size: int,
) -> tuple[ViewState, RepositoryPage]:
    state = (
        ViewState()
        .with_search(q)
        .with_language(language)
        .with_sort(sort)
    )
    return derive_view(repos, state, page_size, requested_page=page)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def portfolio_page(
    request: Request,
    q: str = "",
    language: str = ALL_LANGUAGES,
    sort: str = SortKey.UPDATED.value,
    page: int = 1,
    use_case: AggregateProfileUseCase = Depends(get_use_case),
    settings: Settings = Depends(get_app_settings),
    showcase: Showcase = Depends(get_showcase),
) -> HTMLResponse:
    """Render the portfolio with a fresh snapshot."""
    sort_key = parse_sort_key(sort)
    snapshot = await use_case.fetch_snapshot()
    state, repo_page = _view(
        snapshot.repositories, q, language, sort_key, page, settings.page_size
    )

    def page_url(number: int) -> str:
        params = {
            "q": state.search,
            "language": state.language,
            "sort": state.sort.value,
            "page": number,
        }
        return f"{request.url.path}?{urlencode(params)}#projects"

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "snapshot": snapshot,
            "showcase": showcase,
            "display_name": showcase.display_name(snapshot),
            "display_bio": showcase.display_bio(snapshot),
            "social_links": showcase.links_for(snapshot),
            "stats": stat_cards(snapshot),
            "languages": language_breakdown(snapshot.language_totals, limit=8),
            "language_options": language_options(snapshot.repositories),
            "sort_options": list(SortKey),
            "state": state,
            "repo_page": repo_page,
            "page_url": page_url,
        },
    )


@router.get("/api/snapshot", response_model=SnapshotResponse)
async def snapshot(
    use_case: AggregateProfileUseCase = Depends(get_use_case),
) -> SnapshotResponse:
    """Return the aggregated GitHub profile snapshot."""
    return SnapshotResponse.from_snapshot(await use_case.fetch_snapshot())


@router.get(
    "/api/repositories",
    response_model=RepositoryPageResponse,
    responses={
        422: {
            "model": ErrorResponse,
            "description": "Unknown sort key or malformed parameters",
        },
    },
)
async def repositories(
    q: str = "",
    language: str = ALL_LANGUAGES,
    sort: str = SortKey.UPDATED.value,
    page: int = 1,
    use_case: AggregateProfileUseCase = Depends(get_use_case),
    settings: Settings = Depends(get_app_settings),
) -> RepositoryPageResponse:
    """Return one filtered, sorted page of repositories."""
    sort_key = parse_sort_key(sort)
    snapshot = await use_case.fetch_snapshot()
    state, repo_page = _view(
        snapshot.repositories, q, language, sort_key, page, settings.page_size
    )
    return RepositoryPageResponse.from_page(state, repo_page)
