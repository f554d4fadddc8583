"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx

from portfolio_site.infrastructure.config import Settings, get_settings
from portfolio_site.infrastructure.github_rest_adapter import GitHubRestAdapter
from portfolio_site.services.aggregate_profile import AggregateProfileUseCase
from portfolio_site.services.showcase import Showcase, build_showcase

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources; called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_app_settings() -> Settings:
    return _settings()


def get_use_case() -> AggregateProfileUseCase:
    """Build the aggregation use case with an injected GitHub adapter."""
    settings = _settings()

    assert _http_client is not None, "startup() was not called"

    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(
        client=_http_client,
        token=token,
        api_url=settings.github_api_url,
    )

    return AggregateProfileUseCase(
        profile_source=github_adapter,
        repos_per_page=settings.repos_per_page,
    )


def get_showcase() -> Showcase:
    return build_showcase(_settings())
