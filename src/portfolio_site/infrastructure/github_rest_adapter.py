"""GitHub REST API adapter, implements the ProfileSource port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from portfolio_site.domain.entities import CommitWeek, Identity, Repository
from portfolio_site.domain.exceptions import (
    GitHubApiError,
    GitHubAuthError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    StatisticsNotReadyError,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_USER_AGENT = "portfolio-site/1.0"


class GitHubRestAdapter:
    """Concrete ProfileSource backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        api_url: str = _GITHUB_API,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "User-Agent": _USER_AGENT,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_identity(self) -> Identity:
        """GET /user → Identity."""
        data = _expect(dict, _json(await self._api_get("/user"), "/user"), "/user")
        login = data.get("login")
        if not isinstance(login, str) or not login:
            raise GitHubApiError("GitHub /user response has no login.")
        return Identity(
            login=login,
            name=data.get("name"),
            bio=data.get("bio"),
            location=data.get("location"),
            email=data.get("email"),
            followers=_int(data.get("followers")),
            following=_int(data.get("following")),
            public_repos=_int(data.get("public_repos")),
            avatar_url=data.get("avatar_url"),
            html_url=data.get("html_url"),
            created_at=_parse_timestamp(data.get("created_at")),
        )

    async def fetch_repositories(self, per_page: int) -> list[Repository]:
        """GET /user/repos?per_page=N&sort=updated → [Repository] (single page)."""
        resp = await self._api_get(
            "/user/repos",
            params={"per_page": str(per_page), "sort": "updated"},
        )
        items = _expect(list, _json(resp, "/user/repos"), "/user/repos")
        return [_to_repository(item) for item in items if isinstance(item, dict)]

    async def fetch_languages(self, owner: str, repo: str) -> dict[str, int]:
        """GET /repos/{owner}/{repo}/languages → {lang: bytes}."""
        endpoint = f"/repos/{owner}/{repo}/languages"
        data = _expect(dict, _json(await self._api_get(endpoint), endpoint), endpoint)
        return {str(lang): _int(size) for lang, size in data.items()}

    async def fetch_commit_activity(self, owner: str, repo: str) -> list[CommitWeek]:
        """GET /repos/{owner}/{repo}/stats/commit_activity → [CommitWeek]."""
        endpoint = f"/repos/{owner}/{repo}/stats/commit_activity"
        resp = await self._api_get(endpoint)
        if resp.status_code == 202:
            raise StatisticsNotReadyError(
                f"Commit statistics for {owner}/{repo} are still being computed."
            )
        weeks = _expect(list, _json(resp, endpoint), endpoint)
        return [
            CommitWeek(
                total=_int(week.get("total")),
                week=_int(week.get("week")),
                days=tuple(_int(d) for d in _list_field(week, "days", endpoint)),
            )
            for week in weeks
            if isinstance(week, dict)
        ]

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._api_url}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            raise GitHubApiError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code in (200, 202):
            return resp

        if resp.status_code == 401:
            raise GitHubAuthError(
                "GitHub rejected the token. Set a valid GITHUB_TOKEN environment variable."
            )

        if resp.status_code == 404:
            raise GitHubNotFoundError(f"GitHub resource not found: {endpoint}")

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}."
                )
            raise GitHubAuthError(f"Access denied to {endpoint}. Check the token's scopes.")

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        raise GitHubApiError(
            f"GitHub API returned HTTP {resp.status_code} for {url}"
        )


# ── Payload helpers ─────────────────────────────────────────────────────────


def _json(resp: httpx.Response, endpoint: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise GitHubApiError(f"GitHub returned invalid JSON for {endpoint}") from exc


def _expect(kind: type, payload: Any, endpoint: str) -> Any:
    if not isinstance(payload, kind):
        raise GitHubApiError(
            f"Expected a JSON {kind.__name__} from {endpoint}, got {type(payload).__name__}."
        )
    return payload


def _list_field(item: dict[str, Any], key: str, endpoint: str) -> list[Any]:
    """Return ``item[key]`` as a list; missing or null means empty."""
    value = item.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise GitHubApiError(
            f"Expected a JSON list for '{key}' from {endpoint}, got {type(value).__name__}."
        )
    return value


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse GitHub's ISO-8601 timestamps (``2024-05-01T12:00:00Z``)."""
    if not isinstance(value, str) or not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug("Unparseable timestamp %r", value)
        return None


def _to_repository(item: dict[str, Any]) -> Repository:
    owner = item.get("owner")
    return Repository(
        name=str(item.get("name", "")),
        html_url=str(item.get("html_url", "")),
        description=_str_or_none(item.get("description")),
        language=_str_or_none(item.get("language")),
        stargazers_count=_int(item.get("stargazers_count")),
        forks_count=_int(item.get("forks_count")),
        open_issues_count=_int(item.get("open_issues_count")),
        size=_int(item.get("size")),
        topics=tuple(str(t) for t in _list_field(item, "topics", "/user/repos")),
        created_at=_parse_timestamp(item.get("created_at")),
        updated_at=_parse_timestamp(item.get("updated_at")),
        default_branch=item.get("default_branch") or "main",
        fork=bool(item.get("fork", False)),
        owner=owner.get("login") if isinstance(owner, dict) else None,
    )
