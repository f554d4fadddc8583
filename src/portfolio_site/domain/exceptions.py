"""Domain exception hierarchy.

The GitHub errors are raised by the REST adapter and absorbed by the profile
aggregator, which turns each of them into an empty contribution.  Only
:class:`InvalidViewStateError` reaches the interface layer.
"""

from __future__ import annotations


class PortfolioError(Exception):
    """Base exception for the entire application."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class GitHubError(PortfolioError):
    """Any failure talking to the GitHub REST API."""


class GitHubAuthError(GitHubError):
    """The token is missing, invalid or expired (401)."""


class GitHubNotFoundError(GitHubError):
    """The requested resource does not exist (404)."""


class GitHubRateLimitError(GitHubError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class GitHubApiError(GitHubError):
    """Network error, unexpected status, or a payload of the wrong shape."""


class StatisticsNotReadyError(GitHubError):
    """GitHub is still computing repository statistics (202)."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidViewStateError(PortfolioError):
    """Search, filter, sort or page parameters could not be interpreted."""
