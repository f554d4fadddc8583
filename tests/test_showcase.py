"""Tests for the static showcase content and stat cards."""

from portfolio_site.domain.entities import Identity, Snapshot
from portfolio_site.infrastructure.config import Settings
from portfolio_site.services.showcase import build_showcase, stat_cards


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_stat_cards_from_identity():
    snapshot = Snapshot(
        identity=Identity(login="octocat", followers=7, following=2, public_repos=30),
        total_commits=99,
    )
    cards = {card.label: card.value for card in stat_cards(snapshot)}
    assert cards == {
        "Repositories": 30,
        "Followers": 7,
        "Total Commits": 99,
        "Following": 2,
    }


def test_stat_cards_zero_without_identity():
    assert [card.value for card in stat_cards(Snapshot.empty())] == [0, 0, 0, 0]


def test_identity_overrides_configured_name_and_bio():
    showcase = build_showcase(_settings(owner_name="Configured", owner_bio="Configured bio"))
    snapshot = Snapshot(identity=Identity(login="octocat", name="Mona", bio="From GitHub"))

    assert showcase.display_name(snapshot) == "Mona"
    assert showcase.display_bio(snapshot) == "From GitHub"


def test_configured_values_used_as_fallback():
    showcase = build_showcase(
        _settings(owner_name="Configured", owner_bio="Configured bio", resume_url="/cv.pdf")
    )
    snapshot = Snapshot(identity=Identity(login="octocat"))

    assert showcase.display_name(snapshot) == "Configured"
    assert showcase.display_bio(Snapshot.empty()) == "Configured bio"
    assert showcase.resume_url == "/cv.pdf"
    assert showcase.skill_categories


def test_configured_links_used_for_empty_snapshot():
    showcase = build_showcase(
        _settings(
            github_url="https://github.com/configured",
            linkedin_url="https://linkedin.com/in/configured",
            contact_email="me@example.com",
        )
    )
    links = {link.label: link.url for link in showcase.links_for(Snapshot.empty())}

    assert links == {
        "GitHub": "https://github.com/configured",
        "LinkedIn": "https://linkedin.com/in/configured",
        "Email": "mailto:me@example.com",
    }


def test_identity_supplies_github_and_email_links():
    showcase = build_showcase(
        _settings(github_url="https://github.com/configured", contact_email="me@example.com")
    )
    snapshot = Snapshot(
        identity=Identity(
            login="octocat", html_url="https://github.com/octocat", email="octo@github.com"
        )
    )
    links = {link.label: link.url for link in showcase.links_for(snapshot)}

    assert links == {
        "GitHub": "https://github.com/octocat",
        "Email": "mailto:octo@github.com",
    }


def test_no_links_when_nothing_configured_or_known():
    assert build_showcase(_settings()).links_for(Snapshot.empty()) == []
