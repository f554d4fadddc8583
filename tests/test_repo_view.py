"""Tests for the project grid derivations (filter, sort, paginate)."""

from datetime import timedelta

import pytest

from conftest import BASE_TIME, make_repo, make_repos
from portfolio_site.domain.entities import SortKey, ViewState
from portfolio_site.domain.exceptions import InvalidViewStateError
from portfolio_site.services.repo_view import (
    derive_view,
    filter_repositories,
    language_breakdown,
    language_options,
    paginate,
    parse_sort_key,
    sort_repositories,
    total_pages,
)


@pytest.fixture
def mixed_repos():
    return [
        make_repo("api-gateway", language="Go", stargazers_count=5,
                  updated_at=BASE_TIME - timedelta(days=3)),
        make_repo("Blog", language="TypeScript", stargazers_count=50,
                  updated_at=BASE_TIME),
        make_repo("cli-tools", language="Go", stargazers_count=12,
                  updated_at=BASE_TIME - timedelta(days=1)),
        make_repo("dotfiles", language=None, stargazers_count=0, updated_at=None),
    ]


class TestFilter:
    def test_search_is_case_insensitive_substring(self, mixed_repos):
        names = [r.name for r in filter_repositories(mixed_repos, search="BLO")]
        assert names == ["Blog"]

    def test_language_filter(self, mixed_repos):
        names = [r.name for r in filter_repositories(mixed_repos, language="Go")]
        assert names == ["api-gateway", "cli-tools"]

    def test_all_matches_every_language(self, mixed_repos):
        assert filter_repositories(mixed_repos, language="All") == mixed_repos

    def test_search_and_language_combine(self, mixed_repos):
        names = [r.name for r in filter_repositories(mixed_repos, "cli", "Go")]
        assert names == ["cli-tools"]
        assert filter_repositories(mixed_repos, "cli", "TypeScript") == []


class TestSort:
    def test_updated_descending_is_default_and_puts_missing_last(self, mixed_repos):
        names = [r.name for r in sort_repositories(mixed_repos, SortKey.UPDATED)]
        assert names == ["Blog", "cli-tools", "api-gateway", "dotfiles"]

    def test_stars_descending(self, mixed_repos):
        names = [r.name for r in sort_repositories(mixed_repos, SortKey.STARS)]
        assert names == ["Blog", "cli-tools", "api-gateway", "dotfiles"]

    def test_name_ascending_ignores_case(self, mixed_repos):
        names = [r.name for r in sort_repositories(mixed_repos, SortKey.NAME)]
        assert names == ["api-gateway", "Blog", "cli-tools", "dotfiles"]

    def test_does_not_mutate_input(self, mixed_repos):
        before = list(mixed_repos)
        sort_repositories(mixed_repos, SortKey.NAME)
        assert mixed_repos == before

    def test_filter_and_sort_are_idempotent(self, mixed_repos):
        first = sort_repositories(filter_repositories(mixed_repos, "", "Go"), SortKey.STARS)
        second = sort_repositories(filter_repositories(mixed_repos, "", "Go"), SortKey.STARS)
        assert first == second


class TestParseSortKey:
    @pytest.mark.parametrize("raw, expected", [
        ("updated", SortKey.UPDATED),
        ("Stars", SortKey.STARS),
        (" name ", SortKey.NAME),
    ])
    def test_known_keys(self, raw, expected):
        assert parse_sort_key(raw) is expected

    def test_unknown_key_raises(self):
        with pytest.raises(InvalidViewStateError, match="Unknown sort key"):
            parse_sort_key("forks")


class TestPagination:
    def test_total_pages_rounds_up(self):
        assert total_pages(12, 9) == 2
        assert total_pages(9, 9) == 1

    def test_total_pages_of_empty_list_is_zero(self):
        assert total_pages(0, 9) == 0

    def test_total_pages_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            total_pages(3, 0)

    def test_last_page_holds_remainder_in_sort_order(self):
        repos = sort_repositories(make_repos(12), SortKey.UPDATED)
        page = paginate(repos, 2, page_size=9)

        assert page.total_pages == 2
        assert [r.name for r in page.items] == ["repo-09", "repo-10", "repo-11"]
        assert page.has_previous and not page.has_next

    def test_empty_list_paginates_cleanly(self):
        page = paginate([], 1, page_size=9)
        assert page.items == ()
        assert page.total_pages == 0
        assert not page.has_next


class TestDeriveView:
    def test_out_of_range_page_is_ignored(self):
        repos = make_repos(12)
        state, page = derive_view(repos, ViewState(), 9, requested_page=3)
        assert state.page == 1
        assert page.page == 1

        state, page = derive_view(repos, ViewState(), 9, requested_page=0)
        assert state.page == 1

    def test_valid_page_request_moves(self):
        state, page = derive_view(make_repos(12), ViewState(), 9, requested_page=2)
        assert state.page == 2
        assert len(page.items) == 3

    def test_nothing_matches(self):
        state, page = derive_view(make_repos(4), ViewState(search="zzz"), 9, requested_page=2)
        assert state.page == 1
        assert page.total_count == 0
        assert page.total_pages == 0
        assert page.items == ()


class TestLanguageHelpers:
    def test_language_options_start_with_all(self, mixed_repos):
        assert language_options(mixed_repos) == ["All", "Go", "TypeScript"]

    def test_breakdown_orders_by_bytes(self):
        shares = language_breakdown({"Rust": 20, "Go": 150, "C": 30})
        assert [s.language for s in shares] == ["Go", "C", "Rust"]
        assert shares[0].percentage == 75.0

    def test_breakdown_limit_and_empty(self):
        assert len(language_breakdown({"A": 1, "B": 2, "C": 3}, limit=2)) == 2
        assert language_breakdown({}) == []
