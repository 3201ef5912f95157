"""Tests for pages module."""

from unittest.mock import MagicMock

import pytest
import requests
from github import GithubException
from github.PullRequest import PullRequest

from gh_release_prs.pages import FetchError, iter_pages, paginate


class TestPaginate:
    """Tests for paginate function."""

    def test_builds_paginated_list_with_params(self, mocker):
        """Query parameters are passed through unchanged."""
        mock_paginated_list = mocker.patch("gh_release_prs.pages.PaginatedList")
        mock_repo = MagicMock()
        mock_repo.url = "https://api.github.com/repos/octo/repo"

        result = paginate(mock_repo, PullRequest, "pulls", state="closed", per_page=25)

        assert result is mock_paginated_list.return_value
        mock_paginated_list.assert_called_once_with(
            PullRequest,
            mock_repo.requester,
            "https://api.github.com/repos/octo/repo/pulls",
            {"state": "closed", "per_page": 25},
        )


class TestIterPages:
    """Tests for iter_pages function."""

    def test_yields_pages_until_empty(self):
        """Pages are yielded in order, ending with the empty page."""
        mock_paginated = MagicMock()
        mock_paginated.get_page.side_effect = [["a", "b"], ["c"], []]

        pages = list(iter_pages(mock_paginated))

        assert pages == [["a", "b"], ["c"], []]
        assert [c.args[0] for c in mock_paginated.get_page.call_args_list] == [0, 1, 2]

    def test_empty_first_page(self):
        mock_paginated = MagicMock()
        mock_paginated.get_page.return_value = []

        assert list(iter_pages(mock_paginated)) == [[]]

    def test_stops_fetching_when_consumer_stops(self):
        """Pages are fetched lazily."""
        mock_paginated = MagicMock()
        mock_paginated.get_page.return_value = ["a"]

        pages = iter_pages(mock_paginated)
        next(pages)
        next(pages)

        assert mock_paginated.get_page.call_count == 2

    def test_github_error_raises_fetch_error(self):
        """A failed page request becomes a FetchError."""
        mock_paginated = MagicMock()
        error = GithubException(status=500, data={"message": "Server Error"}, headers={})
        mock_paginated.get_page.side_effect = [["a"], error]

        with pytest.raises(FetchError) as exc_info:
            list(iter_pages(mock_paginated, "open PRs of octo/repo"))

        assert "page 2 of open PRs of octo/repo" in str(exc_info.value)
        assert exc_info.value.__cause__ is error

    def test_connection_error_raises_fetch_error(self):
        """A dropped connection becomes a FetchError too."""
        mock_paginated = MagicMock()
        error = requests.exceptions.ConnectionError("connection reset")
        mock_paginated.get_page.side_effect = error

        with pytest.raises(FetchError) as exc_info:
            list(iter_pages(mock_paginated, "open PRs of octo/repo"))

        assert "page 1 of open PRs of octo/repo" in str(exc_info.value)
        assert exc_info.value.__cause__ is error
