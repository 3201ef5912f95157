"""Page-by-page traversal of GitHub list endpoints."""

import logging
from collections.abc import Iterator
from typing import Any

from github import GithubException
from github.PaginatedList import PaginatedList
from github.Repository import Repository
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when fetching a page from GitHub fails."""


def paginate(repo: Repository, content_class: type, path: str, **params: Any) -> PaginatedList:
    """Build a paginated request against a repository sub-resource.

    Unlike the PyGithub convenience getters this passes every query
    parameter through, including `per_page`.

    Args:
        repo: Repository the resource belongs to
        content_class: PyGithub class each record is wrapped in
        path: Resource path relative to the repository URL, e.g. "pulls"
        **params: Query parameters sent with every page request

    Returns:
        A lazy PaginatedList; nothing is requested until a page is read
    """
    return PaginatedList(content_class, repo.requester, f"{repo.url}/{path}", params)


def iter_pages(paginated: PaginatedList, description: str = "") -> Iterator[list]:
    """Yield pages in the order the API returns them.

    Iteration ends after the first empty page, so callers always see the
    empty page and can use it as their own stop signal.

    Raises:
        FetchError: If any page request fails
    """
    page = 0
    while True:
        try:
            items = paginated.get_page(page)
        except (GithubException, RequestException) as e:
            raise FetchError(f"Failed to fetch page {page + 1} of {description or 'results'}: {e}") from e

        logger.debug(f"Fetched page {page + 1} of {description or 'results'}: {len(items)} records")
        yield items

        if not items:
            return
        page += 1
