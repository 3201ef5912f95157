"""Retrieve and order GitHub pull requests for release notes."""

from .fetcher import PullRequests
from .models import EMPTY_COMMENT_INFO, EMPTY_REVIEW_INFO, CommentInfo, PullRequestInfo, ReviewInfo, Sort
from .pages import FetchError
from .properties import retrieve_property
from .sorting import sort_pull_requests

__all__ = [
    "EMPTY_COMMENT_INFO",
    "EMPTY_REVIEW_INFO",
    "CommentInfo",
    "FetchError",
    "PullRequestInfo",
    "PullRequests",
    "ReviewInfo",
    "Sort",
    "retrieve_property",
    "sort_pull_requests",
]
