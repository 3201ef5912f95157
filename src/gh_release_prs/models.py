"""Data models for pull request retrieval."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, TypedDict

PRStatus = Literal["open", "merged"]
SortOrder = Literal["ASC", "DESC"]
SortProperty = Literal["mergedAt", "label"]


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is given."""
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _isoformat(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None


@dataclass
class ReviewInfo:
    """A review submitted on a pull request."""

    id: int
    html_url: str
    submitted_at: datetime | None
    author: str
    body: str
    state: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "html_url": self.html_url,
            "submitted_at": _isoformat(self.submitted_at),
            "author": self.author,
            "body": self.body,
            "state": self.state,
        }


@dataclass
class CommentInfo:
    """A conversation comment on a pull request."""

    id: int
    html_url: str
    created_at: datetime | None
    author: str
    body: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "html_url": self.html_url,
            "created_at": _isoformat(self.created_at),
            "author": self.author,
            "body": self.body,
        }


EMPTY_REVIEW_INFO = ReviewInfo(id=0, html_url="", submitted_at=None, author="", body="", state=None)

EMPTY_COMMENT_INFO = CommentInfo(id=0, html_url="", created_at=None, author="", body="")


@dataclass
class PullRequestInfo:
    """A pull request normalized from the GitHub API.

    `approved_reviewers`, `reviews` and `comments` stay empty until the
    matching enrichment call on `PullRequests` has run.
    """

    number: int
    title: str
    html_url: str
    base_branch: str
    created_at: datetime
    repo_name: str
    status: PRStatus
    branch: str | None = None
    merged_at: datetime | None = None
    merge_commit_sha: str = ""
    author: str = ""
    labels: set[str] = field(default_factory=set)
    milestone: str = ""
    body: str = ""
    assignees: list[str] = field(default_factory=list)
    requested_reviewers: list[str] = field(default_factory=list)
    approved_reviewers: list[str] = field(default_factory=list)
    reviews: list[ReviewInfo] | None = None
    comments: list[CommentInfo] | None = None

    @property
    def effective_at(self) -> datetime:
        """Merge time if merged, otherwise creation time."""
        return self.merged_at or self.created_at

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "html_url": self.html_url,
            "base_branch": self.base_branch,
            "branch": self.branch,
            "created_at": _isoformat(self.created_at),
            "merged_at": _isoformat(self.merged_at),
            "merge_commit_sha": self.merge_commit_sha,
            "author": self.author,
            "repo_name": self.repo_name,
            "labels": sorted(self.labels),
            "milestone": self.milestone,
            "body": self.body,
            "assignees": list(self.assignees),
            "requested_reviewers": list(self.requested_reviewers),
            "approved_reviewers": list(self.approved_reviewers),
            "reviews": [r.to_dict() for r in self.reviews] if self.reviews is not None else None,
            "comments": [c.to_dict() for c in self.comments] if self.comments is not None else None,
            "status": self.status,
        }


@dataclass(frozen=True)
class Sort:
    """Sort configuration for a list of pull requests."""

    order: SortOrder = "ASC"
    on_property: SortProperty = "mergedAt"


class Report(TypedDict):
    """JSON report written by the command-line interface."""

    repository: str
    generated_at: str
    mode: Literal["single", "between-dates", "open"]
    pull_requests: list[dict[str, Any]]
