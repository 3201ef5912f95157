"""Map PyGithub objects to internal pull request entities."""

from github.IssueComment import IssueComment
from github.PullRequest import PullRequest
from github.PullRequestReview import PullRequestReview

from .models import CommentInfo, PRStatus, PullRequestInfo, ReviewInfo

STATUS_LABEL_PREFIX = "--rcba-"


def _login(user) -> str:
    """Return a user's handle, or an empty string for a missing user."""
    if user is None:
        return ""
    return user.login or ""


def status_label(status: PRStatus) -> str:
    """Synthetic label recording the open/merged status in the label set."""
    return f"{STATUS_LABEL_PREFIX}{status}"


def map_pull_request(pr: PullRequest, status: PRStatus = "open") -> PullRequestInfo:
    """Convert a PyGithub PullRequest into a PullRequestInfo.

    Every field has a default so that sparse API payloads never fail to map.

    Args:
        pr: Pull request as returned by the list or get endpoints
        status: Status tag to record on the entity and as a synthetic label

    Returns:
        The mapped PullRequestInfo
    """
    base = pr.base
    head = pr.head
    base_repo = base.repo if base else None

    labels = {(label.name or "").lower() for label in pr.labels or []}
    labels.add(status_label(status))

    return PullRequestInfo(
        number=pr.number,
        title=pr.title or "",
        html_url=pr.html_url or "",
        base_branch=base.ref if base else "",
        branch=head.ref if head else None,
        created_at=pr.created_at,
        merged_at=pr.merged_at if pr.merged_at else None,
        merge_commit_sha=pr.merge_commit_sha or "",
        author=_login(pr.user),
        repo_name=base_repo.full_name if base_repo else "",
        labels=labels,
        milestone=pr.milestone.title if pr.milestone and pr.milestone.title else "",
        body=pr.body or "",
        assignees=[_login(assignee) for assignee in pr.assignees or []],
        requested_reviewers=[_login(reviewer) for reviewer in pr.requested_reviewers or []],
        status=status,
    )


def map_review(review: PullRequestReview) -> ReviewInfo:
    """Convert a PyGithub PullRequestReview into a ReviewInfo."""
    return ReviewInfo(
        id=review.id,
        html_url=review.html_url or "",
        submitted_at=review.submitted_at if review.submitted_at else None,
        author=_login(review.user),
        body=review.body or "",
        state=review.state or None,
    )


def map_comment(comment: IssueComment) -> CommentInfo:
    """Convert a PyGithub IssueComment into a CommentInfo."""
    return CommentInfo(
        id=comment.id,
        html_url=comment.html_url or "",
        created_at=comment.created_at if comment.created_at else None,
        author=_login(comment.user),
        body=comment.body or "",
    )
