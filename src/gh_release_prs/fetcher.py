"""Fetch pull requests, reviews and comments from the GitHub API."""

import logging
from datetime import datetime

from github import Github, GithubException
from github.IssueComment import IssueComment
from github.PullRequest import PullRequest
from github.PullRequestReview import PullRequestReview
from github.Repository import Repository
from requests.exceptions import RequestException

from .mapper import map_comment, map_pull_request, map_review
from .models import CommentInfo, PullRequestInfo, ReviewInfo, Sort
from .pages import iter_pages, paginate
from .sorting import sort_pull_requests

logger = logging.getLogger(__name__)

MAX_PER_PAGE = 100

ASCENDING_BY_MERGE_TIME = Sort(order="ASC", on_property="mergedAt")


class PullRequests:
    """Retrieve pull requests of a repository page by page.

    The list operations stop paginating as soon as the result is complete,
    so a repository with years of history is not walked end to end.
    """

    def __init__(self, client: Github):
        self.client = client

    def _repo(self, owner: str, repo: str) -> Repository:
        return self.client.get_repo(f"{owner}/{repo}")

    def get_single(self, owner: str, repo: str, number: int) -> PullRequestInfo | None:
        """Fetch one pull request, or None if it cannot be fetched."""
        try:
            pr = self._repo(owner, repo).get_pull(number)
            return map_pull_request(pr, "merged" if pr.merged_at else "open")
        except (GithubException, RequestException) as e:
            logger.warning(f"Cannot find PR {owner}/{repo}#{number} - {e}")
            return None

    def get_between_dates(
        self,
        owner: str,
        repo: str,
        from_date: datetime,
        to_date: datetime,
        max_pull_requests: int,
    ) -> list[PullRequestInfo]:
        """Fetch merged pull requests, newest merges first, back to `from_date`.

        Pages are requested sorted by merge time descending. Paging stops
        on an empty page, when a page starts with a PR merged before
        `from_date`, or once `max_pull_requests` are collected. The page
        that triggers the date stop is still processed in full, so it may
        contribute PRs merged before `from_date`. `to_date` is not applied
        here; callers trim the upper end of the window.

        Args:
            owner: Repository owner
            repo: Repository name
            from_date: Lower end of the merge window (timezone-aware)
            to_date: Upper end of the merge window (timezone-aware)
            max_pull_requests: Upper bound on the number of PRs returned

        Returns:
            Merged PRs sorted ascending by merge time

        Raises:
            FetchError: If a page cannot be fetched
        """
        logger.info(
            f"Fetching PRs merged in {owner}/{repo} between {from_date.isoformat()} and {to_date.isoformat()}"
        )
        merged_prs: list[PullRequestInfo] = []
        paginated = paginate(
            self._repo(owner, repo),
            PullRequest,
            "pulls",
            state="closed",
            sort="merged",
            per_page=min(MAX_PER_PAGE, max_pull_requests),
            direction="desc",
        )

        for prs in iter_pages(paginated, f"closed PRs of {owner}/{repo}"):
            for pr in prs:
                if len(merged_prs) >= max_pull_requests:
                    break
                if pr.merged_at:
                    merged_prs.append(map_pull_request(pr, "merged"))

            first_pr = prs[0] if prs else None
            if (
                first_pr is None
                or (first_pr.merged_at and first_pr.merged_at < from_date)
                or len(merged_prs) >= max_pull_requests
            ):
                if len(merged_prs) >= max_pull_requests:
                    logger.warning(f"Reached 'max_pull_requests' count {max_pull_requests}")
                # older pages can only hold PRs merged before from_date
                break

        logger.info(f"{owner}/{repo}: {len(merged_prs)} merged PRs")
        return sort_pull_requests(merged_prs, ASCENDING_BY_MERGE_TIME)

    def get_open(self, owner: str, repo: str, max_pull_requests: int) -> list[PullRequestInfo]:
        """Fetch open pull requests, newest first, up to `max_pull_requests`.

        Returns:
            Open PRs sorted ascending by creation time

        Raises:
            FetchError: If a page cannot be fetched
        """
        logger.info(f"Fetching open PRs of {owner}/{repo}")
        open_prs: list[PullRequestInfo] = []
        paginated = paginate(
            self._repo(owner, repo),
            PullRequest,
            "pulls",
            state="open",
            sort="created",
            per_page=MAX_PER_PAGE,
            direction="desc",
        )

        for prs in iter_pages(paginated, f"open PRs of {owner}/{repo}"):
            for pr in prs:
                if len(open_prs) >= max_pull_requests:
                    break
                open_prs.append(map_pull_request(pr, "open"))

            if not prs or len(open_prs) >= max_pull_requests:
                if len(open_prs) >= max_pull_requests:
                    logger.warning(f"Reached 'max_pull_requests' count {max_pull_requests}")
                break

        logger.info(f"{owner}/{repo}: {len(open_prs)} open PRs")
        return sort_pull_requests(open_prs, ASCENDING_BY_MERGE_TIME)

    def get_reviewers(self, owner: str, repo: str, pr: PullRequestInfo) -> None:
        """Set `pr.approved_reviewers` to everyone who approved the PR."""
        paginated = paginate(self._repo(owner, repo), PullRequestReview, f"pulls/{pr.number}/reviews")

        approved: list[str] = []
        for reviews in iter_pages(paginated, f"reviews of {owner}/{repo}#{pr.number}"):
            for review in map(map_review, reviews):
                if review.state == "APPROVED" and review.author and review.author not in approved:
                    approved.append(review.author)

        logger.debug(f"PR #{pr.number}: {len(approved)} approvals")
        pr.approved_reviewers = approved

    def get_reviews(self, owner: str, repo: str, pr: PullRequestInfo) -> None:
        """Set `pr.reviews` to all reviews of the PR."""
        paginated = paginate(
            self._repo(owner, repo),
            PullRequestReview,
            f"pulls/{pr.number}/reviews",
            sort="created",
            direction="desc",
        )

        pr_reviews: list[ReviewInfo] = []
        for reviews in iter_pages(paginated, f"reviews of {owner}/{repo}#{pr.number}"):
            pr_reviews.extend(map_review(review) for review in reviews)

        logger.debug(f"PR #{pr.number}: {len(pr_reviews)} reviews")
        pr.reviews = pr_reviews

    def get_comments(self, owner: str, repo: str, pr: PullRequestInfo) -> None:
        """Set `pr.comments` to all conversation comments of the PR."""
        paginated = paginate(
            self._repo(owner, repo),
            IssueComment,
            f"issues/{pr.number}/comments",
            sort="created",
            direction="desc",
        )

        pr_comments: list[CommentInfo] = []
        for comments in iter_pages(paginated, f"comments of {owner}/{repo}#{pr.number}"):
            pr_comments.extend(map_comment(comment) for comment in comments)

        logger.debug(f"PR #{pr.number}: {len(pr_comments)} comments")
        pr.comments = pr_comments
