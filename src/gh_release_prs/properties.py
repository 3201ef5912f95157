"""Read pull request fields as display strings."""

import logging
from dataclasses import fields
from datetime import datetime

from .models import PullRequestInfo

logger = logging.getLogger(__name__)

PROPERTY_NAMES = frozenset(f.name for f in fields(PullRequestInfo))

# Names used by existing release-notes configurations
PROPERTY_ALIASES = {
    "htmlURL": "html_url",
    "baseBranch": "base_branch",
    "createdAt": "created_at",
    "mergedAt": "merged_at",
    "mergeCommitSha": "merge_commit_sha",
    "repoName": "repo_name",
    "requestedReviewers": "requested_reviewers",
    "approvedReviewers": "approved_reviewers",
}


def retrieve_property(pr: PullRequestInfo, property_name: str, use_case: str) -> str:
    """Return a pull request field rendered as a single string.

    Unknown property names, and properties without a value, fall back to
    the body with a warning. Sets are joined in sorted order, lists in
    their own order.

    Args:
        pr: Pull request to read from
        property_name: Field name, snake_case or one of PROPERTY_ALIASES
        use_case: Where the property is used, only for the warning message

    Returns:
        The property value as a string
    """
    name = PROPERTY_ALIASES.get(property_name, property_name)
    value = getattr(pr, name) if name in PROPERTY_NAMES else None

    if value is None:
        logger.warning(f"The provided property '{property_name}' for `{use_case}` is not valid. Fallback to 'body'")
        return pr.body

    if isinstance(value, (set, frozenset)):
        return ",".join(sorted(value))
    if isinstance(value, list):
        return ",".join(str(item) for item in value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)
