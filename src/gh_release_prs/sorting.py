"""Ordering of pull request lists."""

import locale
from functools import cmp_to_key

from .models import PullRequestInfo, Sort


def normalize_sort(sort: Sort | str) -> Sort:
    """Convert a sort configuration to its structured form.

    The legacy string form only selects the order ("ASC" or "DESC", any
    case) and always sorts on merge time. Unrecognized strings sort
    ascending.
    """
    if isinstance(sort, str):
        order = "DESC" if sort.upper() == "DESC" else "ASC"
        return Sort(order=order, on_property="mergedAt")
    return sort


def compare(a: PullRequestInfo, b: PullRequestInfo, sort: Sort) -> int:
    """Three-way comparison of two pull requests on the configured property."""
    if sort.on_property == "mergedAt":
        aa = a.effective_at
        bb = b.effective_at
        if aa < bb:
            return -1
        if bb < aa:
            return 1
        return 0

    # every other property sorts by title
    return locale.strcoll(a.title, b.title)


def sort_pull_requests(pull_requests: list[PullRequestInfo], sort: Sort | str) -> list[PullRequestInfo]:
    """Sort pull requests in place and return the same list.

    The sort is stable; descending order swaps the comparator arguments, so
    equal elements keep their input order in both directions.
    """
    sort_config = normalize_sort(sort)

    if sort_config.order == "ASC":
        pull_requests.sort(key=cmp_to_key(lambda a, b: compare(a, b, sort_config)))
    else:
        pull_requests.sort(key=cmp_to_key(lambda b, a: compare(a, b, sort_config)))
    return pull_requests
