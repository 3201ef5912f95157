"""Command-line interface for gh-release-prs."""

import json
import logging
import sys
from datetime import datetime, timezone

import click
from dotenv import load_dotenv
from github import Auth, Github, GithubException
from requests.exceptions import RequestException

from .fetcher import PullRequests
from .models import PullRequestInfo, Report, Sort, parse_timestamp
from .pages import FetchError
from .sorting import sort_pull_requests

load_dotenv()

logger = logging.getLogger(__name__)


def parse_repo(ctx: click.Context, param: click.Parameter, value: str) -> tuple[str, str]:
    """Split an OWNER/NAME repository argument."""
    owner, _, name = value.partition("/")
    if not owner or not name or "/" in name:
        raise click.BadParameter("Repository must be given as OWNER/NAME")
    return owner, name


def parse_datetime(ctx: click.Context, param: click.Parameter, value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or timestamp."""
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except ValueError as e:
        raise click.BadParameter(f"Invalid date format. Use ISO-8601, e.g. 2025-06-01T00:00:00Z: {e}") from e


def get_github_client(token: str | None) -> Github:
    """Create a GitHub client, authenticated when a token is given."""
    if token:
        return Github(auth=Auth.Token(token), lazy=True)
    return Github(lazy=True)


def configure_logging(log_file: str, verbose: bool) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file, mode="w")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        root_logger.addHandler(console_handler)


@click.command()
@click.option("--repo", "repository", required=True, callback=parse_repo, help="Repository as OWNER/NAME")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), help="Output JSON file")
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub Personal Access Token")
@click.option("--pr", "pr_number", type=int, help="Fetch a single pull request by number")
@click.option("--open", "open_prs", is_flag=True, help="Fetch open pull requests instead of merged ones")
@click.option("--from-date", callback=parse_datetime, help="Start of the merge window (ISO-8601)")
@click.option("--to-date", callback=parse_datetime, help="End of the merge window (ISO-8601, default: now)")
@click.option("--max-pull-requests", type=click.IntRange(min=1), default=200, show_default=True, help="Maximum number of pull requests to fetch")
@click.option("--sort", "sort_order", type=click.Choice(["ASC", "DESC"], case_sensitive=False), default="ASC", show_default=True, help="Sort order")
@click.option("--sort-on", type=click.Choice(["mergedAt", "label"]), default="mergedAt", show_default=True, help="Property to sort on")
@click.option("--fetch-reviewers", is_flag=True, help="Collect approving reviewers for each pull request")
@click.option("--fetch-reviews", is_flag=True, help="Collect reviews for each pull request")
@click.option("--fetch-comments", is_flag=True, help="Collect comments for each pull request")
@click.option("--verbose", is_flag=True, help="Enable verbose logging")
def main(
    repository: tuple[str, str],
    output: str | None,
    token: str | None,
    pr_number: int | None,
    open_prs: bool,
    from_date: datetime | None,
    to_date: datetime | None,
    max_pull_requests: int,
    sort_order: str,
    sort_on: str,
    fetch_reviewers: bool,
    fetch_reviews: bool,
    fetch_comments: bool,
    verbose: bool,
) -> None:
    """Fetch pull requests of a GitHub repository for release notes."""
    owner, repo = repository
    configure_logging(f"{owner}-{repo}.log", verbose)

    if output is None:
        output = f"{owner}-{repo}.json"

    if pr_number is not None and open_prs:
        click.echo("Error: --pr and --open cannot be combined", err=True)
        sys.exit(1)
    if (pr_number is not None or open_prs) and (from_date or to_date):
        click.echo("Error: --from-date and --to-date cannot be combined with --pr or --open", err=True)
        sys.exit(1)
    if pr_number is None and not open_prs and from_date is None:
        click.echo("Error: one of --pr, --open or --from-date is required", err=True)
        sys.exit(1)

    if token:
        logger.info("Authenticating with Personal Access Token")
    else:
        logger.info("Using unauthenticated access (60 req/hr limit)")
    fetcher = PullRequests(get_github_client(token))

    try:
        prs: list[PullRequestInfo]
        if pr_number is not None:
            mode = "single"
            pr = fetcher.get_single(owner, repo, pr_number)
            prs = [pr] if pr else []
        elif open_prs:
            mode = "open"
            prs = fetcher.get_open(owner, repo, max_pull_requests)
        else:
            mode = "between-dates"
            to_date = to_date or datetime.now(timezone.utc)
            prs = fetcher.get_between_dates(owner, repo, from_date, to_date, max_pull_requests)

        for pr in prs:
            if fetch_reviewers:
                fetcher.get_reviewers(owner, repo, pr)
            if fetch_reviews:
                fetcher.get_reviews(owner, repo, pr)
            if fetch_comments:
                fetcher.get_comments(owner, repo, pr)
    except (FetchError, GithubException, RequestException) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    sort_pull_requests(prs, Sort(order=sort_order.upper(), on_property=sort_on))

    report: Report = {
        "repository": f"{owner}/{repo}",
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "mode": mode,
        "pull_requests": [pr.to_dict() for pr in prs],
    }
    with open(output, "w") as f:
        json.dump(report, f, indent=2)

    logger.info(f"Report with {len(prs)} PRs written to: {output}")


if __name__ == "__main__":
    main()
