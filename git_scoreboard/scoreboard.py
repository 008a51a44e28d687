"""Runs one scoreboard: fetch, filter, aggregate, rank and award."""

import logging
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .awards import select_awards
from .change_requests import ChangeRequestSet
from .config import DEFAULT_MAX_WORKERS
from .errors import ConfigurationError
from .metrics import MetricsAggregator
from .models import Award, ContributorMetrics
from .ranking import rank_contributors
from .reviews import ReviewSet
from .time_window import TimeWindow


def validate_repository(repo: str) -> str:
    """Check that a repository name has the 'owner/repo' form.

    Raises:
        ConfigurationError: If the name is malformed
    """
    name = repo.strip()
    owner, _, rest = name.partition('/')
    if not owner or not rest or '/' in rest:
        raise ConfigurationError(f"Repository '{repo}' must use owner/repo format.")
    return name


def build_label(repos: Sequence[str]) -> str:
    """Describe the scanned repositories for the scoreboard banner.

    Args:
        repos: Scanned repositories ('owner/repo')

    Returns:
        The repository name for a single repo, 'owner (N repos)' when all share
        one owner, otherwise 'N repos'
    """
    if len(repos) == 1:
        return repos[0]
    owners = {repo.split('/', 1)[0] for repo in repos}
    if len(owners) == 1:
        return f"{owners.pop()} ({len(repos)} repos)"
    return f"{len(repos)} repos"


def _progress(message: str):
    print(message, file=sys.stderr, flush=True)


def _skipped_note(skipped: int) -> str:
    return f" ({skipped} malformed skipped)" if skipped else ""


@dataclass
class ScoreboardResult:
    """Everything the presenter needs to render one run."""
    label: str
    window: TimeWindow
    metrics: List[ContributorMetrics]
    ranked: List[Tuple[int, ContributorMetrics]]
    awards: List[Award]
    total_prs: int = 0
    total_reviews: int = 0
    repositories: List[str] = field(default_factory=list)


class GitScoreboard:
    """Builds the contributor scoreboard for a set of repositories."""

    def __init__(self, data_source, max_workers: int = DEFAULT_MAX_WORKERS):
        """Initialize the scoreboard.

        Args:
            data_source: Object providing ``fetch_pull_requests(repo)`` and
                ``fetch_reviews(repo, number)``
            max_workers: Upper bound on concurrent fetches
        """
        self.data_source = data_source
        self.max_workers = max_workers

    def collect_change_requests(self, repos: Sequence[str], window: TimeWindow) -> ChangeRequestSet:
        """Fetch merged PRs of every repository in parallel.

        A repository whose fetch fails contributes no PRs.
        """
        fetched: Dict[str, list] = {}
        max_workers = max(1, min(self.max_workers, len(repos)))

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_repo = {
                executor.submit(self.data_source.fetch_pull_requests, repo): repo
                for repo in repos
            }
            for future in as_completed(future_to_repo):
                repo = future_to_repo[future]
                try:
                    fetched[repo] = future.result()
                except Exception as e:
                    logging.error(f"Error fetching PRs from {repo}: {e}", exc_info=True)
                    fetched[repo] = []
                _progress(f"Fetched {len(fetched[repo])} merged PRs from {repo}")

        change_requests = ChangeRequestSet(window.since)
        for repo in sorted(fetched):
            retained = change_requests.add_repository(repo, fetched[repo])
            logging.info(f"{repo}: {retained} PRs merged since {window.since_iso}")
        return change_requests

    def collect_reviews(self, change_requests: ChangeRequestSet) -> ReviewSet:
        """Fetch the reviews of every retained PR in parallel."""
        fetched: Dict[tuple, list] = {}
        reviews = ReviewSet()
        if not len(change_requests):
            return reviews

        total = len(change_requests)
        completed = 0
        max_workers = max(1, min(self.max_workers, total))

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_key = {
                executor.submit(self.data_source.fetch_reviews, cr.repo, cr.number): cr.key
                for cr in change_requests
            }
            for future in as_completed(future_to_key):
                repo, number = future_to_key[future]
                try:
                    fetched[(repo, number)] = future.result()
                except Exception as e:
                    logging.error(f"Error fetching reviews for {repo}#{number}: {e}", exc_info=True)
                    fetched[(repo, number)] = []
                completed += 1
                if completed % 10 == 0 or completed == total:
                    _progress(f"  Progress: reviews fetched for {completed}/{total} PRs")

        for repo, number in sorted(fetched):
            reviews.add_change_request_reviews(repo, number, fetched[(repo, number)])
        return reviews

    def run(self, repos: Sequence[str], window: TimeWindow,
            label: Optional[str] = None) -> ScoreboardResult:
        """Build the scoreboard for the given repositories and time window.

        Args:
            repos: Repositories in format 'owner/repo'
            window: Merge time window
            label: Banner label (derived from ``repos`` when omitted)

        Returns:
            ScoreboardResult with ranked contributors and awards
        """
        repos = list(dict.fromkeys(validate_repository(repo) for repo in repos))
        if not repos:
            raise ConfigurationError("No repositories to scan.")

        change_requests = self.collect_change_requests(repos, window)
        _progress("")
        _progress(f"Total merged PRs (non-bot): {len(change_requests)}{_skipped_note(change_requests.skipped)}")

        reviews = self.collect_reviews(change_requests)
        _progress(f"Total reviews: {len(reviews)}{_skipped_note(reviews.skipped)}")
        _progress("")

        return summarize(change_requests, reviews, window, label or build_label(repos), repos)


def summarize(change_requests: ChangeRequestSet, reviews: ReviewSet, window: TimeWindow,
              label: str, repos: Sequence[str] = ()) -> ScoreboardResult:
    """Aggregate, rank and award a fixed snapshot of fetched data."""
    metrics = MetricsAggregator(change_requests, reviews).aggregate()
    return ScoreboardResult(
        label=label,
        window=window,
        metrics=metrics,
        ranked=rank_contributors(metrics),
        awards=select_awards(metrics),
        total_prs=len(change_requests),
        total_reviews=len(reviews),
        repositories=list(repos),
    )
