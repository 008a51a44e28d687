"""Per-contributor metric aggregation.

PR metrics and review metrics are computed separately over their own
collections and merged by login, so each average is divided by the number of
items it actually covers.
"""

import logging
import math
from collections import defaultdict
from typing import Dict, List

from .change_requests import ChangeRequestSet
from .models import ChangeRequest, ContributorMetrics
from .reviews import ReviewSet, is_counted_review, is_deep_review, is_driveby_review
from .scoring import compute_score

SMALL_PR_MAX_LINES = 100      # small: lines changed < 100
MEGA_PR_MIN_LINES = 500       # mega: lines changed > 500
FAST_MERGE_SECONDS = 86400    # fast: merged in < 24h
STALE_MERGE_SECONDS = 432000  # stale: merged in > 5 days


def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def is_small(change_request: ChangeRequest) -> bool:
    return change_request.lines_changed < SMALL_PR_MAX_LINES


def is_mega(change_request: ChangeRequest) -> bool:
    return change_request.lines_changed > MEGA_PR_MIN_LINES


def is_fast(change_request: ChangeRequest) -> bool:
    return change_request.merge_seconds < FAST_MERGE_SECONDS


def is_stale(change_request: ChangeRequest) -> bool:
    return change_request.merge_seconds > STALE_MERGE_SECONDS


class MetricsAggregator:
    """Joins the PR and review sets of one run into per-contributor metrics."""

    def __init__(self, change_requests: ChangeRequestSet, reviews: ReviewSet):
        self.change_requests = change_requests
        self.reviews = reviews
        self._pr_metrics: Dict[str, Dict] = {}
        self._review_metrics: Dict[str, Dict] = {}
        self._computed = False

    def contributors(self) -> List[str]:
        """All PR authors and reviewers, sorted by login."""
        return sorted(set(self.change_requests.authors()) | set(self.reviews.reviewers()))

    def _compute(self):
        if self._computed:
            return

        merge_hours = defaultdict(list)
        pr_counts = defaultdict(lambda: {'prs': 0, 'small': 0, 'mega': 0, 'fast': 0, 'stale': 0})
        for change_request in self.change_requests:
            counts = pr_counts[change_request.author]
            counts['prs'] += 1
            counts['small'] += is_small(change_request)
            counts['mega'] += is_mega(change_request)
            counts['fast'] += is_fast(change_request)
            counts['stale'] += is_stale(change_request)
            merge_hours[change_request.author].append(change_request.merge_seconds / 3600)

        for user, counts in pr_counts.items():
            hours = merge_hours[user]
            counts['avg_merge_hours'] = round_one_decimal(sum(hours) / len(hours))
            self._pr_metrics[user] = counts

        body_lengths = defaultdict(list)
        review_counts = defaultdict(lambda: {'reviews': 0, 'driveby_reviews': 0, 'deep_reviews': 0})
        for review in self.reviews:
            if not is_counted_review(review):
                continue
            counts = review_counts[review.user]
            counts['reviews'] += 1
            counts['driveby_reviews'] += is_driveby_review(review)
            counts['deep_reviews'] += is_deep_review(review)
            body_lengths[review.user].append(review.body_length)

        for user, counts in review_counts.items():
            lengths = body_lengths[user]
            counts['avg_comment_length'] = round_one_decimal(sum(lengths) / len(lengths))
            self._review_metrics[user] = counts

        self._computed = True
        logging.debug(f"Aggregated {len(self._pr_metrics)} authors and {len(self._review_metrics)} reviewers")

    def metrics_for(self, login: str) -> ContributorMetrics:
        """Build the scored metric bundle for one login.

        Logins without any activity get a bundle of zeros.
        """
        self._compute()
        metrics = ContributorMetrics(
            user=login,
            **self._pr_metrics.get(login, {}),
            **self._review_metrics.get(login, {}),
        )
        metrics.score = compute_score(metrics)
        return metrics

    def aggregate(self) -> List[ContributorMetrics]:
        """Compute the scored metrics of every contributor, sorted by login."""
        return [self.metrics_for(login) for login in self.contributors()]
