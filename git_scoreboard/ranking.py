"""Ordering of scored contributors into the leaderboard."""

from typing import Iterable, List, Tuple

from .models import ContributorMetrics


def rank_contributors(metrics: Iterable[ContributorMetrics]) -> List[Tuple[int, ContributorMetrics]]:
    """Sort contributors by score and assign display ranks.

    Equal scores are ordered by login. Contributors with a score of zero or
    below are left out before ranks are assigned.

    Args:
        metrics: Scored metric bundles

    Returns:
        List of (rank, metrics) with ranks 1..n
    """
    ordered = sorted(metrics, key=lambda m: (-m.score, m.user))
    positive = [m for m in ordered if m.score > 0]
    return list(enumerate(positive, start=1))
