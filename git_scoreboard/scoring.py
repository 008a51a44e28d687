"""Weighted score applied to a contributor's metrics."""

from .models import ContributorMetrics

SCORE_WEIGHTS = {
    'prs': 10,
    'small': 5,
    'reviews': 8,
    'fast': 5,
    'deep_reviews': 3,
    'mega': -5,
    'driveby_reviews': -2,
    'stale': -3,
}

SCORE_FORMULA = "Score = PRs×10 + small×5 + reviews×8 + fast×5 + deep×3 - mega×5 - driveby×2 - stale×3"


def compute_score(metrics: ContributorMetrics) -> int:
    """Apply the score formula to a metric bundle.

    Args:
        metrics: Aggregated counts for one contributor

    Returns:
        Integer score (may be zero or negative)
    """
    return sum(weight * getattr(metrics, field) for field, weight in SCORE_WEIGHTS.items())
