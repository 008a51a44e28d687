"""Superlative awards picked from the full metric set."""

from typing import Callable, Iterable, List, Optional

from .models import Award, ContributorMetrics

SPEED_DEMON_MIN_PRS = 2
DEEP_DIVER_MIN_REVIEWS = 2
NEEDS_LOVE_MIN_PRS = 1


def _pick(candidates: List[ContributorMetrics], value: Callable[[ContributorMetrics], float],
          lowest: bool) -> Optional[ContributorMetrics]:
    """Return the first candidate holding the lowest (or highest) value."""
    winner = None
    for candidate in candidates:
        if winner is None:
            winner = candidate
        elif lowest and value(candidate) < value(winner):
            winner = candidate
        elif not lowest and value(candidate) > value(winner):
            winner = candidate
    return winner


def select_awards(metrics: Iterable[ContributorMetrics]) -> List[Award]:
    """Pick the Speed Demon, Deep Diver and Needs Love winners.

    Every contributor is considered, including those left off the ranked
    table. Candidates are scanned in login order and the first one wins a tie.
    Awards nobody qualifies for are omitted.

    Args:
        metrics: Metric bundles of all contributors

    Returns:
        Awards in display order
    """
    everyone = sorted(metrics, key=lambda m: m.user)
    awards = []

    speed = _pick([m for m in everyone if m.prs >= SPEED_DEMON_MIN_PRS],
                  lambda m: m.avg_merge_hours, lowest=True)
    if speed is not None:
        awards.append(Award('Speed Demon', '🏎️', speed.user, speed.avg_merge_hours, 'h', 'avg merge'))

    diver = _pick([m for m in everyone if m.reviews >= DEEP_DIVER_MIN_REVIEWS],
                  lambda m: m.avg_comment_length, lowest=False)
    if diver is not None:
        awards.append(Award('Deep Diver', '🤿', diver.user, diver.avg_comment_length, '', 'avg comment length'))

    waiting = _pick([m for m in everyone if m.prs >= NEEDS_LOVE_MIN_PRS],
                    lambda m: m.avg_merge_hours, lowest=False)
    if waiting is not None:
        awards.append(Award('Needs Love', '😭', waiting.user, waiting.avg_merge_hours, 'h', 'avg wait'))

    return awards
