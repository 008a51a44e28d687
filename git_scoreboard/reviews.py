"""Reviews submitted on the retained pull requests."""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import ParseError
from .models import APPROVED, Review, is_bot_login

# Review bodies longer than this count as deep reviews
DEEP_REVIEW_MIN_CHARS = 50


def is_counted_review(review: Review) -> bool:
    """APPROVED and CHANGES_REQUESTED count; COMMENTED and anything else do not."""
    return review.counts


def is_driveby_review(review: Review) -> bool:
    """An approval with an empty or missing body."""
    return review.state == APPROVED and not review.body


def is_deep_review(review: Review, min_length: int = DEEP_REVIEW_MIN_CHARS) -> bool:
    """A counted review whose body is longer than ``min_length`` characters."""
    return review.counts and review.body_length > min_length


class ReviewSet:
    """Reviews grouped by the (repo, number) of the reviewed PR."""

    def __init__(self):
        self._by_pr: Dict[tuple, List[Review]] = {}
        self.skipped = 0

    def add_change_request_reviews(self, repo: str, pr_number: int,
                                   records: Optional[Iterable[Dict]]) -> int:
        """Normalize the reviews fetched for one pull request.

        Reviews without a user or from a bot-named account are dropped.
        Fetching the same PR twice replaces the earlier reviews.

        Args:
            repo: Repository name in format 'owner/repo'
            pr_number: Reviewed PR number
            records: Raw review records, or None when the fetch failed

        Returns:
            Number of reviews kept
        """
        kept = []
        for record in records or []:
            try:
                review = Review.from_record(record, repo, pr_number)
            except ParseError as e:
                logging.warning(f"Skipping malformed review on {repo}#{pr_number}: {e}")
                self.skipped += 1
                continue

            if not review.user or is_bot_login(review.user):
                continue
            kept.append(review)

        self._by_pr[(repo, pr_number)] = kept
        return len(kept)

    def by_user(self, login: str) -> List[Review]:
        return [review for review in self if review.user == login]

    def reviewers(self) -> List[str]:
        return sorted({review.user for review in self})

    def __iter__(self) -> Iterator[Review]:
        for key in sorted(self._by_pr):
            yield from self._by_pr[key]

    def __len__(self) -> int:
        return sum(len(reviews) for reviews in self._by_pr.values())
