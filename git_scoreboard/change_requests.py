"""Merged pull requests collected across repositories."""

import logging
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import ParseError
from .models import ChangeRequest, is_bot_login


def is_eligible(change_request: ChangeRequest, since: datetime) -> bool:
    """Check whether a merged PR counts toward the scoreboard.

    Args:
        change_request: The merged pull request
        since: Start of the time window

    Returns:
        True if merged at or after ``since`` by a known, non-bot author
    """
    if change_request.merged_at < since:
        return False
    if not change_request.author:
        return False
    if change_request.is_bot or is_bot_login(change_request.author):
        return False
    return True


class ChangeRequestSet:
    """Eligible merged PRs, keyed by (repo, number)."""

    def __init__(self, since: datetime):
        self.since = since
        self._items: Dict[tuple, ChangeRequest] = {}
        self.skipped = 0

    def add_repository(self, repo: str, records: Optional[Iterable[Dict]]) -> int:
        """Normalize and filter the PR records fetched for one repository.

        Args:
            repo: Repository name in format 'owner/repo'
            records: Raw PR records, or None when the fetch failed

        Returns:
            Number of PRs retained from this repository
        """
        retained = 0
        for record in records or []:
            try:
                change_request = ChangeRequest.from_record(record, repo)
            except ParseError as e:
                logging.warning(f"Skipping malformed PR record from {repo}: {e}")
                self.skipped += 1
                continue

            if not is_eligible(change_request, self.since):
                logging.debug(f"Skipping PR {repo}#{change_request.number} (outside window or bot author)")
                continue

            if change_request.key in self._items:
                logging.debug(f"Duplicate PR {repo}#{change_request.number} ignored")
                continue

            self._items[change_request.key] = change_request
            retained += 1

        return retained

    def authored_by(self, login: str) -> List[ChangeRequest]:
        return [cr for cr in self if cr.author == login]

    def authors(self) -> List[str]:
        return sorted({cr.author for cr in self._items.values()})

    def __iter__(self) -> Iterator[ChangeRequest]:
        for key in sorted(self._items):
            yield self._items[key]

    def __len__(self) -> int:
        return len(self._items)
