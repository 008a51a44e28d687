"""Data models for the contributor scoreboard."""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from .errors import ParseError
from .time_window import parse_timestamp

APPROVED = 'APPROVED'
CHANGES_REQUESTED = 'CHANGES_REQUESTED'
COMMENTED = 'COMMENTED'

# Only these review states count toward review metrics
COUNTED_REVIEW_STATES = (APPROVED, CHANGES_REQUESTED)


def is_bot_login(login: Optional[str]) -> bool:
    """Check whether a login follows a bot naming convention.

    ``gh`` reports app authors as ``app/<name>``, the REST API as ``<name>[bot]``.
    """
    if not login:
        return False
    return login.startswith('app/') or login.endswith('[bot]')


def _int_field(record: Dict, key: str) -> int:
    value = record.get(key)
    if value is None:
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ParseError(f"Field '{key}' is not an integer: {value!r}") from None
    if number < 0:
        raise ParseError(f"Field '{key}' is negative: {value!r}")
    return number


@dataclass(frozen=True)
class ChangeRequest:
    """One merged pull request."""
    repo: str
    number: int
    author: Optional[str]
    is_bot: bool
    additions: int
    deletions: int
    created_at: datetime
    merged_at: datetime

    @property
    def key(self) -> tuple:
        return (self.repo, self.number)

    @property
    def lines_changed(self) -> int:
        return self.additions + self.deletions

    @property
    def merge_seconds(self) -> float:
        """Seconds between creation and merge."""
        return (self.merged_at - self.created_at).total_seconds()

    @classmethod
    def from_record(cls, record: Dict, repo: str) -> 'ChangeRequest':
        """Build a ChangeRequest from a fetched record.

        Args:
            record: ``{number, author: {login, isBot}, additions, deletions, createdAt, mergedAt}``
            repo: Repository the record was fetched from ('owner/name')

        Returns:
            The normalized ChangeRequest

        Raises:
            ParseError: If the number or a timestamp is missing or malformed
        """
        if not isinstance(record, dict):
            raise ParseError(f"Pull request record is not an object: {record!r}")

        number = record.get('number')
        if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
            raise ParseError(f"Pull request in {repo} has an invalid number: {number!r}")

        author = record.get('author')
        if not isinstance(author, dict):
            author = {}
        login = author.get('login') or None
        is_bot = bool(author.get('isBot', author.get('is_bot', False)))

        return cls(
            repo=repo,
            number=number,
            author=login,
            is_bot=is_bot,
            additions=_int_field(record, 'additions'),
            deletions=_int_field(record, 'deletions'),
            created_at=parse_timestamp(record.get('createdAt')),
            merged_at=parse_timestamp(record.get('mergedAt')),
        )


@dataclass(frozen=True)
class Review:
    """One submitted review on a pull request."""
    repo: str
    pr_number: int
    user: Optional[str]
    state: str
    body: Optional[str] = None

    @property
    def body_length(self) -> int:
        """Character count of the body (0 when absent)."""
        return len(self.body) if self.body else 0

    @property
    def counts(self) -> bool:
        return self.state in COUNTED_REVIEW_STATES

    @classmethod
    def from_record(cls, record: Dict, repo: str, pr_number: int) -> 'Review':
        """Build a Review from a fetched record.

        Args:
            record: ``{user: {login}, state, body}``
            repo: Repository of the reviewed pull request
            pr_number: Number of the reviewed pull request

        Returns:
            The normalized Review
        """
        if not isinstance(record, dict):
            raise ParseError(f"Review record is not an object: {record!r}")

        user = record.get('user')
        if not isinstance(user, dict):
            user = {}
        body = record.get('body')
        if body is not None and not isinstance(body, str):
            raise ParseError(f"Review body on {repo}#{pr_number} is not text: {body!r}")

        return cls(
            repo=repo,
            pr_number=pr_number,
            user=user.get('login') or None,
            state=str(record.get('state') or ''),
            body=body,
        )


@dataclass
class ContributorMetrics:
    """Aggregated activity of one contributor."""
    user: str
    prs: int = 0
    small: int = 0
    mega: int = 0
    fast: int = 0
    stale: int = 0
    avg_merge_hours: float = 0.0
    reviews: int = 0
    driveby_reviews: int = 0
    deep_reviews: int = 0
    avg_comment_length: float = 0.0
    score: int = 0


@dataclass(frozen=True)
class Award:
    """A superlative won by one contributor."""
    title: str
    emoji: str
    user: str
    value: float
    unit: str  # appended directly to the value ('h' or '')
    label: str

    @property
    def detail(self) -> str:
        return f"{self.value}{self.unit} {self.label}"
