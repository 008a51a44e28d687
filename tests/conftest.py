"""Shared fixtures for building fetched records."""

from datetime import datetime, timedelta, timezone

import pytest

BASE_TIME = datetime(2024, 3, 10, 9, 0, 0, tzinfo=timezone.utc)
SINCE = datetime(2024, 3, 3, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    return dt.strftime('%Y-%m-%dT%H:%M:%SZ')


@pytest.fixture
def since():
    return SINCE


@pytest.fixture
def make_pr():
    """Factory for raw PR records as returned by the data source."""
    def _make_pr(number, author='alice', additions=10, deletions=0, merge_seconds=3600,
                 merged_at=BASE_TIME, is_bot=False):
        created_at = merged_at - timedelta(seconds=merge_seconds)
        return {
            'number': number,
            'author': {'login': author, 'isBot': is_bot} if author is not None else None,
            'additions': additions,
            'deletions': deletions,
            'createdAt': iso(created_at),
            'mergedAt': iso(merged_at),
        }
    return _make_pr


@pytest.fixture
def make_review():
    """Factory for raw review records as returned by the data source."""
    def _make_review(user='bob', state='APPROVED', body=''):
        return {
            'user': {'login': user} if user is not None else None,
            'state': state,
            'body': body,
        }
    return _make_review
