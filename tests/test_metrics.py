"""
Unit tests for MetricsAggregator
"""

import pytest

from git_scoreboard.change_requests import ChangeRequestSet
from git_scoreboard.metrics import MetricsAggregator, round_one_decimal
from git_scoreboard.reviews import ReviewSet


@pytest.fixture
def change_requests(since):
    return ChangeRequestSet(since)


@pytest.fixture
def reviews():
    return ReviewSet()


class TestRounding:
    @pytest.mark.parametrize('value,expected', [
        (13.0, 13.0),
        (1.25, 1.3),
        (1.24, 1.2),
        (0.05, 0.1),
        (2.0 / 3, 0.7),
        (0, 0),
    ])
    def test_half_up(self, value, expected):
        assert round_one_decimal(value) == expected


class TestMetricsAggregator:
    """Test cases for per-contributor aggregation."""

    def test_end_to_end_example(self, change_requests, reviews, make_pr, make_review):
        change_requests.add_repository('octo/app', [
            make_pr(1, author='alice', additions=30, deletions=10, merge_seconds=3600),
            make_pr(2, author='alice', additions=400, deletions=200, merge_seconds=90000),
        ])
        reviews.add_change_request_reviews('octo/app', 99, [
            make_review(user='alice', state='APPROVED', body='x' * 60),
        ])

        metrics = MetricsAggregator(change_requests, reviews).metrics_for('alice')

        assert metrics.prs == 2
        assert metrics.small == 1
        assert metrics.mega == 1
        assert metrics.fast == 1
        assert metrics.stale == 0
        assert metrics.avg_merge_hours == 13.0
        assert metrics.reviews == 1
        assert metrics.driveby_reviews == 0
        assert metrics.deep_reviews == 1
        assert metrics.avg_comment_length == 60.0
        assert metrics.score == 36

    def test_commented_only_contributor(self, change_requests, reviews, make_review):
        reviews.add_change_request_reviews('octo/app', 1, [
            make_review(user='carol', state='COMMENTED', body='Why this change?'),
        ])

        aggregated = MetricsAggregator(change_requests, reviews).aggregate()

        assert [m.user for m in aggregated] == ['carol']
        carol = aggregated[0]
        assert carol.prs == 0
        assert carol.reviews == 0
        assert carol.avg_comment_length == 0
        assert carol.score == 0

    def test_unknown_login_is_all_zero(self, change_requests, reviews):
        metrics = MetricsAggregator(change_requests, reviews).metrics_for('nobody')

        assert metrics.user == 'nobody'
        assert metrics.prs == 0
        assert metrics.avg_merge_hours == 0
        assert metrics.score == 0

    @pytest.mark.parametrize('lines,small,mega', [
        (0, 1, 0),
        (99, 1, 0),
        (100, 0, 0),
        (500, 0, 0),
        (501, 0, 1),
    ])
    def test_size_boundaries(self, change_requests, reviews, make_pr, lines, small, mega):
        change_requests.add_repository('octo/app', [make_pr(1, additions=lines, deletions=0)])

        metrics = MetricsAggregator(change_requests, reviews).metrics_for('alice')

        assert metrics.small == small
        assert metrics.mega == mega

    @pytest.mark.parametrize('seconds,fast,stale', [
        (86399, 1, 0),
        (86400, 0, 0),
        (432000, 0, 0),
        (432001, 0, 1),
    ])
    def test_duration_boundaries(self, change_requests, reviews, make_pr, seconds, fast, stale):
        change_requests.add_repository('octo/app', [make_pr(1, merge_seconds=seconds)])

        metrics = MetricsAggregator(change_requests, reviews).metrics_for('alice')

        assert metrics.fast == fast
        assert metrics.stale == stale

    def test_review_averages_only_cover_counted_reviews(self, change_requests, reviews, make_review):
        reviews.add_change_request_reviews('octo/app', 1, [
            make_review(user='bob', state='APPROVED', body=''),
            make_review(user='bob', state='CHANGES_REQUESTED', body='x' * 100),
            make_review(user='bob', state='COMMENTED', body='x' * 1000),
        ])

        metrics = MetricsAggregator(change_requests, reviews).metrics_for('bob')

        assert metrics.reviews == 2
        assert metrics.driveby_reviews == 1
        assert metrics.deep_reviews == 1
        assert metrics.avg_comment_length == 50.0

    def test_reviewer_without_prs_has_zero_merge_average(self, change_requests, reviews, make_pr, make_review):
        change_requests.add_repository('octo/app', [make_pr(1, author='alice')])
        reviews.add_change_request_reviews('octo/app', 1, [make_review(user='bob', body='Nice')])

        aggregated = {m.user: m for m in MetricsAggregator(change_requests, reviews).aggregate()}

        assert set(aggregated) == {'alice', 'bob'}
        assert aggregated['bob'].prs == 0
        assert aggregated['bob'].avg_merge_hours == 0
        assert aggregated['alice'].reviews == 0

    def test_bot_activity_excluded(self, change_requests, reviews, make_pr, make_review):
        change_requests.add_repository('octo/app', [
            make_pr(1, author='dependabot', is_bot=True),
            make_pr(2, author='alice'),
        ])
        reviews.add_change_request_reviews('octo/app', 2, [make_review(user='copilot[bot]')])

        assert MetricsAggregator(change_requests, reviews).contributors() == ['alice']

    def test_aggregate_is_idempotent(self, change_requests, reviews, make_pr, make_review):
        change_requests.add_repository('octo/app', [make_pr(1, author='zoe'), make_pr(2, author='adam')])
        reviews.add_change_request_reviews('octo/app', 1, [make_review(user='adam', body='ok')])
        aggregator = MetricsAggregator(change_requests, reviews)

        first = aggregator.aggregate()
        second = aggregator.aggregate()

        assert first == second
        assert [m.user for m in first] == ['adam', 'zoe']

    def test_average_merge_hours_rounded(self, change_requests, reviews, make_pr):
        change_requests.add_repository('octo/app', [
            make_pr(1, merge_seconds=3600),
            make_pr(2, merge_seconds=5400),
            make_pr(3, merge_seconds=5400),
        ])

        metrics = MetricsAggregator(change_requests, reviews).metrics_for('alice')

        # (1 + 1.5 + 1.5) / 3 = 1.333...
        assert metrics.avg_merge_hours == 1.3
