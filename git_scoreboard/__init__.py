"""Git Scoreboard - weekly contributor leaderboard for GitHub repositories."""

from .models import ChangeRequest, Review, ContributorMetrics, Award
from .errors import ScoreboardError, ConfigurationError, FetchError, ParseError
from .time_window import TimeWindow, compute_time_window, parse_days, parse_timestamp
from .change_requests import ChangeRequestSet
from .reviews import ReviewSet
from .metrics import MetricsAggregator
from .scoring import compute_score, SCORE_FORMULA
from .ranking import rank_contributors
from .awards import select_awards
from .api_client import GitHubAPIClient
from .data_source import GitHubDataSource
from .scoreboard import GitScoreboard, ScoreboardResult
from .output import OutputFormatter

__version__ = "1.0.0"

__all__ = [
    'ChangeRequest',
    'Review',
    'ContributorMetrics',
    'Award',
    'ScoreboardError',
    'ConfigurationError',
    'FetchError',
    'ParseError',
    'TimeWindow',
    'compute_time_window',
    'parse_days',
    'parse_timestamp',
    'ChangeRequestSet',
    'ReviewSet',
    'MetricsAggregator',
    'compute_score',
    'SCORE_FORMULA',
    'rank_contributors',
    'select_awards',
    'GitHubAPIClient',
    'GitHubDataSource',
    'GitScoreboard',
    'ScoreboardResult',
    'OutputFormatter',
]
