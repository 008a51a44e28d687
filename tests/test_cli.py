"""
Unit tests for the command line entry point
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import patch

from git_scoreboard.cli import build_parser, main
from git_scoreboard.config import ScoreboardConfig
from git_scoreboard.models import ContributorMetrics
from git_scoreboard.scoreboard import ScoreboardResult
from git_scoreboard.time_window import compute_time_window


@pytest.fixture(autouse=True)
def isolated_environment():
    """Keep .env files and the gh CLI out of CLI tests."""
    with patch('git_scoreboard.cli.load_dotenv'), \
            patch('git_scoreboard.cli.ScoreboardConfig.from_env',
                  return_value=ScoreboardConfig(token='test_token', use_color=False)):
        yield


@pytest.fixture
def result():
    alice = ContributorMetrics(user='alice', prs=1, small=1, fast=1, avg_merge_hours=2.0, score=20)
    return ScoreboardResult(
        label='octo/app',
        window=compute_time_window(7, now=datetime(2024, 3, 10, tzinfo=timezone.utc)),
        metrics=[alice],
        ranked=[(1, alice)],
        awards=[],
        total_prs=1,
        repositories=['octo/app'],
    )


class TestBuildParser:
    def test_days_and_repos(self):
        args = build_parser().parse_args(['14', 'octo/app', 'octo/lib'])
        assert args.days == '14'
        assert args.repos == ['octo/app', 'octo/lib']

    def test_no_arguments(self):
        args = build_parser().parse_args([])
        assert args.days is None
        assert args.repos == []


class TestMain:
    """Test cases for main()."""

    def test_invalid_days(self, capsys):
        assert main(['seven', 'octo/app']) == 1

        err = capsys.readouterr().err
        assert 'Error:' in err
        assert 'Usage: git-scoreboard [days] [owner/repo ...]' in err

    def test_no_repository_detected(self, capsys):
        with patch('git_scoreboard.cli.detect_repositories', return_value=[]):
            assert main([]) == 1

        assert 'Pass repos as arguments' in capsys.readouterr().err

    def test_malformed_repository(self, capsys):
        assert main(['7', 'octo']) == 1

        assert 'owner/repo format' in capsys.readouterr().err

    def test_prints_scoreboard(self, capsys, result):
        with patch('git_scoreboard.cli.GitScoreboard') as mock_scoreboard:
            mock_scoreboard.return_value.run.return_value = result
            assert main(['7', 'octo/app']) == 0

        repos, window = mock_scoreboard.return_value.run.call_args.args
        assert repos == ['octo/app']
        assert window.days == 7

        captured = capsys.readouterr()
        assert 'Scanning: octo/app' in captured.err
        assert 'GIT SCOREBOARD' in captured.out
        assert 'alice' in captured.out

    def test_detected_repositories_used(self, result):
        with patch('git_scoreboard.cli.detect_repositories', return_value=['octo/app', 'octo/lib']), \
                patch('git_scoreboard.cli.GitScoreboard') as mock_scoreboard:
            mock_scoreboard.return_value.run.return_value = result
            assert main(['3']) == 0

        repos, window = mock_scoreboard.return_value.run.call_args.args
        assert repos == ['octo/app', 'octo/lib']
        assert window.days == 3

    def test_help_does_not_load_configuration(self, capsys):
        with patch('git_scoreboard.cli.ScoreboardConfig.from_env') as mock_from_env:
            with pytest.raises(SystemExit) as exc_info:
                main(['--help'])

        assert exc_info.value.code == 0
        mock_from_env.assert_not_called()
        assert 'git-scoreboard' in capsys.readouterr().out

    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'debug')
        with patch('git_scoreboard.cli.configure_logging') as mock_configure, \
                patch('git_scoreboard.cli.detect_repositories', return_value=[]):
            main([])

        mock_configure.assert_called_once_with('DEBUG')
