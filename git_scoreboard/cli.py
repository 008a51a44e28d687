"""Command line entry point: ``git-scoreboard [days] [owner/repo ...]``."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .api_client import GitHubAPIClient
from .config import ScoreboardConfig
from .data_source import GitHubDataSource
from .errors import ConfigurationError
from .output import OutputFormatter
from .repo_detection import detect_repositories
from .scoreboard import GitScoreboard
from .time_window import compute_time_window, parse_days

USAGE = "Usage: git-scoreboard [days] [owner/repo ...]"


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='git-scoreboard',
        description="Weekly contributor leaderboard for GitHub repositories.",
        epilog=(
            "Without repositories, the origin remotes of the git submodules are scanned, "
            "or the origin remote of the current checkout."
        ),
    )
    parser.add_argument('days', nargs='?', default=None,
                        help="Number of days to look back (default: 7)")
    parser.add_argument('repos', nargs='*', metavar='owner/repo',
                        help="Repositories to scan")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script."""
    load_dotenv()
    configure_logging(os.environ.get('LOG_LEVEL', 'INFO').upper())

    args = build_parser().parse_args(argv)
    config = ScoreboardConfig.from_env()

    try:
        days = parse_days(args.days)
        repos = args.repos or detect_repositories()
        if not repos:
            raise ConfigurationError(
                "Not in a git repo with a GitHub remote. Pass repos as arguments."
            )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    print(f"Scanning: {' '.join(repos)}", file=sys.stderr)
    window = compute_time_window(days)

    api_client = GitHubAPIClient(config.token, timeout=config.timeout,
                                 pool_size=max(config.max_workers, 10))
    data_source = GitHubDataSource(api_client, pr_limit=config.pr_limit)
    scoreboard = GitScoreboard(data_source, max_workers=config.max_workers)

    try:
        result = scoreboard.run(repos, window)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    use_color = config.use_color and sys.stdout.isatty()
    OutputFormatter(use_color=use_color).print_scoreboard(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
