#!/usr/bin/env python3
"""
Git Scoreboard
Weekly contributor leaderboard for GitHub repositories.

Score = PRs×10 + small×5 + reviews×8 + fast×5 + deep×3 - mega×5 - driveby×2 - stale×3

Usage:
    ./git-scoreboard.py                              # current repo, last 7 days
    ./git-scoreboard.py 14                           # current repo, last 14 days
    ./git-scoreboard.py 7 owner/repo1 owner/repo2    # specific repos
"""

import sys

from git_scoreboard.cli import main


if __name__ == "__main__":
    sys.exit(main())
