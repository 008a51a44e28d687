"""Runtime settings read from the environment (and an optional .env file)."""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional

from .api_client import DEFAULT_TIMEOUT
from .data_source import DEFAULT_PR_LIMIT

DEFAULT_MAX_WORKERS = 10


def _get_gh_cli_token() -> Optional[str]:
    """Ask the GitHub CLI for its token, if it is installed and logged in."""
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True, text=True, timeout=10
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    return None


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.warning(f"Invalid {name} value '{raw}', using default: {default}")
        return default
    if value < 1:
        logging.warning(f"{name} must be at least 1, using default: {default}")
        return default
    return value


@dataclass(frozen=True)
class ScoreboardConfig:
    """Settings for one scoreboard run."""
    token: Optional[str] = None
    max_workers: int = DEFAULT_MAX_WORKERS
    pr_limit: int = DEFAULT_PR_LIMIT
    timeout: int = DEFAULT_TIMEOUT
    use_color: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None,
                 use_gh_cli: bool = True) -> 'ScoreboardConfig':
        """Build the configuration from environment variables.

        Args:
            env: Mapping to read (defaults to ``os.environ``)
            use_gh_cli: Fall back to ``gh auth token`` when no token variable is set

        Returns:
            The resolved configuration
        """
        if env is None:
            env = os.environ

        token = env.get('GITHUB_TOKEN') or env.get('GH_TOKEN')
        if not token and use_gh_cli:
            token = _get_gh_cli_token()

        return cls(
            token=token or None,
            max_workers=_positive_int(env, 'SCOREBOARD_MAX_WORKERS', DEFAULT_MAX_WORKERS),
            pr_limit=_positive_int(env, 'SCOREBOARD_PR_LIMIT', DEFAULT_PR_LIMIT),
            timeout=_positive_int(env, 'SCOREBOARD_TIMEOUT', DEFAULT_TIMEOUT),
            use_color='NO_COLOR' not in env,
        )
