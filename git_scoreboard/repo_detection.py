"""Finds the GitHub repositories to scan from the local git checkout."""

import logging
import os
import re
import subprocess
from typing import List, Optional

GIT_TIMEOUT = 10

# https://github.com/owner/repo(.git), git@github.com:owner/repo(.git), ssh://git@github.com/owner/repo
GITHUB_REMOTE_PATTERN = re.compile(r'github\.com[:/]+(?P<slug>[^/\s]+/[^/\s]+?)(?:\.git)?/?$')


def _run_git(args: List[str], cwd: str) -> Optional[str]:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd, capture_output=True, text=True, timeout=GIT_TIMEOUT
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logging.debug(f"git {' '.join(args)} failed: {e}")
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def repo_slug_from_remote(remote_url: str) -> Optional[str]:
    """Extract 'owner/repo' from a GitHub remote URL.

    Args:
        remote_url: Remote URL as printed by ``git remote get-url``

    Returns:
        The slug, or None for remotes that are not on GitHub
    """
    match = GITHUB_REMOTE_PATTERN.search(remote_url.strip())
    if not match:
        return None
    return match.group('slug')


def origin_slug(path: str) -> Optional[str]:
    remote = _run_git(["remote", "get-url", "origin"], cwd=path)
    if not remote:
        return None
    return repo_slug_from_remote(remote)


def submodule_paths(cwd: str) -> List[str]:
    """List the submodule paths declared in ``.gitmodules``."""
    output = _run_git(
        ["config", "--file", ".gitmodules", "--get-regexp", r"submodule\..*\.path"],
        cwd=cwd,
    )
    if not output:
        return []
    paths = []
    for line in output.splitlines():
        parts = line.split(maxsplit=1)
        if len(parts) == 2:
            paths.append(parts[1])
    return paths


def detect_repositories(cwd: Optional[str] = None) -> List[str]:
    """Resolve the repositories to scan when none were given.

    Submodules take precedence: if ``.gitmodules`` lists any submodule with a
    GitHub origin, all of those are scanned. Otherwise the current checkout's
    origin remote is used.

    Args:
        cwd: Directory to inspect (defaults to the working directory)

    Returns:
        List of 'owner/repo' names, empty if nothing could be detected
    """
    cwd = cwd or os.getcwd()
    repos = []

    if os.path.isfile(os.path.join(cwd, '.gitmodules')):
        for path in submodule_paths(cwd):
            slug = origin_slug(os.path.join(cwd, path))
            if slug and slug not in repos:
                repos.append(slug)
        if repos:
            logging.info(f"Detected {len(repos)} submodule repositories")

    if not repos:
        slug = origin_slug(cwd)
        if slug:
            repos.append(slug)

    return repos
