"""Fetches merged PRs and their reviews from GitHub.

Any object with ``fetch_pull_requests(repo)`` and ``fetch_reviews(repo, number)``
can stand in for :class:`GitHubDataSource`. Both methods return lists of plain
records and never raise: a failed fetch yields an empty list.
"""

import logging
from typing import Dict, List

from .api_client import API_URL, GitHubAPIClient
from .errors import FetchError

DEFAULT_PR_LIMIT = 200
PAGE_SIZE = 100
REVIEWS_PER_PR = 100

MERGED_PULL_REQUESTS_QUERY = """
query($owner: String!, $name: String!, $first: Int!, $after: String) {
  repository(owner: $owner, name: $name) {
    pullRequests(states: MERGED, first: $first, after: $after,
                 orderBy: {field: CREATED_AT, direction: DESC}) {
      pageInfo { hasNextPage endCursor }
      nodes {
        number
        additions
        deletions
        createdAt
        mergedAt
        author { login __typename }
      }
    }
  }
}
"""


def _to_pull_request_record(node: Dict) -> Dict:
    author = node.get('author')
    if author:
        author = {'login': author.get('login'), 'isBot': author.get('__typename') == 'Bot'}
    return {
        'number': node.get('number'),
        'author': author,
        'additions': node.get('additions'),
        'deletions': node.get('deletions'),
        'createdAt': node.get('createdAt'),
        'mergedAt': node.get('mergedAt'),
    }


def _to_review_record(review: Dict) -> Dict:
    user = review.get('user')
    return {
        'user': {'login': user.get('login')} if user else None,
        'state': review.get('state'),
        'body': review.get('body'),
    }


class GitHubDataSource:
    """Reads merged PRs (GraphQL) and PR reviews (REST) for the scoreboard."""

    def __init__(self, api_client: GitHubAPIClient, pr_limit: int = DEFAULT_PR_LIMIT):
        self.api_client = api_client
        self.pr_limit = pr_limit

    def fetch_pull_requests(self, repo: str) -> List[Dict]:
        """Fetch the most recently created merged PRs of a repository.

        Args:
            repo: Repository name in format 'owner/repo'

        Returns:
            Up to ``pr_limit`` PR records, or an empty list if the fetch failed
        """
        try:
            return self._fetch_pull_requests(repo)
        except (FetchError, ValueError, KeyError, TypeError) as e:
            logging.warning(f"Could not fetch PRs from {repo}: {e}")
            return []

    def _fetch_pull_requests(self, repo: str) -> List[Dict]:
        owner, name = repo.split('/', 1)
        records = []
        cursor = None

        while len(records) < self.pr_limit:
            data = self.api_client.post_graphql(MERGED_PULL_REQUESTS_QUERY, {
                'owner': owner,
                'name': name,
                'first': min(PAGE_SIZE, self.pr_limit - len(records)),
                'after': cursor,
            })
            repository = data.get('repository')
            if repository is None:
                raise FetchError(f"Repository {repo} not found")

            connection = repository['pullRequests']
            records.extend(_to_pull_request_record(node) for node in connection['nodes'] or [])

            page_info = connection['pageInfo']
            if not page_info.get('hasNextPage'):
                break
            cursor = page_info.get('endCursor')

        logging.debug(f"Fetched {len(records)} merged PRs from {repo}")
        return records

    def fetch_reviews(self, repo: str, number: int) -> List[Dict]:
        """Fetch the reviews submitted on one PR.

        Args:
            repo: Repository name in format 'owner/repo'
            number: PR number

        Returns:
            Review records, or an empty list if the fetch failed
        """
        url = f"{API_URL}/repos/{repo}/pulls/{number}/reviews"
        try:
            reviews = self.api_client.get_paginated(url, max_pages=REVIEWS_PER_PR // PAGE_SIZE)
        except (FetchError, ValueError) as e:
            logging.warning(f"Could not fetch reviews for {repo}#{number}: {e}")
            return []
        return [_to_review_record(review) for review in reviews]
