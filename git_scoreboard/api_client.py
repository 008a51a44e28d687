"""GitHub API client for making requests and handling pagination."""

import logging
from typing import Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import FetchError

API_URL = "https://api.github.com"
GRAPHQL_URL = f"{API_URL}/graphql"
DEFAULT_TIMEOUT = 30


class GitHubAPIClient:
    """Handles GitHub API requests with retry logic, timeouts and pagination."""

    def __init__(self, token: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT,
                 pool_size: int = 20):
        """Initialize the GitHub API client.

        Args:
            token: GitHub token for authentication (optional)
            timeout: Seconds to wait for each request
            pool_size: Connections kept per host, at least the number of fetch workers
        """
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=pool_size,
            pool_maxsize=pool_size,
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504]
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)
        self.session.headers.update({'Accept': 'application/vnd.github+json'})

        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Rate limits will be much lower.")
            logging.warning("Set GITHUB_TOKEN or log in with 'gh auth login'.")

    def _check_response(self, response: requests.Response, url: str):
        if response.status_code == 403:
            raise FetchError(f"Rate limit exceeded or access denied for {url}")
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise FetchError(f"GitHub API error for {url}: {e}") from e

    def get_paginated(self, url: str, params: Optional[Dict] = None,
                      max_pages: Optional[int] = None) -> List[Dict]:
        """Fetch the pages of a paginated GitHub REST endpoint.

        Args:
            url: The API endpoint URL
            params: Query parameters
            max_pages: Stop after this many pages (None = until the last page)

        Returns:
            List of all items from the fetched pages

        Raises:
            FetchError: On HTTP errors, rate limiting or network failures
        """
        results = []
        page = 1
        per_page = 100

        params = dict(params or {})
        params['per_page'] = per_page

        while True:
            params['page'] = page
            logging.debug(f"Fetching page {page} from {url}")
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                raise FetchError(f"Request to {url} failed: {e}") from e

            self._check_response(response, url)
            data = response.json()

            if not data:
                break
            if not isinstance(data, list):
                raise FetchError(f"Expected a list from {url}, got {type(data).__name__}")

            results.extend(data)

            if len(data) < per_page:
                break
            if max_pages is not None and page >= max_pages:
                break

            page += 1

        logging.debug(f"Fetched {len(results)} total items from {url}")
        return results

    def post_graphql(self, query: str, variables: Optional[Dict] = None) -> Dict:
        """Make a GraphQL query to the GitHub API.

        Args:
            query: GraphQL query string
            variables: Optional query variables

        Returns:
            The ``data`` member of the response

        Raises:
            FetchError: If the request fails or the response carries errors
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self.session.post(GRAPHQL_URL, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise FetchError(f"GraphQL request failed: {e}") from e

        self._check_response(response, GRAPHQL_URL)
        result = response.json()

        if result.get("errors"):
            raise FetchError(f"GraphQL query failed: {result['errors']}")

        return result.get("data") or {}
