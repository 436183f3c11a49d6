"""
GitHub forge adapter.

Looks up pull requests through the issue search API and confirms each hit by
comparing comment bodies exactly, since search matching is fuzzy.

Optional environment variables (.env file):
    - GITHUB_TOKEN: API token, raises the search rate limit
    - GITHUB_API_URL: API base (default: https://api.github.com)
    - GITHUB_WEB_URL: Web base (default: https://github.com)
"""

import logging
import os
from typing import Any

import requests
from dotenv import load_dotenv

from models.forge import PullRequestCandidate

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_WEB_URL = "https://github.com"


class GitHubRepository:
    """A repository hosted on GitHub, e.g. "openjdk/jdk"."""

    repository_type = "git"

    def __init__(
        self,
        full_name: str,
        token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        web_base_url: str = DEFAULT_WEB_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.name = full_name
        self.api_url = api_url.rstrip("/")
        self.web_base_url = web_base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/vnd.github+json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    @classmethod
    def from_env(cls, full_name: str) -> "GitHubRepository":
        load_dotenv()
        return cls(
            full_name,
            token=os.getenv("GITHUB_TOKEN"),
            api_url=os.getenv("GITHUB_API_URL", DEFAULT_API_URL),
            web_base_url=os.getenv("GITHUB_WEB_URL", DEFAULT_WEB_URL),
        )

    def __repr__(self) -> str:
        return f"GitHubRepository({self.name})"

    def web_url(self, commit_hash: str) -> str:
        return f"{self.web_base_url}/{self.name}/commit/{commit_hash}"

    def _get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        response = self.session.get(url, params=params, timeout=30)
        response.raise_for_status()
        return response.json()

    def _has_comment(self, comments_url: str, author: str | None, body: str) -> bool:
        for comment in self._get(comments_url, params={"per_page": 100}):
            if (comment.get("body") or "").strip() != body:
                continue
            if author is None or comment.get("user", {}).get("login") == author:
                return True
        return False

    def find_pull_requests_with_comment(
        self, author: str | None, body: str
    ) -> list[PullRequestCandidate]:
        """
        Find pull requests (open or closed) carrying a comment equal to `body`.

        Args:
            author: Only consider comments by this login, or anyone when None
            body: Exact comment text

        Returns:
            Every matching pull request; callers decide what multiple hits mean

        Raises:
            requests.HTTPError: if GitHub rejects a request
        """
        query = f'"{body}" repo:{self.name} is:pr in:comments'
        result = self._get(f"{self.api_url}/search/issues", params={"q": query})

        candidates = []
        for item in result.get("items", []):
            if not self._has_comment(item["comments_url"], author, body):
                continue
            candidates.append(
                PullRequestCandidate(
                    number=item["number"],
                    title=item.get("title", ""),
                    web_url=item["html_url"],
                )
            )
        logger.debug("Comment %r found on %d pull requests", body, len(candidates))
        return candidates
