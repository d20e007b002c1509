"""GitHubProvider: lists the authenticated user's repositories through the `gh` CLI."""

import json
import os
import subprocess
import sys
from typing import Iterator, List, Optional

from fuzzy_clone.errors import AuthenticationMissing, ProviderUnavailable
from fuzzy_clone.providers.base import RepositoryProvider
from fuzzy_clone.repository import GITHUB_ORIGIN, Repository

PER_PAGE = 100
AFFILIATIONS = ("organization_member", "owner")

MISSING_TOKEN_MESSAGE = (
    "a token is required for github: set FUZZY_CLONE_GITHUB_TOKEN or "
    "GITHUB_ACCESS_TOKEN, add [github] token to the config file, or log in "
    "with the github cli (gh auth login). The token needs at least repo:read."
)


class GitHubProvider(RepositoryProvider):
    """Fetches owned and organization repositories from GitHub.

    All subprocess calls go through _run_gh() so tests can replace them.

    Args:
        token: Explicit access token. When None, ``gh auth token`` is asked.
    """

    origin = GITHUB_ORIGIN

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def _run_gh(self, args, **kwargs):
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            **kwargs,
        )

    def resolve_token(self) -> str:
        """Return the configured token, falling back to ``gh auth token``.

        Raises:
            AuthenticationMissing: If no token can be found.
        """
        if self._token:
            return self._token
        try:
            result = self._run_gh(["gh", "auth", "token"])
        except FileNotFoundError as e:
            raise AuthenticationMissing(MISSING_TOKEN_MESSAGE) from e
        token = result.stdout.strip() if result.returncode == 0 else ""
        if not token:
            raise AuthenticationMissing(MISSING_TOKEN_MESSAGE)
        return token

    def fetch_all(self) -> List[Repository]:
        token = self.resolve_token()
        print("fetching github repos, this may take a bit...", file=sys.stderr)

        repositories = []
        seen = set()
        for affiliation in AFFILIATIONS:
            for page in self.pages(token, affiliation):
                for item in page:
                    repo = self._to_repository(item)
                    if repo.full_name in seen:
                        continue
                    seen.add(repo.full_name)
                    repositories.append(repo)
        return repositories

    def pages(self, token: str, affiliation: str) -> Iterator[list]:
        """Yield pages of raw repository objects until the listing is exhausted."""
        page = 1
        while True:
            items = self._fetch_page(token, affiliation, page)
            if not items:
                return
            yield items
            if len(items) < PER_PAGE:
                return
            page += 1

    def _fetch_page(self, token: str, affiliation: str, page: int) -> list:
        endpoint = (
            f"user/repos?visibility=all&sort=updated&affiliation={affiliation}"
            f"&per_page={PER_PAGE}&page={page}"
        )
        env = dict(os.environ, GH_TOKEN=token)
        try:
            result = self._run_gh(["gh", "api", "--method", "GET", endpoint], env=env)
        except FileNotFoundError as e:
            raise ProviderUnavailable("the github cli (gh) is not installed") from e

        if result.returncode != 0:
            raise ProviderUnavailable(
                f"failed to list github repositories ({affiliation}, page {page}): "
                f"{result.stderr.strip()}"
            )
        try:
            items = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ProviderUnavailable(f"unexpected response from github: {e}") from e
        if not isinstance(items, list):
            raise ProviderUnavailable("unexpected response from github: expected a list")
        return items

    @staticmethod
    def _to_repository(item) -> Repository:
        try:
            return Repository.from_github(item)
        except (KeyError, TypeError) as e:
            raise ProviderUnavailable(f"unexpected repository object from github: {e}") from e
