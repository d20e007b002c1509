"""RepositoryProvider: the capability of listing repositories for an identity."""

from abc import ABC, abstractmethod
from typing import List

from fuzzy_clone.repository import Repository


class RepositoryProvider(ABC):
    """Source of truth for the repositories a user can clone.

    Implementations raise AuthenticationMissing when they cannot resolve a
    credential and ProviderUnavailable for any transport or API failure.
    There is no partial result: either every page is fetched or the call
    fails.
    """

    origin: str

    @abstractmethod
    def fetch_all(self) -> List[Repository]:
        """Return every repository visible to the configured identity."""
