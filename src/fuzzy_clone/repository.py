"""Repository value object: a clonable repository and its transport URLs."""

from dataclasses import dataclass
from typing import Optional

GITHUB_ORIGIN = "github.com"


@dataclass(frozen=True)
class Repository:
    """A remote repository identified by (origin, full_name).

    Either URL may be missing. A repository with neither is kept in the
    cache but cannot be cloned.
    """

    origin: str
    full_name: str
    ssh_url: Optional[str] = None
    https_url: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.origin}/{self.full_name}"

    @property
    def basename(self) -> str:
        """Last path segment of full_name (``owner/name`` -> ``name``)."""
        return self.full_name.split("/")[-1]

    @property
    def is_clonable(self) -> bool:
        return bool(self.ssh_url or self.https_url)

    def to_dict(self) -> dict:
        """Serialize to the cache file's per-repository shape."""
        return {
            "fullName": self.full_name,
            "sshUrl": self.ssh_url,
            "httpsUrl": self.https_url,
        }

    @classmethod
    def from_dict(cls, origin: str, data: dict) -> "Repository":
        """Build a Repository from a cache entry.

        Raises:
            ValueError: If the entry does not have the expected fields.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        full_name = data.get("fullName")
        if not isinstance(full_name, str) or not full_name:
            raise ValueError("missing or empty 'fullName'")
        ssh_url = data.get("sshUrl")
        https_url = data.get("httpsUrl")
        for key, value in (("sshUrl", ssh_url), ("httpsUrl", https_url)):
            if value is not None and not isinstance(value, str):
                raise ValueError(f"'{key}' must be a string or null")
        return cls(origin=origin, full_name=full_name, ssh_url=ssh_url, https_url=https_url)

    @classmethod
    def from_github(cls, data: dict) -> "Repository":
        """Build a Repository from a GitHub REST API repository object."""
        return cls(
            origin=GITHUB_ORIGIN,
            full_name=data["full_name"],
            ssh_url=data.get("ssh_url"),
            https_url=data.get("clone_url"),
        )


def display_labels(repositories):
    """Return picker labels, dropping the origin prefix when there is only one origin."""
    origins = {repo.origin for repo in repositories}
    if len(origins) == 1:
        return [repo.full_name for repo in repositories]
    return [repo.label for repo in repositories]
