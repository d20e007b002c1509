"""CloneOrchestrator: make sure a repository is present at its destination."""

import os
import shutil
import sys

from fuzzy_clone.clone.git_cloner import CloneAttemptFailed, CloneInterrupted, GitCloner
from fuzzy_clone.errors import CloneFailed, DestinationUnreadable, DestinationUnwritable


class CloneOrchestrator:
    """Creates the destination and clones into it when it is empty.

    A non-empty destination is assumed to already hold the repository.
    Its contents are not checked against the repository's remote.

    Args:
        cloner: Object with ``clone(url, dest)``. Defaults to GitCloner().
    """

    def __init__(self, cloner=None):
        self._cloner = cloner or GitCloner()

    def ensure_cloned(self, repository, dest: str) -> str:
        """Return *dest* after making sure *repository* is cloned there.

        Raises:
            DestinationUnwritable: If the directory cannot be created.
            DestinationUnreadable: If the directory cannot be listed.
            CloneFailed: If no transport produced a clone.
        """
        if not os.path.exists(dest):
            try:
                os.makedirs(dest, mode=0o755, exist_ok=True)
            except OSError as e:
                raise DestinationUnwritable(f"failed to prepare git dir {dest}: {e}") from e

        try:
            entries = os.listdir(dest)
        except OSError as e:
            raise DestinationUnreadable(f"failed to read {dest}: {e}") from e

        if entries:
            return dest

        self._clone(repository, dest)
        return dest

    def _clone(self, repository, dest):
        if not repository.is_clonable:
            raise CloneFailed(f"failed to clone repository: {repository.full_name} has no clone url")

        transports = [
            (name, url)
            for name, url in (("ssh", repository.ssh_url), ("https", repository.https_url))
            if url
        ]

        last_error = None
        for index, (name, url) in enumerate(transports):
            try:
                self._cloner.clone(url, dest)
                return
            except CloneInterrupted as e:
                _empty_directory(dest)
                raise CloneFailed(f"failed to clone {repository.full_name}: {e}") from e
            except CloneAttemptFailed as e:
                last_error = e
                _empty_directory(dest)
                if index + 1 < len(transports):
                    next_name = transports[index + 1][0]
                    print(
                        f"Warning: failed to clone with {name}, falling back to {next_name}: {e}",
                        file=sys.stderr,
                    )

        last_name = transports[-1][0]
        raise CloneFailed(
            f"failed to clone {repository.full_name} with {last_name}: {last_error}"
        ) from last_error


def _empty_directory(path):
    """Remove whatever a failed clone left behind, keeping *path* itself."""
    try:
        for entry in os.listdir(path):
            full = os.path.join(path, entry)
            if os.path.isdir(full) and not os.path.islink(full):
                shutil.rmtree(full)
            else:
                os.remove(full)
    except OSError as e:
        raise CloneFailed(f"failed to remove partial clone in {path}: {e}") from e
