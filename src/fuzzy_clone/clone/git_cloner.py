"""GitCloner: runs `git clone` into an existing empty directory."""

import subprocess
import sys
from typing import Optional

from fuzzy_clone.clone.managed_subprocess import ManagedSubprocess

DEFAULT_CLONE_TIMEOUT = 600.0


class CloneAttemptFailed(Exception):
    """A single `git clone` invocation did not succeed."""


class CloneInterrupted(CloneAttemptFailed):
    """The user interrupted the clone; no other transport should be tried."""


class GitCloner:
    """Clones a URL into a directory with a bounded wait.

    Args:
        timeout: Seconds to wait for `git clone` before terminating it.
            None waits forever.
    """

    def __init__(self, timeout: Optional[float] = DEFAULT_CLONE_TIMEOUT):
        self.timeout = timeout

    def clone(self, url: str, dest: str) -> None:
        """Clone *url* into *dest*, which must exist and be empty.

        git keeps the terminal so it can prompt for host keys, passphrases
        and credentials.

        Raises:
            CloneInterrupted: If the user pressed Ctrl+C.
            CloneAttemptFailed: If git could not be started, timed out, or
                exited non-zero.
        """
        print("Downloading...", file=sys.stderr)
        try:
            process = subprocess.Popen(["git", "clone", url, "."], cwd=dest)
        except OSError as e:
            raise CloneAttemptFailed(f"failed to start git: {e}") from e

        with ManagedSubprocess(process, label="git clone") as managed:
            returncode = managed.wait(timeout=self.timeout)

        if managed.interrupted:
            raise CloneInterrupted(f"clone of {url} was interrupted")
        if managed.timed_out:
            raise CloneAttemptFailed(f"clone of {url} timed out after {self.timeout}s")
        if returncode != 0:
            raise CloneAttemptFailed(f"git clone {url} exited with status {returncode}")
