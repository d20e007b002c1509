"""CacheStore: on-disk snapshot of repositories plus a freshness record."""

import json
import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple

from fuzzy_clone.errors import CacheCorrupt, CachePersistFailure
from fuzzy_clone.repository import Repository

PREFIX = "fuzzy-clone"
CACHE_FILE_NAME = "cache.json"
FRESHNESS_FILE_NAME = "cache.timestamp"

Snapshot = Dict[str, List[Repository]]


def default_cache_dir(environ=None) -> str:
    """Return ``$XDG_CACHE_HOME/fuzzy-clone/cache`` (``~/.cache`` when unset)."""
    environ = os.environ if environ is None else environ
    cache_home = environ.get("XDG_CACHE_HOME") or os.path.expanduser("~/.cache")
    return os.path.join(cache_home, PREFIX, "cache")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def group_by_origin(repositories) -> Snapshot:
    """Group repositories by origin, keeping input order and the first of any duplicate."""
    grouped: Snapshot = {}
    seen = set()
    for repo in repositories:
        key = (repo.origin, repo.full_name)
        if key in seen:
            continue
        seen.add(key)
        grouped.setdefault(repo.origin, []).append(repo)
    return grouped


class CacheStore:
    """Persists repositories grouped by origin in a JSON file.

    The freshness record lives in a separate file so that clearing the
    snapshot and tracking refresh times stay independent.

    Args:
        location: Directory holding both files. Defaults to the XDG cache dir.
        clock: Callable returning the current aware datetime (injectable for tests).
    """

    def __init__(self, location: Optional[str] = None, clock: Callable[[], datetime] = _utcnow):
        self._location = location or default_cache_dir()
        self._clock = clock

    @property
    def location(self) -> str:
        return self._location

    @property
    def path(self) -> str:
        return os.path.join(self._location, CACHE_FILE_NAME)

    @property
    def freshness_path(self) -> str:
        return os.path.join(self._location, FRESHNESS_FILE_NAME)

    def get(self) -> Tuple[Snapshot, bool]:
        """Read the snapshot.

        Returns:
            (snapshot, present). A missing file or an empty snapshot is
            reported as not present.

        Raises:
            CacheCorrupt: If the file exists but cannot be read or parsed.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                contents = f.read()
        except FileNotFoundError:
            return {}, False
        except OSError as e:
            raise CacheCorrupt(f"failed to read cache file {self.path}: {e}") from e

        try:
            data = json.loads(contents)
        except json.JSONDecodeError as e:
            raise CacheCorrupt(f"failed to parse cache file {self.path}: {e}") from e

        snapshot = self._parse(data)
        present = sum(len(repos) for repos in snapshot.values()) > 0
        return snapshot, present

    def repositories(self) -> Tuple[List[Repository], bool]:
        """Return the snapshot flattened into one list, plus the present flag."""
        snapshot, present = self.get()
        repos = [repo for repos in snapshot.values() for repo in repos]
        return repos, present

    def _parse(self, data) -> Snapshot:
        if not isinstance(data, dict):
            raise CacheCorrupt(f"cache file {self.path} is not a JSON object")
        snapshot: Snapshot = {}
        for origin, entries in data.items():
            if not isinstance(entries, list):
                raise CacheCorrupt(f"cache entry '{origin}' in {self.path} is not a list")
            try:
                snapshot[origin] = [Repository.from_dict(origin, entry) for entry in entries]
            except ValueError as e:
                raise CacheCorrupt(f"invalid repository under '{origin}' in {self.path}: {e}") from e
        return snapshot

    def update(self, repositories) -> None:
        """Replace the snapshot with *repositories*, grouped by origin.

        Raises:
            CachePersistFailure: If the directory or file cannot be written.
        """
        grouped = group_by_origin(repositories)
        payload = {
            origin: [repo.to_dict() for repo in repos]
            for origin, repos in grouped.items()
        }
        self._write_atomic(self.path, json.dumps(payload, indent=2))

    def clear(self) -> None:
        """Remove the snapshot. The freshness record is left alone."""
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass

    def needs_refresh(self, cooldown_enabled: bool, cooldown_window: timedelta) -> bool:
        """Return True when the freshness record is missing, unreadable or older than the window.

        ``cooldown_enabled`` does not change the answer; callers decide whether
        to honour it.
        """
        recorded = self.recorded_freshness()
        if recorded is None:
            return True
        return self._clock() - recorded >= cooldown_window

    def recorded_freshness(self) -> Optional[datetime]:
        """Return the stored freshness timestamp, or None if absent or unparsable."""
        try:
            with open(self.freshness_path, "r", encoding="utf-8") as f:
                text = f.read().strip()
        except OSError:
            return None
        try:
            recorded = datetime.fromisoformat(text)
        except ValueError:
            return None
        if recorded.tzinfo is None:
            recorded = recorded.replace(tzinfo=timezone.utc)
        return recorded

    def record_freshness(self, now: Optional[datetime] = None) -> None:
        """Overwrite the freshness record with *now* (defaults to the clock).

        Raises:
            CachePersistFailure: On any I/O error.
        """
        now = now or self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        self._write_atomic(self.freshness_path, now.isoformat(timespec="seconds") + "\n")

    def _write_atomic(self, target: str, text: str) -> None:
        try:
            os.makedirs(self._location, exist_ok=True)
        except OSError as e:
            raise CachePersistFailure(f"failed to create cache location {self._location}: {e}") from e

        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._location,
                prefix=f".{os.path.basename(target)}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = f.name
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, target)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise CachePersistFailure(f"failed to write {target}: {e}") from e
