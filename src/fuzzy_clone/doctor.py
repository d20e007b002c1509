"""`fz doctor`: report on config, cache and the external tools fz relies on."""

import os
import shutil

import click

from fuzzy_clone.cache.store import CacheStore
from fuzzy_clone.errors import FuzzyCloneError


def git_version():
    """Return the installed git version as a dotted string, or None if git is missing."""
    # GitPython fails at import time when no git executable is found
    try:
        import git
    except ImportError:
        return None
    try:
        return ".".join(str(part) for part in git.Git().version_info)
    except git.exc.GitCommandNotFound:
        return None


def collect_report(options, cache=None, which=shutil.which, version_fn=git_version):
    """Return (label, value) rows describing the environment."""
    cache = cache or CacheStore()
    config_path = options.config_path
    rows = [
        ("config file", config_path),
        ("config exists", "yes" if os.path.isfile(config_path) else "no"),
    ]

    try:
        options.resolve()
        rows.append(("config valid", "yes"))
    except FuzzyCloneError as e:
        rows.append(("config valid", f"no ({e})"))

    try:
        repositories, present = cache.repositories()
        rows.append(("cache", f"{len(repositories)} repositories" if present else "empty"))
    except FuzzyCloneError as e:
        rows.append(("cache", f"corrupt ({e})"))

    recorded = cache.recorded_freshness()
    rows.append(("cache updated", recorded.isoformat() if recorded else "never"))

    rows.append(("git", version_fn() or "not found"))
    rows.append(("gh", which("gh") or "not found"))
    rows.append(("fzf", which("fzf") or "not found (falling back to a numbered menu)"))
    return rows


@click.command("doctor")
@click.pass_obj
def doctor_cmd(obj):
    """Show where fz reads its config and which tools it found."""
    rows = collect_report(obj)
    width = max(len(label) for label, _ in rows)
    for label, value in rows:
        click.echo(f"{label:<{width}}  {value}")
