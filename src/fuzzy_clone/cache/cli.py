"""Click commands for managing the repository cache."""

import sys

import click

from fuzzy_clone.cache.refresh import refresh_cache
from fuzzy_clone.cache.store import CacheStore
from fuzzy_clone.errors import FuzzyCloneError
from fuzzy_clone.selection import provider_for


@click.group("cache")
def cache_group():
    """Manage the local repository cache."""


@cache_group.command("update")
@click.option("--force", is_flag=True, help="Refresh even if the cooldown has not passed.")
@click.pass_obj
def update_cmd(obj, force):
    """Fetch repositories from the provider and store them."""
    try:
        config = obj.resolve()
        cache = CacheStore()
        updated = refresh_cache(config, cache, provider_for(config), force=force)
    except FuzzyCloneError as e:
        click.echo(f"Error: failed to update cache: {e}", err=True)
        sys.exit(1)

    if updated:
        click.echo(f"Updated {cache.path}", err=True)
    else:
        click.echo("Cache is still fresh, skipping update (use --force to refresh).", err=True)


@cache_group.command("clear")
def clear_cmd():
    """Remove the cached repository list."""
    try:
        CacheStore().clear()
    except OSError as e:
        click.echo(f"Error: failed to clear cache: {e}", err=True)
        sys.exit(1)
