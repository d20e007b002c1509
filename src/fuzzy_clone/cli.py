"""Top-level Click group for the fz CLI."""

import sys

import click

from fuzzy_clone.cache.cli import cache_group
from fuzzy_clone.cache.store import CacheStore
from fuzzy_clone.clone.git_cloner import GitCloner
from fuzzy_clone.clone.orchestrator import CloneOrchestrator
from fuzzy_clone.config.cli import config_group
from fuzzy_clone.config.settings import ConfigOptions
from fuzzy_clone.doctor import doctor_cmd
from fuzzy_clone.errors import FuzzyCloneError, SelectionCancelled
from fuzzy_clone.select.selector import default_selector
from fuzzy_clone.selection import provider_for, run_selection


def select_and_clone(options):
    """Run the default flow and print the destination on stdout."""
    try:
        config = options.resolve()
        dest = run_selection(
            config,
            cache=CacheStore(),
            provider=provider_for(config),
            selector=default_selector(),
            orchestrator=CloneOrchestrator(GitCloner(timeout=config.clone_timeout)),
        )
    except SelectionCancelled:
        sys.exit(1)
    except FuzzyCloneError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(dest)


@click.group(invoke_without_command=True)
@click.option("-c", "--use-cwd/--no-use-cwd", "use_cwd", default=None,
              help="Clone the choice into the current working directory.")
@click.option("--flatten-destination/--no-flatten-destination", default=None,
              help="Clone into <root>/<name> instead of <root>/<origin>/<owner>/<name>.")
@click.option("--root", metavar="DIR", default=None, help="Directory to clone repositories under.")
@click.option("--github-token", metavar="TOKEN", default=None, help="GitHub access token.")
@click.option("--cache-cooldown", metavar="BOOL", default=None,
              help='"true" to only refresh the cache once the cooldown window has passed.')
@click.option("--clone-timeout", type=float, metavar="SECONDS", default=None,
              help="Seconds to wait for git clone (0 waits forever).")
@click.option("--config", "config_file", metavar="PATH", default=None,
              help="Config file to read instead of ~/.config/fz/config.toml.")
@click.pass_context
def main(ctx, use_cwd, flatten_destination, root, github_token, cache_cooldown, clone_timeout,
         config_file):
    """fz - fuzzy find a repository, clone it, and print where it lives."""
    ctx.obj = ConfigOptions(
        use_cwd=use_cwd,
        flatten_destination=flatten_destination,
        root=root,
        github_token=github_token,
        cache_cooldown=cache_cooldown,
        clone_timeout=clone_timeout,
        config_file=config_file,
    )
    if ctx.invoked_subcommand is None:
        select_and_clone(ctx.obj)


main.add_command(cache_group)
main.add_command(config_group)
main.add_command(doctor_cmd)
