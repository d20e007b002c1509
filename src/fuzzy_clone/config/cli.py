"""Click commands for inspecting and bootstrapping the config file."""

import os
import sys

import click

from fuzzy_clone.clone.destination import default_root
from fuzzy_clone.clone.git_cloner import DEFAULT_CLONE_TIMEOUT
from fuzzy_clone.config.settings import DEFAULT_COOLDOWN_WINDOW
from fuzzy_clone.templates.template_renderer import render_template


def render_example_config(config_path, root=None):
    """Render the commented example config for *config_path*."""
    return render_template(
        "config.toml.j2",
        package=__package__,
        config_path=config_path,
        root=root or default_root(),
        cooldown_window=int(DEFAULT_COOLDOWN_WINDOW.total_seconds()),
        clone_timeout=int(DEFAULT_CLONE_TIMEOUT),
    )


@click.group("config")
def config_group():
    """Inspect or create the fz config file."""


@config_group.command("path")
@click.pass_obj
def path_cmd(obj):
    """Print the config file path."""
    click.echo(obj.config_path)


@config_group.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_obj
def init_cmd(obj, force):
    """Write a commented example config file."""
    path = obj.config_path
    if os.path.exists(path) and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(render_example_config(path))
    except OSError as e:
        click.echo(f"Error: failed to write {path}: {e}", err=True)
        sys.exit(1)

    click.echo(f"Wrote {path}", err=True)
