"""Map a repository to the local directory it should be cloned into."""

import os

from fuzzy_clone.errors import InvalidRepository

DEFAULT_ROOT = "~/git"


def default_root() -> str:
    return os.path.expanduser(DEFAULT_ROOT)


def resolve_destination(repository, config) -> str:
    """Return the absolute destination path for *repository*.

    The first matching mode wins:
        use_cwd             -> <cwd>/<name>
        flatten_destination -> <root>/<name>
        otherwise           -> <root>/<origin>/<owner>/<name>

    Never touches the filesystem.

    Raises:
        InvalidRepository: If the repository has an empty full name.
    """
    if not repository.full_name:
        raise InvalidRepository("repository has an empty full name")

    if config.use_cwd:
        return os.path.join(config.cwd, repository.basename)

    root = config.root or default_root()
    if config.flatten_destination:
        return os.path.join(root, repository.basename)

    return os.path.join(root, repository.origin, *repository.full_name.split("/"))
