"""The default fz flow: list, pick, resolve, clone."""

from fuzzy_clone.clone.destination import resolve_destination
from fuzzy_clone.errors import FuzzyCloneError
from fuzzy_clone.providers.github import GitHubProvider
from fuzzy_clone.repository import display_labels


def provider_for(config):
    """Return the repository provider for *config*."""
    return GitHubProvider(token=config.github_token)


def load_repositories(cache, provider):
    """Return cached repositories, asking the provider when the cache is empty.

    A cache miss does not write the cache; that is `fz cache update`'s job.

    Raises:
        CacheCorrupt: If the cache file is unreadable.
        AuthenticationMissing, ProviderUnavailable: From the provider.
    """
    repositories, present = cache.repositories()
    if present:
        return repositories
    return provider.fetch_all()


def run_selection(config, *, cache, provider, selector, orchestrator) -> str:
    """Let the user pick a repository and make sure it is cloned.

    Returns:
        The destination directory of the chosen repository.

    Raises:
        SelectionCancelled: If the user backed out of the picker.
        FuzzyCloneError: For any other failure along the way.
    """
    repositories = load_repositories(cache, provider)
    if not repositories:
        raise FuzzyCloneError("no repositories found")

    index = selector.pick(display_labels(repositories))
    repository = repositories[index]

    dest = resolve_destination(repository, config)
    return orchestrator.ensure_cloned(repository, dest)
