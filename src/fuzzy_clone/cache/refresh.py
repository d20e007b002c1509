"""Cache refresh policy for `fz cache update`."""


def should_refresh(config, cache, force=False) -> bool:
    """Decide whether the provider should be asked for a new snapshot.

    Without a cooldown every update refreshes. With one, a present snapshot
    is kept until the freshness window has passed.
    """
    if force or not config.cache_cooldown:
        return True
    _, present = cache.get()
    if not present:
        return True
    return cache.needs_refresh(config.cache_cooldown, config.cooldown_window)


def refresh_cache(config, cache, provider, force=False) -> bool:
    """Fetch from *provider* into *cache* when the policy allows it.

    Returns:
        True if the cache was rewritten, False if it was still fresh.

    Raises:
        CacheCorrupt, CachePersistFailure: From the cache.
        AuthenticationMissing, ProviderUnavailable: From the provider.
    """
    if not should_refresh(config, cache, force=force):
        return False
    repositories = provider.fetch_all()
    cache.update(repositories)
    cache.record_freshness()
    return True
