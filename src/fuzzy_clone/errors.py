"""Exception types raised by the fuzzy-clone core.

Commands catch FuzzyCloneError once, print the message to stderr and
exit non-zero. SelectionCancelled is the exception to that rule: it is
a normal way out of the picker and is not reported as an error.
"""


class FuzzyCloneError(RuntimeError):
    """Base class for all fuzzy-clone failures."""


class ConfigInvalid(FuzzyCloneError):
    """Raised when the TOML config file cannot be parsed."""


class CacheCorrupt(FuzzyCloneError):
    """Raised when the cache file exists but is not a valid snapshot."""


class CachePersistFailure(FuzzyCloneError):
    """Raised when the cache or freshness record cannot be written."""


class AuthenticationMissing(FuzzyCloneError):
    """Raised when no credential for the provider can be resolved."""


class ProviderUnavailable(FuzzyCloneError):
    """Raised when the provider cannot be reached or returns garbage."""


class InvalidRepository(FuzzyCloneError):
    """Raised when a repository cannot be mapped to a destination."""


class DestinationUnwritable(FuzzyCloneError):
    """Raised when the destination directory cannot be created."""


class DestinationUnreadable(FuzzyCloneError):
    """Raised when the destination directory cannot be listed."""


class CloneFailed(FuzzyCloneError):
    """Raised when every available transport failed to clone."""


class SelectionCancelled(FuzzyCloneError):
    """Raised when the user backs out of the picker."""


class SelectionFailed(FuzzyCloneError):
    """Raised when the picker itself breaks."""
