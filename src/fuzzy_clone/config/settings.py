"""Resolve fuzzy-clone settings from CLI flags, environment and the TOML config file.

Precedence, highest first: CLI flag, environment variable, config file,
built-in default. Resolution happens once at startup and yields an
immutable Config that is passed to every component.
"""

import os
import tomllib
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, Optional

from fuzzy_clone.clone.destination import default_root
from fuzzy_clone.clone.git_cloner import DEFAULT_CLONE_TIMEOUT
from fuzzy_clone.errors import ConfigInvalid

DEFAULT_COOLDOWN_WINDOW = timedelta(hours=1)

ENV_CONFIG = "FUZZY_CLONE_CONFIG"
ENV_USE_CWD = "USE_CWD"
ENV_FLATTEN_DESTINATION = "FUZZY_CLONE_FLATTEN_DESTINATION"
ENV_ROOT = "FUZZY_CLONE_ROOT"
ENV_TOKENS = ("FUZZY_CLONE_GITHUB_TOKEN", "GITHUB_ACCESS_TOKEN")
ENV_CACHE_COOLDOWN = "FUZZY_CLONE_CACHE_COOLDOWN"
ENV_CLONE_TIMEOUT = "FUZZY_CLONE_CLONE_TIMEOUT"


@dataclass(frozen=True)
class Config:
    """Resolved settings. Never mutated after startup."""

    cwd: str
    root: str = ""
    use_cwd: bool = False
    flatten_destination: bool = False
    github_token: Optional[str] = None
    cache_cooldown: bool = False
    cooldown_window: timedelta = DEFAULT_COOLDOWN_WINDOW
    clone_timeout: Optional[float] = DEFAULT_CLONE_TIMEOUT
    config_path: str = ""


def default_config_path(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return ``$FUZZY_CLONE_CONFIG`` or ``~/.config/fz/config.toml``."""
    environ = os.environ if environ is None else environ
    explicit = environ.get(ENV_CONFIG)
    if explicit:
        return explicit
    return os.path.join(os.path.expanduser("~/.config"), "fz", "config.toml")


def load_config_file(path: str) -> dict:
    """Parse the TOML config file, returning {} when it does not exist.

    Raises:
        ConfigInvalid: If the file exists but is not valid TOML.
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as e:
        raise ConfigInvalid(f"failed to parse config file {path}: {e}") from e
    except OSError as e:
        raise ConfigInvalid(f"failed to read config file {path}: {e}") from e


def _truthy(value: Any) -> bool:
    """Only a literal true (bool or the string "true") switches a setting on."""
    if isinstance(value, bool):
        return value
    return isinstance(value, str) and value.strip().lower() == "true"


def _first(*candidates):
    for candidate in candidates:
        if candidate is not None and candidate != "":
            return candidate
    return None


def _section(file_values: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = file_values.get(name, {})
    if not isinstance(section, dict):
        raise ConfigInvalid(f"[{name}] in the config file must be a table")
    return section


def _timeout(value) -> Optional[float]:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigInvalid(f"clone timeout must be a number of seconds, got {value!r}") from e
    return timeout if timeout > 0 else None


def resolve_config(
    *,
    use_cwd: Optional[bool] = None,
    flatten_destination: Optional[bool] = None,
    root: Optional[str] = None,
    github_token: Optional[str] = None,
    cache_cooldown: Optional[str] = None,
    clone_timeout: Optional[float] = None,
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
) -> Config:
    """Merge CLI values, environment and config file into a Config.

    CLI values are None when the flag was not given.

    Raises:
        ConfigInvalid: If the config file or a value in it is malformed.
    """
    environ = os.environ if environ is None else environ
    config_path = config_path or default_config_path(environ)
    file_values = load_config_file(config_path)
    github_section = _section(file_values, "github")
    cache_section = _section(file_values, "cache")
    clone_section = _section(file_values, "clone")

    resolved_use_cwd = _first(use_cwd, environ.get(ENV_USE_CWD), file_values.get("use_cwd"))
    resolved_flatten = _first(
        flatten_destination,
        environ.get(ENV_FLATTEN_DESTINATION),
        file_values.get("flatten_destination"),
    )
    resolved_root = _first(root, environ.get(ENV_ROOT), file_values.get("root"))
    resolved_token = _first(
        github_token,
        *(environ.get(name) for name in ENV_TOKENS),
        github_section.get("token"),
    )
    resolved_cooldown = _first(
        cache_cooldown, environ.get(ENV_CACHE_COOLDOWN), cache_section.get("cooldown")
    )
    resolved_timeout = _first(
        clone_timeout, environ.get(ENV_CLONE_TIMEOUT), clone_section.get("timeout")
    )

    window_seconds = cache_section.get("cooldown_window")
    if window_seconds is None:
        cooldown_window = DEFAULT_COOLDOWN_WINDOW
    elif isinstance(window_seconds, (int, float)) and not isinstance(window_seconds, bool):
        cooldown_window = timedelta(seconds=window_seconds)
    else:
        raise ConfigInvalid("[cache] cooldown_window must be a number of seconds")

    if resolved_root is not None and not isinstance(resolved_root, str):
        raise ConfigInvalid("root must be a string path")

    return Config(
        cwd=cwd or os.getcwd(),
        root=os.path.expanduser(resolved_root) if resolved_root else default_root(),
        use_cwd=_truthy(resolved_use_cwd),
        flatten_destination=_truthy(resolved_flatten),
        github_token=resolved_token,
        cache_cooldown=_truthy(resolved_cooldown),
        cooldown_window=cooldown_window,
        clone_timeout=DEFAULT_CLONE_TIMEOUT if resolved_timeout is None else _timeout(resolved_timeout),
        config_path=config_path,
    )


@dataclass(frozen=True)
class ConfigOptions:
    """Flag values captured by the top-level command, resolved on demand.

    Subcommands that can run with a broken config file (doctor, config init)
    read config_path without resolving.
    """

    use_cwd: Optional[bool] = None
    flatten_destination: Optional[bool] = None
    root: Optional[str] = None
    github_token: Optional[str] = None
    cache_cooldown: Optional[str] = None
    clone_timeout: Optional[float] = None
    config_file: Optional[str] = None

    @property
    def config_path(self) -> str:
        return self.config_file or default_config_path()

    def resolve(self, environ: Optional[Mapping[str, str]] = None, cwd: Optional[str] = None) -> Config:
        return resolve_config(
            use_cwd=self.use_cwd,
            flatten_destination=self.flatten_destination,
            root=self.root,
            github_token=self.github_token,
            cache_cooldown=self.cache_cooldown,
            clone_timeout=self.clone_timeout,
            config_path=self.config_file,
            environ=environ,
            cwd=cwd,
        )
