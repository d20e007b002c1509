"""CLI tests for the default fz command and `fz cache`."""

import json

import pytest
from click.testing import CliRunner

from fake_git_cloner import FakeGitCloner
from fake_provider import FakeProvider
from fake_selector import FakeSelector
from fuzzy_clone.clone.orchestrator import CloneOrchestrator
from fuzzy_clone.cli import main
from fuzzy_clone.errors import ProviderUnavailable
from fuzzy_clone.repository import Repository

REPOS = [Repository("github.com", "me/one", https_url="https://github.com/me/one.git")]
CACHE_CONTENTS = {"github.com": [
    {"fullName": "kjuulh/fuzzy-clone", "sshUrl": None,
     "httpsUrl": "https://github.com/kjuulh/fuzzy-clone.git"},
]}


def run(*args):
    return CliRunner().invoke(main, list(args))


def _write_cache(tmp_path, contents):
    cache_dir = tmp_path / "xdg-cache" / "fuzzy-clone" / "cache"
    cache_dir.mkdir(parents=True)
    (cache_dir / "cache.json").write_text(contents)
    return cache_dir


@pytest.fixture
def collaborators(monkeypatch):
    """Replace the provider, picker and git with fakes."""
    fakes = {
        "provider": FakeProvider(),
        "selector": FakeSelector(),
        "cloner": FakeGitCloner(),
    }
    monkeypatch.setattr("fuzzy_clone.cli.provider_for", lambda config: fakes["provider"])
    monkeypatch.setattr("fuzzy_clone.cache.cli.provider_for", lambda config: fakes["provider"])
    monkeypatch.setattr("fuzzy_clone.cli.default_selector", lambda: fakes["selector"])
    monkeypatch.setattr(
        "fuzzy_clone.cli.CloneOrchestrator", lambda cloner: CloneOrchestrator(fakes["cloner"])
    )
    return fakes


@pytest.mark.unit
class TestSelectCommand:

    def test_prints_destination_and_exits_0(self, isolated_env, tmp_path, collaborators):
        _write_cache(tmp_path, json.dumps(CACHE_CONTENTS))

        result = run("--root", str(tmp_path / "git"))

        assert result.exit_code == 0
        expected = tmp_path / "git" / "github.com" / "kjuulh" / "fuzzy-clone"
        assert str(expected) in result.output
        assert (expected / "README.md").exists()

    def test_flatten_flag(self, isolated_env, tmp_path, collaborators):
        _write_cache(tmp_path, json.dumps(CACHE_CONTENTS))

        result = run("--root", str(tmp_path / "git"), "--flatten-destination")

        assert str(tmp_path / "git" / "fuzzy-clone") in result.output

    def test_root_from_environment(self, isolated_env, tmp_path, collaborators, monkeypatch):
        _write_cache(tmp_path, json.dumps(CACHE_CONTENTS))
        monkeypatch.setenv("FUZZY_CLONE_ROOT", str(tmp_path / "env-root"))

        result = run()

        assert str(tmp_path / "env-root" / "github.com" / "kjuulh" / "fuzzy-clone") in result.output

    def test_cancel_exits_1_without_error_message(self, isolated_env, tmp_path, collaborators):
        _write_cache(tmp_path, json.dumps(CACHE_CONTENTS))
        collaborators["selector"] = FakeSelector(cancel=True)

        result = run("--root", str(tmp_path / "git"))

        assert result.exit_code == 1
        assert "Error" not in result.output

    def test_corrupt_cache_exits_1_with_message(self, isolated_env, tmp_path, collaborators):
        _write_cache(tmp_path, "{truncated")

        result = run("--root", str(tmp_path / "git"))

        assert result.exit_code == 1
        assert "Error: failed to parse cache file" in result.output
        assert collaborators["provider"].calls == 0

    def test_clone_failure_exits_1(self, isolated_env, tmp_path, collaborators):
        _write_cache(tmp_path, json.dumps(CACHE_CONTENTS))
        collaborators["cloner"] = FakeGitCloner(
            failing_urls=["https://github.com/kjuulh/fuzzy-clone.git"]
        )

        result = run("--root", str(tmp_path / "git"))

        assert result.exit_code == 1
        assert "Error: failed to clone kjuulh/fuzzy-clone" in result.output

    def test_invalid_config_file_exits_1(self, isolated_env, tmp_path, collaborators):
        bad = tmp_path / "bad.toml"
        bad.write_text("root = = 1")

        result = run("--config", str(bad))

        assert result.exit_code == 1
        assert "Error: failed to parse config file" in result.output


@pytest.mark.unit
class TestCacheCommands:

    def test_update_writes_cache(self, isolated_env, tmp_path, collaborators):
        collaborators["provider"] = FakeProvider(list(REPOS))

        result = run("cache", "update")

        assert result.exit_code == 0
        cache_file = tmp_path / "xdg-cache" / "fuzzy-clone" / "cache" / "cache.json"
        assert json.loads(cache_file.read_text())["github.com"][0]["fullName"] == "me/one"
        assert (cache_file.parent / "cache.timestamp").exists()

    def test_update_skipped_while_cooldown_fresh(self, isolated_env, tmp_path, collaborators):
        collaborators["provider"] = FakeProvider(list(REPOS))
        run("cache", "update")

        result = run("--cache-cooldown", "true", "cache", "update")

        assert result.exit_code == 0
        assert "still fresh" in result.output
        assert collaborators["provider"].calls == 1

    def test_force_ignores_cooldown(self, isolated_env, tmp_path, collaborators):
        collaborators["provider"] = FakeProvider(list(REPOS))
        run("cache", "update")

        run("--cache-cooldown", "true", "cache", "update", "--force")

        assert collaborators["provider"].calls == 2

    def test_update_failure_exits_1(self, isolated_env, collaborators):
        collaborators["provider"] = FakeProvider(error=ProviderUnavailable("HTTP 502"))

        result = run("cache", "update")

        assert result.exit_code == 1
        assert "Error: failed to update cache: HTTP 502" in result.output

    def test_clear_removes_cache(self, isolated_env, tmp_path, collaborators):
        cache_dir = _write_cache(tmp_path, json.dumps(CACHE_CONTENTS))

        result = run("cache", "clear")

        assert result.exit_code == 0
        assert not (cache_dir / "cache.json").exists()

    def test_clear_without_cache_succeeds(self, isolated_env):
        assert run("cache", "clear").exit_code == 0

