"""Tests for FzfSelector, MenuSelector and default_selector()."""

import io

import pytest

from fuzzy_clone.errors import SelectionCancelled, SelectionFailed
from fuzzy_clone.select.menu import MenuConfig
from fuzzy_clone.select.selector import FzfSelector, MenuSelector, default_selector


def _fzf_result(stdout="", returncode=0):
    class Result:
        pass
    r = Result()
    r.stdout = stdout
    r.returncode = returncode
    return r


def _fzf(monkeypatch, stdout="", returncode=0):
    selector = FzfSelector()
    calls = []

    def run(args, lines):
        calls.append((args, lines))
        return _fzf_result(stdout, returncode)

    monkeypatch.setattr(selector, "_run_fzf", run)
    return selector, calls


@pytest.mark.unit
class TestFzfSelector:

    def test_returns_index_from_chosen_line(self, monkeypatch):
        selector, _ = _fzf(monkeypatch, stdout="2\tc/three\n")

        assert selector.pick(["a/one", "b/two", "c/three"]) == 2

    def test_feeds_indexed_labels(self, monkeypatch):
        selector, calls = _fzf(monkeypatch, stdout="0\ta/one\n")

        selector.pick(["a/one", "b/two"])

        args, lines = calls[0]
        assert lines == ["0\ta/one", "1\tb/two"]
        assert "--with-nth=2.." in args

    @pytest.mark.parametrize("returncode", [1, 130])
    def test_abort_raises_selection_cancelled(self, monkeypatch, returncode):
        selector, _ = _fzf(monkeypatch, returncode=returncode)

        with pytest.raises(SelectionCancelled):
            selector.pick(["a/one"])

    def test_other_failure_raises_selection_failed(self, monkeypatch):
        selector, _ = _fzf(monkeypatch, returncode=2)

        with pytest.raises(SelectionFailed):
            selector.pick(["a/one"])

    def test_unparsable_output_raises_selection_failed(self, monkeypatch):
        selector, _ = _fzf(monkeypatch, stdout="a/one\n")

        with pytest.raises(SelectionFailed):
            selector.pick(["a/one"])

    def test_missing_binary_raises_selection_failed(self):
        selector = FzfSelector(executable="/nonexistent/fzf")

        with pytest.raises(SelectionFailed):
            selector.pick(["a/one"])


@pytest.mark.unit
class TestMenuSelector:

    def test_returns_zero_based_index(self):
        selector = MenuSelector(MenuConfig(input_fn=lambda _: "2", output=io.StringIO()))

        assert selector.pick(["a/one", "b/two"]) == 1


@pytest.mark.unit
class TestDefaultSelector:

    def test_prefers_fzf_when_installed(self, monkeypatch):
        monkeypatch.setattr("fuzzy_clone.select.selector.shutil.which", lambda name: "/usr/bin/fzf")

        assert isinstance(default_selector(), FzfSelector)

    def test_falls_back_to_menu(self, monkeypatch):
        monkeypatch.setattr("fuzzy_clone.select.selector.shutil.which", lambda name: None)

        assert isinstance(default_selector(), MenuSelector)
