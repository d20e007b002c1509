"""Pickers: turn a list of labels into the index the user chose."""

import shutil
import subprocess

from fuzzy_clone.errors import SelectionCancelled, SelectionFailed
from fuzzy_clone.select.menu import MenuConfig, get_user_choice

# fzf exits 1 when nothing matched and 130 when aborted with Esc/Ctrl+C
FZF_CANCEL_CODES = (1, 130)


class FzfSelector:
    """Interactive fuzzy picker backed by the fzf binary."""

    def __init__(self, executable="fzf"):
        self.executable = executable

    def _run_fzf(self, args, lines):
        return subprocess.run(
            args,
            input="\n".join(lines) + "\n",
            stdout=subprocess.PIPE,
            text=True,
        )

    def pick(self, labels) -> int:
        """Return the 0-based index of the chosen label.

        Raises:
            SelectionCancelled: If the user aborted or nothing matched.
            SelectionFailed: If fzf could not run.
        """
        lines = [f"{i}\t{label}" for i, label in enumerate(labels)]
        args = [
            self.executable,
            "--delimiter=\t",
            "--with-nth=2..",
            "--height=40%",
            "--reverse",
            "--no-multi",
        ]
        try:
            result = self._run_fzf(args, lines)
        except OSError as e:
            raise SelectionFailed(f"failed to start fzf: {e}") from e

        if result.returncode in FZF_CANCEL_CODES:
            raise SelectionCancelled("selection cancelled")
        if result.returncode != 0:
            raise SelectionFailed(f"fzf exited with status {result.returncode}")

        chosen = result.stdout.strip()
        try:
            return int(chosen.split("\t", 1)[0])
        except ValueError as e:
            raise SelectionFailed(f"could not parse fzf output: {chosen!r}") from e


class MenuSelector:
    """Numbered menu picker on stderr, for terminals without fzf."""

    def __init__(self, config=None):
        self.config = config or MenuConfig()

    def pick(self, labels) -> int:
        choice = get_user_choice("Select a repository:", list(labels), config=self.config)
        return choice - 1


def default_selector():
    """Return an FzfSelector when fzf is on PATH, else a MenuSelector."""
    if shutil.which("fzf"):
        return FzfSelector()
    return MenuSelector()
