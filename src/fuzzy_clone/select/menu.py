"""Numbered-option menu used when fzf is not installed."""

import sys
from dataclasses import dataclass, field
from typing import Callable, TextIO

from fuzzy_clone.errors import SelectionCancelled

CANCEL_INPUTS = ("q", "quit")


@dataclass
class MenuConfig:
    """I/O configuration for menu display and input."""

    input_fn: Callable[[str], str] = field(default_factory=lambda: input)
    output: TextIO = field(default_factory=lambda: sys.stderr)


def _display_options(prompt, options, output):
    print("", file=output)
    print(prompt, file=output)
    width = len(str(len(options)))
    for i, option in enumerate(options):
        print(f"  {i + 1:>{width}}) {option}", file=output)
    print("", file=output)


def _build_prompt_text(option_count):
    return f"Enter your choice (1-{option_count}, q to cancel): "


def _read_choice(prompt_text, config):
    try:
        return config.input_fn(prompt_text)
    except EOFError:
        print("", file=config.output)
        raise SelectionCancelled("input closed")


def _parse_choice(raw_input, option_count):
    raw_input = raw_input.strip()
    if raw_input.isdigit() and 1 <= int(raw_input) <= option_count:
        return int(raw_input)
    return None


def get_user_choice(prompt, options, *, config=None):
    """Display numbered options and return the user's selection.

    Args:
        prompt: Header text displayed above the options.
        options: List of option label strings.
        config: MenuConfig with input_fn and output stream (defaults apply).

    Returns:
        1-based index of the selected option.

    Raises:
        SelectionCancelled: On EOF or when the user enters q.
    """
    if config is None:
        config = MenuConfig()

    _display_options(prompt, options, config.output)
    prompt_text = _build_prompt_text(len(options))

    while True:
        choice = _read_choice(prompt_text, config)
        if choice.strip().lower() in CANCEL_INPUTS:
            raise SelectionCancelled("selection cancelled")
        parsed = _parse_choice(choice, len(options))
        if parsed is not None:
            return parsed
        print(
            f"Invalid choice. Please enter a number between 1 and {len(options)}.",
            file=config.output,
        )
