"""Interactive prompts and candidate disambiguation.

Every prompt can be cancelled; cancellation is reported as ``None`` and
callers treat it as "skip", never as an error.
"""
from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .models import Candidate

log = logging.getLogger(__name__)

# Options shown per selection menu
MAX_OPTIONS = 20


class Prompter(Protocol):
    """Human input capabilities needed by the walker."""

    def select(self, label: str, options: Sequence[str]) -> int | None:
        """Return the index of the chosen option, None when cancelled."""
        ...

    def text(self, label: str, initial: str = "") -> str | None:
        """Return free text, None when cancelled."""
        ...

    def confirm(self, label: str, default: bool = False) -> bool | None:
        """Return a yes/no answer, None when cancelled."""
        ...


class ConsolePrompter:
    """Prompter reading from stdin."""

    def select(self, label: str, options: Sequence[str]) -> int | None:
        print(f"\n{label}")
        print("-" * 50)

        shown = list(options)[:MAX_OPTIONS]
        for i, option in enumerate(shown, 1):
            print(f"  {i}. {option}")
        print("  0. Skip")
        print()

        while True:
            try:
                choice = input("Select [1]: ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                return None
            if not choice:
                return 0
            try:
                number = int(choice)
            except ValueError:
                number = -1
            if number == 0:
                return None
            if 1 <= number <= len(shown):
                return number - 1
            print("Invalid choice. Try again.")

    def text(self, label: str, initial: str = "") -> str | None:
        hint = f" [{initial}]" if initial else ""
        try:
            answer = input(f"{label}{hint}: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return None
        return answer or initial

    def confirm(self, label: str, default: bool = False) -> bool | None:
        hint = "Y/n" if default else "y/N"
        while True:
            try:
                response = input(f"{label} ({hint}): ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print()
                return None
            if not response:
                return default
            if response in ('y', 'yes'):
                return True
            if response in ('n', 'no'):
                return False
            print("Please enter 'y' or 'n'.")


def choose(
    candidates: Sequence[Candidate],
    context_label: str,
    prompter: Prompter,
) -> Candidate | None:
    """
    Let the user pick the candidate matching *context_label*.

    Args:
        candidates: Search results, shown in the order the service returned them
        context_label: File or folder the user is identifying
        prompter: Source of human input

    Returns:
        The selected Candidate, or None when the user skipped
    """
    if not candidates:
        return None
    index = prompter.select(
        f"Select movie or show that matches '{context_label}':",
        [c.label() for c in candidates],
    )
    if index is None:
        log.info("Selection for %s cancelled", context_label)
        return None
    choice = candidates[index]
    log.debug("Selected: %s", choice)
    return choice
