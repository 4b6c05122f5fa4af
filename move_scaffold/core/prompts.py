"""Prompt capability used by the scaffolder.

The scaffolder never reads the terminal itself; it asks a Prompter. The
interactive implementation lives in the CLI layer.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from move_scaffold.core.scaffolder import ScaffoldPlan


class Prompter(Protocol):
    def ask_text(self, question: str, default: str) -> str:
        """Ask for free text; blank input returns default."""
        ...

    def ask_yes_no(self, question: str, default: bool) -> bool:
        ...

    def ask_choice(self, question: str, options: Sequence[str], default: int) -> int:
        """Return the index of the chosen option."""
        ...

    def confirm_plan(self, plan: ScaffoldPlan) -> bool:
        """Show what will be created and ask to proceed."""
        ...


class DefaultsPrompter:
    """Non-interactive prompter: every question gets its stated default.

    Args:
        confirm: Answer to the final confirmation (True for --assume-yes,
            False for --assume-no).
    """

    def __init__(self, confirm: bool = True) -> None:
        self.confirm = confirm

    def ask_text(self, question: str, default: str) -> str:
        return default

    def ask_yes_no(self, question: str, default: bool) -> bool:
        return default

    def ask_choice(self, question: str, options: Sequence[str], default: int) -> int:
        return default

    def confirm_plan(self, plan: ScaffoldPlan) -> bool:
        return self.confirm
