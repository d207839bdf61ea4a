"""
Console port — how the wizard talks to the person running it.

Core stages report progress and ask questions through this interface
only, so they carry no click or terminal dependency. The CLI provides
``ClickConsole``; tests provide a scripted double.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Console(ABC):
    """Status lines and typed prompts."""

    # ── Status lines ────────────────────────────────────────────

    @abstractmethod
    def step(self, message: str) -> None:
        """Announce a pipeline stage."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Report progress or success."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Report a recoverable problem."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Report a fatal problem."""

    @abstractmethod
    def echo(self, message: str = "") -> None:
        """Plain output (menus, readings, follow-up hints)."""

    # ── Prompts ─────────────────────────────────────────────────

    @abstractmethod
    def prompt(
        self,
        text: str,
        default: str | None = None,
        hide_input: bool = False,
    ) -> str:
        """Ask for free text.

        With ``default=None`` the answer is required and empty input
        asks again. Otherwise empty input returns ``default``.
        """

    @abstractmethod
    def prompt_float(self, text: str, default: float) -> float:
        """Ask for a float, ``default`` on empty input."""

    @abstractmethod
    def prompt_int(
        self,
        text: str,
        default: int,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> int:
        """Ask for an int, ``default`` on empty input.

        Answers outside ``[min_value, max_value]`` ask again.
        """

    @abstractmethod
    def confirm(self, text: str, default: bool) -> bool:
        """Ask a yes/no question."""
